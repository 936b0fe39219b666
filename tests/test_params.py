"""Tests for request params models.

Tests cover:
- ListParams fields and their constraints
- Filter pass-through of unmodelled keys
- Single-item params rejecting unknown keys
- Wire dumps
"""

import pytest
from pydantic import ValidationError

from bxregistry.params import (
    AddParams,
    EmptyParams,
    IdParams,
    ListFilter,
    ListParams,
    StatusListParams,
    StatusUpdateParams,
    UpdateParams,
)


class TestListParams:
    """Tests for ListParams."""

    def test_empty(self):
        params = ListParams()
        assert params.to_wire() == {}

    def test_full(self):
        params = ListParams.model_validate(
            {
                "start": 10,
                "order": {"NAME": "ASC"},
                "filter": {">PROBABILITY": 50},
                "select": ["*", "UF_*"],
            }
        )
        assert params.start == 10
        assert params.order == {"NAME": "ASC"}
        assert params.filter.probability_gt == 50
        assert params.select == ["*", "UF_*"]

    def test_to_wire_uses_wire_keys(self):
        params = ListParams.model_validate(
            {"start": 50, "filter": {">PROBABILITY": 20}, "select": ["ID"]}
        )
        assert params.to_wire() == {
            "start": 50,
            "filter": {">PROBABILITY": 20.0},
            "select": ["ID"],
        }

    def test_only_ascending_order(self):
        with pytest.raises(ValidationError):
            ListParams.model_validate({"order": {"NAME": "DESC"}})

    def test_negative_start_rejected(self):
        with pytest.raises(ValidationError):
            ListParams(start=-1)

    def test_empty_order_field(self):
        with pytest.raises(ValidationError, match="Order fields must be non-empty"):
            ListParams.model_validate({"order": {"": "ASC"}})

    def test_mixed_case_order_field(self):
        params = ListParams.model_validate({"order": {"dateCreate": "ASC"}})
        assert params.to_wire() == {"order": {"dateCreate": "ASC"}}

    def test_empty_select_token(self):
        with pytest.raises(ValidationError):
            ListParams(select=["ID", ""])

    def test_unknown_key_rejected(self):
        with pytest.raises(ValidationError):
            ListParams.model_validate({"start": 0, "limit": 10})

    def test_probability_must_be_number(self):
        with pytest.raises(ValidationError):
            ListParams.model_validate({"filter": {">PROBABILITY": "high"}})

    def test_next_page(self):
        params = ListParams(select=["ID"])
        page = params.next_page(50)
        assert page.start == 50
        assert page.select == ["ID"]
        assert params.start is None


class TestListFilter:
    """Tests for the open filter bag."""

    def test_unmodelled_keys_pass_through(self):
        flt = ListFilter.model_validate({">PROBABILITY": 10, "=STAGE_ID": "WON", "%TITLE": "lic"})
        dumped = flt.model_dump(by_alias=True, exclude_none=True)
        assert dumped == {">PROBABILITY": 10.0, "=STAGE_ID": "WON", "%TITLE": "lic"}

    def test_plain_field_key(self):
        flt = ListFilter.model_validate({"ASSIGNED_BY_ID": [1, 2]})
        assert flt.model_extra == {"ASSIGNED_BY_ID": [1, 2]}

    def test_between_filter(self):
        params = ListParams.model_validate(
            {"filter": {"><OPPORTUNITY": [100, 500], "!><PROBABILITY": [0, 10]}}
        )
        assert params.to_wire()["filter"] == {
            "><OPPORTUNITY": [100, 500],
            "!><PROBABILITY": [0, 10],
        }

    def test_related_field_key(self):
        flt = ListFilter.model_validate({"CONTACT.NAME": "x"})
        assert flt.model_extra == {"CONTACT.NAME": "x"}

    def test_empty_key_rejected(self):
        with pytest.raises(ValidationError, match="Filter keys must be non-empty"):
            ListFilter.model_validate({"": 1})


class TestIdParams:
    """Tests for IdParams."""

    def test_id_string(self):
        assert IdParams(id="15").id == "15"

    def test_numeric_id_coerced(self):
        assert IdParams.model_validate({"id": 15}).id == "15"

    def test_id_required(self):
        with pytest.raises(ValidationError):
            IdParams.model_validate({})

    def test_list_params_rejected(self):
        """A list params document is not accepted as single-item params."""
        with pytest.raises(ValidationError):
            IdParams.model_validate({"id": "1", "select": ["*"]})


class TestAddUpdateParams:
    """Tests for AddParams and UpdateParams."""

    def test_add(self):
        params = AddParams.model_validate(
            {"fields": {"TITLE": "New deal", "UF_CRM_1": "x"}, "params": {"REGISTER_SONET_EVENT": "Y"}}
        )
        assert params.fields["TITLE"] == "New deal"
        assert params.params.register_sonet_event == "Y"
        assert params.to_wire() == {
            "fields": {"TITLE": "New deal", "UF_CRM_1": "x"},
            "params": {"REGISTER_SONET_EVENT": "Y"},
        }

    def test_add_requires_fields(self):
        with pytest.raises(ValidationError):
            AddParams.model_validate({})

    def test_lowercase_field_rejected(self):
        with pytest.raises(ValidationError, match="Invalid field name"):
            AddParams.model_validate({"fields": {"title": "x"}})

    def test_update(self):
        params = UpdateParams.model_validate({"id": 3, "fields": {"STAGE_ID": "WON"}})
        assert params.id == "3"
        assert params.to_wire() == {"id": "3", "fields": {"STAGE_ID": "WON"}}

    def test_update_requires_id(self):
        with pytest.raises(ValidationError):
            UpdateParams.model_validate({"fields": {"STAGE_ID": "WON"}})

    def test_invalid_event_flag(self):
        with pytest.raises(ValidationError):
            AddParams.model_validate({"fields": {"TITLE": "x"}, "params": {"REGISTER_SONET_EVENT": "yes"}})


class TestStatusParams:
    """Tests for crm.status.* params."""

    def test_status_list(self):
        params = StatusListParams.model_validate(
            {"order": {"SORT": "ASC"}, "filter": {"ENTITY_ID": "STATUS"}}
        )
        assert params.to_wire() == {"order": {"SORT": "ASC"}, "filter": {"ENTITY_ID": "STATUS"}}

    def test_status_list_rejects_pagination(self):
        with pytest.raises(ValidationError):
            StatusListParams.model_validate({"start": 10})

    def test_status_update_has_no_event_params(self):
        with pytest.raises(ValidationError):
            StatusUpdateParams.model_validate(
                {"id": "1", "fields": {"NAME": "x"}, "params": {"REGISTER_SONET_EVENT": "Y"}}
            )

    def test_empty_params(self):
        assert EmptyParams.model_validate({}).to_wire() == {}
        with pytest.raises(ValidationError):
            EmptyParams.model_validate({"id": "1"})
