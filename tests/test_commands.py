"""Tests for batch commands.

Tests cover:
- PHP-style query encoding
- Command params validated by the command's own method
- Commands limits and wire form
"""

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from bxregistry.commands import Command, Commands, build_query
from bxregistry.config import config
from bxregistry.methods import Method
from bxregistry.params import IdParams, ListParams


class TestBuildQuery:
    """Tests for build_query()."""

    def test_flat(self):
        assert build_query({"id": "1"}) == "id=1"

    def test_nested_mapping(self):
        assert build_query({"order": {"NAME": "ASC"}}) == "order%5BNAME%5D=ASC"

    def test_list_indexed(self):
        assert build_query({"select": ["*", "UF_*"]}) == "select%5B0%5D=%2A&select%5B1%5D=UF_%2A"

    def test_comparator_key(self):
        assert build_query({"filter": {">PROBABILITY": 50.0}}) == "filter%5B%3EPROBABILITY%5D=50"

    def test_bool_and_none(self):
        assert build_query({"a": True, "b": False, "c": None}) == "a=1&b=0"

    def test_empty(self):
        assert build_query({}) == ""


class TestCommand:
    """Tests for Command."""

    def test_nested_get_requires_id(self):
        """A nested user.get needs the same {id} params as a direct call."""
        command = Command(method="user.get", params={"id": "1"})
        typed = command.typed_params()
        assert isinstance(typed, IdParams)
        assert typed.id == "1"

        with pytest.raises(ValidationError, match="user.get"):
            Command(method="user.get", params={})

    def test_nested_list_params(self):
        command = Command(method=Method.CRM_DEAL_LIST, params={"start": 50})
        assert isinstance(command.typed_params(), ListParams)

    def test_list_params_rejected_for_get(self):
        with pytest.raises(ValidationError):
            Command(method="crm.deal.get", params={"id": "1", "start": 10})

    def test_unknown_method_rejected(self):
        with pytest.raises(ValidationError):
            Command(method="crm.company.get", params={"id": "1"})

    def test_nested_batch_rejected(self):
        with pytest.raises(ValidationError, match="another batch"):
            Command(method="batch", params={"cmd": {}})

    def test_to_query(self):
        command = Command(method="crm.deal.list", params={"order": {"ID": "ASC"}, "start": 0})
        assert command.to_query() == "crm.deal.list?start=0&order%5BID%5D=ASC"

    def test_to_query_without_params(self):
        assert Command(method="crm.status.fields").to_query() == "crm.status.fields"


class TestCommands:
    """Tests for Commands (batch params)."""

    def test_validate(self, batch_commands):
        commands = Commands.model_validate(batch_commands)
        assert commands.labels == ["me", "deals", "new_lead"]
        assert commands.halt is False
        assert commands.cmd["deals"].method is Method.CRM_DEAL_LIST

    def test_to_wire(self, batch_commands):
        wire = Commands.model_validate(batch_commands).to_wire()
        assert wire["halt"] == 0
        assert wire["cmd"]["me"] == "user.get?id=1"
        assert wire["cmd"]["deals"] == (
            "crm.deal.list?order%5BID%5D=ASC&select%5B0%5D=ID&select%5B1%5D=TITLE"
        )
        assert wire["cmd"]["new_lead"] == "crm.lead.add?fields%5BTITLE%5D=Inbound"

    def test_build(self):
        commands = Commands.build(
            {
                "me": ("user.get", {"id": 1}),
                "stages": (Method.CRM_STATUS_LIST, {"filter": {"ENTITY_ID": "DEAL_STAGE"}}),
            },
            halt=True,
        )
        assert commands.halt is True
        assert commands.to_wire() == {
            "halt": 1,
            "cmd": {
                "me": "user.get?id=1",
                "stages": "crm.status.list?filter%5BENTITY_ID%5D=DEAL_STAGE",
            },
        }

    def test_empty_batch_rejected(self):
        with pytest.raises(ValidationError, match="at least one command"):
            Commands.model_validate({"cmd": {}})

    def test_blank_label_rejected(self):
        with pytest.raises(ValidationError, match="labels"):
            Commands.build({" ": ("user.get", {"id": "1"})})

    def test_command_limit(self):
        cmd = {f"u{i}": ("user.get", {"id": str(i)}) for i in range(3)}
        with patch.object(config, "batch_max_commands", 2):
            with pytest.raises(ValidationError, match="at most 2"):
                Commands.build(cmd)

    def test_halt_default_from_config(self):
        with patch.object(config, "batch_halt", True):
            commands = Commands.build({"me": ("user.get", {"id": "1"})})
        assert commands.halt is True

    def test_unknown_key_rejected(self, batch_commands):
        with pytest.raises(ValidationError):
            Commands.model_validate({**batch_commands, "start": 10})
