"""Request parameter shapes.

Each method accepts exactly one of these models. All of them reject unknown
top-level keys, which keeps list-style params (`start`, `select`, ...) from
being accepted by single-item methods. Only the list `filter` is an open bag:
its full grammar is larger than what is modelled here, so known keys are
validated and every other key is passed through.
"""

import logging
import re
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from bxregistry.entities import YesNo

logger = logging.getLogger(__name__)

# Upper-case Bitrix field name, including custom UF_* fields
FIELD_NAME_RE = re.compile(r"^[A-Z][A-Z0-9_]*$")

SortDirection = Literal["ASC"]

# Select tokens with special meaning
SELECT_DEFAULT = "*"
SELECT_CUSTOM = "UF_*"


class BaseParams(BaseModel):
    """Base for all request parameter models."""

    model_config = ConfigDict(
        extra="forbid",
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    def to_wire(self) -> Dict[str, Any]:
        """Dump to the JSON form sent to Bitrix (wire keys, unset omitted)."""
        return self.model_dump(by_alias=True, exclude_none=True)


class ListFilter(BaseModel):
    """Filter of a list call, keyed by optionally comparator-prefixed field names.

    Only `>PROBABILITY` is modelled. Every other key (`><OPPORTUNITY`,
    `CONTACT.NAME`, ...) is passed through unchanged.
    """

    probability_gt: Optional[float] = Field(None, alias=">PROBABILITY")

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    @model_validator(mode="after")
    def _check_extra_keys(self) -> "ListFilter":
        for key in self.model_extra or {}:
            if not key.strip():
                raise ValueError("Filter keys must be non-empty")
            logger.debug(f"Passing through unmodelled filter key: {key}")
        return self


class ListParams(BaseParams):
    """Parameters accepted by every listable method.

    - start: number of records to skip (pagination offset)
    - order: field name -> "ASC"
    - filter: see ListFilter
    - select: field projection; "*" is the default fields, "UF_*" all
      custom fields, anything else a field name
    """

    start: Optional[int] = Field(None, ge=0)
    order: Optional[Dict[str, SortDirection]] = None
    filter: Optional[ListFilter] = None
    select: Optional[List[str]] = None

    @field_validator("order")
    @classmethod
    def _check_order_keys(cls, v: Optional[Dict[str, str]]) -> Optional[Dict[str, str]]:
        if v is not None:
            for key in v:
                if not key or not key.strip():
                    raise ValueError("Order fields must be non-empty")
        return v

    @field_validator("select")
    @classmethod
    def _check_select(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is not None:
            for token in v:
                if not token or not token.strip():
                    raise ValueError("Select tokens must be non-empty")
        return v

    def next_page(self, start: int) -> "ListParams":
        """Copy of these params positioned at another offset."""
        return self.model_copy(update={"start": start})


class IdParams(BaseParams):
    """Parameters of methods addressing one record by ID."""

    id: str


class EventParams(BaseParams):
    """Optional `params` block of CRM add/update calls."""

    register_sonet_event: Optional[YesNo] = Field(None, alias="REGISTER_SONET_EVENT")


class FieldsParams(BaseParams):
    """Base for params carrying a `fields` map of upper-case field names."""

    fields: Dict[str, Any]

    @field_validator("fields")
    @classmethod
    def _check_field_names(cls, v: Dict[str, Any]) -> Dict[str, Any]:
        for key in v:
            if not FIELD_NAME_RE.match(key):
                raise ValueError(f"Invalid field name: '{key}'")
        return v


class AddParams(FieldsParams):
    """Parameters of crm.*.add: the new record's fields."""

    params: Optional[EventParams] = None


class UpdateParams(FieldsParams):
    """Parameters of crm.*.update: record ID and the fields to change."""

    id: str
    params: Optional[EventParams] = None


class StatusAddParams(FieldsParams):
    pass


class StatusUpdateParams(FieldsParams):
    id: str


class StatusListParams(BaseParams):
    """Parameters of crm.status.list (not paginated, no projection)."""

    order: Optional[Dict[str, SortDirection]] = None
    filter: Optional[Dict[str, Any]] = None


class EmptyParams(BaseParams):
    """Parameters of methods that take none."""

    pass
