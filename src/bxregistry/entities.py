"""Bitrix24 entity models.

These models describe the records returned by the CRM and user methods.
Attributes are snake_case; the wire names are Bitrix's upper-case keys and
are used as aliases, so `Deal.model_validate({"ID": "1", "TITLE": "x"})`
works and `model_dump(by_alias=True)` round-trips to the wire form.

Bitrix returns most scalar values as strings, including IDs and amounts.
Custom fields (`UF_*`) and fields not modelled here are kept as extras.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

YesNo = Literal["Y", "N"]


class BitrixEntity(BaseModel):
    """Base for all Bitrix24 entities."""

    id: str = Field(..., alias="ID", description="Entity identifier")

    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    @property
    def custom_fields(self) -> Dict[str, Any]:
        """User-defined (UF_*) fields present on this record."""
        extra = self.model_extra or {}
        return {key: value for key, value in extra.items() if key.startswith("UF_")}


class MultiField(BaseModel):
    """A value of a multi-valued communication field (PHONE, EMAIL, WEB, IM)."""

    id: Optional[str] = Field(None, alias="ID")
    value_type: Optional[str] = Field(None, alias="VALUE_TYPE")  # WORK, HOME, MOBILE...
    value: str = Field(..., alias="VALUE")
    type_id: Optional[str] = Field(None, alias="TYPE_ID")

    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )


class FieldDescriptor(BaseModel):
    """Description of a single entity field, as returned by `*.fields`."""

    type: str
    is_required: bool = Field(False, alias="isRequired")
    is_read_only: bool = Field(False, alias="isReadOnly")
    is_immutable: bool = Field(False, alias="isImmutable")
    is_multiple: bool = Field(False, alias="isMultiple")
    is_dynamic: bool = Field(False, alias="isDynamic")
    title: Optional[str] = None

    model_config = ConfigDict(extra="allow", populate_by_name=True)


class User(BitrixEntity):
    """Portal user."""

    active: Optional[bool] = Field(None, alias="ACTIVE")
    email: Optional[str] = Field(None, alias="EMAIL")
    name: Optional[str] = Field(None, alias="NAME")
    last_name: Optional[str] = Field(None, alias="LAST_NAME")
    second_name: Optional[str] = Field(None, alias="SECOND_NAME")
    personal_gender: Optional[str] = Field(None, alias="PERSONAL_GENDER")
    personal_phone: Optional[str] = Field(None, alias="PERSONAL_PHONE")
    personal_mobile: Optional[str] = Field(None, alias="PERSONAL_MOBILE")
    work_position: Optional[str] = Field(None, alias="WORK_POSITION")
    work_phone: Optional[str] = Field(None, alias="WORK_PHONE")
    departments: List[int] = Field(default_factory=list, alias="UF_DEPARTMENT")
    xml_id: Optional[str] = Field(None, alias="XML_ID")
    is_online: Optional[YesNo] = Field(None, alias="IS_ONLINE")
    time_zone: Optional[str] = Field(None, alias="TIME_ZONE")
    last_login: Optional[str] = Field(None, alias="LAST_LOGIN")
    date_register: Optional[str] = Field(None, alias="DATE_REGISTER")
    user_type: Optional[str] = Field(None, alias="USER_TYPE")

    @property
    def full_name(self) -> str:
        parts = [self.name, self.second_name, self.last_name]
        return " ".join(part for part in parts if part)


class Contact(BitrixEntity):
    """CRM contact (person)."""

    honorific: Optional[str] = Field(None, alias="HONORIFIC")
    name: Optional[str] = Field(None, alias="NAME")
    second_name: Optional[str] = Field(None, alias="SECOND_NAME")
    last_name: Optional[str] = Field(None, alias="LAST_NAME")
    post: Optional[str] = Field(None, alias="POST")
    type_id: Optional[str] = Field(None, alias="TYPE_ID")
    source_id: Optional[str] = Field(None, alias="SOURCE_ID")
    source_description: Optional[str] = Field(None, alias="SOURCE_DESCRIPTION")
    company_id: Optional[str] = Field(None, alias="COMPANY_ID")
    lead_id: Optional[str] = Field(None, alias="LEAD_ID")
    assigned_by_id: Optional[str] = Field(None, alias="ASSIGNED_BY_ID")
    created_by_id: Optional[str] = Field(None, alias="CREATED_BY_ID")
    modify_by_id: Optional[str] = Field(None, alias="MODIFY_BY_ID")
    opened: Optional[YesNo] = Field(None, alias="OPENED")
    export: Optional[YesNo] = Field(None, alias="EXPORT")
    has_phone: Optional[YesNo] = Field(None, alias="HAS_PHONE")
    has_email: Optional[YesNo] = Field(None, alias="HAS_EMAIL")
    phone: List[MultiField] = Field(default_factory=list, alias="PHONE")
    email: List[MultiField] = Field(default_factory=list, alias="EMAIL")
    web: List[MultiField] = Field(default_factory=list, alias="WEB")
    im: List[MultiField] = Field(default_factory=list, alias="IM")
    birthdate: Optional[str] = Field(None, alias="BIRTHDATE")
    comments: Optional[str] = Field(None, alias="COMMENTS")
    date_create: Optional[str] = Field(None, alias="DATE_CREATE")
    date_modify: Optional[str] = Field(None, alias="DATE_MODIFY")


class Deal(BitrixEntity):
    """CRM deal."""

    title: Optional[str] = Field(None, alias="TITLE")
    type_id: Optional[str] = Field(None, alias="TYPE_ID")
    category_id: Optional[str] = Field(None, alias="CATEGORY_ID")
    stage_id: Optional[str] = Field(None, alias="STAGE_ID")
    stage_semantic_id: Optional[str] = Field(None, alias="STAGE_SEMANTIC_ID")
    is_new: Optional[YesNo] = Field(None, alias="IS_NEW")
    probability: Optional[str] = Field(None, alias="PROBABILITY")
    currency_id: Optional[str] = Field(None, alias="CURRENCY_ID")
    opportunity: Optional[str] = Field(None, alias="OPPORTUNITY")
    tax_value: Optional[str] = Field(None, alias="TAX_VALUE")
    company_id: Optional[str] = Field(None, alias="COMPANY_ID")
    contact_id: Optional[str] = Field(None, alias="CONTACT_ID")
    lead_id: Optional[str] = Field(None, alias="LEAD_ID")
    assigned_by_id: Optional[str] = Field(None, alias="ASSIGNED_BY_ID")
    created_by_id: Optional[str] = Field(None, alias="CREATED_BY_ID")
    modify_by_id: Optional[str] = Field(None, alias="MODIFY_BY_ID")
    opened: Optional[YesNo] = Field(None, alias="OPENED")
    closed: Optional[YesNo] = Field(None, alias="CLOSED")
    begindate: Optional[str] = Field(None, alias="BEGINDATE")
    closedate: Optional[str] = Field(None, alias="CLOSEDATE")
    source_id: Optional[str] = Field(None, alias="SOURCE_ID")
    comments: Optional[str] = Field(None, alias="COMMENTS")
    date_create: Optional[str] = Field(None, alias="DATE_CREATE")
    date_modify: Optional[str] = Field(None, alias="DATE_MODIFY")

    @property
    def probability_value(self) -> Optional[float]:
        """Probability as a number (Bitrix sends it as a string or null)."""
        if self.probability in (None, ""):
            return None
        return float(self.probability)


class Lead(BitrixEntity):
    """CRM lead."""

    title: Optional[str] = Field(None, alias="TITLE")
    honorific: Optional[str] = Field(None, alias="HONORIFIC")
    name: Optional[str] = Field(None, alias="NAME")
    second_name: Optional[str] = Field(None, alias="SECOND_NAME")
    last_name: Optional[str] = Field(None, alias="LAST_NAME")
    company_title: Optional[str] = Field(None, alias="COMPANY_TITLE")
    company_id: Optional[str] = Field(None, alias="COMPANY_ID")
    contact_id: Optional[str] = Field(None, alias="CONTACT_ID")
    post: Optional[str] = Field(None, alias="POST")
    status_id: Optional[str] = Field(None, alias="STATUS_ID")
    status_semantic_id: Optional[str] = Field(None, alias="STATUS_SEMANTIC_ID")
    source_id: Optional[str] = Field(None, alias="SOURCE_ID")
    currency_id: Optional[str] = Field(None, alias="CURRENCY_ID")
    opportunity: Optional[str] = Field(None, alias="OPPORTUNITY")
    assigned_by_id: Optional[str] = Field(None, alias="ASSIGNED_BY_ID")
    created_by_id: Optional[str] = Field(None, alias="CREATED_BY_ID")
    opened: Optional[YesNo] = Field(None, alias="OPENED")
    phone: List[MultiField] = Field(default_factory=list, alias="PHONE")
    email: List[MultiField] = Field(default_factory=list, alias="EMAIL")
    comments: Optional[str] = Field(None, alias="COMMENTS")
    date_create: Optional[str] = Field(None, alias="DATE_CREATE")
    date_modify: Optional[str] = Field(None, alias="DATE_MODIFY")
    date_closed: Optional[str] = Field(None, alias="DATE_CLOSED")


class Status(BitrixEntity):
    """Reference book entry (lead statuses, deal stages, sources, ...)."""

    entity_id: str = Field(..., alias="ENTITY_ID")
    status_id: str = Field(..., alias="STATUS_ID")
    name: str = Field(..., alias="NAME")
    name_init: Optional[str] = Field(None, alias="NAME_INIT")
    sort: Optional[int] = Field(None, alias="SORT")
    system: Optional[YesNo] = Field(None, alias="SYSTEM")
    category_id: Optional[str] = Field(None, alias="CATEGORY_ID")
    color: Optional[str] = Field(None, alias="COLOR")
    semantics: Optional[str] = Field(None, alias="SEMANTICS")
    extra: Optional[Dict[str, Any]] = Field(None, alias="EXTRA")
