"""Bitrix24 REST method identifiers and their classification.

Every supported remote method is a member of the closed `Method` enum. The
enum values are wire values: they are sent as-is as the method name of a
REST call and must never change.

Methods fall into exactly one of two kinds:
- Listable: the response is a paginated collection (`ListPayload`)
- Gettable: the response is a single entity or composite (`GetPayload`,
  `BatchPayload`)

Only the Listable roster is enumerated. Gettable is everything else, so a
new identifier is Gettable unless it is added to LISTABLE_METHODS.
"""

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Optional, Type, Union

from pydantic import BaseModel


class Method(str, Enum):
    """Supported Bitrix24 REST methods."""

    # Gettable
    BATCH = "batch"

    CRM_CONTACT_GET = "crm.contact.get"
    CRM_DEAL_GET = "crm.deal.get"
    CRM_LEAD_GET = "crm.lead.get"
    CRM_STATUS_GET = "crm.status.get"

    CRM_CONTACT_ADD = "crm.contact.add"
    CRM_DEAL_ADD = "crm.deal.add"
    CRM_LEAD_ADD = "crm.lead.add"
    CRM_STATUS_ADD = "crm.status.add"

    CRM_CONTACT_UPDATE = "crm.contact.update"
    CRM_DEAL_UPDATE = "crm.deal.update"
    CRM_LEAD_UPDATE = "crm.lead.update"
    CRM_STATUS_UPDATE = "crm.status.update"

    CRM_STATUS_LIST = "crm.status.list"
    CRM_STATUS_FIELDS = "crm.status.fields"

    USER_GET = "user.get"

    # Listable
    CRM_CONTACT_LIST = "crm.contact.list"
    CRM_DEAL_LIST = "crm.deal.list"
    CRM_LEAD_LIST = "crm.lead.list"
    # There is no user.list; user.search with no filter returns all users
    USER_SEARCH = "user.search"

    def __str__(self) -> str:
        return self.value


LISTABLE_METHODS: FrozenSet[Method] = frozenset(
    {
        Method.CRM_CONTACT_LIST,
        Method.CRM_DEAL_LIST,
        Method.CRM_LEAD_LIST,
        Method.USER_SEARCH,
    }
)

GETTABLE_METHODS: FrozenSet[Method] = frozenset(Method) - LISTABLE_METHODS


class RegistryError(ValueError):
    """Base error raised by the method registry."""

    pass


class UnknownMethodError(RegistryError):
    """Raised for a method identifier outside the supported enumeration."""

    def __init__(self, name: object):
        self.name = name
        super().__init__(f"Unknown Bitrix method: '{name}'")


def resolve_method(name: Union[str, Method]) -> Method:
    """Resolve a wire identifier to its Method member.

    Args:
        name: Method identifier (e.g., "crm.deal.list") or a Method

    Returns:
        The matching Method

    Raises:
        UnknownMethodError: If the identifier is not supported
    """
    if isinstance(name, Method):
        return name
    try:
        return Method(name)
    except ValueError:
        raise UnknownMethodError(name) from None


def is_listable(method: Union[str, Method]) -> bool:
    """Check whether a method returns a paginated collection."""
    return resolve_method(method) in LISTABLE_METHODS


def is_gettable(method: Union[str, Method]) -> bool:
    """Check whether a method returns a single entity or composite payload."""
    return resolve_method(method) not in LISTABLE_METHODS


@dataclass(frozen=True)
class MethodDescriptor:
    """Shapes associated with a single method.

    Attributes:
        method: The method this descriptor belongs to
        type: Entity model the call concerns, None when generic (batch)
        payload: Model of a successful response body
        params: Model of the accepted request parameters
    """

    method: Method
    type: Optional[Type[BaseModel]]
    payload: Type[BaseModel]
    params: Type[BaseModel]

    @property
    def listable(self) -> bool:
        return self.method in LISTABLE_METHODS

    @property
    def kind(self) -> str:
        return "list" if self.listable else "get"

    @property
    def type_name(self) -> str:
        return self.type.__name__ if self.type is not None else "unknown"
