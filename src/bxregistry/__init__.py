"""Bitrix24 REST method registry.

Maps every supported Bitrix24 REST method to the entity it concerns, the
payload it returns and the params it accepts, so that a generic client can
pick request and response shapes from the method name alone.

This package provides:
- Method identifiers and their Listable/Gettable classification
- Entity, payload and params models (Pydantic)
- Batch commands with their wire encoding
- The merged, validated registry and its lookups
No HTTP transport: calls are made by the client that uses these shapes.
"""

from bxregistry.commands import Command, Commands, build_query
from bxregistry.entities import Contact, Deal, FieldDescriptor, Lead, MultiField, Status, User
from bxregistry.methods import (
    GETTABLE_METHODS,
    LISTABLE_METHODS,
    Method,
    MethodDescriptor,
    RegistryError,
    UnknownMethodError,
    is_gettable,
    is_listable,
    resolve_method,
)
from bxregistry.params import (
    AddParams,
    EmptyParams,
    EventParams,
    IdParams,
    ListFilter,
    ListParams,
    StatusAddParams,
    StatusListParams,
    StatusUpdateParams,
    UpdateParams,
)
from bxregistry.payloads import (
    BatchCommandError,
    BatchPayload,
    GetPayload,
    ListPayload,
    ResponseTime,
)
from bxregistry.registry import (
    METHODS,
    DuplicateMethodError,
    MethodRegistry,
    ParamsValidationError,
    PayloadValidationError,
    entity_type_of,
    method_data,
    params_of,
    parse_payload,
    payload_of,
    resolve_batch,
    validate_params,
)

__version__ = "0.1.0"

__all__ = [
    # Methods
    "Method",
    "MethodDescriptor",
    "LISTABLE_METHODS",
    "GETTABLE_METHODS",
    "is_listable",
    "is_gettable",
    "resolve_method",
    # Entities
    "User",
    "Contact",
    "Deal",
    "Lead",
    "Status",
    "MultiField",
    "FieldDescriptor",
    # Payloads
    "GetPayload",
    "ListPayload",
    "BatchPayload",
    "BatchCommandError",
    "ResponseTime",
    # Params
    "ListParams",
    "ListFilter",
    "IdParams",
    "AddParams",
    "UpdateParams",
    "EventParams",
    "StatusAddParams",
    "StatusUpdateParams",
    "StatusListParams",
    "EmptyParams",
    # Batch
    "Command",
    "Commands",
    "build_query",
    # Registry
    "METHODS",
    "MethodRegistry",
    "method_data",
    "entity_type_of",
    "payload_of",
    "params_of",
    "validate_params",
    "parse_payload",
    "resolve_batch",
    # Errors
    "RegistryError",
    "UnknownMethodError",
    "DuplicateMethodError",
    "ParamsValidationError",
    "PayloadValidationError",
]
