"""Bitrix24 method registry.

A mega map of all supported Bitrix methods to their shapes, used to resolve
what a generic client must send and what it gets back:
- `type`: the entity the method is associated with (None for batch)
- `payload`: the model of a successful response body
- `params`: the model of the accepted request params

Usage:
    from bxregistry.registry import params_of, parse_payload, validate_params

    params = validate_params("crm.deal.list", {"start": 50, "select": ["*"]})
    payload = parse_payload("crm.deal.list", response_json)
    payload.result[0].title

The registry is the disjoint union of the per-domain sub-registries and the
entries defined below. It is built and validated once at import; an invalid
registry fails the import instead of a later call.
"""

import logging
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional, Type, Union

from pydantic import BaseModel, ValidationError

from bxregistry.commands import Commands
from bxregistry.entities import User
from bxregistry.methods import (
    GETTABLE_METHODS,
    LISTABLE_METHODS,
    Method,
    MethodDescriptor,
    RegistryError,
    UnknownMethodError,
    resolve_method,
)
from bxregistry.params import IdParams, ListParams
from bxregistry.payloads import BatchCommandError, BatchPayload, GetPayload, ListPayload
from bxregistry.services import SUB_REGISTRIES
from bxregistry.validate import validate_registry

logger = logging.getLogger(__name__)

MethodName = Union[str, Method]


class DuplicateMethodError(RegistryError):
    """Raised when two sources define the same method."""

    def __init__(self, method: Method, first: str, second: str):
        self.method = method
        self.sources = (first, second)
        super().__init__(f"Method '{method.value}' is defined by both '{first}' and '{second}'")


class ParamsValidationError(RegistryError):
    """Raised when params do not match the shape a method accepts."""

    def __init__(self, method: Method, error: ValidationError):
        self.method = method
        self.errors = error.errors()
        super().__init__(f"Invalid params for '{method.value}': {error}")


class PayloadValidationError(RegistryError):
    """Raised when a response body does not match a method's payload shape."""

    def __init__(self, method: Method, error: ValidationError):
        self.method = method
        self.errors = error.errors()
        super().__init__(f"Invalid payload for '{method.value}': {error}")


class MethodRegistry(Mapping[Method, MethodDescriptor]):
    """Immutable lookup from method to its descriptor.

    Keys may be given as Method members or wire identifiers.
    """

    def __init__(self, entries: Mapping[Method, MethodDescriptor]):
        self._entries: Mapping[Method, MethodDescriptor] = MappingProxyType(dict(entries))

    @classmethod
    def merge(cls, sources: Mapping[str, Mapping[Method, MethodDescriptor]]) -> "MethodRegistry":
        """Build a registry as the disjoint union of named sources.

        Args:
            sources: Source name -> method descriptors

        Returns:
            MethodRegistry holding every entry of every source

        Raises:
            DuplicateMethodError: If a method is defined by more than one source
        """
        entries: Dict[Method, MethodDescriptor] = {}
        owners: Dict[Method, str] = {}
        for source_name, source in sources.items():
            for method, descriptor in source.items():
                if method in entries:
                    raise DuplicateMethodError(method, owners[method], source_name)
                entries[method] = descriptor
                owners[method] = source_name
            logger.debug(f"Merged {len(source)} methods from '{source_name}'")
        return cls(entries)

    def __getitem__(self, key: MethodName) -> MethodDescriptor:
        try:
            method = resolve_method(key)
        except UnknownMethodError:
            raise KeyError(key) from None
        return self._entries[method]

    def __contains__(self, key: object) -> bool:
        try:
            return resolve_method(key) in self._entries  # type: ignore[arg-type]
        except UnknownMethodError:
            return False

    def __iter__(self) -> Iterator[Method]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"MethodRegistry({len(self)} methods)"

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def describe(self, method: MethodName) -> MethodDescriptor:
        """Get the descriptor of a method.

        Raises:
            UnknownMethodError: If the method is not supported
        """
        resolved = resolve_method(method)
        descriptor = self._entries.get(resolved)
        if descriptor is None:
            raise UnknownMethodError(method)
        return descriptor

    def entity_type_of(self, method: MethodName) -> Optional[Type[BaseModel]]:
        return self.describe(method).type

    def payload_of(self, method: MethodName) -> Type[BaseModel]:
        return self.describe(method).payload

    def params_of(self, method: MethodName) -> Type[BaseModel]:
        return self.describe(method).params

    def listable(self) -> list[Method]:
        return [method for method in self._entries if method in LISTABLE_METHODS]

    def gettable(self) -> list[Method]:
        return [method for method in self._entries if method not in LISTABLE_METHODS]

    # -------------------------------------------------------------------------
    # Call-site checks
    # -------------------------------------------------------------------------

    def validate_params(self, method: MethodName, params: Any = None) -> BaseModel:
        """Validate params against the shape a method accepts.

        Args:
            method: Method identifier
            params: Params as a dict or a params model; None means no params

        Returns:
            Params as an instance of the method's params model

        Raises:
            UnknownMethodError: If the method is not supported
            ParamsValidationError: If the params do not match
        """
        descriptor = self.describe(method)
        if isinstance(params, descriptor.params):
            return params
        if isinstance(params, BaseModel):
            # A different params model: check its wire form against ours
            params = params.model_dump(by_alias=True, exclude_none=True)
        try:
            return descriptor.params.model_validate(params if params is not None else {})
        except ValidationError as e:
            raise ParamsValidationError(descriptor.method, e) from e

    def parse_payload(self, method: MethodName, body: Any) -> BaseModel:
        """Validate a response body against a method's payload shape.

        Raises:
            UnknownMethodError: If the method is not supported
            PayloadValidationError: If the body does not match
        """
        descriptor = self.describe(method)
        try:
            return descriptor.payload.model_validate(body)
        except ValidationError as e:
            raise PayloadValidationError(descriptor.method, e) from e

    def resolve_batch(
        self,
        commands: Union[Commands, Mapping[str, Any]],
        payload: Union[BatchPayload, Mapping[str, Any]],
    ) -> Dict[str, Union[BaseModel, BatchCommandError]]:
        """Unwrap a batch response into per-label typed payloads.

        Each label's result is shaped by the payload model of the method that
        label was sent with: listable commands become ListPayload (with the
        batch's result_total/result_next), the rest GetPayload. Failed commands
        map to their BatchCommandError. Commands skipped after a halt are
        absent from the result.

        Args:
            commands: The batch params that were sent
            payload: The batch response body

        Returns:
            Label -> nested payload, using the labels of the request
        """
        if not isinstance(commands, Commands):
            commands = self.validate_params(Method.BATCH, commands)
        if not isinstance(payload, BatchPayload):
            payload = self.parse_payload(Method.BATCH, payload)

        inner = payload.result
        resolved: Dict[str, Union[BaseModel, BatchCommandError]] = {}

        for label, command in commands.cmd.items():
            if label in inner.result_error:
                resolved[label] = inner.result_error[label]
                continue
            if label not in inner.result:
                logger.debug(f"Batch command '{label}' was not executed")
                continue

            body: Dict[str, Any] = {"result": inner.result[label]}
            if label in inner.result_time:
                body["time"] = inner.result_time[label]
            if self.describe(command.method).listable:
                result = inner.result[label]
                default_total = len(result) if isinstance(result, list) else 0
                body["total"] = inner.result_total.get(label, default_total)
                if label in inner.result_next:
                    body["next"] = inner.result_next[label]
            resolved[label] = self.parse_payload(command.method, body)

        unexpected = set(inner.result) - set(commands.cmd)
        if unexpected:
            logger.warning(f"Batch response has results for unknown labels: {sorted(unexpected)}")

        return resolved


# =============================================================================
# Registry construction
# =============================================================================

# Entries that belong to no CRM sub-registry
DIRECT_METHODS: Dict[Method, MethodDescriptor] = {
    Method.BATCH: MethodDescriptor(
        method=Method.BATCH,
        type=None,
        payload=BatchPayload,
        params=Commands,
    ),
    Method.USER_GET: MethodDescriptor(
        method=Method.USER_GET,
        type=User,
        payload=GetPayload[User],
        params=IdParams,
    ),
    Method.USER_SEARCH: MethodDescriptor(
        method=Method.USER_SEARCH,
        type=User,
        payload=ListPayload[User],
        params=ListParams,
    ),
}


def build_registry() -> MethodRegistry:
    """Merge the sub-registries and the direct entries into one registry."""
    return MethodRegistry.merge({**SUB_REGISTRIES, "direct": DIRECT_METHODS})


def _check_registry(registry: MethodRegistry) -> None:
    result = validate_registry(registry)
    if not result.is_valid:
        raise RegistryError(f"Method registry is invalid:\n{result}")
    logger.debug(
        f"Method registry ready: {len(LISTABLE_METHODS)} listable, "
        f"{len(GETTABLE_METHODS)} gettable"
    )


METHODS = build_registry()
_check_registry(METHODS)


# =============================================================================
# Module-level lookups on the global registry
# =============================================================================


def method_data(method: MethodName) -> MethodDescriptor:
    """Retrieve the descriptor of a method."""
    return METHODS.describe(method)


def entity_type_of(method: MethodName) -> Optional[Type[BaseModel]]:
    """Retrieve the entity type associated with a method (None for batch)."""
    return METHODS.entity_type_of(method)


def payload_of(method: MethodName) -> Type[BaseModel]:
    """Retrieve a method's payload model."""
    return METHODS.payload_of(method)


def params_of(method: MethodName) -> Type[BaseModel]:
    """Retrieve a method's params model."""
    return METHODS.params_of(method)


def validate_params(method: MethodName, params: Any = None) -> BaseModel:
    return METHODS.validate_params(method, params)


def parse_payload(method: MethodName, body: Any) -> BaseModel:
    return METHODS.parse_payload(method, body)


def resolve_batch(
    commands: Union[Commands, Mapping[str, Any]],
    payload: Union[BatchPayload, Mapping[str, Any]],
) -> Dict[str, Union[BaseModel, BatchCommandError]]:
    return METHODS.resolve_batch(commands, payload)
