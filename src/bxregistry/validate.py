"""Validation utilities for the method registry.

Checks the invariants every registry must hold before it is used:
- every Method has a descriptor, and nothing else does
- Listable and Gettable methods partition the full enumeration
- listable methods use ListPayload/ListParams, gettable ones do not
- descriptors are keyed by their own method
- payload and params shapes are pydantic models
"""

from __future__ import annotations

import inspect
from typing import TYPE_CHECKING, List, Mapping, Optional

from pydantic import BaseModel

from bxregistry.methods import GETTABLE_METHODS, LISTABLE_METHODS, Method, MethodDescriptor
from bxregistry.params import ListParams
from bxregistry.payloads import ListPayload

if TYPE_CHECKING:
    from bxregistry.registry import MethodRegistry


class RegistryIssue:
    """One problem found in a registry entry (an error or a warning)."""

    def __init__(self, method: str, message: str):
        self.method = method
        self.message = message

    def __str__(self) -> str:
        return f"{self.method}: {self.message}"


class ValidationResult:
    """Result of a validation operation."""

    def __init__(self):
        self.errors: List[RegistryIssue] = []
        self.warnings: List[RegistryIssue] = []

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def add_error(self, method: str, message: str) -> None:
        self.errors.append(RegistryIssue(method, message))

    def add_warning(self, method: str, message: str) -> None:
        self.warnings.append(RegistryIssue(method, message))

    def __str__(self) -> str:
        lines = []
        if self.errors:
            lines.append(f"Errors ({len(self.errors)}):")
            for err in self.errors:
                lines.append(f"  ❌ {err}")
        if self.warnings:
            lines.append(f"Warnings ({len(self.warnings)}):")
            for warn in self.warnings:
                lines.append(f"  ⚠️  {warn}")
        if self.is_valid and not self.warnings:
            lines.append("✅ Validation passed")
        return "\n".join(lines)


def _is_model(shape: object) -> bool:
    return inspect.isclass(shape) and issubclass(shape, BaseModel)


def _is_list_payload(shape: object) -> bool:
    if not _is_model(shape):
        return False
    # Parametrized generics (ListPayload[Deal]) subclass the bare model
    return issubclass(shape, ListPayload)  # type: ignore[arg-type]


def validate_partition(result: ValidationResult) -> None:
    """Check that Listable and Gettable partition the Method enumeration."""
    overlap = LISTABLE_METHODS & GETTABLE_METHODS
    for method in sorted(overlap, key=lambda m: m.value):
        result.add_error(method.value, "classified as both listable and gettable")

    if len(LISTABLE_METHODS) + len(GETTABLE_METHODS) != len(Method):
        result.add_error(
            "*",
            f"listable ({len(LISTABLE_METHODS)}) + gettable ({len(GETTABLE_METHODS)}) "
            f"!= methods ({len(Method)})",
        )


def validate_descriptor(
    key: object, descriptor: MethodDescriptor, result: ValidationResult
) -> None:
    """Check a single registry entry.

    Args:
        key: The key the descriptor is stored under
        descriptor: The descriptor to check
        result: ValidationResult to add errors/warnings to
    """
    name = key.value if isinstance(key, Method) else str(key)

    if descriptor.method != key:
        result.add_error(name, f"descriptor belongs to '{descriptor.method.value}'")

    if not _is_model(descriptor.payload):
        result.add_error(name, "payload is not a pydantic model")
        return
    if not _is_model(descriptor.params):
        result.add_error(name, "params is not a pydantic model")
        return
    if descriptor.type is not None and not _is_model(descriptor.type):
        result.add_error(name, "type is neither a pydantic model nor None")

    if descriptor.listable:
        if not _is_list_payload(descriptor.payload):
            result.add_error(name, "listable method without a ListPayload")
        if not issubclass(descriptor.params, ListParams):
            result.add_error(name, "listable method without ListParams")
    else:
        if _is_list_payload(descriptor.payload):
            result.add_error(name, "gettable method with a ListPayload")

    if descriptor.type is None and descriptor.method is not Method.BATCH:
        result.add_warning(name, "no entity type")


def validate_registry(
    registry: Mapping[Method, MethodDescriptor],
    methods: Optional[List[Method]] = None,
) -> ValidationResult:
    """Validate a registry against the method enumeration.

    Args:
        registry: Registry (or any mapping of Method -> descriptor) to check
        methods: Methods the registry must cover (default: all of Method)

    Returns:
        ValidationResult with all errors and warnings found
    """
    result = ValidationResult()
    expected = list(methods) if methods is not None else list(Method)

    validate_partition(result)

    for method in expected:
        if method not in registry:
            result.add_error(method.value, "missing from registry")

    for key, descriptor in registry.items():
        if key not in expected:
            result.add_error(str(key), "not a supported method")
        validate_descriptor(key, descriptor, result)

    return result


def registry_summary(registry: "MethodRegistry") -> List[dict]:
    """Rows describing every registry entry (for display)."""
    return [
        {
            "method": method.value,
            "kind": descriptor.kind,
            "type": descriptor.type_name,
            "payload": descriptor.payload.__name__,
            "params": descriptor.params.__name__,
        }
        for method, descriptor in sorted(registry.items(), key=lambda item: item[0].value)
    ]
