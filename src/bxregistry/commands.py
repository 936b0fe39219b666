"""Batch commands: the params of the `batch` method.

A batch bundles up to 50 labelled sub-commands into one request. On the wire
each command is a `method?query` string, with its params encoded the way
PHP's http_build_query does it:

    {"halt": 0, "cmd": {"me": "user.get?id=1",
                        "deals": "crm.deal.list?order%5BID%5D=ASC"}}

Each command's params are validated against the params model its own method
resolves to in the registry, so a nested `user.get` requires `{id}` exactly
as a direct call would.
"""

from typing import Any, Dict, List, Mapping, Optional, Tuple
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from bxregistry.config import config
from bxregistry.methods import Method


def _scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _flatten(prefix: str, value: Any, pairs: List[Tuple[str, str]]) -> None:
    if value is None:
        return
    if isinstance(value, Mapping):
        for key, item in value.items():
            _flatten(f"{prefix}[{key}]", item, pairs)
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            _flatten(f"{prefix}[{index}]", item, pairs)
    else:
        pairs.append((prefix, _scalar(value)))


def build_query(params: Mapping[str, Any]) -> str:
    """Encode nested params as a PHP-style query string.

    Args:
        params: Wire params (e.g., `{"order": {"NAME": "ASC"}}`)

    Returns:
        Query string like "order%5BNAME%5D=ASC"
    """
    pairs: List[Tuple[str, str]] = []
    for key, value in params.items():
        _flatten(str(key), value, pairs)
    return urlencode(pairs)


class Command(BaseModel):
    """A single labelled sub-command of a batch."""

    method: Method
    params: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def _check_params(self) -> "Command":
        if self.method is Method.BATCH:
            raise ValueError("batch commands cannot contain another batch")
        # Raises ParamsValidationError (a ValueError) on mismatch
        self.typed_params()
        return self

    def typed_params(self) -> BaseModel:
        """Params validated against this command's method."""
        from bxregistry.registry import validate_params

        return validate_params(self.method, self.params)

    def to_query(self) -> str:
        """Wire form: "method" or "method?query"."""
        query = build_query(self.typed_params().to_wire())
        if not query:
            return self.method.value
        return f"{self.method.value}?{query}"


class Commands(BaseModel):
    """Params of the `batch` method.

    Attributes:
        halt: Stop executing remaining commands after the first error
        cmd: Commands keyed by label; the batch payload uses the same labels
    """

    halt: bool = Field(default_factory=lambda: config.batch_halt)
    cmd: Dict[str, Command]

    model_config = ConfigDict(extra="forbid")

    @field_validator("cmd")
    @classmethod
    def _check_commands(cls, v: Dict[str, Command]) -> Dict[str, Command]:
        if not v:
            raise ValueError("batch requires at least one command")
        if len(v) > config.batch_max_commands:
            raise ValueError(
                f"batch accepts at most {config.batch_max_commands} commands, got {len(v)}"
            )
        for label in v:
            if not label or not label.strip():
                raise ValueError("Command labels must be non-empty")
        return v

    @classmethod
    def build(
        cls,
        commands: Mapping[str, Tuple[Any, Optional[Mapping[str, Any]]]],
        halt: Optional[bool] = None,
    ) -> "Commands":
        """Build a batch from `{label: (method, params)}`.

        Example:
            Commands.build({"me": ("user.get", {"id": "1"})})
        """
        data: Dict[str, Any] = {
            "cmd": {
                label: {"method": method, "params": dict(params or {})}
                for label, (method, params) in commands.items()
            }
        }
        if halt is not None:
            data["halt"] = halt
        return cls.model_validate(data)

    @property
    def labels(self) -> List[str]:
        return list(self.cmd)

    def to_wire(self) -> Dict[str, Any]:
        """Dump to the JSON form sent to Bitrix."""
        return {
            "halt": 1 if self.halt else 0,
            "cmd": {label: command.to_query() for label, command in self.cmd.items()},
        }
