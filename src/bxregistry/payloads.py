"""Response payload shapes.

Every successful Bitrix24 response body is one of three wrappers:
- GetPayload[T]: a single entity or value under `result`
- ListPayload[T]: a page of entities under `result` with `total`/`next`
- BatchPayload: per-label results of a `batch` call

The Get and List wrappers are structurally distinct, so a list body never
validates as a get payload of the same entity.
"""

from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

T = TypeVar("T")


class ResponseTime(BaseModel):
    """Timing block attached to every response."""

    start: float
    finish: float
    duration: float
    processing: float
    date_start: Optional[str] = None
    date_finish: Optional[str] = None
    operating_reset_at: Optional[float] = None
    operating: Optional[float] = None

    model_config = ConfigDict(extra="allow")


class GetPayload(BaseModel, Generic[T]):
    """Single-item response wrapper."""

    result: T
    time: Optional[ResponseTime] = None


class ListPayload(BaseModel, Generic[T]):
    """Paginated collection response wrapper.

    `next` is the `start` offset of the following page and is absent on the
    last page.
    """

    result: List[T]
    total: int
    next: Optional[int] = None
    time: Optional[ResponseTime] = None

    @property
    def has_more(self) -> bool:
        return self.next is not None

    def next_start(self) -> Optional[int]:
        """Offset to pass as `start` to fetch the next page, if any."""
        return self.next


class BatchCommandError(BaseModel):
    """Error reported for a single batch sub-command."""

    error: str
    error_description: Optional[str] = None

    model_config = ConfigDict(extra="allow")

    def __str__(self) -> str:
        if self.error_description:
            return f"{self.error}: {self.error_description}"
        return self.error


class BatchResult(BaseModel):
    """Inner `result` block of a batch response, keyed by command label."""

    result: Dict[str, Any] = Field(default_factory=dict)
    result_error: Dict[str, BatchCommandError] = Field(default_factory=dict)
    result_total: Dict[str, int] = Field(default_factory=dict)
    result_next: Dict[str, int] = Field(default_factory=dict)
    result_time: Dict[str, ResponseTime] = Field(default_factory=dict)

    @field_validator("*", mode="before")
    @classmethod
    def _normalize_php_arrays(cls, v: Any) -> Any:
        # PHP encodes an empty map (and integer-keyed maps) as a JSON list
        if isinstance(v, list):
            return {str(index): item for index, item in enumerate(v)}
        return v


class BatchPayload(BaseModel):
    """Response wrapper of the `batch` method.

    The inner results are untyped here; `registry.resolve_batch` shapes each
    one by the method of the command that produced it.
    """

    result: BatchResult
    time: Optional[ResponseTime] = None

    @property
    def labels(self) -> List[str]:
        """Labels that produced a result or an error."""
        seen = list(self.result.result)
        seen.extend(label for label in self.result.result_error if label not in seen)
        return seen

    @property
    def has_errors(self) -> bool:
        return bool(self.result.result_error)
