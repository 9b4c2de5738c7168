"""Outcome types returned by the index administration and bulk operations.

Every operation family has exactly two variants, a success and a failure.
Failures are values, not exceptions: they carry a flattened message, the
`ErrorKind` it was classified as and the original exception as `cause`.

Callers are expected to match on the variant::

    match service.create_index(coordinates, "orders.json"):
        case IndexSuccess(index=name):
            ...
        case IndexFailure(kind=kind, message=message):
            ...

A `BulkSuccess` only means the round trip completed. Individual documents may
still have been rejected, so callers must inspect `items` (or `failed_items`).
"""

from enum import StrEnum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from docsearch.search.models import BulkResponseItem


class ErrorKind(StrEnum):
    """Classification of a failed call, in priority order."""

    RESPONSE = "response"
    ENGINE = "engine"
    IO = "io"
    UNKNOWN = "unknown"


class _Outcome(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @property
    def ok(self) -> bool:
        """Return True for the success variant."""
        return getattr(self, "status") == "success"


class _Failure(_Outcome):
    status: Literal["failure"] = "failure"
    kind: ErrorKind
    message: str
    cause: BaseException | None = Field(default=None, repr=False)

    @field_validator("message")
    @classmethod
    def message_not_empty(cls, value: str) -> str:
        """Fail construction for a blank message."""
        if not value.strip():
            raise ValueError("failure message must not be empty")
        return value


class IndexSuccess(_Outcome):
    """An index was created."""

    status: Literal["success"] = "success"
    index: str
    acknowledged: bool | None = None
    shards_acknowledged: bool = False


class IndexFailure(_Failure):
    """Creating an index failed."""

    metadata: dict[str, Any] | None = None


class MappingSuccess(_Outcome):
    """One pretty printed mapping per matching index, in response order."""

    status: Literal["success"] = "success"
    mappings: list[str] = Field(default_factory=list)


class MappingFailure(_Failure):
    """Fetching a mapping failed."""

    metadata: dict[str, Any] | None = None


class BulkSuccess(_Outcome):
    """The bulk round trip completed; items line up with the submitted documents."""

    status: Literal["success"] = "success"
    document_count: int
    items: list[BulkResponseItem] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Return True if the engine rejected at least one document."""
        return any(item.failed for item in self.items)

    @property
    def failed_items(self) -> list[tuple[int, BulkResponseItem]]:
        """Return (position, item) pairs for every rejected document."""
        return [(position, item) for position, item in enumerate(self.items) if item.failed]


class BulkFailure(_Failure):
    """The bulk call itself failed; no per document outcome is known."""

    document_count: int
    warnings: list[str] = Field(default_factory=list)


IndexResult = IndexSuccess | IndexFailure
MappingResult = MappingSuccess | MappingFailure
BulkResult = BulkSuccess | BulkFailure
