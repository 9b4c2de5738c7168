"""Value objects passed to and returned from the search client."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class IndexCoordinates(BaseModel):
    """The administrative target of a create index call."""

    model_config = ConfigDict(frozen=True)

    index: str = Field(min_length=1)
    alias: str | None = None
    # Only used for templated or rollover indices.
    index_pattern: str | None = None

    @property
    def mapping_target(self) -> str:
        """Return what a mapping lookup for these coordinates should address."""
        return self.index_pattern or self.index


class Document(BaseModel, Generic[T]):
    """A payload plus the optional external id it is stored under.

    Without an id the engine assigns one. Two documents with the same id in one
    bulk call overwrite each other in submission order.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    document: T
    id: str | None = None


class BulkResponseItem(BaseModel):
    """The engine's outcome for a single document of a bulk call."""

    model_config = ConfigDict(frozen=True)

    id: str | None = None
    index: str
    version: int | None = None
    seq_no: int | None = None
    primary_term: int | None = None
    status: int | None = None
    forced_refresh: bool | None = None
    error_type: str | None = None
    error_reason: str | None = None

    @property
    def failed(self) -> bool:
        """Return True if the engine rejected this document."""
        return self.error_reason is not None or self.error_type is not None

    @classmethod
    def from_response(cls, item: dict[str, Any]) -> "BulkResponseItem":
        """Build an item from one entry of the bulk API's `items` list.

        Each entry is keyed by its action name, e.g. `{"index": {...}}`.
        """
        action = next(
            (k for k in ("index", "create", "update", "delete") if k in item),
            None,
        )
        meta = (item[action] if action else next(iter(item.values()), None)) or {}
        error = meta.get("error")
        if isinstance(error, dict):
            error_type = error.get("type")
            error_reason = error.get("reason") or error_type or "unknown error"
        elif error:
            error_type, error_reason = None, str(error)
        else:
            error_type, error_reason = None, None

        return cls(
            id=meta.get("_id"),
            index=meta.get("_index", ""),
            version=None if error else meta.get("_version"),
            seq_no=None if error else meta.get("_seq_no"),
            primary_term=None if error else meta.get("_primary_term"),
            status=meta.get("status"),
            forced_refresh=meta.get("forced_refresh"),
            error_type=error_type,
            error_reason=error_reason,
        )


class SearchResult(BaseModel, Generic[T]):
    """One page of decoded hits."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    documents: list[T] = Field(default_factory=list)
    total_hits: int = 0
    max_score: float = 0.0
    took_ms: int | None = None
