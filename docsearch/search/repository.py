"""Repository binding a document type to a fixed index."""

import logging
from collections.abc import Sequence
from os import PathLike
from typing import Any, ClassVar, Generic, TypeVar

from docsearch.configs import settings
from docsearch.exceptions import BulkInsertError
from docsearch.search.codec import content_hash
from docsearch.search.models import BulkResponseItem, Document, IndexCoordinates, SearchResult
from docsearch.search.provider import ClientProvider
from docsearch.search.results import BulkFailure, IndexResult, MappingResult
from docsearch.search.service import SearchClientService

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SearchRepository(Generic[T]):
    """Insert, search and count documents of one type without repeating the index.

    Subclasses set `document_type` and `coordinates`. When `id_field` is set,
    a document's value for that field is its id; otherwise, and whenever the
    value is missing, `generate_document_id` supplies one.
    """

    document_type: ClassVar[type]
    coordinates: ClassVar[IndexCoordinates]
    id_field: ClassVar[str | None] = None

    def __init__(self, provider: ClientProvider) -> None:
        self.service = SearchClientService(provider)

    @property
    def index(self) -> str:
        """Return the index this repository writes to by default."""
        return self.coordinates.index

    def create_index(
        self, mapping_resource: str | PathLike, package: str | None = None
    ) -> IndexResult:
        """Create the bound index with its alias."""
        return self.service.create_index(self.coordinates, mapping_resource, package)

    def get_mapping(self) -> MappingResult:
        """Return the mapping of the bound index (or its pattern)."""
        return self.service.get_mapping(self.coordinates.mapping_target)

    def insert_documents(
        self, documents: Sequence[T], index: str | None = None, refresh: Any = None
    ) -> list[BulkResponseItem]:
        """Upsert documents and return one item per document, in order.

        Raises:
            BulkInsertError: If the bulk call failed as a whole.
        """
        envelopes = [
            Document(document=document, id=self.document_id(document, ordinal))
            for ordinal, document in enumerate(documents)
        ]
        result = self.service.bulk_upsert(envelopes, index or self.index, refresh=refresh)
        if isinstance(result, BulkFailure):
            raise BulkInsertError(result) from result.cause
        return result.items

    def search_documents(
        self,
        query: dict[str, Any] | None = None,
        size: int | None = None,
        from_: int = 0,
        index: str | None = None,
    ) -> SearchResult[T]:
        """Search the bound index, decoding hits into `document_type`."""
        return self.service.search(
            index or self.index,
            self.document_type,
            size=settings.search.default_size if size is None else size,
            from_=from_,
            query=query,
        )

    def count_documents(
        self, query: dict[str, Any] | None = None, index: str | None = None
    ) -> int:
        """Count documents of the bound index matching `query`."""
        return self.service.count(index or self.index, query)

    def document_id(self, document: T, ordinal: int) -> str:
        """Return the id a document is stored under."""
        if self.id_field:
            value = (
                document.get(self.id_field)
                if isinstance(document, dict)
                else getattr(document, self.id_field, None)
            )
            if value is not None:
                return str(value)
        return self.generate_document_id(document, ordinal)

    def generate_document_id(self, document: T, ordinal: int) -> str:
        """Return a fallback id from the document's content hash and its position.

        Unique within one batch, but the same content at another position gets
        another id, so re-submitting a reordered batch creates new documents.
        """
        return f"{content_hash(document)}_{ordinal}"
