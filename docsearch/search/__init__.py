"""Search engine client: administration, queries, bulk ingestion and results."""

from docsearch.search.config import ConnectionConfig
from docsearch.search.models import BulkResponseItem, Document, IndexCoordinates, SearchResult
from docsearch.search.provider import ClientProvider, DefaultClientProvider
from docsearch.search.repository import SearchRepository
from docsearch.search.results import (
    BulkFailure,
    BulkResult,
    BulkSuccess,
    ErrorKind,
    IndexFailure,
    IndexResult,
    IndexSuccess,
    MappingFailure,
    MappingResult,
    MappingSuccess,
)
from docsearch.search.service import SearchClientService

__all__ = [
    "BulkFailure",
    "BulkResponseItem",
    "BulkResult",
    "BulkSuccess",
    "ClientProvider",
    "ConnectionConfig",
    "DefaultClientProvider",
    "Document",
    "ErrorKind",
    "IndexCoordinates",
    "IndexFailure",
    "IndexResult",
    "IndexSuccess",
    "MappingFailure",
    "MappingResult",
    "MappingSuccess",
    "SearchClientService",
    "SearchRepository",
    "SearchResult",
]
