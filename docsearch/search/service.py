"""The search client service."""

from docsearch.search.admin import IndexAdministration
from docsearch.search.bulk import BulkIngestion
from docsearch.search.config import ConnectionConfig
from docsearch.search.provider import DefaultClientProvider
from docsearch.search.query import QueryExecution


class SearchClientService(IndexAdministration, QueryExecution, BulkIngestion):
    """Index administration, query execution and bulk ingestion over one endpoint."""

    @classmethod
    def from_config(cls, config: ConnectionConfig) -> "SearchClientService":
        """Return a service backed by a new `DefaultClientProvider`."""
        return cls(DefaultClientProvider(config))

    def close(self) -> None:
        """Close the provider's client."""
        self.provider.close()

