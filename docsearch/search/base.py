"""Shared plumbing of the search service operation families."""

from elasticsearch import Elasticsearch

from docsearch.search.provider import ClientProvider


class SearchServiceBase:
    """Hold the client provider the operations run against."""

    def __init__(self, provider: ClientProvider) -> None:
        self._provider = provider

    @property
    def provider(self) -> ClientProvider:
        """Return the client provider."""
        return self._provider

    def get_client(self) -> Elasticsearch:
        """Return the shared Elasticsearch client.

        Raises:
            ConfigurationError: If the client can't be constructed.
        """
        return self._provider.get_client()
