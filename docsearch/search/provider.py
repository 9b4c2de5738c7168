"""Owns the single Elasticsearch client handle of a process."""

import logging
import threading
from typing import Any, Protocol

from elasticsearch import Elasticsearch

from docsearch.exceptions import ConfigurationError
from docsearch.search.config import ConnectionConfig

logger = logging.getLogger(__name__)


class ClientProvider(Protocol):
    """Protocol for anything that can hand out an Elasticsearch client."""

    def get_client(self) -> Elasticsearch:  # pragma: no cover
        """Return the client, creating it on first use."""
        ...

    def close(self) -> None:  # pragma: no cover
        """Release the client and its connection pool."""
        ...


class DefaultClientProvider:
    """Lazily create and cache an Elasticsearch client for one endpoint.

    The first call to `get_client` builds the client; concurrent first calls
    are serialized so exactly one client is ever created.
    """

    def __init__(self, config: ConnectionConfig) -> None:
        self._config = config
        self._client: Elasticsearch | None = None
        self._lock = threading.Lock()

    @property
    def config(self) -> ConnectionConfig:
        """Return the connection config this provider was built with."""
        return self._config

    def create_client(self) -> Elasticsearch:
        """Create a new Elasticsearch client instance."""
        config = self._config
        options: dict[str, Any] = {
            "request_timeout": config.request_timeout_sec,
        }

        if config.has_credentials:
            options["basic_auth"] = (config.username, config.password)

        if config.use_ssl and not config.verify_certs:
            logger.warning(
                "TLS certificate verification is disabled, do not use outside development",
                extra={"host": config.host, "port": config.port},
            )
            options["verify_certs"] = False
            options["ssl_show_warn"] = False

        return Elasticsearch(
            hosts=[{"scheme": config.scheme, "host": config.host, "port": config.port}],
            **options,
        )

    def get_client(self) -> Elasticsearch:
        """Return the underlying Elasticsearch client, creating it if needed.

        Raises:
            ConfigurationError: If the client can't be constructed from the config.
        """
        client = self._client
        if client is not None:
            return client

        with self._lock:
            if self._client is None:
                try:
                    self._client = self.create_client()
                except (ValueError, TypeError) as e:
                    raise ConfigurationError(
                        f"Invalid search connection config for {self._config.url}: {e}"
                    ) from e
                logger.info(
                    "Initialized search client",
                    extra={"scheme": self._config.scheme, "host": self._config.host},
                )
            return self._client

    def close(self) -> None:
        """Close the client connection, the next `get_client` builds a new one."""
        with self._lock:
            if self._client is not None:
                self._client.close()
                self._client = None
