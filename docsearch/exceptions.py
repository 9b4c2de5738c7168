"""docsearch specific exceptions."""

from typing import Any


class ConfigurationError(Exception):
    """Raised when caller supplied configuration or resources are invalid.

    These are programmer errors and are never wrapped into a result value.
    """


class MappingResourceError(ConfigurationError):
    """Raised when an index mapping resource can't be located or parsed."""

    pass


class SearchBackendError(Exception):
    """Error specific to calls against the search engine."""


class QueryError(SearchBackendError):
    """Raised when a search, count or index helper call fails.

    Carries the same classification as the failure result variants.
    """

    def __init__(
        self,
        kind: str,
        message: str,
        metadata: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.metadata = metadata
        self.cause = cause

    def __str__(self):
        return f"{self.kind}: {self.message}"


class BulkInsertError(SearchBackendError):
    """Raised by the repository when a bulk call fails as a whole."""

    def __init__(self, failure: Any):
        super().__init__(f"Bulk insert failed: {failure.message}")
        self.failure = failure
