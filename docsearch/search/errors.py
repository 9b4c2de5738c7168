"""Map exceptions raised by the Elasticsearch client onto `ErrorKind`."""

from dataclasses import dataclass, field
from typing import Any

import orjson
from elasticsearch import ApiError, SerializationError, TransportError

from docsearch.search.results import ErrorKind

# Fields of an engine error body that are already carried by the message or
# are too noisy to keep as metadata.
_ERROR_BODY_EXCLUDES = frozenset({"reason", "root_cause", "stack_trace", "suppressed"})


@dataclass(frozen=True)
class ClassifiedError:
    """A failure flattened into what the result variants carry."""

    kind: ErrorKind
    message: str
    metadata: dict[str, Any] | None = None
    warnings: list[str] = field(default_factory=list)


def _engine_error(body: Any) -> dict[str, Any] | None:
    """Return the structured `error` object of a response body, if it has one."""
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and (error.get("reason") or error.get("type")):
            return error
    return None


def _raw_body(exc: ApiError) -> str:
    body = exc.body
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    if isinstance(body, str):
        if body.strip():
            return body
    elif body:
        return orjson.dumps(body).decode("utf-8")
    return f"HTTP {exc.status_code} response"


def response_warnings(exc: BaseException) -> list[str]:
    """Return the `Warning` headers of the response behind an API error."""
    meta = getattr(exc, "meta", None)
    headers = getattr(meta, "headers", None)
    if not headers:
        return []
    warning = headers.get("warning")
    if not warning:
        return []
    return [warning] if isinstance(warning, str) else list(warning)


def classify(exc: BaseException) -> ClassifiedError:
    """Classify an exception into exactly one `ErrorKind`.

    Checked in order: a status coded response without a structured error
    body, an engine reported error, a connection level failure, anything else.
    """
    if isinstance(exc, ApiError):
        error = _engine_error(exc.body)
        if error is None:
            return ClassifiedError(
                kind=ErrorKind.RESPONSE,
                message=_raw_body(exc),
                metadata={"status": exc.status_code},
                warnings=response_warnings(exc),
            )

        metadata = {k: v for k, v in error.items() if k not in _ERROR_BODY_EXCLUDES}
        metadata["status"] = exc.status_code
        return ClassifiedError(
            kind=ErrorKind.ENGINE,
            message=str(error.get("reason") or error.get("type")),
            metadata=metadata,
            warnings=response_warnings(exc),
        )

    if isinstance(exc, TransportError) and not isinstance(exc, SerializationError):
        return ClassifiedError(kind=ErrorKind.IO, message=str(exc) or "I/O error")

    if isinstance(exc, OSError):
        return ClassifiedError(kind=ErrorKind.IO, message=str(exc) or "I/O error")

    return ClassifiedError(
        kind=ErrorKind.UNKNOWN,
        message=str(exc) or f"Unknown error ({type(exc).__name__})",
    )
