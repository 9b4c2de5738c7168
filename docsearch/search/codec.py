"""Serialization of document payloads to and from the engine's JSON."""

import hashlib
from functools import lru_cache
from typing import Any, TypeVar

import orjson
from pydantic import TypeAdapter

T = TypeVar("T")


@lru_cache(maxsize=None)
def _adapter(document_type: Any) -> TypeAdapter:
    return TypeAdapter(document_type)


def encode_document(document: Any) -> Any:
    """Return a JSON compatible representation of a document.

    Pydantic models, dataclasses, typed dicts and plain mappings are all
    accepted. Model and dataclass fields that are None are left out, while
    a plain mapping keeps its None values. Temporal values are rendered as
    ISO-8601 strings.
    """
    return _adapter(type(document)).dump_python(
        document, mode="json", by_alias=True, exclude_none=True
    )


def decode_document(source: Any, document_type: type[T]) -> T:
    """Validate a hit's `_source` into `document_type`.

    Unknown fields in the source are ignored unless the target type forbids
    extra fields itself.
    """
    return _adapter(document_type).validate_python(source)


def canonical_json(document: Any) -> bytes:
    """Return the encoded document with sorted keys, for stable hashing."""
    return orjson.dumps(encode_document(document), option=orjson.OPT_SORT_KEYS)


def content_hash(document: Any, length: int = 16) -> str:
    """Return a hex digest of a document's canonical JSON."""
    return hashlib.sha256(canonical_json(document)).hexdigest()[:length]


def pretty_json(value: Any) -> str:
    """Render a JSON value indented by two spaces, preserving key order."""
    return orjson.dumps(value, option=orjson.OPT_INDENT_2).decode("utf-8")
