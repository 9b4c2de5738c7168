"""Bulk ingestion: one round trip upserting a batch of documents."""

import logging
from collections.abc import Sequence
from typing import Any, Literal

from docsearch.search.base import SearchServiceBase
from docsearch.search.codec import encode_document
from docsearch.search.errors import classify
from docsearch.search.models import BulkResponseItem, Document
from docsearch.search.results import BulkFailure, BulkResult, BulkSuccess

logger = logging.getLogger(__name__)

Refresh = bool | Literal["true", "false", "wait_for"] | None


def build_operations(documents: Sequence[Document[Any]], index: str) -> list[dict[str, Any]]:
    """Return the action/document pairs of an `index` bulk request.

    Documents without an id get one assigned by the engine.
    """
    operations: list[dict[str, Any]] = []
    for doc in documents:
        action: dict[str, Any] = {"_index": index}
        if doc.id is not None:
            action["_id"] = doc.id
        operations.append({"index": action})
        operations.append(encode_document(doc.document))
    return operations


class BulkIngestion(SearchServiceBase):
    """Upsert batches of documents."""

    def bulk_upsert(
        self,
        documents: Sequence[Document[Any]],
        index: str,
        refresh: Refresh = None,
    ) -> BulkResult:
        """Upsert all documents into `index` with a single bulk request.

        A `BulkSuccess` only means the request completed. Documents the engine
        rejected keep their position in `items` with a null version and the
        engine's reason, so callers must inspect every item. A `BulkFailure` is
        returned when the request itself failed.
        """
        document_count = len(documents)
        if document_count == 0:
            return BulkSuccess(document_count=0, items=[])

        client = self.get_client()
        try:
            operations = build_operations(documents, index)
            logger.info(
                "Sending bulk request",
                extra={"index": index, "documents": document_count},
            )
            kwargs: dict[str, Any] = {"operations": operations}
            if refresh is not None:
                kwargs["refresh"] = refresh
            res = client.bulk(**kwargs)
            items = [BulkResponseItem.from_response(item) for item in res.get("items", [])]
        except Exception as e:
            error = classify(e)
            logger.error(
                "Bulk request failed",
                extra={
                    "index": index,
                    "documents": document_count,
                    "kind": error.kind,
                    "reason": error.message,
                },
            )
            return BulkFailure(
                document_count=document_count,
                warnings=error.warnings,
                kind=error.kind,
                message=error.message,
                cause=e,
            )

        logger.info(
            "Bulk request returned",
            extra={"index": index, "items": len(items), "errors": bool(res.get("errors"))},
        )
        if res.get("errors"):
            for item in items:
                if item.failed:
                    logger.warning(
                        f"Bulk error for document {item.id}: {item.error_reason}",
                        extra={"index": item.index, "id": item.id, "status": item.status},
                    )

        return BulkSuccess(document_count=document_count, items=items)
