"""Query execution: offset paginated search and count."""

import logging
from typing import Any, TypeVar

from docsearch.exceptions import QueryError
from docsearch.search.base import SearchServiceBase
from docsearch.search.codec import decode_document
from docsearch.search.errors import classify
from docsearch.search.models import SearchResult

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_SIZE = 1000


class QueryExecution(SearchServiceBase):
    """Run searches and counts against an index."""

    def search(
        self,
        index: str,
        document_type: type[T],
        size: int = DEFAULT_SIZE,
        from_: int = 0,
        query: dict[str, Any] | None = None,
    ) -> SearchResult[T]:
        """Search an index and decode every hit into `document_type`.

        Args:
            index: Index, alias or pattern to search.
            document_type: Type each hit's `_source` is decoded into.
            size: Maximum number of hits returned.
            from_: Zero based offset of the first hit. Pages are not taken from
                a snapshot, so concurrent writes can shift them.
            query: Engine query DSL; None matches all documents.

        Hits without a `_source` (e.g. excluded by source filtering) are left out.

        Raises:
            QueryError: If the request fails or a hit can't be decoded.
        """
        kwargs: dict[str, Any] = {"index": index, "size": size, "from_": from_}
        if query is not None:
            kwargs["query"] = query

        client = self.get_client()
        try:
            res = client.search(**kwargs)
            hits = res.get("hits", {})
            documents = [
                decode_document(hit["_source"], document_type)
                for hit in hits.get("hits", [])
                if hit.get("_source") is not None
            ]
        except Exception as e:
            error = classify(e)
            logger.warning(
                "Search failed",
                extra={"index": index, "kind": error.kind, "reason": error.message},
            )
            raise QueryError(error.kind, error.message, error.metadata, e) from e

        total = hits.get("total")
        total_hits = total.get("value", 0) if isinstance(total, dict) else (total or 0)
        return SearchResult(
            documents=documents,
            total_hits=total_hits,
            max_score=hits.get("max_score") or 0.0,
            took_ms=res.get("took"),
        )

    def count(self, index: str, query: dict[str, Any] | None = None) -> int:
        """Count the documents of an index matching `query` (all when None).

        Raises:
            QueryError: If the request fails.
        """
        kwargs: dict[str, Any] = {"index": index}
        if query is not None:
            kwargs["query"] = query

        client = self.get_client()
        try:
            res = client.count(**kwargs)
        except Exception as e:
            error = classify(e)
            logger.warning(
                "Count failed",
                extra={"index": index, "kind": error.kind, "reason": error.message},
            )
            raise QueryError(error.kind, error.message, error.metadata, e) from e

        return int(res.get("count", 0))
