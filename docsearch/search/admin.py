"""Index administration: create with alias, mapping lookup and small helpers."""

import logging
from os import PathLike
from typing import Any

from docsearch.exceptions import QueryError
from docsearch.search.base import SearchServiceBase
from docsearch.search.codec import pretty_json
from docsearch.search.errors import classify
from docsearch.search.mappings import load_mapping, split_index_body
from docsearch.search.models import IndexCoordinates
from docsearch.search.results import (
    IndexFailure,
    IndexResult,
    IndexSuccess,
    MappingFailure,
    MappingResult,
    MappingSuccess,
)

logger = logging.getLogger(__name__)


class IndexAdministration(SearchServiceBase):
    """Create indices and inspect their mappings."""

    def create_index(
        self,
        coordinates: IndexCoordinates,
        mapping_resource: str | PathLike,
        package: str | None = None,
    ) -> IndexResult:
        """Create an index with its alias and the mapping read from a resource.

        The acknowledged flags of a success describe whether the cluster
        accepted the index, not whether data is searchable yet.

        Raises:
            MappingResourceError: If the mapping resource can't be loaded. This
                happens before any request is sent.
        """
        mappings, index_settings = split_index_body(load_mapping(mapping_resource, package))
        aliases = {coordinates.alias: {}} if coordinates.alias else None

        client = self.get_client()
        try:
            res = client.indices.create(
                index=coordinates.index,
                aliases=aliases,
                mappings=mappings,
                settings=index_settings,
            )
        except Exception as e:
            error = classify(e)
            logger.warning(
                "Failed to create index",
                extra={"index": coordinates.index, "kind": error.kind, "reason": error.message},
            )
            return IndexFailure(
                kind=error.kind, message=error.message, metadata=error.metadata, cause=e
            )

        logger.info(
            "Created index",
            extra={"index": coordinates.index, "alias": coordinates.alias},
        )
        return IndexSuccess(
            index=res.get("index", coordinates.index),
            acknowledged=res.get("acknowledged"),
            shards_acknowledged=bool(res.get("shards_acknowledged", False)),
        )

    def get_mapping(self, index: str) -> MappingResult:
        """Return the pretty printed mapping of every index matching `index`.

        An index pattern can match several indices; an index without explicit
        mappings yields an empty JSON object, and a pattern matching nothing
        yields an empty list.
        """
        client = self.get_client()
        try:
            res = client.indices.get_mapping(index=index)
            mappings = [pretty_json((data or {}).get("mappings", {})) for data in res.values()]
        except Exception as e:
            error = classify(e)
            logger.warning(
                "Failed to fetch mapping",
                extra={"index": index, "kind": error.kind, "reason": error.message},
            )
            return MappingFailure(
                kind=error.kind, message=error.message, metadata=error.metadata, cause=e
            )

        return MappingSuccess(mappings=mappings)

    def index_exists(self, index: str) -> bool:
        """Return True if the index (or alias) exists."""
        return bool(self._call("exists", index=index))

    def refresh_index(self, index: str) -> None:
        """Refresh an index to make recent operations visible to search."""
        self._call("refresh", index=index)

    def delete_index(self, index: str, ignore_unavailable: bool = True) -> bool:
        """Delete an index.

        Returns:
            True if the delete request was acknowledged. False if the index did
            not exist and `ignore_unavailable` is True.
        """
        res = self._call("delete", index=index, ignore_unavailable=ignore_unavailable)
        return bool(res.get("acknowledged", False))

    def _call(self, method: str, **kwargs: Any) -> Any:
        client = self.get_client()
        try:
            return getattr(client.indices, method)(**kwargs)
        except Exception as e:
            error = classify(e)
            raise QueryError(error.kind, error.message, error.metadata, e) from e
