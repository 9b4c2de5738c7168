"""Unit tests for the index administration operations"""

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from elasticsearch import BadRequestError, ConnectionError, NotFoundError

from docsearch.exceptions import MappingResourceError, QueryError
from docsearch.search.models import IndexCoordinates
from docsearch.search.results import (
    ErrorKind,
    IndexFailure,
    IndexSuccess,
    MappingFailure,
    MappingSuccess,
)
from docsearch.search.service import SearchClientService
from tests.unit.types import ApiErrorFactory

DATA_DIR = Path(__file__).parents[2] / "data"
ORDERS_MAPPING = DATA_DIR / "orders_mapping.json"


@pytest.fixture
def coordinates() -> IndexCoordinates:
    """Return coordinates of an index with an alias."""
    return IndexCoordinates(index="orders", alias="orders-alias")


def test_create_index_success(
    service: SearchClientService, es_client: MagicMock, coordinates: IndexCoordinates
) -> None:
    """Verify that create_index sends the alias and mapping and reports the flags."""
    es_client.indices.create.return_value = {
        "acknowledged": True,
        "shards_acknowledged": True,
        "index": "orders",
    }

    result = service.create_index(coordinates, ORDERS_MAPPING)

    assert result == IndexSuccess(index="orders", acknowledged=True, shards_acknowledged=True)
    es_client.indices.create.assert_called_once_with(
        index="orders",
        aliases={"orders-alias": {}},
        mappings=json.loads(ORDERS_MAPPING.read_text()),
        settings=None,
    )


def test_create_index_without_alias_and_with_settings(
    service: SearchClientService, es_client: MagicMock
) -> None:
    """Verify a full index body passes settings through and no alias is sent."""
    es_client.indices.create.return_value = {"acknowledged": True, "index": "orders"}

    result = service.create_index(IndexCoordinates(index="orders"), DATA_DIR / "orders_index.json")

    assert isinstance(result, IndexSuccess)
    assert result.shards_acknowledged is False
    kwargs = es_client.indices.create.call_args.kwargs
    assert kwargs["aliases"] is None
    assert kwargs["settings"] == {"number_of_shards": 1, "number_of_replicas": 0}
    assert kwargs["mappings"]["properties"]["value"] == {"type": "integer"}


def test_create_index_missing_mapping_raises_before_request(
    service: SearchClientService, es_client: MagicMock, coordinates: IndexCoordinates
) -> None:
    """Verify that a missing mapping resource is raised, not wrapped in a result."""
    with pytest.raises(MappingResourceError):
        service.create_index(coordinates, DATA_DIR / "missing.json")

    es_client.indices.create.assert_not_called()


def test_create_index_engine_error(
    service: SearchClientService,
    es_client: MagicMock,
    coordinates: IndexCoordinates,
    api_error: ApiErrorFactory,
) -> None:
    """Verify that an engine error becomes a failure with reason and metadata."""
    exc = api_error(
        400,
        {
            "error": {
                "type": "resource_already_exists_exception",
                "reason": "index [orders/abc] already exists",
                "index": "orders",
            },
            "status": 400,
        },
        cls=BadRequestError,
    )
    es_client.indices.create.side_effect = exc

    result = service.create_index(coordinates, ORDERS_MAPPING)

    assert isinstance(result, IndexFailure)
    assert result.kind is ErrorKind.ENGINE
    assert result.message == "index [orders/abc] already exists"
    assert result.metadata == {
        "type": "resource_already_exists_exception",
        "index": "orders",
        "status": 400,
    }
    assert result.cause is exc


def test_create_index_io_error(
    service: SearchClientService, es_client: MagicMock, coordinates: IndexCoordinates
) -> None:
    """Verify that a connection failure becomes an I/O failure."""
    es_client.indices.create.side_effect = ConnectionError("Connection refused")

    result = service.create_index(coordinates, ORDERS_MAPPING)

    assert isinstance(result, IndexFailure)
    assert result.kind is ErrorKind.IO
    assert result.metadata is None


def test_get_mapping_pretty_prints_each_index(
    service: SearchClientService, es_client: MagicMock
) -> None:
    """Verify that one formatted mapping is returned per matching index, in order."""
    es_client.indices.get_mapping.return_value = {
        "orders-2": {"mappings": {"properties": {"value": {"type": "integer"}}}},
        "orders-1": {"mappings": {}},
    }

    result = service.get_mapping("orders-*")

    assert result == MappingSuccess(
        mappings=[
            '{\n  "properties": {\n    "value": {\n      "type": "integer"\n    }\n  }\n}',
            "{}",
        ]
    )
    es_client.indices.get_mapping.assert_called_once_with(index="orders-*")


def test_get_mapping_no_match_is_success(
    service: SearchClientService, es_client: MagicMock
) -> None:
    """Verify that a pattern matching nothing is still a success."""
    es_client.indices.get_mapping.return_value = {}

    assert service.get_mapping("nothing-*") == MappingSuccess(mappings=[])


def test_get_mapping_is_idempotent(service: SearchClientService, es_client: MagicMock) -> None:
    """Verify that repeated calls on an unchanged index return equal results."""
    es_client.indices.get_mapping.return_value = {"orders": {"mappings": {"dynamic": "strict"}}}

    first = service.get_mapping("orders")
    second = service.get_mapping("orders")

    assert first == second
    assert first is not second


def test_get_mapping_missing_index(
    service: SearchClientService, es_client: MagicMock, api_error: ApiErrorFactory
) -> None:
    """Verify that a missing index yields an engine failure."""
    es_client.indices.get_mapping.side_effect = api_error(
        404,
        {"error": {"type": "index_not_found_exception", "reason": "no such index [orders]"}},
        cls=NotFoundError,
    )

    result = service.get_mapping("orders")

    assert isinstance(result, MappingFailure)
    assert result.kind is ErrorKind.ENGINE
    assert result.message == "no such index [orders]"


def test_index_helpers(service: SearchClientService, es_client: MagicMock) -> None:
    """Verify exists, refresh and delete pass through to the indices client."""
    es_client.indices.exists.return_value = True
    es_client.indices.delete.return_value = {"acknowledged": True}

    assert service.index_exists("orders") is True
    service.refresh_index("orders")
    assert service.delete_index("orders") is True

    es_client.indices.exists.assert_called_once_with(index="orders")
    es_client.indices.refresh.assert_called_once_with(index="orders")
    es_client.indices.delete.assert_called_once_with(index="orders", ignore_unavailable=True)


def test_index_helpers_raise_query_error(
    service: SearchClientService, es_client: MagicMock
) -> None:
    """Verify helper failures are raised with their classification."""
    es_client.indices.refresh.side_effect = ConnectionError("Connection refused")

    with pytest.raises(QueryError) as exc_info:
        service.refresh_index("orders")

    assert exc_info.value.kind is ErrorKind.IO
    assert isinstance(exc_info.value.cause, ConnectionError)


def test_empty_response_body_is_failure(
    service: SearchClientService,
    es_client: MagicMock,
    coordinates: IndexCoordinates,
    api_error: ApiErrorFactory,
) -> None:
    """Verify that responses without a body give failures with the status as message."""
    es_client.indices.create.side_effect = api_error(503, "")
    es_client.indices.get_mapping.side_effect = api_error(502, b"")

    created = service.create_index(coordinates, ORDERS_MAPPING)
    mapping = service.get_mapping("orders")

    assert isinstance(created, IndexFailure)
    assert created.message == "HTTP 503 response"
    assert isinstance(mapping, MappingFailure)
    assert mapping.kind is ErrorKind.RESPONSE
    assert mapping.message == "HTTP 502 response"
