# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""Module for test configurations for the unit test directory."""

from typing import Any
from unittest.mock import MagicMock

import pytest
from elastic_transport import ApiResponseMeta, HttpHeaders, NodeConfig
from elasticsearch import ApiError

from docsearch.search.provider import DefaultClientProvider
from docsearch.search.service import SearchClientService
from tests.unit.types import ApiErrorFactory


@pytest.fixture(name="es_client")
def fixture_es_client() -> MagicMock:
    """Return a mocked Elasticsearch client"""
    client = MagicMock(name="ElasticsearchClient")
    client.indices = MagicMock(name="IndicesClient")
    return client


@pytest.fixture(name="provider")
def fixture_provider(es_client: MagicMock) -> MagicMock:
    """Return a mocked client provider handing out the mocked client."""
    provider = MagicMock(spec=DefaultClientProvider)
    provider.get_client.return_value = es_client
    return provider


@pytest.fixture(name="service")
def fixture_service(provider: MagicMock) -> SearchClientService:
    """Return a SearchClientService backed by the mocked provider."""
    return SearchClientService(provider)


@pytest.fixture(scope="session", name="api_error")
def fixture_api_error() -> ApiErrorFactory:
    """Return a function that builds an ApiError for a given status and body."""

    def api_error(
        status: int,
        body: Any,
        headers: dict[str, str] | None = None,
        cls: type[ApiError] = ApiError,
    ) -> ApiError:
        meta = ApiResponseMeta(
            status=status,
            http_version="1.1",
            headers=HttpHeaders(headers or {}),
            duration=0.01,
            node=NodeConfig("http", "localhost", 9200),
        )
        return cls(message=f"HTTP {status}", meta=meta, body=body)

    return api_error
