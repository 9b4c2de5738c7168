"""Module for test configurations for the integration test directory."""

import logging
from typing import Iterator

import pytest
from testcontainers.elasticsearch import ElasticSearchContainer

from docsearch.search.config import ConnectionConfig
from docsearch.search.service import SearchClientService

logger = logging.getLogger(__name__)

ENGINE_IMAGE = "docker.elastic.co/elasticsearch/elasticsearch:8.13.4"


@pytest.fixture(scope="session", name="connection_config")
def fixture_connection_config() -> Iterator[ConnectionConfig]:
    """Start a single node engine and return the configuration to reach it."""
    with ElasticSearchContainer(ENGINE_IMAGE) as es:
        yield ConnectionConfig(
            host=es.get_container_host_ip(),
            port=int(es.get_exposed_port(9200)),
            use_basic_auth=False,
        )


@pytest.fixture(name="service")
def fixture_service(connection_config: ConnectionConfig) -> Iterator[SearchClientService]:
    """Return a service connected to the engine container."""
    service = SearchClientService.from_config(connection_config)
    service.get_client().cluster.health(wait_for_status="yellow", timeout="10s")
    try:
        yield service
    finally:
        service.close()
