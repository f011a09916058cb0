"""Shared test fixtures and configuration."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any
from unittest.mock import MagicMock

import pytest
import structlog
from elastic_transport import ApiResponseMeta, HttpHeaders, NodeConfig
from elasticsearch import ApiError, NotFoundError
from elasticsearch import ConnectionError as TransportConnectionError

from rubber.core import Rubber
from rubber.node import Node


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "integration: needs a running Elasticsearch")


def make_meta(status: int) -> ApiResponseMeta:
    return ApiResponseMeta(
        status=status,
        http_version="1.1",
        headers=HttpHeaders(),
        duration=0.0,
        node=NodeConfig("http", "localhost", 9200),
    )


def make_response(status: int = 200, body: Any = None) -> SimpleNamespace:
    """Stand-in for an ApiResponse: only `.meta.status` and `.body` are read."""
    return SimpleNamespace(meta=SimpleNamespace(status=status), body=body)


def make_api_error(status: int, body: Any = None) -> ApiError:
    cls = NotFoundError if status == 404 else ApiError
    return cls(message=f"status {status}", meta=make_meta(status), body=body or {})


class ClosedPoolError(Exception):
    """Shape of urllib3's error for a request on a closed pool."""


def make_pool_closed() -> TransportConnectionError:
    """A closed-pool failure wrapped the way the urllib3 node raises it."""
    err = ClosedPoolError("HTTPConnectionPool(host='localhost', port=9200): Pool is closed.")
    return TransportConnectionError(str(err), errors=(err,))


@pytest.fixture(autouse=True)
def _reset_structlog():
    structlog.reset_defaults()
    yield
    structlog.reset_defaults()


@pytest.fixture
def response():
    return make_response


@pytest.fixture
def api_error():
    return make_api_error


@pytest.fixture
def pool_closed():
    return make_pool_closed


@pytest.fixture
def node() -> MagicMock:
    return MagicMock(spec=Node)


@pytest.fixture
def es(node: MagicMock) -> Rubber:
    return Rubber(node)


@pytest.fixture
def sample_search_body() -> dict[str, Any]:
    return {
        "took": 3,
        "hits": {
            "total": {"value": 2, "relation": "eq"},
            "hits": [
                {"_index": "people", "_id": "a1", "_score": 1.0, "_source": {"name": "joe"}},
                {"_index": "people", "_id": "b2", "_score": 1.0, "_source": {"name": "ann"}},
            ],
        },
    }
