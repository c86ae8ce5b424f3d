"""Test configuration for the Elasticsearch connector package."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from orm_es_connector import (
    ElasticsearchConnectionManager,
    ElasticsearchConnector,
    ElasticsearchSettings,
)


def make_mock_client() -> MagicMock:
    """Stand-in for AsyncElasticsearch with every API used by the connector."""
    client = MagicMock()
    client.search = AsyncMock(return_value={"hits": {"hits": []}})
    client.get = AsyncMock(return_value={"found": False})
    client.exists = AsyncMock(return_value=True)
    client.count = AsyncMock(return_value={"count": 0})
    client.create = AsyncMock(return_value={"_id": "1", "result": "created"})
    client.index = AsyncMock(return_value={"_id": "generated", "result": "created"})
    client.update = AsyncMock(return_value={"_id": "1", "result": "updated"})
    client.delete = AsyncMock(return_value={"_id": "1", "result": "deleted"})
    client.delete_by_query = AsyncMock(return_value={"deleted": 0})
    client.ping = AsyncMock(return_value=True)
    client.close = AsyncMock()
    client.indices.exists = AsyncMock(return_value=True)
    client.indices.create = AsyncMock(return_value={"acknowledged": True})
    client.indices.put_mapping = AsyncMock(return_value={"acknowledged": True})
    return client


@pytest.fixture
def mock_client():
    return make_mock_client()


@pytest.fixture
def settings():
    return ElasticsearchSettings(index="library", default_size=10)


@pytest.fixture
def mock_connection(settings, mock_client):
    """Connection manager that is already 'connected' to the mock client."""
    connection = ElasticsearchConnectionManager(
        settings, client_factory=lambda **_: mock_client
    )
    connection._client = mock_client
    return connection


@pytest.fixture
def connector(settings, mock_connection):
    """Connector with a Book model defined."""
    conn = ElasticsearchConnector(settings, connection=mock_connection)
    conn.define(
        "Book",
        {"id": str, "title": str, "pages": int, "tags": [str], "meta": dict},
    )
    return conn
