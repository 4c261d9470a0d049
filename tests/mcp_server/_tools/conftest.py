"""Shared test fixtures and helpers for InfluxDB MCP tool and resource tests."""

from unittest.mock import AsyncMock, MagicMock

from influxdb_mcp.client import HttpResponse


class MockRequestContext:
    """Mock MCP request context for testing."""

    def __init__(self, lifespan_context):
        self.lifespan_context = lifespan_context


class MockContext:
    """Mock MCP context for testing."""

    def __init__(self, lifespan_context):
        self.request_context = MockRequestContext(lifespan_context)


def create_mock_influx_client(query_text=""):
    """Create a mock InfluxDBClient whose query() returns ``query_text``."""
    client = MagicMock()
    client.query = AsyncMock(return_value=HttpResponse(status=200, text=query_text))
    client.write = AsyncMock(return_value=HttpResponse(status=204, text=""))
    client.list_orgs = AsyncMock(return_value=[])
    client.list_buckets = AsyncMock(return_value=[])
    client.create_bucket = AsyncMock()
    client.create_org = AsyncMock()
    return client


def create_mock_config_manager(org="my-org"):
    """Create a mock ConfigManager returning a resolved configuration."""
    config_manager = MagicMock()
    config_manager.get_config = AsyncMock(
        return_value={
            "url": "http://localhost:8086",
            "token": "secret",
            "org": org,
            "timeout_seconds": 5.0,
        }
    )
    return config_manager
