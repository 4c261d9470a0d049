"""
Tests for influxdb_mcp.mcp_server._tools.provision.
"""

from unittest.mock import AsyncMock

import pytest
from conftest import MockContext, create_mock_influx_client

from influxdb_mcp._exceptions import InfluxDBRequestError
from influxdb_mcp.mcp_server._tools.provision import create_bucket, create_org


def _context(client):
    return MockContext({"influx_client": client})


@pytest.mark.asyncio
async def test_create_bucket_success():
    client = create_mock_influx_client()
    client.create_bucket = AsyncMock(
        return_value={
            "id": "b1",
            "name": "sensors",
            "orgID": "o1",
            "retentionRules": [{"type": "expire", "everySeconds": 3600}],
        }
    )
    result = await create_bucket(_context(client), "sensors", "o1", 3600)

    assert result == {
        "success": True,
        "bucket": {"id": "b1", "name": "sensors", "orgID": "o1"},
    }
    client.create_bucket.assert_awaited_once_with("sensors", "o1", 3600)


@pytest.mark.asyncio
async def test_create_bucket_default_retention():
    client = create_mock_influx_client()
    client.create_bucket = AsyncMock(return_value={"id": "b1", "name": "s", "orgID": "o1"})
    await create_bucket(_context(client), "s", "o1")

    client.create_bucket.assert_awaited_once_with("s", "o1", None)


@pytest.mark.asyncio
async def test_create_bucket_negative_retention():
    client = create_mock_influx_client()
    result = await create_bucket(_context(client), "s", "o1", -1)

    assert result["success"] is False
    assert result["error"] == "retentionPeriodSeconds must not be negative"
    client.create_bucket.assert_not_called()


@pytest.mark.asyncio
async def test_create_bucket_conflict():
    client = create_mock_influx_client()
    client.create_bucket = AsyncMock(
        side_effect=InfluxDBRequestError(
            "POST /api/v2/buckets returned status 422: bucket with name sensors already exists",
            status=422,
        )
    )
    result = await create_bucket(_context(client), "sensors", "o1")

    assert result["isError"] is True
    assert result["error"] == (
        "InfluxDB request failed: POST /api/v2/buckets returned status 422: "
        "bucket with name sensors already exists"
    )


@pytest.mark.asyncio
async def test_create_org_success():
    client = create_mock_influx_client()
    client.create_org = AsyncMock(return_value={"id": "o9", "name": "lab"})
    result = await create_org(_context(client), "lab")

    assert result == {
        "success": True,
        "org": {"id": "o9", "name": "lab", "description": ""},
    }
    client.create_org.assert_awaited_once_with("lab", None)


@pytest.mark.asyncio
async def test_create_org_with_description():
    client = create_mock_influx_client()
    client.create_org = AsyncMock(
        return_value={"id": "o9", "name": "lab", "description": "experiments"}
    )
    result = await create_org(_context(client), "lab", "experiments")

    assert result["org"]["description"] == "experiments"
    client.create_org.assert_awaited_once_with("lab", "experiments")


@pytest.mark.asyncio
async def test_create_org_unexpected_failure():
    client = create_mock_influx_client()
    client.create_org = AsyncMock(side_effect=KeyError("id"))
    result = await create_org(_context(client), "lab")

    assert result["success"] is False
    assert result["error"].startswith("Error creating organization: ")
