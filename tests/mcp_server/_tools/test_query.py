"""
Tests for influxdb_mcp.mcp_server._tools.query.
"""

from unittest.mock import AsyncMock

import pytest
from conftest import MockContext, create_mock_influx_client

from influxdb_mcp._exceptions import InfluxDBRequestError
from influxdb_mcp.mcp_server._tools.query import query_data

CSV = (
    "#datatype,string,long,dateTime:RFC3339,double,string\r\n"
    "#group,false,false,false,false,true\r\n"
    "#default,_result,,,,\r\n"
    ",result,table,_time,_value,_measurement\r\n"
    ",,0,2024-01-01T00:00:00Z,21.5,temperature\r\n"
    ",,0,2024-01-01T00:01:00Z,21.7,temperature\r\n"
)


def _context(client):
    return MockContext({"influx_client": client})


@pytest.mark.asyncio
async def test_query_data_json_row_default():
    client = create_mock_influx_client(CSV)
    result = await query_data(_context(client), "my-org", "from(bucket: \"b\")")

    assert result["success"] is True
    assert result["org"] == "my-org"
    assert result["format"] == "json-row"
    assert result["columns"] == ["", "result", "table", "_time", "_value", "_measurement"]
    assert result["row_count"] == 2
    assert result["data"][0]["_value"] == "21.5"
    assert result["data"][1]["_time"] == "2024-01-01T00:01:00Z"
    client.query.assert_awaited_once_with('from(bucket: "b")', "my-org")


@pytest.mark.asyncio
async def test_query_data_json_column():
    client = create_mock_influx_client(CSV)
    result = await query_data(_context(client), "my-org", "q", format="json-column")

    assert result["format"] == "json-column"
    assert result["data"]["_value"] == ["21.5", "21.7"]
    assert result["data"]["_measurement"] == ["temperature", "temperature"]


@pytest.mark.asyncio
async def test_query_data_csv_returns_raw_text():
    client = create_mock_influx_client(CSV)
    result = await query_data(_context(client), "my-org", "q", format="csv")

    assert result["format"] == "csv"
    assert result["data"] == CSV
    assert result["row_count"] == 2


@pytest.mark.asyncio
async def test_query_data_empty_result():
    client = create_mock_influx_client("\r\n")
    result = await query_data(_context(client), "my-org", "q")

    assert result["success"] is True
    assert result["row_count"] == 0
    assert result["columns"] == []
    assert result["data"] == []


@pytest.mark.asyncio
async def test_query_data_invalid_format():
    client = create_mock_influx_client(CSV)
    result = await query_data(_context(client), "my-org", "q", format="xml")

    assert result == {
        "success": False,
        "error": "Invalid format 'xml'. Valid formats: csv, json-column, json-row",
        "isError": True,
    }
    client.query.assert_not_called()


@pytest.mark.asyncio
async def test_query_data_upstream_failure():
    client = create_mock_influx_client()
    client.query = AsyncMock(
        side_effect=InfluxDBRequestError(
            "POST /api/v2/query returned status 400: error @1:1-1:5: undefined identifier",
            status=400,
        )
    )
    result = await query_data(_context(client), "my-org", "bad(")

    assert result["success"] is False
    assert result["isError"] is True
    assert result["error"].startswith("InfluxDB request failed: POST /api/v2/query")


@pytest.mark.asyncio
async def test_query_data_missing_client():
    result = await query_data(MockContext({}), "my-org", "q")

    assert result["success"] is False
    assert result["error"].startswith("Error processing query result: ")
    assert "influx_client" in result["error"]
