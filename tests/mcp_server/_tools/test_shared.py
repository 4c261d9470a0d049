"""
Tests for influxdb_mcp.mcp_server._tools.shared.
"""

import json

import pytest
from conftest import MockContext

from influxdb_mcp._exceptions import InfluxDBRequestError, InternalError
from influxdb_mcp.mcp_server._tools.shared import (
    UPSTREAM_ERROR_PREFIX,
    _error_response,
    _exception_response,
    _get_config_manager,
    _get_influx_client,
    _json_text,
)


def test_get_lifespan_items():
    client, config_manager = object(), object()
    context = MockContext({"influx_client": client, "config_manager": config_manager})

    assert _get_influx_client(context) is client
    assert _get_config_manager(context) is config_manager


def test_get_lifespan_item_missing():
    with pytest.raises(InternalError, match="'influx_client' is missing"):
        _get_influx_client(MockContext({}))


def test_error_response_logs(caplog):
    result = _error_response("my_tool", "something broke")

    assert result == {"success": False, "error": "something broke", "isError": True}
    assert any(
        "[mcp_server:my_tool] something broke" in r.getMessage() for r in caplog.records
    )


def test_exception_response_upstream():
    result = _exception_response(
        "my_tool", InfluxDBRequestError("GET /x failed: refused"), "doing things"
    )
    assert result["error"] == f"{UPSTREAM_ERROR_PREFIX}: GET /x failed: refused"


def test_exception_response_other():
    result = _exception_response("my_tool", ValueError("bad"), "doing things")
    assert result["error"] == "Error doing things: bad"


def test_json_text():
    assert json.loads(_json_text({"success": True, "n": [1]})) == {
        "success": True,
        "n": [1],
    }
