"""
Shared Utilities - Internal Helper Functions.

Provides helpers used across the MCP tool and resource modules:
- Access to lifespan objects (config manager, InfluxDB client)
- Structured error responses
- JSON encoding of resource bodies

This module contains private helper functions not exposed as MCP tools.
"""

import json
import logging
from typing import Any

from mcp.server.fastmcp import Context

from influxdb_mcp._exceptions import InfluxDBRequestError, InternalError
from influxdb_mcp.client import InfluxDBClient
from influxdb_mcp.config import ConfigManager

_LOGGER = logging.getLogger(__name__)

UPSTREAM_ERROR_PREFIX = "InfluxDB request failed"
"""str: Message prefix identifying failures of the InfluxDB HTTP call itself."""


def _get_lifespan_item(context: Context, key: str) -> Any:
    """
    Fetch an object placed in the lifespan context by `app_lifespan`.

    Raises:
        InternalError: If the lifespan context does not contain ``key``.
    """
    try:
        return context.request_context.lifespan_context[key]
    except KeyError:
        raise InternalError(f"'{key}' is missing from the server lifespan context") from None


def _get_influx_client(context: Context) -> InfluxDBClient:
    """Return the InfluxDB client from the MCP context."""
    client: InfluxDBClient = _get_lifespan_item(context, "influx_client")
    return client


def _get_config_manager(context: Context) -> ConfigManager:
    """Return the ConfigManager from the MCP context."""
    config_manager: ConfigManager = _get_lifespan_item(context, "config_manager")
    return config_manager


def _error_response(function_name: str, error_msg: str) -> dict[str, object]:
    """
    Log and build the standard error response.

    Returns:
        dict: ``{'success': False, 'error': error_msg, 'isError': True}``
    """
    _LOGGER.error(f"[mcp_server:{function_name}] {error_msg}")
    return {"success": False, "error": error_msg, "isError": True}


def _exception_response(
    function_name: str, exc: Exception, action: str
) -> dict[str, object]:
    """
    Build the error response for an exception raised while handling a request.

    Upstream failures are reported with the `UPSTREAM_ERROR_PREFIX`; anything else is
    reported as ``"Error <action>: ..."`` so callers can tell the two apart.

    Args:
        function_name (str): Name of the calling handler, for logging.
        exc (Exception): The exception that was raised.
        action (str): Gerund phrase describing the failed action, e.g. ``"retrieving measurements"``.
    """
    if isinstance(exc, InfluxDBRequestError):
        return _error_response(function_name, f"{UPSTREAM_ERROR_PREFIX}: {exc}")
    _LOGGER.debug(f"[mcp_server:{function_name}] Unexpected error", exc_info=exc)
    return _error_response(function_name, f"Error {action}: {exc}")


def _json_text(payload: dict[str, object]) -> str:
    """Encode a resource body as JSON text."""
    return json.dumps(payload)
