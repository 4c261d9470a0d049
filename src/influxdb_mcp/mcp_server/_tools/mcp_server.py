"""
MCP Server Infrastructure - FastMCP Server Instance and Lifespan.

Provides core MCP server infrastructure:
- mcp_server: The FastMCP server instance all handlers register on
- app_lifespan: Loads configuration and creates the InfluxDB client at startup
- health_check: ``GET /health`` for the HTTP transports
"""

import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from mcp.server.fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import JSONResponse

from influxdb_mcp.client import create_client
from influxdb_mcp.config import ConfigManager, redact_config

_LOGGER = logging.getLogger(__name__)

mcp_host: str = os.environ.get("INFLUXDB_MCP_HOST", "127.0.0.1")
"""
str: The host to bind the HTTP transports to. Defaults to 127.0.0.1 (localhost).
Set INFLUXDB_MCP_HOST to '0.0.0.0' for external access.
"""

mcp_port: int = int(os.environ.get("INFLUXDB_MCP_PORT", "3000"))
"""
int: The port to bind the HTTP transports to. Defaults to 3000.
"""


@asynccontextmanager
async def app_lifespan(server: FastMCP) -> AsyncIterator[dict[str, object]]:
    """
    Async context manager for the FastMCP server application lifespan.

    Startup:
      - Creates a ConfigManager and loads the configuration, so a missing token or invalid
        config file stops the server before it accepts requests.
      - Creates the InfluxDBClient shared by all handlers.

    Args:
        server (FastMCP): The FastMCP server instance (required by the FastMCP lifespan API).

    Yields:
        dict[str, object]: Context dictionary available to handlers via
            ``context.request_context.lifespan_context``:
            - 'config_manager' (ConfigManager)
            - 'influx_client' (InfluxDBClient)
    """
    _LOGGER.info(f"[mcp_server:app_lifespan] Starting MCP server '{server.name}'")
    try:
        config_manager = ConfigManager()

        _LOGGER.info("[mcp_server:app_lifespan] Loading configuration...")
        config = await config_manager.get_config()
        _LOGGER.info(
            f"[mcp_server:app_lifespan] Configuration loaded: {redact_config(config)}"
        )

        influx_client = create_client(config)

        yield {
            "config_manager": config_manager,
            "influx_client": influx_client,
        }
    finally:
        _LOGGER.info(f"[mcp_server:app_lifespan] MCP server '{server.name}' shut down.")


mcp_server = FastMCP(
    "influxdb-mcp",
    host=mcp_host,
    port=mcp_port,
    lifespan=app_lifespan,
    stateless_http=True,
)
"""
FastMCP Server Instance for the InfluxDB MCP server.

All resources, tools and prompts in the sibling modules register on this object through its
decorators. Streamable HTTP runs stateless: every request is handled independently.
This object should not be instantiated more than once per process.
"""


@mcp_server.custom_route("/health", methods=["GET"])  # type: ignore[misc]
async def health_check(request: Request) -> JSONResponse:
    """
    Health check endpoint for liveness and readiness probes.

    Returns:
        JSONResponse: HTTP 200 with body ``{"status": "ok"}``.
    """
    return JSONResponse({"status": "ok"})
