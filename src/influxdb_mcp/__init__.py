"""
InfluxDB Model Context Protocol (MCP) server.

This package exposes the InfluxDB 2.x HTTP API as MCP resources, tools and prompts so that
LLM agents can discover organizations, buckets and measurements, run Flux queries, and
write or provision data.

Modules:
    - config: Configuration management (environment variables and optional JSON file)
    - client: Async InfluxDB HTTP client
    - formatters: Annotated CSV normalization for Flux query results
    - mcp_server: The FastMCP server, its tools, resources and prompts

Run the server with the ``influxdb-mcp`` console script.
"""

import logging

from ._version import version as __version__

__all__ = ["__version__"]

_LOGGER = logging.getLogger(__name__)
_LOGGER.addHandler(logging.NullHandler())
