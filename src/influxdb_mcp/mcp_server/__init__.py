"""
influxdb_mcp.mcp_server package.

Entrypoint package for the InfluxDB MCP server. It exposes the FastMCP instance with all
handlers registered (`mcp_server`); the command-line entry point lives in `main`.

Usage:
    influxdb-mcp --transport stdio

See the project README for configuration details, available tools, and usage examples.
"""

from ._mcp import mcp_server

__all__ = ["mcp_server"]
