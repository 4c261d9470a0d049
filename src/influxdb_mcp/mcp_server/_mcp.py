"""
InfluxDB MCP Handlers Module.

Importing this module registers every MCP resource, tool and prompt on the shared FastMCP
instance.

Resources:
    - influxdb://orgs: List organizations.
    - influxdb://buckets: List buckets.
    - influxdb://bucket/{bucket_name}/measurements: List measurements in a bucket.
    - influxdb://query/{org_name}/{flux_query}: Run a URL-encoded Flux query.

Tools:
    - write-data: Write line protocol records to a bucket.
    - query-data: Run a Flux query and return normalized rows.
    - create-bucket: Create a bucket.
    - create-org: Create an organization.

Prompts:
    - flux-query-examples
    - line-protocol-guide

Return Types:
    - Tools return dict objects and never raise to the MCP layer: 'success': True on
      success; 'success': False, 'error': str and 'isError': True on failure.
    - Resources return JSON text following the same convention.
"""

from influxdb_mcp.mcp_server._tools import (  # noqa: F401
    prompts,
    provision,
    query,
    resources,
    write,
)
from influxdb_mcp.mcp_server._tools.mcp_server import mcp_server

__all__ = ["mcp_server"]
