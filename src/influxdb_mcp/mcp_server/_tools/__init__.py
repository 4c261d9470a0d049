"""
InfluxDB MCP Server Tools Package.

This package contains the MCP resources, tools and prompts organized by functional area.
Each module registers its handlers on the shared FastMCP instance at import time.

Modules:
    mcp_server: Server instance, lifespan and health check
    resources: Organization, bucket, measurement and query resources
    query: Flux query tool
    write: Line protocol write tool
    provision: Bucket and organization creation tools
    prompts: Flux and line protocol guidance prompts
    shared: Internal helpers (not MCP handlers)

All MCP handlers follow consistent patterns:
    - Return structured responses with 'success' and 'error' keys
    - Never raise exceptions to the MCP layer
    - Use async/await for all I/O operations
"""
