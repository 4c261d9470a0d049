"""
Query MCP Tool - Run Flux Queries.

Provides the query-data tool, which runs a Flux query in an organization and returns the
result either as normalized rows or as the raw annotated CSV.
"""

import logging

from mcp.server.fastmcp import Context

from influxdb_mcp import formatters
from influxdb_mcp.mcp_server._tools.mcp_server import mcp_server
from influxdb_mcp.mcp_server._tools.shared import (
    _error_response,
    _exception_response,
    _get_influx_client,
)

_LOGGER = logging.getLogger(__name__)


@mcp_server.tool(name="query-data")
async def query_data(
    context: Context, org: str, query: str, format: str = "json-row"
) -> dict:
    """
    MCP Tool: Execute a Flux query inside an organization to inspect measurement schemas,
    run aggregations, or validate recently written data.

    InfluxDB answers Flux queries with annotated CSV. This tool strips the annotation rows,
    detects the header and returns the data rows in the requested format.

    AI Agent Usage:
    - Use format "json-row" (default) to get one object per result row
    - Use format "json-column" for column-oriented data (one list of values per column)
    - Use format "csv" only when you need the raw annotated CSV
    - All values are strings exactly as InfluxDB returned them
    - A query with no results returns success with row_count 0

    Args:
        context (Context): The MCP context object.
        org (str): Organization whose buckets the query should target (exact name, not ID).
        query (str): Flux query text. Multi-line strings are supported.
        format (str, optional): "json-row", "json-column" or "csv". Defaults to "json-row".

    Returns:
        dict: Structured result object with keys:
            - 'success' (bool): True if the query ran and the result was processed.
            - 'org' (str): The organization the query ran in.
            - 'format' (str): The format of 'data'.
            - 'columns' (list[str]): Trimmed header names of the result.
            - 'row_count' (int): Number of data rows.
            - 'data' (list[dict] | dict | str): The result in the requested format.
            - 'error' (str, optional): Error message if the operation failed.
            - 'isError' (bool, optional): Present and True if this is an error response.

    Example Successful Response:
        {
            'success': True,
            'org': 'my-org',
            'format': 'json-row',
            'columns': ['', 'result', 'table', '_value'],
            'row_count': 1,
            'data': [{'': '', 'result': '_result', 'table': '0', '_value': 'cpu'}]
        }

    Example Error Response:
        {'success': False, 'error': 'InfluxDB request failed: POST /api/v2/query returned status 400: ...', 'isError': True}
    """
    _LOGGER.info(f"[mcp_server:query_data] Invoked: org='{org}', format='{format}'")
    if format not in formatters.VALID_FORMATS:
        return _error_response(
            "query_data",
            f"Invalid format '{format}'. Valid formats: {', '.join(sorted(formatters.VALID_FORMATS))}",
        )

    try:
        response = await _get_influx_client(context).query(query, org)
        actual_format, data = formatters.format_query_result(response.text, format)
        row_count = len(formatters.parse_rows(response.text))
        _LOGGER.info(f"[mcp_server:query_data] Query returned {row_count} rows")
        return {
            "success": True,
            "org": org,
            "format": actual_format,
            "columns": formatters.parse_columns(response.text),
            "row_count": row_count,
            "data": data,
        }
    except Exception as e:
        return _exception_response("query_data", e, "processing query result")
