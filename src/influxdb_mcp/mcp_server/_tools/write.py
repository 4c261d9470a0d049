"""
Write MCP Tool - Line Protocol Ingestion.

Provides the write-data tool, which streams newline-delimited line protocol records into a
bucket.
"""

import logging

from mcp.server.fastmcp import Context

from influxdb_mcp.client import VALID_PRECISIONS
from influxdb_mcp.mcp_server._tools.mcp_server import mcp_server
from influxdb_mcp.mcp_server._tools.shared import (
    _error_response,
    _exception_response,
    _get_influx_client,
)

_LOGGER = logging.getLogger(__name__)


def _count_records(data: str) -> int:
    """Count non-blank, non-comment line protocol lines."""
    return sum(
        1
        for line in data.splitlines()
        if line.strip() and not line.lstrip().startswith("#")
    )


@mcp_server.tool(name="write-data")
async def write_data(
    context: Context,
    org: str,
    bucket: str,
    data: str,
    precision: str | None = None,
) -> dict:
    """
    MCP Tool: Stream newline-delimited line protocol records into a bucket.

    Use this after composing measurements to insert real telemetry, optionally controlling
    timestamp precision.

    Args:
        context (Context): The MCP context object.
        org (str): Organization name that owns the destination bucket (the same value returned
            by the orgs resource).
        bucket (str): Bucket name to receive the points. It must already exist; call
            create-bucket first if needed.
        data (str): One or more line protocol lines (measurement, tags, fields, timestamp)
            separated by newlines.
        precision (str, optional): Timestamp precision, one of "ns", "us", "ms", "s".
            Defaults to nanoseconds on the server.

    Returns:
        dict: Structured result object with keys:
            - 'success' (bool): True if InfluxDB accepted the write.
            - 'org' (str), 'bucket' (str): Where the data was written.
            - 'records' (int): Number of line protocol records sent.
            - 'precision' (str | None): The precision sent, if any.
            - 'error' (str, optional): Error message if the write failed.
            - 'isError' (bool, optional): Present and True if this is an error response.

    Example Successful Response:
        {'success': True, 'org': 'my-org', 'bucket': 'sensors', 'records': 2, 'precision': 's'}
    """
    _LOGGER.info(
        f"[mcp_server:write_data] Invoked: org='{org}', bucket='{bucket}', precision={precision}"
    )
    if precision is not None and precision not in VALID_PRECISIONS:
        return _error_response(
            "write_data",
            f"Invalid precision '{precision}'. Valid values: {', '.join(VALID_PRECISIONS)}",
        )
    records = _count_records(data)
    if records == 0:
        return _error_response(
            "write_data", "data must contain at least one line protocol record"
        )

    try:
        await _get_influx_client(context).write(org, bucket, data, precision)
        _LOGGER.info(
            f"[mcp_server:write_data] Wrote {records} records to bucket '{bucket}'"
        )
        return {
            "success": True,
            "org": org,
            "bucket": bucket,
            "records": records,
            "precision": precision,
        }
    except Exception as e:
        return _exception_response("write_data", e, "writing data")
