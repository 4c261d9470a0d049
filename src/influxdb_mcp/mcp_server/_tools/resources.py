"""
InfluxDB MCP Resources - Organizations, Buckets, Measurements and Queries.

Provides MCP resources for discovering what an InfluxDB instance contains:
- influxdb://orgs: All organizations visible to the token
- influxdb://buckets: All buckets visible to the token
- influxdb://bucket/{bucket_name}/measurements: Measurement names in a bucket
- influxdb://query/{org_name}/{flux_query}: Result rows of a URL-encoded Flux query

Every resource body is a JSON document. Failures are JSON documents too, of the form
``{"success": false, "error": "...", "isError": true}``; nothing is raised to the MCP layer.
"""

import logging
from urllib.parse import unquote

from mcp.server.fastmcp import Context

from influxdb_mcp import formatters
from influxdb_mcp.mcp_server._tools.mcp_server import mcp_server
from influxdb_mcp.mcp_server._tools.shared import (
    _error_response,
    _exception_response,
    _get_config_manager,
    _get_influx_client,
    _json_text,
)

_LOGGER = logging.getLogger(__name__)

MEASUREMENT_COLUMN = "_value"
"""str: Column of the schema.measurements() result holding the measurement names."""


def _current_context() -> Context:
    """Return the MCP context of the request being served."""
    return mcp_server.get_context()


def _flux_string(value: str) -> str:
    """Quote ``value`` as a Flux string literal."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _measurements_query(bucket_name: str) -> str:
    return (
        'import "influxdata/influxdb/schema"\n\n'
        f"schema.measurements(bucket: {_flux_string(bucket_name)})"
    )


@mcp_server.resource(
    "influxdb://orgs",
    name="orgs",
    description="List all organizations in the InfluxDB instance.",
    mime_type="application/json",
)
async def list_organizations() -> str:
    """
    MCP Resource: List organizations.

    Returns:
        str: JSON ``{"success": true, "orgs": [{"id", "name", "description"}, ...]}``,
            or an error document.
    """
    _LOGGER.info("[mcp_server:list_organizations] Invoked")
    try:
        client = _get_influx_client(_current_context())
        orgs = await client.list_orgs()
        result = [
            {
                "id": org.get("id"),
                "name": org.get("name"),
                "description": org.get("description", ""),
            }
            for org in orgs
        ]
        _LOGGER.info(f"[mcp_server:list_organizations] Found {len(result)} organizations")
        return _json_text({"success": True, "orgs": result})
    except Exception as e:
        return _json_text(
            _exception_response("list_organizations", e, "listing organizations")
        )


@mcp_server.resource(
    "influxdb://buckets",
    name="buckets",
    description="List all buckets in the InfluxDB instance.",
    mime_type="application/json",
)
async def list_buckets() -> str:
    """
    MCP Resource: List buckets.

    Returns:
        str: JSON ``{"success": true, "buckets": [{"id", "name", "orgID", "retentionPeriod"}, ...]}``,
            where retentionPeriod is in seconds (0 means infinite), or an error document.
    """
    _LOGGER.info("[mcp_server:list_buckets] Invoked")
    try:
        client = _get_influx_client(_current_context())
        buckets = await client.list_buckets()
        result = []
        for bucket in buckets:
            rules = bucket.get("retentionRules") or []
            result.append(
                {
                    "id": bucket.get("id"),
                    "name": bucket.get("name"),
                    "orgID": bucket.get("orgID"),
                    "retentionPeriod": rules[0].get("everySeconds", 0) if rules else 0,
                }
            )
        _LOGGER.info(f"[mcp_server:list_buckets] Found {len(result)} buckets")
        return _json_text({"success": True, "buckets": result})
    except Exception as e:
        return _json_text(_exception_response("list_buckets", e, "listing buckets"))


@mcp_server.resource(
    "influxdb://bucket/{bucket_name}/measurements",
    name="bucket-measurements",
    description="List the measurement names stored in a bucket of the default organization.",
    mime_type="application/json",
)
async def bucket_measurements(bucket_name: str) -> str:
    """
    MCP Resource: List measurements in a bucket.

    Runs ``schema.measurements()`` for the bucket in the configured default organization and
    extracts the ``_value`` column of the annotated CSV response.

    A response without data rows or without a ``_value`` column yields an empty list; it is
    not an error.

    Args:
        bucket_name (str): Name of the bucket.

    Returns:
        str: JSON ``{"success": true, "bucket": ..., "measurements": [...]}`` or an error
            document. Upstream failures carry the "InfluxDB request failed" prefix; failures
            while processing the response carry "Error retrieving measurements".
    """
    bucket_name = unquote(bucket_name)
    _LOGGER.info(f"[mcp_server:bucket_measurements] Invoked for bucket '{bucket_name}'")
    try:
        context = _current_context()
        config = await _get_config_manager(context).get_config()
        org = config.get("org")
        if not org:
            return _json_text(
                _error_response(
                    "bucket_measurements",
                    "INFLUXDB_ORG environment variable is not set",
                )
            )

        response = await _get_influx_client(context).query(
            _measurements_query(bucket_name), org
        )
        _LOGGER.debug(
            f"[mcp_server:bucket_measurements] Response status {response.status}, {len(response.text)} chars"
        )
        measurements = formatters.extract_column_values(
            response.text, MEASUREMENT_COLUMN
        )
        _LOGGER.info(
            f"[mcp_server:bucket_measurements] Found {len(measurements)} measurements in '{bucket_name}'"
        )
        return _json_text(
            {"success": True, "bucket": bucket_name, "measurements": measurements}
        )
    except Exception as e:
        return _json_text(
            _exception_response("bucket_measurements", e, "retrieving measurements")
        )


@mcp_server.resource(
    "influxdb://query/{org_name}/{flux_query}",
    name="query",
    description="Run a URL-encoded Flux query in an organization and return the result rows.",
    mime_type="application/json",
)
async def execute_query(org_name: str, flux_query: str) -> str:
    """
    MCP Resource: Run a Flux query.

    Args:
        org_name (str): Organization name (URL-encoded).
        flux_query (str): Flux query text (URL-encoded).

    Returns:
        str: JSON ``{"success": true, "org", "query", "columns", "rows", "row_count"}`` where
            rows are mappings from column name to raw field value, or an error document.
    """
    org_name = unquote(org_name)
    flux_query = unquote(flux_query)
    _LOGGER.info(f"[mcp_server:execute_query] Invoked for org '{org_name}'")
    try:
        response = await _get_influx_client(_current_context()).query(
            flux_query, org_name
        )
        rows = formatters.parse_rows(response.text)
        return _json_text(
            {
                "success": True,
                "org": org_name,
                "query": flux_query,
                "columns": formatters.parse_columns(response.text),
                "rows": rows,
                "row_count": len(rows),
            }
        )
    except Exception as e:
        return _json_text(
            _exception_response("execute_query", e, "processing query result")
        )
