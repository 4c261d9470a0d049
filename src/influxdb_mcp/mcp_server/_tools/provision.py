"""
Provisioning MCP Tools - Buckets and Organizations.

Provides MCP tools that create InfluxDB resources:
- create-bucket: Create a bucket under an organization
- create-org: Create an organization
"""

import logging

from mcp.server.fastmcp import Context

from influxdb_mcp.mcp_server._tools.mcp_server import mcp_server
from influxdb_mcp.mcp_server._tools.shared import (
    _error_response,
    _exception_response,
    _get_influx_client,
)

_LOGGER = logging.getLogger(__name__)


@mcp_server.tool(name="create-bucket")
async def create_bucket(
    context: Context,
    name: str,
    orgID: str,
    retentionPeriodSeconds: int | None = None,
) -> dict:
    """
    MCP Tool: Provision a new bucket under an organization so that subsequent write-data
    calls have a destination.

    Args:
        context (Context): The MCP context object.
        name (str): Bucket name. Follow InfluxDB naming rules (alphanumeric, dashes, underscores).
        orgID (str): Organization ID that will own the bucket. Retrieve it from the orgs
            resource or the create-org result.
        retentionPeriodSeconds (int, optional): Retention duration in seconds. Omit for
            infinite retention.

    Returns:
        dict: Structured result object with keys:
            - 'success' (bool): True if the bucket was created.
            - 'bucket' (dict): 'id', 'name' and 'orgID' of the new bucket.
            - 'error' (str, optional): Error message if creation failed.
            - 'isError' (bool, optional): Present and True if this is an error response.

    Example Successful Response:
        {'success': True, 'bucket': {'id': '0a1b2c', 'name': 'sensors', 'orgID': '9f8e7d'}}
    """
    _LOGGER.info(f"[mcp_server:create_bucket] Invoked: name='{name}', orgID='{orgID}'")
    if retentionPeriodSeconds is not None and retentionPeriodSeconds < 0:
        return _error_response(
            "create_bucket", "retentionPeriodSeconds must not be negative"
        )

    try:
        bucket = await _get_influx_client(context).create_bucket(
            name, orgID, retentionPeriodSeconds
        )
        _LOGGER.info(f"[mcp_server:create_bucket] Created bucket '{bucket.get('name')}'")
        return {
            "success": True,
            "bucket": {
                "id": bucket.get("id"),
                "name": bucket.get("name"),
                "orgID": bucket.get("orgID"),
            },
        }
    except Exception as e:
        return _exception_response("create_bucket", e, "creating bucket")


@mcp_server.tool(name="create-org")
async def create_org(
    context: Context, name: str, description: str | None = None
) -> dict:
    """
    MCP Tool: Create a brand-new organization to isolate users or projects before creating
    buckets and tokens.

    Args:
        context (Context): The MCP context object.
        name (str): Display name for the organization.
        description (str, optional): Free-form description of why the organization exists.

    Returns:
        dict: Structured result object with keys:
            - 'success' (bool): True if the organization was created.
            - 'org' (dict): 'id', 'name' and 'description' of the new organization.
            - 'error' (str, optional): Error message if creation failed.
            - 'isError' (bool, optional): Present and True if this is an error response.
    """
    _LOGGER.info(f"[mcp_server:create_org] Invoked: name='{name}'")
    try:
        org = await _get_influx_client(context).create_org(name, description)
        _LOGGER.info(f"[mcp_server:create_org] Created organization '{org.get('name')}'")
        return {
            "success": True,
            "org": {
                "id": org.get("id"),
                "name": org.get("name"),
                "description": org.get("description", ""),
            },
        }
    except Exception as e:
        return _exception_response("create_org", e, "creating organization")
