"""InfluxDB client interface.

This module provides the async HTTP client used by every MCP tool and resource to talk to the
InfluxDB 2.x API.

Classes:
    InfluxDBClient: aiohttp-based client for the query, write, org and bucket endpoints
    HttpResponse: Status and text body of a successful InfluxDB response

Functions:
    create_client: Build an InfluxDBClient from a resolved configuration dict
"""

from ._influx import (
    VALID_PRECISIONS,
    HttpResponse,
    InfluxDBClient,
    create_client,
)

__all__ = [
    "VALID_PRECISIONS",
    "HttpResponse",
    "InfluxDBClient",
    "create_client",
]
