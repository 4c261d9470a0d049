"""Custom exception types for InfluxDB MCP.

Exception Hierarchy:
    - McpError: base for all InfluxDB MCP exceptions
    - InternalError: extends McpError and RuntimeError; signals a bug in this package
    - InfluxDBRequestError: extends McpError; an InfluxDB HTTP call failed
    - ConfigurationError: extends McpError; invalid or missing configuration

Usage Example:
    ```python
    from influxdb_mcp._exceptions import InfluxDBRequestError

    try:
        response = await client.query(flux, org)
    except InfluxDBRequestError as e:
        logger.error(f"Query failed with status {e.status}: {e}")
        raise
    ```
"""

__all__ = [
    "McpError",
    "InternalError",
    "InfluxDBRequestError",
    "ConfigurationError",
]


class McpError(Exception):
    """Base exception for all InfluxDB MCP errors.

    Allows callers to catch every MCP-related error with a single except clause
    while still raising specific types for detailed handling.
    """

    pass


class InternalError(McpError, RuntimeError):
    """Internal errors indicating bugs in the MCP implementation.

    Raised when an internal invariant is broken, e.g. the server lifespan context
    is missing an expected entry.
    """

    pass


class InfluxDBRequestError(McpError):
    """An InfluxDB HTTP request failed.

    Covers transport failures (connection refused, timeout) and non-success HTTP
    status codes. Callers report it as an upstream failure; it is never retried
    automatically.

    Attributes:
        status (int | None): HTTP status code, or None for transport failures.
        body (str | None): Response body returned with the error status, if any.
    """

    def __init__(
        self, message: str, status: int | None = None, body: str | None = None
    ):
        """Initialize the exception.

        Args:
            message (str): Human-readable description of the failure.
            status (int | None): HTTP status code, if a response was received.
            body (str | None): Response body, if a response was received.
        """
        super().__init__(message)
        self.status = status
        self.body = body


class ConfigurationError(McpError):
    """Base class for configuration-related errors."""

    pass
