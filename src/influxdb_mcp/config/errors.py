"""
Custom exceptions for InfluxDB MCP configuration.
"""

from .._exceptions import ConfigurationError


class McpConfigurationError(ConfigurationError):
    """Raised when the InfluxDB MCP configuration cannot be loaded or is invalid."""

    pass


__all__ = [
    "McpConfigurationError",
]
