import pytest

from influxdb_mcp._exceptions import (
    ConfigurationError,
    InfluxDBRequestError,
    InternalError,
    McpError,
)
from influxdb_mcp.config.errors import McpConfigurationError


class TestBaseExceptions:
    """Tests for base exceptions."""

    def test_mcp_error(self):
        """Test that McpError can be raised and caught properly."""
        message = "base MCP error"
        with pytest.raises(McpError) as exc_info:
            raise McpError(message)
        assert str(exc_info.value) == message
        assert isinstance(exc_info.value, Exception)

    def test_internal_error_inheritance(self):
        """Test that InternalError inherits from both McpError and RuntimeError."""
        message = "internal error with multiple inheritance"
        with pytest.raises(McpError) as exc_info:
            raise InternalError(message)
        assert str(exc_info.value) == message

        with pytest.raises(RuntimeError) as exc_info:
            raise InternalError(message)
        assert str(exc_info.value) == message


class TestInfluxDBRequestError:
    def test_defaults(self):
        exc = InfluxDBRequestError("connection refused")
        assert str(exc) == "connection refused"
        assert exc.status is None
        assert exc.body is None
        assert isinstance(exc, McpError)

    def test_status_and_body(self):
        exc = InfluxDBRequestError("bad request", status=400, body='{"code":"invalid"}')
        assert exc.status == 400
        assert exc.body == '{"code":"invalid"}'


class TestConfigurationErrors:
    @pytest.mark.parametrize(
        "exception_class,parent_classes",
        [
            (ConfigurationError, [McpError]),
            (McpConfigurationError, [ConfigurationError, McpError]),
        ],
    )
    def test_hierarchy(self, exception_class, parent_classes):
        exc = exception_class("config problem")
        assert str(exc) == "config problem"
        for parent in parent_classes:
            assert isinstance(exc, parent)
