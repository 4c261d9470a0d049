"""
``influxdb-mcp`` command-line entry point.

Logging, the global exception hooks and the Uvicorn patch are installed at import time,
before the server modules are imported, so records emitted while the handlers register are
already formatted and routed to stderr.
"""

from .._logging import setup_global_exception_logging, setup_logging  # noqa: E402

setup_logging()
setup_global_exception_logging()

from .._monkeypatch import monkeypatch_uvicorn_exception_handling  # noqa: E402

monkeypatch_uvicorn_exception_handling()

import argparse  # noqa: E402
import logging  # noqa: E402
from collections.abc import Sequence  # noqa: E402
from typing import Literal  # noqa: E402

from ._mcp import mcp_server  # noqa: E402

_LOGGER = logging.getLogger(__name__)

Transport = Literal["stdio", "sse", "streamable-http"]

TRANSPORTS: tuple[Transport, ...] = ("stdio", "sse", "streamable-http")


def run_server(transport: Transport) -> None:
    """Run the shared FastMCP server until it exits, logging start and stop."""
    if transport == "stdio":
        _LOGGER.warning(f"Starting MCP server '{mcp_server.name}' on stdio")
    else:
        settings = mcp_server.settings
        _LOGGER.warning(
            f"Starting MCP server '{mcp_server.name}' with transport={transport} on {settings.host}:{settings.port}"
        )
    try:
        mcp_server.run(transport=transport)
    finally:
        _LOGGER.info(f"MCP server '{mcp_server.name}' stopped.")


def _port(value: str) -> int:
    port = int(value)
    if not 0 < port < 65536:
        raise argparse.ArgumentTypeError(f"port must be between 1 and 65535, got {port}")
    return port


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="influxdb-mcp",
        description="Serve an InfluxDB 2.x instance over the Model Context Protocol.",
    )
    parser.add_argument(
        "-t",
        "--transport",
        choices=TRANSPORTS,
        default="stdio",
        help=(
            "MCP transport (default: stdio). The HTTP transports bind to "
            "INFLUXDB_MCP_HOST:INFLUXDB_MCP_PORT."
        ),
    )
    parser.add_argument(
        "-p",
        "--port",
        type=_port,
        default=None,
        help="Port for the HTTP transports; overrides INFLUXDB_MCP_PORT.",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """Parse ``argv`` (default ``sys.argv[1:]``) and run the server."""
    args = build_parser().parse_args(argv)
    _LOGGER.info(f"CLI args: {vars(args)}")
    if args.port is not None:
        mcp_server.settings.port = args.port
    run_server(args.transport)


if __name__ == "__main__":
    main()
