"""
Process-wide logging setup for the InfluxDB MCP server.

- `setup_logging` configures the root logger. Output goes to stderr because the stdio
  transport owns stdout.
- `setup_global_exception_logging` makes sure exceptions nobody catches, in plain code or
  in asyncio tasks, still end up in the log.

Both are called from `influxdb_mcp.mcp_server.main` before the server modules are imported.
"""

import asyncio
import logging
import os
import sys
from types import TracebackType
from typing import Any

LOG_LEVEL_ENV_VAR = "PYTHONLOGLEVEL"
"""str: Environment variable holding the root log level (default INFO)."""

LOG_FORMAT = "[%(asctime)s] %(levelname)s: %(message)s"


def setup_logging(level: str | None = None) -> None:
    """
    Configure the root logger.

    Args:
        level (str | None): Log level name. When None, PYTHONLOGLEVEL is used, then INFO.
    """
    logging.basicConfig(
        level=level or os.getenv(LOG_LEVEL_ENV_VAR, "INFO"),
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,  # replace handlers installed by imported libraries
    )


def log_unhandled_exception(
    exc_type: type[BaseException],
    exc_value: BaseException,
    exc_traceback: TracebackType | None,
) -> None:
    """`sys.excepthook` replacement; Ctrl-C is not treated as an error."""
    if issubclass(exc_type, KeyboardInterrupt):
        return
    logging.error("UNHANDLED EXCEPTION", exc_info=(exc_type, exc_value, exc_traceback))


def log_unhandled_async_exception(
    loop: asyncio.AbstractEventLoop, context: dict[str, Any]
) -> None:
    """asyncio exception handler logging errors of tasks nobody awaited."""
    exc = context.get("exception")
    exc_info = (type(exc), exc, exc.__traceback__) if exc is not None else None
    logging.error(f"UNHANDLED ASYNC EXCEPTION: {context.get('message')}", exc_info=exc_info)


# Set once the hooks are in place; later calls are no-ops
_EXC_LOGGING_INSTALLED = False


def setup_global_exception_logging() -> None:
    """
    Route every unhandled exception in the process to the log.

    Installs `log_unhandled_exception` as `sys.excepthook` and `log_unhandled_async_exception`
    on the current event loop (if any) and on every loop created afterwards through
    `asyncio.new_event_loop`, which is wrapped for that purpose. Safe to call repeatedly.
    """
    global _EXC_LOGGING_INSTALLED
    if _EXC_LOGGING_INSTALLED:
        return
    _EXC_LOGGING_INSTALLED = True

    sys.excepthook = log_unhandled_exception

    new_event_loop = asyncio.new_event_loop

    def _new_event_loop_with_handler(*args: Any, **kwargs: Any) -> asyncio.AbstractEventLoop:
        loop = new_event_loop(*args, **kwargs)
        loop.set_exception_handler(log_unhandled_async_exception)
        return loop

    asyncio.new_event_loop = _new_event_loop_with_handler

    try:
        asyncio.get_event_loop().set_exception_handler(log_unhandled_async_exception)
    except RuntimeError:
        # No current loop; loops created later get the handler from the wrapper
        pass
