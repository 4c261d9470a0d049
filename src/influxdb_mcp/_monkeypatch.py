"""
Uvicorn patch that makes ASGI failures of the HTTP transports visible.

Uvicorn can swallow exceptions raised inside the ASGI application behind the ``sse`` and
``streamable-http`` transports. `monkeypatch_uvicorn_exception_handling` wraps
``RequestResponseCycle.run_asgi`` so each such exception is written to stderr as one JSON
line and logged through a python-json-logger logger, then re-raised for Uvicorn to handle.
"""

import json
import logging
import sys
import traceback
from datetime import datetime, timezone
from typing import Any

from pythonjsonlogger import json as jsonlogger
from uvicorn.protocols.http.httptools_impl import RequestResponseCycle

_LOGGER = logging.getLogger(__name__)

ASGI_ERROR_LOGGER_NAME = "influxdb_mcp.asgi_errors"


def _create_asgi_error_logger() -> logging.Logger:
    """Build the ERROR-level JSON logger for ASGI failures (stderr, no propagation)."""
    asgi_logger = logging.getLogger(ASGI_ERROR_LOGGER_NAME)
    if not asgi_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            jsonlogger.JsonFormatter(
                "%(asctime)s %(name)s %(levelname)s %(message)s",
                rename_fields={"levelname": "severity"},
            )
        )
        asgi_logger.addHandler(handler)
        asgi_logger.setLevel(logging.ERROR)
    # root handlers would print the same record a second time
    asgi_logger.propagate = False
    return asgi_logger


_asgi_error_logger: logging.Logger | None = None


def _get_asgi_error_logger() -> logging.Logger:
    global _asgi_error_logger
    if _asgi_error_logger is None:
        _asgi_error_logger = _create_asgi_error_logger()
    return _asgi_error_logger


def _exception_fields(exc: BaseException) -> dict[str, str]:
    """Structured description of ``exc`` shared by both outputs."""
    return {
        "exception_type": type(exc).__name__,
        "exception_module": type(exc).__module__,
        "exception_message": str(exc),
        "stack_trace": "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__)
        ),
    }


def _report_asgi_exception(exc: BaseException) -> None:
    """Write ``exc`` to stderr as JSON, then log it through the JSON logger."""
    message = f"Unhandled exception in ASGI application: {type(exc).__name__}: {exc}"
    fields = _exception_fields(exc)

    # Plain print so the failure is visible even if logging itself is broken
    print(
        json.dumps(
            {
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "severity": "ERROR",
                "message": message,
                **fields,
            }
        ),
        file=sys.stderr,
        flush=True,
    )

    try:
        _get_asgi_error_logger().error(
            message,
            extra=fields,
            exc_info=(type(exc), exc, exc.__traceback__),
        )
    except Exception as log_err:
        print(f"ASGI error logger failed: {log_err}", file=sys.stderr, flush=True)


def monkeypatch_uvicorn_exception_handling() -> None:
    """
    Wrap Uvicorn's ``RequestResponseCycle.run_asgi`` to report unhandled ASGI exceptions.

    Call once at startup, before an HTTP transport starts.
    """
    _LOGGER.warning(
        "Monkey-patching Uvicorn's RequestResponseCycle to log unhandled ASGI exceptions."
    )
    run_asgi = RequestResponseCycle.run_asgi

    async def run_asgi_reporting_errors(self: RequestResponseCycle, app: Any) -> None:
        async def app_reporting_errors(*args: Any) -> Any:
            try:
                return await app(*args)
            except Exception as e:
                _report_asgi_exception(e)
                raise

        await run_asgi(self, app_reporting_errors)

    RequestResponseCycle.run_asgi = run_asgi_reporting_errors  # type: ignore[method-assign]
