"""
Async InfluxDB MCP configuration management.

This module loads, validates and caches the settings the server needs to reach InfluxDB.
Settings come from two sources, lowest precedence first:

1. An optional JSON file named by the INFLUXDB_MCP_CONFIG_FILE environment variable, read
   with native async file I/O (aiofiles).
2. The environment variables INFLUXDB_URL, INFLUXDB_TOKEN, INFLUXDB_ORG and
   INFLUXDB_TIMEOUT_SECONDS.

Configuration Schema:
---------------------
The config file, when used, must be a JSON object with any of these keys:

  - `url` (str): Base URL of the InfluxDB instance. Must start with http:// or https://.
  - `token` (str): API token. Use this OR `token_env_var`, but not both.
  - `token_env_var` (str): Name of an environment variable holding the API token.
  - `org` (str): Default organization name, used by the bucket measurements resource.
  - `timeout_seconds` (number): Timeout for each InfluxDB HTTP request. Must be > 0.

Unknown keys fail validation.

Example Config File:
--------------------
```json
{
    "url": "https://influx.example.com",
    "token_env_var": "PROD_INFLUX_TOKEN",
    "org": "telemetry",
    "timeout_seconds": 10
}
```

The resolved configuration always contains `url`, `token`, `org` (possibly None) and
`timeout_seconds`. A missing token is an error.

Security:
---------
- The API token is redacted in every log message (`redact_config`).
"""

__all__ = [
    "McpConfigurationError",
    "ConfigManager",
    "CONFIG_ENV_VAR",
    "DEFAULT_URL",
    "DEFAULT_TIMEOUT_SECONDS",
    "get_config_path",
    "load_and_validate_config",
    "validate_config",
    "validate_file_config",
    "resolve_config",
    "redact_config",
]

import asyncio
import json
import logging
import os
from collections.abc import Mapping
from typing import Any, cast

import aiofiles

from .errors import McpConfigurationError

_LOGGER = logging.getLogger(__name__)

CONFIG_ENV_VAR = "INFLUXDB_MCP_CONFIG_FILE"
"""
str: Name of the environment variable specifying the path to the optional JSON config file.
"""

URL_ENV_VAR = "INFLUXDB_URL"
TOKEN_ENV_VAR = "INFLUXDB_TOKEN"
ORG_ENV_VAR = "INFLUXDB_ORG"
TIMEOUT_ENV_VAR = "INFLUXDB_TIMEOUT_SECONDS"

DEFAULT_URL = "http://localhost:8086"
DEFAULT_TIMEOUT_SECONDS = 5.0

_ALLOWED_FILE_KEYS: dict[str, type | tuple[type, ...]] = {
    "url": str,
    "token": str,
    "token_env_var": str,
    "org": str,
    "timeout_seconds": (int, float),
}
"""Allowed keys of the JSON config file and their expected types."""

_REDACTED = "[REDACTED]"


class ConfigManager:
    """
    Async configuration manager for InfluxDB MCP.

    Loads the configuration once, caches it, and serves the cached copy to every caller.
    Access is serialized with an asyncio.Lock so concurrent tool calls never load twice.
    """

    def __init__(self) -> None:
        """Initialize an empty cache and its lock."""
        self._cache: dict[str, Any] | None = None
        self._lock = asyncio.Lock()

    async def clear_config_cache(self) -> None:
        """
        Clear the cached configuration (coroutine-safe).

        The next `get_config` call reloads from the file and environment.
        """
        _LOGGER.debug("Clearing InfluxDB MCP configuration cache...")
        async with self._lock:
            self._cache = None
        _LOGGER.debug("Configuration cache cleared.")

    async def _set_config_cache(self, config: dict[str, Any]) -> None:
        """
        PRIVATE: Inject an already-resolved configuration, bypassing file and environment.

        The configuration is validated before caching. Intended for tests.

        Raises:
            McpConfigurationError: If the provided configuration is invalid.
        """
        async with self._lock:
            self._cache = validate_config(config)

    async def get_config(self) -> dict[str, Any]:
        """
        Load, validate and cache the configuration (coroutine-safe).

        Returns:
            dict[str, Any]: Resolved configuration with keys `url`, `token`, `org` and
                `timeout_seconds`.

        Raises:
            McpConfigurationError: If the config file is unreadable or invalid, or no token
                is configured.

        Example:
            >>> config = await config_manager.get_config()
            >>> config["url"]
            'http://localhost:8086'
        """
        _LOGGER.debug("Loading InfluxDB MCP configuration...")
        async with self._lock:
            if self._cache is not None:
                _LOGGER.debug("Using cached InfluxDB MCP configuration.")
                return self._cache

            config_path = get_config_path()
            file_config = (
                await load_and_validate_config(config_path) if config_path else {}
            )
            resolved = resolve_config(file_config, os.environ)
            self._cache = resolved
            _LOGGER.info(f"InfluxDB MCP configuration: {redact_config(resolved)}")
            return resolved


def get_config_path() -> str | None:
    """
    Return the config file path from INFLUXDB_MCP_CONFIG_FILE, or None if it is not set.
    """
    config_path = os.environ.get(CONFIG_ENV_VAR)
    if config_path is None:
        _LOGGER.debug(
            f"Environment variable {CONFIG_ENV_VAR} is not set; using environment only."
        )
        return None
    _LOGGER.info(f"Environment variable {CONFIG_ENV_VAR} is set to: {config_path}")
    return config_path


async def _load_config_from_file(config_path: str) -> dict[str, Any]:
    """
    Load and parse a JSON config file asynchronously.

    Raises:
        McpConfigurationError: If the file is missing, unreadable or not valid JSON.
    """
    try:
        async with aiofiles.open(config_path) as f:
            content = await f.read()
        return cast(dict[str, Any], json.loads(content))
    except FileNotFoundError:
        _LOGGER.error(f"Configuration file not found: {config_path}")
        raise McpConfigurationError(
            f"Configuration file not found: {config_path}"
        ) from None
    except PermissionError:
        _LOGGER.error(
            f"Permission denied when trying to read configuration file: {config_path}"
        )
        raise McpConfigurationError(
            f"Permission denied when trying to read configuration file: {config_path}"
        ) from None
    except json.JSONDecodeError as e:
        _LOGGER.error(f"Invalid JSON in configuration file {config_path}: {e}")
        raise McpConfigurationError(
            f"Invalid JSON in configuration file {config_path}: {e}"
        ) from e


async def load_and_validate_config(config_path: str) -> dict[str, Any]:
    """
    Load a JSON config file and validate its keys and value types.

    Args:
        config_path (str): Path to the JSON config file.

    Returns:
        dict[str, Any]: The validated (unresolved) file configuration.

    Raises:
        McpConfigurationError: If the file cannot be read or fails validation.
    """
    data = await _load_config_from_file(config_path)
    return validate_file_config(data)


def validate_file_config(config: Any) -> dict[str, Any]:
    """
    Validate the contents of a JSON config file.

    Raises:
        McpConfigurationError: If the config is not an object, has unknown keys, has values
            of the wrong type, or sets both `token` and `token_env_var`.
    """
    if not isinstance(config, dict):
        raise McpConfigurationError(
            f"Configuration must be a JSON object, got {type(config).__name__}"
        )

    unknown_keys = set(config) - set(_ALLOWED_FILE_KEYS)
    if unknown_keys:
        _LOGGER.error(f"Unknown keys in InfluxDB MCP config: {sorted(unknown_keys)}")
        raise McpConfigurationError(
            f"Unknown keys in InfluxDB MCP config: {sorted(unknown_keys)}"
        )

    for key, value in config.items():
        expected = _ALLOWED_FILE_KEYS[key]
        # bool is an int subclass but never a valid timeout
        if isinstance(value, bool) or not isinstance(value, expected):
            raise McpConfigurationError(
                f"Field '{key}' has invalid type {type(value).__name__}"
            )

    if "token" in config and "token_env_var" in config:
        raise McpConfigurationError(
            "'token' and 'token_env_var' are mutually exclusive"
        )

    return config


def _parse_timeout(value: Any) -> float:
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        raise McpConfigurationError(
            f"Invalid timeout_seconds value: {value!r}"
        ) from None
    return timeout


def resolve_config(
    file_config: dict[str, Any], environ: Mapping[str, str]
) -> dict[str, Any]:
    """
    Merge file configuration with environment variables and apply defaults.

    Environment variables override file values. A `token_env_var` in the file is resolved
    against ``environ``.

    Args:
        file_config (dict[str, Any]): Validated file configuration (may be empty).
        environ: Environment mapping, normally ``os.environ``.

    Returns:
        dict[str, Any]: Validated configuration with `url`, `token`, `org`, `timeout_seconds`.

    Raises:
        McpConfigurationError: If the result is invalid or has no token.
    """
    token = file_config.get("token")
    token_env_var = file_config.get("token_env_var")
    if token_env_var is not None:
        token = environ.get(token_env_var)
        if token is None:
            _LOGGER.warning(
                f"Environment variable '{token_env_var}' named by token_env_var is not set"
            )

    config = {
        "url": environ.get(URL_ENV_VAR) or file_config.get("url", DEFAULT_URL),
        "token": environ.get(TOKEN_ENV_VAR) or token,
        "org": environ.get(ORG_ENV_VAR) or file_config.get("org"),
        "timeout_seconds": _parse_timeout(
            environ.get(TIMEOUT_ENV_VAR)
            or file_config.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS)
        ),
    }
    return validate_config(config)


def validate_config(config: dict[str, Any]) -> dict[str, Any]:
    """
    Validate a resolved configuration.

    Rules:
        - `token` must be a non-empty string.
        - `url` must be a string starting with http:// or https://.
        - `org`, if not None, must be a non-empty string.
        - `timeout_seconds` must be a positive number.

    Returns:
        dict[str, Any]: The configuration, with a trailing slash removed from `url`.

    Raises:
        McpConfigurationError: If any rule is violated.
    """
    token = config.get("token")
    if not token or not isinstance(token, str):
        _LOGGER.error(f"{TOKEN_ENV_VAR} is not configured")
        raise McpConfigurationError(
            f"{TOKEN_ENV_VAR} environment variable (or 'token' in {CONFIG_ENV_VAR}) must be set"
        )

    url = config.get("url")
    if not isinstance(url, str) or not url.startswith(("http://", "https://")):
        raise McpConfigurationError(
            f"InfluxDB url must start with http:// or https://, got {url!r}"
        )

    org = config.get("org")
    if org is not None and (not isinstance(org, str) or not org):
        raise McpConfigurationError(f"InfluxDB org must be a non-empty string, got {org!r}")

    timeout = config.get("timeout_seconds")
    if (
        isinstance(timeout, bool)
        or not isinstance(timeout, (int, float))
        or not timeout > 0
    ):
        raise McpConfigurationError(
            f"timeout_seconds must be a positive number, got {timeout!r}"
        )

    return {
        "url": url.rstrip("/"),
        "token": token,
        "org": org,
        "timeout_seconds": float(timeout),
    }


def redact_config(config: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of ``config`` with the API token redacted, safe for logging."""
    redacted = dict(config)
    if redacted.get("token"):
        redacted["token"] = _REDACTED
    return redacted
