"""Async client for the InfluxDB 2.x HTTP API.

Every call opens a short-lived aiohttp.ClientSession, sends a single request with the
``Authorization: Token ...`` header, and returns the status and text body. Transport errors,
timeouts, undecodable bodies and non-2xx statuses are raised as InfluxDBRequestError;
there is no retry.

Typical Usage:
    client = InfluxDBClient(url="http://localhost:8086", token="secret")
    response = await client.query('buckets()', org="my-org")
    print(response.text)
"""

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any

import aiohttp

from influxdb_mcp._exceptions import InfluxDBRequestError

_LOGGER = logging.getLogger(__name__)

VALID_PRECISIONS = ("ns", "us", "ms", "s")
"""tuple[str, ...]: Timestamp precisions accepted by the write endpoint."""

_MAX_ERROR_BODY_CHARS = 500


@dataclass(frozen=True)
class HttpResponse:
    """Status code and decoded text body of a successful InfluxDB response."""

    status: int
    text: str

    def json(self) -> Any:
        """Decode the body as JSON.

        Raises:
            InfluxDBRequestError: If the body is not valid JSON.
        """
        try:
            return json.loads(self.text)
        except json.JSONDecodeError as e:
            raise InfluxDBRequestError(
                f"InfluxDB returned a non-JSON body (status {self.status}): {e}",
                status=self.status,
                body=self.text,
            ) from e


class InfluxDBClient:
    """
    Async client for the InfluxDB 2.x HTTP API.

    Attributes:
        url (str): Base URL of the InfluxDB instance, without a trailing slash.
        timeout_seconds (float): Default total timeout applied to each request.
    """

    def __init__(self, url: str, token: str, timeout_seconds: float = 5.0):
        """
        Initialize the client.

        Args:
            url (str): Base URL of the InfluxDB instance, e.g. ``http://localhost:8086``.
            token (str): InfluxDB API token.
            timeout_seconds (float): Default per-request timeout in seconds.

        Raises:
            ValueError: If url or token is empty, or timeout_seconds is not positive.
        """
        if not url or not isinstance(url, str):
            raise ValueError("url must be a non-empty string.")
        if not token or not isinstance(token, str):
            raise ValueError("token must be a non-empty string.")
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive.")
        self.url = url.rstrip("/")
        self._token = token
        self.timeout_seconds = timeout_seconds

    def __repr__(self) -> str:
        return f"InfluxDBClient(url={self.url!r}, timeout_seconds={self.timeout_seconds})"

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        json_body: Any = None,
        data: str | None = None,
        content_type: str | None = None,
        accept: str | None = None,
        timeout_seconds: float | None = None,
    ) -> HttpResponse:
        """
        Send one request to the InfluxDB API.

        Args:
            method (str): HTTP method.
            path (str): API path starting with ``/``, e.g. ``/api/v2/buckets``.
            params (dict[str, str] | None): Query string parameters.
            json_body (Any): Body serialized as JSON. Mutually exclusive with ``data``.
            data (str | None): Raw text body.
            content_type (str | None): Content-Type for a raw text body.
            accept (str | None): Accept header value.
            timeout_seconds (float | None): Overrides the client's default timeout.

        Returns:
            HttpResponse: Status and text body of a 2xx response.

        Raises:
            InfluxDBRequestError: On timeout, connection failure, a body that cannot be
                decoded as text, or a non-2xx status.
        """
        headers = {"Authorization": f"Token {self._token}"}
        if accept:
            headers["Accept"] = accept
        if content_type:
            headers["Content-Type"] = content_type
        timeout = aiohttp.ClientTimeout(total=timeout_seconds or self.timeout_seconds)
        url = f"{self.url}{path}"

        _LOGGER.debug(f"[InfluxDBClient:request] {method} {url} params={params}")
        try:
            async with aiohttp.ClientSession(headers=headers) as session:
                async with session.request(
                    method,
                    url,
                    params=params,
                    json=json_body,
                    data=data,
                    timeout=timeout,
                ) as response:
                    status = response.status
                    try:
                        text = await response.text()
                    except UnicodeDecodeError as e:
                        _LOGGER.error(
                            f"[InfluxDBClient:request] {method} {path} returned a non-text body"
                        )
                        raise InfluxDBRequestError(
                            f"{method} {path} returned a non-text body: {e}", status=status
                        ) from e
        except asyncio.TimeoutError as e:
            _LOGGER.error(f"[InfluxDBClient:request] {method} {path} timed out")
            raise InfluxDBRequestError(
                f"{method} {path} timed out after {timeout.total}s"
            ) from e
        except aiohttp.ClientError as e:
            _LOGGER.error(f"[InfluxDBClient:request] {method} {path} failed: {e!r}")
            raise InfluxDBRequestError(f"{method} {path} failed: {e}") from e

        _LOGGER.debug(f"[InfluxDBClient:request] {method} {path} -> {status}")
        if not 200 <= status < 300:
            _LOGGER.error(
                f"[InfluxDBClient:request] {method} {path} returned status {status}"
            )
            raise InfluxDBRequestError(
                f"{method} {path} returned status {status}: {text[:_MAX_ERROR_BODY_CHARS]}",
                status=status,
                body=text,
            )
        return HttpResponse(status=status, text=text)

    async def query(self, flux: str, org: str) -> HttpResponse:
        """
        Execute a Flux query and return the annotated CSV response.

        Args:
            flux (str): Flux query text.
            org (str): Organization name the query runs in.

        Returns:
            HttpResponse: Status and annotated CSV text.

        Raises:
            InfluxDBRequestError: If the request fails.
        """
        _LOGGER.info(f"[InfluxDBClient:query] Running Flux query in org '{org}'")
        return await self.request(
            "POST",
            "/api/v2/query",
            params={"org": org},
            json_body={"query": flux, "type": "flux"},
            accept="application/csv",
        )

    async def write(
        self, org: str, bucket: str, data: str, precision: str | None = None
    ) -> HttpResponse:
        """
        Write line protocol records to a bucket.

        Args:
            org (str): Organization name that owns the bucket.
            bucket (str): Destination bucket name.
            data (str): Newline-delimited line protocol.
            precision (str | None): One of ``ns``, ``us``, ``ms``, ``s``; server default when None.

        Returns:
            HttpResponse: The (normally 204, empty) response.

        Raises:
            ValueError: If precision is not a valid precision.
            InfluxDBRequestError: If the request fails.
        """
        if precision is not None and precision not in VALID_PRECISIONS:
            raise ValueError(
                f"Invalid precision '{precision}'. Valid values: {', '.join(VALID_PRECISIONS)}"
            )
        params = {"org": org, "bucket": bucket}
        if precision:
            params["precision"] = precision
        _LOGGER.info(
            f"[InfluxDBClient:write] Writing {len(data)} bytes to bucket '{bucket}' in org '{org}'"
        )
        return await self.request(
            "POST",
            "/api/v2/write",
            params=params,
            data=data,
            content_type="text/plain; charset=utf-8",
        )

    async def list_orgs(self) -> list[dict[str, Any]]:
        """Return the organizations visible to the token."""
        response = await self.request("GET", "/api/v2/orgs")
        return list(response.json().get("orgs", []))

    async def list_buckets(self) -> list[dict[str, Any]]:
        """Return the buckets visible to the token."""
        response = await self.request("GET", "/api/v2/buckets")
        return list(response.json().get("buckets", []))

    async def create_bucket(
        self,
        name: str,
        org_id: str,
        retention_period_seconds: int | None = None,
    ) -> dict[str, Any]:
        """
        Create a bucket.

        Args:
            name (str): Bucket name.
            org_id (str): ID of the owning organization.
            retention_period_seconds (int | None): Expiry in seconds; infinite retention when
                None or 0.

        Returns:
            dict[str, Any]: The created bucket as returned by InfluxDB.

        Raises:
            InfluxDBRequestError: If the request fails.
        """
        body: dict[str, Any] = {"name": name, "orgID": org_id}
        if retention_period_seconds:
            body["retentionRules"] = [
                {"type": "expire", "everySeconds": retention_period_seconds}
            ]
        _LOGGER.info(f"[InfluxDBClient:create_bucket] Creating bucket: {body}")
        response = await self.request("POST", "/api/v2/buckets", json_body=body)
        return dict(response.json())

    async def create_org(
        self, name: str, description: str | None = None
    ) -> dict[str, Any]:
        """
        Create an organization.

        Args:
            name (str): Organization name.
            description (str | None): Optional description.

        Returns:
            dict[str, Any]: The created organization as returned by InfluxDB.

        Raises:
            InfluxDBRequestError: If the request fails.
        """
        body = {"name": name}
        if description:
            body["description"] = description
        _LOGGER.info(f"[InfluxDBClient:create_org] Creating organization: {body}")
        response = await self.request("POST", "/api/v2/orgs", json_body=body)
        return dict(response.json())


def create_client(config: dict[str, Any]) -> InfluxDBClient:
    """Build an InfluxDBClient from a resolved configuration (see influxdb_mcp.config)."""
    return InfluxDBClient(
        url=config["url"],
        token=config["token"],
        timeout_seconds=config["timeout_seconds"],
    )
