"""Shared aiohttp client for read-only JSON APIs.

One GET per call, no retries, no caching. Every failure mode surfaces as an
UpstreamError carrying the endpoint, status and a body excerpt.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any
from urllib.parse import urljoin

import aiohttp

from kaspabot.errors import UpstreamError
from kaspabot.logging import get_logger
from kaspabot.monitoring.metrics import MetricsCollector

_BODY_EXCERPT = 300


class JsonHttpClient:
    """Thin wrapper around an ``aiohttp.ClientSession`` for one API.

    The session is created lazily on first use unless one is injected, and
    is only closed by ``close()`` if this client created it.

    Args:
        name: Provider name used in logs and metrics.
        base_url: API root, with a trailing slash.
        timeout_s: Total timeout per request in seconds.
        user_agent: User-Agent header value.
        session: Optional externally managed session.
        metrics: Optional Prometheus collector.
    """

    def __init__(
        self,
        name: str,
        base_url: str,
        timeout_s: float = 10.0,
        user_agent: str = "kaspabot",
        session: aiohttp.ClientSession | None = None,
        metrics: MetricsCollector | None = None,
    ) -> None:
        self.name = name
        self._base_url = base_url if base_url.endswith("/") else base_url + "/"
        self._timeout = aiohttp.ClientTimeout(total=timeout_s)
        self._headers = {"Accept": "application/json", "User-Agent": user_agent}
        self._session = session
        self._owns_session = session is None
        self._metrics = metrics
        self._logger = get_logger(f"provider.{name}")

    @property
    def base_url(self) -> str:
        return self._base_url

    def url_for(self, path: str) -> str:
        """Resolve a path relative to the API root."""
        return urljoin(self._base_url, path.lstrip("/"))

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=self._timeout, headers=self._headers
            )
            self._owns_session = True
        return self._session

    async def get_json(self, path: str, params: dict[str, str] | None = None) -> Any:
        """Issue one GET and decode the JSON body.

        Args:
            path: Path relative to the API root (already URL-encoded).
            params: Optional query parameters.

        Returns:
            The decoded JSON document.

        Raises:
            UpstreamError: On transport error, timeout, non-2xx status or a
                body that is not decodable text or JSON.
        """
        url = self.url_for(path)
        session = self._get_session()
        try:
            async with session.get(
                url, params=params, timeout=self._timeout, headers=self._headers
            ) as resp:
                status = resp.status
                body = await resp.text()
        except UnicodeDecodeError as e:
            self._record(False)
            raise UpstreamError(
                "response is not valid text", endpoint=url, status=status
            ) from e
        except asyncio.TimeoutError as e:
            self._record(False)
            raise UpstreamError("request timed out", endpoint=url) from e
        except aiohttp.ClientError as e:
            self._record(False)
            raise UpstreamError(f"request failed: {e}", endpoint=url) from e

        if not 200 <= status < 300:
            self._record(False)
            self._logger.warning("upstream_bad_status", url=url, status=status)
            raise UpstreamError(
                "unexpected status",
                endpoint=url,
                status=status,
                body=body[:_BODY_EXCERPT],
            )

        try:
            data = json.loads(body)
        except ValueError as e:
            self._record(False)
            raise UpstreamError(
                "response is not valid JSON",
                endpoint=url,
                status=status,
                body=body[:_BODY_EXCERPT],
            ) from e

        self._record(True)
        self._logger.debug("upstream_fetched", url=url, status=status)
        return data

    def _record(self, ok: bool) -> None:
        if self._metrics is not None:
            self._metrics.record_upstream(self.name, ok)

    async def close(self) -> None:
        """Close the session if this client created it."""
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def __aenter__(self) -> "JsonHttpClient":
        return self

    async def __aexit__(self, exc_type: type | None, exc_val: Exception | None, exc_tb: object) -> None:
        await self.close()
