"""Liveness checks for external http(s) links."""

from __future__ import annotations

from typing import Optional
from urllib.parse import urlparse

import httpx

from ..diagnostics import Diagnostics
from ..logging import get_logger

DEFAULT_TIMEOUT = 10.0


class ExternalUrlChecker:
    """Sends one HEAD request per URL; no retries.

    Use as an async context manager so a single connection pool is shared by
    every check in a run.
    """

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        diagnostics: Optional[Diagnostics] = None,
    ) -> None:
        self.timeout = timeout
        self.transport = transport
        self.diagnostics = diagnostics
        self.logger = get_logger("external")
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "ExternalUrlChecker":
        self._client = self._build_client()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def is_valid(self, url: str) -> bool:
        if urlparse(url).hostname == "localhost":
            return True

        if self._client is not None:
            return await self._head(self._client, url)
        async with self._build_client() as client:
            return await self._head(client, url)

    async def _head(self, client: httpx.AsyncClient, url: str) -> bool:
        try:
            response = await client.head(url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            self.logger.debug("HEAD %s failed: %s", url, exc)
            return False

        if response.is_success:
            return True
        if response.status_code == 404:
            return False

        message = f"{url} responded status {response.status_code}, is it expected?"
        if self.diagnostics is not None:
            self.diagnostics.warn("unexpected-status", message, subject=url)
        else:
            self.logger.warning(message)
        return True

    def _build_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            transport=self.transport,
        )


__all__ = ["DEFAULT_TIMEOUT", "ExternalUrlChecker"]
