"""Transport adapter issuing single HTTP exchanges for the WebDAV client."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterable
from typing import Any

import httpx

from ..debug import log_request, log_response
from ..webdav import Outcome
from .internal import TransportError, status_text

logger = logging.getLogger("py_davclient.transport")


class Client:
    """HTTP transport for WebDAV verbs.

    Each call is one request/response exchange; connection pooling, TLS and
    redirects are left to the wrapped ``httpx.AsyncClient``.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        supports_mkcol: bool = True,
        timeout: float | None = None,
        debug: bool = False,
    ):
        """Initialize transport.

        Args:
            http_client: HTTP client to use (creates default if None)
            supports_mkcol: Whether MKCOL may be sent as-is
            timeout: Timeout in seconds for a default client (httpx default if None)
            debug: Log every request and response
        """
        if http_client is None:
            http_client = httpx.AsyncClient() if timeout is None else httpx.AsyncClient(timeout=timeout)
        self.http_client = http_client
        self.supports_mkcol = supports_mkcol
        self.debug = debug

    async def request(
        self,
        method: str,
        url: str,
        headers: dict[str, str] | None = None,
        content: bytes | AsyncIterable[bytes] | None = None,
    ) -> Outcome:
        """Send one request and read the full response body.

        Args:
            method: HTTP method
            url: Absolute request URL
            headers: Request headers
            content: Request body, either in memory or as a chunk stream

        Returns:
            Status and body of the response, whatever the status class

        Raises:
            TransportError: If the request could not be completed
        """
        headers = headers or {}
        if self.debug:
            log_request(method, url, headers, content if isinstance(content, bytes) else None)

        try:
            resp = await self.http_client.request(method, url, content=content, headers=headers)
        except httpx.TransportError as e:
            logger.debug(f"{method} {url} failed: {e!r}")
            raise TransportError(method, url, e) from e

        if self.debug:
            log_response(resp.status_code, resp.headers, resp.content)

        return Outcome(
            status_code=resp.status_code,
            status_text=resp.reason_phrase or status_text(resp.status_code),
            body=resp.content,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.http_client.aclose()

    async def __aenter__(self) -> Client:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
