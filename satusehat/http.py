"""
HTTP transport for the SATUSEHAT client.

A fetch-style wrapper over aiohttp: one call sends one request and returns
the status and the fully read body. The timeout policy lives here.
"""

import asyncio
import json
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any

import aiohttp

from satusehat.config.logging import get_logger
from satusehat.constants import REQUEST_TIMEOUT_SECONDS
from satusehat.errors import TransportError

logger = get_logger(__name__)


@dataclass
class HTTPResponse:
    """A received HTTP response with its body already read."""

    status: int
    body: str
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def json(self) -> Any:
        """Parse the body as JSON. Raises ValueError on invalid JSON."""
        return json.loads(self.body)


class HTTPTransport:
    """
    Sends HTTP requests through aiohttp.

    When a session is supplied it is used for every request and stays owned
    by the caller; otherwise each request opens and closes its own session.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession | None = None,
        timeout: float | None = None,
    ):
        """
        Initialize the transport.

        Args:
            session: Optional caller-owned aiohttp session
            timeout: Total request timeout in seconds
        """
        self._session = session
        self.timeout = timeout or REQUEST_TIMEOUT_SECONDS

    @asynccontextmanager
    async def _session_scope(self) -> AsyncIterator[aiohttp.ClientSession]:
        if self._session is not None:
            yield self._session
            return

        client_timeout = aiohttp.ClientTimeout(total=self.timeout)
        async with aiohttp.ClientSession(timeout=client_timeout) as session:
            yield session

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        data: str | bytes | dict[str, str] | None = None,
    ) -> HTTPResponse:
        """
        Send a request and read the whole response body.

        Args:
            method: HTTP method
            url: Absolute request URL
            headers: Request headers
            data: Request body; a dict is sent form-encoded

        Returns:
            HTTPResponse with status, headers and body text (undecodable bytes replaced)

        Raises:
            TransportError: If no response was received
        """
        try:
            async with self._session_scope() as session:
                async with session.request(
                    method,
                    url,
                    headers=headers,
                    data=data,
                    timeout=aiohttp.ClientTimeout(total=self.timeout),
                ) as resp:
                    body = await resp.text(errors="replace")
                    return HTTPResponse(
                        status=resp.status,
                        body=body,
                        headers=dict(resp.headers),
                    )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            error = str(e) or e.__class__.__name__
            logger.warning("HTTP request failed", method=method, url=url, error=error)
            raise TransportError(method, url, error) from e
