"""HTTP fetching of off-chain metadata documents.

Provides the [Fetcher][tzmeta.utils.http.Fetcher] interface consumed by the
resolution engine, a default aiohttp implementation, and bounded reading of
response bodies to prevent memory exhaustion from oversized payloads.

Note:
    This module sits in the ``utils`` layer and depends only on stdlib and
    third-party libraries (``aiohttp``, ``aiohttp_socks``). Transport failures
    surface as ``aiohttp.ClientError``, ``TimeoutError`` or ``ValueError``;
    translating them into
    [FetchURLError][tzmeta.core.exceptions.FetchURLError] is the caller's job.

See Also:
    [MetadataResolver][tzmeta.resolver.resolver.MetadataResolver]: Fetches
        external, IPFS and checksummed metadata through a
        [Fetcher][tzmeta.utils.http.Fetcher].
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any

import aiohttp
from aiohttp_socks import ProxyConnector

from .codec import parse_json


logger = logging.getLogger("tzmeta.utils.http")


@dataclass(frozen=True, slots=True)
class HttpResponse:
    """Completed HTTP exchange.

    Attributes:
        url: The requested URL.
        status: HTTP status code.
        body: Response body. Empty for non-success responses.
        reason: HTTP reason phrase, when the server sent one.
    """

    url: str
    status: int
    body: bytes = b""
    reason: str | None = None

    @property
    def ok(self) -> bool:
        """True for 2xx status codes."""
        return HTTPStatus.OK <= self.status < HTTPStatus.MULTIPLE_CHOICES

    def json(self) -> Any:
        """Parse the body as strict JSON.

        Raises:
            ValueError: If the body is not valid UTF-8 JSON.
        """
        return parse_json(self.body)


class Fetcher(ABC):
    """Performs HTTP GET requests on behalf of the resolver."""

    @abstractmethod
    async def get(self, url: str) -> HttpResponse:
        """Fetch *url*.

        Returns a response for every status code the server answers with.
        Raises on transport failures (connection errors, timeouts, oversized
        bodies).
        """
        ...


class AiohttpFetcher(Fetcher):
    """[Fetcher][tzmeta.utils.http.Fetcher] backed by ``aiohttp``.

    Opens one ``ClientSession`` per request. When *proxy_url* is set, traffic
    is routed through an ``aiohttp_socks`` ``ProxyConnector``.

    Args:
        timeout: Total request timeout in seconds.
        max_size: Maximum accepted response body size in bytes.
        proxy_url: Optional SOCKS5 proxy URL.
    """

    def __init__(
        self,
        timeout: float = 10.0,
        max_size: int = 1_048_576,
        proxy_url: str | None = None,
    ) -> None:
        self._timeout = timeout
        self._max_size = max_size
        self._proxy_url = proxy_url

    def _connector(self) -> aiohttp.BaseConnector:
        if self._proxy_url:
            return ProxyConnector.from_url(self._proxy_url)
        return aiohttp.TCPConnector()

    async def get(self, url: str) -> HttpResponse:
        async with (
            aiohttp.ClientSession(connector=self._connector()) as session,
            session.get(url, timeout=aiohttp.ClientTimeout(total=self._timeout)) as resp,
        ):
            logger.debug("http_response url=%s status=%s", url, resp.status)
            if not HTTPStatus.OK <= resp.status < HTTPStatus.MULTIPLE_CHOICES:
                return HttpResponse(url=url, status=resp.status, reason=resp.reason)
            body = await read_bounded(resp, self._max_size)
            return HttpResponse(url=url, status=resp.status, body=body, reason=resp.reason)


async def read_bounded(response: aiohttp.ClientResponse, max_size: int) -> bytes:
    """Read a metadata document body, refusing anything over *max_size* bytes.

    The stream is drained in a loop because a chunked response may hand back
    fewer bytes per read than asked for. At most ``max_size + 1`` bytes are
    requested in total, which is enough to detect an oversized document
    without reading the rest of it.

    Args:
        response: Unconsumed response of a metadata GET.
        max_size: Byte limit, ``HttpConfig.max_size`` when built by the resolver.

    Raises:
        ValueError: The body is larger than *max_size*. The resolver reports
            it as a transport failure of the fetch.
    """
    body = bytearray()
    while True:
        chunk = await response.content.read(max_size + 1 - len(body))
        if not chunk:
            return bytes(body)
        body += chunk
        if len(body) > max_size:
            raise ValueError(f"Response body too large: >{max_size} bytes")
