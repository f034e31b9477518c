"""aiohttp-backed transport for API exchanges."""

from __future__ import annotations

import asyncio
import logging
from types import TracebackType

import aiohttp

from ..exceptions import TransportError
from .protocols import RequestDescriptor, TransportResponse

logger = logging.getLogger(__name__)


class AiohttpTransport:
    """
    HTTP transport built on a shared aiohttp session.

    Features:
    - Lazily created session, reused across exchanges
    - Raw (undecoded) bodies so compression is handled by GzipHandler
    - Network errors normalized to TransportError

    Timeouts are enforced by TimedExchange, not by the session.

    Example:
        async with AiohttpTransport() as transport:
            request = RequestDescriptor(uri="https://api.mixrad.io/1.x/gb/")
            response = await transport.get_response(request)
            print(response.status_code)
    """

    # Exceptions that mean the exchange never produced a usable response
    NETWORK_EXCEPTIONS = (
        aiohttp.ClientError,
        asyncio.TimeoutError,
        ConnectionError,
        OSError,
    )

    def __init__(
        self,
        user_agent: str | None = None,
        proxy: str | None = None,
    ) -> None:
        """
        Initialize the transport.

        Args:
            user_agent: Custom User-Agent string
            proxy: Proxy URL (http:// or https://)
        """
        if user_agent is None:
            user_agent = "mixradio-python/1.0"
        self._user_agent = user_agent
        self._proxy = proxy
        self._session: aiohttp.ClientSession | None = None
        # Responses opened by write_body, keyed by request identity
        self._sent: dict[int, aiohttp.ClientResponse] = {}

    def _get_session(self) -> aiohttp.ClientSession:
        """Get or create the HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={"User-Agent": self._user_agent},
                auto_decompress=False,
            )
        return self._session

    async def close(self) -> None:
        """Close the underlying session."""
        for response in self._sent.values():
            response.close()
        self._sent.clear()
        if self._session is not None:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> AiohttpTransport:
        self._get_session()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def write_body(self, request: RequestDescriptor, body: bytes) -> None:
        """
        Send the request with its body and wait for the response headers.

        The opened response is held until get_response reads it, so a
        failure while uploading surfaces here rather than as a response.

        Raises:
            TransportError: If the body could not be sent
        """
        if not isinstance(body, (bytes, bytearray)):
            raise TransportError(f"Request body must be bytes, got {type(body).__name__}")
        request.body = bytes(body)
        self._sent[id(request)] = await self._send(request)

    async def get_response(self, request: RequestDescriptor) -> TransportResponse:
        """
        Send the request, unless write_body already did, and read the response.

        Args:
            request: The request to send

        Returns:
            TransportResponse carrying the raw content

        Raises:
            TransportError: On connection, DNS or protocol errors
        """
        response = self._sent.pop(id(request), None)
        if response is None:
            response = await self._send(request)

        try:
            async with response:
                content = await response.read()
                return TransportResponse(
                    status_code=response.status,
                    headers=dict(response.headers),
                    content=content,
                    content_type=response.headers.get("Content-Type", ""),
                    url=str(response.url) if response.url else None,
                )
        except self.NETWORK_EXCEPTIONS as e:
            logger.debug(f"Transport error reading {request.uri}: {e}")
            raise TransportError(str(e) or type(e).__name__) from e

    async def _send(self, request: RequestDescriptor) -> aiohttp.ClientResponse:
        session = self._get_session()
        try:
            return await session.request(
                request.method,
                request.uri,
                headers=request.headers,
                data=request.body,
                proxy=self._proxy,
                allow_redirects=True,
            )
        except self.NETWORK_EXCEPTIONS as e:
            logger.debug(f"Transport error for {request.uri}: {e}")
            raise TransportError(str(e) or type(e).__name__) from e
