"""Asynchronous request handler for the music API."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Callable, Optional, TypeVar

from ..exceptions import ApiCallFailedError, ArgumentNullError
from ..models.commands import Command
from ..models.config import MusicClientSettings
from ..models.response import CallbackAdapter, Response, ResponseCallback, ResponseInfo
from .compression import GzipHandler
from .decoder import ResponseDecoder
from .protocols import HttpTransport, RequestDescriptor, TransportOutcome, TransportResponse
from .server_time import ServerTimeTracker
from .timed_request import TimedExchange
from .transport import AiohttpTransport
from .uri_builder import ApiUriBuilder, QueryParams

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ApiRequestHandler:
    """
    Sends API commands and delivers exactly one Response per call.

    Each call builds a request from a command, races it against a
    timeout, decodes the response and hands the outcome to the caller's
    callback. The first usable ``Date`` header also fixes the server
    time offset.

    Example:
        handler = ApiRequestHandler(timeout=10.0)
        done = handler.send_request_async(
            new_releases_command("album"),
            settings,
            [("itemsperpage", "10")],
            CallbackAdapter(parse_product_page, on_response),
        )
        await done
    """

    def __init__(
        self,
        uri_builder: Optional[ApiUriBuilder] = None,
        gzip_handler: Optional[GzipHandler] = None,
        transport: Optional[HttpTransport] = None,
        server_time: Optional[ServerTimeTracker] = None,
        decoder: Optional[ResponseDecoder] = None,
        timeout: float = TimedExchange.DEFAULT_TIMEOUT,
    ) -> None:
        """
        Initialize the handler.

        Args:
            uri_builder: Builds request URIs from commands
            gzip_handler: Negotiates and decodes compression
            transport: Performs network I/O (aiohttp by default)
            server_time: Tracker for the server clock offset
            decoder: Turns transport outcomes into Responses
            timeout: Seconds before a request times out
        """
        self.uri_builder = uri_builder or ApiUriBuilder()
        self.gzip_handler = gzip_handler or GzipHandler()
        self.transport: HttpTransport = transport or AiohttpTransport()
        self.server_time = server_time or ServerTimeTracker()
        self.decoder = decoder or ResponseDecoder(self.gzip_handler)
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: MusicClientSettings) -> ApiRequestHandler:
        """Create a handler configured from client settings."""
        gzip_handler = GzipHandler(enabled=settings.network.gzip)
        return cls(
            gzip_handler=gzip_handler,
            transport=AiohttpTransport(
                user_agent=settings.network.user_agent,
                proxy=settings.network.proxy,
            ),
            timeout=settings.network.request_timeout,
        )

    @property
    def server_time_utc(self) -> datetime:
        return self.server_time.current_server_time_utc()

    def send_request_async(
        self,
        command: Command,
        settings: MusicClientSettings,
        query_params: Optional[QueryParams],
        callback: ResponseCallback[T],
        request_headers: Optional[dict[str, str]] = None,
    ) -> asyncio.Future[None]:
        """
        Send a command. Must be called with a running event loop.

        Args:
            command: The command to send
            settings: Client settings used to build the URI
            query_params: Additional query string parameters
            callback: Parses the body and receives the Response
            request_headers: HTTP headers to add to the request

        Returns:
            Future resolved after the callback has run

        Raises:
            ArgumentNullError: If callback is None
        """
        if callback is None:
            raise ArgumentNullError("callback")

        uri = self.uri_builder.build_uri(command, settings, query_params)
        logger.debug("Calling %s", uri)

        exchange = TimedExchange.create(uri, self.transport, timeout=self.timeout)
        self._add_request_headers(exchange.request, request_headers)

        body = command.build_request_body()
        exchange.request.method = command.http_method.value
        payload: Optional[bytes] = None
        if body is not None:
            exchange.request.headers["Content-Type"] = command.content_type
            payload = body.encode("utf-8")

        def on_success(outcome: TransportOutcome) -> None:
            response = outcome.response
            if response is not None:
                self._record_response_info(command, response)
            decoded = self.decoder.decode(outcome, callback.convert_from_raw_response, command.request_id)
            self._do_callback(callback, decoded, uri)

        def on_timeout() -> None:
            failed: Response[T] = Response.failure(None, ApiCallFailedError(), None, command.request_id)
            self._do_callback(callback, failed, uri)

        return exchange.begin_exchange(on_success, on_timeout, body=payload)

    async def request(
        self,
        command: Command,
        settings: MusicClientSettings,
        parse: Callable[[str], T],
        query_params: Optional[QueryParams] = None,
        request_headers: Optional[dict[str, str]] = None,
    ) -> Response[T]:
        """
        Send a command and wait for its Response.

        Example:
            response = await handler.request(command, settings, parse_product_page)
        """
        loop = asyncio.get_running_loop()
        result: asyncio.Future[Response[T]] = loop.create_future()
        done = self.send_request_async(
            command,
            settings,
            query_params,
            CallbackAdapter(parse, result.set_result),
            request_headers,
        )
        await done
        return await result

    async def close(self) -> None:
        """Release the transport, if it holds resources."""
        close = getattr(self.transport, "close", None)
        if close is not None:
            await close()

    def _add_request_headers(
        self,
        request: RequestDescriptor,
        request_headers: Optional[dict[str, str]],
    ) -> None:
        if request_headers:
            for name, value in request_headers.items():
                logger.debug(" Request Header: %s = %s", name, value)
                request.headers[name] = value

        self.gzip_handler.enable_compression(request.headers)

    def _record_response_info(self, command: Command, response: TransportResponse) -> None:
        """Hand response metadata to the command and the server clock tracker."""
        # Failures here must not keep the Response from reaching the callback
        try:
            command.set_additional_response_info(ResponseInfo(response.url, response.headers))
            self.server_time.update_from_headers(response.headers)
        except Exception:
            logger.warning("Failed recording response metadata from %s", response.url, exc_info=True)

    @staticmethod
    def _do_callback(callback: ResponseCallback[T], response: Response[T], uri: str) -> None:
        """Log the outcome and hand it to the caller."""
        # Lazy %-formatting: logging absorbs formatting and handler errors
        status = response.status_code if response.status_code is not None else "Timeout"
        logger.debug("%s response from %s", status, uri)

        if response.error is not None:
            logger.warning(
                "API call failed: %r (uri=%s, status_code=%s, error_response_body=%s)",
                response.error,
                uri,
                status,
                response.error_response_body,
                extra={
                    "uri": uri,
                    "status_code": status,
                    "error_response_body": response.error_response_body,
                },
            )

        callback.callback(response)
