"""A single HTTP exchange raced against a deadline."""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Any, Callable, Optional

from ..exceptions import TransportError
from .protocols import HttpTransport, RequestDescriptor, TransportOutcome

logger = logging.getLogger(__name__)


class ExchangeState(str, Enum):
    """Lifecycle of a TimedExchange. Leaves PENDING exactly once."""

    PENDING = "pending"
    COMPLETED = "completed"
    TIMED_OUT = "timed_out"


class TimedExchange:
    """
    One request/response cycle with an enforced timeout.

    The network call and a deadline timer are started together. Whichever
    finishes first settles the exchange; the other observes the settled
    state and does nothing. A failure while writing the request body is
    treated like a timeout.

    Example:
        exchange = TimedExchange.create(uri, transport, timeout=30.0)
        done = exchange.begin_exchange(
            on_success=lambda outcome: print(outcome.response.status_code),
            on_timeout=lambda: print("timed out"),
        )
        await done
    """

    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        request: RequestDescriptor,
        transport: HttpTransport,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """
        Args:
            request: The request this exchange owns
            transport: Transport that performs the network I/O
            timeout: Seconds before the exchange times out
        """
        self.request = request
        self.timeout = timeout
        self._transport = transport
        self._state = ExchangeState.PENDING
        self._timer: Optional[asyncio.TimerHandle] = None
        self._task: Optional[asyncio.Task[None]] = None
        self._done: Optional[asyncio.Future[None]] = None

    @classmethod
    def create(
        cls,
        uri: str,
        transport: HttpTransport,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> TimedExchange:
        """Create an exchange for a GET request to uri."""
        return cls(RequestDescriptor(uri=uri), transport, timeout=timeout)

    @property
    def state(self) -> ExchangeState:
        return self._state

    @property
    def has_timed_out(self) -> bool:
        return self._state is ExchangeState.TIMED_OUT

    def _settle(self, state: ExchangeState) -> bool:
        """Move out of PENDING. Returns False if already settled."""
        if self._state is not ExchangeState.PENDING:
            return False
        self._state = state
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        return True

    def begin_exchange(
        self,
        on_success: Callable[[TransportOutcome], Any],
        on_timeout: Callable[[], Any],
        body: Optional[bytes] = None,
    ) -> asyncio.Future[None]:
        """
        Start the exchange. Must be called with a running event loop.

        Args:
            on_success: Called with the transport outcome if the network
                        side finishes first
            on_timeout: Called if the deadline passes first or the body
                        cannot be written
            body: Optional request body to write before awaiting the response

        Returns:
            Future resolved once the winning continuation has run. If the
            continuation raises, the exception is set on the future.
        """
        if self._done is not None:
            raise RuntimeError("Exchange has already been started")

        loop = asyncio.get_running_loop()
        self._done = loop.create_future()
        self._timer = loop.call_later(self.timeout, self._expire, on_timeout)
        self._task = loop.create_task(self._receive(on_success, on_timeout, body))
        return self._done

    async def _receive(
        self,
        on_success: Callable[[TransportOutcome], Any],
        on_timeout: Callable[[], Any],
        body: Optional[bytes],
    ) -> None:
        if body is not None:
            try:
                await self._transport.write_body(self.request, body)
            except TransportError as e:
                logger.debug(f"Failed writing request body for {self.request.uri}: {e}")
                self._expire(on_timeout)
                return

        try:
            outcome = TransportOutcome(response=await self._transport.get_response(self.request))
        except TransportError as e:
            outcome = TransportOutcome(response=e.response, error=e)
        except Exception as e:
            logger.warning(f"Unexpected transport failure for {self.request.uri}: {e!r}")
            self._expire(on_timeout)
            return

        if self.has_timed_out or not self._settle(ExchangeState.COMPLETED):
            return
        self._deliver(on_success, outcome)

    def _expire(self, on_timeout: Callable[[], Any]) -> None:
        if not self._settle(ExchangeState.TIMED_OUT):
            return
        if self._task is not None and self._task is not asyncio.current_task():
            self._task.cancel()
        logger.debug(f"Exchange for {self.request.uri} timed out after {self.timeout}s")
        self._deliver(on_timeout)

    def _deliver(self, continuation: Callable[..., Any], *args: Any) -> None:
        assert self._done is not None
        try:
            continuation(*args)
        except Exception as e:
            if not self._done.done():
                self._done.set_exception(e)
            return
        if not self._done.done():
            self._done.set_result(None)
