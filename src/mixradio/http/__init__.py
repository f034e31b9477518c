"""HTTP request pipeline for mixradio."""

from .compression import GzipHandler
from .decoder import ResponseDecoder, is_offline_not_found
from .handler import ApiRequestHandler
from .protocols import HttpTransport, RequestDescriptor, TransportOutcome, TransportResponse
from .server_time import ServerTimeTracker
from .timed_request import ExchangeState, TimedExchange
from .transport import AiohttpTransport
from .uri_builder import ApiUriBuilder

__all__ = [
    "AiohttpTransport",
    "ApiRequestHandler",
    "ApiUriBuilder",
    "ExchangeState",
    "GzipHandler",
    "HttpTransport",
    "RequestDescriptor",
    "ResponseDecoder",
    "ServerTimeTracker",
    "TimedExchange",
    "TransportOutcome",
    "TransportResponse",
    "is_offline_not_found",
]
