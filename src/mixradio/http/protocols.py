"""Protocol definitions for the HTTP transport abstraction."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Optional, Protocol


def get_header(headers: Optional[Mapping[str, str]], name: str) -> Optional[str]:
    """
    Look up a header value case-insensitively.

    Args:
        headers: Header mapping (may be None)
        name: Header name to look up

    Returns:
        The header value, or None if absent
    """
    if not headers:
        return None
    value = headers.get(name)
    if value is not None:
        return value
    lowered = name.lower()
    for key, candidate in headers.items():
        if key.lower() == lowered:
            return candidate
    return None


@dataclass
class RequestDescriptor:
    """
    Resolved outbound request, owned by a single exchange.

    Attributes:
        uri: Target URI
        method: HTTP method (GET, POST, ...)
        headers: Request headers, caller-supplied plus internally added ones
        body: Request body bytes, set once the body has been written
    """

    uri: str
    method: str = "GET"
    headers: dict[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None

    @property
    def content_type(self) -> Optional[str]:
        return get_header(self.headers, "Content-Type")


@dataclass(frozen=True)
class TransportResponse:
    """
    Immutable HTTP response returned by an HttpTransport.

    Attributes:
        status_code: HTTP status code (200, 404, etc.)
        headers: All response headers
        content: Raw (possibly compressed) response content
        content_type: Content-Type header value
        url: Final URL after redirects; None or empty when the platform
            produced the response without dispatching the request
    """

    status_code: int
    headers: dict[str, str]
    content: bytes = b""
    content_type: str = ""
    url: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


@dataclass(frozen=True)
class TransportOutcome:
    """What the network side of an exchange produced: a response, an error, or both."""

    response: Optional[TransportResponse] = None
    error: Optional[Exception] = None


class HttpTransport(Protocol):
    """
    Protocol for HTTP transports.

    This abstraction allows for:
    - Fake transports in tests
    - Different backends (aiohttp, httpx, etc.)

    Implementations raise TransportError for network-level failures.
    Non-success HTTP statuses are returned, not raised.
    """

    async def write_body(self, request: RequestDescriptor, body: bytes) -> None:
        """
        Write the request body for a request that carries one.

        Args:
            request: The request being prepared
            body: Encoded body bytes

        Raises:
            TransportError: If the body could not be written
        """
        ...

    async def get_response(self, request: RequestDescriptor) -> TransportResponse:
        """
        Send the request and read the full response.

        Args:
            request: The request to send

        Returns:
            TransportResponse with status, headers and raw content

        Raises:
            TransportError: On network errors
        """
        ...
