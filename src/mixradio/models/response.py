"""Uniform response and callback types for API calls."""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Callable, Generic, Optional, Protocol, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class ResponseInfo:
    """Metadata about a received response, handed to the originating command."""

    resolved_uri: Optional[str]
    headers: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Response(Generic[T]):
    """
    Outcome of a single API call.

    Exactly one of ``result`` and ``error`` is set, except for responses
    the platform fabricated without contacting the server, which carry
    neither. Callers should treat that case as transient.

    Example:
        def on_response(response: Response[Page[Product]]) -> None:
            if response.succeeded:
                for product in response.result.items:
                    print(product.name)
            elif response.error is not None:
                print(f"Failed ({response.status_code}): {response.error}")
    """

    status_code: Optional[int] = None
    content_type: Optional[str] = None
    result: Optional[T] = None
    error: Optional[Exception] = None
    error_response_body: Optional[str] = None
    request_id: uuid.UUID = field(default_factory=lambda: uuid.UUID(int=0))

    @classmethod
    def success(
        cls,
        status_code: Optional[int],
        content_type: Optional[str],
        result: T,
        request_id: uuid.UUID,
    ) -> Response[T]:
        return cls(
            status_code=status_code,
            content_type=content_type,
            result=result,
            request_id=request_id,
        )

    @classmethod
    def failure(
        cls,
        status_code: Optional[int],
        error: Optional[Exception],
        error_response_body: Optional[str],
        request_id: uuid.UUID,
    ) -> Response[T]:
        return cls(
            status_code=status_code,
            error=error,
            error_response_body=error_response_body,
            request_id=request_id,
        )

    @property
    def succeeded(self) -> bool:
        return self.result is not None and self.error is None

    @property
    def is_transient(self) -> bool:
        """True for the no-result, no-error case."""
        return self.result is None and self.error is None


class ResponseCallback(Protocol[T]):
    """Converts raw response text and receives the final Response."""

    def convert_from_raw_response(self, text: str) -> T:
        ...

    def callback(self, response: Response[T]) -> None:
        ...


@dataclass
class CallbackAdapter(Generic[T]):
    """ResponseCallback built from a parser function and a result callback."""

    parse: Callable[[str], T]
    on_response: Callable[[Response[T]], None]

    def convert_from_raw_response(self, text: str) -> T:
        return self.parse(text)

    def callback(self, response: Response[T]) -> None:
        self.on_response(response)
