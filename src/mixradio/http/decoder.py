"""Turns transport outcomes into typed Responses."""

from __future__ import annotations

import logging
import uuid
from typing import Callable, Optional, TypeVar

from ..exceptions import ApiCallFailedError
from ..models.response import Response
from .compression import GzipHandler
from .protocols import TransportOutcome, TransportResponse

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Decides whether a response was fabricated by the platform while offline
OfflinePolicy = Callable[[TransportResponse], bool]


def is_offline_not_found(response: TransportResponse) -> bool:
    """
    Detect a response the platform produced without contacting the server.

    Some network stacks answer with a synthetic 404 while offline. Such
    responses never resolved a final URI.
    """
    return not response.url


def _charset_of(content_type: str) -> str:
    for part in content_type.split(";"):
        part = part.strip()
        if part.lower().startswith("charset="):
            return part.split("=", 1)[1].strip().strip("\"'") or "utf-8"
    return "utf-8"


class ResponseDecoder:
    """
    Decodes a transport outcome into a Response.

    Rules:
    - No response at all: error-only Response without a status code
    - Non-success status: error Response carrying status and raw body
    - Successful status: body parsed with the caller's parser; parser
      errors become the Response error
    - Fabricated offline response: neither result nor error

    Example:
        decoder = ResponseDecoder(GzipHandler())
        response = decoder.decode(outcome, json.loads, command.request_id)
    """

    def __init__(
        self,
        gzip_handler: Optional[GzipHandler] = None,
        offline_policy: OfflinePolicy = is_offline_not_found,
    ) -> None:
        self._gzip = gzip_handler or GzipHandler()
        self._offline_policy = offline_policy

    def read_text(self, response: TransportResponse) -> str:
        """Decompress and decode the response body."""
        with self._gzip.get_decoded_stream(response) as stream:
            raw = stream.read()
        # Strict decoding: invalid bytes raise and become the Response error
        return raw.decode(_charset_of(response.content_type or ""))

    def decode(
        self,
        outcome: TransportOutcome,
        parse: Callable[[str], T],
        request_id: uuid.UUID,
    ) -> Response[T]:
        """
        Build the Response for an outcome.

        Args:
            outcome: What the transport produced
            parse: Converts the response text into the result type
            request_id: Id of the originating command

        Returns:
            Response with result, error, or neither
        """
        response = outcome.response
        error = outcome.error

        if response is None:
            return Response.failure(None, error or ApiCallFailedError(), None, request_id)

        status_code = response.status_code
        content_type = response.content_type or None
        if error is None and not response.is_success:
            error = ApiCallFailedError(status_code=status_code)

        result: Optional[T] = None
        body: Optional[str] = None
        try:
            body = self.read_text(response)
            if error is None:
                result = parse(body)
        except Exception as e:
            logger.debug(f"Failed handling response body from {response.url}: {e!r}")
            error = e
            result = None

        if self._offline_policy(response):
            logger.debug(f"Treating HTTP {status_code} without a resolved URI as an offline response")
            return Response(status_code=status_code, content_type=content_type, request_id=request_id)

        if result is not None and error is None:
            return Response.success(status_code, content_type, result, request_id)

        return Response.failure(
            status_code,
            error or ApiCallFailedError(status_code=status_code),
            body,
            request_id,
        )
