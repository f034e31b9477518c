"""Compression negotiation and response decoding."""

from __future__ import annotations

import gzip
import io
from typing import BinaryIO

from .protocols import TransportResponse, get_header


class GzipHandler:
    """
    Negotiates gzip compression and decodes compressed response bodies.

    Example:
        handler = GzipHandler()
        handler.enable_compression(request.headers)
        ...
        with handler.get_decoded_stream(response) as stream:
            text = stream.read().decode("utf-8")
    """

    ACCEPT_ENCODING = "gzip"

    def __init__(self, enabled: bool = True) -> None:
        """
        Args:
            enabled: If False, no Accept-Encoding header is sent. Compressed
                     responses are still decoded.
        """
        self.enabled = enabled

    def enable_compression(self, headers: dict[str, str]) -> None:
        """Ask the server for a gzip-compressed response."""
        if self.enabled:
            headers["Accept-Encoding"] = self.ACCEPT_ENCODING

    def get_decoded_stream(self, response: TransportResponse) -> BinaryIO:
        """
        Return a readable stream over the decoded response body.

        Args:
            response: Response with raw content

        Returns:
            Binary stream yielding the uncompressed body
        """
        raw = io.BytesIO(response.content)
        encoding = get_header(response.headers, "Content-Encoding")
        if encoding and "gzip" in encoding.lower():
            return gzip.GzipFile(fileobj=raw, mode="rb")  # type: ignore[return-value]
        return raw
