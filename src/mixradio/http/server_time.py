"""Server clock offset derived from HTTP response headers."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from email.utils import parsedate_to_datetime
from typing import Callable, Optional

from .protocols import get_header

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ServerTimeTracker:
    """
    Tracks the offset between the local clock and the API server clock.

    The offset is captured from the first response carrying a usable
    ``Date`` header and frozen afterwards. An ``Age`` header (added by
    caching proxies) is added on top of the ``Date`` value.

    Example:
        tracker = ServerTimeTracker()
        tracker.update_from_headers({"Date": "Tue, 15 Nov 1994 08:12:31 GMT"})
        print(tracker.current_server_time_utc())
    """

    def __init__(self, clock: Callable[[], datetime] = _utc_now) -> None:
        """
        Args:
            clock: Returns the current local time as an aware UTC datetime
        """
        self._clock = clock
        self._offset = timedelta(0)
        self._captured = False

    @property
    def has_offset(self) -> bool:
        """True once an offset has been captured."""
        return self._captured

    @property
    def offset(self) -> timedelta:
        """Server time minus local time (zero until captured)."""
        return self._offset

    def update_from_headers(self, headers: Optional[Mapping[str, str]]) -> bool:
        """
        Capture the server time offset if it has not been captured yet.

        Args:
            headers: Response headers

        Returns:
            True if this call captured the offset
        """
        if self._captured or not headers:
            return False

        date_header = get_header(headers, "Date")
        if not date_header:
            return False

        try:
            server_time = parsedate_to_datetime(date_header)
            if server_time.tzinfo is None:
                server_time = server_time.replace(tzinfo=timezone.utc)
            else:
                server_time = server_time.astimezone(timezone.utc)
        except (TypeError, ValueError, OverflowError):
            logger.debug(f"Ignoring unparseable Date header: {date_header!r}")
            return False

        age_header = get_header(headers, "Age")
        if age_header:
            try:
                server_time += timedelta(seconds=int(age_header.strip()))
            except (ValueError, OverflowError):
                logger.debug(f"Ignoring unusable Age header: {age_header!r}")

        self._offset = server_time - self._clock()
        self._captured = True
        logger.debug(f"Captured server time offset: {self._offset.total_seconds():.3f}s")
        return True

    def current_server_time_utc(self) -> datetime:
        """Current time on the server clock, as far as we know it."""
        return self._clock() + self._offset
