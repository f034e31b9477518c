"""Exception types raised and delivered by the mixradio client."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .http.protocols import TransportResponse


class MixRadioError(Exception):
    """Base class for mixradio errors."""


class ArgumentNullError(MixRadioError, ValueError):
    """Raised synchronously when a required argument is missing."""

    def __init__(self, argument: str) -> None:
        super().__init__(f"{argument} must not be None")
        self.argument = argument


class ApiCredentialsRequiredError(MixRadioError):
    """Raised when the client is constructed without a client id."""


class ApiCallFailedError(MixRadioError):
    """
    Delivered when an API call could not be completed.

    Covers timeouts and non-success HTTP statuses. The status code is
    None when no HTTP response was received at all.
    """

    def __init__(self, message: str | None = None, status_code: int | None = None) -> None:
        if message is None:
            message = f"API call failed with HTTP {status_code}" if status_code else "API call failed"
        super().__init__(message)
        self.status_code = status_code


class TransportError(MixRadioError):
    """
    Raised by a transport when an exchange fails at the network level.

    Attributes:
        response: The HTTP response, if one was received before the failure
    """

    def __init__(self, message: str, response: TransportResponse | None = None) -> None:
        super().__init__(message)
        self.response = response


class AuthorizationCancelledError(MixRadioError):
    """Delivered when the user abandons the authorization flow."""
