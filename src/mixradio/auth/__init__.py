"""User authorization for mixradio."""

from .oauth import AuthBrowser, ConsoleAuthBrowser, OAuthUserFlow, parse_querystring_for_completed_flags
from .types import AuthResultCode, Scope, TokenResponse

__all__ = [
    "AuthBrowser",
    "AuthResultCode",
    "ConsoleAuthBrowser",
    "OAuthUserFlow",
    "Scope",
    "TokenResponse",
    "parse_querystring_for_completed_flags",
]
