"""Types describing user authorization."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum, Flag, auto
from typing import Any, Optional

from ..parsing import parse_json_object


class Scope(Flag):
    """Permissions an application can request from a user."""

    NONE = 0
    READ_USER_PLAY_HISTORY = auto()
    RECEIVE_NOTIFICATIONS = auto()
    READ_USER_FAVORITES = auto()

    def as_string_param(self) -> str:
        """Space-separated scope names as the authorize endpoint expects them."""
        names = {
            Scope.READ_USER_PLAY_HISTORY: "read_userplayhistory",
            Scope.RECEIVE_NOTIFICATIONS: "receive_notifications",
            Scope.READ_USER_FAVORITES: "read_userfavorites",
        }
        return " ".join(name for scope, name in names.items() if scope in self)


class AuthResultCode(str, Enum):
    """Result of an authorization attempt."""

    UNKNOWN = "unknown"
    SUCCESS = "success"
    CANCELLED = "cancelled"
    ACCESS_DENIED = "access_denied"
    INVALID_SCOPE = "invalid_scope"
    UNAUTHORIZED_CLIENT = "unauthorized_client"
    SERVER_ERROR = "server_error"


@dataclass(frozen=True)
class TokenResponse:
    """An OAuth access token and the refresh token that renews it."""

    access_token: str
    refresh_token: Optional[str] = None
    expires_utc: Optional[datetime] = None
    user_id: Optional[str] = None

    @property
    def is_expired(self) -> bool:
        return self.expires_utc is not None and datetime.now(timezone.utc) >= self.expires_utc

    @classmethod
    def from_json(cls, text: str) -> TokenResponse:
        data: dict[str, Any] = parse_json_object(text)
        access_token = data.get("access_token")
        if not access_token:
            raise ValueError("Token response did not contain an access_token")

        expires_utc = None
        expires_in = data.get("expires_in")
        if expires_in is not None:
            expires_utc = datetime.now(timezone.utc) + timedelta(seconds=int(expires_in))

        return cls(
            access_token=str(access_token),
            refresh_token=data.get("refresh_token"),
            expires_utc=expires_utc,
            user_id=data.get("userid"),
        )
