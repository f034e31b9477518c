"""API commands: plain request descriptions plus body-building strategies."""

from __future__ import annotations

import json
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional
from urllib.parse import urlencode

from .response import ResponseInfo


class HttpMethod(str, Enum):
    """HTTP verbs used by API commands."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
JSON_CONTENT_TYPE = "application/json"

# Type alias for a body-building strategy
RequestBodyBuilder = Callable[["Command"], Optional[str]]


def no_body(command: Command) -> Optional[str]:
    """Strategy for commands without a request body."""
    return None


def form_body(command: Command) -> Optional[str]:
    """Encode the command payload as an HTML form, skipping empty values."""
    fields = [(key, str(value)) for key, value in command.payload.items() if value not in (None, "")]
    return urlencode(fields)


def json_body(command: Command) -> Optional[str]:
    """Encode the command payload as JSON."""
    return json.dumps(command.payload)


@dataclass
class Command:
    """
    Description of one API operation.

    Attributes:
        path: Path relative to the API base (and country code, if used)
        http_method: HTTP verb
        content_type: Content type of the request body
        requires_country_code: Whether the URI includes the country code
        use_secure_uri: Whether the secure (https) API base is used
        payload: Data the body builder encodes
        body_builder: Strategy producing the body text (or None)
        request_id: Unique id correlating the call with its Response
        response_info: Filled in once a response has been received
    """

    path: str
    http_method: HttpMethod = HttpMethod.GET
    content_type: str = JSON_CONTENT_TYPE
    requires_country_code: bool = True
    use_secure_uri: bool = False
    payload: dict[str, Any] = field(default_factory=dict)
    body_builder: RequestBodyBuilder = no_body
    request_id: uuid.UUID = field(default_factory=uuid.uuid4)
    response_info: Optional[ResponseInfo] = None

    def build_request_body(self) -> Optional[str]:
        return self.body_builder(self)

    def set_additional_response_info(self, info: ResponseInfo) -> None:
        self.response_info = info


def new_releases_command(category: str) -> Command:
    return Command(path=f"products/new/{category.lower()}/")


def search_command() -> Command:
    return Command(path="")


def auth_token_command(
    client_id: str,
    client_secret: str,
    authorization_code: Optional[str] = None,
    refresh_token: Optional[str] = None,
) -> Command:
    """
    Build the command exchanging an authorization code or refresh token for a token.

    Exactly one of authorization_code and refresh_token is expected.
    """
    payload: dict[str, Any] = {"client_id": client_id, "client_secret": client_secret}
    if refresh_token:
        payload["grant_type"] = "refresh_token"
        payload["refresh_token"] = refresh_token
    else:
        payload["grant_type"] = "authorization_code"
        payload["code"] = authorization_code

    return Command(
        path="token/",
        http_method=HttpMethod.POST,
        content_type=FORM_CONTENT_TYPE,
        requires_country_code=False,
        use_secure_uri=True,
        payload=payload,
        body_builder=form_body,
    )
