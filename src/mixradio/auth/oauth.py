"""OAuth user authorization flow."""

from __future__ import annotations

import asyncio
import logging
import webbrowser
from typing import Optional, Protocol
from urllib.parse import parse_qs, quote, urlparse

from ..exceptions import AuthorizationCancelledError
from ..http.handler import ApiRequestHandler
from ..models.commands import auth_token_command
from ..models.config import MusicClientSettings
from ..models.response import Response
from .types import AuthResultCode, Scope, TokenResponse

logger = logging.getLogger(__name__)


class AuthBrowser(Protocol):
    """Drives the user through the authorize page."""

    async def authenticate(self, start_uri: str) -> Optional[str]:
        """
        Show start_uri to the user and wait for the flow to finish.

        Returns:
            The final redirect URI (carrying ``code`` or ``error``), or
            None if the user cancelled
        """
        ...


class ConsoleAuthBrowser:
    """Opens the system browser and reads the redirect URI from the console."""

    def __init__(self, prompt: str = "Paste the URL you were redirected to") -> None:
        self.prompt = prompt

    async def authenticate(self, start_uri: str) -> Optional[str]:
        from rich.prompt import Prompt

        webbrowser.open(start_uri)
        answer = await asyncio.to_thread(Prompt.ask, self.prompt, default="")
        return answer.strip() or None


_ERROR_CODES = {
    "access_denied": AuthResultCode.ACCESS_DENIED,
    "invalid_scope": AuthResultCode.INVALID_SCOPE,
    "unauthorized_client": AuthResultCode.UNAUTHORIZED_CLIENT,
    "server_error": AuthResultCode.SERVER_ERROR,
}


def parse_querystring_for_completed_flags(uri: str) -> tuple[bool, AuthResultCode, Optional[str]]:
    """
    Inspect a redirect URI for the outcome of the authorize step.

    Args:
        uri: The redirect URI, or just its query string

    Returns:
        Tuple of (completed, result_code, authorization_code). completed is
        False when the URI carries neither a code nor an error.
    """
    query = urlparse(uri).query if "?" in uri or "://" in uri else uri.lstrip("?")
    params = parse_qs(query)

    code = params.get("code", [None])[0]
    if code:
        return True, AuthResultCode.SUCCESS, code

    error = params.get("error", [None])[0]
    if error:
        return True, _ERROR_CODES.get(error.lower(), AuthResultCode.UNKNOWN), None

    return False, AuthResultCode.UNKNOWN, None


class OAuthUserFlow:
    """
    Authorizes a user and obtains an access token.

    Example:
        flow = OAuthUserFlow(settings.client_id, secret, handler, settings)
        response = await flow.authenticate_user_async(
            settings.secure_api_base_uri,
            Scope.READ_USER_PLAY_HISTORY,
            ConsoleAuthBrowser(),
        )
        if response.result is AuthResultCode.SUCCESS:
            print(flow.token_response.access_token)
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        request_handler: ApiRequestHandler,
        settings: MusicClientSettings,
    ) -> None:
        self._client_id = client_id
        self._client_secret = client_secret
        self._handler = request_handler
        self._settings = settings
        self._secure_base_api_uri = settings.secure_api_base_uri
        self.token_call_in_progress = False
        self.token_response: Optional[TokenResponse] = None

    @property
    def is_busy(self) -> bool:
        return self.token_call_in_progress

    def construct_authorize_uri(self, scopes: Scope) -> str:
        """Build the URI that starts the authorize step."""
        return (
            f"{self._secure_base_api_uri}authorize/?response_type=code"
            f"&client_id={quote(self._client_id, safe='')}"
            f"&scope={scopes.as_string_param().replace(' ', '+')}"
        )

    async def authenticate_user_async(
        self,
        secure_base_api_uri: str,
        scopes: Scope,
        browser: AuthBrowser,
    ) -> Response[AuthResultCode]:
        """
        Run the full flow: authorize in the browser, then fetch a token.

        Returns:
            Response whose result is the AuthResultCode, or whose error is
            an AuthorizationCancelledError if the user abandoned the browser step
        """
        self._secure_base_api_uri = secure_base_api_uri
        final_uri = await browser.authenticate(self.construct_authorize_uri(scopes))
        if final_uri is None:
            logger.info("User cancelled authorization")
            return Response(error=AuthorizationCancelledError("Authorization cancelled"))

        completed, result_code, authorization_code = parse_querystring_for_completed_flags(final_uri)
        if not completed:
            return Response(result=AuthResultCode.UNKNOWN)

        return await self.obtain_token(authorization_code, None, result_code)

    async def obtain_token(
        self,
        authorization_code: Optional[str],
        refresh_token: Optional[str],
        result_code: AuthResultCode,
    ) -> Response[AuthResultCode]:
        """
        Exchange an authorization code or refresh token for an access token.

        Without either, the result code gathered so far is returned as is.
        """
        if not authorization_code and not refresh_token:
            return Response(result=result_code)

        command = auth_token_command(
            client_id=self._client_id,
            client_secret=self._client_secret,
            authorization_code=authorization_code,
            refresh_token=refresh_token,
        )

        self.token_call_in_progress = True
        try:
            token = await self._handler.request(command, self._settings, TokenResponse.from_json)
        finally:
            self.token_call_in_progress = False

        if token.result is None:
            logger.warning(f"Token request failed: {token.error!r}")
            return Response(status_code=token.status_code, result=AuthResultCode.UNKNOWN)

        self.token_response = token.result
        return Response(status_code=token.status_code, result=AuthResultCode.SUCCESS)
