"""Builds API request URIs from commands and client settings."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Optional
from urllib.parse import urlencode

from ..exceptions import ApiCredentialsRequiredError
from ..models.commands import Command
from ..models.config import MusicClientSettings

QueryParams = Iterable[tuple[str, str]]


class ApiUriBuilder:
    """
    Builds the URI for a command.

    Layout: ``{base}{country_code}/{path}?{query}`` where the country code
    is only included for country-scoped commands, and the query always
    carries ``domain=music`` and the client id.

    Example:
        builder = ApiUriBuilder()
        uri = builder.build_uri(new_releases_command("album"), settings, [("startindex", "0")])
    """

    def build_uri(
        self,
        command: Command,
        settings: MusicClientSettings,
        query_params: Optional[QueryParams] = None,
    ) -> str:
        """
        Build the full request URI.

        Raises:
            ApiCredentialsRequiredError: If settings carry no client id
            ValueError: If a country-scoped command has no country code
        """
        if not settings.client_id:
            raise ApiCredentialsRequiredError("A client id is required to call the API")

        base = settings.secure_api_base_uri if command.use_secure_uri else settings.api_base_uri
        if not base.endswith("/"):
            base += "/"

        uri = base
        if command.requires_country_code:
            if not settings.country_code:
                raise ValueError(f"A country code is required for {command.path or 'search'}")
            uri += f"{settings.country_code}/"
        uri += command.path.lstrip("/")

        params = [(key, value) for key, value in (query_params or []) if value is not None]
        params.append(("domain", "music"))
        params.append(("client_id", settings.client_id))
        if settings.language:
            params.append(("lang", settings.language))

        return f"{uri}?{urlencode(params)}"
