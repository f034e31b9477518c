"""MusicClient: the public entry point for catalog requests."""

from __future__ import annotations

import asyncio
from datetime import datetime
from types import TracebackType
from typing import Callable, Optional

from ..auth.oauth import AuthBrowser, OAuthUserFlow
from ..auth.types import AuthResultCode, Scope, TokenResponse
from ..exceptions import ArgumentNullError
from ..http.handler import ApiRequestHandler
from ..models.commands import Command, new_releases_command, search_command
from ..models.config import MusicClientSettings
from ..models.response import CallbackAdapter, Response
from ..models.types import CatalogItem, Category, Page, Product, parse_catalog_page, parse_product_page

NewReleasesCallback = Callable[[Response[Page[Product]]], None]
SearchCallback = Callable[[Response[Page[CatalogItem]]], None]

# Categories the new releases endpoint serves
_NEW_RELEASE_CATEGORIES = frozenset({Category.ALBUM, Category.SINGLE, Category.TRACK})


def _paging_params(start_index: int, item_count: int) -> list[tuple[str, str]]:
    if start_index < 0:
        raise ValueError("start_index must not be negative")
    if item_count < 1:
        raise ValueError("item_count must be at least 1")
    return [("startindex", str(start_index)), ("itemsperpage", str(item_count))]


class MusicClient:
    """
    Client for the MixRadio catalog API.

    Every call comes in two forms: one taking a callback, which returns a
    future resolved once the callback has run, and an ``_async`` form
    returning the Response directly.

    Example:
        settings = MusicClientSettings(client_id="abc", country_code="gb")

        async with MusicClient(settings) as client:
            response = await client.get_new_releases_async(Category.ALBUM)
            if response.succeeded:
                for product in response.result.items:
                    print(product.name)
    """

    def __init__(
        self,
        settings: MusicClientSettings,
        request_handler: Optional[ApiRequestHandler] = None,
    ):
        """
        Initialize the client.

        Args:
            settings: Credentials, locale and network configuration
            request_handler: Handler to send requests with; built from
                settings when omitted
        """
        self.settings = settings
        self.request_handler = request_handler or ApiRequestHandler.from_settings(settings)
        self._oauth_flow: Optional[OAuthUserFlow] = None

    async def __aenter__(self) -> MusicClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def close(self) -> None:
        await self.request_handler.close()

    @property
    def server_time_utc(self) -> datetime:
        """Current time on the API servers, as far as it is known."""
        return self.request_handler.server_time_utc

    @property
    def token_response(self) -> Optional[TokenResponse]:
        return self._oauth_flow.token_response if self._oauth_flow else None

    def get_new_releases(
        self,
        callback: NewReleasesCallback,
        category: Category,
        start_index: int = 0,
        item_count: int = 10,
    ) -> asyncio.Future[None]:
        """
        Get new releases in a product category.

        Args:
            callback: Receives the Response
            category: ALBUM, SINGLE or TRACK
            start_index: Zero-based index of the first item
            item_count: Number of items per page

        Raises:
            ArgumentNullError: If callback is None
            ValueError: If the category has no new releases
        """
        if callback is None:
            raise ArgumentNullError("callback")
        command, params = self._new_releases_request(category, start_index, item_count)
        return self.request_handler.send_request_async(
            command, self.settings, params, CallbackAdapter(parse_product_page, callback)
        )

    async def get_new_releases_async(
        self,
        category: Category,
        start_index: int = 0,
        item_count: int = 10,
    ) -> Response[Page[Product]]:
        command, params = self._new_releases_request(category, start_index, item_count)
        return await self.request_handler.request(command, self.settings, parse_product_page, params)

    def search(
        self,
        callback: SearchCallback,
        term: str,
        category: Optional[Category] = None,
        start_index: int = 0,
        item_count: int = 10,
    ) -> asyncio.Future[None]:
        """
        Search the catalog.

        Args:
            callback: Receives the Response
            term: Text to search for
            category: Restricts results to one category when given

        Raises:
            ArgumentNullError: If callback is None
            ValueError: If term is empty
        """
        if callback is None:
            raise ArgumentNullError("callback")
        command, params = self._search_request(term, category, start_index, item_count)
        return self.request_handler.send_request_async(
            command, self.settings, params, CallbackAdapter(parse_catalog_page, callback)
        )

    async def search_async(
        self,
        term: str,
        category: Optional[Category] = None,
        start_index: int = 0,
        item_count: int = 10,
    ) -> Response[Page[CatalogItem]]:
        command, params = self._search_request(term, category, start_index, item_count)
        return await self.request_handler.request(command, self.settings, parse_catalog_page, params)

    async def authenticate_user_async(
        self,
        scopes: Scope,
        browser: AuthBrowser,
    ) -> Response[AuthResultCode]:
        """
        Authorize a user and obtain an access token.

        The token is available afterwards from ``token_response``.

        Raises:
            ValueError: If the settings carry no client secret
        """
        if not self.settings.client_secret:
            raise ValueError("A client secret is required to authenticate users")

        self._oauth_flow = OAuthUserFlow(
            self.settings.client_id,
            self.settings.client_secret,
            self.request_handler,
            self.settings,
        )
        return await self._oauth_flow.authenticate_user_async(
            self.settings.secure_api_base_uri, scopes, browser
        )

    @staticmethod
    def _new_releases_request(
        category: Category,
        start_index: int,
        item_count: int,
    ) -> tuple[Command, list[tuple[str, str]]]:
        if category not in _NEW_RELEASE_CATEGORIES:
            raise ValueError(f"New releases are not available for category {category.value!r}")
        return new_releases_command(category.value), _paging_params(start_index, item_count)

    @staticmethod
    def _search_request(
        term: str,
        category: Optional[Category],
        start_index: int,
        item_count: int,
    ) -> tuple[Command, list[tuple[str, str]]]:
        if not term or not term.strip():
            raise ValueError("Please supply a search term")

        params = [("q", term)]
        if category is not None and category is not Category.UNKNOWN:
            params.append(("category", category.value))
        params.extend(_paging_params(start_index, item_count))
        return search_command(), params
