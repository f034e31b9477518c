"""Mixradio configuration, command, response and catalog models."""

from .commands import (
    Command,
    HttpMethod,
    auth_token_command,
    form_body,
    json_body,
    new_releases_command,
    no_body,
    search_command,
)
from .config import MusicClientSettings, NetworkConfig
from .response import CallbackAdapter, Response, ResponseCallback, ResponseInfo
from .types import (
    Artist,
    CatalogItem,
    Category,
    Mix,
    Page,
    Product,
    parse_catalog_page,
    parse_product_page,
)

__all__ = [
    # Commands
    "Command",
    "HttpMethod",
    "auth_token_command",
    "form_body",
    "json_body",
    "new_releases_command",
    "no_body",
    "search_command",
    # Config
    "MusicClientSettings",
    "NetworkConfig",
    # Responses
    "CallbackAdapter",
    "Response",
    "ResponseCallback",
    "ResponseInfo",
    # Catalog
    "Artist",
    "CatalogItem",
    "Category",
    "Mix",
    "Page",
    "Product",
    "parse_catalog_page",
    "parse_product_page",
]
