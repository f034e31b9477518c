"""
mixradio - Asynchronous client for the MixRadio music catalog API.

Usage:
    from mixradio import Category, MusicClient, MusicClientSettings

    settings = MusicClientSettings(client_id="abc", country_code="gb")

    async with MusicClient(settings) as client:
        response = await client.get_new_releases_async(Category.ALBUM)
        print(response.result)
"""

__version__ = "1.0.0"

from .core.client import MusicClient
from .exceptions import (
    ApiCallFailedError,
    ApiCredentialsRequiredError,
    ArgumentNullError,
    AuthorizationCancelledError,
    MixRadioError,
    TransportError,
)
from .http.handler import ApiRequestHandler
from .logging_config import setup_logging
from .models.config import MusicClientSettings, NetworkConfig
from .models.response import Response
from .models.types import Artist, Category, Mix, Page, Product

__all__ = [
    "__version__",
    # Core
    "MusicClient",
    "ApiRequestHandler",
    "setup_logging",
    # Config
    "MusicClientSettings",
    "NetworkConfig",
    # Results
    "Response",
    "Page",
    "Category",
    "Artist",
    "Product",
    "Mix",
    # Errors
    "MixRadioError",
    "ArgumentNullError",
    "ApiCredentialsRequiredError",
    "ApiCallFailedError",
    "TransportError",
    "AuthorizationCancelledError",
]
