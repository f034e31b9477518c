"""Tests for MusicClient catalog calls."""

import asyncio
import json
from urllib.parse import parse_qsl, urlparse

import pytest
from mixradio.core.client import MusicClient
from mixradio.exceptions import ApiCallFailedError, ArgumentNullError
from mixradio.http.handler import ApiRequestHandler
from mixradio.http.protocols import TransportResponse
from mixradio.models.config import MusicClientSettings
from mixradio.models.types import Artist, Category, Mix, Product

PRODUCTS = {
    "paging": {"startindex": 0, "itemsperpage": 10, "total": 2},
    "items": [
        {
            "id": "Album.1",
            "name": "Absolution",
            "category": {"id": "Album", "name": "Album"},
            "creators": {"performers": [{"id": "1", "name": "Muse"}]},
            "genres": [{"id": "Rock", "name": "Rock"}],
        },
        {
            "id": "Album.2",
            "name": "Origin of Symmetry",
            "category": {"id": "Album", "name": "Album"},
            "creators": {"performers": [{"id": "1", "name": "Muse"}]},
        },
    ],
}

SEARCH_RESULTS = {
    "paging": {"startindex": 0, "itemsperpage": 10, "total": 3},
    "items": [
        {"id": "1", "name": "Muse", "category": {"id": "Artist"}, "country": "GB"},
        {"id": "Track.9", "name": "Uprising", "category": {"id": "Track"}},
        {"id": "55", "name": "Rock Mix", "category": {"id": "Mix"}},
    ],
}


def json_response(data, status=200):
    return TransportResponse(
        status_code=status,
        headers={"Content-Type": "application/json"},
        content=json.dumps(data).encode("utf-8"),
        content_type="application/json; charset=utf-8",
        url="http://api.mixrad.io/1.x/gb/",
    )


class FakeTransport:
    """Transport returning the same response to every request."""

    def __init__(self, response):
        self.response = response
        self.requests = []

    async def write_body(self, request, body):
        request.body = body

    async def get_response(self, request):
        self.requests.append(request)
        return self.response


def make_client(response):
    transport = FakeTransport(response)
    settings = MusicClientSettings(client_id="test", client_secret="test", country_code="gb")
    return MusicClient(settings, ApiRequestHandler(transport=transport)), transport


def query_of(request):
    return dict(parse_qsl(urlparse(request.uri).query))


class TestNewReleases:
    """Tests for get_new_releases."""

    def test_unsupported_category_raises(self):
        """Test categories without new releases are rejected."""
        client, _ = make_client(json_response(PRODUCTS))
        for category in (Category.UNKNOWN, Category.ARTIST, Category.MIX):
            with pytest.raises(ValueError):
                client.get_new_releases(lambda response: None, category)

    def test_null_callback_raises(self):
        client, _ = make_client(json_response(PRODUCTS))
        with pytest.raises(ArgumentNullError):
            client.get_new_releases(None, Category.ALBUM)

    @pytest.mark.asyncio
    async def test_returns_items(self):
        """Test new releases are parsed into products."""
        client, transport = make_client(json_response(PRODUCTS))
        results = []

        await client.get_new_releases(results.append, Category.ALBUM)

        response = results[0]
        assert response.status_code == 200
        assert response.error is None
        assert len(response.result.items) == 2
        for product in response.result.items:
            assert isinstance(product, Product)
            assert product.id
            assert product.name
            assert product.category is Category.ALBUM
        assert response.result.items[0].performers == ("Muse",)
        assert response.result.total_results == 2
        assert urlparse(transport.requests[0].uri).path == "/1.x/gb/products/new/album/"

    @pytest.mark.asyncio
    async def test_failed_call_returns_error(self):
        """Test a 404 from the server is an ApiCallFailedError."""
        client, _ = make_client(json_response({}, status=404))
        results = []

        await client.get_new_releases(results.append, Category.ALBUM)

        response = results[0]
        assert response.status_code == 404
        assert isinstance(response.error, ApiCallFailedError)
        assert response.result is None

    @pytest.mark.asyncio
    async def test_async_variant_with_paging(self):
        """Test the awaitable form and its paging parameters."""
        client, transport = make_client(json_response(PRODUCTS))

        response = await client.get_new_releases_async(Category.SINGLE, 20, 5)

        assert len(response.result.items) == 2
        query = query_of(transport.requests[0])
        assert query["startindex"] == "20"
        assert query["itemsperpage"] == "5"
        assert urlparse(transport.requests[0].uri).path.endswith("/products/new/single/")

    @pytest.mark.asyncio
    async def test_invalid_paging_rejected(self):
        client, _ = make_client(json_response(PRODUCTS))
        with pytest.raises(ValueError):
            await client.get_new_releases_async(Category.ALBUM, -1)
        with pytest.raises(ValueError):
            await client.get_new_releases_async(Category.ALBUM, 0, 0)


class TestSearch:
    """Tests for search."""

    def test_empty_term_raises(self):
        client, _ = make_client(json_response(SEARCH_RESULTS))
        with pytest.raises(ValueError):
            client.search(lambda response: None, "  ")

    def test_null_callback_raises(self):
        client, _ = make_client(json_response(SEARCH_RESULTS))
        with pytest.raises(ArgumentNullError):
            client.search(None, "muse")

    @pytest.mark.asyncio
    async def test_results_typed_by_category(self):
        """Test search results become artists, products and mixes."""
        client, transport = make_client(json_response(SEARCH_RESULTS))
        results = []

        await client.search(results.append, "muse")

        items = results[0].result.items
        assert isinstance(items[0], Artist)
        assert items[0].country == "GB"
        assert isinstance(items[1], Product)
        assert items[1].category is Category.TRACK
        assert isinstance(items[2], Mix)
        query = query_of(transport.requests[0])
        assert query["q"] == "muse"
        assert "category" not in query
        assert urlparse(transport.requests[0].uri).path == "/1.x/gb/"

    @pytest.mark.asyncio
    async def test_category_filter(self):
        client, transport = make_client(json_response(SEARCH_RESULTS))

        await client.search_async("muse", Category.ARTIST, item_count=3)

        query = query_of(transport.requests[0])
        assert query["category"] == "artist"
        assert query["itemsperpage"] == "3"


class TestClientLifecycle:
    """Tests for server time and resource handling."""

    @pytest.mark.asyncio
    async def test_server_time_from_responses(self):
        response = TransportResponse(
            status_code=200,
            headers={"Date": "Wed, 01 May 2013 12:00:00 GMT"},
            content=json.dumps(PRODUCTS).encode(),
            url="http://api.mixrad.io/1.x/gb/",
        )
        client, _ = make_client(response)

        await client.get_new_releases_async(Category.ALBUM)

        assert client.request_handler.server_time.has_offset is True
        assert client.server_time_utc.tzinfo is not None

    @pytest.mark.asyncio
    async def test_context_manager_closes_handler(self):
        client, _ = make_client(json_response(PRODUCTS))
        closed = asyncio.Event()

        async def close():
            closed.set()

        client.request_handler.close = close
        async with client:
            pass

        assert closed.is_set()
