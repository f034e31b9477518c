"""Tests for ApiUriBuilder and commands."""

from urllib.parse import parse_qsl, urlparse

import pytest
from mixradio.exceptions import ApiCredentialsRequiredError
from mixradio.http.uri_builder import ApiUriBuilder
from mixradio.models.commands import (
    Command,
    HttpMethod,
    auth_token_command,
    form_body,
    json_body,
    new_releases_command,
    search_command,
)
from mixradio.models.config import MusicClientSettings


@pytest.fixture
def settings():
    return MusicClientSettings(client_id="test-id", country_code="GB")


class TestApiUriBuilder:
    """Tests for request URI construction."""

    def test_country_scoped_uri(self, settings):
        """Test catalog URIs include the country code and fixed parameters."""
        uri = ApiUriBuilder().build_uri(new_releases_command("Album"), settings, [("startindex", "0")])
        parsed = urlparse(uri)

        assert f"{parsed.scheme}://{parsed.netloc}{parsed.path}" == "http://api.mixrad.io/1.x/gb/products/new/album/"
        assert parse_qsl(parsed.query) == [
            ("startindex", "0"),
            ("domain", "music"),
            ("client_id", "test-id"),
        ]

    def test_language_added(self):
        """Test a configured language is sent as lang."""
        settings = MusicClientSettings(client_id="id", country_code="de", language="de")
        uri = ApiUriBuilder().build_uri(search_command(), settings, [("q", "Die Ärzte")])

        assert ("lang", "de") in parse_qsl(urlparse(uri).query)
        assert ("q", "Die Ärzte") in parse_qsl(urlparse(uri).query)

    def test_none_params_dropped(self, settings):
        """Test parameters without a value are left out."""
        uri = ApiUriBuilder().build_uri(search_command(), settings, [("q", "x"), ("category", None)])

        assert "category" not in uri

    def test_secure_uri_without_country(self, settings):
        """Test secure commands use the secure base and skip the country code."""
        uri = ApiUriBuilder().build_uri(auth_token_command("id", "secret", "code"), settings)

        assert uri.startswith("https://sapi.mixrad.io/1.x/token/?")

    def test_base_without_trailing_slash(self):
        """Test a base URI missing its trailing slash still joins correctly."""
        settings = MusicClientSettings(client_id="id", country_code="us", api_base_uri="http://localhost:8080/1.x")
        uri = ApiUriBuilder().build_uri(new_releases_command("track"), settings)

        assert uri.startswith("http://localhost:8080/1.x/us/products/new/track/?")

    def test_missing_country_code(self):
        """Test country-scoped commands need a country code."""
        settings = MusicClientSettings(client_id="id")
        with pytest.raises(ValueError):
            ApiUriBuilder().build_uri(new_releases_command("album"), settings)

    def test_missing_client_id(self, settings):
        """Test a blank client id is rejected."""
        blank = settings.model_copy(update={"client_id": ""})
        with pytest.raises(ApiCredentialsRequiredError):
            ApiUriBuilder().build_uri(new_releases_command("album"), blank)


class TestCommands:
    """Tests for commands and their body builders."""

    def test_get_commands_have_no_body(self):
        command = new_releases_command("single")
        assert command.http_method is HttpMethod.GET
        assert command.build_request_body() is None

    def test_request_ids_unique(self):
        assert new_releases_command("album").request_id != new_releases_command("album").request_id

    def test_form_body_skips_empty_values(self):
        """Test form bodies leave out empty payload values."""
        command = Command(path="x/", payload={"a": "1", "b": None, "c": ""}, body_builder=form_body)
        assert command.build_request_body() == "a=1"

    def test_json_body(self):
        command = Command(path="x/", payload={"a": 1}, body_builder=json_body)
        assert command.build_request_body() == '{"a": 1}'

    def test_refresh_token_grant(self):
        """Test a refresh token selects the refresh_token grant."""
        body = auth_token_command("id", "secret", refresh_token="r3fresh").build_request_body()

        assert "grant_type=refresh_token" in body
        assert "refresh_token=r3fresh" in body
        assert "code=" not in body
