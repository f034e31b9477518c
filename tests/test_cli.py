"""Tests for the command-line interface and diagnostics."""

import socket
from unittest.mock import patch

import pytest
from mixradio import cli
from mixradio.doctor import check_api_host, check_dependency, run_doctor
from mixradio.exceptions import ApiCallFailedError
from mixradio.models.response import Response
from mixradio.models.types import Category, Page, Product
from mixradio.tasks import MusicSearchTask, PlayMixTask, ShowProductTask


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch):
    """Keep CLI runs from reconfiguring the mixradio logger."""
    monkeypatch.setattr(cli, "setup_logging", lambda *args, **kwargs: None)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv(cli.CLIENT_ID_ENV, raising=False)
    monkeypatch.delenv(cli.CLIENT_SECRET_ENV, raising=False)


class FakeClient:
    """Stands in for MusicClient, recording calls."""

    calls = []
    response = Response(
        status_code=200,
        result=Page(items=[Product(id="Album.1", name="Absolution", category=Category.ALBUM)], total_results=1),
    )

    def __init__(self, settings):
        self.settings = settings

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return None

    async def get_new_releases_async(self, category, start_index, item_count):
        FakeClient.calls.append(("new-releases", category, start_index, item_count))
        return FakeClient.response

    async def search_async(self, term, category, start_index, item_count):
        FakeClient.calls.append(("search", term, category, start_index, item_count))
        return FakeClient.response


@pytest.fixture
def fake_client(monkeypatch):
    FakeClient.calls = []
    monkeypatch.setattr(cli, "MusicClient", FakeClient)
    return FakeClient


class TestParser:
    """Tests for argument parsing."""

    def test_new_releases_arguments(self):
        args = cli.create_parser().parse_args(["--country", "gb", "new-releases", "album", "--count", "5"])

        assert args.command == "new-releases"
        assert args.category == "album"
        assert args.count == 5
        assert args.start == 0

    def test_invalid_category_rejected(self):
        with pytest.raises(SystemExit):
            cli.create_parser().parse_args(["new-releases", "mix"])

    def test_auth_scopes(self):
        args = cli.create_parser().parse_args(["auth", "--scope", "read_userfavorites", "receive_notifications"])
        assert args.scope == ["read_userfavorites", "receive_notifications"]


class TestBuildSettings:
    """Tests for combining config sources."""

    def test_arguments(self):
        args = cli.create_parser().parse_args(
            ["--client-id", "abc", "--country", "FI", "--language", "fi", "--timeout", "5", "-v", "server-time"]
        )
        settings = cli.build_settings(args)

        assert settings.client_id == "abc"
        assert settings.country_code == "fi"
        assert settings.language == "fi"
        assert settings.network.request_timeout == 5
        assert settings.log_level == "DEBUG"

    def test_environment_client_id(self, monkeypatch):
        monkeypatch.setenv(cli.CLIENT_ID_ENV, "from-env")
        monkeypatch.setenv(cli.CLIENT_SECRET_ENV, "env-secret")
        settings = cli.build_settings(cli.create_parser().parse_args(["server-time"]))

        assert settings.client_id == "from-env"
        assert settings.client_secret == "env-secret"

    def test_config_file_overridden_by_arguments(self, tmp_path):
        config = tmp_path / "mixradio.yaml"
        config.write_text("client_id: from-file\ncountry_code: us\n")
        args = cli.create_parser().parse_args(["--config", str(config), "--country", "gb", "server-time"])

        settings = cli.build_settings(args)

        assert settings.client_id == "from-file"
        assert settings.country_code == "gb"


class TestBuildTask:
    """Tests for mapping launch targets to tasks."""

    def test_targets(self):
        parser = cli.create_parser()
        assert isinstance(cli.build_task(parser.parse_args(["launch", "search", "--terms", "x"])), MusicSearchTask)
        assert isinstance(cli.build_task(parser.parse_args(["launch", "mix", "--id", "1"])), PlayMixTask)
        product = cli.build_task(parser.parse_args(["launch", "product", "--id", "Album.1"]))
        assert isinstance(product, ShowProductTask)
        assert product.product_id == "Album.1"


class TestMain:
    """Tests for the entry point."""

    def test_no_command_prints_help(self, capsys):
        assert cli.main([]) == 1
        assert "usage" in capsys.readouterr().out

    def test_missing_client_id(self, capsys):
        assert cli.main(["--country", "gb", "new-releases", "album"]) == 1
        assert "Configuration error" in capsys.readouterr().out

    def test_new_releases(self, fake_client, capsys):
        code = cli.main(["--client-id", "abc", "--country", "gb", "new-releases", "album", "--start", "10"])

        assert code == 0
        assert fake_client.calls == [("new-releases", Category.ALBUM, 10, 10)]
        assert "Absolution" in capsys.readouterr().out

    def test_search_with_category(self, fake_client):
        assert cli.main(["--client-id", "abc", "--country", "gb", "search", "muse", "--category", "artist"]) == 0
        assert fake_client.calls == [("search", "muse", Category.ARTIST, 0, 10)]

    def test_failed_call_exit_code(self, fake_client, monkeypatch, capsys):
        monkeypatch.setattr(FakeClient, "response", Response(status_code=404, error=ApiCallFailedError(status_code=404)))

        assert cli.main(["--client-id", "abc", "--country", "gb", "new-releases", "album"]) == 1
        assert "404" in capsys.readouterr().out

    def test_launch(self):
        with patch("mixradio.tasks.base.webbrowser.open", return_value=True) as mock_open:
            assert cli.main(["launch", "gigs", "--terms", "London"]) == 0
        mock_open.assert_called_once_with("nokia-music://search/gigs/?term=London")

    def test_launch_missing_argument(self, capsys):
        assert cli.main(["launch", "product"]) == 1
        assert "product id" in capsys.readouterr().out

    def test_doctor(self):
        with patch("mixradio.cli.Console"), patch("mixradio.doctor.check_api_host", return_value=(True, "[OK] host")):
            assert cli.main(["--doctor"]) == 0


class TestDoctor:
    """Tests for diagnostic checks."""

    def test_dependency_present(self):
        assert check_dependency("json") == (True, "[OK] json")

    def test_dependency_missing(self):
        ok, message = check_dependency("mixradio_no_such_module", "nothing")
        assert ok is False
        assert message == "[MISSING] nothing"

    def test_api_host_resolves(self):
        with patch("mixradio.doctor.socket.gethostbyname", return_value="127.0.0.1"):
            assert check_api_host("http://api.mixrad.io/1.x/")[0] is True

    def test_api_host_dns_failure(self):
        with patch("mixradio.doctor.socket.gethostbyname", side_effect=socket.gaierror()):
            ok, message = check_api_host("http://api.mixrad.io/1.x/")
        assert ok is False
        assert "DNS" in message

    def test_run_doctor(self):
        with patch("mixradio.doctor.check_api_host", return_value=(True, "[OK] host")):
            assert run_doctor() == 0
