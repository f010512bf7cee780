"""Tests for the command line entry point."""
from typer.testing import CliRunner

from cosmic_atlas import cli
from cosmic_atlas.services.space_weather import SpaceWeatherClient
from tests.fakes import install_space_weather

runner = CliRunner()


class TestKpCommand:

    def test_prints_latest_kp(self, upstream, cache, monkeypatch):
        install_space_weather(upstream)
        monkeypatch.setattr(cli, "SpaceWeatherClient", lambda: SpaceWeatherClient(cache=cache, http_client=upstream.client()))
        result = runner.invoke(cli.app, ["kp"])
        assert result.exit_code == 0
        assert "8.67" in result.output
        assert "G4" in result.output

    def test_upstream_failure(self, upstream, cache, monkeypatch):
        upstream.add("/products/noaa-planetary-k-index.json", status=503)
        monkeypatch.setattr(cli, "SpaceWeatherClient", lambda: SpaceWeatherClient(cache=cache, http_client=upstream.client()))
        result = runner.invoke(cli.app, ["kp"])
        assert result.exit_code == 1
        assert "HTTP_ERROR" in result.output


class TestHelp:

    def test_iss_group(self):
        result = runner.invoke(cli.app, ["iss", "--help"])
        assert result.exit_code == 0
        assert "watch" in result.output
