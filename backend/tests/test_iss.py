"""Tests for the ISS position and crew client."""
import asyncio

import pytest

from cosmic_atlas.services.iss import ISSClient
from tests.fakes import ASTROS, ISS_NOW

POSITION_PATH = "/v1/satellites/25544"


@pytest.fixture
def iss(upstream, cache):
    return ISSClient(cache=cache, http_client=upstream.client())


class TestPosition:

    def test_reshaped(self, iss, upstream):
        upstream.add(POSITION_PATH, ISS_NOW)
        resp = asyncio.run(iss.get_position())
        assert resp.success
        assert resp.data == {
            "latitude": 51.5,
            "longitude": -0.12,
            "altitude": 417.2,
            "velocity": 27580.1,
            "timestamp": 1715342400,
        }

    def test_malformed_payload(self, iss, upstream):
        upstream.add(POSITION_PATH, {"latitude": "north"})
        resp = asyncio.run(iss.get_position())
        assert resp.success is False
        assert resp.error.code == "INVALID_RESPONSE"

    def test_upstream_failure_passes_through(self, iss, upstream):
        upstream.add(POSITION_PATH, status=429)
        resp = asyncio.run(iss.get_position())
        assert resp.error.code == "HTTP_ERROR"
        assert resp.error.status_code == 429


class TestAstronauts:

    def test_roster(self, iss, upstream, cache):
        upstream.add("/astros.json", ASTROS)
        resp = asyncio.run(iss.get_astronauts())
        assert resp.data["number"] == 3
        assert {"name": "Ye Guangfu", "craft": "Tiangong"} in resp.data["people"]
        assert asyncio.run(cache.get("ISS:astronauts")) is not None

    def test_cached_second_time(self, iss, upstream):
        upstream.add("/astros.json", ASTROS)

        async def run():
            await iss.get_astronauts()
            return await iss.get_astronauts()

        assert asyncio.run(run()).metadata.cached is True
        assert len(upstream.calls) == 1
