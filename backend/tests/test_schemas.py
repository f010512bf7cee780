"""Tests for the vendor record shapes and NOAA table parsers."""
import pytest

from cosmic_atlas.schemas.nasa import APOD, hazardous_objects
from cosmic_atlas.schemas.space_weather import (
    SolarFlare,
    latest_kp,
    parse_kp_index,
    parse_solar_wind,
    storm_level,
)
from tests.fakes import KP_ROWS, MAG_ROWS


class TestKpIndex:

    def test_parse(self):
        rows = parse_kp_index(KP_ROWS)
        assert len(rows) == 2
        assert rows[0].kp == pytest.approx(5.33)
        assert rows[0].a_running == 56
        assert rows[1].station_count == 8

    def test_skips_bad_rows(self):
        rows = parse_kp_index(KP_ROWS + [["2024-05-10 18:00:00.000", "n/a", "1", "1"], ["short"]])
        assert len(rows) == 2

    def test_not_a_table(self):
        assert parse_kp_index({"error": "x"}) == []
        assert latest_kp(None) is None

    def test_latest(self):
        assert latest_kp(KP_ROWS) == pytest.approx(8.67)

    @pytest.mark.parametrize("kp, level", [
        (0.0, "QUIET"), (4.67, "QUIET"), (5.0, "G1"), (6.33, "G2"), (7.0, "G3"), (8.67, "G4"), (9.0, "G5"),
    ])
    def test_storm_level(self, kp, level):
        assert storm_level(kp) == level


class TestSolarWind:

    def test_parse(self):
        rows = parse_solar_wind(MAG_ROWS)
        assert rows[0].bz_gsm == pytest.approx(-12.5)
        assert rows[0].bt == pytest.approx(15.3)

    def test_null_readings(self):
        rows = parse_solar_wind([MAG_ROWS[0], ["2024-05-10 12:01:00.000", None, None, None, None, None, None]])
        assert rows[0].bt is None


class TestVendorRecords:

    def test_extra_fields_kept(self):
        apod = APOD.model_validate({"title": "M31", "service_version": "v1"})
        assert apod.model_dump()["service_version"] == "v1"

    def test_flare(self):
        flare = SolarFlare.model_validate({"flrID": "2024-05-10T06:27:00-FLR-001", "classType": "X3.9"})
        assert flare.classType == "X3.9"

    def test_hazardous_objects(self):
        feed = {
            "element_count": 3,
            "near_earth_objects": {
                "2024-01-02": [{"id": "3", "name": "C", "is_potentially_hazardous_asteroid": True}],
                "2024-01-01": [
                    {"id": "1", "name": "A", "is_potentially_hazardous_asteroid": True},
                    {"id": "2", "name": "B", "is_potentially_hazardous_asteroid": False},
                ],
            },
        }
        assert [n.id for n in hazardous_objects(feed)] == ["1", "3"]
        assert hazardous_objects({}) == []
