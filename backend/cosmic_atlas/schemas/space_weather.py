"""
Space weather transfer shapes (NOAA SWPC products and NASA DONKI events).

NOAA publishes several products as a JSON array of arrays whose first row
is the header. The parsers below turn those tables into records and skip
rows that cannot be converted.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict


class SolarWind(BaseModel):
    time_tag: str
    bx_gsm: Optional[float] = None
    by_gsm: Optional[float] = None
    bz_gsm: Optional[float] = None
    lon_gsm: Optional[float] = None
    lat_gsm: Optional[float] = None
    bt: Optional[float] = None


class GeomagneticActivity(BaseModel):
    time_tag: str
    kp: float
    a_running: Optional[int] = None
    station_count: Optional[int] = None


class AuroraForecast(BaseModel):
    model_config = ConfigDict(extra="allow")

    north: Any = None
    south: Any = None


class DonkiEvent(BaseModel):
    model_config = ConfigDict(extra="allow")

    link: Optional[str] = None
    note: Optional[str] = None


class SolarFlare(DonkiEvent):
    flrID: Optional[str] = None
    beginTime: Optional[str] = None
    peakTime: Optional[str] = None
    endTime: Optional[str] = None
    classType: Optional[str] = None
    sourceLocation: Optional[str] = None
    activeRegionNum: Optional[int] = None


class CoronalMassEjection(DonkiEvent):
    activityID: Optional[str] = None
    startTime: Optional[str] = None
    sourceLocation: Optional[str] = None
    cmeAnalyses: Optional[List[Dict[str, Any]]] = None


def _to_float(val) -> Optional[float]:
    if val is None or val == "":
        return None
    try:
        return float(val)
    except (ValueError, TypeError):
        return None


def _to_int(val) -> Optional[int]:
    number = _to_float(val)
    return int(number) if number is not None else None


def parse_solar_wind(rows: Any) -> List[SolarWind]:
    """Parse ``mag-1-day.json``: [time_tag, bx, by, bz, lon, lat, bt]."""
    records = []
    if not isinstance(rows, list):
        return records
    for row in rows[1:]:
        try:
            records.append(SolarWind(
                time_tag=row[0],
                bx_gsm=_to_float(row[1]),
                by_gsm=_to_float(row[2]),
                bz_gsm=_to_float(row[3]),
                lon_gsm=_to_float(row[4]),
                lat_gsm=_to_float(row[5]),
                bt=_to_float(row[6]),
            ))
        except (IndexError, TypeError, ValueError):
            continue
    return records


def parse_kp_index(rows: Any) -> List[GeomagneticActivity]:
    """Parse ``noaa-planetary-k-index.json``: [time_tag, kp, a_running, station_count]."""
    records = []
    if not isinstance(rows, list):
        return records
    for row in rows[1:]:
        try:
            kp = _to_float(row[1])
            if kp is None:
                continue
            records.append(GeomagneticActivity(
                time_tag=row[0],
                kp=kp,
                a_running=_to_int(row[2]),
                station_count=_to_int(row[3]),
            ))
        except (IndexError, TypeError, ValueError):
            continue
    return records


def latest_kp(rows: Any) -> Optional[float]:
    history = parse_kp_index(rows)
    if not history:
        return None
    return history[-1].kp


def storm_level(kp: float) -> str:
    """NOAA G-scale label for a Kp value."""
    if kp >= 9:
        return "G5"
    if kp >= 8:
        return "G4"
    if kp >= 7:
        return "G3"
    if kp >= 6:
        return "G2"
    if kp >= 5:
        return "G1"
    return "QUIET"
