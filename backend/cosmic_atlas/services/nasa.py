"""
NASA Open APIs client

APOD, Mars Rover Photos, NeoWs, Earth imagery and DONKI space weather
events. https://api.nasa.gov/
"""

import logging
from typing import Any, Dict, Optional

import httpx

from cosmic_atlas.core.config import settings
from cosmic_atlas.schemas.envelope import APIResponse
from cosmic_atlas.services.api_client import APIClient
from cosmic_atlas.services.cache import Cache

logger = logging.getLogger(__name__)

DONKI_EVENT_TYPES = ("FLR", "SEP", "CME", "IPS", "MPC", "GST", "RBE", "HSS")
DEFAULT_DONKI_EVENT = "FLR"
DEFAULT_MARS_SOL = 1000


def normalize_donki_type(event_type: str) -> str:
    """Case-insensitive match against the DONKI event types; unknown types become FLR."""
    candidate = (event_type or "").upper()
    if candidate in DONKI_EVENT_TYPES:
        return candidate
    logger.warning(f"Unknown DONKI event type {event_type!r}, using {DEFAULT_DONKI_EVENT}")
    return DEFAULT_DONKI_EVENT


class NASAClient(APIClient):
    def __init__(
        self,
        cache: Optional[Cache] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        api_key: Optional[str] = None,
    ):
        super().__init__("NASA", settings.NASA_BASE_URL, settings.CACHE_TTL_APOD, cache, http_client)
        self.api_key = api_key or settings.NASA_API_KEY

    def _params(self, **extra: Any) -> Dict[str, Any]:
        params = {"api_key": self.api_key}
        params.update({k: v for k, v in extra.items() if v is not None})
        return params

    async def get_apod(self, date: Optional[str] = None) -> APIResponse:
        """Astronomy Picture of the Day. ``date`` is YYYY-MM-DD; today when omitted."""
        return await self.cached_get(
            "/planetary/apod",
            self._params(date=date),
            f"apod:{date or 'today'}",
            settings.CACHE_TTL_APOD,
        )

    async def get_mars_photos(
        self,
        rover: str,
        sol: Optional[int] = None,
        earth_date: Optional[str] = None,
        camera: Optional[str] = None,
    ) -> APIResponse:
        """
        Mars rover photos for curiosity, opportunity, spirit or perseverance.

        ``sol`` takes precedence over ``earth_date``; with neither, sol 1000
        is requested.
        """
        rover = rover.lower()
        if sol is not None:
            when = {"sol": sol}
        elif earth_date:
            when = {"earth_date": earth_date}
        else:
            when = {"sol": DEFAULT_MARS_SOL}

        params = self._params(camera=camera, **when)
        moment = next(iter(when.values()))
        return await self.cached_get(
            f"/mars-photos/api/v1/rovers/{rover}/photos",
            params,
            f"mars:{rover}:{moment}:{camera or 'all'}",
            settings.CACHE_TTL_MARS,
        )

    async def get_near_earth_objects(self, start_date: str, end_date: str) -> APIResponse:
        """NeoWs feed. The vendor limits the window to 7 days."""
        return await self.cached_get(
            "/neo/rest/v1/feed",
            self._params(start_date=start_date, end_date=end_date),
            f"neo:{start_date}:{end_date}",
            settings.CACHE_TTL_NEO,
        )

    async def get_earth_imagery(
        self,
        lat: float,
        lon: float,
        date: Optional[str] = None,
        dim: float = 0.025,
    ) -> APIResponse:
        """Landsat 8 imagery metadata; most recent image when ``date`` is omitted."""
        return await self.cached_get(
            "/planetary/earth/imagery",
            self._params(lat=lat, lon=lon, dim=dim, date=date),
            f"earth-imagery:{lat}:{lon}:{date or 'latest'}",
            settings.CACHE_TTL_EARTH,
        )

    async def get_donki_events(self, event_type: str, start_date: str, end_date: str) -> APIResponse:
        """
        DONKI notifications of one type:
        FLR (solar flare), SEP (solar energetic particle), CME (coronal mass ejection),
        IPS (interplanetary shock), MPC (magnetopause crossing), GST (geomagnetic storm),
        RBE (radiation belt enhancement), HSS (high speed stream).
        """
        kind = normalize_donki_type(event_type)
        return await self.cached_get(
            f"/DONKI/{kind}",
            self._params(startDate=start_date, endDate=end_date),
            f"donki:{kind}:{start_date}:{end_date}",
            settings.CACHE_TTL_SPACE_WEATHER,
        )
