"""
Space Weather client

NOAA SWPC real-time products (solar wind, Kp index, aurora, 3-day
forecast) combined with NASA DONKI event history.
https://services.swpc.noaa.gov/
"""

import asyncio
from typing import Optional

import httpx

from cosmic_atlas.core.config import settings
from cosmic_atlas.schemas.envelope import APIResponse
from cosmic_atlas.services.api_client import APIClient
from cosmic_atlas.services.cache import Cache
from cosmic_atlas.services.nasa import NASAClient

AURORA_FORECAST_ERROR = "AURORA_FORECAST_ERROR"
SPACE_WEATHER_ERROR = "SPACE_WEATHER_ERROR"


class SpaceWeatherClient(APIClient):
    def __init__(
        self,
        cache: Optional[Cache] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        nasa_client: Optional[NASAClient] = None,
    ):
        super().__init__("NOAA-SWPC", settings.NOAA_SWPC_BASE_URL, settings.CACHE_TTL_SPACE_WEATHER, cache, http_client)
        self._owns_nasa = nasa_client is None
        self.nasa = nasa_client or NASAClient(cache=self.cache, http_client=http_client)

    async def aclose(self) -> None:
        await super().aclose()
        if self._owns_nasa:
            await self.nasa.aclose()

    async def get_solar_wind(self) -> APIResponse:
        """Interplanetary magnetic field over the last day (Bx, By, Bz, Bt)."""
        return await self.cached_get("/products/solar-wind/mag-1-day.json", cache_key="solar-wind")

    async def get_geomagnetic_activity(self) -> APIResponse:
        """
        Planetary Kp index, 0-9.
        0-4 quiet, 5 minor storm, 6 moderate, 7 strong, 8-9 severe.
        """
        return await self.cached_get("/products/noaa-planetary-k-index.json", cache_key="kp-index")

    async def get_3day_forecast(self) -> APIResponse:
        return await self.cached_get("/products/3-day-forecast.json", cache_key="forecast-3day")

    async def get_aurora_forecast(self) -> APIResponse:
        """Aurora forecast for both hemispheres. Fails unless both hemispheres load."""
        north, south = await asyncio.gather(
            self.cached_get("/products/aurora-forecast-northern-hemisphere.json", cache_key="aurora-north"),
            self.cached_get("/products/aurora-forecast-southern-hemisphere.json", cache_key="aurora-south"),
        )
        return self.aggregate(
            {"north": north, "south": south},
            AURORA_FORECAST_ERROR,
            "Failed to fetch aurora forecast",
        )

    async def get_solar_flares(self, start_date: str, end_date: str) -> APIResponse:
        return await self.nasa.get_donki_events("FLR", start_date, end_date)

    async def get_cmes(self, start_date: str, end_date: str) -> APIResponse:
        """Coronal mass ejections, including Earth impact predictions."""
        return await self.nasa.get_donki_events("CME", start_date, end_date)

    async def get_geomagnetic_storms(self, start_date: str, end_date: str) -> APIResponse:
        return await self.nasa.get_donki_events("GST", start_date, end_date)

    async def get_sep_events(self, start_date: str, end_date: str) -> APIResponse:
        return await self.nasa.get_donki_events("SEP", start_date, end_date)

    async def get_space_weather_summary(self) -> APIResponse:
        """
        Solar wind, Kp index, aurora and 3-day forecast fetched in parallel.

        All four must succeed; otherwise a single SPACE_WEATHER_ERROR is
        returned and none of the partial data.
        """
        solar_wind, kp, aurora, forecast = await asyncio.gather(
            self.get_solar_wind(),
            self.get_geomagnetic_activity(),
            self.get_aurora_forecast(),
            self.get_3day_forecast(),
        )
        result = self.aggregate(
            {
                "solar_wind": solar_wind,
                "geomagnetic_activity": kp,
                "aurora_forecast": aurora,
                "forecast_3day": forecast,
            },
            SPACE_WEATHER_ERROR,
            "Failed to fetch complete space weather data",
        )
        if result.success:
            result.data["timestamp"] = result.metadata.timestamp
        return result
