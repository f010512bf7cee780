"""
ISS live data: position from wheretheiss.at, crew roster from Open Notify.
"""

import logging
from typing import Optional

import httpx

from cosmic_atlas.core.config import settings
from cosmic_atlas.schemas.envelope import APIResponse
from cosmic_atlas.schemas.iss import AstronautRoster, ISSPosition
from cosmic_atlas.services.api_client import APIClient
from cosmic_atlas.services.cache import Cache

logger = logging.getLogger(__name__)


class ISSClient(APIClient):
    def __init__(self, cache: Optional[Cache] = None, http_client: Optional[httpx.AsyncClient] = None):
        super().__init__("ISS", settings.ISS_POSITION_URL, settings.CACHE_TTL_ISS_POSITION, cache, http_client)

    async def get_position(self) -> APIResponse:
        """Current sub-satellite point (degrees), altitude (km) and velocity (km/h)."""
        resp = await self.cached_get(settings.ISS_POSITION_URL, cache_key="iss-position", ttl=settings.CACHE_TTL_ISS_POSITION)
        if not resp.success:
            return resp
        try:
            position = ISSPosition.model_validate(resp.data)
        except ValueError as e:
            logger.error(f"Unexpected ISS position payload: {e}")
            return APIResponse.fail("INVALID_RESPONSE", "ISS position payload was malformed", self.source)
        resp.data = position.model_dump()
        return resp

    async def get_astronauts(self) -> APIResponse:
        """People currently in space, with the craft each is aboard."""
        resp = await self.cached_get(settings.ISS_ASTROS_URL, cache_key="astronauts", ttl=settings.CACHE_TTL_ASTRONAUTS)
        if not resp.success:
            return resp
        try:
            roster = AstronautRoster.model_validate(resp.data)
        except ValueError as e:
            logger.error(f"Unexpected astronaut roster payload: {e}")
            return APIResponse.fail("INVALID_RESPONSE", "Astronaut roster payload was malformed", self.source)
        resp.data = roster.model_dump()
        return resp
