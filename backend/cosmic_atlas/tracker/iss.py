"""
Polling view model for the live ISS display.

Pulls ``/api/iss/position`` and ``/api/iss/astronauts`` from the backend
every few seconds. There is no retry or backoff: a failed refresh sets a
sticky error message, and the next tick simply tries again.
"""

import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional

import httpx

from cosmic_atlas.core.config import settings

logger = logging.getLogger(__name__)

LOAD_ERROR = "Failed to load ISS data"


class ISSTracker:
    def __init__(
        self,
        backend_url: Optional[str] = None,
        interval: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        on_update: Optional[Callable[["ISSTracker"], None]] = None,
    ):
        self.backend_url = (backend_url or settings.BACKEND_URL).rstrip("/")
        self.interval = interval if interval is not None else settings.ISS_POLL_INTERVAL_SECONDS
        self._owns_http = http_client is None
        self.http = http_client or httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT_SECONDS)
        self.on_update = on_update

        self.position: Optional[Dict[str, Any]] = None
        self.astronauts: List[Dict[str, str]] = []
        self.loading = True
        self.error: Optional[str] = None
        self.refresh_count = 0

        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def refresh(self) -> None:
        """One polling cycle: position first, then the ISS crew."""
        try:
            resp = await self.http.get(f"{self.backend_url}/api/iss/position")
            payload = resp.json()
            if payload.get("success"):
                self.position = payload["data"]

            resp = await self.http.get(f"{self.backend_url}/api/iss/astronauts")
            payload = resp.json()
            if payload.get("success"):
                self.astronauts = [p for p in payload["data"]["people"] if p.get("craft") == "ISS"]
        except (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.error(f"ISS refresh failed: {e}")
            self.error = LOAD_ERROR
        finally:
            self.loading = False
            self.refresh_count += 1

        if self.on_update is not None:
            self.on_update(self)

    async def _poll(self) -> None:
        loop = asyncio.get_running_loop()
        next_tick = loop.time()
        while True:
            try:
                await self.refresh()
            except Exception as e:
                logger.error(f"ISS tracker update failed: {e}")

            # Fixed cadence: the fetch time counts towards the interval
            next_tick += self.interval
            delay = next_tick - loop.time()
            if delay < 0:
                next_tick = loop.time()
                delay = 0
            await asyncio.sleep(delay)

    def start(self) -> asyncio.Task:
        """Refresh now and then every ``interval`` seconds until ``stop``."""
        if self.running:
            return self._task
        self._task = asyncio.create_task(self._poll())
        return self._task

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        except Exception as e:
            logger.error(f"ISS tracker polling ended with an error: {e}")

    async def aclose(self) -> None:
        try:
            await self.stop()
        finally:
            if self._owns_http:
                await self.http.aclose()

    async def __aenter__(self):
        self.start()
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()
