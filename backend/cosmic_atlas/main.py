from contextlib import asynccontextmanager
from typing import Optional
import asyncio
import logging

import httpx
from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from cosmic_atlas.api.api import api_router
from cosmic_atlas.core.config import settings
from cosmic_atlas.core.logging import setup_logging
from cosmic_atlas.services.cache import Cache, build_cache
from cosmic_atlas.services.iss import ISSClient
from cosmic_atlas.services.nasa import NASAClient
from cosmic_atlas.services.space_weather import SpaceWeatherClient

logger = logging.getLogger(__name__)


# ── WebSocket: live ISS position stream ──────────────────
class ConnectionManager:
    """Tracks open WebSocket connections."""

    def __init__(self):
        self.active_connections: list[WebSocket] = []

    async def connect(self, websocket: WebSocket):
        await websocket.accept()
        self.active_connections.append(websocket)

    def disconnect(self, websocket: WebSocket):
        if websocket in self.active_connections:
            self.active_connections.remove(websocket)


def create_app(cache: Optional[Cache] = None, http_client: Optional[httpx.AsyncClient] = None) -> FastAPI:
    """
    Build the API application.

    ``cache`` and ``http_client`` replace the configured cache backend and
    the per-client HTTP connections (used by the tests).
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        shared_cache = cache if cache is not None else build_cache(settings)
        app.state.cache = shared_cache
        app.state.nasa = NASAClient(cache=shared_cache, http_client=http_client)
        app.state.space_weather = SpaceWeatherClient(
            cache=shared_cache, http_client=http_client, nasa_client=app.state.nasa
        )
        app.state.iss = ISSClient(cache=shared_cache, http_client=http_client)
        logger.info(f"{settings.PROJECT_NAME} API started")
        try:
            yield
        finally:
            await app.state.space_weather.aclose()
            await app.state.nasa.aclose()
            await app.state.iss.aclose()
            if cache is None and hasattr(shared_cache, "aclose"):
                await shared_cache.aclose()
            logger.info(f"{settings.PROJECT_NAME} API stopped")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Aggregated space data: NASA Open APIs, NOAA SWPC space weather and live ISS tracking.",
        version=settings.VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    if settings.RATE_LIMIT_ENABLED:
        storage_uri = settings.REDIS_URL if settings.CACHE_BACKEND == "redis" else "memory://"
        app.state.limiter = Limiter(
            key_func=get_remote_address,
            default_limits=[settings.RATE_LIMIT],
            storage_uri=storage_uri,
        )
        app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
        app.add_middleware(SlowAPIMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    @app.get("/")
    def read_root():
        return {"message": f"Welcome to {settings.PROJECT_NAME} API", "status": "active", "version": settings.VERSION}

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    app.include_router(api_router, prefix=settings.API_PREFIX)

    manager = ConnectionManager()

    @app.websocket("/ws/iss")
    async def websocket_iss(websocket: WebSocket):
        """
        Streams the ISS position at a fixed interval (default 5 s).
        The client may send {"interval": seconds} at any time; clamped to 2..60.
        """
        try:
            await manager.connect(websocket)
        except WebSocketDisconnect:
            logger.info("WebSocket disconnected immediately")
            return

        interval = settings.ISS_POLL_INTERVAL_SECONDS
        try:
            while True:
                result = await app.state.iss.get_position()
                if result.success:
                    await websocket.send_json({
                        "type": "iss_position",
                        "data": result.data,
                        "metadata": result.metadata.model_dump(),
                    })
                else:
                    await websocket.send_json({"type": "error", "error": result.error.model_dump()})

                # Waiting on the socket doubles as the tick and notices disconnects
                try:
                    message = await asyncio.wait_for(websocket.receive_json(), timeout=interval)
                except asyncio.TimeoutError:
                    continue
                except (ValueError, KeyError):
                    logger.warning("Ignoring malformed or binary WebSocket message")
                    continue
                if isinstance(message, dict) and "interval" in message:
                    try:
                        interval = max(2.0, min(60.0, float(message["interval"])))
                    except (TypeError, ValueError):
                        logger.warning(f"Ignoring invalid interval {message['interval']!r}")
        except WebSocketDisconnect:
            logger.info("WebSocket disconnected")
        finally:
            manager.disconnect(websocket)

    app.state.connections = manager
    return app


setup_logging(settings.LOG_LEVEL)
app = create_app()
