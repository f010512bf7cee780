from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    PROJECT_NAME: str = "Cosmic Atlas"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"

    NASA_API_KEY: str = "DEMO_KEY"
    NASA_BASE_URL: str = "https://api.nasa.gov"
    NOAA_SWPC_BASE_URL: str = "https://services.swpc.noaa.gov"
    ISS_POSITION_URL: str = "https://api.wheretheiss.at/v1/satellites/25544"
    ISS_ASTROS_URL: str = "http://api.open-notify.org/astros.json"

    # Cache lifetimes, seconds
    CACHE_TTL_APOD: int = 3600
    CACHE_TTL_MARS: int = 3600
    CACHE_TTL_NEO: int = 3600
    CACHE_TTL_EARTH: int = 86400
    CACHE_TTL_SPACE_WEATHER: int = 300
    CACHE_TTL_ISS_POSITION: int = 5
    CACHE_TTL_ASTRONAUTS: int = 3600

    CACHE_BACKEND: str = "memory"  # memory | redis
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_DB: int = 0

    HTTP_TIMEOUT_SECONDS: float = 10.0
    USER_AGENT: str = "CosmicAtlas/1.0 (https://github.com/cosmic-atlas)"

    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT: str = "100/minute"

    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]
    LOG_LEVEL: str = "INFO"

    BACKEND_URL: str = "http://localhost:3001"
    ISS_POLL_INTERVAL_SECONDS: float = 5.0

    @property
    def REDIS_URL(self) -> str:
        return f"redis://{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"

    class Config:
        case_sensitive = True
        env_file = ".env"


settings = Settings()
