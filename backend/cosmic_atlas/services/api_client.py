"""
Base class for the vendor API clients.

Every vendor method reduces to ``cached_get``: look the request up in the
cache, otherwise perform an HTTP GET and remember the JSON body for the
category TTL. Failures come back as failure envelopes instead of raising,
so callers always check ``response.success``.
"""

import logging
from typing import Any, Dict, Mapping, Optional

import httpx

from cosmic_atlas.core.config import settings
from cosmic_atlas.schemas.envelope import APIResponse, now_ms
from cosmic_atlas.services.cache import Cache, MemoryCache

logger = logging.getLogger(__name__)


class APIClient:
    def __init__(
        self,
        source: str,
        base_url: str,
        default_ttl: int,
        cache: Optional[Cache] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.source = source
        self.base_url = base_url
        self.default_ttl = default_ttl
        self.cache = cache if cache is not None else MemoryCache()
        self._owns_http = http_client is None
        self.http = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(settings.HTTP_TIMEOUT_SECONDS),
            headers={"User-Agent": settings.USER_AGENT, "Accept": "application/json"},
            follow_redirects=True,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    def _url(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

    async def cached_get(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        cache_key: Optional[str] = None,
        ttl: Optional[int] = None,
    ) -> APIResponse:
        """
        GET ``path`` relative to the base URL, served from cache when possible.

        The cache key is namespaced by source. Only successful responses
        are stored.
        """
        key = f"{self.source}:{cache_key or path}"
        ttl = self.default_ttl if ttl is None else ttl

        hit = await self.cache.get(key)
        if hit is not None:
            logger.debug(f"Cache hit {key}")
            return APIResponse.ok(hit["data"], self.source, cached=True, timestamp=hit["timestamp"])

        url = self._url(path)
        try:
            resp = await self.http.get(url, params=dict(params or {}))
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error(f"{self.source} request to {url} failed with HTTP {status}")
            return APIResponse.fail(
                "HTTP_ERROR",
                f"{self.source} responded with HTTP {status}",
                self.source,
                status_code=status,
            )
        except httpx.TimeoutException as e:
            logger.error(f"{self.source} request to {url} timed out: {e}")
            return APIResponse.fail("TIMEOUT", f"{self.source} request timed out", self.source)
        except httpx.RequestError as e:
            logger.error(f"{self.source} request to {url} failed: {e}")
            return APIResponse.fail("NETWORK_ERROR", f"Could not reach {self.source}", self.source)
        except ValueError as e:
            logger.error(f"{self.source} returned invalid JSON from {url}: {e}")
            return APIResponse.fail("INVALID_RESPONSE", f"{self.source} returned an invalid response", self.source)

        timestamp = now_ms()
        await self.cache.set(key, {"data": data, "timestamp": timestamp}, ttl)
        return APIResponse.ok(data, self.source, cached=False, timestamp=timestamp)

    def aggregate(self, results: Dict[str, APIResponse], code: str, message: str) -> APIResponse:
        """
        Combine independent sub-responses all-or-nothing.

        Success yields a dict of each sub-response's data under its name.
        A single failure yields one failure envelope with the fixed code and
        no partial data. Which parts failed is only logged.
        """
        failed = [name for name, result in results.items() if not result.success]
        if failed:
            logger.error(f"{code}: {', '.join(failed)} failed")
            return APIResponse.fail(code, message, self.source)
        return APIResponse.ok({name: result.data for name, result in results.items()}, self.source)
