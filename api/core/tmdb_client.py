from __future__ import annotations

from typing import Any, Dict

import httpx

from .errors import CatalogUnavailableError

TMDB_BASE = "https://api.themoviedb.org/3"

_COMMON_PARAMS = {"language": "en-US", "page": 1, "include_adult": "false"}


class TMDBClient:
    """Thin async wrapper over the TMDB movie endpoints; safe to share across requests."""

    def __init__(self, api_key: str, timeout: float = 10.0):
        self.api_key = api_key
        self.timeout = timeout
        self._client = httpx.AsyncClient(timeout=self.timeout)

    async def _get(self, path: str, params: Dict[str, Any]) -> Dict[str, Any]:
        if not self.api_key:
            raise CatalogUnavailableError("TMDB API key is not configured")
        q = dict(params)
        q["api_key"] = self.api_key
        r = await self._client.get(f"{TMDB_BASE}{path}", params=q)
        r.raise_for_status()
        return r.json()

    async def discover_movies(self, filters: Dict[str, Any]) -> Dict[str, Any]:
        return await self._get("/discover/movie", {**_COMMON_PARAMS, **filters})

    async def search_movies(self, query: str, **filters: Any) -> Dict[str, Any]:
        return await self._get(
            "/search/movie", {**_COMMON_PARAMS, **filters, "query": query}
        )

    async def aclose(self):
        await self._client.aclose()
