from __future__ import annotations

import asyncio

import pytest

from api.core.errors import CatalogUnavailableError
from api.core.tmdb_client import TMDBClient


def test_get_appends_api_key_and_raises(monkeypatch):
    async def scenario():
        class DummyResponse:
            def __init__(self):
                self.checked = False

            def raise_for_status(self):
                self.checked = True

            def json(self):
                return {"ok": True}

        class DummyAsyncClient:
            def __init__(self, timeout):
                self.timeout = timeout
                self.calls = []
                self.closed = False
                self.response = DummyResponse()

            async def get(self, url, params):
                self.calls.append((url, params))
                return self.response

            async def aclose(self):
                self.closed = True

        dummy_client = DummyAsyncClient(timeout=15.0)

        def fake_async_client(timeout):
            assert timeout == 15.0
            return dummy_client

        monkeypatch.setattr("api.core.tmdb_client.httpx.AsyncClient", fake_async_client)

        client = TMDBClient("secret", timeout=15.0)
        data = await client._get("/foo", {"page": 3})

        assert data == {"ok": True}
        assert dummy_client.response.checked is True
        assert dummy_client.calls[0][0].endswith("/foo")
        assert dummy_client.calls[0][1] == {"page": 3, "api_key": "secret"}
        await client.aclose()
        assert dummy_client.closed is True

    asyncio.run(scenario())


def test_missing_key_raises_catalog_unavailable():
    async def scenario():
        client = TMDBClient("")
        try:
            with pytest.raises(CatalogUnavailableError):
                await client._get("/discover/movie", {})
        finally:
            await client.aclose()

    asyncio.run(scenario())


def test_discover_delegates_to_get(monkeypatch):
    async def scenario():
        client = TMDBClient("secret")

        async def fake_get(path, params):
            assert path == "/discover/movie"
            assert params == {
                "language": "en-US",
                "page": 1,
                "include_adult": "false",
                "with_genres": "35,16",
            }
            return {"results": [{"id": 1}]}

        monkeypatch.setattr(client, "_get", fake_get)
        data = await client.discover_movies({"with_genres": "35,16"})
        await client.aclose()

        assert data["results"][0]["id"] == 1

    asyncio.run(scenario())


def test_search_delegates_to_get(monkeypatch):
    async def scenario():
        client = TMDBClient("secret")

        async def fake_get(path, params):
            assert path == "/search/movie"
            assert params["query"] == "test query"
            assert params["vote_average.gte"] == 6.5
            assert params["include_adult"] == "false"
            return {"results": [{"id": 2}]}

        monkeypatch.setattr(client, "_get", fake_get)
        data = await client.search_movies("test query", **{"vote_average.gte": 6.5})
        await client.aclose()

        assert data["results"][0]["id"] == 2

    asyncio.run(scenario())
