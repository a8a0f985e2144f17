from __future__ import annotations

import asyncio
import random
from datetime import datetime

import pytest

from api.core import llm_parser, sommelier
from api.core.errors import InvalidMoodError
from api.core.mood_intent import MoodIntent
from api.core.sommelier import previous_item_ids, recommend, validate_mood

NOW = datetime(2024, 3, 2, 21, 0)


class StubTMDB:
    def __init__(self, results):
        self.results = results
        self.filters = []

    async def discover_movies(self, filters):
        self.filters.append(filters)
        return {"results": self.results}

    async def search_movies(self, query, **filters):
        return {"results": []}


def _raw(item_id, vote=8.0, genres=(35,)):
    return {"id": item_id, "title": f"Movie {item_id}", "vote_average": vote, "genre_ids": list(genres)}


def _run(mood, previous=None, client=None):
    return asyncio.run(
        recommend(mood, previous, tmdb_client=client, now=NOW, rng=random.Random(7))
    )


@pytest.mark.parametrize("mood", [None, "", "   ", 42])
def test_validate_mood_rejects_empty_input(mood):
    with pytest.raises(InvalidMoodError, match="Mood description is required"):
        validate_mood(mood)


def test_recommend_raises_for_invalid_mood():
    with pytest.raises(InvalidMoodError):
        _run("  ")


def test_previous_item_ids_normalises_entries():
    assert previous_item_ids([1, "2", {"id": 3}, {"title": "x"}, True, 1, "abc"]) == [1, 2, 3]
    assert previous_item_ids(None) == []


def test_recommendation_from_catalog():
    client = StubTMDB([_raw(10, 8.1), _raw(11, 7.9), _raw(12, 8.4), _raw(13, 7.2)])

    response = _run("I'm so stressed after work", client=client)

    assert response.kind == "recommendation"
    assert [movie.id for movie in response.movies] == [12, 10, 11]
    assert response.mood_analysis.primary_emotion == "stressed"
    assert response.mood_analysis.intensity == "high"
    assert response.context.time.day_of_week == "Saturday"
    assert client.filters[0]["with_genres"] == "35,16,10751"


def test_emergency_when_classifier_and_catalog_both_fall_back():
    response = _run("I'm feeling sad tonight")

    assert response.kind == "emergency"
    assert len(response.movies) == 3


def test_classified_intent_with_offline_catalog_uses_emotion_table(monkeypatch):
    async def fake_classify(mood_text, previous_ids=None):
        return MoodIntent(primary_emotion="sad", genres=[18], classifier="llm")

    monkeypatch.setattr(llm_parser, "classify_mood", fake_classify)

    response = _run("everything feels heavy")

    assert response.kind == "recommendation"
    assert [movie.id for movie in response.movies] == [4, 5, 6]
    assert response.palette_cleansers


def test_small_talk_returns_conversational(monkeypatch):
    async def fake_classify(mood_text, previous_ids=None):
        return MoodIntent(
            is_small_talk=True, conversation_reply="Hello! How's your day?", classifier="llm"
        )

    monkeypatch.setattr(llm_parser, "classify_mood", fake_classify)

    response = _run("hi")

    assert response.kind == "conversational"
    assert response.response == "Hello! How's your day?"


def test_refinement_excludes_previous_titles():
    client = StubTMDB([_raw(1), _raw(2), _raw(30), _raw(31), _raw(32)])

    response = _run("I don't like these", previous=[{"id": 1}, 2], client=client)

    assert response.kind == "recommendation"
    assert client.filters[0]["without_movies"] == "1,2"
    assert {movie.id for movie in response.movies} == {30, 31, 32}


def test_unexpected_failure_serves_emergency(monkeypatch):
    async def broken_search(client, intent):
        raise RuntimeError("bug")

    monkeypatch.setattr(sommelier, "search_catalog", broken_search)

    response = _run("I'm feeling adventurous", client=StubTMDB([]))

    assert response.kind == "emergency"


def test_emergency_payload_is_complete_when_offline():
    response = _run("feeling adventurous")

    assert response.kind == "emergency"
    assert len(response.movies) == 3
    assert response.explanation


def test_rejected_genre_stays_out_of_results():
    client = StubTMDB([_raw(50, 9.5, genres=(35, 18)), _raw(51, 8.0, genres=(18,)), _raw(52, 7.5, genres=(12,))])

    response = _run("I don't like comedy, something else", previous=[1, 2, 3], client=client)

    assert response.kind == "recommendation"
    assert client.filters[0]["without_genres"] == "35"
    assert [movie.id for movie in response.movies] == [51, 52]
    assert all(35 not in movie.genre_ids for movie in response.movies)


def test_empty_catalog_serves_emotion_table_not_emergency():
    response = _run("I'm feeling stressed", client=StubTMDB([]))

    assert response.kind == "recommendation"
    assert [movie.id for movie in response.movies] == [1, 2, 3]
