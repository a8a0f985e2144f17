from __future__ import annotations

import random
from datetime import datetime

import pytest
from pydantic import TypeAdapter, ValidationError

from api.core.assembler import (
    EMERGENCY_ERROR,
    RUNTIME_ESTIMATE_RANGE,
    MovieRecommendationResponse,
    RecommendationResponse,
    annotate_movies,
    build_conversational,
    build_emergency,
    build_recommendation,
)
from api.core.catalog import CatalogItem
from api.core.enrichment import generate_enrichment
from api.core.mood_patterns import classify_with_patterns
from api.core.time_context import get_time_context


def _items(count):
    return [
        CatalogItem(id=i, title=f"Movie {i}", vote_average=8.0, genre_ids=[35], popularity=1.5)
        for i in range(1, count + 1)
    ]


def _time():
    return get_time_context(datetime(2024, 3, 1, 19, 0), timezone="UTC")


def test_annotate_movies_estimates_missing_runtime():
    items = _items(4)
    items[1] = items[1].model_copy(update={"runtime": 131})

    movies = annotate_movies(items, "stressed", random.Random(0))

    assert [movie.id for movie in movies] == [1, 2, 3]
    assert movies[1].runtime == 131
    low, high = RUNTIME_ESTIMATE_RANGE
    assert low <= movies[0].runtime <= high
    assert all(movie.ai_context for movie in movies)


def test_annotate_movies_unknown_emotion_uses_general_lines():
    movies = annotate_movies(_items(1), "interested", random.Random(3))

    assert movies[0].ai_context


def test_recommendation_payload_shape():
    intent = classify_with_patterns("I feel really adventurous")
    enrichment = generate_enrichment(intent.genres, "adventurous", intent.intensity, "evening")

    response = build_recommendation(intent, _items(5), enrichment, _time(), random.Random(1))
    data = response.model_dump(mode="json", by_alias=True)

    assert data["kind"] == "recommendation"
    assert len(data["movies"]) == 3
    assert data["movies"][0]["aiContext"]
    assert data["movies"][0]["popularity"] == 1.5
    assert data["responseMovies"] == data["movies"]
    assert data["moodAnalysis"] == {
        "primaryEmotion": "adventurous",
        "intensity": "high",
        "desiredOutcome": "vicarious adventure",
    }
    assert data["perfectPairing"]["food"]
    assert data["doubleFeature"]["theme"] == "Heist & Crime Capers"
    assert data["context"]["time"]["timeOfDay"] == "evening"
    assert data["explanation"] == intent.explanation


def test_recommendation_requires_movies():
    intent = classify_with_patterns("sad")
    enrichment = generate_enrichment(intent.genres, "sad", intent.intensity, "evening")

    with pytest.raises(ValidationError):
        MovieRecommendationResponse(
            movies=[],
            explanation="",
            sommelier_note="",
            perfect_pairing=enrichment.perfect_pairing,
            mood_analysis={"primary_emotion": "sad", "intensity": "low", "desired_outcome": ""},
            context={"time": _time()},
        )


def test_emergency_payload():
    data = build_emergency().model_dump(mode="json", by_alias=True)

    assert data["kind"] == "emergency"
    assert data["error"] == EMERGENCY_ERROR
    assert data["fallback"] is True
    assert [movie["id"] for movie in data["movies"]] == [999, 998, 997]
    assert all(movie["aiContext"] and movie["runtime"] for movie in data["movies"])


def test_conversational_payload():
    data = build_conversational("Hi! How are you?", _time()).model_dump(by_alias=True)

    assert data["conversational"] is True
    assert data["response"] == "Hi! How are you?"
    assert "movies" not in data


def test_response_union_discriminates_on_kind():
    adapter = TypeAdapter(RecommendationResponse)

    parsed = adapter.validate_python(build_emergency().model_dump(by_alias=True))

    assert parsed.kind == "emergency"
