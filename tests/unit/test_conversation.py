from __future__ import annotations

import asyncio

import pytest

from api.core import conversation, llm_parser
from api.core.catalog_search import build_discover_filters
from api.core.conversation import is_rejection, resolve_turn
from api.core.mood_intent import MoodIntent


@pytest.fixture
def classifier_calls(monkeypatch):
    calls = []

    async def fake_classify(mood_text, previous_ids=None):
        calls.append((mood_text, previous_ids))
        return MoodIntent(primary_emotion="nostalgic", genres=[18], classifier="llm")

    monkeypatch.setattr(llm_parser, "classify_mood", fake_classify)
    return calls


@pytest.fixture
def no_classifier(monkeypatch):
    async def fail_classify(mood_text, previous_ids=None):
        raise AssertionError("refinement turns must not reach the classifier")

    monkeypatch.setattr(llm_parser, "classify_mood", fail_classify)


def test_is_rejection():
    assert is_rejection("I don't like these")
    assert is_rejection("show me something different")
    assert not is_rejection("I loved those, thanks")


def test_first_turn_goes_to_classifier(classifier_calls):
    intent = asyncio.run(resolve_turn("I don't like Mondays", None))

    assert classifier_calls == [("I don't like Mondays", None)]
    assert intent.primary_emotion == "nostalgic"


def test_rejection_excludes_previous_titles(no_classifier):
    intent = asyncio.run(resolve_turn("I don't like these", [1, 2, 3]))

    assert intent.classifier == "refinement"
    assert intent.excluded_catalog_ids == [1, 2, 3]
    assert intent.genres == [35, 18, 12]
    assert intent.is_small_talk is False


def test_rejection_drops_disliked_genre(no_classifier):
    intent = asyncio.run(resolve_turn("I don't like comedy, something else", [4]))

    assert intent.genres == [18, 12]
    assert intent.exclude_genres == [35]
    assert intent.excluded_catalog_ids == [4]


def test_rejection_asks_when_no_genres_remain(monkeypatch, no_classifier):
    monkeypatch.setattr(conversation, "REFINEMENT_GENRES", (35,))

    intent = asyncio.run(resolve_turn("I don't like comedy", [9]))

    assert intent.is_small_talk is True
    assert intent.genres == []
    assert "Could you tell me" in intent.conversation_reply


def test_genre_preference(no_classifier):
    intent = asyncio.run(resolve_turn("how about comedy movies", [1, 2]))

    assert intent.genres == [35]
    assert intent.genre_preference == [35]
    assert intent.excluded_catalog_ids == [1, 2]
    assert intent.explanation == "Got it! Switching to comedy films."


def test_country_preference_feeds_catalog_filters(no_classifier):
    intent = asyncio.run(resolve_turn("show me films from south korea please", [5]))

    assert intent.country_preference == "south korea"
    assert intent.explanation == "Got it! Looking for films from South Korea."
    filters = build_discover_filters(intent)
    assert filters["with_origin_country"] == "KR"
    assert filters["without_movies"] == "5"


def test_title_preference_prepends_keyword(no_classifier):
    intent = asyncio.run(resolve_turn('something similar to "Amelie" maybe', [5]))

    assert intent.keyword_terms[0] == "similar to Amelie"
    assert "Finding films similar to Amelie." in intent.explanation


def test_unrecognised_follow_up_is_classified_with_context(classifier_calls):
    asyncio.run(resolve_turn("I'm feeling nostalgic now", [1, 2]))

    assert classifier_calls == [("I'm feeling nostalgic now", [1, 2])]
