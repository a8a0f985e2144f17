from __future__ import annotations

from api.core.mood_patterns import (
    DEFAULT_PATTERN,
    MOOD_PATTERNS,
    classify_with_patterns,
    determine_intensity,
    explanation_for,
    match_mood_pattern,
)


def test_stressed_mood_maps_to_comfort_profile():
    intent = classify_with_patterns("I'm extremely stressed about work")

    assert intent.primary_emotion == "stressed"
    assert intent.intensity == "high"
    assert intent.genres == [35, 16, 10751]
    assert intent.exclude_genres == [27, 53, 80]
    assert "feel-good" in intent.keyword_terms
    assert intent.desired_outcome == "relaxation and stress relief"
    assert intent.classifier == "patterns"
    assert intent.is_small_talk is False


def test_low_intensity_qualifiers():
    intent = classify_with_patterns("I feel a bit sad today")

    assert intent.primary_emotion == "sad"
    assert intent.intensity == "low"
    assert intent.genres == [18, 10749, 35]


def test_intensity_matches_whole_words_only():
    assert determine_intensity("somewhat restless") == "low"
    assert determine_intensity("I am SO done") == "high"
    assert determine_intensity("just an ordinary evening") == "medium"


def test_patterns_are_checked_in_order():
    emotion, pattern = match_mood_pattern("stressed and sad at the same time")

    assert emotion == "stressed"
    assert pattern is MOOD_PATTERNS[0]


def test_stem_matches_related_word_forms():
    emotion, _ = match_mood_pattern("i have been so nostalgia-prone lately")

    assert emotion == "nostalgic"


def test_secondary_trigger_borrows_profile():
    intent = classify_with_patterns("feeling kind of tired")

    assert intent.primary_emotion == "tired"
    assert intent.intensity == "low"
    assert intent.genres == [35, 16, 10751]
    assert intent.explanation.startswith("You need something that won't demand")


def test_unknown_mood_uses_default_profile():
    intent = classify_with_patterns("what a strange day")

    assert intent.primary_emotion == "general"
    assert intent.intensity == "medium"
    assert intent.genres == list(DEFAULT_PATTERN.genres)
    assert intent.explanation == explanation_for("general", DEFAULT_PATTERN.outcome)


def test_previous_ids_become_exclusions():
    intent = classify_with_patterns("adventurous night", previous_ids=[4, 5])

    assert intent.primary_emotion == "adventurous"
    assert intent.excluded_catalog_ids == [4, 5]


def test_bare_and_qualified_stress():
    assert classify_with_patterns("stressed").intensity == "medium"
    assert classify_with_patterns("a bit stressed").intensity == "low"
    assert classify_with_patterns("I am extremely stressed").intensity == "high"
