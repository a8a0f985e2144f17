from __future__ import annotations

from api.core.enrichment import (
    PALETTE_CLEANSERS,
    generate_contextual_note,
    generate_double_feature,
    generate_enrichment,
    generate_palette_cleansers,
    generate_perfect_pairing,
)


def test_pairing_follows_first_known_genre_and_time():
    pairing = generate_perfect_pairing([12, 10749], "date night", "evening")

    assert pairing.food == "Dark chocolate and strawberries"
    assert pairing.drink == "Wine or cocktails"
    assert "romantic atmosphere" in pairing.description


def test_pairing_defaults_to_comedy_and_morning_menu():
    pairing = generate_perfect_pairing([], "", "morning")

    assert pairing.food == "Fresh pastries or breakfast items"
    assert pairing.drink == "Coffee or fresh juice"
    assert "laughs" in pairing.description


def test_mood_override_wins_over_time_of_day():
    pairing = generate_perfect_pairing([35], "so stressed and sad", "latenight")

    assert pairing.food == "Comfort food like mac and cheese"
    assert pairing.drink == "Chamomile tea or warm cocoa"


def test_double_feature_rules_in_order():
    assert generate_double_feature([18, 878], "").theme == "Artificial Intelligence & Humanity"
    assert generate_double_feature([18], "feeling nostalgic").theme == "Coming of Age Stories"
    assert generate_double_feature([18], "feeling fine") is None
    assert generate_double_feature([12], "").theme == "Space Exploration"
    assert generate_double_feature([99], "") is None


def test_double_feature_is_a_fresh_copy():
    first = generate_double_feature([16], "")
    first.movies.append("Shrek")

    assert generate_double_feature([16], "").movies == ["Spirited Away", "WALL-E"]


def test_palette_cleansers_only_for_heavy_genres():
    assert generate_palette_cleansers([35, 27]) == list(PALETTE_CLEANSERS)
    assert generate_palette_cleansers([35, 16]) == []


def test_contextual_note_combines_parts():
    note = generate_contextual_note("evening", intensity="high")

    assert note.startswith("The perfect way to unwind")
    assert "full immersion" in note
    assert "full immersion" not in generate_contextual_note("morning")
    assert generate_contextual_note("teatime") == ""


def test_generate_enrichment():
    enrichment = generate_enrichment([53], "tense", "medium", "afternoon")

    assert enrichment.perfect_pairing.drink == "Iced tea or sparkling water"
    assert enrichment.double_feature.theme == "Psychological Thrillers"
    assert enrichment.palette_cleansers
    assert "afternoon" in enrichment.atmosphere_note
