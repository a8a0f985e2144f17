from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PerfectPairing(_CamelModel):
    food: str
    drink: str
    description: str


class DoubleFeature(_CamelModel):
    theme: str
    description: str
    movies: List[str]


class Enrichment(_CamelModel):
    perfect_pairing: PerfectPairing
    double_feature: Optional[DoubleFeature] = None
    atmosphere_note: str = ""
    palette_cleansers: List[str] = []


_GENRE_PAIRINGS: Dict[str, Dict[str, str]] = {
    "romance": {
        "food": "Dark chocolate and strawberries",
        "drink": "A glass of red wine or champagne",
        "description": "The sweetness complements the romantic atmosphere, creating an indulgent viewing experience.",
    },
    "comedy": {
        "food": "Buttered popcorn and nachos",
        "drink": "Craft beer or a fruity cocktail",
        "description": "Classic comfort snacks that won't distract from the laughs and keep the mood light.",
    },
    "horror": {
        "food": "Spicy wings or jalapeño poppers",
        "drink": "Strong coffee or an energy drink",
        "description": "The heat matches the intensity, while caffeine keeps you alert for those jump scares.",
    },
    "drama": {
        "food": "Artisanal cheese and crackers",
        "drink": "A sophisticated wine or herbal tea",
        "description": "Refined flavors that complement the emotional depth without overwhelming the experience.",
    },
    "action": {
        "food": "Pizza slices or loaded fries",
        "drink": "Cold beer or sports drink",
        "description": "Hearty, satisfying food that matches the high-energy pace of the action.",
    },
    "animation": {
        "food": "Colorful candy and cookies",
        "drink": "Hot chocolate or fruit juice",
        "description": "Playful treats that capture the whimsical spirit of animated storytelling.",
    },
    "scifi": {
        "food": "Futuristic snacks like space ice cream",
        "drink": "Blue cocktails or energy drinks",
        "description": "Innovative flavors that match the forward-thinking themes of science fiction.",
    },
    "documentary": {
        "food": "Healthy trail mix or fruit",
        "drink": "Green tea or kombucha",
        "description": "Mindful snacking that keeps you focused on learning without heavy distractions.",
    },
}

_PAIRING_GENRES: Dict[int, str] = {
    10749: "romance",
    35: "comedy",
    27: "horror",
    18: "drama",
    28: "action",
    16: "animation",
    878: "scifi",
    99: "documentary",
}

# Time of day only touches food and drink.
_TIME_OVERRIDES: Dict[str, Dict[str, str]] = {
    "morning": {
        "food": "Fresh pastries or breakfast items",
        "drink": "Coffee or fresh juice",
    },
    "afternoon": {
        "food": "Light sandwiches or salads",
        "drink": "Iced tea or sparkling water",
    },
    "evening": {"drink": "Wine or cocktails"},
    "latenight": {
        "food": "Comfort snacks like ice cream",
        "drink": "Warm milk or decaf tea",
    },
}

_MOOD_OVERRIDES: Tuple[Tuple[str, Dict[str, str]], ...] = (
    (
        "stressed",
        {
            "food": "Comfort food like mac and cheese",
            "drink": "Chamomile tea or warm cocoa",
            "description": "Soothing comfort foods that help you relax and unwind.",
        },
    ),
    (
        "sad",
        {
            "food": "Your favorite comfort treats",
            "drink": "Warm beverages like tea or hot chocolate",
            "description": "Familiar flavors that provide emotional comfort during difficult moments.",
        },
    ),
    (
        "celebratory",
        {
            "food": "Gourmet snacks or desserts",
            "drink": "Champagne or festive cocktails",
            "description": "Special treats that enhance the celebratory mood.",
        },
    ),
)


@dataclass(frozen=True)
class _DoubleFeatureRule:
    applies: Callable[[Sequence[int], str], bool]
    feature: DoubleFeature


def _has(*codes: int) -> Callable[[Sequence[int], str], bool]:
    return lambda genres, mood: any(code in genres for code in codes)


_DOUBLE_FEATURE_RULES: Tuple[_DoubleFeatureRule, ...] = (
    _DoubleFeatureRule(
        _has(878),
        DoubleFeature(
            theme="Artificial Intelligence & Humanity",
            description="Explore the relationship between humans and AI through different cinematic lenses.",
            movies=["Blade Runner 2049", "Her"],
        ),
    ),
    _DoubleFeatureRule(
        lambda genres, mood: 18 in genres and "nostalgic" in mood,
        DoubleFeature(
            theme="Coming of Age Stories",
            description="Two perspectives on growing up and finding your place in the world.",
            movies=["Lady Bird", "Eighth Grade"],
        ),
    ),
    _DoubleFeatureRule(
        _has(80, 28),
        DoubleFeature(
            theme="Heist & Crime Capers",
            description="The perfect double feature for fans of clever criminals and elaborate schemes.",
            movies=["Ocean's Eleven", "The Italian Job"],
        ),
    ),
    _DoubleFeatureRule(
        _has(12),
        DoubleFeature(
            theme="Space Exploration",
            description="Journey through the cosmos with these complementary space adventures.",
            movies=["Interstellar", "Gravity"],
        ),
    ),
    _DoubleFeatureRule(
        _has(10749),
        DoubleFeature(
            theme="Romantic Comedies Through Time",
            description="Classic and modern takes on love and laughter.",
            movies=["When Harry Met Sally", "The Big Sick"],
        ),
    ),
    _DoubleFeatureRule(
        _has(16),
        DoubleFeature(
            theme="Animated Masterpieces",
            description="Two stunning examples of animation as an art form.",
            movies=["Spirited Away", "WALL-E"],
        ),
    ),
    _DoubleFeatureRule(
        _has(53),
        DoubleFeature(
            theme="Psychological Thrillers",
            description="Mind-bending stories that will keep you guessing until the end.",
            movies=["Shutter Island", "Gone Girl"],
        ),
    ),
    _DoubleFeatureRule(
        _has(10402),
        DoubleFeature(
            theme="Musical Journeys",
            description="Celebrate the power of music through different storytelling approaches.",
            movies=["La La Land", "A Star Is Born"],
        ),
    ),
)

HEAVY_GENRES = frozenset({18, 27, 53, 80})  # Drama, Horror, Thriller, Crime

PALETTE_CLEANSERS = (
    "A delightful Pixar short film to restore your faith in humanity",
    "A nature documentary segment showcasing beautiful landscapes",
    "A feel-good music video or concert performance",
    "A comedy sketch or stand-up routine to lighten the mood",
    "A peaceful cooking or crafting tutorial video",
)

_TIME_NOTES = {
    "morning": "Perfect for a leisurely morning viewing with your coffee. The gentle pace will ease you into the day.",
    "afternoon": "An ideal afternoon escape that won't leave you too emotionally drained for the rest of your day.",
    "evening": "The perfect way to unwind after a long day. Settle in with some comfort food and enjoy.",
    "latenight": "A cozy late-night viewing that will give you pleasant dreams. Keep the lights dim for the full experience.",
}

_HIGH_INTENSITY_NOTE = (
    "Silence your phone and give yourself over to it completely; tonight calls "
    "for full immersion."
)


def generate_perfect_pairing(
    genres: Sequence[int], mood_text: str, time_of_day: str
) -> PerfectPairing:
    genre_key = next(
        (_PAIRING_GENRES[code] for code in genres if code in _PAIRING_GENRES),
        "comedy",
    )
    pairing = dict(_GENRE_PAIRINGS[genre_key])
    pairing.update(_TIME_OVERRIDES.get(time_of_day, {}))

    mood = (mood_text or "").lower()
    for keyword, override in _MOOD_OVERRIDES:
        if keyword in mood:
            pairing.update(override)
            break
    return PerfectPairing(**pairing)


def generate_double_feature(
    genres: Sequence[int], mood_text: str
) -> Optional[DoubleFeature]:
    mood = (mood_text or "").lower()
    for rule in _DOUBLE_FEATURE_RULES:
        if rule.applies(genres, mood):
            return rule.feature.model_copy(deep=True)
    return None


def generate_palette_cleansers(genres: Sequence[int]) -> List[str]:
    if HEAVY_GENRES.isdisjoint(genres):
        return []
    return list(PALETTE_CLEANSERS)


def generate_contextual_note(time_of_day: str, intensity: str = "medium") -> str:
    parts = [_TIME_NOTES.get(time_of_day, "")]
    if intensity == "high":
        parts.append(_HIGH_INTENSITY_NOTE)
    return " ".join(part for part in parts if part)


def generate_enrichment(
    genres: Sequence[int],
    mood_text: str,
    intensity: str,
    time_of_day: str,
) -> Enrichment:
    """Flavor content for a set of recommendations. Pure; no I/O."""
    return Enrichment(
        perfect_pairing=generate_perfect_pairing(genres, mood_text, time_of_day),
        double_feature=generate_double_feature(genres, mood_text),
        atmosphere_note=generate_contextual_note(time_of_day, intensity),
        palette_cleansers=generate_palette_cleansers(genres),
    )
