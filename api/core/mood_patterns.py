from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

from .mood_intent import MoodIntent

logger = logging.getLogger(__name__)

_MIN_STEM_LENGTH = 4


@dataclass(frozen=True)
class MoodPattern:
    emotion: str
    genres: Tuple[int, ...]
    keywords: str
    outcome: str
    exclude_genres: Tuple[int, ...] = ()

    @property
    def stem(self) -> Optional[str]:
        stem = self.emotion[:-2]
        return stem if len(stem) >= _MIN_STEM_LENGTH else None

    def matches(self, text: str) -> bool:
        if self.emotion in text:
            return True
        stem = self.stem
        return bool(stem) and stem in text


# Evaluated in order; the first match wins.
MOOD_PATTERNS: Tuple[MoodPattern, ...] = (
    # Stress and anxiety
    MoodPattern(
        emotion="stressed",
        genres=(35, 16, 10751),
        exclude_genres=(27, 53, 80),
        keywords="feel-good,heartwarming,uplifting,light-hearted",
        outcome="relaxation and stress relief",
    ),
    MoodPattern(
        emotion="anxious",
        genres=(35, 16, 99),
        exclude_genres=(27, 53, 80),
        keywords="calming,peaceful,gentle,soothing",
        outcome="peace and tranquility",
    ),
    # Sadness and melancholy
    MoodPattern(
        emotion="sad",
        genres=(18, 10749, 35),
        keywords="hope,redemption,friendship,overcoming,healing",
        outcome="emotional catharsis and hope",
    ),
    MoodPattern(
        emotion="melancholy",
        genres=(18, 10402, 36),
        keywords="bittersweet,contemplative,beautiful,artistic",
        outcome="thoughtful reflection",
    ),
    MoodPattern(
        emotion="heartbroken",
        genres=(18, 10749),
        keywords="healing,self-discovery,new-beginnings,empowerment",
        outcome="emotional healing and growth",
    ),
    # Energy and excitement
    MoodPattern(
        emotion="energetic",
        genres=(28, 12, 878),
        keywords="high-energy,fast-paced,exciting,dynamic",
        outcome="adrenaline and excitement",
    ),
    MoodPattern(
        emotion="adventurous",
        genres=(12, 28, 14),
        keywords="epic,journey,quest,exploration,discovery",
        outcome="vicarious adventure",
    ),
    MoodPattern(
        emotion="restless",
        genres=(28, 53, 9648),
        keywords="engaging,gripping,intense,captivating",
        outcome="mental engagement",
    ),
    # Contemplative and thoughtful
    MoodPattern(
        emotion="thoughtful",
        genres=(18, 878, 9648),
        keywords="philosophical,deep,meaningful,thought-provoking",
        outcome="intellectual stimulation",
    ),
    MoodPattern(
        emotion="nostalgic",
        genres=(18, 10749, 35),
        keywords="coming-of-age,childhood,memories,classic,vintage",
        outcome="warm nostalgia",
    ),
    MoodPattern(
        emotion="contemplative",
        genres=(18, 99, 36),
        keywords="introspective,meditative,profound,artistic",
        outcome="deep reflection",
    ),
    # Social and romantic
    MoodPattern(
        emotion="lonely",
        genres=(10749, 35, 18),
        keywords="friendship,connection,community,belonging",
        outcome="sense of connection",
    ),
    MoodPattern(
        emotion="romantic",
        genres=(10749, 35),
        keywords="love,romance,chemistry,passion,heartwarming",
        outcome="romantic fulfillment",
    ),
    # Inspiration and motivation
    MoodPattern(
        emotion="unmotivated",
        genres=(18, 36, 99),
        keywords="inspiring,triumph,perseverance,achievement,success",
        outcome="motivation and inspiration",
    ),
    MoodPattern(
        emotion="hopeful",
        genres=(18, 10751, 35),
        keywords="uplifting,optimistic,positive,encouraging,bright",
        outcome="renewed hope",
    ),
)

_PATTERNS_BY_EMOTION: Dict[str, MoodPattern] = {p.emotion: p for p in MOOD_PATTERNS}

DEFAULT_PATTERN = _PATTERNS_BY_EMOTION["hopeful"]

# (trigger words, emotion label, borrowed profile); evaluated in order
_SECONDARY_TRIGGERS: Tuple[Tuple[Sequence[str], str, str], ...] = (
    (("tired", "exhausted"), "tired", "stressed"),
    (("happy", "good"), "happy", "hopeful"),
    (("bored",), "bored", "restless"),
    (("confused", "lost"), "confused", "contemplative"),
)

_HIGH_INTENSITY_WORDS = (
    "extremely",
    "very",
    "really",
    "so",
    "incredibly",
    "absolutely",
)
_LOW_INTENSITY_WORDS = ("a bit", "slightly", "somewhat", "kind of", "a little")


def _word_pattern(words: Sequence[str]) -> re.Pattern[str]:
    return re.compile(
        r"\b(?:" + "|".join(re.escape(word) for word in words) + r")\b",
        re.IGNORECASE,
    )


_HIGH_INTENSITY_PATTERN = _word_pattern(_HIGH_INTENSITY_WORDS)
_LOW_INTENSITY_PATTERN = _word_pattern(_LOW_INTENSITY_WORDS)

_EXPLANATIONS = {
    "stressed": "I can sense you're feeling overwhelmed. For {outcome}, I've selected films that offer gentle escapism without additional tension.",
    "sad": "I understand you're going through a difficult time. These films are chosen to provide {outcome} through stories of resilience and human connection.",
    "adventurous": "Your adventurous spirit calls for epic storytelling! These selections will satisfy your craving for {outcome} and grand narratives.",
    "thoughtful": "I appreciate your contemplative mood. These films are curated to provide {outcome} and meaningful cinematic experiences.",
    "nostalgic": "There's something beautiful about looking back. These films will embrace your {outcome} with stories that honor the past.",
    "lonely": "Connection is what you're seeking. These films celebrate {outcome} and the power of human relationships.",
    "romantic": "Love is in the air! These selections are perfect for indulging in {outcome} and heartwarming romance.",
    "tired": "You need something that won't demand too much energy. These gentle films offer {outcome} and easy viewing.",
    "happy": "Your positive energy deserves to be celebrated! These uplifting films will amplify your {outcome}.",
    "bored": "Time to shake things up! These engaging films will provide the {outcome} you're craving.",
    "general": "Based on your mood, I've selected films that should provide {outcome} and an enjoyable viewing experience.",
}

_SOMMELIER_NOTES = {
    "stressed": "Like a warm cup of tea on a rainy day, these films offer comfort without complexity. Each selection provides gentle humor and heartwarming moments that naturally ease tension.",
    "sad": "These films understand that sometimes we need to feel our emotions fully before we can heal. They offer hope without dismissing your current feelings.",
    "adventurous": "Bold flavors for a bold spirit! These cinematic journeys will transport you to worlds where anything is possible and heroes rise to meet their destiny.",
    "thoughtful": "Intellectual palate cleansers that respect your desire for depth. Each film offers layers of meaning that will satisfy your contemplative nature.",
    "nostalgic": "Like finding a treasured photograph, these films capture the bittersweet beauty of memory and the passage of time.",
    "lonely": "Stories that remind us we're never truly alone. These films celebrate the connections that make life meaningful.",
    "romantic": "Pure romantic indulgence, like the perfect wine paired with candlelight. These films understand the language of the heart.",
    "tired": "Comfort food for the soul. These selections require minimal emotional investment while providing maximum satisfaction.",
    "happy": "Effervescent and bright, like champagne bubbles. These films will amplify your joy without overwhelming your senses.",
    "bored": "Sharp, engaging flavors to awaken your interest. These films provide the mental stimulation you're craving.",
    "general": "A carefully balanced selection designed to complement your current emotional palette and enhance your viewing experience.",
}


def determine_intensity(text: str) -> str:
    if _HIGH_INTENSITY_PATTERN.search(text or ""):
        return "high"
    if _LOW_INTENSITY_PATTERN.search(text or ""):
        return "low"
    return "medium"


def explanation_for(emotion: str, outcome: str) -> str:
    template = _EXPLANATIONS.get(emotion, _EXPLANATIONS["general"])
    return template.format(outcome=outcome)


def sommelier_note_for(emotion: str) -> str:
    return _SOMMELIER_NOTES.get(emotion, _SOMMELIER_NOTES["general"])


def match_mood_pattern(text: str) -> Tuple[str, MoodPattern]:
    """Return (emotion label, profile) for lower-cased mood text."""
    for pattern in MOOD_PATTERNS:
        if pattern.matches(text):
            return pattern.emotion, pattern

    for triggers, emotion, profile in _SECONDARY_TRIGGERS:
        if any(trigger in text for trigger in triggers):
            return emotion, _PATTERNS_BY_EMOTION[profile]

    return "general", DEFAULT_PATTERN


def classify_with_patterns(
    mood_text: str, previous_ids: Sequence[int] | None = None
) -> MoodIntent:
    """
    Deterministic keyword classifier. Always available and never raises; it is
    the primary strategy when no generative provider is configured and the
    fallback when that provider fails.
    """
    text = (mood_text or "").lower()
    emotion, pattern = match_mood_pattern(text)
    logger.debug("Pattern classifier matched '%s' for mood '%s'.", emotion, text)

    return MoodIntent(
        primary_emotion=emotion,
        intensity=determine_intensity(text),
        desired_outcome=pattern.outcome,
        genres=list(pattern.genres),
        exclude_genres=list(pattern.exclude_genres),
        keywords=pattern.keywords,
        excluded_catalog_ids=list(previous_ids or []),
        explanation=explanation_for(emotion, pattern.outcome),
        sommelier_note=sommelier_note_for(emotion),
        classifier="patterns",
    )
