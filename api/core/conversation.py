from __future__ import annotations

import logging
import re
from typing import List, Optional, Sequence

from api.core import llm_parser
from api.core.genres import TMDB_GENRES, lookup_genre, resolve_country
from api.core.mood_intent import MoodIntent

logger = logging.getLogger(__name__)

# Neutral starting point for refinement turns.
REFINEMENT_GENRES = (35, 18, 12)
REFINEMENT_KEYWORDS = "acclaimed,crowd-pleaser,beloved"
REFINEMENT_OUTCOME = "a better match for your taste"

_REJECTION_PATTERN = re.compile(
    r"\b(?:don['’]?t like|do not like|dislike|not in the mood|something else|"
    r"different|change|not interested)",
    re.IGNORECASE,
)
_DISLIKED_GENRE_PATTERN = re.compile(
    r"\b(?:don['’]?t|do not|not)\s+(?:really\s+)?(?:like|want|into)\s+([\w-]+)",
    re.IGNORECASE,
)
_GENRE_PREFERENCE_PATTERN = re.compile(
    r"\b(?:i like|i want|how about|what about|looking for|prefer)\s+"
    r"(?:some\s+|a\s+|an\s+|more\s+)?([\w-]+)",
    re.IGNORECASE,
)
_COUNTRY_PATTERN = re.compile(
    r"\b(?:movies?|films?)\s+from\s+([a-z][a-z\s]*)", re.IGNORECASE
)
_TITLE_PATTERN = re.compile(
    r"\b(?:like|similar to|enjoyed)\s+['\"“‘]([^'\"”’]+)['\"”’]", re.IGNORECASE
)
_COUNTRY_FILLER = {"please", "instead", "tonight", "now", "only", "again", "maybe"}

_REJECTION_EXPLANATION = (
    "Sorry those didn't hit the spot! I've set them aside and poured you "
    "something different."
)
_REJECTION_NOTE = (
    "A fresh bottle from another shelf of the cellar. Sometimes the second pour "
    "is the one that sings."
)
_CLARIFYING_QUESTION = (
    "I'm sorry those weren't quite right! Could you tell me what you'd prefer "
    "instead? A particular genre, a mood you'd like to feel, or films from a "
    "specific country?"
)
_REFINEMENT_NOTE = "A fresh pour, blended to your exact specifications."


def _refinement_intent(previous_ids: Sequence[int], explanation: str, note: str) -> MoodIntent:
    return MoodIntent(
        primary_emotion="interested",
        intensity="medium",
        desired_outcome=REFINEMENT_OUTCOME,
        genres=list(REFINEMENT_GENRES),
        keywords=REFINEMENT_KEYWORDS,
        excluded_catalog_ids=list(previous_ids),
        explanation=explanation,
        sommelier_note=note,
        classifier="refinement",
    )


def is_rejection(mood_text: str) -> bool:
    return bool(_REJECTION_PATTERN.search(mood_text or ""))


def _disliked_genre(mood_text: str) -> Optional[int]:
    match = _DISLIKED_GENRE_PATTERN.search(mood_text)
    if not match:
        return None
    return lookup_genre(match.group(1))


def _handle_rejection(mood_text: str, previous_ids: Sequence[int]) -> MoodIntent:
    intent = _refinement_intent(previous_ids, _REJECTION_EXPLANATION, _REJECTION_NOTE)

    disliked = _disliked_genre(mood_text)
    if disliked is None:
        return intent

    logger.debug("Rejection turn dislikes genre %s.", disliked)
    genres = [code for code in intent.genres if code != disliked]
    exclude = list(intent.exclude_genres)
    if disliked not in exclude:
        exclude.append(disliked)

    if genres:
        return intent.model_copy(update={"genres": genres, "exclude_genres": exclude})

    return intent.model_copy(
        update={
            "genres": genres,
            "exclude_genres": exclude,
            "is_small_talk": True,
            "conversation_reply": _CLARIFYING_QUESTION,
        }
    )


def _country_phrase(mood_text: str) -> Optional[str]:
    match = _COUNTRY_PATTERN.search(mood_text)
    if not match:
        return None
    words = match.group(1).split()
    while words and words[-1].lower() in _COUNTRY_FILLER:
        words.pop()
    phrase = " ".join(words)
    if not resolve_country(phrase):
        return None
    return phrase


def _handle_preferences(
    mood_text: str, previous_ids: Sequence[int]
) -> Optional[MoodIntent]:
    genre_match = _GENRE_PREFERENCE_PATTERN.search(mood_text)
    genre_code = lookup_genre(genre_match.group(1)) if genre_match else None
    country = _country_phrase(mood_text)
    title_match = _TITLE_PATTERN.search(mood_text)
    title = title_match.group(1).strip() if title_match else None

    if genre_code is None and not country and not title:
        return None

    intent = _refinement_intent(previous_ids, "", _REFINEMENT_NOTE)
    updates = {}
    explanation: List[str] = ["Got it!"]

    if genre_code is not None:
        updates["genres"] = [genre_code]
        updates["genre_preference"] = [genre_code]
        explanation.append(f"Switching to {TMDB_GENRES[genre_code].lower()} films.")

    if country:
        updates["country_preference"] = country
        explanation.append(f"Looking for films from {country.title()}.")

    if title:
        updates["keywords"] = f"similar to {title},{intent.keywords}"
        explanation.append(f"Finding films similar to {title}.")

    updates["explanation"] = " ".join(explanation)
    return intent.model_copy(update=updates)


async def resolve_turn(
    mood_text: str, previous_ids: Sequence[int] | None = None
) -> MoodIntent:
    """
    Decide how to answer this turn. Follow-ups that reject or narrow the last
    recommendations are handled here with regexes; everything else goes to the
    intent classifier.
    """
    if not previous_ids:
        return await llm_parser.classify_mood(mood_text)

    previous = list(previous_ids)
    if is_rejection(mood_text):
        logger.info("Refinement turn: rejection of %d previous titles.", len(previous))
        return _handle_rejection(mood_text, previous)

    refined = _handle_preferences(mood_text, previous)
    if refined is not None:
        logger.info(
            "Refinement turn: genres=%s country=%s keywords=%s",
            refined.genre_preference,
            refined.country_preference,
            refined.keywords,
        )
        return refined

    return await llm_parser.classify_mood(mood_text, previous)
