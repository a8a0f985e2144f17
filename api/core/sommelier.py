from __future__ import annotations

import logging
import random
from datetime import datetime
from typing import Any, Iterable, List, Optional

from api.core import conversation
from api.core.assembler import (
    RecommendationResponse,
    build_conversational,
    build_emergency,
    build_recommendation,
)
from api.core.catalog_search import search_catalog
from api.core.enrichment import generate_enrichment
from api.core.errors import InvalidMoodError, TotalFailureError
from api.core.time_context import get_time_context
from api.core.tmdb_client import TMDBClient

logger = logging.getLogger(__name__)


def previous_item_ids(items: Iterable[Any] | None) -> List[int]:
    """
    Normalize the replayed previous turn. Clients send either bare ids or the
    movie objects they were given; anything without a usable id is dropped.
    """
    ids: List[int] = []
    for entry in items or []:
        raw = entry.get("id") if isinstance(entry, dict) else entry
        if isinstance(raw, bool):
            continue
        try:
            item_id = int(raw)
        except (TypeError, ValueError):
            continue
        if item_id not in ids:
            ids.append(item_id)
    return ids


def validate_mood(mood_text: Any) -> str:
    if not isinstance(mood_text, str) or not mood_text.strip():
        raise InvalidMoodError("Mood description is required")
    return mood_text.strip()


async def recommend(
    mood_text: Any,
    previous_items: Iterable[Any] | None = None,
    *,
    tmdb_client: Optional[TMDBClient] = None,
    now: datetime | None = None,
    rng: random.Random | None = None,
) -> RecommendationResponse:
    """
    Answer one chat turn. Only invalid input raises; every other fault degrades
    into fallback content or, when nothing else is left, the emergency payload.
    """
    mood = validate_mood(mood_text)
    previous_ids = previous_item_ids(previous_items)
    time_context = get_time_context(now)
    logger.info(
        "Processing mood request at %s on %s",
        time_context.time_of_day,
        time_context.day_of_week,
    )

    try:
        intent = await conversation.resolve_turn(mood, previous_ids)
        if intent.is_small_talk:
            logger.info("Returning conversational response")
            return build_conversational(intent.conversation_reply or "", time_context)

        logger.info(
            "Mood analysis: emotion=%s intensity=%s genres=%s keywords=%s classifier=%s",
            intent.primary_emotion,
            intent.intensity,
            intent.genres,
            intent.keywords,
            intent.classifier,
        )
        catalog = await search_catalog(tmdb_client, intent)
        if catalog.degraded and intent.classifier == "patterns":
            raise TotalFailureError(
                "Intent classifier and catalog both fell back to static content"
            )

        enrichment = generate_enrichment(
            intent.genres, mood, intent.intensity, time_context.time_of_day
        )
        return build_recommendation(
            intent, catalog.items, enrichment, time_context, rng
        )
    except TotalFailureError as exc:
        logger.warning("Serving emergency recommendations: %s", exc)
        return build_emergency()
    except Exception:
        logger.exception("Recommendation pipeline failed; serving emergency payload.")
        return build_emergency()
