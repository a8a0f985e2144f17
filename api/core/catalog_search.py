from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence

from pydantic import ValidationError

from .catalog import CatalogItem
from .fallback_catalog import fallback_movies_for
from .genres import resolve_country
from .mood_intent import MoodIntent
from .outcome import capture
from .tmdb_client import TMDBClient

logger = logging.getLogger(__name__)

MAX_RESULTS = 10
MIN_FALLBACK_ITEMS = 3
SORT_ORDER = "vote_average.desc"
DISCOVER_MIN_RATING = 7.0
DISCOVER_MIN_VOTES = 100
SEARCH_MIN_RATING = 6.5


@dataclass(frozen=True)
class CatalogResult:
    items: List[CatalogItem] = field(default_factory=list)
    # True only when the catalog could not be queried at all.
    degraded: bool = False


def build_discover_filters(intent: MoodIntent) -> Dict[str, Any]:
    filters: Dict[str, Any] = {
        "with_genres": ",".join(str(code) for code in intent.genres),
        "vote_average.gte": DISCOVER_MIN_RATING,
        "vote_count.gte": DISCOVER_MIN_VOTES,
        "sort_by": SORT_ORDER,
    }
    if intent.country_preference:
        country_code = resolve_country(intent.country_preference)
        if country_code:
            filters["with_origin_country"] = country_code
        else:
            logger.warning(
                "Ignoring unknown country preference '%s'.", intent.country_preference
            )
    if intent.exclude_genres:
        filters["without_genres"] = ",".join(
            str(code) for code in intent.exclude_genres
        )
    if intent.excluded_catalog_ids:
        filters["without_movies"] = ",".join(
            str(item_id) for item_id in intent.excluded_catalog_ids
        )
    return filters


def build_search_query(intent: MoodIntent) -> Optional[str]:
    terms = intent.keyword_terms
    return terms[0] if terms else None


def _parse_results(payload: Any) -> List[CatalogItem]:
    if not isinstance(payload, dict):
        return []
    items: List[CatalogItem] = []
    for raw in payload.get("results") or []:
        if not isinstance(raw, dict):
            continue
        try:
            items.append(CatalogItem.model_validate(raw))
        except ValidationError:
            logger.debug("Skipping malformed catalog entry: %s", raw.get("id"))
    return items


def merge_and_rank(
    result_lists: Iterable[Sequence[CatalogItem]],
    genres: Sequence[int],
    excluded_ids: Iterable[int] = (),
    limit: int = MAX_RESULTS,
    exclude_genres: Iterable[int] = (),
) -> List[CatalogItem]:
    """
    Union the result lists (first occurrence of an id wins) and drop items in
    an excluded genre. Items that share a genre with the intent rank ahead of
    the rest, then by rating. Ties fall back to the id so arrival order never
    changes the ranking.
    """
    wanted = set(genres)
    skip = set(excluded_ids)
    unwanted = set(exclude_genres)
    merged: Dict[int, CatalogItem] = {}
    for results in result_lists:
        for item in results:
            if item.id in skip or item.id in merged:
                continue
            if unwanted.intersection(item.genre_ids):
                continue
            merged[item.id] = item

    ranked = sorted(
        merged.values(),
        key=lambda item: (
            0 if wanted.intersection(item.genre_ids) else 1,
            -item.vote_average,
            item.id,
        ),
    )
    return ranked[:limit]


def fallback_items(intent: MoodIntent) -> List[CatalogItem]:
    items = [CatalogItem.model_validate(raw) for raw in fallback_movies_for(intent.primary_emotion)]
    excluded = set(intent.excluded_catalog_ids)
    remaining = [item for item in items if item.id not in excluded]
    return remaining if len(remaining) >= MIN_FALLBACK_ITEMS else items


def _fallback(intent: MoodIntent, degraded: bool = True) -> CatalogResult:
    return CatalogResult(items=fallback_items(intent), degraded=degraded)


async def _query_catalog(client: TMDBClient, intent: MoodIntent) -> CatalogResult:
    calls = [
        capture(
            client.discover_movies(build_discover_filters(intent)),
            stage="tmdb discover",
        )
    ]
    query = build_search_query(intent)
    if query:
        calls.append(
            capture(
                client.search_movies(
                    query, sort_by=SORT_ORDER, **{"vote_average.gte": SEARCH_MIN_RATING}
                ),
                stage="tmdb search",
            )
        )

    outcomes = await asyncio.gather(*calls)
    if any(not outcome.ok for outcome in outcomes):
        logger.warning(
            "Catalog unavailable; serving fallback table for '%s'.",
            intent.primary_emotion,
        )
        return _fallback(intent)

    result_lists = [_parse_results(outcome.value) for outcome in outcomes]
    if len(result_lists) > 1:
        result_lists[1] = [
            item for item in result_lists[1] if item.vote_average >= SEARCH_MIN_RATING
        ]

    ranked = merge_and_rank(
        result_lists,
        intent.genres,
        intent.excluded_catalog_ids,
        exclude_genres=intent.exclude_genres,
    )
    if not ranked:
        logger.warning(
            "Catalog returned no usable titles for genres=%s; serving fallback table.",
            intent.genres,
        )
        return _fallback(intent, degraded=False)
    return CatalogResult(items=ranked)


async def search_catalog(
    client: TMDBClient | None, intent: MoodIntent
) -> CatalogResult:
    """
    Find up to ten titles for the intent. Never raises: a missing client or any
    provider failure yields the static table for the intent's emotion.
    """
    if client is None:
        logger.warning(
            "TMDB client not configured; serving fallback table for '%s'.",
            intent.primary_emotion,
        )
        return _fallback(intent)
    try:
        return await _query_catalog(client, intent)
    except Exception:
        logger.exception("Catalog search failed unexpectedly; serving fallback table.")
        return _fallback(intent)
