from __future__ import annotations

import logging
from datetime import datetime
from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from api.config import SOMMELIER_TIMEZONE

logger = logging.getLogger(__name__)

TimeOfDay = Literal["morning", "afternoon", "evening", "latenight"]

_SEASONS = {
    12: "winter",
    1: "winter",
    2: "winter",
    3: "spring",
    4: "spring",
    5: "spring",
    6: "summer",
    7: "summer",
    8: "summer",
    9: "autumn",
    10: "autumn",
    11: "autumn",
}


class TimeContext(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    time_of_day: TimeOfDay
    day_of_week: str
    season: str
    is_weekend: bool
    timezone: str


def time_of_day_for(hour: int) -> TimeOfDay:
    if 5 <= hour < 12:
        return "morning"
    if 12 <= hour < 17:
        return "afternoon"
    if 17 <= hour < 22:
        return "evening"
    return "latenight"


def _zone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone '%s'; using UTC.", name)
        return ZoneInfo("UTC")


def get_time_context(now: datetime | None = None, timezone: str | None = None) -> TimeContext:
    """Bucket the given instant (default: now) in the configured timezone."""
    zone = _zone(timezone or SOMMELIER_TIMEZONE)
    if now is None:
        local = datetime.now(zone)
    elif now.tzinfo is None:
        local = now.replace(tzinfo=zone)
    else:
        local = now.astimezone(zone)

    return TimeContext(
        time_of_day=time_of_day_for(local.hour),
        day_of_week=local.strftime("%A"),
        season=_SEASONS[local.month],
        is_weekend=local.weekday() >= 5,
        timezone=zone.key,
    )
