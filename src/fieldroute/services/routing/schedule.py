"""Weekday visiting schedule."""

from __future__ import annotations

from datetime import datetime
from typing import Mapping, Optional, Sequence
from zoneinfo import ZoneInfo

from ...config import settings

WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def current_weekday(tz: Optional[str] = None, now: Optional[datetime] = None) -> str:
    """English weekday name for ``now`` in ``tz`` (the local clock when neither is given)."""

    zone_name = tz if tz is not None else settings.timezone
    if now is None:
        now = datetime.now(ZoneInfo(zone_name)) if zone_name else datetime.now()
    elif zone_name and now.tzinfo is not None:
        now = now.astimezone(ZoneInfo(zone_name))
    return WEEKDAY_NAMES[now.weekday()]


def resolve_day_schedule(
    weekday: str,
    plan: Optional[Mapping[str, Sequence[str]]] = None,
) -> tuple[str, ...]:
    """Areas to visit on ``weekday``; an unmapped day has an empty schedule."""

    tour_plan = plan if plan is not None else settings.tour_plan
    return tuple(tour_plan.get(weekday.strip().title(), ()))
