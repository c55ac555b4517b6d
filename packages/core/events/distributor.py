from __future__ import annotations

import dataclasses
import datetime as dt
import random
from typing import List, Optional, Sequence
from zoneinfo import ZoneInfo

from .models import NormalizedEvent


DAYS_TO_FILL = 28
MAX_EVENTS_PER_DAY = 5
DURATION_CHOICES_MINUTES = (60, 90, 120, 180)


def _random_start(day: dt.date, rng: random.Random, tz: ZoneInfo) -> dt.datetime:
    hour = rng.randint(8, 21)
    minute = rng.choice((0, 15, 30, 45))
    return dt.datetime.combine(day, dt.time(hour=hour, minute=minute), tzinfo=tz)


def distribute_events(
    events: Sequence[NormalizedEvent],
    rng: Optional[random.Random] = None,
    today: Optional[dt.date] = None,
    timezone: str = "UTC",
    days: int = DAYS_TO_FILL,
    per_day: int = MAX_EVENTS_PER_DAY,
) -> List[NormalizedEvent]:
    """Spread events over ``days`` days from today, ``per_day`` at most per day.

    Input order is kept. Times are re-rolled and may overlap; whatever does
    not fit in the window is dropped.
    """
    rng = rng or random.Random()
    tz = ZoneInfo(timezone)
    first_day = today or dt.datetime.now(tz).date()

    distributed: List[NormalizedEvent] = []
    index = 0
    for day_offset in range(days):
        if index >= len(events):
            break
        day = first_day + dt.timedelta(days=day_offset)
        for _ in range(per_day):
            if index >= len(events):
                break
            start = _random_start(day, rng, tz)
            duration = dt.timedelta(minutes=rng.choice(DURATION_CHOICES_MINUTES))
            distributed.append(
                dataclasses.replace(events[index], start=start, end=start + duration)
            )
            index += 1
    return distributed
