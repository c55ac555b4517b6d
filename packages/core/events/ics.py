from __future__ import annotations

import datetime as dt
import time
from typing import Optional, Sequence

from icalendar import Calendar, Event

from .models import NormalizedEvent


PRODID = "-//your-ical//Calendar Generator//EN"
DEFAULT_CALENDAR_NAME = "your iCal Events"


def _utc(value: dt.datetime) -> dt.datetime:
    if value.tzinfo is None:
        value = value.replace(tzinfo=dt.timezone.utc)
    return value.astimezone(dt.timezone.utc)


def build_calendar(
    events: Sequence[NormalizedEvent],
    name: str = DEFAULT_CALENDAR_NAME,
    timezone: str = "UTC",
    description: Optional[str] = None,
    uid_prefix: str = "your-ical",
    token: Optional[str] = None,
) -> str:
    """Render events as RFC 5545 text, one VEVENT per input event."""
    if not events:
        raise ValueError("cannot build a calendar without events")
    token = token or str(int(time.time() * 1000))
    stamp = dt.datetime.now(dt.timezone.utc).replace(microsecond=0)

    calendar = Calendar()
    calendar.add("prodid", PRODID)
    calendar.add("version", "2.0")
    calendar.add("calscale", "GREGORIAN")
    calendar.add("method", "PUBLISH")
    calendar.add("x-wr-calname", name)
    calendar.add("x-wr-timezone", timezone)
    if description:
        calendar.add("x-wr-caldesc", description)

    for index, item in enumerate(events):
        event = Event()
        event.add("uid", f"{uid_prefix}-{token}-{index}")
        event.add("dtstamp", stamp)
        event.add("dtstart", _utc(item.start).replace(microsecond=0))
        event.add("dtend", _utc(item.end).replace(microsecond=0))
        event.add("summary", item.title)
        if item.location:
            event.add("location", item.location)
        if item.description:
            event.add("description", item.description)
        if item.category:
            event.add("categories", [item.category])
        calendar.add_component(event)
    return calendar.to_ical().decode("utf-8")
