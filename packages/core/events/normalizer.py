from __future__ import annotations

import datetime as dt
import logging
from typing import Any, Iterable, List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dateutil import parser as date_parser

from .models import NormalizedEvent, RawEvent


DEFAULT_TITLE = "Event"
DEFAULT_DURATION = dt.timedelta(hours=1)
DEFAULT_DESCRIPTION = "Event from PredictHQ"
UNKNOWN_VENUE = "Venue to be announced"

logger = logging.getLogger("your_ical.normalizer")


def _zone(name: Optional[str], fallback: ZoneInfo) -> ZoneInfo:
    if not name or not isinstance(name, str):
        return fallback
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return fallback


def _parse_when(value: Any, tz: ZoneInfo) -> Optional[dt.datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, dt.datetime):
        parsed = value
    elif isinstance(value, dt.date):
        parsed = dt.datetime.combine(value, dt.time())
    elif isinstance(value, str):
        try:
            parsed = date_parser.isoparse(value)
        except (ValueError, OverflowError):
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=tz)
    return parsed


def _first_when(raw: RawEvent, keys: Iterable[str], tz: ZoneInfo) -> Optional[dt.datetime]:
    for key in keys:
        parsed = _parse_when(raw.get(key), tz)
        if parsed is not None:
            return parsed
    return None


def _title(raw: RawEvent) -> str:
    for key in ("title", "name"):
        value = raw.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return DEFAULT_TITLE


def _items(raw: RawEvent, key: str) -> List[Any]:
    value = raw.get(key)
    return list(value) if isinstance(value, (list, tuple)) else []


def _location(raw: RawEvent) -> str:
    geo = raw.get("geo")
    if isinstance(geo, dict):
        address = geo.get("address")
        if isinstance(address, dict) and address.get("formatted_address"):
            return str(address["formatted_address"])
    for entity in _items(raw, "entities"):
        if isinstance(entity, dict) and entity.get("type") == "venue" and entity.get("name"):
            venue = str(entity["name"])
            address = entity.get("formatted_address")
            return f"{venue}, {address}" if address else venue
    location = raw.get("location")
    if isinstance(location, str) and location.strip():
        return location.strip()
    country = raw.get("country")
    if isinstance(country, str) and country.strip():
        return f"{country.strip().upper()} ({UNKNOWN_VENUE.lower()})"
    return UNKNOWN_VENUE


def _labels(raw: RawEvent) -> List[str]:
    labels: List[str] = []
    for item in _items(raw, "phq_labels"):
        if isinstance(item, dict) and item.get("label"):
            labels.append(str(item["label"]))
    if not labels:
        labels = [str(label) for label in _items(raw, "labels") if label]
    return labels


def _description(raw: RawEvent) -> str:
    description = raw.get("description")
    if isinstance(description, str) and description.strip():
        return description.strip()
    labels = _labels(raw)
    if labels:
        return "Labels: " + ", ".join(labels)
    return DEFAULT_DESCRIPTION


def normalize_event(
    raw: RawEvent, timezone: str = "UTC", now: Optional[dt.datetime] = None
) -> NormalizedEvent:
    """Map a provider or synthetic record into a NormalizedEvent.

    Local start/end fields win over UTC ones, ``date`` is the last resort.
    Missing values degrade to defaults instead of raising.
    """
    calendar_tz = ZoneInfo(timezone)
    event_tz = _zone(raw.get("timezone"), calendar_tz)
    start = _first_when(raw, ("start_local", "start", "date"), event_tz)
    end = _first_when(raw, ("end_local", "end", "date"), event_tz)
    if start is None:
        start = now or dt.datetime.now(calendar_tz)
        logger.warning("event_missing_start title=%r", _title(raw))
    if end is None or end <= start:
        end = start + DEFAULT_DURATION
    category = raw.get("category")
    return NormalizedEvent(
        title=_title(raw),
        start=start,
        end=end,
        category=str(category) if category else None,
        location=_location(raw),
        description=_description(raw),
    )


def normalize_events(
    raws: Iterable[RawEvent], timezone: str = "UTC", now: Optional[dt.datetime] = None
) -> List[NormalizedEvent]:
    return [normalize_event(raw, timezone=timezone, now=now) for raw in raws]
