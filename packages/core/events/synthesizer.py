from __future__ import annotations

import datetime as dt
import random
from typing import Any, Dict, List, Optional, Sequence, Union
from zoneinfo import ZoneInfo

from .categories import category_label, split_categories


MAX_SYNTHETIC_EVENTS = 140
DEFAULT_CITY = "Local Area"
FALLBACK_TEMPLATE_KEY = "festivals"

EVENT_TEMPLATES: Dict[str, List[str]] = {
    "public-holidays": [
        "{city} Public Holiday Celebration",
        "National Day in {city}",
        "{city} Heritage Festival",
    ],
    "festivals": [
        "{city} Music Festival",
        "{city} Art & Culture Festival",
        "{city} Food & Wine Festival",
        "{city} International Film Festival",
        "{city} Street Art Festival",
    ],
    "concerts": [
        "Classical Concert at {city} Concert Hall",
        "Jazz Night in {city}",
        "Rock Concert - {city} Arena",
        "Chamber Music at {city} Opera House",
        "Electronic Music Festival {city}",
    ],
    "sports": [
        "{city} Football Match",
        "{city} Basketball Tournament",
        "{city} Marathon",
        "Tennis Open {city}",
        "{city} Cycling Championship",
    ],
    "academic": [
        "{city} University Conference",
        "Research Symposium {city}",
        "Academic Workshop at {city}",
        "Student Exchange Program {city}",
    ],
    "conferences": [
        "Tech Conference {city}",
        "Business Summit {city}",
        "Innovation Forum {city}",
        "Startup Meetup {city}",
    ],
    "performing-arts": [
        "Theatre Performance {city}",
        "Opera Gala {city}",
        "Ballet Show {city}",
        "Comedy Night {city}",
    ],
}


def templates_for(category: str) -> List[str]:
    return EVENT_TEMPLATES.get(category) or EVENT_TEMPLATES[FALLBACK_TEMPLATE_KEY]


def generate_location_events(
    city_name: Optional[str],
    categories: Union[Sequence[str], str, None],
    weeks: int,
    rng: Optional[random.Random] = None,
    today: Optional[dt.date] = None,
    timezone: str = "UTC",
) -> List[Dict[str, Any]]:
    """Build plausible events for a city without calling the provider.

    Starts tomorrow, 2-3 events per day for ``weeks * 7`` days, start between
    09:00 and 20:30 on the hour or half hour, 1-4 hours long. Capped at
    ``MAX_SYNTHETIC_EVENTS``.
    """
    rng = rng or random.Random()
    tz = ZoneInfo(timezone)
    city = (city_name or "").strip() or DEFAULT_CITY
    if isinstance(categories, str) or categories is None:
        category_list = split_categories(categories)
    else:
        category_list = list(categories) or split_categories(None)
    first_day = (today or dt.datetime.now(tz).date()) + dt.timedelta(days=1)

    events: List[Dict[str, Any]] = []
    for day_offset in range(max(weeks, 0) * 7):
        event_date = first_day + dt.timedelta(days=day_offset)
        for _ in range(rng.randint(2, 3)):
            category = rng.choice(category_list)
            title = rng.choice(templates_for(category)).format(city=city)
            start = dt.datetime.combine(
                event_date,
                dt.time(hour=rng.randint(9, 20), minute=rng.choice((0, 30))),
                tzinfo=tz,
            )
            duration = dt.timedelta(hours=rng.uniform(1.0, 4.0))
            # uniform() may return its upper bound; keep the range half-open.
            if duration >= dt.timedelta(hours=4):
                duration = dt.timedelta(hours=4) - dt.timedelta(seconds=1)
            events.append(
                {
                    "title": title,
                    "start": start,
                    "end": start + duration,
                    "category": category,
                    "location": city,
                    "description": f"{category_label(category)} in {city}",
                }
            )
            if len(events) >= MAX_SYNTHETIC_EVENTS:
                return events
    return events
