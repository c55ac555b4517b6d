from __future__ import annotations

import math
from typing import Iterable, List, Optional, Tuple

from .models import LocationQuery, RawEvent


# Planar distance in degrees, roughly 100 km. Accuracy varies with latitude.
MAX_DISTANCE_DEGREES = 1.0
MIN_LOCAL_EVENTS = 10


def _coordinates(event: RawEvent) -> Optional[Tuple[float, float]]:
    location = event.get("location")
    if not isinstance(location, (list, tuple)) or len(location) != 2:
        return None
    try:
        lon, lat = float(location[0]), float(location[1])
    except (TypeError, ValueError):
        return None
    if math.isnan(lon) or math.isnan(lat):
        return None
    return lat, lon


def distance_degrees(event: RawEvent, query: LocationQuery) -> Optional[float]:
    coords = _coordinates(event)
    if coords is None:
        return None
    lat, lon = coords
    return math.hypot(lat - query.lat, lon - query.lon)


def filter_local_events(events: Iterable[RawEvent], query: LocationQuery) -> List[RawEvent]:
    local = []
    for event in events:
        distance = distance_degrees(event, query)
        if distance is not None and distance < MAX_DISTANCE_DEGREES:
            local.append(event)
    return local


def is_sufficient(local_events: List[RawEvent]) -> bool:
    return len(local_events) >= MIN_LOCAL_EVENTS
