from __future__ import annotations

import datetime as dt
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .errors import ValidationError


RawEvent = Mapping[str, Any]

_LOCATION_RE = re.compile(
    r"^\s*(?P<radius>\d+(?:\.\d+)?)\s*km\s*@\s*"
    r"(?P<lat>[-+]?\d+(?:\.\d+)?)\s*,\s*(?P<lon>[-+]?\d+(?:\.\d+)?)\s*$",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class LocationQuery:
    radius_km: float
    lat: float
    lon: float
    city_name: Optional[str] = None
    # Coordinates as the caller wrote them; the provider gets this text unchanged.
    within: str = field(default="", compare=False)

    @classmethod
    def parse(cls, raw: str, city_name: Optional[str] = None) -> "LocationQuery":
        """Parse the compact ``<radius>km@<lat>,<lon>`` form."""
        match = _LOCATION_RE.match(raw or "")
        if not match:
            raise ValidationError(
                "Invalid location",
                details="Expected format <radius>km@<latitude>,<longitude>",
            )
        lat = float(match.group("lat"))
        lon = float(match.group("lon"))
        if not -90.0 <= lat <= 90.0 or not -180.0 <= lon <= 180.0:
            raise ValidationError("Invalid location", details="Coordinates out of range")
        return cls(
            radius_km=float(match.group("radius")),
            lat=lat,
            lon=lon,
            city_name=city_name.strip() if city_name and city_name.strip() else None,
            within="{}km@{},{}".format(
                match.group("radius"), match.group("lat"), match.group("lon")
            ),
        )

    def to_within(self) -> str:
        if self.within:
            return self.within
        return f"{self.radius_km!r}km@{self.lat!r},{self.lon!r}"


@dataclass(frozen=True)
class NormalizedEvent:
    title: str
    start: dt.datetime
    end: dt.datetime
    category: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self) -> None:
        if self.start >= self.end:
            raise ValueError(f"event must end after it starts: {self.title!r}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "category": self.category,
            "location": self.location,
            "description": self.description,
        }


@dataclass(frozen=True)
class CalendarSession:
    id: str
    content: str
    event_count: int
    city_name: str
    created_at: float

    @property
    def filename(self) -> str:
        safe_city = re.sub(r"[^a-zA-Z0-9]", "-", self.city_name)
        return f"{safe_city}-events-{self.id}.ics"


@dataclass(frozen=True)
class GeneratedCalendar:
    session: CalendarSession
    events: List[NormalizedEvent] = field(default_factory=list)
    used_fallback: bool = False

    @property
    def download_url(self) -> str:
        return f"/api/download/{self.session.id}"

    @property
    def message(self) -> str:
        if self.used_fallback:
            return "Calendar generated successfully with location-specific events"
        return "Calendar generated successfully"
