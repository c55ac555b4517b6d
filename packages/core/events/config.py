from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


PREDICTHQ_API_URL = "https://api.predicthq.com/v1/events/"
DEFAULT_TIMEZONE = "Europe/Berlin"
DEFAULT_BATCH_LOCATION = "50km@52.5200,13.4050"
BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..", ".."))
DEFAULT_LEGACY_ICS_PATH = os.path.join(BASE_DIR, "apps", "api", "data", "events.ics")
SESSION_TTL_SECONDS = 10 * 60


@dataclass(frozen=True)
class EventsConfig:
    predicthq_token: Optional[str]
    predicthq_api_url: str
    predicthq_timeout_seconds: float
    timezone: str
    legacy_ics_path: str
    batch_location: str
    batch_scheduler_enabled: bool
    session_ttl_seconds: int
    port: int

    @classmethod
    def from_env(cls) -> "EventsConfig":
        token = os.getenv("PREDICTHQ_TOKEN", "").strip()
        return cls(
            predicthq_token=token or None,
            predicthq_api_url=os.getenv("PREDICTHQ_API_URL", PREDICTHQ_API_URL),
            predicthq_timeout_seconds=float(os.getenv("PREDICTHQ_TIMEOUT_SECONDS", "30")),
            timezone=os.getenv("CALENDAR_TIMEZONE", DEFAULT_TIMEZONE),
            legacy_ics_path=os.getenv("LEGACY_ICS_PATH", DEFAULT_LEGACY_ICS_PATH),
            batch_location=os.getenv("BATCH_LOCATION", DEFAULT_BATCH_LOCATION),
            batch_scheduler_enabled=(
                os.getenv("BATCH_SCHEDULER_ENABLED", "true").lower() == "true"
            ),
            session_ttl_seconds=int(
                os.getenv("SESSION_TTL_SECONDS", str(SESSION_TTL_SECONDS))
            ),
            port=int(os.getenv("PORT", "3000")),
        )
