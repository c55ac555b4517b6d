from __future__ import annotations

import datetime as dt
import logging
import os
import random
from typing import List, Optional
from zoneinfo import ZoneInfo

from packages.core.logging_config import configure_logging, log_event

from .config import EventsConfig
from .distributor import DAYS_TO_FILL, distribute_events
from .errors import ProviderError
from .ics import build_calendar
from .models import LocationQuery, NormalizedEvent
from .normalizer import normalize_events
from .provider import EventProvider, default_provider
from .service import PREDICTHQ_CONTROL_URL


BATCH_WEEKS = DAYS_TO_FILL // 7

logger = logging.getLogger("your_ical.batch")


def _sample_events(timezone: str) -> List[NormalizedEvent]:
    start = dt.datetime.now(ZoneInfo(timezone))
    return [
        NormalizedEvent(
            title="Sample Event",
            start=start,
            end=start + dt.timedelta(hours=2),
        )
    ]


def save_calendar_file(content: str, path: str) -> str:
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w", encoding="utf-8") as handle:
        handle.write(content)
    logger.info("calendar_file_saved path=%s", path)
    return path


def run_batch(
    provider: Optional[EventProvider],
    output_path: str,
    location: str,
    timezone: str = "Europe/Berlin",
    rng: Optional[random.Random] = None,
    today: Optional[dt.date] = None,
) -> int:
    """Fetch, distribute and write the legacy calendar file.

    Falls back to a single sample event when the provider is missing, fails
    or returns nothing. Returns the number of events written.
    """
    rng = rng or random.Random()
    query = LocationQuery.parse(location)
    events: List[NormalizedEvent] = []
    if provider is None:
        log_event(logger, "batch_fallback", level=logging.WARNING, reason="no_token")
    else:
        try:
            raw_events = provider.fetch_events(query, None, BATCH_WEEKS)
            events = normalize_events(raw_events, timezone=timezone)
        except ProviderError as exc:
            if exc.is_auth_failure:
                logger.error(
                    "provider_auth_failed hint=%s",
                    f"set PREDICTHQ_TOKEN; get a token from {PREDICTHQ_CONTROL_URL}",
                )
            log_event(
                logger,
                "batch_fallback",
                level=logging.WARNING,
                reason="provider_error",
                error=exc.message,
            )

    if events:
        events = distribute_events(events, rng=rng, today=today, timezone=timezone)
    else:
        events = _sample_events(timezone)

    content = build_calendar(
        events,
        name="PredictHQ Events",
        timezone=timezone,
        description="Events fetched from PredictHQ API",
        uid_prefix="predicthq",
    )
    save_calendar_file(content, output_path)
    log_event(logger, "batch_completed", events=len(events), path=output_path)
    return len(events)


def run_batch_from_env(config: Optional[EventsConfig] = None) -> int:
    config = config or EventsConfig.from_env()
    return run_batch(
        default_provider(config),
        output_path=config.legacy_ics_path,
        location=config.batch_location,
        timezone=config.timezone,
    )


if __name__ == "__main__":
    configure_logging()
    run_batch_from_env()
