from __future__ import annotations

import datetime as dt
import logging
import random
from typing import List, Optional, Tuple

from opentelemetry import trace

from packages.core.logging_config import log_event

from .config import DEFAULT_TIMEZONE
from .errors import CalendarError, InternalError, NotFoundError, ProviderError, ValidationError
from .ics import build_calendar
from .models import CalendarSession, GeneratedCalendar, LocationQuery, RawEvent
from .normalizer import normalize_events
from .provider import EventProvider
from .relevance import filter_local_events, is_sufficient
from .session_store import SessionStore
from .synthesizer import generate_location_events


PREDICTHQ_CONTROL_URL = "https://control.predicthq.com/"

logger = logging.getLogger("your_ical.calendar")


class CalendarService:
    def __init__(
        self,
        store: SessionStore,
        provider: Optional[EventProvider] = None,
        rng: Optional[random.Random] = None,
        timezone: str = DEFAULT_TIMEZONE,
        today: Optional[dt.date] = None,
    ) -> None:
        self._store = store
        self._provider = provider
        self._rng = rng or random.Random()
        self._timezone = timezone
        self._today = today
        self._tracer = trace.get_tracer("your_ical.calendar")

    def generate(
        self,
        location: Optional[str],
        categories: Optional[str] = None,
        weeks: int = 4,
        city_name: Optional[str] = None,
    ) -> GeneratedCalendar:
        if not location or not location.strip():
            raise ValidationError("Location is required")
        query = LocationQuery.parse(location, city_name)

        with self._tracer.start_as_current_span(
            "calendar.generate",
            attributes={"calendar.weeks": weeks, "calendar.location": query.to_within()},
        ):
            events, used_fallback = self._acquire(query, categories, weeks)
            if not events:
                raise NotFoundError("No events found for the specified criteria")
            city = query.city_name or "Unknown"
            try:
                normalized = normalize_events(events, timezone=self._timezone)
                content = build_calendar(
                    normalized,
                    name=f"{city} Events",
                    timezone=self._timezone,
                    description=(
                        f"Generated events for {city}"
                        if used_fallback
                        else "Events fetched from PredictHQ"
                    ),
                )
            except CalendarError:
                raise
            except Exception as exc:
                logger.exception("calendar_build_failed error=%s", exc)
                raise InternalError("Failed to generate calendar", details=str(exc)) from exc

        session = self._store.put(content, event_count=len(normalized), city_name=query.city_name)
        log_event(
            logger,
            "calendar_generated",
            session_id=session.id,
            events=len(normalized),
            fallback=used_fallback,
        )
        return GeneratedCalendar(session=session, events=normalized, used_fallback=used_fallback)

    def download(self, session_id: str) -> CalendarSession:
        return self._store.get(session_id)

    def _acquire(
        self, query: LocationQuery, categories: Optional[str], weeks: int
    ) -> Tuple[List[RawEvent], bool]:
        if self._provider is None:
            reason = "no_token"
        else:
            try:
                raw_events = self._provider.fetch_events(query, categories, weeks)
            except ProviderError as exc:
                reason = "provider_error"
                if exc.is_auth_failure:
                    logger.error(
                        "provider_auth_failed hint=%s",
                        f"set PREDICTHQ_TOKEN; get a token from {PREDICTHQ_CONTROL_URL}",
                    )
                logger.warning("provider_error error=%s details=%s", exc.message, exc.details)
            else:
                local_events = filter_local_events(raw_events, query)
                logger.info(
                    "provider_relevance fetched=%d local=%d", len(raw_events), len(local_events)
                )
                if is_sufficient(local_events):
                    return local_events, False
                reason = "insufficient_local_events"

        self._record_fallback(reason, query)
        generated = generate_location_events(
            query.city_name,
            categories,
            weeks,
            rng=self._rng,
            today=self._today,
            timezone=self._timezone,
        )
        return generated, True

    def _record_fallback(self, reason: str, query: LocationQuery) -> None:
        log_event(
            logger,
            "provider_fallback",
            level=logging.WARNING,
            reason=reason,
            location=query.to_within(),
            city=query.city_name,
        )
        trace.get_current_span().add_event(
            "provider_fallback",
            attributes={"reason": reason, "location": query.to_within()},
        )
