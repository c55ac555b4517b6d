from __future__ import annotations

import datetime as dt
import logging
from typing import Any, Dict, List, Optional, Protocol
from zoneinfo import ZoneInfo

import httpx
from opentelemetry import trace

from .categories import DEFAULT_CATEGORIES
from .config import EventsConfig
from .errors import ProviderError
from .models import LocationQuery, RawEvent


# 5 events per day for 28 days.
PROVIDER_LIMIT = 140

logger = logging.getLogger("your_ical.provider")


class EventProvider(Protocol):
    def fetch_events(
        self, query: LocationQuery, categories: Optional[str], weeks: int
    ) -> List[RawEvent]:
        """Return raw events near the query starting within the next weeks."""


class PredictHQClient(EventProvider):
    def __init__(
        self,
        token: str,
        api_url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
        today: Optional[dt.date] = None,
        timezone: str = "UTC",
    ) -> None:
        self._token = token
        self._api_url = api_url
        self._timeout = timeout
        self._transport = transport
        self._today = today
        self._timezone = timezone
        self._tracer = trace.get_tracer("your_ical.provider")

    def build_params(
        self, query: LocationQuery, categories: Optional[str], weeks: int
    ) -> Dict[str, Any]:
        today = self._today or dt.datetime.now(ZoneInfo(self._timezone)).date()
        return {
            "limit": PROVIDER_LIMIT,
            "category": categories or DEFAULT_CATEGORIES,
            "start.gte": today.isoformat(),
            "start.lte": (today + dt.timedelta(days=weeks * 7)).isoformat(),
            "location.within": query.to_within(),
        }

    def fetch_events(
        self, query: LocationQuery, categories: Optional[str], weeks: int
    ) -> List[RawEvent]:
        params = self.build_params(query, categories, weeks)
        headers = {
            "Authorization": f"Bearer {self._token}",
            "Accept": "application/json",
        }
        logger.info("provider_fetch params=%s", params)
        with self._tracer.start_as_current_span(
            "predicthq.fetch_events",
            attributes={"provider.url": self._api_url, "provider.weeks": weeks},
        ):
            try:
                with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
                    response = client.get(self._api_url, params=params, headers=headers)
                    response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                status = exc.response.status_code
                raise ProviderError(
                    f"PredictHQ returned HTTP {status}",
                    details=exc.response.text[:200],
                    http_status=status,
                ) from exc
            except httpx.HTTPError as exc:
                raise ProviderError("PredictHQ request failed", details=str(exc)) from exc

            try:
                payload = response.json()
            except ValueError as exc:
                raise ProviderError(
                    "PredictHQ returned a malformed body", details=str(exc)
                ) from exc

        results = payload.get("results") if isinstance(payload, dict) else None
        if not isinstance(results, list):
            raise ProviderError("PredictHQ response has no results list")
        events = [item for item in results if isinstance(item, dict)]
        logger.info("provider_fetched count=%d", len(events))
        return events


def default_provider(config: Optional[EventsConfig] = None) -> Optional[PredictHQClient]:
    """Build the provider client, or None when no token is configured."""
    config = config or EventsConfig.from_env()
    if not config.predicthq_token:
        return None
    return PredictHQClient(
        token=config.predicthq_token,
        api_url=config.predicthq_api_url,
        timeout=config.predicthq_timeout_seconds,
        timezone=config.timezone,
    )
