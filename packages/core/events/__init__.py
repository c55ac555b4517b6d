from .errors import (
    CalendarError,
    InternalError,
    NotFoundError,
    ProviderError,
    ValidationError,
)
from .models import CalendarSession, GeneratedCalendar, LocationQuery, NormalizedEvent
from .service import CalendarService
from .session_store import SessionStore

__all__ = [
    "CalendarError",
    "CalendarService",
    "CalendarSession",
    "GeneratedCalendar",
    "InternalError",
    "LocationQuery",
    "NormalizedEvent",
    "NotFoundError",
    "ProviderError",
    "SessionStore",
    "ValidationError",
]
