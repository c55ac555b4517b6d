from .calendar import (
    CalendarEventResponse,
    CategoryResponse,
    ErrorResponse,
    GenerateCalendarRequest,
    GenerateCalendarResponse,
)

__all__ = [
    "CalendarEventResponse",
    "CategoryResponse",
    "ErrorResponse",
    "GenerateCalendarRequest",
    "GenerateCalendarResponse",
]
