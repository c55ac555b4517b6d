from __future__ import annotations

from typing import Optional


class CalendarError(Exception):
    status_code = 500

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(CalendarError):
    """Missing or malformed request input."""

    status_code = 400


class ProviderError(CalendarError):
    """The external event provider could not deliver usable data."""

    status_code = 502

    def __init__(
        self,
        message: str,
        details: Optional[str] = None,
        http_status: Optional[int] = None,
    ) -> None:
        super().__init__(message, details)
        self.http_status = http_status

    @property
    def is_auth_failure(self) -> bool:
        return self.http_status == 401


class NotFoundError(CalendarError):
    status_code = 404


class InternalError(CalendarError):
    status_code = 500
