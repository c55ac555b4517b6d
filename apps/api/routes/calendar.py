from __future__ import annotations

import logging
import os
from typing import List

from fastapi import APIRouter, Depends, Request
from fastapi.responses import FileResponse, Response

from apps.api.schemas.calendar import (
    CalendarEventResponse,
    CategoryResponse,
    ErrorResponse,
    GenerateCalendarRequest,
    GenerateCalendarResponse,
)
from packages.core.events.categories import list_categories
from packages.core.events.config import EventsConfig
from packages.core.events.errors import CalendarError, InternalError, NotFoundError
from packages.core.events.provider import default_provider
from packages.core.events.service import CalendarService
from packages.core.events.session_store import SessionStore


router = APIRouter(tags=["calendar"])

logger = logging.getLogger("your_ical.api")

CALENDAR_MEDIA_TYPE = "text/calendar"
GENERATE_CALENDAR_PATH = "/api/generate-calendar"


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.session_store


def get_calendar_service(
    store: SessionStore = Depends(get_session_store),
) -> CalendarService:
    config = EventsConfig.from_env()
    return CalendarService(
        store=store,
        provider=default_provider(config),
        timezone=config.timezone,
    )


@router.get("/api/categories", response_model=List[CategoryResponse])
def categories() -> List[CategoryResponse]:
    return [CategoryResponse(**category) for category in list_categories()]


@router.post(
    GENERATE_CALENDAR_PATH,
    response_model=GenerateCalendarResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
def generate_calendar(
    payload: GenerateCalendarRequest,
    service: CalendarService = Depends(get_calendar_service),
) -> GenerateCalendarResponse:
    try:
        result = service.generate(
            location=payload.location,
            categories=payload.categories,
            weeks=payload.weeks,
            city_name=payload.city_name,
        )
    except CalendarError:
        raise
    except Exception as exc:
        logger.exception("generate_calendar_failed error=%s", exc)
        raise InternalError("Failed to generate calendar", details=str(exc)) from exc
    return GenerateCalendarResponse(
        success=True,
        download_url=result.download_url,
        event_count=result.session.event_count,
        message=result.message,
        session_id=result.session.id,
        events=[CalendarEventResponse(**event.to_dict()) for event in result.events],
    )


@router.get("/api/download/{session_id}", responses={404: {"model": ErrorResponse}})
def download_calendar(
    session_id: str,
    service: CalendarService = Depends(get_calendar_service),
) -> Response:
    session = service.download(session_id)
    return Response(
        content=session.content,
        media_type=CALENDAR_MEDIA_TYPE,
        headers={
            "Content-Disposition": f'attachment; filename="{session.filename}"',
            "Cache-Control": "no-cache",
        },
    )


@router.get("/events.ics", deprecated=True, responses={404: {"model": ErrorResponse}})
def legacy_calendar() -> FileResponse:
    path = EventsConfig.from_env().legacy_ics_path
    if not os.path.exists(path):
        raise NotFoundError(
            "Calendar file not found. Use the web interface to generate a calendar."
        )
    return FileResponse(path, media_type=CALENDAR_MEDIA_TYPE, filename="events.ics")
