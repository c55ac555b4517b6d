from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CategoryResponse(BaseModel):
    value: str
    label: str


class GenerateCalendarRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    location: Optional[str] = Field(
        default=None,
        description="Location in format <radius>km@<latitude>,<longitude>",
        examples=["50km@52.5200,13.4050"],
    )
    categories: Optional[str] = Field(
        default=None,
        description="Comma-separated list of event categories",
        examples=["concerts,festivals,sports"],
    )
    weeks: int = Field(default=4, ge=1, le=12)
    city_name: Optional[str] = Field(default=None, alias="cityName")


class CalendarEventResponse(BaseModel):
    title: str
    start: str
    end: str
    category: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None


class GenerateCalendarResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    download_url: str = Field(alias="downloadUrl")
    event_count: int = Field(alias="eventCount")
    message: str
    session_id: str = Field(alias="sessionId")
    events: List[CalendarEventResponse] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None
