from __future__ import annotations

import datetime as dt
from typing import Any, Dict

from fastapi import APIRouter


router = APIRouter(tags=["meta"])

API_VERSION = "1.0.0"


@router.get("/health")
def health() -> Dict[str, Any]:
    return {
        "status": "healthy",
        "timestamp": dt.datetime.now(dt.timezone.utc).isoformat(),
        "version": API_VERSION,
    }


@router.get("/")
def root() -> Dict[str, Any]:
    return {
        "message": "Calendar Generator API",
        "version": API_VERSION,
        "docs": "/docs",
        "endpoints": {
            "generateCalendar": "POST /api/generate-calendar",
            "download": "GET /api/download/{sessionId}",
            "categories": "GET /api/categories",
            "legacyCalendar": "GET /events.ics",
        },
    }
