from __future__ import annotations

from typing import Any, Dict, Optional

from apscheduler.schedulers.background import BackgroundScheduler
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

from apps.api.calendar_scheduler import start_scheduler
from apps.api.observability import init_observability
from apps.api.routes.calendar import GENERATE_CALENDAR_PATH
from apps.api.routes.calendar import router as calendar_router
from apps.api.routes.meta import router as meta_router
from packages.core.events.config import EventsConfig
from packages.core.events.errors import CalendarError
from packages.core.events.session_store import SessionStore
from packages.core.logging_config import configure_logging


configure_logging()

init_observability()
app = FastAPI(
    title="Calendar Event Generator API",
    description="Generate personalized event calendars for any location and interests",
    version="1.0.0",
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
FastAPIInstrumentor.instrument_app(app)
app.state.session_store = SessionStore(
    ttl_seconds=EventsConfig.from_env().session_ttl_seconds
)
app.include_router(calendar_router)
app.include_router(meta_router)

_SCHEDULER: Optional[BackgroundScheduler] = None


@app.exception_handler(CalendarError)
async def _calendar_error(request: Request, exc: CalendarError) -> JSONResponse:
    body: Dict[str, Any] = {"error": exc.message}
    if exc.details:
        body["details"] = exc.details
    return JSONResponse(status_code=exc.status_code, content=body)


@app.exception_handler(RequestValidationError)
async def _request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    details = "; ".join(
        "{}: {}".format(".".join(str(part) for part in error["loc"]), error["msg"])
        for error in exc.errors()
    )
    body = exc.body if isinstance(exc.body, dict) else {}
    if request.url.path == GENERATE_CALENDAR_PATH and not body.get("location"):
        error = "Location is required"
    else:
        error = "Invalid request"
    return JSONResponse(status_code=400, content={"error": error, "details": details})


@app.on_event("startup")
def _start_batch_scheduler() -> None:
    global _SCHEDULER
    config = EventsConfig.from_env()
    if not config.batch_scheduler_enabled:
        return
    if _SCHEDULER is not None:
        return
    _SCHEDULER = start_scheduler(config)


@app.on_event("shutdown")
def _stop_batch_scheduler() -> None:
    global _SCHEDULER
    if _SCHEDULER is not None:
        _SCHEDULER.shutdown(wait=False)
        _SCHEDULER = None


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=EventsConfig.from_env().port)
