from __future__ import annotations

import datetime as dt
import logging
from zoneinfo import ZoneInfo

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from packages.core.events.batch import run_batch_from_env
from packages.core.events.config import EventsConfig


logger = logging.getLogger("your_ical.scheduler")


def refresh_legacy_calendar(config: EventsConfig) -> None:
    try:
        count = run_batch_from_env(config)
    except Exception as exc:
        logger.exception("legacy_calendar_refresh_failed error=%s", exc)
        return
    logger.info("legacy_calendar_refreshed events=%d", count)


def start_scheduler(config: EventsConfig) -> BackgroundScheduler:
    """Refresh the legacy calendar daily at 06:00 and once right away."""
    scheduler = BackgroundScheduler(timezone=config.timezone)
    scheduler.add_job(
        refresh_legacy_calendar,
        CronTrigger(hour=6, minute=0, timezone=config.timezone),
        args=[config],
        id="legacy_calendar",
        replace_existing=True,
        next_run_time=dt.datetime.now(ZoneInfo(config.timezone)),
    )
    scheduler.start()
    return scheduler
