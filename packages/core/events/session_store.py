from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Dict, Optional

from .config import SESSION_TTL_SECONDS
from .errors import NotFoundError
from .models import CalendarSession


DOWNLOAD_GRACE_SECONDS = 1.0

Clock = Callable[[], float]
Scheduler = Callable[[float, Callable[[], None]], None]

logger = logging.getLogger("your_ical.sessions")


def _timer_schedule(delay: float, callback: Callable[[], None]) -> None:
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    timer.start()


class SessionStore:
    """In-memory, TTL-bound calendar sessions for one-time download.

    Expired entries are swept only when ``put`` is called, so an idle store
    keeps them until the next write. Sessions live in this process only.
    """

    def __init__(
        self,
        ttl_seconds: float = SESSION_TTL_SECONDS,
        grace_seconds: float = DOWNLOAD_GRACE_SECONDS,
        clock: Clock = time.time,
        schedule: Scheduler = _timer_schedule,
    ) -> None:
        self._ttl = ttl_seconds
        self._grace = grace_seconds
        self._clock = clock
        self._schedule = schedule
        self._lock = threading.Lock()
        self._sessions: Dict[str, CalendarSession] = {}
        self._last_key_ms = 0
        self._last_sweep: Optional[float] = None

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    @property
    def last_sweep(self) -> Optional[float]:
        return self._last_sweep

    def _mint_key(self, now: float) -> str:
        key_ms = max(int(now * 1000), self._last_key_ms + 1)
        self._last_key_ms = key_ms
        return str(key_ms)

    def _expired(self, session: CalendarSession, now: float) -> bool:
        return now - session.created_at > self._ttl

    def _sweep_locked(self, now: float) -> int:
        stale = [key for key, session in self._sessions.items() if self._expired(session, now)]
        for key in stale:
            del self._sessions[key]
        self._last_sweep = now
        return len(stale)

    def put(self, content: str, event_count: int, city_name: Optional[str] = None) -> CalendarSession:
        with self._lock:
            now = self._clock()
            session = CalendarSession(
                id=self._mint_key(now),
                content=content,
                event_count=event_count,
                city_name=city_name or "Unknown",
                created_at=now,
            )
            self._sessions[session.id] = session
            purged = self._sweep_locked(now)
        if purged:
            logger.info("sessions_swept purged=%d", purged)
        return session

    def get(self, session_id: str) -> CalendarSession:
        """Return a live session and schedule its removal after the grace delay."""
        with self._lock:
            session = self._sessions.get(session_id)
            if session is not None and self._expired(session, self._clock()):
                del self._sessions[session_id]
                session = None
        if session is None:
            raise NotFoundError(
                "Calendar session not found or expired. Please generate a new calendar."
            )
        self._schedule(self._grace, lambda: self._discard(session_id))
        return session

    def sweep(self) -> int:
        with self._lock:
            return self._sweep_locked(self._clock())

    def _discard(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)
