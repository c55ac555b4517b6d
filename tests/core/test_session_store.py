import pytest

from packages.core.events.errors import NotFoundError
from packages.core.events.session_store import SessionStore


class FakeClock:
    def __init__(self, now=1_700_000_000.0):
        self.now = now

    def __call__(self):
        return self.now


class RecordingScheduler:
    def __init__(self):
        self.calls = []

    def __call__(self, delay, callback):
        self.calls.append((delay, callback))

    def run_all(self):
        for _, callback in self.calls:
            callback()


def _store(clock, scheduler):
    return SessionStore(ttl_seconds=600, clock=clock, schedule=scheduler)


def test_session_available_at_nine_minutes_not_at_eleven():
    clock = FakeClock()
    store = _store(clock, RecordingScheduler())
    first = store.put("BEGIN:VCALENDAR", event_count=3, city_name="Berlin")
    second = store.put("BEGIN:VCALENDAR", event_count=4, city_name="Paris")

    clock.now += 9 * 60
    assert store.get(first.id).event_count == 3

    clock.now += 2 * 60
    with pytest.raises(NotFoundError):
        store.get(second.id)


def test_get_schedules_deletion_after_grace():
    scheduler = RecordingScheduler()
    store = _store(FakeClock(), scheduler)
    session = store.put("ics", event_count=1, city_name="Berlin")

    assert store.get(session.id).content == "ics"
    assert scheduler.calls[0][0] == 1.0
    # Still readable until the grace timer fires.
    assert store.get(session.id).content == "ics"

    scheduler.run_all()
    with pytest.raises(NotFoundError):
        store.get(session.id)


def test_put_sweeps_expired_entries():
    clock = FakeClock()
    store = _store(clock, RecordingScheduler())
    store.put("old", event_count=1)
    clock.now += 11 * 60
    store.put("new", event_count=1)
    assert len(store) == 1
    assert store.last_sweep == clock.now


def test_keys_are_time_based_and_increasing():
    clock = FakeClock()
    store = _store(clock, RecordingScheduler())
    first = store.put("a", event_count=1)
    second = store.put("b", event_count=1)
    assert first.id == str(int(clock.now * 1000))
    assert int(second.id) > int(first.id)


def test_unknown_session_and_defaults():
    store = _store(FakeClock(), RecordingScheduler())
    with pytest.raises(NotFoundError):
        store.get("123")
    session = store.put("x", event_count=1)
    assert session.city_name == "Unknown"
    assert session.filename == f"Unknown-events-{session.id}.ics"


def test_sweep_returns_purged_count():
    clock = FakeClock()
    store = _store(clock, RecordingScheduler())
    store.put("a", event_count=1)
    store.put("b", event_count=1)
    clock.now += 601
    assert store.sweep() == 2
    assert len(store) == 0
