import datetime as dt
import random
from collections import Counter

from packages.core.events.distributor import (
    DAYS_TO_FILL,
    DURATION_CHOICES_MINUTES,
    MAX_EVENTS_PER_DAY,
    distribute_events,
)
from packages.core.events.models import NormalizedEvent


TODAY = dt.date(2026, 3, 2)


def _events(count):
    start = dt.datetime(2026, 1, 1, 10, tzinfo=dt.timezone.utc)
    return [
        NormalizedEvent(title=f"Event {index}", start=start, end=start + dt.timedelta(hours=1))
        for index in range(count)
    ]


def test_caps_events_per_day_and_window():
    distributed = distribute_events(_events(200), rng=random.Random(11), today=TODAY)
    assert len(distributed) == DAYS_TO_FILL * MAX_EVENTS_PER_DAY
    per_day = Counter(event.start.date() for event in distributed)
    assert max(per_day.values()) == MAX_EVENTS_PER_DAY
    assert min(per_day) == TODAY
    assert max(per_day) == TODAY + dt.timedelta(days=DAYS_TO_FILL - 1)


def test_times_and_durations():
    for event in distribute_events(_events(40), rng=random.Random(2), today=TODAY):
        assert 8 <= event.start.hour <= 21
        assert event.start.minute in (0, 15, 30, 45)
        minutes = (event.end - event.start).total_seconds() / 60
        assert minutes in DURATION_CHOICES_MINUTES


def test_input_order_is_kept():
    distributed = distribute_events(_events(7), rng=random.Random(4), today=TODAY)
    assert [event.title for event in distributed] == [f"Event {index}" for index in range(7)]
    assert [event.start.date() for event in distributed] == [TODAY] * 5 + [TODAY + dt.timedelta(days=1)] * 2


def test_empty_input():
    assert distribute_events([], rng=random.Random(1), today=TODAY) == []
