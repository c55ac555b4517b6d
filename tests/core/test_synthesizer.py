import datetime as dt
import random

from packages.core.events.synthesizer import (
    EVENT_TEMPLATES,
    MAX_SYNTHETIC_EVENTS,
    generate_location_events,
)


TODAY = dt.date(2026, 3, 2)


def test_events_start_tomorrow_and_stay_in_bounds():
    events = generate_location_events(
        "Berlin", "concerts,sports", 2, rng=random.Random(7), today=TODAY, timezone="Europe/Berlin"
    )
    assert 2 * 14 <= len(events) <= 3 * 14
    assert min(event["start"].date() for event in events) == TODAY + dt.timedelta(days=1)
    assert max(event["start"].date() for event in events) == TODAY + dt.timedelta(days=14)
    for event in events:
        assert 9 <= event["start"].hour <= 20
        assert event["start"].minute in (0, 30)
        duration = event["end"] - event["start"]
        assert dt.timedelta(hours=1) <= duration < dt.timedelta(hours=4)
        assert event["category"] in ("concerts", "sports")


def test_events_are_capped():
    events = generate_location_events("Berlin", "festivals", 12, rng=random.Random(1), today=TODAY)
    assert len(events) == MAX_SYNTHETIC_EVENTS


def test_unknown_category_uses_festival_templates():
    events = generate_location_events("Oslo", "severe-weather", 1, rng=random.Random(3), today=TODAY)
    festival_titles = {template.format(city="Oslo") for template in EVENT_TEMPLATES["festivals"]}
    assert events
    assert all(event["title"] in festival_titles for event in events)
    assert all(event["category"] == "severe-weather" for event in events)


def test_missing_city_uses_local_area():
    events = generate_location_events(None, ["sports"], 1, rng=random.Random(5), today=TODAY)
    assert all("Local Area" in event["title"] for event in events)


def test_same_seed_gives_same_events():
    first = generate_location_events("Berlin", "concerts", 1, rng=random.Random(42), today=TODAY)
    second = generate_location_events("Berlin", "concerts", 1, rng=random.Random(42), today=TODAY)
    assert first == second
