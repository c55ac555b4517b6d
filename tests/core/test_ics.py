import datetime as dt

import pytest
from icalendar import Calendar

from packages.core.events.ics import PRODID, build_calendar
from packages.core.events.models import NormalizedEvent


def _events(count):
    start = dt.datetime(2026, 6, 1, 18, 30, tzinfo=dt.timezone(dt.timedelta(hours=2)))
    return [
        NormalizedEvent(
            title=f"Concert {index}",
            start=start + dt.timedelta(days=index),
            end=start + dt.timedelta(days=index, hours=2),
            category="concerts" if index % 2 else None,
            location="Berlin" if index % 2 else None,
            description="Live music",
        )
        for index in range(count)
    ]


def test_reparse_yields_one_vevent_per_event_with_unique_uids():
    text = build_calendar(_events(12), name="Berlin Events", timezone="Europe/Berlin")
    calendar = Calendar.from_ical(text)
    vevents = calendar.walk("VEVENT")
    assert len(vevents) == 12
    uids = [str(event["UID"]) for event in vevents]
    assert len(set(uids)) == 12
    assert str(calendar["PRODID"]) == PRODID
    assert str(calendar["X-WR-CALNAME"]) == "Berlin Events"


def test_times_are_written_in_utc():
    text = build_calendar(_events(1), token="1700000000000")
    assert "DTSTART:20260601T163000Z" in text
    assert "DTEND:20260601T183000Z" in text
    assert "UID:your-ical-1700000000000-0" in text
    assert text.startswith("BEGIN:VCALENDAR")
    assert text.rstrip().endswith("END:VCALENDAR")


def test_optional_fields_only_when_present():
    vevents = Calendar.from_ical(build_calendar(_events(2))).walk("VEVENT")
    assert "LOCATION" not in vevents[0]
    assert str(vevents[1]["LOCATION"]) == "Berlin"
    assert str(vevents[1]["SUMMARY"]) == "Concert 1"


def test_empty_event_list_rejected():
    with pytest.raises(ValueError):
        build_calendar([])
