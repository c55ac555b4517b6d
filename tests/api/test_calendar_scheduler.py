from apps.api import calendar_scheduler as scheduler_module
from packages.core.events.config import EventsConfig


def _config(tmp_path):
    return EventsConfig(
        predicthq_token=None,
        predicthq_api_url="https://api.predicthq.test/v1/events/",
        predicthq_timeout_seconds=5,
        timezone="Europe/Berlin",
        legacy_ics_path=str(tmp_path / "events.ics"),
        batch_location="50km@52.5200,13.4050",
        batch_scheduler_enabled=True,
        session_ttl_seconds=600,
        port=3000,
    )


def test_refresh_writes_legacy_file(tmp_path):
    scheduler_module.refresh_legacy_calendar(_config(tmp_path))
    assert (tmp_path / "events.ics").read_text(encoding="utf-8").startswith("BEGIN:VCALENDAR")


def test_refresh_logs_failures(monkeypatch, tmp_path):
    def boom(config):
        raise OSError("read-only filesystem")

    monkeypatch.setattr(scheduler_module, "run_batch_from_env", boom)
    scheduler_module.refresh_legacy_calendar(_config(tmp_path))


def test_start_scheduler_registers_daily_job(monkeypatch, tmp_path):
    monkeypatch.setattr(scheduler_module, "run_batch_from_env", lambda config: 0)
    scheduler = scheduler_module.start_scheduler(_config(tmp_path))
    try:
        job = scheduler.get_job("legacy_calendar")
        assert job is not None
        assert "hour='6'" in str(job.trigger)
    finally:
        scheduler.shutdown(wait=False)
