import os

from packages.core.events.config import EventsConfig


def test_legacy_path_does_not_depend_on_working_directory(monkeypatch, tmp_path):
    monkeypatch.delenv("LEGACY_ICS_PATH", raising=False)
    repo_default = EventsConfig.from_env().legacy_ics_path

    monkeypatch.chdir(tmp_path)
    config = EventsConfig.from_env()

    assert config.legacy_ics_path == repo_default
    assert os.path.isabs(config.legacy_ics_path)
    assert config.legacy_ics_path.endswith(os.path.join("apps", "api", "data", "events.ics"))
    assert not config.legacy_ics_path.startswith(str(tmp_path))


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("LEGACY_ICS_PATH", "/srv/calendar/events.ics")
    monkeypatch.setenv("CALENDAR_TIMEZONE", "America/New_York")
    monkeypatch.setenv("PREDICTHQ_TOKEN", "  ")
    monkeypatch.setenv("BATCH_SCHEDULER_ENABLED", "false")

    config = EventsConfig.from_env()

    assert config.legacy_ics_path == "/srv/calendar/events.ics"
    assert config.timezone == "America/New_York"
    assert config.predicthq_token is None
    assert config.batch_scheduler_enabled is False
