import json
import logging

from packages.core.logging_config import JsonFormatter, log_event


def test_log_event_renders_key_values(caplog):
    logger = logging.getLogger("your_ical.test")
    with caplog.at_level(logging.INFO, logger="your_ical.test"):
        log_event(logger, "provider_fallback", reason="no_token", city="Berlin")
    record = caplog.records[-1]
    assert record.getMessage() == "provider_fallback reason=no_token city=Berlin"
    assert record.event == "provider_fallback"
    assert record.fields == {"reason": "no_token", "city": "Berlin"}


def test_json_formatter_includes_event_fields():
    record = logging.LogRecord("your_ical.test", logging.WARNING, __file__, 1, "msg", None, None)
    record.event = "provider_fallback"
    record.fields = {"reason": "provider_error"}
    payload = json.loads(JsonFormatter().format(record))
    assert payload["event"] == "provider_fallback"
    assert payload["reason"] == "provider_error"
    assert payload["level"] == "WARNING"
