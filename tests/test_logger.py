"""
Tests for the event logger and template catalog
"""

import json
import logging

import pytest

from ircconnect.logs import event_catalog
from ircconnect.logs.logger import IRCLogger, SimpleFormatter


@pytest.fixture
def irc_logger(monkeypatch):
    monkeypatch.delenv("DEBUG", raising=False)
    instance = IRCLogger(name="ircconnect.test")
    instance.logger.propagate = True
    return instance


def _record(caplog) -> logging.LogRecord:
    records = [r for r in caplog.records if r.name == "ircconnect.test"]
    assert records
    return records[-1]


class TestLogEvent:
    def test_template_is_formatted(self, irc_logger, caplog):
        with caplog.at_level(logging.INFO, logger="ircconnect.test"):
            irc_logger.log_event("app", "config_loaded", count=2, path="x.conf")
        msg = _record(caplog).getMessage()
        assert "2" in msg
        assert "x.conf" in msg

    def test_connection_and_channel_prefix(self, irc_logger, caplog):
        with caplog.at_level(logging.INFO, logger="ircconnect.test"):
            irc_logger.log_event(
                "connection", "replay_join", connection="me@irc:6667", channel="#a", name="#a"
            )
        msg = _record(caplog).getMessage()
        assert msg.startswith("[me@irc:6667#a")

    def test_system_prefix_when_no_connection(self, irc_logger, caplog):
        with caplog.at_level(logging.INFO, logger="ircconnect.test"):
            irc_logger.log_event("app", "start")
        assert _record(caplog).getMessage().startswith("[system")

    def test_unknown_event_derives_text(self, irc_logger, caplog):
        with caplog.at_level(logging.INFO, logger="ircconnect.test"):
            irc_logger.log_event("some_domain", "odd_action")
        assert "some domain: odd action" in _record(caplog).getMessage()

    def test_missing_template_field_falls_back(self, irc_logger, caplog):
        with caplog.at_level(logging.INFO, logger="ircconnect.test"):
            irc_logger.log_event("app", "config_loaded")
        assert "{count}" in _record(caplog).getMessage()

    def test_explicit_human_text(self, irc_logger, caplog):
        with caplog.at_level(logging.WARNING, logger="ircconnect.test"):
            irc_logger.log_event("app", "start", level=logging.WARNING, human="custom text")
        record = _record(caplog)
        assert record.levelno == logging.WARNING
        assert "custom text" in record.getMessage()

    def test_debug_mode_includes_event_and_context(self, irc_logger, caplog, monkeypatch):
        monkeypatch.setenv("DEBUG", "true")
        with caplog.at_level(logging.DEBUG, logger="ircconnect.test"):
            irc_logger.log_event("transport", "open", host="h", port=1)
        msg = _record(caplog).getMessage()
        assert msg.startswith("transport_open")
        assert "host=h" in msg


def test_simple_formatter_pads_level():
    formatter = SimpleFormatter()
    formatter.enable_color = False
    record = logging.LogRecord("x", logging.INFO, "", 0, "hello", (), None)
    assert formatter.format(record) == "INFO     hello"


class TestEventCatalog:
    def test_bundled_templates_cover_connection_events(self):
        for action in ("connect_start", "succeeded", "timeout", "closed", "replay_join"):
            assert ("connection", action) in event_catalog.EVENT_TEMPLATES

    def test_reload_from_custom_file(self, tmp_path):
        path = tmp_path / "templates.json"
        path.write_text(json.dumps({"demo": {"hello": "Hello {name}"}}), encoding="utf-8")
        try:
            event_catalog.reload_event_templates(path)
            assert event_catalog.EVENT_TEMPLATES == {("demo", "hello"): "Hello {name}"}
        finally:
            event_catalog.reload_event_templates()

    def test_missing_file_reports_load_error(self, tmp_path):
        try:
            event_catalog.reload_event_templates(tmp_path / "absent.json")
            assert ("app", "load_error") in event_catalog.EVENT_TEMPLATES
        finally:
            event_catalog.reload_event_templates()
