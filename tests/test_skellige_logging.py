"""Tests for structlog configuration."""

import json
import logging
from collections.abc import Generator

import pytest
import structlog

from skellige.config import SkelligeSettings
from skellige.git import Error, converted
from skellige.logging import configure_logging


@pytest.fixture(autouse=True)
def reset_structlog() -> Generator[None, None, None]:
    yield
    structlog.reset_defaults()
    logging.getLogger("skellige").setLevel(logging.NOTSET)
    logging.getLogger("git").setLevel(logging.NOTSET)


def _convert_missing_file() -> None:
    with pytest.raises(Error):
        with converted():
            raise FileNotFoundError(2, "No such file or directory")


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_json_format(self) -> None:
        configure_logging(SkelligeSettings(log_level="debug", log_format="json"))
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_console_format(self) -> None:
        configure_logging(SkelligeSettings(log_level="info", log_format="console"))
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_defaults_from_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from skellige.config import settings

        monkeypatch.setattr(settings, "log_level", "warning")
        monkeypatch.setattr(settings, "log_format", "json")
        configure_logging()
        assert logging.getLogger("skellige").level == logging.WARNING
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_unknown_format_rejected(self) -> None:
        with pytest.raises(ValueError, match="unknown log format: yaml"):
            configure_logging(SkelligeSettings(log_format="yaml"))

    def test_unknown_level_rejected(self) -> None:
        with pytest.raises(ValueError, match="unknown log level: loud"):
            configure_logging(SkelligeSettings(log_level="loud"))

    def test_gitpython_quiet_unless_debug(self) -> None:
        configure_logging(SkelligeSettings(log_level="info"))
        assert logging.getLogger("git").level == logging.WARNING
        configure_logging(SkelligeSettings(log_level="debug"))
        assert logging.getLogger("git").level == logging.DEBUG


class TestConversionEvents:
    """The error boundary logs each conversion at debug level."""

    def test_error_converted_at_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG)
        configure_logging(SkelligeSettings(log_level="debug", log_format="json"))

        _convert_missing_file()

        records = [r for r in caplog.records if "git.error_converted" in r.getMessage()]
        assert len(records) == 1
        assert records[0].levelno == logging.DEBUG
        assert records[0].name == "skellige.git.errors"
        event = json.loads(records[0].getMessage())
        assert event["kind"] == "IO"
        assert event["source_type"] == "FileNotFoundError"
        assert event["level"] == "debug"

    def test_error_converted_hidden_at_info(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG)
        configure_logging(SkelligeSettings(log_level="info", log_format="json"))

        _convert_missing_file()

        assert not [r for r in caplog.records if "git.error_converted" in r.getMessage()]
