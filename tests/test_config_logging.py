"""
Test suite for configuration and structured logging
"""

import json
import logging
import pytest

from judgment_interest import config as config_module
from judgment_interest.config import JudgmentInterestConfig, get_config, reload_config
from judgment_interest.logging_config import JSONFormatter, level_number, log_action, setup_logging


class TestConfig:
    """Test environment-driven settings"""

    def test_defaults(self, monkeypatch):
        for name in ("JUDGMENT_INTEREST_END_DATE_ACCRUES", "JUDGMENT_INTEREST_DEFAULT_JURISDICTION"):
            monkeypatch.delenv(name, raising=False)
        settings = JudgmentInterestConfig()

        assert settings.default_jurisdiction == "BC"
        assert settings.end_date_accrues is False
        assert settings.payments_before_damages is True
        assert settings.display_precision == 2
        assert settings.rates_file is None

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("JUDGMENT_INTEREST_END_DATE_ACCRUES", "true")
        monkeypatch.setenv("judgment_interest_default_jurisdiction", "AB")
        settings = JudgmentInterestConfig()

        assert settings.end_date_accrues is True
        assert settings.default_jurisdiction == "AB"

    def test_reload(self, monkeypatch):
        original = get_config()
        monkeypatch.setenv("JUDGMENT_INTEREST_API_PORT", "9001")
        try:
            reloaded = reload_config()
            assert reloaded.api_port == 9001
            assert get_config() is reloaded
        finally:
            config_module.config = original


class TestJSONFormatter:
    """Test structured log records"""

    def setup_method(self):
        """Set up test fixtures"""
        self.formatter = JSONFormatter()

    def make_record(self, **fields):
        record = logging.LogRecord(
            "judgment_interest.test", logging.INFO, __file__, 10, "Calculated %s", ("interest",), None
        )
        for key, value in fields.items():
            setattr(record, key, value)
        return record

    def test_basic_fields(self):
        entry = json.loads(self.formatter.format(self.make_record()))

        assert entry["level"] == "INFO"
        assert entry["message"] == "Calculated interest"
        assert entry["logger"] == "judgment_interest.test"
        assert "timestamp" in entry
        assert "jurisdiction" not in entry

    def test_structured_fields(self):
        record = self.make_record(jurisdiction="BC", mode="prejudgment", calculation_id="abc", extra={"rows": 3})
        entry = json.loads(self.formatter.format(record))

        assert entry["jurisdiction"] == "BC"
        assert entry["mode"] == "prejudgment"
        assert entry["calculation_id"] == "abc"
        assert entry["extra"] == {"rows": 3}


class TestSetupLogging:
    """Test logger configuration"""

    LOGGER_NAME = "judgment_interest_tests.logging"

    def test_json_handler(self):
        logger = setup_logging("debug", logger_name=self.LOGGER_NAME)

        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, JSONFormatter)
        assert logger.propagate is False

    def test_text_handler_replaces_json(self):
        setup_logging(logger_name=self.LOGGER_NAME)
        logger = setup_logging("warning", logger_name=self.LOGGER_NAME, fmt="text")

        assert len(logger.handlers) == 1
        assert not isinstance(logger.handlers[0].formatter, JSONFormatter)

    def test_invalid_level(self):
        with pytest.raises(ValueError, match="Unknown log level"):
            setup_logging("chatty", logger_name=self.LOGGER_NAME)

    def test_level_names(self):
        assert level_number("warning") == logging.WARNING
        assert level_number("DEBUG") == logging.DEBUG

    def test_log_action(self):
        logger = logging.getLogger("judgment_interest_tests.actions")
        logger.setLevel(logging.DEBUG)
        captured = []

        class Capture(logging.Handler):
            def emit(self, record):
                captured.append(record)

        logger.addHandler(Capture())
        log_action(logger, "info", "Judgment recalculated", action="recalculate",
                   jurisdiction="BC", calculation_id="abc")

        assert captured[0].action == "recalculate"
        assert captured[0].jurisdiction == "BC"
        assert captured[0].calculation_id == "abc"
        assert not hasattr(captured[0], "mode")
