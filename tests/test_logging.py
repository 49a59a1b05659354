"""
Tests for structured logging of setting construction.
"""

import json
import logging
import sys

import pytest
from pydantic import ValidationError

from nestconf.framework.configuration import LoggingConfiguration, Namespace
from nestconf.infrastructure.observability import (
    HumanReadableFormatter,
    JSONLogFormatter,
    SettingContextFilter,
    configure_logging,
    get_current_namespace,
    get_current_setting,
    setting_context,
)


def make_record(message="Setting admitted", **extra):
    record = logging.LogRecord("nestconf.test", logging.INFO, __file__, 1, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture
def nestconf_logger():
    logger = logging.getLogger("nestconf")
    level = logger.level
    yield logger
    for handler in list(logger.handlers):
        if getattr(handler, "_nestconf_handler", False):
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(level)


class TestSettingContext:
    """Test construction context tracking."""

    def test_nested_context(self):
        assert get_current_namespace() is None
        with setting_context(namespace="app_config"):
            with setting_context(setting="URL"):
                assert get_current_namespace() == "app_config"
                assert get_current_setting() == "URL"
            assert get_current_setting() is None
        assert get_current_namespace() is None

    def test_context_during_definition(self):
        """Test definitions run with the namespace and setting in context."""
        seen = []
        namespace = Namespace("app_config", description="Application settings")

        def definition(s):
            seen.append((get_current_namespace(), get_current_setting()))
            s.description = "URL"
            s.default = "x"

        namespace.declare_child("database", description="Database").declare_setting("URL", definition)

        assert seen == [("app_config.database", "URL")]

    def test_filter_adds_context(self):
        record = make_record()
        with setting_context(namespace="app_config", setting="URL"):
            assert SettingContextFilter().filter(record) is True
        assert record.namespace == "app_config"
        assert record.setting == "URL"


class TestFormatters:
    """Test log formatting."""

    def test_json(self):
        record = make_record(namespace="app_config", setting="URL", env_var_name="APP_CONFIG_URL")
        payload = json.loads(JSONLogFormatter().format(record))

        assert payload["level"] == "INFO"
        assert payload["logger"] == "nestconf.test"
        assert payload["message"] == "Setting admitted"
        assert payload["namespace"] == "app_config"
        assert payload["setting"] == "URL"
        assert payload["extra"] == {"env_var_name": "APP_CONFIG_URL"}

    def test_json_without_context(self):
        payload = json.loads(JSONLogFormatter().format(make_record()))
        assert "namespace" not in payload
        assert "extra" not in payload

    def test_json_exception(self):
        try:
            raise ValueError("bad value")
        except ValueError:
            record = logging.LogRecord("nestconf", logging.ERROR, __file__, 1, "failed", None, sys.exc_info())

        payload = json.loads(JSONLogFormatter().format(record))
        assert payload["exception"] == {"type": "ValueError", "message": "bad value", "module": "builtins"}

    def test_human_readable(self):
        record = make_record(namespace="app_config", setting="URL", env_var_name="APP_CONFIG_URL")
        text = HumanReadableFormatter().format(record)

        assert "INFO: Setting admitted" in text
        assert "[namespace=app_config]" in text
        assert "[setting=URL]" in text
        assert "[env_var_name=APP_CONFIG_URL]" in text


class TestConfigureLogging:
    """Test configuring the nestconf logger."""

    def test_console(self, nestconf_logger):
        logger = configure_logging(LoggingConfiguration(level="DEBUG", format="json"))

        handlers = [h for h in logger.handlers if getattr(h, "_nestconf_handler", False)]
        assert logger is nestconf_logger
        assert logger.level == logging.DEBUG
        assert len(handlers) == 1
        assert isinstance(handlers[0].formatter, JSONLogFormatter)

    def test_reconfigure_replaces_handlers(self, nestconf_logger):
        configure_logging(LoggingConfiguration())
        configure_logging(LoggingConfiguration())

        handlers = [h for h in nestconf_logger.handlers if getattr(h, "_nestconf_handler", False)]
        assert len(handlers) == 1
        assert isinstance(handlers[0].formatter, HumanReadableFormatter)

    def test_file_output(self, nestconf_logger, tmp_path):
        log_file = tmp_path / "logs" / "nestconf.log"
        configure_logging(LoggingConfiguration(level="DEBUG", format="json", output="both", file_path=str(log_file)))

        Namespace("app_config", description="Application settings", source="tests").declare_setting(
            "URL", lambda s: setattr(s, "description", "URL")
        )
        for handler in nestconf_logger.handlers:
            handler.flush()

        records = [json.loads(line) for line in log_file.read_text().splitlines()]
        admitted = [r for r in records if r["message"] == "Setting admitted"]
        assert admitted[0]["extra"]["env_var_name"] == "APP_CONFIG_URL"


class TestLoggingConfiguration:
    """Test logging configuration validation."""

    def test_defaults(self):
        config = LoggingConfiguration()
        assert config.level == "INFO"
        assert config.format == "text"
        assert config.output == "console"
        assert config.file_path is None

    def test_invalid_level(self):
        with pytest.raises(ValidationError):
            LoggingConfiguration(level="VERBOSE")

    def test_invalid_format(self):
        with pytest.raises(ValidationError):
            LoggingConfiguration(format="xml")

    def test_file_output_requires_path(self):
        with pytest.raises(ValidationError, match="file_path is required"):
            LoggingConfiguration(output="file")
