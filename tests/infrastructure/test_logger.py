"""Tests for logging setup."""
import logging

import pytest
import structlog

from behavioral_patterns.config.schemas.logging_schema import LoggingConfig
from behavioral_patterns.infrastructure.logging.logger import (
    get_logger,
    get_structured_logger,
    setup_logging,
)


def _installed_handlers():
    return [h for h in logging.getLogger().handlers if getattr(h, "_bpatterns_handler", False)]


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    level = root.level
    yield
    for handler in _installed_handlers():
        root.removeHandler(handler)
        handler.close()
    root.setLevel(level)


class TestSetupLogging:
    def test_console_handler(self):
        setup_logging(LoggingConfig(level="debug"))

        handlers = _installed_handlers()
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.StreamHandler)
        assert isinstance(handlers[0].formatter, structlog.stdlib.ProcessorFormatter)
        assert logging.getLogger().level == logging.DEBUG

    def test_repeated_setup_replaces_handlers(self):
        setup_logging(LoggingConfig())
        setup_logging(LoggingConfig())
        assert len(_installed_handlers()) == 1

    def test_file_destination(self, tmp_path):
        log_file = tmp_path / "logs" / "app.log"
        setup_logging(LoggingConfig(destination="file", file_path=str(log_file), format="json"))

        get_logger("behavioral_patterns.test").warning("written to file")
        for handler in _installed_handlers():
            handler.flush()

        assert log_file.exists()
        assert "written to file" in log_file.read_text()

    def test_both_destinations(self, tmp_path):
        setup_logging(LoggingConfig(destination="both", file_path=str(tmp_path / "app.log")))
        assert len(_installed_handlers()) == 2

    def test_file_path_expands_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("BP_TEST_LOG_DIR", str(tmp_path))
        setup_logging(LoggingConfig(destination="file", file_path="$BP_TEST_LOG_DIR/app.log"))
        assert (tmp_path / "app.log").exists()


class TestLoggingConfig:
    def test_level_is_normalised(self):
        assert LoggingConfig(level="warning").level == "WARNING"

    @pytest.mark.parametrize("field,value", [
        ("level", "LOUD"), ("destination", "syslog"), ("format", "xml"), ("backup_count", -1),
    ])
    def test_invalid_values(self, field, value):
        with pytest.raises(ValueError):
            LoggingConfig(**{field: value})


def test_get_logger_returns_stdlib_logger():
    assert get_logger("behavioral_patterns.x").name == "behavioral_patterns.x"


def test_structured_logger_binds_context():
    logger = get_structured_logger("behavioral_patterns.x", component="test")
    assert logger is not None
