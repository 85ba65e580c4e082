"""
Logging Framework Tests
"""

import logging
import pytest
from logging.handlers import RotatingFileHandler

from costseg.logging_utils import (
    LOG_FILE_NAME,
    log_error,
    parse_level,
    setup_logging,
    timed,
)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestParseLevel:

    @pytest.mark.parametrize("raw,expected", [
        ("debug", logging.DEBUG),
        ("WARNING", logging.WARNING),
        (" error ", logging.ERROR),
        (logging.CRITICAL, logging.CRITICAL),
        ("verbose", logging.INFO),
    ])
    def test_levels(self, raw, expected):
        assert parse_level(raw) == expected


class TestSetupLogging:

    def test_console_only(self, restore_root_logger, tmp_path):
        setup_logging(level="DEBUG", log_dir=str(tmp_path / "logs"))

        assert restore_root_logger.level == logging.DEBUG
        assert len(restore_root_logger.handlers) == 1
        assert not (tmp_path / "logs").exists()

    def test_rotating_file(self, restore_root_logger, tmp_path):
        log_dir = tmp_path / "logs"
        setup_logging(level="INFO", log_to_file=True, log_dir=str(log_dir))
        logging.getLogger("costseg.test").info("written to file")

        assert any(isinstance(h, RotatingFileHandler) for h in restore_root_logger.handlers)
        assert (log_dir / LOG_FILE_NAME).exists()


class TestHelpers:

    def test_log_error_hides_details(self, caplog):
        with caplog.at_level(logging.ERROR):
            message = log_error(ValueError("secret internals"), "computing the schedule")

        assert message == "An error occurred while computing the schedule. Please try again."
        assert "secret internals" not in message
        assert "secret internals" in caplog.text

    def test_timed_returns_result(self, caplog):
        @timed
        def add(a, b):
            return a + b

        with caplog.at_level(logging.DEBUG):
            assert add(2, 3) == 5
        assert "add completed in" in caplog.text
