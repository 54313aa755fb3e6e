"""
Tests for logging setup.
"""

import logging
import logging.handlers

import pytest

from tibber_refiner.logging_config import LOG_FILE_NAME, get_logger, resolve_level, setup_logging


@pytest.mark.parametrize("name,level", [
    ("trace", logging.DEBUG),
    ("debug", logging.DEBUG),
    ("INFO", logging.INFO),
    ("warn", logging.WARNING),
    ("error", logging.ERROR),
    ("nonsense", logging.INFO),
])
def test_resolve_level(name, level):
    assert resolve_level(name) == level


def test_file_handler_writes_log(tmp_path, reset_logging):
    setup_logging("debug", "json", str(tmp_path / "log"))

    get_logger("tests").info("Refined values written", count=24)
    for handler in logging.getLogger().handlers:
        handler.flush()

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    file_handlers = [h for h in root.handlers if isinstance(h, logging.handlers.TimedRotatingFileHandler)]
    assert len(file_handlers) == 1

    content = (tmp_path / "log" / LOG_FILE_NAME).read_text()
    assert "Refined values written" in content
    assert '"count": 24' in content


def test_unwritable_log_dir_falls_back_to_stdout(tmp_path, reset_logging):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("")

    setup_logging("info", "text", str(blocker))

    handlers = logging.getLogger().handlers
    assert len(handlers) == 1
    assert not isinstance(handlers[0], logging.handlers.TimedRotatingFileHandler)


def test_stdout_only_without_log_dir(reset_logging):
    setup_logging("warn")

    root = logging.getLogger()
    assert root.level == logging.WARNING
    assert len(root.handlers) == 1
