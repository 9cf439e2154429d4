"""Tests for logging setup."""

import logging

from hyperlife.logging_config import setup_logging


def test_setup_logging_replaces_handlers():
    """Repeated setup keeps a single console handler."""
    setup_logging(logging.INFO)
    setup_logging(logging.DEBUG)

    logger = logging.getLogger("hyperlife")
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1

    logger.handlers.clear()


def test_setup_logging_writes_file(tmp_path):
    """Messages from package modules reach the log file."""
    log_file = tmp_path / "hyperlife.log"
    setup_logging(logging.DEBUG, str(log_file))

    logging.getLogger("hyperlife.core.grid").debug("grid message")

    logger = logging.getLogger("hyperlife")
    for handler in logger.handlers:
        handler.flush()
        handler.close()
    logger.handlers.clear()

    assert "grid message" in log_file.read_text(encoding="utf-8")
