"""Ensure logging setup does not crash and sets level."""

import logging

from app.core.logging import setup_logging


def test_setup_logging():
    setup_logging()
    logger = logging.getLogger()
    # Should configure without raising; ensure at least one handler attached
    assert logger.handlers


def test_setup_logging_applies_level_when_already_configured():
    root = logging.getLogger()
    previous = root.level
    try:
        setup_logging("info")
        setup_logging("debug")
        assert root.level == logging.DEBUG

        setup_logging("warning")
        assert root.level == logging.WARNING
    finally:
        root.setLevel(previous)
