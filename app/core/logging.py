"""Logging configuration."""

import logging
import os


def setup_logging(level: str | None = None) -> None:
    """Configure application logging."""
    level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    # basicConfig is a no-op once handlers exist (e.g. under uvicorn)
    logging.getLogger().setLevel(level)
