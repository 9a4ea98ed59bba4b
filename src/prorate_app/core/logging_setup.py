"""Process-wide logging configuration."""

from __future__ import annotations

import logging

from prorate_app.core.config import AppConfig


def configure_logging(config: AppConfig) -> None:
    """Apply level and format from config to the root logger."""
    level = logging.getLevelName(config.logging.level)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format=config.logging.format)
    logging.getLogger("prorate_app").debug("Logging configured at %s", config.logging.level)
