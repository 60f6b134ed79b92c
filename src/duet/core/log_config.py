"""Logging configuration for the API process."""

from __future__ import annotations

import logging.config

from duet.core.settings import settings


def build_logging_config(level: str | None = None) -> dict[str, object]:
    """Return a ``dictConfig`` mapping that logs to the console."""
    resolved = (level or settings.log_level).upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "console": {
                "format": "[{asctime}] {levelname} {name} - {message}",
                "style": "{",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "console",
            },
        },
        "root": {
            "handlers": ["console"],
            "level": "WARNING",
        },
        "loggers": {
            "duet": {"level": resolved},
            "sqlalchemy.engine": {
                "level": "INFO" if settings.sql_debug else "WARNING",
            },
        },
    }


def configure_logging(level: str | None = None) -> None:
    """Apply the console logging configuration."""
    logging.config.dictConfig(build_logging_config(level))
