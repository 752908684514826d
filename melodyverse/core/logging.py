"""
Logging configuration.

Modules log through ``logging.getLogger(__name__)``; this module only wires
handlers and levels once, at application start-up.
"""

import logging.config

from melodyverse.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Send log records to the console; ``melodyverse`` loggers use ``level``."""
    level = (level or settings.log_level).upper()

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {"format": LOG_FORMAT},
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                },
            },
            "root": {"handlers": ["console"], "level": "WARNING"},
            "loggers": {
                "melodyverse": {"level": level},
                "uvicorn.error": {"level": level},
            },
        }
    )
