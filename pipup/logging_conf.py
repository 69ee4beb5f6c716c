"""Structured logging helpers."""
from __future__ import annotations

import logging
from logging.config import dictConfig

# Chatty transport loggers, held back unless we are debugging.
_NOISY_LOGGERS = ("werkzeug", "engineio.server", "socketio.server")


def configure_logging(app) -> None:
    """Route application and transport logs to a single console handler."""
    level = str(app.config.get("LOG_LEVEL", "INFO")).upper()
    transport_level = level if level == "DEBUG" else "WARNING"
    dictConfig(
        {
            "version": 1,
            "formatters": {
                "structured": {
                    "format": "%(asctime)s %(levelname)s %(name)s :: %(message)s",
                }
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "structured",
                    "level": level,
                }
            },
            "loggers": {name: {"level": transport_level} for name in _NOISY_LOGGERS},
            "root": {
                "handlers": ["console"],
                "level": level,
            },
            "disable_existing_loggers": False,
        }
    )
    logging.getLogger(__name__).debug("Logging configured at %s", level)
