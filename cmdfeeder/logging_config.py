"""
Logging configuration for the API server and the feeder modules.

Access lines for endpoints that clients poll (health checks and the
changed flag) are dropped so per-command DEBUG output stays readable.
"""

import logging
import logging.config
from typing import Any, Dict, Iterable

POLLED_PATHS = ("/health", "/changed")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class PollingAccessFilter(logging.Filter):
    """Drop uvicorn access records for GET requests to polled endpoints."""

    def __init__(self, paths: Iterable[str] = POLLED_PATHS):
        super().__init__()
        self.paths = tuple(paths)

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name != "uvicorn.access":
            return True

        message = record.getMessage()
        if "GET" not in message:
            return True
        # Path is followed by a space and the HTTP version in access lines
        return not any(f"{path} " in message for path in self.paths)


def _logger(handler: str, level: str = "INFO") -> Dict[str, Any]:
    return {"handlers": [handler], "level": level, "propagate": False}


def get_logging_config(level: str = "INFO") -> Dict[str, Any]:
    """
    Build a dictConfig mapping.

    Args:
        level: Level for the cmdfeeder package loggers; released commands
            are logged at DEBUG

    Returns:
        Mapping accepted by logging.config.dictConfig and uvicorn's log_config
    """
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {"polling_access_filter": {"()": PollingAccessFilter}},
        "formatters": {
            "default": {"format": LOG_FORMAT},
            "access": {"format": "%(message)s"},
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout",
            },
            "access": {
                "class": "logging.StreamHandler",
                "formatter": "access",
                "stream": "ext://sys.stdout",
                "filters": ["polling_access_filter"],
            },
        },
        "loggers": {
            "uvicorn": _logger("default"),
            "uvicorn.error": _logger("default"),
            "uvicorn.access": _logger("access"),
            "cmdfeeder": _logger("default", level),
        },
        "root": {"level": "INFO", "handlers": ["default"]},
    }


def configure_logging(level: str = "INFO") -> None:
    logging.config.dictConfig(get_logging_config(level))
