"""Logging setup for the attendance service (console, plain or JSON lines)."""
from __future__ import annotations

import logging
import logging.config
from typing import Any, Dict

from pythonjsonlogger.json import JsonFormatter

PACKAGE_LOGGER = "src.staff_attendance.staff_attendance"


class AttendanceJsonFormatter(JsonFormatter):
    """JSON formatter that always carries level and logger name."""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]):
        super().add_fields(log_record, record, message_dict)
        log_record["level"] = record.levelname
        log_record["logger"] = record.name


def build_logging_config(level: str = "INFO", json_output: bool = False) -> Dict[str, Any]:
    level = (level or "INFO").upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {"format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s"},
            "json": {
                "()": AttendanceJsonFormatter,
                "fmt": "%(asctime)s %(levelname)s %(name)s %(message)s",
            },
        },
        "handlers": {
            "console": {
                "level": level,
                "class": "logging.StreamHandler",
                "formatter": "json" if json_output else "standard",
            },
        },
        "loggers": {
            PACKAGE_LOGGER: {"handlers": ["console"], "level": level, "propagate": False},
            "werkzeug": {"handlers": ["console"], "level": "WARNING", "propagate": False},
        },
    }


def setup_logging(level: str = "INFO", json_output: bool = False) -> None:
    logging.config.dictConfig(build_logging_config(level, json_output))
    logging.getLogger(__name__).debug("Logging configured (level=%s, json=%s)", level, json_output)
