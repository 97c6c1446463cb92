from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.logging_config import setup_logging
from .container import Container, build_container

logger = logging.getLogger(__name__)

_ENGINE_SETTINGS = (
    "TIMEZONE",
    "LEAVE_PRECEDENCE",
    "WEEK_OFF_RULE",
    "MINIMAL_ACTIVITY_STATUS",
    "REPORT_FETCH_WORKERS",
)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    setup_logging(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        json_output=bool(getattr(settings, "LOG_JSON", False)),
    )

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        engine_settings = {k: getattr(settings, k) for k in _ENGINE_SETTINGS if hasattr(settings, k)}
        container = build_container(db_config=db_config, settings=engine_settings)
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"), db_config.get("host"), db_config.get("port", 3306), db_config.get("database"),
        )

    register_attendance(app, container)
    return app
