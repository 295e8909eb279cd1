from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.http import error_response
from .container import Container, build_container
from .core.constants import DEFAULT_MATCH_PREFIX_OCTETS
from .core.exceptions import DomainError
from .core.log import configure_logging
from .database.bootstrap import apply_schema, list_tables
from .sessions.controller import register as register_sessions

logger = logging.getLogger("geoattend.app")


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["MATCH_PREFIX_OCTETS"] = int(getattr(settings, "MATCH_PREFIX_OCTETS", DEFAULT_MATCH_PREFIX_OCTETS))

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"), getattr(settings, "LOG_FILE", None))
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"), db_config.get("host"), db_config.get("port", 3306), db_config.get("database"),
    )

    if container is None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

        container = build_container(db_config=db_config, match_prefix_octets=app.config["MATCH_PREFIX_OCTETS"])

    app.register_error_handler(DomainError, error_response)

    register_sessions(app, container)
    register_attendance(app, container)

    return app
