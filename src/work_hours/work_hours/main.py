from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.web import register_error_handlers
from .container import Container, build_container
from .core.constants import DEFAULT_SEED_ADMIN_USERNAME, DEFAULT_SESSION_DAYS
from .database.bootstrap import apply_schema, ensure_seed_admin, list_tables
from .logging_config import setup_logging
from .records.controller import register as register_records
from .reports.controller import register as register_reports
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)

    seed_admin_username = getattr(settings, "SEED_ADMIN_USERNAME", DEFAULT_SEED_ADMIN_USERNAME)

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        container = build_container(db_config=db_config, seed_admin_username=seed_admin_username)

        if getattr(settings, "AUTO_INIT_DB", False):
            apply_schema(container.conn, schema_path=SCHEMA_PATH)
            logger.info("schema ready (tables=%d)", len(list_tables(container.conn)))
        if getattr(settings, "AUTO_SEED_DB", False):
            ensure_seed_admin(
                container.conn,
                username=seed_admin_username,
                password=getattr(settings, "SEED_ADMIN_PASSWORD"),
            )

    app.extensions["work_hours"] = container

    register_error_handlers(app)
    register_users(app, container)
    register_records(app, container)
    register_reports(app, container)

    return app
