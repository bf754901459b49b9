from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import Container, build_container
from .core.constants import DEFAULT_ADMIN_EMAIL
from .database.bootstrap import apply_schema, ensure_admin_account, ensure_demo_employees, list_tables
from .employees.controller import register as register_employees
from .extras.controller import register as register_extras
from .reports.controller import register as register_reports
from .schedules.controller import register as register_schedules
from .users.controller import register as register_users
from .vacations.controller import register as register_vacations

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


def _configure_logging(level_name: str) -> None:
    level = getattr(logging, str(level_name).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger().setLevel(level)


def create_app(container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    """Build the Flask app.

    A prebuilt container (tests pass one over in-memory repositories) skips
    the database bootstrap entirely.
    """

    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    _configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        admin_email = getattr(settings, "ADMIN_EMAIL", DEFAULT_ADMIN_EMAIL)
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if getattr(settings, "AUTO_INIT_DB", False):
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if getattr(settings, "AUTO_SEED_DB", False):
            ensure_admin_account(db_config, email=admin_email)
            ensure_demo_employees(db_config)
            logger.info("demo seed ready")

        container = build_container(
            db_config=db_config,
            vacation_policy=getattr(settings, "VACATION_POLICY", "monthly"),
            admin_email=admin_email,
        )

    register_users(app, container)
    register_employees(app, container)
    register_schedules(app, container)
    register_vacations(app, container)
    register_extras(app, container)
    register_reports(app, container)

    return app
