from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.decorators import AUTH_EXTENSION
from .container import Container, build_container
from .core.constants import DEFAULT_ADMIN_NUM, DEFAULT_ROSTER_YEAR
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_admin_exists, list_tables
from .escala.controller import register as register_escala
from .hours.controller import register as register_hours
from .militares.controller import register as register_militares
from .secoes.controller import register as register_secoes

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(container: Optional[Container] = None, *, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    _configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.permanent_session_lifetime = timedelta(days=7)
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["ROSTER_YEAR"] = int(getattr(settings, "ROSTER_YEAR", DEFAULT_ROSTER_YEAR))
    logger.info("roster-system settings=%s year=%s", settings_module, app.config["ROSTER_YEAR"])

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
        if bool(getattr(settings, "AUTO_INIT_DB", False)) or bool(getattr(settings, "AUTO_SEED_DB", False)):
            ensure_admin_exists(db_config, admin_num=getattr(settings, "ADMIN_NUM", DEFAULT_ADMIN_NUM))

        container = build_container(db_config=db_config, year=app.config["ROSTER_YEAR"])

    app.extensions[AUTH_EXTENSION] = container.auth_service

    register_militares(app, container)
    register_secoes(app, container)
    register_escala(app, container)
    register_hours(app, container)

    return app
