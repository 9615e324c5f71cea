from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .checkins.controller import register as register_checkins
from .common.responses import register_error_handlers
from .container import Container, EventSettings, build_container
from .dashboard.controller import register as register_dashboard
from .database.bootstrap import apply_schema, apply_sql_file, list_tables
from .database.connection import DBConfig, DatabaseConnection
from .export.controller import register as register_export
from .importing.controller import register as register_importing
from .registrants.controller import register as register_registrants

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _prepare_database(settings, conn: DatabaseConnection, database: str) -> None:
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(conn, database=database, schema_path=DATABASE_DIR / "schema.sql")
        logger.info("Schema ready (tables=%d)", len(list_tables(conn)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_sql_file(conn, sql_path=DATABASE_DIR / "seed.sql")
        logger.info("Demo registrants ready")


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__, template_folder="../../../templates", static_folder="../../../static")

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    configure_logging(app.config["DEBUG"])

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        target = DBConfig.from_dict(db_config)
        logger.info("settings=%s db=%s", settings_module, target.describe())
        container = build_container(db_config=db_config, event=EventSettings.from_settings(settings))
        _prepare_database(settings, container.conn, target.database)

    app.config["EVENT_NAME"] = container.event.name
    app.config["EVENT_DAYS"] = container.event.days

    @app.context_processor
    def inject_event():
        return {
            "event_name": container.event.name,
            "event_days": list(range(1, container.event.days + 1)),
            "current_day": container.checkin_service.current_event_day(),
        }

    register_error_handlers(app)
    register_dashboard(app, container)
    register_registrants(app, container)
    register_checkins(app, container)
    register_importing(app, container)
    register_export(app, container)

    return app


def run() -> None:
    app = create_app()
    app.run(debug=app.config["DEBUG"])


if __name__ == "__main__":
    run()
