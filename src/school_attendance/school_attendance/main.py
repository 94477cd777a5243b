from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .core.constants import BARCODE_PREFIX, SCAN_CHECK_IN_TIME, SCAN_CHECK_OUT_TIME
from .database.bootstrap import apply_schema, list_tables
from .day_calendar.controller import register as register_day_calendar

logger = logging.getLogger(__name__)


def create_app(container: Container | None = None) -> Flask:
    """Build the Flask app; pass ``container`` to skip MySQL wiring (tests)."""
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

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

        if getattr(settings, "AUTO_INIT_DB", False):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

        container = build_container(
            db_config=db_config,
            barcode_prefix=getattr(settings, "BARCODE_PREFIX", BARCODE_PREFIX),
            scan_check_in_time=getattr(settings, "SCAN_CHECK_IN_TIME", SCAN_CHECK_IN_TIME),
            scan_check_out_time=getattr(settings, "SCAN_CHECK_OUT_TIME", SCAN_CHECK_OUT_TIME),
        )

    register_attendance(app, container)
    register_day_calendar(app, container)

    return app
