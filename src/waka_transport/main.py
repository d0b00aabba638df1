from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from types import ModuleType
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from .bookings.controller import register as register_bookings
from .calendars.controller import register as register_calendars
from .container import Container, build_container
from .core.exceptions import DomainError
from .database.bootstrap import apply_schema, list_tables
from .database.connection import DBConfig
from .registers.controller import register as register_registers
from .reminders.scheduler import ReminderScheduler
from .rosters.controller import register as register_rosters
from .sessions.interface import ServerSessionInterface
from .settings import get_settings_module
from .staffs.controller import register as register_staffs
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _load_settings(settings_module: Optional[str]) -> ModuleType:
    return importlib.import_module(settings_module or get_settings_module())


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        if e.status_code >= 500:
            logger.error("%s: %s", type(e).__name__, e)
        return jsonify({"error": str(e)}), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        if e.code == 404:
            return jsonify({"error": "Endpoint not found"}), 404
        if e.code and e.code >= 500:
            return jsonify({"error": "An unknown error occurred"}), e.code
        return jsonify({"error": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("Unhandled error")
        return jsonify({"error": "An unknown error occurred"}), 500


def create_app(settings_module: Optional[str] = None, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)

    settings = _load_settings(settings_module)
    app = Flask(__name__)
    app.secret_key = settings.SECRET_KEY
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["SESSION_COOKIE_NAME"] = settings.SESSION_COOKIE_NAME
    app.config["REMINDER_TIME"] = settings.REMINDER_TIME
    app.config["REMINDERS_ENABLED"] = bool(settings.REMINDERS_ENABLED)

    db_config = settings.DB_CONFIG
    logger.info("settings=%s db=%s", settings.__name__, DBConfig.from_dict(db_config).describe())

    if container is None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            logger.info("Schema ready (tables=%s)", len(list_tables(db_config)))
        container = build_container(settings)

    app.session_interface = ServerSessionInterface(
        container.session_store,
        lifetime=timedelta(minutes=int(settings.SESSION_LIFETIME_MINUTES)),
    )
    app.extensions["waka_transport"] = container

    register_users(app, container)
    register_staffs(app, container)
    register_bookings(app, container)
    register_calendars(app, container)
    register_rosters(app, container)
    register_registers(app, container)
    _register_error_handlers(app)

    return app


def create_scheduler(app: Flask) -> ReminderScheduler:
    container: Container = app.extensions["waka_transport"]
    return ReminderScheduler(container.reminder_job, at=app.config["REMINDER_TIME"])


def serve(host: str = "0.0.0.0", port: int = 5000) -> None:
    """Run the API and, when enabled, the daily reminder scheduler in the same process."""
    app = create_app()
    scheduler = None
    if app.config["REMINDERS_ENABLED"]:
        scheduler = create_scheduler(app)
        scheduler.start()
    try:
        # no reloader: exactly one scheduler per process
        app.run(host=host, port=port, debug=app.config["DEBUG"], use_reloader=False)
    finally:
        if scheduler is not None:
            scheduler.stop()
