"""Habit tracker application factory and bootstrap."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from flask import Flask

from habittracker.config import config_by_name
from habittracker.core.errors import HabitTrackerError
from habittracker.core.store import init_store
from habittracker.extensions import init_extensions


def create_app(config_name: Optional[str] = None, **overrides) -> Flask:
    """Create and configure the habit tracker Flask application."""
    env_name = (config_name or os.environ.get("APP_ENV") or "development").lower()
    project_root = Path(__file__).resolve().parent.parent
    instance_root = project_root / "instance"

    app = Flask(
        __name__,
        instance_path=str(instance_root),
        instance_relative_config=True,
    )
    config_cls = config_by_name.get(env_name, config_by_name["development"])
    app.config.from_object(config_cls)
    app.config.update(overrides)
    # Keep habit and category order as stored.
    app.json.sort_keys = False

    _configure_logging(app)

    # Resolve relative data paths against the project root.
    data_file = Path(app.config["HABITS_DATA_FILE"])
    if not data_file.is_absolute():
        data_file = project_root / data_file
    app.config["HABITS_DATA_FILE"] = str(data_file)

    db_uri = app.config.get("SQLALCHEMY_DATABASE_URI") or ""
    if db_uri.startswith("sqlite:///"):
        db_path = Path(db_uri.replace("sqlite:///", "", 1))
        if not db_path.is_absolute():
            db_path = project_root / db_path
        db_path.parent.mkdir(parents=True, exist_ok=True)
        app.config["SQLALCHEMY_DATABASE_URI"] = f"sqlite:///{db_path}"

    init_extensions(app)
    init_store(app)
    _register_blueprints(app)
    _register_error_handlers(app)

    @app.get("/health")
    def health():
        return {"ok": True}, 200

    app.logger.info(
        "Habit tracker ready (%s backend, %d users)",
        app.config["HABITS_STORE_BACKEND"],
        app.extensions["habit_store"].user_count(),
    )
    return app


def _configure_logging(app: Flask) -> None:
    level = app.config.get("LOG_LEVEL", "INFO")
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logging.getLogger("habittracker").setLevel(level)
    app.logger.setLevel(level)


def _register_blueprints(app: Flask) -> None:
    """Lazy import and register all controllers."""
    from habittracker.core.users.controllers import user_api_bp
    from habittracker.domains.habits.controllers.habit_api import (
        analytics_api_bp,
        habit_api_bp,
    )

    app.register_blueprint(user_api_bp, url_prefix="/api/user")
    app.register_blueprint(habit_api_bp, url_prefix="/api/habits")
    app.register_blueprint(analytics_api_bp, url_prefix="/api/analytics")


def _register_error_handlers(app: Flask) -> None:
    """JSON error responses; failures never escape the request as HTML."""
    from werkzeug.exceptions import HTTPException

    @app.errorhandler(HabitTrackerError)
    def _domain_error(exc: HabitTrackerError):
        if exc.status >= 500:
            app.logger.error("Request failed: %s", exc.message)
        return exc.to_dict(), exc.status

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        return {"ok": False, "error": exc.name.lower().replace(" ", "_"), "message": exc.description}, exc.code

    @app.errorhandler(Exception)
    def _generic_error(exc: Exception):
        app.logger.exception("Unhandled error: %s", exc)
        # In debug/testing, surface the exception message to speed up diagnosis
        if app.debug or app.testing:
            return {"ok": False, "error": "unexpected_error", "message": str(exc)}, 500
        return {"ok": False, "error": "unexpected_error", "message": "Unexpected error"}, 500
