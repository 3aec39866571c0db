"""Shared extensions for the habit tracker application."""

from flask import current_app
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_sqlalchemy import SQLAlchemy


def _default_limit() -> str:
    return current_app.config.get("RATELIMIT_DEFAULT", "200 per hour")


db = SQLAlchemy(session_options={"expire_on_commit": False})
cors = CORS()
# Resolved per request so each app's RATELIMIT_DEFAULT applies.
limiter = Limiter(key_func=get_remote_address, enabled=True, default_limits=[_default_limit])


def init_extensions(app) -> None:
    """Initialize all extensions with the Flask app."""
    db.init_app(app)
    cors.init_app(app, resources={r"/api/*": {"origins": app.config.get("CORS_ORIGINS", "*")}})
    limiter.enabled = app.config.get("RATELIMIT_ENABLED", True)
    limiter.storage_uri = app.config.get("RATELIMIT_STORAGE_URI", "memory://")
    limiter.init_app(app)
