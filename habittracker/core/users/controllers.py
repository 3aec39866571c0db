"""User controllers: anonymous account creation and ID login."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from habittracker.core.store import get_store
from habittracker.core.users.schemas import LoginRequest, serialize_user
from habittracker.extensions import limiter

user_api_bp = Blueprint("user_api", __name__)


def _create_user_limit() -> str:
    return current_app.config.get("RATELIMIT_CREATE_USER", "20/hour")


@user_api_bp.post("/create")
@limiter.limit(_create_user_limit)
def api_create_user():
    user = get_store().create_user()
    return jsonify({"ok": True, "userId": user.id, "message": "User created"}), 201


@user_api_bp.post("/login")
def api_login():
    payload = request.get_json(silent=True) or {}
    try:
        data = LoginRequest.model_validate(payload)
    except ValidationError as exc:
        return jsonify({"ok": False, "error": "validation_error", "details": exc.errors(include_url=False)}), 400
    # NotFoundError propagates to the JSON error handler.
    user = get_store().user_snapshot(data.user_id)
    return jsonify({"ok": True, "user": serialize_user(user)})


@user_api_bp.get("/<user_id>")
def api_get_user(user_id: str):
    user = get_store().user_snapshot(user_id)
    return jsonify({"ok": True, "user": serialize_user(user)})
