"""Habits JSON API controllers (thin, schema-validated)."""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from pydantic import ValidationError

from habittracker.core.store import get_store
from habittracker.domains.habits.schemas.habit_schemas import (
    AnalyticsResponse,
    HabitComplete,
    HabitCreate,
)

habit_api_bp = Blueprint("habit_api", __name__)
analytics_api_bp = Blueprint("analytics_api", __name__)


def _validation_failed(exc: ValidationError):
    return jsonify({"ok": False, "error": "validation_error", "details": exc.errors(include_url=False)}), 400


@habit_api_bp.post("")
def create_habit():
    payload = request.get_json(silent=True) or {}
    try:
        data = HabitCreate.model_validate(payload)
    except ValidationError as exc:
        return _validation_failed(exc)
    habit = get_store().add_habit(
        data.user_id,
        data.name,
        description=data.description,
        category=data.category,
    )
    return jsonify({"ok": True, "habitId": habit.id}), 201


@habit_api_bp.post("/complete")
def complete_habit():
    payload = request.get_json(silent=True) or {}
    try:
        data = HabitComplete.model_validate(payload)
    except ValidationError as exc:
        return _validation_failed(exc)
    get_store().complete_habit(data.user_id, data.habit_id, data.completed_on)
    return jsonify({"ok": True})


@analytics_api_bp.get("/<user_id>")
def user_analytics(user_id: str):
    report = get_store().analytics(user_id)
    return jsonify({"ok": True, "analytics": AnalyticsResponse.model_validate(report).model_dump()})
