"""Habit store and its persistence backends."""

from __future__ import annotations

from flask import Flask, current_app

from habittracker.core.store.habit_store import HabitStore
from habittracker.core.store.persistence import (
    JsonFileBackend,
    SnapshotBackend,
    SqlSnapshotBackend,
)
from habittracker.extensions import db

STORE_EXTENSION_KEY = "habit_store"


def build_backend(app: Flask) -> SnapshotBackend:
    kind = app.config.get("HABITS_STORE_BACKEND", "json")
    if kind == "json":
        return JsonFileBackend(app.config["HABITS_DATA_FILE"])
    if kind == "sql":
        return SqlSnapshotBackend()
    raise ValueError(f"Unknown HABITS_STORE_BACKEND: {kind}")


def init_store(app: Flask) -> HabitStore:
    """Create the process-wide store, load the snapshot and attach it to ``app``."""
    backend = build_backend(app)
    store = HabitStore(
        backend,
        strict_persistence=app.config.get("STORE_STRICT_PERSISTENCE", False),
    )
    with app.app_context():
        if isinstance(backend, SqlSnapshotBackend):
            db.create_all()
        store.load()
    app.extensions[STORE_EXTENSION_KEY] = store
    return store


def get_store() -> HabitStore:
    return current_app.extensions[STORE_EXTENSION_KEY]


__all__ = [
    "HabitStore",
    "JsonFileBackend",
    "SnapshotBackend",
    "SqlSnapshotBackend",
    "build_backend",
    "get_store",
    "init_store",
]
