"""Domain error taxonomy shared by the store, backends and controllers."""

from __future__ import annotations


class HabitTrackerError(Exception):
    code = "unexpected_error"
    status = 500

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.code)
        self.message = message or self.code

    def to_dict(self) -> dict:
        return {"ok": False, "error": self.code, "message": self.message}


class NotFoundError(HabitTrackerError):
    """Unknown user or habit ID."""

    code = "not_found"
    status = 404


class ValidationError(HabitTrackerError):
    """Input rejected by a store operation (e.g. blank habit name)."""

    code = "validation_error"
    status = 400


class PersistenceError(HabitTrackerError):
    """Snapshot could not be written to or read from durable storage."""

    code = "persistence_error"
    status = 500


__all__ = [
    "HabitTrackerError",
    "NotFoundError",
    "PersistenceError",
    "ValidationError",
]
