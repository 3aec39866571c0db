"""Snapshot persistence backends.

A backend stores the whole ``{user_id: user_dict}`` mapping. ``save`` is
called after every mutation with the full snapshot and raises
``PersistenceError`` when the write fails.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Dict, Protocol, Union

from sqlalchemy.exc import SQLAlchemyError

from habittracker.core.errors import PersistenceError
from habittracker.core.store.models import UserSnapshot
from habittracker.extensions import db

logger = logging.getLogger(__name__)

Snapshot = Dict[str, dict]


class SnapshotBackend(Protocol):
    def load(self) -> Snapshot:
        ...

    def save(self, snapshot: Snapshot) -> None:
        ...


class JsonFileBackend:
    """Whole-store JSON document, replaced atomically on each save."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def load(self) -> Snapshot:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError):
            logger.exception("Could not read snapshot %s; starting empty", self.path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Snapshot %s is not a mapping; starting empty", self.path)
            return {}
        return data

    def save(self, snapshot: Snapshot) -> None:
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(snapshot, f, ensure_ascii=False, indent=2)
            os.replace(tmp, self.path)
        except (OSError, TypeError, ValueError) as exc:
            raise PersistenceError(f"Could not write snapshot to {self.path}: {exc}") from exc


class SqlSnapshotBackend:
    """One ``store_user_snapshot`` row per user, written in a single transaction.

    Needs an active Flask application context.
    """

    def load(self) -> Snapshot:
        rows = UserSnapshot.query.order_by(UserSnapshot.position, UserSnapshot.id).all()
        return {row.id: row.payload for row in rows}

    def save(self, snapshot: Snapshot) -> None:
        try:
            existing = {row.id: row for row in UserSnapshot.query.all()}
            for position, (user_id, payload) in enumerate(snapshot.items()):
                row = existing.get(user_id)
                if row is None:
                    db.session.add(UserSnapshot(id=user_id, payload=payload, position=position))
                else:
                    row.payload = payload
                    row.position = position
            db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise PersistenceError(f"Could not write snapshot: {exc}") from exc
