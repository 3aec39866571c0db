"""Snapshot table used by the SQL persistence backend."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column

from habittracker.extensions import db


class UserSnapshot(db.Model):
    __tablename__ = "store_user_snapshot"

    id: Mapped[str] = mapped_column(db.String(64), primary_key=True)
    payload: Mapped[dict] = mapped_column(db.JSON, nullable=False)
    position: Mapped[int] = mapped_column(nullable=False, default=0)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)
