"""Habit model held in the in-memory store and written to snapshots."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from habittracker.core.utils.dates import utc_timestamp

DEFAULT_CATEGORY = "General"


@dataclass
class Habit:
    id: str
    name: str
    description: str = ""
    category: str = DEFAULT_CATEGORY
    created_at: str = field(default_factory=utc_timestamp)
    completions: List[str] = field(default_factory=list)
    streak: int = 0

    def has_completion(self, day: str) -> bool:
        return day in self.completions

    def add_completion(self, day: str) -> bool:
        """Record ``day``; returns False when it was already recorded."""
        if day in self.completions:
            return False
        # Swap in a new list; snapshot readers never see a half-sorted one.
        self.completions = sorted([*self.completions, day])
        return True

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "createdAt": self.created_at,
            "completions": list(self.completions),
            "streak": self.streak,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Habit":
        return cls(
            id=str(data["id"]),
            name=data.get("name") or "",
            description=data.get("description") or "",
            category=data.get("category") or DEFAULT_CATEGORY,
            created_at=data.get("createdAt") or utc_timestamp(),
            completions=sorted(set(data.get("completions") or [])),
            streak=int(data.get("streak") or 0),
        )
