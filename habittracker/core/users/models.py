"""User aggregate: owns its habits and the derived stats."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from habittracker.core.utils.dates import utc_timestamp
from habittracker.domains.habits.models.habit_models import Habit


@dataclass
class UserStats:
    total_habits: int = 0
    total_completions: int = 0
    current_streak: int = 0
    longest_streak: int = 0

    def to_dict(self) -> dict:
        return {
            "totalHabits": self.total_habits,
            "totalCompletions": self.total_completions,
            "currentStreak": self.current_streak,
            "longestStreak": self.longest_streak,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "UserStats":
        return cls(
            total_habits=int(data.get("totalHabits") or 0),
            total_completions=int(data.get("totalCompletions") or 0),
            current_streak=int(data.get("currentStreak") or 0),
            longest_streak=int(data.get("longestStreak") or 0),
        )


@dataclass
class User:
    id: str
    created_at: str = field(default_factory=utc_timestamp)
    # Insertion ordered; analytics tie-breaks rely on it.
    habits: Dict[str, Habit] = field(default_factory=dict)
    stats: UserStats = field(default_factory=UserStats)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "createdAt": self.created_at,
            "habits": {habit_id: habit.to_dict() for habit_id, habit in self.habits.items()},
            "stats": self.stats.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        habits = {
            str(habit_id): Habit.from_dict({"id": habit_id, **(raw or {})})
            for habit_id, raw in (data.get("habits") or {}).items()
        }
        return cls(
            id=str(data["id"]),
            created_at=data.get("createdAt") or utc_timestamp(),
            habits=habits,
            stats=UserStats.from_dict(data.get("stats") or {}),
        )
