"""Habit services: streak engine and analytics aggregation."""

from __future__ import annotations

from habittracker.domains.habits.services.analytics import (
    category_stats,
    completion_rate,
    generate_analytics,
    top_habits,
    weekly_progress,
)
from habittracker.domains.habits.services.streaks import (
    calculate_streak,
    get_current_streak,
    update_streaks,
)

__all__ = [
    "calculate_streak",
    "category_stats",
    "completion_rate",
    "generate_analytics",
    "get_current_streak",
    "top_habits",
    "update_streaks",
    "weekly_progress",
]
