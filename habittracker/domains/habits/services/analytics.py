"""Read-only analytics report for a user's habits."""

from __future__ import annotations

import math
from datetime import timedelta
from typing import Dict, Iterable, List

from habittracker.core.users.models import User
from habittracker.core.utils.dates import DateLike, to_date
from habittracker.domains.habits.models.habit_models import Habit

# Each habit is measured against a fixed 30-day window.
COMPLETION_RATE_WINDOW_DAYS = 30
TOP_HABITS_LIMIT = 3
WEEKLY_PROGRESS_DAYS = 7


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def completion_rate(total_completions: int, total_habits: int) -> int:
    if total_habits <= 0:
        return 0
    ratio = total_completions / (total_habits * COMPLETION_RATE_WINDOW_DAYS)
    return _round_half_up(ratio * 100)


def category_stats(habits: Iterable[Habit]) -> Dict[str, Dict[str, int]]:
    stats: Dict[str, Dict[str, int]] = {}
    for habit in habits:
        bucket = stats.setdefault(habit.category, {"count": 0, "completions": 0})
        bucket["count"] += 1
        bucket["completions"] += len(habit.completions)
    return stats


def top_habits(habits: Iterable[Habit], limit: int = TOP_HABITS_LIMIT) -> List[dict]:
    # sorted() is stable, so equal streaks keep insertion order.
    ranked = sorted(habits, key=lambda h: h.streak, reverse=True)
    return [
        {"name": h.name, "streak": h.streak, "completions": len(h.completions)}
        for h in ranked[:limit]
    ]


def weekly_progress(habits: Iterable[Habit], today: DateLike) -> List[dict]:
    """Per-day completion counts for the 7 days ending today, oldest first."""
    habits = list(habits)
    end = to_date(today)
    days = []
    for offset in range(WEEKLY_PROGRESS_DAYS - 1, -1, -1):
        day = end - timedelta(days=offset)
        day_str = day.isoformat()
        days.append(
            {
                "date": day_str,
                "completions": sum(1 for h in habits if h.has_completion(day_str)),
                "dayName": day.strftime("%a"),
            }
        )
    return days


def generate_analytics(user: User, today: DateLike) -> dict:
    """Build the analytics payload; never mutates ``user``."""
    habits = list(user.habits.values())
    total_habits = len(habits)
    total_completions = user.stats.total_completions

    return {
        "summary": {
            "totalHabits": total_habits,
            "totalCompletions": total_completions,
            "currentStreak": user.stats.current_streak,
            "longestStreak": user.stats.longest_streak,
            "completionRate": completion_rate(total_completions, total_habits),
        },
        "categoryStats": category_stats(habits),
        "topHabits": top_habits(habits),
        "weeklyProgress": weekly_progress(habits, today),
    }
