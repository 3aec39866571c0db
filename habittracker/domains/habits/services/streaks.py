"""Streak computation over completion dates.

All functions take ``today`` explicitly so results are deterministic; callers
supply the clock.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Iterable

from habittracker.core.users.models import User
from habittracker.core.utils.dates import DateLike, to_date, to_iso


def calculate_streak(completions: Iterable[DateLike], today: DateLike) -> int:
    """Count consecutive completions walking back from ``today``.

    The first completion may be today or yesterday; each following one must
    sit exactly one day before the previous, otherwise the walk stops.
    """
    dates = sorted((to_date(d) for d in completions), reverse=True)
    if not dates:
        return 0

    streak = 0
    cursor = to_date(today)
    for completed_on in dates:
        if streak == 0:
            # Only the first step may skip a day (today not done yet).
            counts = (cursor - completed_on).days <= 1
        else:
            counts = completed_on == cursor
        if not counts:
            break
        streak += 1
        cursor = completed_on - timedelta(days=1)
    return streak


def get_current_streak(user: User, today: DateLike) -> int:
    """User-level streak signal.

    Zero unless at least one habit was completed today; otherwise the larger
    of the number of habits completed today and the number completed
    yesterday. This is a count of habits, not of days.
    """
    today_str = to_iso(today)
    yesterday_str = (to_date(today) - timedelta(days=1)).isoformat()

    today_count = 0
    yesterday_count = 0
    for habit in user.habits.values():
        if habit.has_completion(today_str):
            today_count += 1
        if habit.has_completion(yesterday_str):
            yesterday_count += 1

    if today_count == 0:
        return 0
    return max(today_count, yesterday_count)


def update_streaks(user: User, today: DateLike) -> None:
    """Recompute every habit streak and the user's streak stats in place."""
    longest = 0
    for habit in user.habits.values():
        habit.streak = calculate_streak(habit.completions, today)
        longest = max(longest, habit.streak)

    user.stats.longest_streak = longest
    user.stats.current_streak = get_current_streak(user, today)
