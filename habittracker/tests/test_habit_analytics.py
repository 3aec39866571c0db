"""Tests for the analytics report."""

import copy
from datetime import date, timedelta

import pytest

pytestmark = pytest.mark.unit

from habittracker.core.users.models import User
from habittracker.domains.habits.models.habit_models import Habit
from habittracker.domains.habits.services import (
    completion_rate,
    generate_analytics,
    update_streaks,
    weekly_progress,
)

TODAY = date(2024, 5, 15)


def _day(offset: int) -> str:
    return (TODAY - timedelta(days=offset)).isoformat()


def _build_user(*habits: Habit) -> User:
    user = User(id="analytics-user")
    for habit in habits:
        user.habits[habit.id] = habit
    user.stats.total_habits = len(habits)
    user.stats.total_completions = sum(len(h.completions) for h in habits)
    update_streaks(user, TODAY)
    return user


class TestSummary:
    def test_empty_user(self):
        report = generate_analytics(User(id="nobody"), TODAY)
        assert report["summary"] == {
            "totalHabits": 0,
            "totalCompletions": 0,
            "currentStreak": 0,
            "longestStreak": 0,
            "completionRate": 0,
        }
        assert report["categoryStats"] == {}
        assert report["topHabits"] == []

    def test_single_completion_rate(self):
        user = _build_user(Habit(id="h1", name="Exercise", category="Health", completions=[_day(0)]))
        summary = generate_analytics(user, TODAY)["summary"]
        assert summary["completionRate"] == 3
        assert summary["currentStreak"] == 1
        assert summary["longestStreak"] == 1

    @pytest.mark.parametrize(
        "completions, habits, expected",
        [(0, 3, 0), (30, 1, 100), (15, 2, 25), (1, 2, 2), (3, 4, 3), (45, 1, 150)],
    )
    def test_completion_rate_normalisation(self, completions, habits, expected):
        """Rounds half up against a fixed 30-day window per habit."""
        assert completion_rate(completions, habits) == expected

    def test_totals_come_from_stats(self):
        user = _build_user(Habit(id="h1", name="Read", completions=[_day(0), _day(1)]))
        user.stats.total_completions = 7
        assert generate_analytics(user, TODAY)["summary"]["totalCompletions"] == 7


class TestCategoryStats:
    def test_one_habit_per_category(self):
        user = _build_user(
            Habit(id="h1", name="Exercise", category="Health", completions=[_day(0)]),
            Habit(id="h2", name="Inbox zero", category="Work", completions=[_day(0)]),
        )
        assert generate_analytics(user, TODAY)["categoryStats"] == {
            "Health": {"count": 1, "completions": 1},
            "Work": {"count": 1, "completions": 1},
        }

    def test_habits_share_category(self):
        user = _build_user(
            Habit(id="h1", name="Run", category="Health", completions=[_day(0), _day(3)]),
            Habit(id="h2", name="Stretch", category="Health", completions=[_day(1)]),
            Habit(id="h3", name="Journal"),
        )
        stats = generate_analytics(user, TODAY)["categoryStats"]
        assert stats["Health"] == {"count": 2, "completions": 3}
        assert stats["General"] == {"count": 1, "completions": 0}


class TestTopHabits:
    def test_two_day_streak_leads(self):
        user = _build_user(
            Habit(id="h1", name="Read", completions=[_day(0)]),
            Habit(id="h2", name="Run", completions=[_day(1), _day(0)]),
        )
        top = generate_analytics(user, TODAY)["topHabits"]
        assert top[0] == {"name": "Run", "streak": 2, "completions": 2}

    def test_limited_to_three_and_ties_keep_order(self):
        user = _build_user(
            Habit(id="a", name="A", completions=[_day(0)]),
            Habit(id="b", name="B", completions=[_day(0), _day(1)]),
            Habit(id="c", name="C", completions=[_day(0)]),
            Habit(id="d", name="D", completions=[_day(0)]),
        )
        top = generate_analytics(user, TODAY)["topHabits"]
        assert [h["name"] for h in top] == ["B", "A", "C"]


class TestWeeklyProgress:
    def test_seven_days_ending_today(self):
        days = weekly_progress([], TODAY)
        assert len(days) == 7
        assert days[-1]["date"] == TODAY.isoformat()
        assert days[0]["date"] == _day(6)
        assert [d["date"] for d in days] == sorted(d["date"] for d in days)

    def test_counts_habits_per_day(self):
        habits = [
            Habit(id="h1", name="Run", completions=[_day(0), _day(2)]),
            Habit(id="h2", name="Read", completions=[_day(0), _day(10)]),
        ]
        counts = {d["date"]: d["completions"] for d in weekly_progress(habits, TODAY)}
        assert counts[_day(0)] == 2
        assert counts[_day(2)] == 1
        assert counts[_day(1)] == 0
        assert sum(counts.values()) == 3

    def test_day_names_are_abbreviated_weekdays(self):
        for entry in weekly_progress([], TODAY):
            assert entry["dayName"] == date.fromisoformat(entry["date"]).strftime("%a")


def test_generate_analytics_does_not_mutate_user():
    user = _build_user(
        Habit(id="h1", name="Run", category="Health", completions=[_day(0), _day(1)]),
        Habit(id="h2", name="Read", completions=[_day(4)]),
    )
    before = copy.deepcopy(user.to_dict())
    generate_analytics(user, TODAY)
    assert user.to_dict() == before
