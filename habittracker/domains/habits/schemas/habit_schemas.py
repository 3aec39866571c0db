"""Habit request/response schemas."""

from __future__ import annotations

from datetime import date
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class HabitCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId", min_length=1, max_length=64)
    name: str = Field(alias="habitName", max_length=255)
    description: Optional[str] = Field(default=None, max_length=4096)
    category: Optional[str] = Field(default=None, max_length=64)


class HabitComplete(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId", min_length=1, max_length=64)
    habit_id: str = Field(alias="habitId", min_length=1, max_length=64)
    completed_on: Optional[date] = Field(default=None, alias="date")


class AnalyticsSummary(BaseModel):
    totalHabits: int
    totalCompletions: int
    currentStreak: int
    longestStreak: int
    completionRate: int


class CategoryStat(BaseModel):
    count: int
    completions: int


class TopHabit(BaseModel):
    name: str
    streak: int
    completions: int


class DayProgress(BaseModel):
    date: str
    completions: int
    dayName: str


class AnalyticsResponse(BaseModel):
    summary: AnalyticsSummary
    categoryStats: Dict[str, CategoryStat]
    topHabits: List[TopHabit]
    weeklyProgress: List[DayProgress]
