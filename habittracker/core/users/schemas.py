"""Typed schemas for user IO."""

from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId", min_length=1, max_length=64)


class HabitResponse(BaseModel):
    id: str
    name: str
    description: str
    category: str
    createdAt: str
    completions: List[str]
    streak: int


class UserStatsResponse(BaseModel):
    totalHabits: int
    totalCompletions: int
    currentStreak: int
    longestStreak: int


class UserResponse(BaseModel):
    id: str
    createdAt: str
    habits: Dict[str, HabitResponse]
    stats: UserStatsResponse


def serialize_user(snapshot: dict) -> dict:
    return UserResponse.model_validate(snapshot).model_dump()
