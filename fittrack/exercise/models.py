# -*- coding: utf-8 -*-
"""Exercise domain — Pydantic models."""

from __future__ import annotations

from datetime import date as _date
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .days import format_day, is_valid_day, weekday_for


class ExerciseType(str, Enum):
    cardio = "cardio"
    strength = "strength"
    flexibility = "flexibility"
    core = "core"
    rest = "rest"
    other = "other"


def _coerce_type(value: object) -> str:
    """Lower-case known types; anything else is stored as ``other``."""
    raw = str(value or "").strip().lower()
    try:
        return ExerciseType(raw).value
    except ValueError:
        return ExerciseType.other.value


def _check_iso_date(value: str) -> str:
    try:
        _date.fromisoformat(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"invalid date {value!r}, expected YYYY-MM-DD") from exc
    return value


class ExerciseRecord(BaseModel):
    id: str
    user_id: str
    name: str
    type: str
    duration: int = Field(0, ge=0, description="minutes")
    calories_burned: int = Field(0, ge=0)
    day: str = Field(..., description="Canonical weekday, e.g. Monday")
    date: str = Field(..., description="YYYY-MM-DD")
    is_completed: bool = False


class RecentWorkoutEntry(BaseModel):
    id: str
    user_id: str
    name: str
    type: str
    duration: int = Field(0, ge=0)
    calories_burned: int = Field(0, ge=0)
    day: str
    date: str
    last_used: str = Field(..., description="ISO8601 timestamp")


class ExercisePatch(BaseModel):
    """Mutable attributes of an exercise record; ``None`` leaves a column as is."""

    type: Optional[str] = None
    duration: Optional[int] = Field(None, ge=0)
    calories_burned: Optional[int] = Field(None, ge=0)
    is_completed: Optional[bool] = None


class RecentWorkoutPatch(BaseModel):
    type: Optional[str] = None
    duration: Optional[int] = Field(None, ge=0)
    calories_burned: Optional[int] = Field(None, ge=0)
    day: Optional[str] = None
    date: Optional[str] = None
    last_used: Optional[str] = None


class UpsertExerciseRequest(BaseModel):
    user_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=200)
    type: str = Field(ExerciseType.other.value, description="cardio|strength|flexibility|core|rest|other")
    duration: int = Field(0, ge=0, description="minutes")
    calories_burned: Optional[int] = Field(None, ge=0, description="Estimated from type/duration when omitted")
    day: str = Field(..., min_length=1, description="Weekday name; abbreviations accepted")
    date: str = Field(..., description="YYYY-MM-DD")
    is_completed: bool = False

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, value: object) -> str:
        return _coerce_type(value)

    @field_validator("day")
    @classmethod
    def _normalize_day(cls, value: str) -> str:
        day = format_day(value)
        if not is_valid_day(day):
            raise ValueError(f"unknown weekday {value!r}")
        return day

    @field_validator("date")
    @classmethod
    def _validate_date(cls, value: str) -> str:
        return _check_iso_date(value)

    @model_validator(mode="after")
    def _day_matches_date(self) -> "UpsertExerciseRequest":
        expected = weekday_for(self.date)
        if self.day != expected:
            raise ValueError(f"day {self.day!r} does not match date {self.date} ({expected})")
        return self


class UpsertStatus(str, Enum):
    created = "created"
    updated = "updated"


class UpsertExerciseResponse(BaseModel):
    status: UpsertStatus
    exercise_id: str


class ResetRequest(BaseModel):
    user_id: str = Field(..., min_length=1)
    previous_date: str = Field(..., description="YYYY-MM-DD")
    new_date: str = Field(..., description="YYYY-MM-DD")

    @field_validator("previous_date", "new_date")
    @classmethod
    def _validate_dates(cls, value: str) -> str:
        return _check_iso_date(value)


class ResetResponse(BaseModel):
    success: bool = True
    message: str
    created_ids: List[str] = Field(default_factory=list)
    skipped: int = Field(0, ge=0)


class DailyExerciseSummary(BaseModel):
    date: str
    total_calories_burned: int = 0
    total_duration: int = 0
    exercise_count: int = 0
    exercises: List[ExerciseRecord] = Field(default_factory=list)


class CalorieEstimate(BaseModel):
    type: str
    duration: float
    calories_burned: int
