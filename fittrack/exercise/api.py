# -*- coding: utf-8 -*-
"""Exercise domain — API endpoints."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query

from .calories import estimate_calories
from .models import (
    CalorieEstimate,
    DailyExerciseSummary,
    ExerciseRecord,
    RecentWorkoutEntry,
    ResetRequest,
    ResetResponse,
    UpsertExerciseRequest,
    UpsertExerciseResponse,
)
from .service import (
    ExerciseStoreError,
    get_exercise_history,
    get_exercises_by_date,
    get_recent_workouts,
    reset_completed_exercises,
    search_recent_workouts,
    upsert_exercise,
)

router = APIRouter(prefix="/api/exercise", tags=["Exercise"])


@router.post("/upsert", response_model=UpsertExerciseResponse, summary="Create or update an exercise for a day")
def exercise_upsert(request: UpsertExerciseRequest):
    try:
        return upsert_exercise(request)
    except ExerciseStoreError as exc:
        raise HTTPException(status_code=500, detail=f"Could not save exercise, please retry: {exc}")


@router.post("/reset", response_model=ResetResponse, summary="Carry completed exercises over to a new day")
def exercise_reset(request: ResetRequest):
    try:
        return reset_completed_exercises(request.user_id, request.previous_date, request.new_date)
    except ExerciseStoreError as exc:
        raise HTTPException(status_code=500, detail=str(exc))


@router.get("/estimate-calories", response_model=CalorieEstimate, summary="Estimate calories burned")
def exercise_estimate_calories(
    type: str = Query(..., description="cardio|strength|flexibility|core|rest"),
    duration: float = Query(..., ge=0, description="minutes"),
):
    return CalorieEstimate(type=type, duration=duration, calories_burned=estimate_calories(type, duration))


@router.get("/{user_id}/by-date/{date}", response_model=List[ExerciseRecord], summary="Exercises logged for a date")
def exercises_by_date(
    user_id: str,
    date: str,
    include_completed: bool = Query(False),
):
    try:
        return get_exercises_by_date(user_id, date, include_completed=include_completed)
    except ExerciseStoreError as exc:
        raise HTTPException(status_code=500, detail=str(exc))


@router.get("/{user_id}/recent", response_model=List[RecentWorkoutEntry], summary="Most recently completed workouts")
def recent_workouts(user_id: str, limit: Optional[int] = Query(None, ge=1, le=100)):
    try:
        return get_recent_workouts(user_id, limit=limit)
    except ExerciseStoreError as exc:
        raise HTTPException(status_code=500, detail=str(exc))


@router.get("/{user_id}/recent/search", response_model=List[RecentWorkoutEntry], summary="Search recent workouts by name")
def recent_workouts_search(
    user_id: str,
    name: str = Query(..., description="At least 2 characters"),
    limit: Optional[int] = Query(None, ge=1, le=100),
):
    try:
        return search_recent_workouts(user_id, name, limit=limit)
    except ExerciseStoreError as exc:
        raise HTTPException(status_code=500, detail=str(exc))


@router.get("/{user_id}/history", response_model=List[DailyExerciseSummary], summary="Completed exercises per day")
def exercise_history(
    user_id: str,
    start: str = Query(..., description="YYYY-MM-DD"),
    end: str = Query(..., description="YYYY-MM-DD"),
):
    try:
        return get_exercise_history(user_id, start=start, end=end)
    except ExerciseStoreError as exc:
        raise HTTPException(status_code=500, detail=str(exc))
