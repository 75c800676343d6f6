# -*- coding: utf-8 -*-
"""Exercise domain — upsert, daily reset and read operations.

The exercise log is the source of truth; ``recent_workouts`` is a projection of
it holding the latest completed values per exercise name.
"""

from __future__ import annotations

import logging
import re
import sqlite3
from pathlib import Path
from typing import Dict, List, Optional

from ..app_db import db_conn, write_txn
from ..config import settings
from . import storage
from .storage import ExerciseStoreError, utc_now
from .calories import estimate_calories
from .days import weekday_for
from .models import (
    DailyExerciseSummary,
    ExercisePatch,
    ExerciseRecord,
    RecentWorkoutEntry,
    RecentWorkoutPatch,
    ResetResponse,
    UpsertExerciseRequest,
    UpsertExerciseResponse,
    UpsertStatus,
)

logger = logging.getLogger(__name__)

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def _db(db_path: Path | None) -> Path:
    return db_path or settings.db_path


def upsert_exercise(
    request: UpsertExerciseRequest,
    *,
    db_path: Path | None = None,
    now: Optional[str] = None,
) -> UpsertExerciseResponse:
    """Create or update the exercise for (user, day, date, name).

    A completed submission also refreshes the user's recent-workouts entry for
    that name. Both writes share one transaction, so a failure leaves neither
    applied and the whole call can be resubmitted.
    """
    calories = request.calories_burned
    if calories is None:
        calories = estimate_calories(request.type, request.duration)
    last_used = now or utc_now()

    try:
        with write_txn(_db(db_path)) as conn:
            existing = storage.find_exercise(
                conn,
                user_id=request.user_id,
                day=request.day,
                date=request.date,
                name=request.name,
            )
            if existing:
                storage.patch_exercise(
                    conn,
                    existing.id,
                    ExercisePatch(
                        type=request.type,
                        duration=request.duration,
                        calories_burned=calories,
                        is_completed=request.is_completed,
                    ),
                )
                result = UpsertExerciseResponse(status=UpsertStatus.updated, exercise_id=existing.id)
            else:
                exercise_id = storage.insert_exercise(
                    conn,
                    user_id=request.user_id,
                    name=request.name,
                    type=request.type,
                    duration=request.duration,
                    calories_burned=calories,
                    day=request.day,
                    date=request.date,
                    is_completed=request.is_completed,
                )
                result = UpsertExerciseResponse(status=UpsertStatus.created, exercise_id=exercise_id)

            if request.is_completed:
                _refresh_recent_workout(conn, request, calories=calories, last_used=last_used)
    except sqlite3.Error as exc:
        raise ExerciseStoreError(f"exercise upsert failed: {exc}") from exc

    logger.info(
        "exercise %s: user=%s name=%r date=%s completed=%s",
        result.status.value,
        request.user_id,
        request.name,
        request.date,
        request.is_completed,
    )
    return result


def _refresh_recent_workout(
    conn: sqlite3.Connection,
    request: UpsertExerciseRequest,
    *,
    calories: int,
    last_used: str,
) -> None:
    entry = storage.find_recent_workout(conn, user_id=request.user_id, name=request.name)
    if entry:
        storage.patch_recent_workout(
            conn,
            entry.id,
            RecentWorkoutPatch(
                type=request.type,
                duration=request.duration,
                calories_burned=calories,
                day=request.day,
                date=request.date,
                last_used=last_used,
            ),
        )
        return
    storage.insert_recent_workout(
        conn,
        user_id=request.user_id,
        name=request.name,
        type=request.type,
        duration=request.duration,
        calories_burned=calories,
        day=request.day,
        date=request.date,
        last_used=last_used,
    )


def reset_completed_exercises(
    user_id: str,
    previous_date: str,
    new_date: str,
    *,
    db_path: Path | None = None,
) -> ResetResponse:
    """Carry the exercises completed on ``previous_date`` over to ``new_date``.

    Each completed exercise gets an uncompleted copy on ``new_date`` unless a
    record with that name already exists there. Records of ``previous_date``
    stay as that day's history. Repeating a call creates nothing new.
    """
    if new_date <= previous_date:
        logger.warning(
            "reset skipped: user=%s new_date=%s is not after previous_date=%s",
            user_id,
            new_date,
            previous_date,
        )
        return ResetResponse(message="Nothing to reset", skipped=0)

    new_day = weekday_for(new_date)
    created: List[str] = []
    skipped = 0
    try:
        with write_txn(_db(db_path)) as conn:
            completed = storage.list_exercises_on(conn, user_id=user_id, date=previous_date, completed=True)
            for exercise in completed:
                if storage.find_exercise(conn, user_id=user_id, day=new_day, date=new_date, name=exercise.name):
                    skipped += 1
                    continue
                created.append(
                    storage.insert_exercise(
                        conn,
                        user_id=user_id,
                        name=exercise.name,
                        type=exercise.type,
                        duration=exercise.duration,
                        calories_burned=exercise.calories_burned,
                        day=new_day,
                        date=new_date,
                        is_completed=False,
                    )
                )
    except sqlite3.Error as exc:
        raise ExerciseStoreError(f"exercise reset failed: {exc}") from exc

    logger.info(
        "reset exercises: user=%s %s -> %s created=%d skipped=%d",
        user_id,
        previous_date,
        new_date,
        len(created),
        skipped,
    )
    return ResetResponse(
        message=f"Reset {len(created)} exercises for the new day",
        created_ids=created,
        skipped=skipped,
    )


def get_exercises_by_date(
    user_id: str,
    date: str,
    *,
    include_completed: bool = False,
    db_path: Path | None = None,
) -> List[ExerciseRecord]:
    try:
        with db_conn(_db(db_path)) as conn:
            return storage.list_exercises_on(
                conn,
                user_id=user_id,
                date=date,
                completed=None if include_completed else False,
            )
    except sqlite3.Error as exc:
        raise ExerciseStoreError(f"exercise lookup failed: {exc}") from exc


def get_recent_workouts(
    user_id: str,
    *,
    limit: Optional[int] = None,
    db_path: Path | None = None,
) -> List[RecentWorkoutEntry]:
    if limit is None:
        limit = settings.recent_limit
    try:
        with db_conn(_db(db_path)) as conn:
            return storage.list_recent_workouts(conn, user_id=user_id, limit=limit)
    except sqlite3.Error as exc:
        raise ExerciseStoreError(f"recent workouts lookup failed: {exc}") from exc


def _name_matches(workout_name: str, term: str) -> bool:
    name = workout_name.lower()
    if term in name:
        return True
    simple_name = _NON_ALNUM.sub("", name)
    simple_term = _NON_ALNUM.sub("", term)
    if not simple_name or not simple_term:
        return False
    return simple_term in simple_name or simple_name in simple_term


def search_recent_workouts(
    user_id: str,
    name: str,
    *,
    limit: Optional[int] = None,
    db_path: Path | None = None,
) -> List[RecentWorkoutEntry]:
    term = (name or "").strip().lower()
    if len(term) < 2:
        return []
    try:
        with db_conn(_db(db_path)) as conn:
            workouts = storage.list_recent_workouts(conn, user_id=user_id)
    except sqlite3.Error as exc:
        raise ExerciseStoreError(f"recent workouts search failed: {exc}") from exc
    matches = [w for w in workouts if _name_matches(w.name, term)]
    return matches[: settings.recent_limit if limit is None else limit]


def get_exercise_history(
    user_id: str,
    *,
    start: str,
    end: str,
    db_path: Path | None = None,
) -> List[DailyExerciseSummary]:
    try:
        with db_conn(_db(db_path)) as conn:
            exercises = storage.list_completed_exercises_between(conn, user_id=user_id, start=start, end=end)
    except sqlite3.Error as exc:
        raise ExerciseStoreError(f"exercise history lookup failed: {exc}") from exc

    per_day: Dict[str, DailyExerciseSummary] = {}
    for exercise in exercises:
        bucket = per_day.setdefault(exercise.date, DailyExerciseSummary(date=exercise.date))
        bucket.total_calories_burned += exercise.calories_burned
        bucket.total_duration += exercise.duration
        bucket.exercise_count += 1
        bucket.exercises.append(exercise)
    return [per_day[d] for d in sorted(per_day.keys())]
