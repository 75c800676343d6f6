# -*- coding: utf-8 -*-
"""Exercise domain — SQLite storage primitives.

Every function takes an open connection so callers decide the transaction
boundary (see ``service.py``).
"""

from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

from .models import ExercisePatch, ExerciseRecord, RecentWorkoutEntry, RecentWorkoutPatch


class ExerciseStoreError(RuntimeError):
    """A lookup or write against the exercise store failed."""


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _row_to_exercise(row: sqlite3.Row) -> ExerciseRecord:
    data = dict(row)
    data["is_completed"] = bool(data.get("is_completed"))
    data.pop("created_at", None)
    return ExerciseRecord.model_validate(data)


def _row_to_recent(row: sqlite3.Row) -> RecentWorkoutEntry:
    return RecentWorkoutEntry.model_validate(dict(row))


def _patch_columns(patch: Dict[str, Any]) -> tuple[str, list[Any]]:
    columns = sorted(patch.keys())
    assignments = ", ".join(f"{col} = ?" for col in columns)
    values = [int(patch[col]) if isinstance(patch[col], bool) else patch[col] for col in columns]
    return assignments, values


# ---- exercise log ----


def find_exercise(
    conn: sqlite3.Connection,
    *,
    user_id: str,
    day: str,
    date: str,
    name: str,
) -> Optional[ExerciseRecord]:
    rows = conn.execute(
        "SELECT * FROM exercise WHERE user_id = ? AND day = ? AND date = ?",
        (user_id, day, date),
    ).fetchall()
    for row in rows:
        if row["name"] == name:
            return _row_to_exercise(row)
    return None


def insert_exercise(
    conn: sqlite3.Connection,
    *,
    user_id: str,
    name: str,
    type: str,
    duration: int,
    calories_burned: int,
    day: str,
    date: str,
    is_completed: bool,
) -> str:
    exercise_id = str(uuid4())
    conn.execute(
        """
        INSERT INTO exercise (id, user_id, name, type, duration, calories_burned, day, date, is_completed, created_at)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            exercise_id,
            user_id,
            name,
            type,
            int(duration),
            int(calories_burned),
            day,
            date,
            int(bool(is_completed)),
            utc_now(),
        ),
    )
    return exercise_id


def patch_exercise(conn: sqlite3.Connection, exercise_id: str, patch: ExercisePatch) -> None:
    fields = patch.model_dump(exclude_none=True)
    if not fields:
        return
    assignments, values = _patch_columns(fields)
    conn.execute(f"UPDATE exercise SET {assignments} WHERE id = ?", (*values, exercise_id))


def list_exercises_on(
    conn: sqlite3.Connection,
    *,
    user_id: str,
    date: str,
    completed: Optional[bool] = None,
) -> List[ExerciseRecord]:
    sql = "SELECT * FROM exercise WHERE user_id = ? AND date = ?"
    params: list[Any] = [user_id, date]
    if completed is not None:
        sql += " AND is_completed = ?"
        params.append(int(completed))
    sql += " ORDER BY created_at ASC"
    return [_row_to_exercise(r) for r in conn.execute(sql, params).fetchall()]


def list_completed_exercises_between(
    conn: sqlite3.Connection,
    *,
    user_id: str,
    start: str,
    end: str,
) -> List[ExerciseRecord]:
    rows = conn.execute(
        """
        SELECT * FROM exercise
        WHERE user_id = ? AND date >= ? AND date <= ? AND is_completed = 1
        ORDER BY date ASC, created_at ASC
        """,
        (user_id, start, end),
    ).fetchall()
    return [_row_to_exercise(r) for r in rows]


# ---- recent workouts index ----


def find_recent_workout(conn: sqlite3.Connection, *, user_id: str, name: str) -> Optional[RecentWorkoutEntry]:
    row = conn.execute(
        "SELECT * FROM recent_workouts WHERE user_id = ? AND name = ?",
        (user_id, name),
    ).fetchone()
    return _row_to_recent(row) if row else None


def insert_recent_workout(
    conn: sqlite3.Connection,
    *,
    user_id: str,
    name: str,
    type: str,
    duration: int,
    calories_burned: int,
    day: str,
    date: str,
    last_used: str,
) -> str:
    workout_id = str(uuid4())
    conn.execute(
        """
        INSERT INTO recent_workouts (id, user_id, name, type, duration, calories_burned, day, date, last_used)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (workout_id, user_id, name, type, int(duration), int(calories_burned), day, date, last_used),
    )
    return workout_id


def patch_recent_workout(conn: sqlite3.Connection, workout_id: str, patch: RecentWorkoutPatch) -> None:
    fields = patch.model_dump(exclude_none=True)
    if not fields:
        return
    assignments, values = _patch_columns(fields)
    conn.execute(f"UPDATE recent_workouts SET {assignments} WHERE id = ?", (*values, workout_id))


def list_recent_workouts(
    conn: sqlite3.Connection,
    *,
    user_id: str,
    limit: Optional[int] = None,
) -> List[RecentWorkoutEntry]:
    sql = "SELECT * FROM recent_workouts WHERE user_id = ? ORDER BY last_used DESC"
    params: list[Any] = [user_id]
    if limit is not None:
        sql += " LIMIT ?"
        params.append(int(limit))
    return [_row_to_recent(r) for r in conn.execute(sql, params).fetchall()]
