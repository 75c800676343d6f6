# -*- coding: utf-8 -*-
"""App database (exercise log, recent workouts, food macros) — SQLite helpers."""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator


def connect(db_path: Path) -> sqlite3.Connection:
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path), check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON;")
    return conn


def init_app_db(db_path: Path) -> None:
    conn = connect(db_path)
    try:
        cur = conn.cursor()
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS exercise (
                id TEXT PRIMARY KEY,
                user_id TEXT NOT NULL,
                name TEXT NOT NULL,
                type TEXT NOT NULL,
                duration INTEGER NOT NULL,
                calories_burned INTEGER NOT NULL,
                day TEXT NOT NULL,
                date TEXT NOT NULL,
                is_completed INTEGER NOT NULL DEFAULT 0,
                created_at TEXT NOT NULL,
                UNIQUE(user_id, day, date, name)
            );
            """
        )
        cur.execute(
            "CREATE INDEX IF NOT EXISTS idx_exercise_user_date ON exercise(user_id, date);"
        )
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS recent_workouts (
                id TEXT PRIMARY KEY,
                user_id TEXT NOT NULL,
                name TEXT NOT NULL,
                type TEXT NOT NULL,
                duration INTEGER NOT NULL,
                calories_burned INTEGER NOT NULL,
                day TEXT NOT NULL,
                date TEXT NOT NULL,
                last_used TEXT NOT NULL,
                UNIQUE(user_id, name)
            );
            """
        )
        cur.execute(
            "CREATE INDEX IF NOT EXISTS idx_recent_workouts_user_last_used ON recent_workouts(user_id, last_used DESC);"
        )
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS food_macros (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL UNIQUE,
                calories REAL NOT NULL,
                protein REAL NOT NULL,
                carbs REAL NOT NULL,
                fat REAL NOT NULL,
                category TEXT
            );
            """
        )
        cur.execute(
            "CREATE INDEX IF NOT EXISTS idx_food_macros_category ON food_macros(category);"
        )
        conn.commit()
    finally:
        conn.close()


@contextmanager
def db_conn(db_path: Path) -> Iterator[sqlite3.Connection]:
    conn = connect(db_path)
    try:
        yield conn
        conn.commit()
    finally:
        conn.close()


@contextmanager
def write_txn(db_path: Path) -> Iterator[sqlite3.Connection]:
    """Open a connection holding the write lock for the whole block.

    Reads inside the block see a stable snapshot, so lookup-then-write sequences
    cannot interleave with another writer. Any exception rolls everything back.
    """
    conn = connect(db_path)
    try:
        conn.execute("BEGIN IMMEDIATE;")
        try:
            yield conn
        except BaseException:
            conn.rollback()
            raise
        conn.commit()
    finally:
        conn.close()
