# -*- coding: utf-8 -*-

from __future__ import annotations

import shutil
import sqlite3
import tempfile
import unittest
from pathlib import Path

from pydantic import ValidationError

from fittrack.app_db import db_conn, init_app_db
from fittrack.exercise.models import UpsertExerciseRequest, UpsertStatus
from fittrack.exercise.service import (
    ExerciseStoreError,
    get_exercise_history,
    get_exercises_by_date,
    get_recent_workouts,
    reset_completed_exercises,
    search_recent_workouts,
    upsert_exercise,
)


def _request(**overrides) -> UpsertExerciseRequest:
    data = {
        "user_id": "u1",
        "name": "Squats",
        "type": "strength",
        "duration": 20,
        "calories_burned": 140,
        "day": "Monday",
        "date": "2024-01-01",
        "is_completed": False,
    }
    data.update(overrides)
    return UpsertExerciseRequest(**data)


class _DbTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = Path(tempfile.mkdtemp(prefix="fittrack-test-"))
        self.db_path = self._tmp / "fittrack.db"
        init_app_db(self.db_path)

    def tearDown(self) -> None:
        shutil.rmtree(self._tmp, ignore_errors=True)

    def count(self, table: str) -> int:
        with db_conn(self.db_path) as conn:
            return conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]


class TestUpsertExercise(_DbTestCase):
    def test_same_identity_updates_in_place(self) -> None:
        first = upsert_exercise(_request(), db_path=self.db_path)
        second = upsert_exercise(_request(duration=45, calories_burned=315), db_path=self.db_path)

        self.assertEqual(first.status, UpsertStatus.created)
        self.assertEqual(second.status, UpsertStatus.updated)
        self.assertEqual(first.exercise_id, second.exercise_id)
        self.assertEqual(self.count("exercise"), 1)

        records = get_exercises_by_date("u1", "2024-01-01", include_completed=True, db_path=self.db_path)
        self.assertEqual(len(records), 1)
        self.assertEqual(records[0].duration, 45)
        self.assertEqual(records[0].calories_burned, 315)

    def test_day_abbreviation_resolves_to_same_record(self) -> None:
        first = upsert_exercise(_request(day="mon"), db_path=self.db_path)
        second = upsert_exercise(_request(day="Monday"), db_path=self.db_path)
        self.assertEqual(first.exercise_id, second.exercise_id)

    def test_different_name_or_date_creates_new_record(self) -> None:
        upsert_exercise(_request(), db_path=self.db_path)
        other_name = upsert_exercise(_request(name="Lunges"), db_path=self.db_path)
        other_date = upsert_exercise(_request(day="Tuesday", date="2024-01-02"), db_path=self.db_path)
        self.assertEqual(other_name.status, UpsertStatus.created)
        self.assertEqual(other_date.status, UpsertStatus.created)
        self.assertEqual(self.count("exercise"), 3)

    def test_incomplete_submission_leaves_index_untouched(self) -> None:
        upsert_exercise(_request(), db_path=self.db_path)
        self.assertEqual(self.count("recent_workouts"), 0)

    def test_completion_refreshes_single_index_entry(self) -> None:
        upsert_exercise(_request(is_completed=True), db_path=self.db_path, now="2024-01-01T10:00:00Z")
        upsert_exercise(
            _request(day="Friday", date="2024-01-05", duration=30, calories_burned=210, is_completed=True),
            db_path=self.db_path,
            now="2024-01-05T10:00:00Z",
        )

        recent = get_recent_workouts("u1", db_path=self.db_path)
        self.assertEqual(len(recent), 1)
        entry = recent[0]
        self.assertEqual(entry.name, "Squats")
        self.assertEqual(entry.date, "2024-01-05")
        self.assertEqual(entry.day, "Friday")
        self.assertEqual(entry.duration, 30)
        self.assertEqual(entry.calories_burned, 210)
        self.assertEqual(entry.last_used, "2024-01-05T10:00:00Z")

    def test_uncompleting_does_not_downgrade_index(self) -> None:
        upsert_exercise(_request(is_completed=True), db_path=self.db_path, now="2024-01-01T10:00:00Z")
        upsert_exercise(_request(duration=5, calories_burned=35, is_completed=False), db_path=self.db_path)

        recent = get_recent_workouts("u1", db_path=self.db_path)
        self.assertEqual(len(recent), 1)
        self.assertEqual(recent[0].duration, 20)
        self.assertEqual(recent[0].calories_burned, 140)
        self.assertEqual(recent[0].last_used, "2024-01-01T10:00:00Z")

        records = get_exercises_by_date("u1", "2024-01-01", include_completed=True, db_path=self.db_path)
        self.assertFalse(records[0].is_completed)

    def test_missing_calories_are_estimated(self) -> None:
        upsert_exercise(_request(type="Cardio", duration=30, calories_burned=None), db_path=self.db_path)
        records = get_exercises_by_date("u1", "2024-01-01", db_path=self.db_path)
        self.assertEqual(records[0].type, "cardio")
        self.assertEqual(records[0].calories_burned, 300)

    def test_store_failure_is_reported(self) -> None:
        with db_conn(self.db_path) as conn:
            conn.execute("DROP TABLE recent_workouts")
        with self.assertRaises(ExerciseStoreError):
            upsert_exercise(_request(is_completed=True), db_path=self.db_path)
        # The exercise write was rolled back together with the failed index write.
        self.assertEqual(self.count("exercise"), 0)

    def test_unknown_weekday_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            _request(day="Someday")

    def test_weekday_must_match_date(self) -> None:
        with self.assertRaises(ValidationError):
            _request(day="Monday", date="2024-01-02")

    def test_reset_does_not_duplicate_existing_entry(self) -> None:
        upsert_exercise(_request(is_completed=True), db_path=self.db_path)
        upsert_exercise(_request(day="tue", date="2024-01-02"), db_path=self.db_path)

        result = reset_completed_exercises("u1", "2024-01-01", "2024-01-02", db_path=self.db_path)
        self.assertEqual(result.created_ids, [])
        self.assertEqual(result.skipped, 1)
        today = get_exercises_by_date("u1", "2024-01-02", db_path=self.db_path)
        self.assertEqual([(e.name, e.day) for e in today], [("Squats", "Tuesday")])

    def test_users_are_isolated(self) -> None:
        upsert_exercise(_request(is_completed=True), db_path=self.db_path)
        upsert_exercise(_request(user_id="u2", is_completed=True), db_path=self.db_path)
        self.assertEqual(self.count("exercise"), 2)
        self.assertEqual(len(get_recent_workouts("u1", db_path=self.db_path)), 1)
        self.assertEqual(len(get_recent_workouts("u2", db_path=self.db_path)), 1)


class TestResetCompletedExercises(_DbTestCase):
    def setUp(self) -> None:
        super().setUp()
        upsert_exercise(_request(is_completed=True), db_path=self.db_path)
        upsert_exercise(_request(name="Running", type="cardio", is_completed=True), db_path=self.db_path)
        upsert_exercise(_request(name="Plank", type="core", is_completed=False), db_path=self.db_path)

    def test_completed_exercises_carry_over_uncompleted(self) -> None:
        result = reset_completed_exercises("u1", "2024-01-01", "2024-01-02", db_path=self.db_path)
        self.assertTrue(result.success)
        self.assertEqual(len(result.created_ids), 2)

        today = get_exercises_by_date("u1", "2024-01-02", db_path=self.db_path)
        self.assertEqual(sorted(e.name for e in today), ["Running", "Squats"])
        for exercise in today:
            self.assertFalse(exercise.is_completed)
            self.assertEqual(exercise.day, "Tuesday")

        # Yesterday keeps its history.
        yesterday = get_exercises_by_date("u1", "2024-01-01", include_completed=True, db_path=self.db_path)
        self.assertEqual(sum(1 for e in yesterday if e.is_completed), 2)

    def test_repeated_reset_is_a_no_op(self) -> None:
        reset_completed_exercises("u1", "2024-01-01", "2024-01-02", db_path=self.db_path)
        before = self.count("exercise")
        again = reset_completed_exercises("u1", "2024-01-01", "2024-01-02", db_path=self.db_path)
        self.assertEqual(again.created_ids, [])
        self.assertEqual(again.skipped, 2)
        self.assertEqual(self.count("exercise"), before)

    def test_backwards_reset_changes_nothing(self) -> None:
        before = self.count("exercise")
        result = reset_completed_exercises("u1", "2024-01-02", "2024-01-01", db_path=self.db_path)
        self.assertEqual(result.created_ids, [])
        self.assertEqual(self.count("exercise"), before)

    def test_reset_leaves_recent_workouts_alone(self) -> None:
        before = get_recent_workouts("u1", db_path=self.db_path)
        reset_completed_exercises("u1", "2024-01-01", "2024-01-02", db_path=self.db_path)
        after = get_recent_workouts("u1", db_path=self.db_path)
        self.assertEqual([e.model_dump() for e in before], [e.model_dump() for e in after])


class TestExerciseQueries(_DbTestCase):
    def test_by_date_hides_completed_unless_asked(self) -> None:
        upsert_exercise(_request(is_completed=True), db_path=self.db_path)
        upsert_exercise(_request(name="Plank", is_completed=False), db_path=self.db_path)
        self.assertEqual([e.name for e in get_exercises_by_date("u1", "2024-01-01", db_path=self.db_path)], ["Plank"])
        self.assertEqual(
            len(get_exercises_by_date("u1", "2024-01-01", include_completed=True, db_path=self.db_path)),
            2,
        )

    def test_recent_workouts_sorted_and_limited(self) -> None:
        for i, name in enumerate(["Running", "Cycling", "Swimming"]):
            upsert_exercise(
                _request(name=name, type="cardio", is_completed=True),
                db_path=self.db_path,
                now=f"2024-01-01T0{i}:00:00Z",
            )
        recent = get_recent_workouts("u1", limit=2, db_path=self.db_path)
        self.assertEqual([e.name for e in recent], ["Swimming", "Cycling"])
        self.assertEqual(get_recent_workouts("u1", limit=0, db_path=self.db_path), [])
        self.assertEqual(search_recent_workouts("u1", "ing", limit=0, db_path=self.db_path), [])

    def test_search_matches_punctuation_variants(self) -> None:
        upsert_exercise(_request(name="Push-ups", is_completed=True), db_path=self.db_path, now="2024-01-01T01:00:00Z")
        upsert_exercise(_request(name="Pull-ups", is_completed=True), db_path=self.db_path, now="2024-01-01T02:00:00Z")

        self.assertEqual([e.name for e in search_recent_workouts("u1", "pushups", db_path=self.db_path)], ["Push-ups"])
        self.assertEqual(
            [e.name for e in search_recent_workouts("u1", "ups", db_path=self.db_path)],
            ["Pull-ups", "Push-ups"],
        )
        self.assertEqual(search_recent_workouts("u1", "p", db_path=self.db_path), [])

    def test_history_groups_completed_by_date(self) -> None:
        upsert_exercise(_request(is_completed=True), db_path=self.db_path)
        upsert_exercise(_request(name="Running", calories_burned=200, duration=20, is_completed=True), db_path=self.db_path)
        upsert_exercise(_request(name="Plank", is_completed=False), db_path=self.db_path)
        upsert_exercise(_request(day="Wednesday", date="2024-01-03", is_completed=True), db_path=self.db_path)
        upsert_exercise(_request(day="Monday", date="2024-01-08", is_completed=True), db_path=self.db_path)

        history = get_exercise_history("u1", start="2024-01-01", end="2024-01-07", db_path=self.db_path)
        self.assertEqual([d.date for d in history], ["2024-01-01", "2024-01-03"])
        self.assertEqual(history[0].exercise_count, 2)
        self.assertEqual(history[0].total_calories_burned, 340)
        self.assertEqual(history[0].total_duration, 40)
        self.assertEqual(history[1].exercise_count, 1)


class TestStoreConstraints(_DbTestCase):
    def test_duplicate_identity_rejected_by_schema(self) -> None:
        upsert_exercise(_request(), db_path=self.db_path)
        with self.assertRaises(sqlite3.IntegrityError):
            with db_conn(self.db_path) as conn:
                conn.execute(
                    """
                    INSERT INTO exercise (id, user_id, name, type, duration, calories_burned, day, date, is_completed, created_at)
                    VALUES ('x', 'u1', 'Squats', 'strength', 1, 1, 'Monday', '2024-01-01', 0, '')
                    """
                )


if __name__ == "__main__":
    unittest.main()
