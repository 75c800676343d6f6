# -*- coding: utf-8 -*-
"""Daily reset coordinator (device side).

On every app activation ``check()`` compares the locally stored last reset
date with today and asks the server to carry yesterday's exercises forward at
most once per calendar day. The local marker only advances after the server
call succeeded, so a failed reset is retried on the next activation. The
server operation is idempotent, which covers retries and several devices of
the same user racing each other.
"""

from __future__ import annotations

import json
import logging
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Optional

from ..config import settings
from .client import HttpResetService

logger = logging.getLogger(__name__)

MARKER_KEY = "lastWorkoutResetDate"

# (user_id, previous_date, new_date) -> anything; raising means the reset failed.
ResetService = Callable[[str, str, str], object]


class ResetState(str, Enum):
    never_reset = "never-reset"
    reset_today = "reset-today"
    stale = "stale"


class FileMarkerStore:
    """Device-local key/value file holding the last reset date."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or settings.reset_marker_path

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        data = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"marker file {self.path} does not hold a JSON object")
        return data

    def get(self) -> Optional[str]:
        value = self._read_all().get(MARKER_KEY)
        if not value:
            return None
        value = str(value)
        # Raises ValueError for anything but YYYY-MM-DD.
        date.fromisoformat(value)
        return value

    def set(self, value: str) -> None:
        try:
            data = self._read_all()
        except ValueError:
            data = {}
        data[MARKER_KEY] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        tmp.replace(self.path)


def classify(last_reset_date: Optional[str], today: str) -> ResetState:
    if not last_reset_date:
        return ResetState.never_reset
    if last_reset_date == today:
        return ResetState.reset_today
    return ResetState.stale


class DailyResetCoordinator:
    def __init__(self, reset_service: ResetService, marker_store: Optional[FileMarkerStore] = None) -> None:
        self.reset_service = reset_service
        self.marker_store = marker_store or FileMarkerStore()

    def _read_marker(self) -> Optional[str]:
        try:
            return self.marker_store.get()
        except (OSError, ValueError) as exc:
            logger.warning("Could not read reset marker, treating as absent: %s", exc)
            return None

    def _write_marker(self, today: str) -> bool:
        try:
            self.marker_store.set(today)
        except (OSError, ValueError) as exc:
            logger.warning("Could not persist reset marker %s: %s", today, exc)
            return False
        return True

    def check(self, user_id: str, today: str) -> ResetState:
        """Run the once-per-day gate for ``user_id`` and return the observed state."""
        last = self._read_marker()
        state = classify(last, today)

        if state is ResetState.never_reset:
            if self._write_marker(today):
                logger.info("First workout reset date set to %s", today)
            return state

        if state is ResetState.reset_today:
            return state

        try:
            self.reset_service(user_id, last, today)
        except Exception as exc:
            logger.error("Error resetting workouts %s -> %s: %s", last, today, exc)
            return state
        if today < last:
            logger.warning("Clock moved back (%s < %s), keeping reset marker", today, last)
            return state
        if self._write_marker(today):
            logger.info("Workout exercises reset for new day %s", today)
        return state


def check_daily_reset(
    user_id: str,
    today: Optional[str] = None,
    *,
    coordinator: Optional[DailyResetCoordinator] = None,
) -> None:
    """Fire-and-forget entry point called on app activation."""
    if not user_id:
        return
    if coordinator is None:
        coordinator = DailyResetCoordinator(HttpResetService())
    coordinator.check(user_id, today or date.today().isoformat())
