# -*- coding: utf-8 -*-
"""Calorie estimate for a workout from its type and duration."""

from __future__ import annotations

import math
from types import MappingProxyType
from typing import Mapping

# Approximate calories burned per minute, keyed by exercise type.
CALORIES_PER_MINUTE: Mapping[str, float] = MappingProxyType(
    {
        "cardio": 10,
        "strength": 7,
        "flexibility": 4,
        "core": 6,
        "rest": 1,
        "default": 5,
    }
)


def calories_per_minute(exercise_type: str) -> float:
    key = (exercise_type or "").strip().lower()
    return CALORIES_PER_MINUTE.get(key, CALORIES_PER_MINUTE["default"])


def estimate_calories(exercise_type: str, duration: float) -> int:
    """Calories burned for ``duration`` minutes of ``exercise_type``.

    Unknown types use the default rate. Rounds half up, so 2.5 becomes 3.
    """
    value = calories_per_minute(exercise_type) * max(float(duration or 0), 0.0)
    return int(math.floor(value + 0.5))
