# -*- coding: utf-8 -*-
"""Weekday names: canonical form, synonyms and lookup by ISO date."""

from __future__ import annotations

from datetime import date
from types import MappingProxyType
from typing import Mapping, Tuple

ALL_DAYS: Tuple[str, ...] = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

DAY_SYNONYMS: Mapping[str, str] = MappingProxyType(
    {
        "mon": "Monday",
        "monday": "Monday",
        "tue": "Tuesday",
        "tues": "Tuesday",
        "tuesday": "Tuesday",
        "wed": "Wednesday",
        "weds": "Wednesday",
        "wednesday": "Wednesday",
        "thu": "Thursday",
        "thur": "Thursday",
        "thurs": "Thursday",
        "thursday": "Thursday",
        "fri": "Friday",
        "friday": "Friday",
        "sat": "Saturday",
        "saturday": "Saturday",
        "sun": "Sunday",
        "sunday": "Sunday",
    }
)


def format_day(day: str) -> str:
    """Canonical capitalized weekday, e.g. ``" thurs "`` -> ``"Thursday"``.

    Values that are not a known weekday are stripped and capitalized.
    """
    if not day:
        return ""
    normalized = day.strip().lower()
    if normalized in DAY_SYNONYMS:
        return DAY_SYNONYMS[normalized]
    return normalized.capitalize()


def is_valid_day(day: str) -> bool:
    return (day or "").strip().lower() in {d.lower() for d in ALL_DAYS}


def weekday_for(iso_date: str) -> str:
    return ALL_DAYS[date.fromisoformat(iso_date).weekday()]
