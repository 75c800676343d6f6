# -*- coding: utf-8 -*-
"""Nutrition — food macro table storage and batch categorization."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import List, Optional
from uuid import uuid4

from ..app_db import db_conn, write_txn
from ..config import settings
from .classifier import categorize_food, macro_calories
from .models import (
    BulkFoodMacroResponse,
    CategorizeResult,
    CategorizeStatus,
    CategorizeSummary,
    FoodMacro,
    FoodMacroCreate,
    FoodMacroResult,
    Macro,
)

logger = logging.getLogger(__name__)

# Allowed gap between stated calories and 4p + 4c + 9f before warning.
MACRO_WARNING_KCAL = 50


class FoodNotFoundError(KeyError):
    pass


def _db(db_path: Path | None) -> Path:
    return db_path or settings.db_path


def _row_to_food(row: sqlite3.Row) -> FoodMacro:
    return FoodMacro.model_validate(dict(row))


def _macro_warning(food: FoodMacroCreate) -> Optional[str]:
    calculated = macro_calories(food.protein, food.carbs, food.fat)
    if abs(calculated - food.calories) > MACRO_WARNING_KCAL:
        return (
            f"Warning: The provided calories ({food.calories:g}) differ significantly "
            f"from calculated calories ({calculated:.0f}) based on macros."
        )
    return None


def _find_by_name(conn: sqlite3.Connection, name: str) -> Optional[FoodMacro]:
    row = conn.execute("SELECT * FROM food_macros WHERE name = ?", (name,)).fetchone()
    return _row_to_food(row) if row else None


def _find_similar(conn: sqlite3.Connection, name: str) -> Optional[FoodMacro]:
    for row in conn.execute("SELECT * FROM food_macros ORDER BY name").fetchall():
        if row["name"] in name or name in row["name"]:
            return _row_to_food(row)
    return None


def _update_food(conn: sqlite3.Connection, food_id: str, food: FoodMacroCreate) -> None:
    conn.execute(
        """
        UPDATE food_macros SET calories = ?, protein = ?, carbs = ?, fat = ?, category = COALESCE(?, category)
        WHERE id = ?
        """,
        (food.calories, food.protein, food.carbs, food.fat, food.category, food_id),
    )


def _insert_food(conn: sqlite3.Connection, food: FoodMacroCreate) -> str:
    food_id = str(uuid4())
    conn.execute(
        "INSERT INTO food_macros (id, name, calories, protein, carbs, fat, category) VALUES (?, ?, ?, ?, ?, ?, ?)",
        (food_id, food.name, food.calories, food.protein, food.carbs, food.fat, food.category),
    )
    return food_id


def add_food_macro(food: FoodMacroCreate, *, db_path: Path | None = None) -> FoodMacroResult:
    """Add a food, or update it when ``force_update`` is set.

    Without ``force_update`` an exact or similar existing name is reported back
    instead of creating a near-duplicate.
    """
    warning = _macro_warning(food)
    with write_txn(_db(db_path)) as conn:
        existing = _find_by_name(conn, food.name)
        if not existing and not food.force_update:
            existing = _find_similar(conn, food.name)

        if existing:
            if food.force_update:
                _update_food(conn, existing.id, food)
                return FoodMacroResult(
                    success=True,
                    message=f'Food "{existing.name}" updated successfully',
                    food_id=existing.id,
                    warning=warning,
                )
            return FoodMacroResult(
                success=False,
                message=(
                    f'A similar food "{existing.name}" already exists in the database. '
                    "Use force_update=true to update it."
                ),
                food_id=existing.id,
            )

        food_id = _insert_food(conn, food)
    logger.info("food macro added: %s", food.name)
    return FoodMacroResult(
        success=True,
        message="Food added successfully to the storage",
        food_id=food_id,
        warning=warning,
    )


def bulk_add_food_macros(
    foods: List[FoodMacroCreate],
    *,
    skip_existing: bool = True,
    db_path: Path | None = None,
) -> BulkFoodMacroResponse:
    out = BulkFoodMacroResponse()
    with write_txn(_db(db_path)) as conn:
        for food in foods:
            existing = _find_by_name(conn, food.name)
            if existing and skip_existing:
                out.skipped += 1
                out.results.append(
                    FoodMacroResult(
                        success=False,
                        message=f'Food "{food.name}" already exists, skipping',
                        food_id=existing.id,
                    )
                )
                continue
            if existing:
                _update_food(conn, existing.id, food)
                out.updated += 1
                out.results.append(
                    FoodMacroResult(
                        success=True,
                        message=f'Food "{food.name}" updated successfully',
                        food_id=existing.id,
                    )
                )
                continue
            food_id = _insert_food(conn, food)
            out.added += 1
            out.results.append(
                FoodMacroResult(
                    success=True,
                    message=f'Food "{food.name}" added successfully',
                    food_id=food_id,
                    warning=_macro_warning(food),
                )
            )
    logger.info("bulk food macros: added=%d updated=%d skipped=%d", out.added, out.updated, out.skipped)
    return out


def list_food_macros(*, db_path: Path | None = None) -> List[FoodMacro]:
    with db_conn(_db(db_path)) as conn:
        rows = conn.execute("SELECT * FROM food_macros ORDER BY name").fetchall()
        return [_row_to_food(r) for r in rows]


def search_food_macros(term: str, *, db_path: Path | None = None) -> List[FoodMacro]:
    needle = (term or "").strip().lower()
    return [f for f in list_food_macros(db_path=db_path) if needle in f.name]


def categorize_all_foods(*, db_path: Path | None = None) -> CategorizeSummary:
    """Assign a category to every food that has none.

    Foods that already carry a category are reported as skipped and left alone,
    so running this again after a full pass changes nothing.
    """
    summary = CategorizeSummary()
    with write_txn(_db(db_path)) as conn:
        rows = conn.execute("SELECT * FROM food_macros ORDER BY name").fetchall()
        for row in rows:
            food = _row_to_food(row)
            if food.category:
                summary.results.append(
                    CategorizeResult(name=food.name, category=food.category, status=CategorizeStatus.skipped)
                )
                continue
            category = categorize_food(food.protein, food.carbs, food.fat)
            conn.execute("UPDATE food_macros SET category = ? WHERE id = ?", (category, food.id))
            summary.results.append(
                CategorizeResult(name=food.name, category=category, status=CategorizeStatus.updated)
            )

    summary.count = len(summary.results)
    summary.updated = sum(1 for r in summary.results if r.status is CategorizeStatus.updated)
    summary.skipped = summary.count - summary.updated
    logger.info("categorized foods: updated=%d skipped=%d", summary.updated, summary.skipped)
    return summary


def set_category_for_food(food_id: str, category: str, *, db_path: Path | None = None) -> FoodMacroResult:
    with write_txn(_db(db_path)) as conn:
        row = conn.execute("SELECT * FROM food_macros WHERE id = ?", (food_id,)).fetchone()
        if not row:
            raise FoodNotFoundError(food_id)
        conn.execute("UPDATE food_macros SET category = ? WHERE id = ?", (category, food_id))
    return FoodMacroResult(
        success=True,
        message=f'Category for "{row["name"]}" set to "{category}"',
        food_id=food_id,
    )


def get_foods_by_category(category: str, *, db_path: Path | None = None) -> List[FoodMacro]:
    with db_conn(_db(db_path)) as conn:
        rows = conn.execute(
            "SELECT * FROM food_macros WHERE category = ? ORDER BY name",
            (category,),
        ).fetchall()
        return [_row_to_food(r) for r in rows]


def get_foods_by_macro(macro: Macro, threshold: float = 0.0, *, db_path: Path | None = None) -> List[FoodMacro]:
    key = Macro(macro).value
    foods = [f for f in list_food_macros(db_path=db_path) if getattr(f, key) >= threshold]
    return sorted(foods, key=lambda f: getattr(f, key), reverse=True)
