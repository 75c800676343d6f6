# -*- coding: utf-8 -*-
"""Food category from macro composition."""

from __future__ import annotations

from enum import Enum

PROTEIN_KCAL_PER_G = 4
CARBS_KCAL_PER_G = 4
FAT_KCAL_PER_G = 9

PROTEIN_SHARE_MIN = 0.4
CARBS_SHARE_MIN = 0.5
FAT_SHARE_MIN = 0.5


class FoodCategory(str, Enum):
    protein = "protein"
    carbs = "carbs"
    fat = "fat"
    balanced = "balanced"
    other = "other"


def macro_calories(protein: float, carbs: float, fat: float) -> float:
    return protein * PROTEIN_KCAL_PER_G + carbs * CARBS_KCAL_PER_G + fat * FAT_KCAL_PER_G


def categorize_food(protein: float, carbs: float, fat: float) -> str:
    """Category of a food by each macro's share of its calories.

    Checked in order, first match wins: protein >= 40%, carbs >= 50%,
    fat >= 50%, otherwise ``balanced``. Zero calories gives ``other``.
    """
    total = macro_calories(protein, carbs, fat)
    if total == 0:
        return FoodCategory.other.value

    if protein * PROTEIN_KCAL_PER_G / total >= PROTEIN_SHARE_MIN:
        return FoodCategory.protein.value
    if carbs * CARBS_KCAL_PER_G / total >= CARBS_SHARE_MIN:
        return FoodCategory.carbs.value
    if fat * FAT_KCAL_PER_G / total >= FAT_SHARE_MIN:
        return FoodCategory.fat.value
    return FoodCategory.balanced.value
