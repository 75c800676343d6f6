# -*- coding: utf-8 -*-
"""Nutrition — Pydantic models."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class FoodMacro(BaseModel):
    id: str
    name: str
    calories: float = Field(0.0, ge=0)
    protein: float = Field(0.0, ge=0)
    carbs: float = Field(0.0, ge=0)
    fat: float = Field(0.0, ge=0)
    category: Optional[str] = None


class FoodMacroCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    calories: float = Field(..., ge=0)
    protein: float = Field(..., ge=0, description="grams")
    carbs: float = Field(..., ge=0, description="grams")
    fat: float = Field(..., ge=0, description="grams")
    category: Optional[str] = None
    force_update: bool = False

    @field_validator("name")
    @classmethod
    def _normalize_name(cls, value: str) -> str:
        normalized = value.strip().lower()
        if not normalized:
            raise ValueError("Food name cannot be empty")
        return normalized


class FoodMacroResult(BaseModel):
    success: bool
    message: str
    food_id: Optional[str] = None
    warning: Optional[str] = None


class BulkFoodMacroRequest(BaseModel):
    foods: List[FoodMacroCreate] = Field(default_factory=list)
    skip_existing: bool = True


class BulkFoodMacroResponse(BaseModel):
    added: int = 0
    updated: int = 0
    skipped: int = 0
    results: List[FoodMacroResult] = Field(default_factory=list)


class CategorizeStatus(str, Enum):
    updated = "updated"
    skipped = "skipped"


class CategorizeResult(BaseModel):
    name: str
    category: str
    status: CategorizeStatus


class CategorizeSummary(BaseModel):
    success: bool = True
    count: int = 0
    updated: int = 0
    skipped: int = 0
    results: List[CategorizeResult] = Field(default_factory=list)


class SetCategoryRequest(BaseModel):
    category: str = Field(..., min_length=1, max_length=64)


class Macro(str, Enum):
    protein = "protein"
    carbs = "carbs"
    fat = "fat"
