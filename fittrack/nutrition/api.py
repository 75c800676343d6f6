# -*- coding: utf-8 -*-
"""Nutrition — food macro API endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, HTTPException, Query

from .models import (
    BulkFoodMacroRequest,
    BulkFoodMacroResponse,
    CategorizeSummary,
    FoodMacro,
    FoodMacroCreate,
    FoodMacroResult,
    Macro,
    SetCategoryRequest,
)
from .storage import (
    FoodNotFoundError,
    add_food_macro,
    bulk_add_food_macros,
    categorize_all_foods,
    get_foods_by_category,
    get_foods_by_macro,
    list_food_macros,
    search_food_macros,
    set_category_for_food,
)

router = APIRouter(prefix="/api/nutrition/foods", tags=["Nutrition"])


@router.post("", response_model=FoodMacroResult, summary="Add (or force-update) a food macro entry")
def food_add(request: FoodMacroCreate):
    result = add_food_macro(request)
    if not result.success:
        raise HTTPException(status_code=409, detail=result.message)
    return result


@router.post("/bulk", response_model=BulkFoodMacroResponse, summary="Add many food macro entries")
def food_bulk_add(request: BulkFoodMacroRequest):
    return bulk_add_food_macros(request.foods, skip_existing=request.skip_existing)


@router.get("", response_model=List[FoodMacro], summary="All food macro entries")
def food_list():
    return list_food_macros()


@router.get("/search", response_model=List[FoodMacro], summary="Search foods by name")
def food_search(term: str = Query(..., min_length=1)):
    return search_food_macros(term)


@router.post("/categorize", response_model=CategorizeSummary, summary="Categorize every uncategorized food")
def food_categorize():
    return categorize_all_foods()


@router.put("/{food_id}/category", response_model=FoodMacroResult, summary="Set a food's category")
def food_set_category(food_id: str, request: SetCategoryRequest):
    try:
        return set_category_for_food(food_id, request.category)
    except FoodNotFoundError:
        raise HTTPException(status_code=404, detail="Food not found")


@router.get("/by-category/{category}", response_model=List[FoodMacro], summary="Foods in a category")
def food_by_category(category: str):
    return get_foods_by_category(category)


@router.get("/by-macro/{macro}", response_model=List[FoodMacro], summary="Foods rich in a macro")
def food_by_macro(macro: Macro, threshold: float = Query(0.0, ge=0)):
    return get_foods_by_macro(macro, threshold)
