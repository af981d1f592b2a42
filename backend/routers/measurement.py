from typing import List

from fastapi import APIRouter, HTTPException, Query, status

from core.measurement import (
    ITEM_CATEGORIES,
    container_types_for,
    content_units_for,
    default_container_type,
    default_content_unit,
    is_valid_content_unit,
)
from schemas.inventory import CategoryVocabulary, UnitCheck

router = APIRouter()


def _vocabulary(category: str) -> CategoryVocabulary:
    return CategoryVocabulary(
        category=category,
        content_units=list(content_units_for(category)),
        container_types=list(container_types_for(category)),
        default_content_unit=default_content_unit(category),
        default_container_type=default_container_type(category),
    )


@router.get("/categories", response_model=List[CategoryVocabulary])
async def list_categories():
    """Units and container types for every item category"""
    return [_vocabulary(c) for c in ITEM_CATEGORIES]


@router.get("/categories/{category}", response_model=CategoryVocabulary)
async def get_category(category: str):
    if category not in ITEM_CATEGORIES:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown category '{category}'"
        )
    return _vocabulary(category)


@router.get("/validate-unit", response_model=UnitCheck)
async def validate_unit(category: str = Query(...), unit: str = Query("")):
    """Check a user-entered content unit against the category's vocabulary"""
    return UnitCheck(category=category, unit=unit, valid=is_valid_content_unit(category, unit))
