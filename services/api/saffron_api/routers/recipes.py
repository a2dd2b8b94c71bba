"""Public recipe catalog API router.

Endpoints:
- GET /api/recipes - Paginated listing of active recipes with filters and sort
- GET /api/recipes/{id} - Active recipe with ordered ingredients and steps
- GET /api/recipes/{id}/related - Other active recipes in the same category
"""

import logging
import math
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import func, or_
from sqlalchemy.orm import Session, Query as OrmQuery, selectinload

from ..db import get_db
from ..models import Recipe
from ..schemas import RecipeOut, RecipePage, RecipeSummaryOut, SortOption

router = APIRouter()
logger = logging.getLogger("saffron.recipes")


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def apply_recipe_sort(query: OrmQuery, sort: str) -> OrmQuery:
    """Order a recipe query by one of the listing sort options."""
    if sort == "most_popular":
        return query.order_by(Recipe.view_count.desc(), Recipe.created_at.desc(), Recipe.id)
    if sort == "quickest":
        total_time = func.coalesce(Recipe.preparation_time, 0) + func.coalesce(Recipe.cooking_time, 0)
        return query.order_by(total_time.asc(), Recipe.created_at.desc(), Recipe.id)
    return query.order_by(Recipe.created_at.desc(), Recipe.id)


def _get_active_recipe(db: Session, recipe_id: str) -> Recipe:
    recipe = (
        db.query(Recipe)
        .options(selectinload(Recipe.ingredients), selectinload(Recipe.steps))
        .filter(Recipe.id == recipe_id, Recipe.status == "active")
        .first()
    )
    if not recipe:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return recipe


@router.get("/recipes", response_model=RecipePage)
def list_recipes(
    db: Session = Depends(get_db),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    spice_level: Optional[str] = Query(None),
    recipe_category_id: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    sort: SortOption = Query("latest"),
):
    """List active recipes. `total` is exact so clients can page without guessing."""
    query = db.query(Recipe).filter(Recipe.status == "active")

    spice_level = _blank_to_none(spice_level)
    if spice_level:
        query = query.filter(Recipe.spice_level == spice_level)

    recipe_category_id = _blank_to_none(recipe_category_id)
    if recipe_category_id:
        query = query.filter(Recipe.recipe_category_id == recipe_category_id)

    search = _blank_to_none(search)
    if search:
        search_pattern = f"%{search}%"
        query = query.filter(
            or_(
                Recipe.title.ilike(search_pattern),
                Recipe.description.ilike(search_pattern),
            )
        )

    total = query.count()
    recipes = (
        apply_recipe_sort(query, sort)
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )

    return RecipePage(
        items=[RecipeSummaryOut.model_validate(r) for r in recipes],
        page=page,
        limit=limit,
        total=total,
        total_pages=math.ceil(total / limit),
        has_more=page * limit < total,
    )


@router.get("/recipes/{recipe_id}", response_model=RecipeOut)
def get_recipe(recipe_id: str, db: Session = Depends(get_db)):
    """Get a published recipe and count the view."""
    recipe = _get_active_recipe(db, recipe_id)
    # Views must not bump updated_at, so write the counter directly
    db.query(Recipe).filter(Recipe.id == recipe.id).update(
        {Recipe.view_count: Recipe.view_count + 1, Recipe.updated_at: Recipe.updated_at},
        synchronize_session=False,
    )
    db.commit()
    db.refresh(recipe)
    return recipe


@router.get("/recipes/{recipe_id}/related", response_model=list[RecipeSummaryOut])
def get_related_recipes(
    recipe_id: str,
    db: Session = Depends(get_db),
    limit: int = Query(4, ge=1, le=20),
):
    """Other active recipes filed under the same category."""
    recipe = _get_active_recipe(db, recipe_id)
    if not recipe.recipe_category_id:
        return []

    return (
        db.query(Recipe)
        .filter(
            Recipe.status == "active",
            Recipe.recipe_category_id == recipe.recipe_category_id,
            Recipe.id != recipe.id,
        )
        .order_by(Recipe.created_at.desc(), Recipe.id)
        .limit(limit)
        .all()
    )
