"""Public catalog content: recipe categories and static pages."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import RecipeCategory, StaticPage
from ..schemas import RecipeCategoryOut, StaticPageOut

router = APIRouter()


@router.get("/recipe_categories", response_model=list[RecipeCategoryOut])
def list_recipe_categories(db: Session = Depends(get_db)):
    return db.query(RecipeCategory).order_by(RecipeCategory.name).all()


@router.get("/static_pages/{page_key}", response_model=StaticPageOut)
def get_static_page(page_key: str, db: Session = Depends(get_db)):
    page = db.get(StaticPage, page_key)
    if not page:
        raise HTTPException(status_code=404, detail=f"Static page '{page_key}' not found")
    return page
