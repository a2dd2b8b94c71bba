"""Admin API router. Every route except login requires a bearer token.

Endpoints:
- POST /api/admin/login - Exchange credentials for a bearer token
- GET /api/admin/recipes - All recipes (any status), newest first
- GET /api/admin/recipe_stats - Recipe counts by status
- POST /api/admin/recipes - Create recipe with ingredients and steps
- GET /api/admin/recipes/{id} - Recipe detail (any status)
- PUT /api/admin/recipes/{id} - Replace recipe, ingredients and steps
- DELETE /api/admin/recipes/{id} - Delete recipe and its children
- POST /api/admin/recipe_categories - Create a category
- PUT /api/admin/static_pages/{key} - Create or replace a static page
- GET /api/admin/contact/messages - Received contact messages
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from sqlalchemy import func, or_
from sqlalchemy.orm import Session, selectinload

from ..db import get_db
from ..deps import get_current_admin
from ..models import (
    AdminAccount,
    ContactMessage,
    Recipe,
    RecipeCategory,
    RecipeIngredient,
    RecipeStep,
    StaticPage,
)
from ..ratelimit import limiter
from ..realtime.recipe_bus import publish_recipe_event_sync
from ..schemas import (
    AdminRecipeSummaryOut,
    ContactMessageOut,
    LoginRequest,
    LoginResponse,
    RecipeCategoryCreate,
    RecipeCategoryOut,
    RecipeIn,
    RecipeOut,
    RecipeStatsOut,
    RecipeStatus,
    StaticPageIn,
    StaticPageOut,
)
from ..services.auth import issue_token, verify_password
from ..settings import settings

router = APIRouter()
logger = logging.getLogger("saffron.admin")

# Scalar columns copied verbatim from a RecipeIn payload
RECIPE_FIELDS = (
    "title",
    "description",
    "recipe_category_id",
    "cooking_time",
    "preparation_time",
    "servings",
    "spice_level",
    "difficulty",
    "main_image_url",
    "additional_images",
    "video_url",
    "chef_tips",
    "nutritional_info",
    "status",
)


# --- Auth ---

@router.post("/admin/login", response_model=LoginResponse)
@limiter.limit(settings.login_rate_limit)
def login(request: Request, payload: LoginRequest, db: Session = Depends(get_db)):
    """Exchange username (or email) and password for a bearer token."""
    identifier = (payload.username or payload.email or "").strip()
    admin = (
        db.query(AdminAccount)
        .filter(or_(AdminAccount.username == identifier, AdminAccount.email == identifier))
        .first()
    )
    if not admin or not verify_password(payload.password, admin.password_hash):
        logger.info(f"Failed admin login for {identifier!r}")
        raise HTTPException(status_code=401, detail="Invalid credentials")

    logger.info(f"Admin {admin.username} logged in")
    return LoginResponse(
        token=issue_token(admin.id, admin.username),
        admin_id=admin.id,
        username=admin.username,
    )


# --- Recipes ---

def _get_recipe_or_404(db: Session, recipe_id: str) -> Recipe:
    recipe = (
        db.query(Recipe)
        .options(selectinload(Recipe.ingredients), selectinload(Recipe.steps))
        .filter(Recipe.id == recipe_id)
        .first()
    )
    if not recipe:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return recipe


def _check_category(db: Session, category_id: Optional[str]) -> None:
    if category_id and db.get(RecipeCategory, category_id) is None:
        raise HTTPException(status_code=422, detail=f"Unknown recipe category '{category_id}'")


def _apply_payload(recipe: Recipe, payload: RecipeIn) -> None:
    """Copy scalar fields and replace ingredient/step children wholesale."""
    for field in RECIPE_FIELDS:
        setattr(recipe, field, getattr(payload, field))

    recipe.ingredients = [
        RecipeIngredient(
            ingredient_name=item.ingredient_name.strip(),
            measurement=item.measurement.strip(),
            order_index=item.order_index,
        )
        for item in payload.ingredients
    ]
    recipe.steps = [
        RecipeStep(
            step_number=step.step_number,
            instruction=step.instruction.strip(),
            media_url=step.media_url.strip(),
        )
        for step in payload.steps
    ]


@router.get("/admin/recipes", response_model=list[AdminRecipeSummaryOut])
def admin_list_recipes(
    db: Session = Depends(get_db),
    admin: AdminAccount = Depends(get_current_admin),
    limit: int = Query(100, ge=1, le=100),
    offset: int = Query(0, ge=0),
    status: Optional[RecipeStatus] = Query(None),
):
    query = db.query(Recipe)
    if status:
        query = query.filter(Recipe.status == status)
    return (
        query
        .order_by(Recipe.created_at.desc(), Recipe.id)
        .offset(offset)
        .limit(limit)
        .all()
    )


@router.get("/admin/recipe_stats", response_model=RecipeStatsOut)
def admin_recipe_stats(
    db: Session = Depends(get_db),
    admin: AdminAccount = Depends(get_current_admin),
):
    counts = dict(db.query(Recipe.status, func.count(Recipe.id)).group_by(Recipe.status).all())
    return RecipeStatsOut(
        total=sum(counts.values()),
        active=counts.get("active", 0),
        archived=counts.get("archived", 0),
    )


@router.post("/admin/recipes", response_model=RecipeOut, status_code=201)
def admin_create_recipe(
    payload: RecipeIn,
    db: Session = Depends(get_db),
    admin: AdminAccount = Depends(get_current_admin),
):
    """Create a recipe with its ingredients and steps."""
    _check_category(db, payload.recipe_category_id)

    recipe = Recipe()
    _apply_payload(recipe, payload)
    db.add(recipe)
    db.commit()

    recipe = _get_recipe_or_404(db, recipe.id)
    logger.info(f"Admin {admin.username} created recipe {recipe.id}")
    publish_recipe_event_sync("recipe_created", recipe.id)
    return recipe


@router.get("/admin/recipes/{recipe_id}", response_model=RecipeOut)
def admin_get_recipe(
    recipe_id: str,
    db: Session = Depends(get_db),
    admin: AdminAccount = Depends(get_current_admin),
):
    return _get_recipe_or_404(db, recipe_id)


@router.put("/admin/recipes/{recipe_id}", response_model=RecipeOut)
def admin_update_recipe(
    recipe_id: str,
    payload: RecipeIn,
    db: Session = Depends(get_db),
    admin: AdminAccount = Depends(get_current_admin),
):
    """Replace a recipe. Ingredients and steps are replaced, not merged."""
    recipe = _get_recipe_or_404(db, recipe_id)
    _check_category(db, payload.recipe_category_id)

    _apply_payload(recipe, payload)
    db.commit()
    db.expire_all()

    recipe = _get_recipe_or_404(db, recipe_id)
    logger.info(f"Admin {admin.username} updated recipe {recipe_id}")
    publish_recipe_event_sync("recipe_updated", recipe_id)
    return recipe


@router.delete("/admin/recipes/{recipe_id}", status_code=204)
def admin_delete_recipe(
    recipe_id: str,
    db: Session = Depends(get_db),
    admin: AdminAccount = Depends(get_current_admin),
):
    recipe = _get_recipe_or_404(db, recipe_id)
    db.delete(recipe)
    db.commit()

    logger.info(f"Admin {admin.username} deleted recipe {recipe_id}")
    publish_recipe_event_sync("recipe_deleted", recipe_id)
    return Response(status_code=204)


# --- Categories / static pages / messages ---

@router.post("/admin/recipe_categories", response_model=RecipeCategoryOut, status_code=201)
def admin_create_category(
    payload: RecipeCategoryCreate,
    db: Session = Depends(get_db),
    admin: AdminAccount = Depends(get_current_admin),
):
    name = payload.name.strip()
    if db.query(RecipeCategory).filter(RecipeCategory.name == name).first():
        raise HTTPException(status_code=409, detail=f"Category '{name}' already exists")

    category = RecipeCategory(name=name)
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


@router.put("/admin/static_pages/{page_key}", response_model=StaticPageOut)
def admin_put_static_page(
    page_key: str,
    payload: StaticPageIn,
    db: Session = Depends(get_db),
    admin: AdminAccount = Depends(get_current_admin),
):
    page = db.get(StaticPage, page_key)
    if page is None:
        page = StaticPage(page_key=page_key)
        db.add(page)
    page.title = payload.title
    page.content = payload.content
    db.commit()
    db.refresh(page)
    return page


@router.get("/admin/contact/messages", response_model=list[ContactMessageOut])
def admin_list_contact_messages(
    db: Session = Depends(get_db),
    admin: AdminAccount = Depends(get_current_admin),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
):
    return (
        db.query(ContactMessage)
        .order_by(ContactMessage.created_at.desc(), ContactMessage.id)
        .offset(offset)
        .limit(limit)
        .all()
    )
