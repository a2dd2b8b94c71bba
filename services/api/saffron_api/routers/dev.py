"""Dev-only endpoints for seeding demo content.

Endpoints:
- POST /api/dev/seed - Create categories, sample recipes, the about page
  and (when configured) the bootstrap admin account
"""

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import Recipe, RecipeCategory, RecipeIngredient, RecipeStep, StaticPage
from ..services.accounts import ensure_bootstrap_admin

router = APIRouter()
logger = logging.getLogger("saffron.dev")


class SeedResponse(BaseModel):
    categories_created: int
    recipes_created: int
    pages_created: int
    admin_created: bool
    message: str


SEED_CATEGORIES = ["Curries", "Street Food", "Desserts"]

SEED_PAGES = {
    "about": {
        "title": "About Saffron",
        "content": "<p>Saffron collects home-tested recipes from our kitchen to yours.</p>",
    },
}

# Sample recipes shown on a fresh install
SEED_RECIPES = [
    {
        "title": "Chicken Tikka Masala",
        "category": "Curries",
        "description": "Charred yoghurt-marinated chicken in a creamy tomato sauce.",
        "cooking_time": 35,
        "preparation_time": 20,
        "servings": 4,
        "spice_level": "medium",
        "difficulty": "medium",
        "chef_tips": "Marinate overnight for the most tender chicken.",
        "ingredients": [
            ("Chicken thighs", "600 g"),
            ("Plain yoghurt", "150 ml"),
            ("Garam masala", "2 tsp"),
            ("Crushed tomatoes", "400 g"),
            ("Double cream", "100 ml"),
        ],
        "steps": [
            "Marinate the chicken in yoghurt and half the spices.",
            "Grill the chicken until charred at the edges.",
            "Simmer tomatoes with the remaining spices, then stir in cream.",
            "Fold in the chicken and simmer for 10 minutes.",
        ],
    },
    {
        "title": "Pani Puri",
        "category": "Street Food",
        "description": "Crisp shells filled with spiced potato and tangy mint water.",
        "cooking_time": 10,
        "preparation_time": 30,
        "servings": 6,
        "spice_level": "hot",
        "difficulty": "easy",
        "chef_tips": "Fill the shells just before serving so they stay crisp.",
        "ingredients": [
            ("Puri shells", "30"),
            ("Boiled potatoes", "3"),
            ("Mint leaves", "1 cup"),
            ("Tamarind chutney", "4 tbsp"),
        ],
        "steps": [
            "Blend mint, chilli and water into a sharp green water.",
            "Mash the potatoes with chaat masala.",
            "Crack each shell, fill with potato and spoon in the water.",
        ],
    },
    {
        "title": "Mango Lassi",
        "category": "Desserts",
        "description": "Chilled yoghurt drink blended with ripe mango and cardamom.",
        "cooking_time": 0,
        "preparation_time": 5,
        "servings": 2,
        "spice_level": "mild",
        "difficulty": "easy",
        "chef_tips": "Use Alphonso mango pulp when fresh mangoes are out of season.",
        "ingredients": [
            ("Mango pulp", "1 cup"),
            ("Plain yoghurt", "1 cup"),
            ("Cardamom", "1 pinch"),
        ],
        "steps": [
            "Blend everything with a handful of ice until smooth.",
        ],
    },
]


@router.post("/dev/seed", response_model=SeedResponse)
def seed_dev_data(db: Session = Depends(get_db)):
    """Seed demo data.

    Idempotent: categories, pages and recipes are matched by name, key and
    title, so running it again creates nothing new.
    """
    categories = {c.name: c for c in db.query(RecipeCategory).all()}
    categories_created = 0
    for name in SEED_CATEGORIES:
        if name in categories:
            continue
        category = RecipeCategory(name=name)
        db.add(category)
        categories[name] = category
        categories_created += 1
    db.flush()

    pages_created = 0
    for key, page in SEED_PAGES.items():
        if db.get(StaticPage, key) is None:
            db.add(StaticPage(page_key=key, title=page["title"], content=page["content"]))
            pages_created += 1

    recipes_created = 0
    for data in SEED_RECIPES:
        if db.query(Recipe).filter(Recipe.title == data["title"]).first():
            continue

        recipe = Recipe(
            title=data["title"],
            description=data["description"],
            recipe_category_id=categories[data["category"]].id,
            cooking_time=data["cooking_time"],
            preparation_time=data["preparation_time"],
            servings=data["servings"],
            spice_level=data["spice_level"],
            difficulty=data["difficulty"],
            chef_tips=data["chef_tips"],
            status="active",
        )
        recipe.ingredients = [
            RecipeIngredient(ingredient_name=name, measurement=measurement, order_index=i + 1)
            for i, (name, measurement) in enumerate(data["ingredients"])
        ]
        recipe.steps = [
            RecipeStep(step_number=i + 1, instruction=instruction)
            for i, instruction in enumerate(data["steps"])
        ]
        db.add(recipe)
        recipes_created += 1

    db.commit()
    admin = ensure_bootstrap_admin(db)

    logger.info(
        f"Seeded {categories_created} categories, {recipes_created} recipes, {pages_created} pages"
    )
    return SeedResponse(
        categories_created=categories_created,
        recipes_created=recipes_created,
        pages_created=pages_created,
        admin_created=admin is not None,
        message=f"Created {recipes_created} new recipes. Total recipes: {db.query(Recipe).count()}",
    )
