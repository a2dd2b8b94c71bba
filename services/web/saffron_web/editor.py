"""Editable recipe draft backing the admin recipe editor."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .errors import FormValidationError
from .models import Ingredient, Recipe, Step

REQUIRED_FIELDS = ("title", "description")


@dataclass
class RecipeDraft:
    title: str = ""
    description: str = ""
    recipe_category_id: str = ""
    cooking_time: int = 0
    preparation_time: int = 0
    servings: int = 0
    spice_level: str = ""
    difficulty: str = ""
    main_image_url: str = ""
    additional_images: List[str] = field(default_factory=list)
    video_url: str = ""
    chef_tips: str = ""
    nutritional_info: str = ""
    status: str = "active"
    ingredients: List[Ingredient] = field(default_factory=list)
    steps: List[Step] = field(default_factory=list)

    # Suggested values for the next "add" row
    next_order_index: int = 1

    @classmethod
    def from_recipe(cls, recipe: Recipe) -> "RecipeDraft":
        ingredients = list(recipe.ingredients)
        return cls(
            title=recipe.title,
            description=recipe.description,
            recipe_category_id=recipe.recipe_category_id or "",
            cooking_time=recipe.cooking_time or 0,
            preparation_time=recipe.preparation_time or 0,
            servings=recipe.servings or 0,
            spice_level=recipe.spice_level,
            difficulty=recipe.difficulty,
            main_image_url=recipe.main_image_url,
            additional_images=list(recipe.additional_images),
            video_url=recipe.video_url,
            chef_tips=recipe.chef_tips,
            nutritional_info=recipe.nutritional_info,
            status=recipe.status,
            ingredients=ingredients,
            steps=list(recipe.steps),
            next_order_index=max((i.order_index for i in ingredients), default=0) + 1,
        )

    @property
    def next_step_number(self) -> int:
        return max((s.step_number for s in self.steps), default=0) + 1

    # --- images ---

    def add_image(self, url: str) -> bool:
        url = url.strip()
        if not url:
            return False
        self.additional_images.append(url)
        return True

    def remove_image(self, index: int) -> None:
        if 0 <= index < len(self.additional_images):
            del self.additional_images[index]

    # --- ingredients ---

    def add_ingredient(self, ingredient_name: str, measurement: str = "", order_index: Optional[int] = None) -> bool:
        """Append an ingredient. A blank name is ignored."""
        if not ingredient_name.strip():
            return False
        index = self.next_order_index if order_index is None else order_index
        self.ingredients.append(Ingredient(
            ingredient_name=ingredient_name.strip(), measurement=measurement.strip(), order_index=index
        ))
        self.next_order_index = index + 1
        return True

    def update_ingredient(self, index: int, **changes) -> None:
        self.ingredients[index] = self.ingredients[index].model_copy(update=changes)

    def remove_ingredient(self, index: int) -> None:
        if 0 <= index < len(self.ingredients):
            del self.ingredients[index]

    # --- steps ---

    def add_step(self, instruction: str, media_url: str = "") -> bool:
        if not instruction.strip():
            return False
        self.steps.append(Step(
            step_number=self.next_step_number, instruction=instruction.strip(), media_url=media_url.strip()
        ))
        return True

    def update_step(self, index: int, **changes) -> None:
        self.steps[index] = self.steps[index].model_copy(update=changes)

    def remove_step(self, index: int) -> None:
        """Drop a step and renumber the rest from 1."""
        if 0 <= index < len(self.steps):
            del self.steps[index]
            self.steps = [
                step.model_copy(update={"step_number": number})
                for number, step in enumerate(self.steps, start=1)
            ]

    # --- submit ---

    def validate(self) -> None:
        errors = {
            name: f"{name.replace('_', ' ').capitalize()} is required"
            for name in REQUIRED_FIELDS
            if not getattr(self, name).strip()
        }
        if errors:
            raise FormValidationError(errors)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "title": self.title.strip(),
            "description": self.description.strip(),
            "recipe_category_id": self.recipe_category_id,
            "cooking_time": self.cooking_time,
            "preparation_time": self.preparation_time,
            "servings": self.servings,
            "spice_level": self.spice_level,
            "difficulty": self.difficulty,
            "main_image_url": self.main_image_url,
            "additional_images": list(self.additional_images),
            "video_url": self.video_url,
            "chef_tips": self.chef_tips,
            "nutritional_info": self.nutritional_info,
            "status": self.status,
            "ingredients": [i.model_dump() for i in self.ingredients],
            "steps": [s.model_dump() for s in self.steps],
        }
