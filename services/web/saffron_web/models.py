"""Response and payload shapes exchanged with the Saffron API."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class RecipeCategory(BaseModel):
    id: str
    name: str


class Ingredient(BaseModel):
    ingredient_name: str
    measurement: str = ""
    order_index: int = 0


class Step(BaseModel):
    step_number: int
    instruction: str
    media_url: str = ""


class RecipeSummary(BaseModel):
    id: str
    title: str
    description: str = ""
    recipe_category_id: Optional[str] = None
    main_image_url: str = ""
    cooking_time: Optional[int] = None
    preparation_time: Optional[int] = None
    spice_level: str = ""
    difficulty: str = ""
    created_at: Optional[datetime] = None

    @property
    def total_time(self) -> Optional[int]:
        if self.cooking_time is None and self.preparation_time is None:
            return None
        return (self.cooking_time or 0) + (self.preparation_time or 0)


class Recipe(RecipeSummary):
    servings: Optional[int] = None
    additional_images: list[str] = Field(default_factory=list)
    video_url: str = ""
    chef_tips: str = ""
    nutritional_info: str = ""
    status: str = "active"
    updated_at: Optional[datetime] = None
    ingredients: list[Ingredient] = Field(default_factory=list)
    steps: list[Step] = Field(default_factory=list)


class RecipePage(BaseModel):
    items: list[RecipeSummary]
    page: int
    limit: int
    total: int
    total_pages: int
    has_more: bool


class AdminRecipeSummary(BaseModel):
    id: str
    title: str
    status: str
    recipe_category_id: Optional[str] = None
    view_count: int = 0
    created_at: datetime
    updated_at: datetime


class RecipeStats(BaseModel):
    total: int = 0
    active: int = 0
    archived: int = 0


class StaticPage(BaseModel):
    page_key: str
    title: str
    content: str = ""
    updated_at: Optional[datetime] = None


class LoginResult(BaseModel):
    token: str
    admin_id: str
    username: str


class ContactMessage(BaseModel):
    name: str
    email: str
    subject: str
    message: str
