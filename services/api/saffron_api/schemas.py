"""Pydantic schemas for the Saffron API.

Request/response models for:
- Recipe categories
- Recipes (with nested ingredients and steps), public and admin shapes
- Admin auth
- Contact messages
- Static pages
"""

import re
from datetime import datetime
from typing import Optional, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")

SortOption = Literal["latest", "most_popular", "quickest"]
RecipeStatus = Literal["active", "archived"]
SpiceLevel = Literal["", "mild", "medium", "hot"]


# --- Recipe Category ---

class RecipeCategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)


class RecipeCategoryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str


# --- Ingredient / Step ---

class IngredientIn(BaseModel):
    ingredient_name: str = Field(..., min_length=1, max_length=200)
    measurement: str = Field("", max_length=120)
    order_index: int = Field(0, ge=0)


class IngredientOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    ingredient_name: str
    measurement: str
    order_index: int


class StepIn(BaseModel):
    step_number: int = Field(..., ge=1)
    instruction: str = Field(..., min_length=1)
    media_url: str = Field("", max_length=500)


class StepOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    step_number: int
    instruction: str
    media_url: str


# --- Recipe ---

class RecipeIn(BaseModel):
    """Full recipe payload used by admin create and replace (PUT)."""
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    recipe_category_id: Optional[str] = None
    cooking_time: Optional[int] = Field(None, ge=0)
    preparation_time: Optional[int] = Field(None, ge=0)
    servings: Optional[int] = Field(None, ge=0)
    spice_level: SpiceLevel = ""
    difficulty: str = Field("", max_length=20)
    main_image_url: str = Field("", max_length=500)
    additional_images: list[str] = []
    video_url: str = Field("", max_length=500)
    chef_tips: str = ""
    nutritional_info: str = ""
    status: RecipeStatus = "active"
    ingredients: list[IngredientIn] = []
    steps: list[StepIn] = []

    @field_validator("recipe_category_id", mode="before")
    @classmethod
    def _blank_category_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("additional_images")
    @classmethod
    def _drop_blank_images(cls, v: list[str]) -> list[str]:
        return [url.strip() for url in v if url and url.strip()]


class RecipeSummaryOut(BaseModel):
    """Card shape used by the public listing, landing and related lists."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str
    recipe_category_id: Optional[str]
    main_image_url: str
    cooking_time: Optional[int]
    preparation_time: Optional[int]
    spice_level: str
    difficulty: str
    created_at: datetime


class RecipeOut(RecipeSummaryOut):
    servings: Optional[int]
    additional_images: list[str] = []
    video_url: str
    chef_tips: str
    nutritional_info: str
    status: str
    updated_at: datetime
    ingredients: list[IngredientOut] = []
    steps: list[StepOut] = []


class RecipePage(BaseModel):
    """One page of the public listing with an authoritative total."""
    items: list[RecipeSummaryOut]
    page: int
    limit: int
    total: int
    total_pages: int
    has_more: bool


class AdminRecipeSummaryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    status: str
    recipe_category_id: Optional[str]
    view_count: int
    created_at: datetime
    updated_at: datetime


class RecipeStatsOut(BaseModel):
    total: int
    active: int
    archived: int


# --- Admin Auth ---

class LoginRequest(BaseModel):
    username: Optional[str] = None
    email: Optional[str] = None
    password: str = Field(..., min_length=1)

    @model_validator(mode="after")
    def _require_identifier(self):
        if not (self.username or self.email):
            raise ValueError("username or email is required")
        return self


class LoginResponse(BaseModel):
    token: str
    admin_id: str
    username: str


# --- Contact ---

class ContactMessageCreate(BaseModel):
    name: str = Field(..., max_length=200)
    email: str = Field(..., max_length=255)
    subject: str = Field(..., max_length=255)
    message: str

    @field_validator("name", "subject", "message")
    @classmethod
    def _required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("is required")
        return v.strip()

    @field_validator("email")
    @classmethod
    def _valid_email(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("is required")
        if not EMAIL_PATTERN.search(v):
            raise ValueError("invalid email address")
        return v


class ContactMessageOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    subject: str
    message: str
    created_at: datetime


# --- Static Pages ---

class StaticPageIn(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    content: str = ""


class StaticPageOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    page_key: str
    title: str
    content: str
    updated_at: datetime
