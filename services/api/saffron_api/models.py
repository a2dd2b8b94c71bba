"""SQLAlchemy ORM models for Saffron.

Tables:
- recipe_categories: Named groupings used by the listing filter
- recipes: Published recipe content with active/archived status
- recipe_ingredients: Ordered ingredient lines for a recipe
- recipe_steps: Numbered instructions for a recipe
- admin_accounts: Credentials for the admin panel
- contact_messages: Messages submitted through the contact form
- static_pages: Keyed HTML content blocks (e.g. "about")
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import (
    String,
    DateTime,
    Text,
    Integer,
    ForeignKey,
    Index,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func
from sqlalchemy.types import JSON

from .db import Base


RECIPE_STATUSES = ("active", "archived")
SPICE_LEVELS = ("mild", "medium", "hot")


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RecipeCategory(Base):
    """Category a recipe can be filed under."""
    __tablename__ = "recipe_categories"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=generate_uuid
    )
    name: Mapped[str] = mapped_column(String(120), unique=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )

    recipes: Mapped[list["Recipe"]] = relationship("Recipe", back_populates="category")


class Recipe(Base):
    """Published recipe. Only `active` recipes are visible on the public site."""
    __tablename__ = "recipes"
    __table_args__ = (
        Index("ix_recipes_category_id", "recipe_category_id"),
        Index("ix_recipes_status_created", "status", "created_at"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=generate_uuid
    )
    recipe_category_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("recipe_categories.id", ondelete="SET NULL"), nullable=True
    )

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    cooking_time: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)  # minutes
    preparation_time: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)  # minutes
    servings: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    spice_level: Mapped[str] = mapped_column(String(20), nullable=False, default="")
    difficulty: Mapped[str] = mapped_column(String(20), nullable=False, default="")

    # Media
    main_image_url: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    additional_images: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    video_url: Mapped[str] = mapped_column(String(500), nullable=False, default="")

    chef_tips: Mapped[str] = mapped_column(Text, nullable=False, default="")
    nutritional_info: Mapped[str] = mapped_column(Text, nullable=False, default="")

    # Status: active | archived
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="active")

    # Public detail views, drives the "most_popular" sort
    view_count: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default=text("0")
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), onupdate=utcnow
    )

    # Relationships
    category: Mapped[Optional["RecipeCategory"]] = relationship(
        "RecipeCategory", back_populates="recipes"
    )
    ingredients: Mapped[list["RecipeIngredient"]] = relationship(
        "RecipeIngredient", back_populates="recipe", cascade="all, delete-orphan",
        order_by="RecipeIngredient.order_index"
    )
    steps: Mapped[list["RecipeStep"]] = relationship(
        "RecipeStep", back_populates="recipe", cascade="all, delete-orphan",
        order_by="RecipeStep.step_number"
    )

    @property
    def total_time(self) -> int:
        """Preparation plus cooking time, treating missing values as zero."""
        return (self.preparation_time or 0) + (self.cooking_time or 0)


class RecipeIngredient(Base):
    """Ingredient line within a recipe."""
    __tablename__ = "recipe_ingredients"
    __table_args__ = (
        Index("ix_recipe_ingredients_recipe_id", "recipe_id"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=generate_uuid
    )
    recipe_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False
    )

    ingredient_name: Mapped[str] = mapped_column(String(200), nullable=False)
    measurement: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    order_index: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    recipe: Mapped["Recipe"] = relationship("Recipe", back_populates="ingredients")


class RecipeStep(Base):
    """Numbered cooking step within a recipe."""
    __tablename__ = "recipe_steps"
    __table_args__ = (
        Index("ix_recipe_steps_recipe_id", "recipe_id"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=generate_uuid
    )
    recipe_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False
    )

    step_number: Mapped[int] = mapped_column(Integer, nullable=False)
    instruction: Mapped[str] = mapped_column(Text, nullable=False)
    media_url: Mapped[str] = mapped_column(String(500), nullable=False, default="")

    recipe: Mapped["Recipe"] = relationship("Recipe", back_populates="steps")


class AdminAccount(Base):
    """Admin panel login. Passwords are stored as PBKDF2 hashes (see services.auth)."""
    __tablename__ = "admin_accounts"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=generate_uuid
    )
    username: Mapped[str] = mapped_column(String(80), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )


class ContactMessage(Base):
    """Message submitted from the public contact form."""
    __tablename__ = "contact_messages"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=generate_uuid
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    subject: Mapped[str] = mapped_column(String(255), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )


class StaticPage(Base):
    """Server-held HTML content block keyed by page name."""
    __tablename__ = "static_pages"

    page_key: Mapped[str] = mapped_column(String(80), primary_key=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), onupdate=utcnow
    )
