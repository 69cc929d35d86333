"""
Database models for Recipe Pal.

Import all models here so Alembic can detect them for migrations.
"""

from app.database import Base
from app.models.user import User
from app.models.session import Session
from app.models.recipe import Recipe
from app.models.ingredient import Ingredient
from app.models.tag import Tag
from app.models.recipe_tag import RecipeTag

__all__ = [
    "Base",
    "User",
    "Session",
    "Recipe",
    "Ingredient",
    "Tag",
    "RecipeTag",
]
