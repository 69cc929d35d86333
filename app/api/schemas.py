"""
Pydantic request/response models for the JSON API.

Keys are camelCase on the wire (prepTime, createdAt, ...) and snake_case in
Python; both spellings are accepted on input.
"""

from datetime import datetime
from typing import Annotated, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.services.ingredient_service import IngredientLine
from app.services.recipe_service import INT_MAX, TITLE_MAX_LENGTH, RecipeFields
from app.services.tag_service import TAG_MAX_LENGTH


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# --- Auth ---


class RegisterRequest(CamelModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)
    name: Optional[str] = None


class LoginRequest(CamelModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserRead(CamelModel):
    id: UUID
    email: str
    name: Optional[str] = None


class AuthResponse(CamelModel):
    token: str
    user: UserRead


class MessageResponse(CamelModel):
    message: str


# --- Recipes ---


class IngredientCreate(IngredientLine):
    model_config = CamelModel.model_config


class IngredientRead(CamelModel):
    id: int
    name: str
    amount: float
    unit: str
    notes: Optional[str] = None


class RecipeWrite(CamelModel):
    """Body for both create and update."""

    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    description: Optional[str] = None
    servings: int = Field(gt=0, le=INT_MAX)
    prep_time: Optional[int] = Field(default=None, ge=0, le=INT_MAX)
    cook_time: Optional[int] = Field(default=None, ge=0, le=INT_MAX)
    instructions: str = Field(min_length=1)
    ingredients: list[IngredientCreate] = Field(default_factory=list)
    tags: list[Annotated[str, Field(max_length=TAG_MAX_LENGTH)]] = Field(default_factory=list)

    @field_validator("title", "instructions", mode="before")
    @classmethod
    def strip_text(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("description", "prep_time", "cook_time", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        # The web form sends "" for untouched optional inputs
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def to_fields(self) -> RecipeFields:
        return RecipeFields(
            title=self.title,
            description=self.description,
            servings=self.servings,
            prep_time=self.prep_time,
            cook_time=self.cook_time,
            instructions=self.instructions,
        )


class RecipeRead(CamelModel):
    id: int
    user_id: UUID
    title: str
    description: Optional[str] = None
    servings: int
    prep_time: Optional[int] = None
    cook_time: Optional[int] = None
    instructions: str
    created_at: datetime
    updated_at: Optional[datetime] = None
    ingredients: list[IngredientRead] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list, validation_alias="tag_names")


class TagRead(CamelModel):
    id: int
    name: str
