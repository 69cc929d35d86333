"""Business logic for recipe management."""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from app.models.recipe import Recipe
from app.models.recipe_tag import RecipeTag
from app.models.tag import Tag
from app.services.errors import NotFoundError, ValidationError
from app.services.ingredient_service import IngredientLine, ingredient_service
from app.services.tag_service import tag_service

logger = logging.getLogger(__name__)

# Column limits: title String(255), servings/times INTEGER
TITLE_MAX_LENGTH = 255
INT_MAX = 2_147_483_647


@dataclass
class RecipeFields:
    """Scalar recipe fields, replaced wholesale on update."""

    title: str
    servings: int
    instructions: str
    description: Optional[str] = None
    prep_time: Optional[int] = None
    cook_time: Optional[int] = None


def _check_fields(fields: RecipeFields) -> None:
    if not fields.title or not fields.title.strip():
        raise ValidationError("Title is required")
    if len(fields.title) > TITLE_MAX_LENGTH:
        raise ValidationError(f"Title must be at most {TITLE_MAX_LENGTH} characters")
    if not fields.instructions or not fields.instructions.strip():
        raise ValidationError("Instructions are required")
    if fields.servings is None or not 1 <= fields.servings <= INT_MAX:
        raise ValidationError("Servings must be a positive integer")
    for label, value in (("Prep time", fields.prep_time), ("Cook time", fields.cook_time)):
        if value is not None and value < 0:
            raise ValidationError(f"{label} must not be negative")
        if value is not None and value > INT_MAX:
            raise ValidationError(f"{label} is too large")


def _apply_fields(recipe: Recipe, fields: RecipeFields) -> None:
    recipe.title = fields.title
    recipe.description = fields.description
    recipe.servings = fields.servings
    recipe.prep_time = fields.prep_time
    recipe.cook_time = fields.cook_time
    recipe.instructions = fields.instructions


class RecipeService:
    """
    Service for recipe operations.

    Every read and write is scoped to an owner id. A recipe owned by someone
    else is reported as NotFoundError, exactly like a missing one. Each
    mutation runs in a single transaction, so the ingredient and tag
    replacement on update either fully lands or not at all.
    """

    @staticmethod
    def _aggregate_query(db: Session):
        return db.query(Recipe).options(
            selectinload(Recipe.ingredients), selectinload(Recipe.tags)
        )

    @staticmethod
    def _get_owned(db: Session, owner_id: UUID, recipe_id: int) -> Recipe:
        recipe = (
            db.query(Recipe)
            .filter(Recipe.id == recipe_id, Recipe.user_id == owner_id)
            .first()
        )
        if not recipe:
            raise NotFoundError("Recipe not found")
        return recipe

    @staticmethod
    def _link_tags(db: Session, recipe_id: int, tag_names: Sequence[str]) -> None:
        for tag_id in tag_service.resolve_many(db, tag_names):
            db.add(RecipeTag(recipe_id=recipe_id, tag_id=tag_id))
        db.flush()

    @staticmethod
    def _unlink_tags(db: Session, recipe_id: int) -> None:
        for recipe_tag in (
            db.query(RecipeTag).filter(RecipeTag.recipe_id == recipe_id).all()
        ):
            db.delete(recipe_tag)
        db.flush()

    @staticmethod
    def create(
        db: Session,
        owner_id: UUID,
        fields: RecipeFields,
        ingredients: Sequence[IngredientLine] = (),
        tag_names: Sequence[str] = (),
    ) -> Recipe:
        """
        Create a recipe with its ingredients and tags.

        Args:
            db: Database session
            owner_id: ID of the owning user
            fields: Scalar recipe fields
            ingredients: Ingredient lines in display order
            tag_names: Raw tag names (normalized and de-duplicated)

        Returns:
            The created recipe aggregate
        """
        _check_fields(fields)
        try:
            recipe = Recipe(user_id=owner_id)
            _apply_fields(recipe, fields)
            db.add(recipe)
            db.flush()

            ingredient_service.add_all(db, recipe.id, ingredients)
            RecipeService._link_tags(db, recipe.id, tag_names)
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Failed to create recipe for user %s", owner_id)
            raise

        logger.info("Created recipe %s for user %s", recipe.id, owner_id)
        return RecipeService.get(db, owner_id, recipe.id)

    @staticmethod
    def list(db: Session, owner_id: UUID, tag: Optional[str] = None) -> List[Recipe]:
        """
        List the owner's recipes, newest first.

        If tag is given, only recipes carrying that tag (after normalization)
        are returned; other tags on the recipe do not matter.
        """
        query = RecipeService._aggregate_query(db).filter(Recipe.user_id == owner_id)

        if tag is not None and Tag.normalize_name(tag):
            query = query.filter(
                Recipe.recipe_tags.any(
                    RecipeTag.tag.has(Tag.name == Tag.normalize_name(tag))
                )
            )

        return query.order_by(Recipe.created_at.desc(), Recipe.id.desc()).all()

    @staticmethod
    def get(db: Session, owner_id: UUID, recipe_id: int) -> Recipe:
        """Get one of the owner's recipes with ingredients and tags loaded."""
        recipe = (
            RecipeService._aggregate_query(db)
            .filter(Recipe.id == recipe_id, Recipe.user_id == owner_id)
            .first()
        )
        if not recipe:
            raise NotFoundError("Recipe not found")
        return recipe

    @staticmethod
    def update(
        db: Session,
        owner_id: UUID,
        recipe_id: int,
        fields: RecipeFields,
        ingredients: Sequence[IngredientLine] = (),
        tag_names: Sequence[str] = (),
    ) -> Recipe:
        """
        Replace a recipe's fields, ingredient set and tags.

        Ingredients and tag links are deleted and re-inserted, not diffed.

        Returns:
            The updated recipe aggregate

        Raises:
            NotFoundError: recipe missing or owned by another user
        """
        recipe = RecipeService._get_owned(db, owner_id, recipe_id)
        _check_fields(fields)
        try:
            _apply_fields(recipe, fields)

            ingredient_service.replace_all(db, recipe.id, ingredients)
            RecipeService._unlink_tags(db, recipe.id)
            RecipeService._link_tags(db, recipe.id, tag_names)

            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Failed to update recipe %s", recipe_id)
            raise

        logger.info("Updated recipe %s for user %s", recipe_id, owner_id)
        return RecipeService.get(db, owner_id, recipe_id)

    @staticmethod
    def delete(db: Session, owner_id: UUID, recipe_id: int) -> None:
        """
        Delete a recipe. Ingredients and tag links go with it; tags stay.

        Raises:
            NotFoundError: recipe missing or owned by another user
        """
        recipe = RecipeService._get_owned(db, owner_id, recipe_id)
        try:
            db.delete(recipe)
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Failed to delete recipe %s", recipe_id)
            raise

        logger.info("Deleted recipe %s for user %s", recipe_id, owner_id)


# Singleton instance
recipe_service = RecipeService()
