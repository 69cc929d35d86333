"""Maps an authenticated user to the recipes it may read or mutate."""

from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.models.recipe import Recipe
from app.models.user import User
from app.services.errors import NotFoundError


def authorize(db: Session, user: User, recipe_id: Optional[int] = None) -> UUID:
    """
    Return the owner id to scope recipe operations by.

    Without a recipe id (list/create) this is just the user's id. With one,
    the recipe must belong to the user; otherwise NotFoundError is raised,
    the same as for a recipe that does not exist, so callers cannot probe
    for other users' recipe ids.
    """
    if recipe_id is None:
        return user.id

    owned = (
        db.query(Recipe.id)
        .filter(Recipe.id == recipe_id, Recipe.user_id == user.id)
        .first()
    )
    if owned is None:
        raise NotFoundError("Recipe not found")
    return user.id
