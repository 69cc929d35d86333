"""API endpoints for recipe CRUD and tag listing."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.api.schemas import MessageResponse, RecipeRead, RecipeWrite, TagRead
from app.services.access_control import authorize
from app.services.auth.dependencies import get_current_user
from app.services.recipe_service import recipe_service
from app.services.tag_service import tag_service

router = APIRouter(
    prefix="/recipes",
    tags=["recipes"],
    dependencies=[Depends(get_current_user)],
)


@router.get("/tags", response_model=list[TagRead])
async def list_tags(db: Session = Depends(get_db)):
    """All tags across the system, sorted by name."""
    return tag_service.list_all(db)


@router.get("", response_model=list[RecipeRead])
async def list_recipes(
    tag: Optional[str] = Query(None),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """The caller's recipes, newest first, optionally filtered by one tag."""
    owner_id = authorize(db, user)
    return recipe_service.list(db, owner_id, tag=tag)


@router.post("", response_model=RecipeRead, status_code=status.HTTP_201_CREATED)
async def create_recipe(
    body: RecipeWrite,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    owner_id = authorize(db, user)
    return recipe_service.create(
        db, owner_id, body.to_fields(), body.ingredients, body.tags
    )


@router.get("/{recipe_id}", response_model=RecipeRead)
async def get_recipe(
    recipe_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    owner_id = authorize(db, user, recipe_id)
    return recipe_service.get(db, owner_id, recipe_id)


@router.put("/{recipe_id}", response_model=RecipeRead)
async def update_recipe(
    recipe_id: int,
    body: RecipeWrite,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Replace fields, ingredients and tags of one of the caller's recipes."""
    owner_id = authorize(db, user, recipe_id)
    return recipe_service.update(
        db, owner_id, recipe_id, body.to_fields(), body.ingredients, body.tags
    )


@router.delete("/{recipe_id}", response_model=MessageResponse)
async def delete_recipe(
    recipe_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    owner_id = authorize(db, user, recipe_id)
    recipe_service.delete(db, owner_id, recipe_id)
    return MessageResponse(message="Recipe deleted successfully")
