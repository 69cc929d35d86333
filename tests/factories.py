"""
Factory functions for creating test data.

These factories create model instances with sensible defaults.
Use db.flush() to get IDs without committing.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, List, Dict, Any
import secrets

import bcrypt
from sqlalchemy.orm import Session

from app.models import (
    User,
    Recipe,
    Ingredient,
    Tag,
    RecipeTag,
    Session as UserSession,
)


# =============================================================================
# User Factory
# =============================================================================


def create_user(
    db: Session,
    email: Optional[str] = None,
    password: str = "testpassword123",
    name: Optional[str] = "Test User",
    **overrides,
) -> User:
    """
    Create a test user with hashed password.

    Args:
        db: Database session
        email: User email (auto-generated if not provided)
        password: Plain text password to hash
        name: Display name
        **overrides: Additional fields to override

    Returns:
        Created User object
    """
    if email is None:
        email = f"testuser_{secrets.token_hex(4)}@example.com"

    password_hash = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode(
        "utf-8"
    )

    defaults = {
        "email": email.strip().lower(),
        "password_hash": password_hash,
        "name": name,
    }
    defaults.update(overrides)

    user = User(**defaults)
    db.add(user)
    db.flush()
    return user


# =============================================================================
# Session Factory
# =============================================================================


def create_session(
    db: Session,
    user: User,
    expires_in: timedelta = timedelta(days=7),
    user_agent: str = "pytest-test-client",
    ip_address: str = "127.0.0.1",
    **overrides,
) -> UserSession:
    """
    Create a user session (bearer credential).

    Args:
        db: Database session
        user: User to create session for
        expires_in: Session expiration time from now
        **overrides: Additional fields to override

    Returns:
        Created Session object
    """
    defaults = {
        "user_id": user.id,
        "token": secrets.token_urlsafe(32),
        "expires_at": datetime.now(timezone.utc) + expires_in,
        "user_agent": user_agent,
        "ip_address": ip_address,
    }
    defaults.update(overrides)

    session = UserSession(**defaults)
    db.add(session)
    db.flush()
    return session


def bearer(session: UserSession) -> Dict[str, str]:
    """Authorization header for a session."""
    return {"Authorization": f"Bearer {session.token}"}


# =============================================================================
# Tag Factory
# =============================================================================


def create_tag(db: Session, name: str) -> Tag:
    """Create a tag (name is lowercased like the registry does)."""
    tag = Tag(name=name.strip().lower())
    db.add(tag)
    db.flush()
    return tag


# =============================================================================
# Recipe Factory
# =============================================================================


def create_recipe(
    db: Session,
    user: User,
    title: str = "Test Recipe",
    servings: int = 2,
    instructions: str = "Mix and cook.",
    ingredients: Optional[List[Dict[str, Any]]] = None,
    tags: Optional[List[str]] = None,
    created_at: Optional[datetime] = None,
    **overrides,
) -> Recipe:
    """
    Create a recipe directly in the database, bypassing RecipeService.

    Args:
        db: Database session
        user: Owner
        ingredients: List of {name, amount, unit, notes?} dicts
        tags: Tag names; created if missing
        created_at: Creation time (defaults to now)
        **overrides: Additional recipe fields

    Returns:
        Created Recipe object
    """
    defaults = {
        "user_id": user.id,
        "title": title,
        "servings": servings,
        "instructions": instructions,
        "created_at": created_at or datetime.now(timezone.utc),
    }
    defaults.update(overrides)

    recipe = Recipe(**defaults)
    db.add(recipe)
    db.flush()

    for position, line in enumerate(ingredients or []):
        db.add(Ingredient(recipe_id=recipe.id, position=position, **line))

    for name in tags or []:
        tag = db.query(Tag).filter(Tag.name == name.strip().lower()).first()
        if tag is None:
            tag = create_tag(db, name)
        db.add(RecipeTag(recipe_id=recipe.id, tag_id=tag.id))

    db.flush()
    return recipe


def soup_payload(**overrides) -> Dict[str, Any]:
    """JSON body for the canonical soup recipe."""
    payload = {
        "title": "Soup",
        "servings": 4,
        "instructions": "Boil.",
        "ingredients": [{"name": "Water", "amount": 2, "unit": "L"}],
        "tags": ["soup", "quick"],
    }
    payload.update(overrides)
    return payload
