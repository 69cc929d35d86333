"""FastAPI dependencies for authentication."""
from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.services.auth import get_auth_provider
from app.services.errors import UnauthorizedError


def get_bearer_token(request: Request) -> Optional[str]:
    """Pull the token out of an `Authorization: Bearer <token>` header."""
    header = request.headers.get("authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def get_current_user(
    request: Request,
    db: Session = Depends(get_db)
) -> User:
    """
    Get the currently authenticated user.

    Raises UnauthorizedError (401) if no token is sent or it does not verify.
    """
    token = get_bearer_token(request)
    if not token:
        raise UnauthorizedError("No token provided")

    auth_provider = get_auth_provider()
    return await auth_provider.verify(db, token)
