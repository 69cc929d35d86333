"""Authentication routes: register, login, logout and the current identity."""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.api.schemas import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    UserRead,
)
from app.services.auth import get_auth_provider
from app.services.auth.dependencies import get_bearer_token, get_current_user


router = APIRouter(prefix="/auth", tags=["auth"])


def _client_meta(request: Request) -> dict:
    return {
        "user_agent": request.headers.get("user-agent", ""),
        "ip_address": request.client.host if request.client else None,
    }


@router.post(
    "/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED
)
async def register(
    request: Request,
    body: RegisterRequest,
    db: Session = Depends(get_db),
):
    """Create an account and return a bearer token for it."""
    auth_provider = get_auth_provider()
    user, token = await auth_provider.register(
        db, body.email, body.password, body.name, **_client_meta(request)
    )
    return AuthResponse(token=token, user=UserRead.model_validate(user))


@router.post("/login", response_model=AuthResponse)
async def login(
    request: Request,
    body: LoginRequest,
    db: Session = Depends(get_db),
):
    """Exchange email/password for a bearer token."""
    auth_provider = get_auth_provider()
    user, token = await auth_provider.login(
        db, body.email, body.password, **_client_meta(request)
    )
    return AuthResponse(token=token, user=UserRead.model_validate(user))


@router.post("/logout", response_model=MessageResponse)
async def logout(
    request: Request,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Revoke the token this request was made with."""
    auth_provider = get_auth_provider()
    await auth_provider.revoke_session(db, get_bearer_token(request))
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=UserRead)
async def me(user: User = Depends(get_current_user)):
    """Identity summary for the token holder."""
    return user
