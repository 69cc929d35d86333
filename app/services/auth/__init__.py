"""
Identity for the recipe API.

Users register or log in with email and password and receive an opaque
bearer token. Routes depend on `get_current_user`, which resolves the
`Authorization: Bearer <token>` header to a User:

    @router.get("/recipes")
    async def list_recipes(user: User = Depends(get_current_user)):
        ...
"""
from app.services.auth.base import AuthProvider
from app.services.auth.local_provider import local_auth_provider


def get_auth_provider() -> AuthProvider:
    """Return the auth provider in use (local email/password)."""
    return local_auth_provider


__all__ = [
    "AuthProvider",
    "get_auth_provider",
    "local_auth_provider",
]
