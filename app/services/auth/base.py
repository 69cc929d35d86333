"""Abstract base class for authentication providers."""
from abc import ABC, abstractmethod
from typing import Optional, Tuple

from sqlalchemy.orm import Session as DBSession

from app.models.user import User


class AuthProvider(ABC):
    """
    Abstract authentication provider interface.

    Identity is always derived from the credential presented with a request;
    providers hold no per-user state in process.
    """

    @abstractmethod
    async def register(
        self,
        db: DBSession,
        email: str,
        password: str,
        name: Optional[str] = None,
        user_agent: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> Tuple[User, str]:
        """
        Create an account and issue a credential for it.

        Returns (user, credential). Raises ConflictError if the email is taken.
        """
        pass

    @abstractmethod
    async def login(
        self,
        db: DBSession,
        email: str,
        password: str,
        user_agent: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> Tuple[User, str]:
        """
        Check credentials and issue a new credential.

        Raises UnauthorizedError without saying which part was wrong.
        """
        pass

    @abstractmethod
    async def verify(self, db: DBSession, credential: str) -> User:
        """
        Resolve a credential to its user.

        Raises UnauthorizedError if malformed, unknown or expired.
        """
        pass

    @abstractmethod
    async def revoke_session(self, db: DBSession, credential: str) -> bool:
        """
        Revoke/invalidate a credential.

        Returns True if it was revoked, False if not found.
        """
        pass
