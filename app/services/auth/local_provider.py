"""Local password-based authentication provider."""
import logging
import re
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

import bcrypt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session as DBSession

from app.config import settings
from app.models.user import User
from app.models.session import Session
from app.services.auth.base import AuthProvider
from app.services.errors import ConflictError, UnauthorizedError, ValidationError

logger = logging.getLogger(__name__)

# token_urlsafe(32) yields 43 url-safe base64 characters
_TOKEN_PATTERN = re.compile(r"^[A-Za-z0-9_-]{32,64}$")


class LocalAuthProvider(AuthProvider):
    """
    Local authentication provider using password hashing and database sessions.

    Passwords are hashed with bcrypt. Credentials are random opaque tokens
    stored in the sessions table with an expiry; a token is only as good as
    its row, so revocation is immediate.
    """

    def _hash_password(self, password: str) -> str:
        """Hash a password using bcrypt."""
        return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt()).decode('utf-8')

    def _verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash."""
        return bcrypt.checkpw(plain_password.encode('utf-8'), hashed_password.encode('utf-8'))

    def _generate_session_token(self) -> str:
        """Generate a cryptographically secure session token."""
        return secrets.token_urlsafe(32)

    def _create_session(
        self,
        db: DBSession,
        user: User,
        user_agent: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> str:
        token = self._generate_session_token()
        expires_at = datetime.now(timezone.utc) + timedelta(seconds=settings.session_max_age)

        session = Session(
            user_id=user.id,
            token=token,
            expires_at=expires_at,
            user_agent=(user_agent or "")[:512],
            ip_address=ip_address,
        )
        db.add(session)
        db.commit()
        return token

    async def register(
        self,
        db: DBSession,
        email: str,
        password: str,
        name: Optional[str] = None,
        user_agent: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> Tuple[User, str]:
        """Create a user with a hashed password and log them in."""
        normalized_email = User.normalize_email(email)
        if not normalized_email or not password:
            raise ValidationError("Missing email or password")

        logger.info("Register attempt for: %s", normalized_email)

        existing = db.query(User).filter(User.email == normalized_email).first()
        if existing:
            raise ConflictError("User already exists")

        user = User(
            email=normalized_email,
            password_hash=self._hash_password(password),
            name=name,
        )
        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            # Race condition: another request registered the same email
            db.rollback()
            raise ConflictError("User already exists")
        db.refresh(user)

        token = self._create_session(db, user, user_agent, ip_address)
        return user, token

    async def authenticate(self, db: DBSession, email: str, password: str) -> Optional[User]:
        """Authenticate user with email and password."""
        user = db.query(User).filter(User.email == User.normalize_email(email)).first()
        if not user or not user.password_hash:
            return None
        if not self._verify_password(password, user.password_hash):
            return None
        return user

    async def login(
        self,
        db: DBSession,
        email: str,
        password: str,
        user_agent: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> Tuple[User, str]:
        """Check email/password and issue a fresh credential."""
        if not email or not password:
            raise ValidationError("Missing email or password")

        normalized_email = User.normalize_email(email)
        logger.info("Login attempt for: %s", normalized_email)

        user = await self.authenticate(db, normalized_email, password)
        if not user:
            logger.info("Login failed for: %s", normalized_email)
            raise UnauthorizedError("Invalid credentials")

        token = self._create_session(db, user, user_agent, ip_address)
        return user, token

    async def verify(self, db: DBSession, credential: str) -> User:
        """Resolve a bearer token to its user."""
        if not credential or not _TOKEN_PATTERN.match(credential):
            raise UnauthorizedError("Invalid token")

        now = datetime.now(timezone.utc)
        session = db.query(Session).filter(
            Session.token == credential,
            Session.expires_at > now
        ).first()

        if not session:
            raise UnauthorizedError("Invalid token")

        return session.user

    async def revoke_session(self, db: DBSession, credential: str) -> bool:
        """Revoke a session by its token."""
        session = db.query(Session).filter(Session.token == credential).first()
        if not session:
            return False
        db.delete(session)
        db.commit()
        return True

    def purge_expired_sessions(self, db: DBSession) -> int:
        """Delete sessions past their expiry. Returns count deleted."""
        now = datetime.now(timezone.utc)
        query = db.query(Session).filter(Session.expires_at <= now)
        count = query.count()
        query.delete(synchronize_session=False)
        db.commit()
        return count


# Singleton instance
local_auth_provider = LocalAuthProvider()
