"""Authentication service: registration, login and token validation."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from cinecollection.core.exceptions import (
    AuthError,
    ConflictError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from cinecollection.core.security import (
    JWTError,
    create_access_token,
    decode_access_token,
    dummy_verify,
    get_password_hash,
    verify_password,
)
from cinecollection.models.user import User

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"
INVALID_TOKEN = "Invalid or expired token"


@dataclass(frozen=True)
class Identity:
    """Caller identity resolved from a session token."""

    user_id: int
    email: str


@dataclass
class AuthResult:
    """Token plus public user view returned by register/login."""

    token: str
    user: Dict[str, Any]


class AuthService:
    """
    Registers and authenticates users against the credential store and
    issues/validates stateless bearer tokens.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session

    async def register(self, email: Optional[str], password: Optional[str], name: Optional[str]) -> AuthResult:
        """
        Create an account and return a fresh token.

        Raises:
            ValidationError: If any field is empty
            ConflictError: If the email is already registered
        """
        email = (email or "").strip()
        name = (name or "").strip()
        if not email or not password or not name:
            raise ValidationError("Email, password, and name are required")

        email = User.normalize_email(email)
        logger.info(f"Registering user: {email}")

        if await self._get_user_by_email(email) is not None:
            raise ConflictError("User already exists")

        user = User(email=email, name=name, password_hash=get_password_hash(password))
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration of the same email
            await self.db.rollback()
            raise ConflictError("User already exists")
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Database error registering user {email}: {e}")
            raise InternalError()
        await self.db.refresh(user)

        logger.info(f"Registered user {user.id}")
        return AuthResult(token=self.issue_token(user), user=user.public_view())

    async def login(self, email: Optional[str], password: Optional[str]) -> AuthResult:
        """
        Verify credentials and return a fresh token.

        Unknown email and wrong password raise the same AuthError.
        """
        email = (email or "").strip()
        if not email or not password:
            raise ValidationError("Email and password are required")

        user = await self._get_user_by_email(User.normalize_email(email))
        if user is None:
            dummy_verify()
            logger.warning("Login failed: unknown email")
            raise AuthError(INVALID_CREDENTIALS)

        if not verify_password(password, user.password_hash):
            logger.warning(f"Login failed: bad password for user {user.id}")
            raise AuthError(INVALID_CREDENTIALS)

        logger.info(f"User {user.id} logged in")
        return AuthResult(token=self.issue_token(user), user=user.public_view())

    async def get_user(self, user_id: int) -> User:
        """Fetch a user by id or raise NotFoundError."""
        user = await self.db.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    @staticmethod
    def issue_token(user: User, issued_at: Optional[datetime] = None) -> str:
        """Sign a token binding the user's id and email."""
        return create_access_token(
            {"sub": str(user.id), "email": user.email},
            issued_at=issued_at,
        )

    @staticmethod
    def validate_token(token: str) -> Identity:
        """
        Resolve a token to the identity it was issued for.

        Raises:
            AuthError (401): If the token is malformed, mis-signed or expired
        """
        try:
            payload = decode_access_token(token)
        except JWTError as e:
            logger.debug(f"Token rejected: {e}")
            raise AuthError(INVALID_TOKEN, status_code=401)

        subject = payload.get("sub")
        email = payload.get("email")
        if not subject or not email:
            raise AuthError(INVALID_TOKEN, status_code=401)
        try:
            user_id = int(subject)
        except (TypeError, ValueError):
            raise AuthError(INVALID_TOKEN, status_code=401)

        return Identity(user_id=user_id, email=email)

    async def _get_user_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()
