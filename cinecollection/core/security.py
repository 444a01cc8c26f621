"""Password hashing and JWT primitives.

Hashing goes through passlib's bcrypt scheme with a configurable work
factor; tokens are HS256 JWTs signed with python-jose. Both are treated as
opaque primitives by the services.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from .settings import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.password_hash_rounds,
)


def get_password_hash(password: str) -> str:
    """Generate password hash."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plaintext password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def dummy_verify() -> None:
    """Spend the same time as a real verification for unknown accounts."""
    pwd_context.dummy_verify()


def create_access_token(
    data: Dict[str, Any],
    expires_delta: Optional[timedelta] = None,
    issued_at: Optional[datetime] = None,
) -> str:
    """Create a JWT access token with absolute expiry from ``issued_at``."""
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.jwt_access_token_expire_minutes)
    if issued_at is None:
        issued_at = datetime.now(timezone.utc)

    to_encode = data.copy()
    to_encode.update({"iat": issued_at, "exp": issued_at + expires_delta})

    return jwt.encode(
        to_encode,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm
    )


def decode_access_token(token: str) -> Dict[str, Any]:
    """Verify signature and expiry; raises ``JWTError`` on any failure."""
    return jwt.decode(
        token,
        settings.jwt_secret_key,
        algorithms=[settings.jwt_algorithm]
    )


__all__ = [
    "JWTError",
    "create_access_token",
    "decode_access_token",
    "dummy_verify",
    "get_password_hash",
    "verify_password",
]
