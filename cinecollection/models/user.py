"""User model: the credential store."""

from typing import Any, Dict

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from .base import SerializableMixin, TimestampMixin
from cinecollection.core.database import Base


class User(Base, TimestampMixin, SerializableMixin):
    """
    A registered account.

    Emails are stored normalized (stripped, lower-cased) so uniqueness is
    case-insensitive. The password is only ever stored as a bcrypt hash.
    """

    __tablename__ = "users"
    __json_exclude__ = frozenset({"password_hash"})

    id = Column(Integer, primary_key=True, autoincrement=True)

    email = Column(
        String(255),
        nullable=False,
        unique=True,
        comment="Normalized email address, unique across the platform"
    )

    name = Column(
        String(255),
        nullable=False,
        comment="Display name"
    )

    password_hash = Column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password"
    )

    entries = relationship(
        "Entry",
        back_populates="owner",
        cascade="all, delete-orphan",
        lazy="noload",
    )

    @staticmethod
    def normalize_email(email: str) -> str:
        return email.strip().lower()

    def public_view(self) -> Dict[str, Any]:
        """Identity fields safe to return to clients (never the hash)."""
        return {"id": self.id, "email": self.email, "name": self.name}
