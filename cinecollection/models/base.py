"""Base model classes and mixins."""

from datetime import datetime, timezone
from typing import Any, Dict

from sqlalchemy import Column, DateTime


def utcnow() -> datetime:
    """Timezone-aware current time with microsecond resolution."""
    return datetime.now(timezone.utc)


class TimestampMixin:
    """Mixin for adding created_at and updated_at timestamps."""

    created_at = Column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
        index=True,
        comment="Record creation timestamp"
    )
    updated_at = Column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
        comment="Record last update timestamp"
    )


class SerializableMixin:
    """Column-driven ``to_dict`` with an optional column-to-key mapping."""

    # Column name -> JSON key
    __json_keys__: Dict[str, str] = {}
    __json_exclude__: frozenset = frozenset()

    def to_dict(self) -> Dict[str, Any]:
        """Convert model instance to dictionary."""
        result = {}
        for column in self.__table__.columns:
            if column.name in self.__json_exclude__:
                continue
            value = getattr(self, column.name)
            if isinstance(value, datetime):
                value = value.isoformat()
            result[self.__json_keys__.get(column.name, column.name)] = value
        return result

    def __repr__(self) -> str:
        """String representation of the model."""
        return f"<{self.__class__.__name__}(id={self.id})>"
