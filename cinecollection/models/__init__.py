"""Database models for the catalog service."""

from .base import SerializableMixin, TimestampMixin
from .entry import ENTRY_TYPES, Entry
from .user import User

__all__ = [
    "SerializableMixin",
    "TimestampMixin",
    "ENTRY_TYPES",
    "Entry",
    "User",
]
