"""Catalog entry model: the entry store."""

from sqlalchemy import Column, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from .base import SerializableMixin, TimestampMixin
from cinecollection.core.database import Base

ENTRY_TYPES = ("Movie", "TV Show")


class Entry(Base, TimestampMixin, SerializableMixin):
    """
    A movie or TV show in a user's collection.

    Every entry belongs to exactly one user and is only reachable through
    that user's identity.
    """

    __tablename__ = "entries"
    __json_keys__ = {
        "year_time": "yearTime",
        "poster_url": "posterUrl",
        "created_at": "createdAt",
        "updated_at": "updatedAt",
        "user_id": "userId",
    }

    id = Column(Integer, primary_key=True, autoincrement=True)

    title = Column(String(500), nullable=False, comment="Title of the movie or show")
    type = Column(String(20), nullable=False, comment="Entry kind: Movie or TV Show")
    director = Column(String(255), nullable=False, comment="Director or showrunner")

    # Free-form descriptive fields, kept as entered
    budget = Column(String(100))
    location = Column(String(255))
    duration = Column(String(100))
    year_time = Column(String(100), comment="Release year or airing period label")
    poster_url = Column(Text)

    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        comment="Owning user"
    )

    owner = relationship("User", back_populates="entries", lazy="noload")

    __table_args__ = (
        Index("idx_entries_user_created", "user_id", "created_at"),
    )

    # Fields a PUT overwrites
    MUTABLE_FIELDS = (
        "title", "type", "director", "budget", "location",
        "duration", "year_time", "poster_url",
    )
