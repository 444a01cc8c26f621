"""Catalog service: owner-scoped CRUD and paginated search over entries."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from sqlalchemy import and_, desc, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from cinecollection.core.exceptions import InternalError, NotFoundError, ValidationError
from cinecollection.core.settings import get_settings
from cinecollection.models.entry import ENTRY_TYPES, Entry
from cinecollection.services.auth_service import Identity

logger = logging.getLogger(__name__)

settings = get_settings()

REQUIRED_FIELDS = ("title", "type", "director")
SEARCH_FIELDS = (Entry.title, Entry.director, Entry.type)

# Newest first; id breaks ties between rows created in the same instant
LISTING_ORDER = (desc(Entry.created_at), desc(Entry.id))


@dataclass
class EntryPage:
    """One page of a filtered listing."""

    entries: List[Entry] = field(default_factory=list)
    current_page: int = 1
    total_pages: int = 0
    total_entries: int = 0
    has_more: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "entries": [entry.to_dict() for entry in self.entries],
            "currentPage": self.current_page,
            "totalPages": self.total_pages,
            "totalEntries": self.total_entries,
            "hasMore": self.has_more,
        }


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _validate_entry_data(data: Dict[str, Any]) -> Dict[str, Any]:
    """Return the mutable fields with blanks normalized to None."""
    cleaned = {}
    for name in Entry.MUTABLE_FIELDS:
        value = data.get(name)
        if isinstance(value, str):
            value = value.strip() or None
        cleaned[name] = value

    missing = [name for name in REQUIRED_FIELDS if not cleaned[name]]
    if missing:
        raise ValidationError("Title, type, and director are required")
    if cleaned["type"] not in ENTRY_TYPES:
        raise ValidationError(f"Type must be one of: {', '.join(ENTRY_TYPES)}")
    return cleaned


class CatalogService:
    """
    Create/read/update/delete and listing of catalog entries.

    Every query is scoped to the caller's identity. An entry owned by
    someone else is reported exactly like a missing one.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session

    async def list_entries(
        self,
        identity: Identity,
        page: int = 1,
        page_size: Optional[int] = None,
        search: Optional[str] = None,
    ) -> EntryPage:
        """
        List the caller's entries, newest first.

        Args:
            identity: Caller identity
            page: 1-based page number
            page_size: Entries per page; defaults to the configured size
            search: Case-insensitive substring matched against title,
                director or type

        Returns:
            EntryPage: The page plus totals; pages past the end are empty
        """
        if page_size is None:
            page_size = settings.default_page_size
        if page < 1:
            raise ValidationError("Page must be 1 or greater")
        if page_size < 1:
            raise ValidationError("Limit must be 1 or greater")

        conditions = [Entry.user_id == identity.user_id]
        term = (search or "").strip()
        if term:
            pattern = f"%{_escape_like(term)}%"
            conditions.append(or_(*(column.ilike(pattern, escape="\\") for column in SEARCH_FIELDS)))
        where = and_(*conditions)
        offset = (page - 1) * page_size
        entries: List[Entry] = []

        try:
            total = (
                await self.db.execute(select(func.count()).select_from(Entry).where(where))
            ).scalar_one()

            # Offsets past the end never reach the database
            if offset < total:
                result = await self.db.execute(
                    select(Entry)
                    .where(where)
                    .order_by(*LISTING_ORDER)
                    .offset(offset)
                    .limit(min(page_size, total - offset))
                )
                entries = list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Error listing entries for user {identity.user_id}: {e}")
            raise InternalError()

        total_pages = -(-total // page_size)
        return EntryPage(
            entries=entries,
            current_page=page,
            total_pages=total_pages,
            total_entries=total,
            has_more=page < total_pages,
        )

    async def get_entry(self, identity: Identity, entry_id: int) -> Entry:
        """Fetch one of the caller's entries or raise NotFoundError."""
        result = await self.db.execute(
            select(Entry).where(
                and_(Entry.id == entry_id, Entry.user_id == identity.user_id)
            )
        )
        entry = result.scalar_one_or_none()
        if entry is None:
            logger.info(f"Entry {entry_id} not found for user {identity.user_id}")
            raise NotFoundError("Entry not found")
        return entry

    async def create_entry(self, identity: Identity, data: Dict[str, Any]) -> Entry:
        """Validate and persist a new entry owned by the caller."""
        entry = Entry(user_id=identity.user_id, **_validate_entry_data(data))
        self.db.add(entry)
        await self._commit("creating entry", identity)
        await self.db.refresh(entry)

        logger.info(f"User {identity.user_id} created entry {entry.id}")
        return entry

    async def update_entry(self, identity: Identity, entry_id: int, data: Dict[str, Any]) -> Entry:
        """Overwrite the mutable fields of one of the caller's entries."""
        entry = await self.get_entry(identity, entry_id)
        cleaned = _validate_entry_data(data)

        for name, value in cleaned.items():
            setattr(entry, name, value)
        await self._commit("updating entry", identity)
        await self.db.refresh(entry)

        logger.info(f"User {identity.user_id} updated entry {entry.id}")
        return entry

    async def delete_entry(self, identity: Identity, entry_id: int) -> None:
        """Permanently delete one of the caller's entries."""
        entry = await self.get_entry(identity, entry_id)
        await self.db.delete(entry)
        await self._commit("deleting entry", identity)

        logger.info(f"User {identity.user_id} deleted entry {entry_id}")

    async def _commit(self, action: str, identity: Identity) -> None:
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Database error {action} for user {identity.user_id}: {e}")
            raise InternalError()
