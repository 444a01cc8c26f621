"""Catalog entry schemas.

Wire keys follow the client's camelCase (``yearTime``, ``posterUrl``,
``currentPage`` ...); snake_case names are accepted on input as well.
"""

from typing import Any, Dict, List, Optional

from pydantic import Field

from .base import BaseSchema


class EntryPayload(BaseSchema):
    """Body of POST /entries and PUT /entries/{id}."""

    title: Optional[str] = Field(None, max_length=500, description="Title")
    type: Optional[str] = Field(None, description="Movie or TV Show")
    director: Optional[str] = Field(None, max_length=255, description="Director")
    budget: Optional[str] = Field(None, max_length=100, description="Budget label")
    location: Optional[str] = Field(None, max_length=255, description="Filming location")
    duration: Optional[str] = Field(None, max_length=100, description="Runtime label")
    year_time: Optional[str] = Field(
        None, alias="yearTime", max_length=100, description="Release year or airing period"
    )
    poster_url: Optional[str] = Field(None, alias="posterUrl", description="Poster image URL")

    def to_entry_data(self) -> Dict[str, Any]:
        """Model-field keyed data for the catalog service."""
        return self.model_dump(by_alias=False)


class EntryResponse(BaseSchema):
    """A single catalog entry."""

    id: int
    title: str
    type: str
    director: str
    budget: Optional[str] = None
    location: Optional[str] = None
    duration: Optional[str] = None
    yearTime: Optional[str] = None
    posterUrl: Optional[str] = None
    createdAt: str
    updatedAt: str
    userId: int


class EntryListResponse(BaseSchema):
    """One page of the caller's entries."""

    entries: List[EntryResponse]
    currentPage: int = Field(description="Requested page number")
    totalPages: int = Field(description="ceil(totalEntries / limit)")
    totalEntries: int = Field(description="Number of entries matching the filter")
    hasMore: bool = Field(description="Whether a later page exists")
