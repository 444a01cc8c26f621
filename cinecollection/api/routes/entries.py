"""Catalog entry API endpoints."""

from fastapi import APIRouter, Depends, status

from cinecollection.api.dependencies.common import get_catalog_service, get_pagination_params
from cinecollection.middleware.auth import get_current_identity
from cinecollection.schemas.base import ErrorResponse, MessageResponse
from cinecollection.schemas.entry import EntryListResponse, EntryPayload, EntryResponse
from cinecollection.services.auth_service import Identity
from cinecollection.services.catalog_service import CatalogService

router = APIRouter(prefix="/entries", tags=["Entries"])

NOT_FOUND = {404: {"model": ErrorResponse}}


@router.get("", response_model=EntryListResponse)
async def list_entries(
    pagination=Depends(get_pagination_params),
    identity: Identity = Depends(get_current_identity),
    catalog: CatalogService = Depends(get_catalog_service),
):
    """List the caller's entries, newest first, with optional search."""
    page = await catalog.list_entries(
        identity,
        page=pagination["page"],
        page_size=pagination["page_size"],
        search=pagination["search"],
    )
    return page.to_dict()


@router.post(
    "",
    response_model=EntryResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_entry(
    request: EntryPayload,
    identity: Identity = Depends(get_current_identity),
    catalog: CatalogService = Depends(get_catalog_service),
):
    """Add an entry to the caller's collection."""
    entry = await catalog.create_entry(identity, request.to_entry_data())
    return entry.to_dict()


@router.get("/{entry_id}", response_model=EntryResponse, responses=NOT_FOUND)
async def get_entry(
    entry_id: int,
    identity: Identity = Depends(get_current_identity),
    catalog: CatalogService = Depends(get_catalog_service),
):
    """Get one of the caller's entries."""
    entry = await catalog.get_entry(identity, entry_id)
    return entry.to_dict()


@router.put("/{entry_id}", response_model=EntryResponse, responses=NOT_FOUND)
async def update_entry(
    entry_id: int,
    request: EntryPayload,
    identity: Identity = Depends(get_current_identity),
    catalog: CatalogService = Depends(get_catalog_service),
):
    """Replace the fields of one of the caller's entries."""
    entry = await catalog.update_entry(identity, entry_id, request.to_entry_data())
    return entry.to_dict()


@router.delete("/{entry_id}", response_model=MessageResponse, responses=NOT_FOUND)
async def delete_entry(
    entry_id: int,
    identity: Identity = Depends(get_current_identity),
    catalog: CatalogService = Depends(get_catalog_service),
):
    """Permanently delete one of the caller's entries."""
    await catalog.delete_entry(identity, entry_id)
    return MessageResponse(message="Entry deleted successfully")
