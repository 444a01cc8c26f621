"""Common FastAPI dependencies."""

from typing import Optional

from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from cinecollection.core.database import get_db_session
from cinecollection.core.settings import get_settings
from cinecollection.services.auth_service import AuthService
from cinecollection.services.catalog_service import CatalogService

settings = get_settings()


def get_auth_service(session: AsyncSession = Depends(get_db_session)) -> AuthService:
    return AuthService(session)


def get_catalog_service(session: AsyncSession = Depends(get_db_session)) -> CatalogService:
    return CatalogService(session)


def get_pagination_params(
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(
        settings.default_page_size,
        ge=1,
        le=settings.max_page_size,
        description="Items per page"
    ),
    search: Optional[str] = Query(None, description="Match title, director or type"),
) -> dict:
    """Get pagination and search parameters from query string."""
    return {
        "page": page,
        "page_size": limit,
        "search": search,
    }
