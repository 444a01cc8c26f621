"""Client for the catalog API: session, HTTP client and listing controller."""

from .api import ApiError, CatalogApiClient
from .listing import ListingController, ListingState
from .session import ClientSession

__all__ = [
    "ApiError",
    "CatalogApiClient",
    "ClientSession",
    "ListingController",
    "ListingState",
]
