"""Application error taxonomy.

Services raise these; ``cinecollection.main`` renders them as
``{"error": <message>}`` with the carried status code.
"""

from fastapi import status


class CatalogAppError(Exception):
    """Base exception for catalog application errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str = None, status_code: int = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(CatalogAppError):
    """Raised when required input is missing or malformed."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class AuthError(CatalogAppError):
    """Raised for bad credentials (400) or a missing/invalid token (401)."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid credentials"


class ConflictError(CatalogAppError):
    """Raised when registering an email that already exists."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "User already exists"


class NotFoundError(CatalogAppError):
    """Raised when an entry is missing or owned by someone else."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Entry not found"


class InternalError(CatalogAppError):
    """Raised when an unexpected failure occurs; detail is logged, not returned."""
