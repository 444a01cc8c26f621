"""Pydantic schemas for API request/response validation."""

from .auth import (
    AuthResponse,
    CurrentUserResponse,
    LoginRequest,
    RegisterRequest,
    UserView,
)
from .base import BaseSchema, ErrorResponse, HealthCheckResponse, MessageResponse
from .entry import EntryListResponse, EntryPayload, EntryResponse

__all__ = [
    # Base
    "BaseSchema",
    "ErrorResponse",
    "HealthCheckResponse",
    "MessageResponse",
    # Auth
    "AuthResponse",
    "CurrentUserResponse",
    "LoginRequest",
    "RegisterRequest",
    "UserView",
    # Entries
    "EntryListResponse",
    "EntryPayload",
    "EntryResponse",
]
