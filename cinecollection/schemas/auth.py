"""Authentication request/response schemas."""

from typing import Optional

from pydantic import Field

from .base import BaseSchema


class CredentialsRequest(BaseSchema):
    """Credential payloads; passwords are kept byte-for-byte."""

    class Config:
        str_strip_whitespace = False


class RegisterRequest(CredentialsRequest):
    """User registration request.

    Fields are optional at the schema level so that missing values surface
    as the service's own validation error rather than a schema error.
    """

    email: Optional[str] = Field(None, description="User email address")
    password: Optional[str] = Field(None, description="User password")
    name: Optional[str] = Field(None, description="Display name")


class LoginRequest(CredentialsRequest):
    """User login request."""

    email: Optional[str] = Field(None, description="User email address")
    password: Optional[str] = Field(None, description="User password")


class UserView(BaseSchema):
    """Public user profile; never includes the password hash."""

    id: int = Field(description="User id")
    email: str = Field(description="Email address")
    name: str = Field(description="Display name")


class AuthResponse(BaseSchema):
    """Token issued on register/login."""

    message: str = Field(description="Outcome message")
    token: str = Field(description="Bearer token")
    user: UserView


class CurrentUserResponse(BaseSchema):
    """Profile of the authenticated user."""

    user: UserView
