"""Authentication API endpoints."""

from fastapi import APIRouter, Depends, status

from cinecollection.api.dependencies.common import get_auth_service
from cinecollection.middleware.auth import get_current_identity
from cinecollection.schemas.auth import (
    AuthResponse,
    CurrentUserResponse,
    LoginRequest,
    RegisterRequest,
)
from cinecollection.schemas.base import ErrorResponse
from cinecollection.services.auth_service import AuthService, Identity

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def register(
    request: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Create an account and return a session token."""
    result = await auth_service.register(request.email, request.password, request.name)
    return AuthResponse(
        message="User created successfully",
        token=result.token,
        user=result.user,
    )


@router.post("/login", response_model=AuthResponse, responses={400: {"model": ErrorResponse}})
async def login(
    request: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Authenticate with email and password and return a session token."""
    result = await auth_service.login(request.email, request.password)
    return AuthResponse(
        message="Login successful",
        token=result.token,
        user=result.user,
    )


@router.get("/me", response_model=CurrentUserResponse, responses={401: {"model": ErrorResponse}})
async def current_user(
    identity: Identity = Depends(get_current_identity),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Profile of the user the bearer token was issued for."""
    user = await auth_service.get_user(identity.user_id)
    return CurrentUserResponse(user=user.public_view())
