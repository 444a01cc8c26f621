"""Authentication middleware and dependencies."""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from cinecollection.core.exceptions import AuthError
from cinecollection.services.auth_service import AuthService, Identity

logger = logging.getLogger(__name__)


def _unauthorized(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"error": message},
        headers={"WWW-Authenticate": "Bearer"},
    )


class AuthenticationMiddleware(BaseHTTPMiddleware):
    """
    Gate every non-public request on a valid bearer token.

    On success the resolved identity is attached to ``request.state``;
    otherwise the request is answered with 401 and never reaches a route.
    """

    EXEMPT_PATHS = {
        "/",
        "/health",
        "/auth/register",
        "/auth/login",
        "/openapi.json",
        "/docs",
        "/redoc",
        "/favicon.ico"
    }

    async def dispatch(self, request: Request, call_next):
        """Process request and validate authentication."""
        # CORS preflight carries no credentials
        if request.method == "OPTIONS" or request.url.path in self.EXEMPT_PATHS:
            return await call_next(request)

        authorization = request.headers.get("Authorization")
        if not authorization:
            logger.warning(f"Missing Authorization header for {request.url.path}")
            return _unauthorized("Access token required")

        scheme, _, token = authorization.partition(" ")
        token = token.strip()
        if scheme.lower() != "bearer" or not token or " " in token:
            logger.warning(f"Invalid authorization format for {request.url.path}")
            return _unauthorized("Authorization must be in 'Bearer <token>' format")

        try:
            identity = AuthService.validate_token(token)
        except AuthError as e:
            logger.warning(f"Token validation failed for {request.url.path}")
            return _unauthorized(e.message)

        request.state.identity = identity
        request.state.user_id = identity.user_id
        request.state.user_email = identity.email

        logger.debug(f"Authenticated user {identity.user_id} for {request.url.path}")

        return await call_next(request)


def get_current_identity(request: Request) -> Identity:
    """Identity attached by ``AuthenticationMiddleware``."""
    identity = getattr(request.state, "identity", None)
    if identity is None:
        raise AuthError("Access token required", status_code=status.HTTP_401_UNAUTHORIZED)
    return identity
