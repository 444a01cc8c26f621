"""Main FastAPI application for the CineCollection service."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from cinecollection import __version__
from cinecollection.api.routes import auth, entries, health
from cinecollection.core.database import get_database
from cinecollection.core.exceptions import CatalogAppError, InternalError
from cinecollection.core.settings import get_settings
from cinecollection.middleware.auth import AuthenticationMiddleware
from cinecollection.middleware.logging import LoggingMiddleware, configure_logging

# Initialize logging
configure_logging()

logger = logging.getLogger(__name__)
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management."""
    # Startup
    await get_database().connect()
    yield
    # Shutdown
    await get_database().disconnect()


app = FastAPI(
    title="CineCollection",
    description="Personal movie and TV-show catalog",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if not settings.is_production else None,
    redoc_url="/redoc" if not settings.is_production else None,
    openapi_url="/openapi.json" if not settings.is_production else None,
)

# Custom middleware stack (last added runs first)
app.add_middleware(AuthenticationMiddleware)
app.add_middleware(LoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)

app.add_middleware(
    TrustedHostMiddleware,
    allowed_hosts=settings.allowed_hosts
)


# Exception handlers
def _error(status_code: int, message: str, headers: dict = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


@app.exception_handler(CatalogAppError)
async def catalog_error_handler(request: Request, exc: CatalogAppError):
    """Render application errors as ``{"error": message}``."""
    if isinstance(exc, InternalError):
        logger.error(f"Internal error on {request.method} {request.url.path}: {exc.message}")
        return _error(exc.status_code, InternalError.default_message)
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return _error(exc.status_code, exc.message, headers)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions (unknown routes, bad methods)."""
    return _error(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies and query parameters are client errors (400)."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query"))
        message = f"Invalid {location}: {first.get('msg')}" if location else first.get("msg")
    else:
        message = "Invalid request"
    return _error(400, message)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Log unexpected failures in full; never leak them to the caller."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return _error(500, InternalError.default_message)


# Routes
app.include_router(health.router, prefix="", tags=["system"])
app.include_router(auth.router)
app.include_router(entries.router)


if __name__ == "__main__":
    uvicorn.run(
        "cinecollection.main:app",
        host="0.0.0.0",
        port=5000,
        reload=settings.is_development,
        log_level=settings.log_level.lower(),
    )
