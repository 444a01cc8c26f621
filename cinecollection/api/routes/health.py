"""Health check and system endpoints."""

import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from cinecollection import __version__
from cinecollection.core.database import get_db_session
from cinecollection.core.settings import get_settings
from cinecollection.schemas.base import HealthCheckResponse

router = APIRouter()
settings = get_settings()


@router.get("/health", response_model=HealthCheckResponse)
async def health_check(session: AsyncSession = Depends(get_db_session)):
    """
    Service health check endpoint.

    Reports overall status and database connectivity.
    """
    health_data = {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc),
        "version": __version__,
        "environment": settings.environment,
        "dependencies": {},
    }

    started = time.perf_counter()
    try:
        result = await session.execute(text("SELECT 1 as health_check"))
        if result.scalar() != 1:
            raise SQLAlchemyError("Unexpected database response")
        health_data["dependencies"]["database"] = {
            "status": "healthy",
            "response_time_ms": round((time.perf_counter() - started) * 1000, 2),
            "details": "Connection successful",
        }
    except SQLAlchemyError as e:
        health_data["dependencies"]["database"] = {
            "status": "unhealthy",
            "error": str(e),
            "details": "Database connection failed",
        }
        health_data["status"] = "unhealthy"

    return HealthCheckResponse(**health_data)


@router.get("/")
async def root():
    """Describe the service and its endpoints."""
    return {
        "service": "cinecollection",
        "version": __version__,
        "status": "running",
        "endpoints": {
            "auth": {
                "register": "POST /auth/register",
                "login": "POST /auth/login",
                "me": "GET /auth/me",
            },
            "entries": {
                "list": "GET /entries?page&limit&search",
                "get": "GET /entries/{id}",
                "create": "POST /entries",
                "update": "PUT /entries/{id}",
                "delete": "DELETE /entries/{id}",
            },
        },
    }
