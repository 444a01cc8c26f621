"""Base Pydantic schemas shared by the API."""

from datetime import datetime
from typing import Any, Dict

from pydantic import BaseModel, Field, field_validator


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    class Config:
        from_attributes = True
        populate_by_name = True
        str_strip_whitespace = True
        validate_assignment = True


class ErrorResponse(BaseSchema):
    """Body of every error response."""

    error: str = Field(description="Human-readable error message")


class MessageResponse(BaseSchema):
    """Plain acknowledgement."""

    message: str = Field(description="Outcome message")


class HealthCheckResponse(BaseSchema):
    """Health check response schema."""

    status: str = Field(description="Service status: healthy, degraded, unhealthy")
    timestamp: datetime = Field(description="Health check timestamp")
    version: str = Field(description="Service version")
    environment: str = Field(description="Environment name")

    dependencies: Dict[str, Dict[str, Any]] = Field(
        description="Dependency health status"
    )

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: str) -> str:
        valid_statuses = {"healthy", "degraded", "unhealthy"}
        if v not in valid_statuses:
            raise ValueError(f"Status must be one of: {valid_statuses}")
        return v
