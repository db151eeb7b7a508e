"""
Base DTOs for the application layer.
Provides common patterns for request/response data transfer objects.
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class BaseDTO(BaseModel):
    """Base DTO with common configuration."""

    model_config = ConfigDict(
        # Allow population by field name or alias
        populate_by_name=True,
        # Convert enum values to their values
        use_enum_values=True,
        validate_assignment=True,
        extra="forbid",
    )


class RequestDTO(BaseDTO):
    """Base class for request DTOs."""
    pass


class ResponseDTO(BaseDTO):
    """Base class for entity response DTOs."""

    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class HealthCheckResponseDTO(BaseDTO):
    """Health check response DTO."""

    status: str = Field(description="Service status")
    version: Optional[str] = Field(default=None, description="Application version")
    environment: Optional[str] = Field(default=None, description="Deployment environment")
    storage: Optional[str] = Field(default=None, description="Storage backend")


class ErrorBodyDTO(BaseDTO):
    code: str
    message: str
    details: Optional[Dict[str, List[str]]] = None


class ErrorResponseDTO(BaseDTO):
    """Error envelope returned for every handled failure."""

    error: ErrorBodyDTO
