"""
Common schema definitions used across the package.
"""

from typing import Optional, Dict
from pydantic import BaseModel, Field, ConfigDict


class BaseSchema(BaseModel):
    """Base schema with common configuration."""
    model_config = ConfigDict(from_attributes=True)


class Coordinates(BaseModel):
    """Geographic point as used by the map view. Shared between events, so immutable."""
    model_config = ConfigDict(frozen=True)

    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)


class ErrorResponse(BaseModel):
    """Error response."""
    error: str
    detail: Optional[str] = None


class HealthCheckResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
    environment: str
    credentials: Dict[str, bool]
    timestamp: str
