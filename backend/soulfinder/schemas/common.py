"""
SoulFinder Backend: Shared Response Schemas
=============================================

What:  Error, health and generic acknowledgement bodies shared by every router,
       and the integer bound applied to inputs that reach store queries.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field

# Largest integer BSON can encode (int64); integer inputs that reach a store
# query are capped here so oversized values fail validation with 400.
BSON_INT64_MAX = 2**63 - 1


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Example:
        {
            "error": "conflict",
            "message": "Already added to favorites.",
            "details": null,
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class MessageResponse(BaseModel):
    """Acknowledgement for mutations that return no resource."""
    message: str
    count: Optional[int] = Field(default=None, description="Number of affected records, when meaningful")


class HealthResponse(BaseModel):
    """Health check response showing service and dependency status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")


def check_bson_integers(value: Any, path: str = "body") -> None:
    """Raise ValueError when any integer nested in `value` does not fit in int64."""
    if isinstance(value, bool):
        return
    if isinstance(value, int):
        if not -BSON_INT64_MAX - 1 <= value <= BSON_INT64_MAX:
            raise ValueError(f"{path} is outside the 64-bit integer range")
    elif isinstance(value, dict):
        for key, item in value.items():
            check_bson_integers(item, f"{path}.{key}")
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            check_bson_integers(item, f"{path}[{index}]")
