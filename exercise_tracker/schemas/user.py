"""
Exercise Tracker: User Schemas
================================

What:  Pydantic models for user responses and the shared error body.
How:   Ids are exposed under the `_id` key. `populate_by_name` lets services
       build the models with `id=...` while FastAPI serializes by alias.
"""

from pydantic import BaseModel, ConfigDict, Field


class UserResponse(BaseModel):
    """
    What:  A stored user.
    Who:   Items of GET /api/users, body of POST /api/users.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id", description="Opaque user identifier")
    username: str = Field(description="Username given at creation (not unique)")


class ErrorResponse(BaseModel):
    """
    Error body for every failure this API reports.

    Example:
        {"error": "User not found"}
    """
    error: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    status: str = Field(description="healthy or unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
