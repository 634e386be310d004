"""
Works API - Pydantic Request/Response Schemas
==============================================

What:  Pydantic models defining the API contract for the works resource.
How:   FastAPI uses these to parse request bodies, serialize responses, and
       generate the OpenAPI document served at /docs.

Request fields are optional on purpose: presence of `title` and
`description` is checked by WorkService, so a missing field takes the same
path as any other failed create (HTTP 500) instead of FastAPI's 422.
"""

import uuid
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class WorkPayload(BaseModel):
    """
    Body of POST /api/works and PUT /api/works/{id}.

    Numbers and booleans are cast to their text form ("123", "true");
    objects and arrays are rejected, which the works routes turn into the
    operation's 500 response.
    """
    title: Optional[str] = Field(default=None, description="Title of the work")
    description: Optional[str] = Field(default=None, description="Description of the work")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"title": "Work 1", "description": "Work Description"},
        }
    )

    @field_validator("title", "description", mode="before")
    @classmethod
    def cast_scalar_to_text(cls, v: Any) -> Any:
        if isinstance(v, bool):
            return "true" if v else "false"
        if isinstance(v, (int, float)):
            return str(v)
        return v


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class WorkResponse(BaseModel):
    """
    What:  Full representation of a stored work.
    Who:   Returned by every works endpoint, alone, in a list, or wrapped.
    """
    id: uuid.UUID = Field(description="The auto-generated id of the work")
    title: str = Field(description="Title of the work")
    description: str = Field(description="Description of the work")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "0b6f2c9e-3d8a-4f7e-9a51-2c4d6e8f1a3b",
                "title": "Work 1",
                "description": "Work Description",
            },
        },
    )


class WorkCreatedResponse(BaseModel):
    """Returned by POST /api/works; serialized with the `newWork` key."""
    message: str = Field(default="new work created")
    new_work: WorkResponse = Field(alias="newWork")

    model_config = ConfigDict(populate_by_name=True)


class WorkDeletedResponse(BaseModel):
    """Returned by DELETE /api/works/{id}; `work` is the removed item."""
    message: str = Field(default="work deleted")
    work: WorkResponse


class MessageResponse(BaseModel):
    """Error body: 404 and 500 responses carry only a message."""
    message: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    """Returned by GET /health."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
