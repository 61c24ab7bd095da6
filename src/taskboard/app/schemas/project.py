"""Project request and response schemas."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

PROJECT_READ_EXAMPLE = {
    "id": "2f0c6f1e-8a8b-4c55-9f1a-3a8f2b1f6d10",
    "name": "Website relaunch",
    "description": "Everything needed for the Q3 relaunch.",
    "owner_id": "8d7e3c52-41f4-4bde-a0a6-5d1b0d4e9b27",
    "created_at": "2024-01-01T12:00:00Z",
    "updated_at": "2024-01-02T08:30:00Z",
}


class ProjectCreate(BaseModel):
    """Payload for creating a project; the owner is always the caller."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Website relaunch",
                "description": "Everything needed for the Q3 relaunch.",
            }
        }
    )

    name: str = Field(min_length=1, max_length=255)
    description: str | None = None


class ProjectUpdate(BaseModel):
    """Partial update: only keys present in the body are applied."""

    model_config = ConfigDict(json_schema_extra={"example": {"name": "Website relaunch v2"}})

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None

    @field_validator("name")
    @classmethod
    def _name_not_null(cls, value: str | None) -> str:
        if value is None:
            raise ValueError("The name field may not be null.")
        return value


class ProjectRead(BaseModel):
    """Public representation of a project."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={"example": PROJECT_READ_EXAMPLE},
    )

    id: uuid.UUID
    name: str
    description: str | None = None
    owner_id: uuid.UUID
    created_at: datetime
    updated_at: datetime


__all__ = ["ProjectCreate", "ProjectRead", "ProjectUpdate"]
