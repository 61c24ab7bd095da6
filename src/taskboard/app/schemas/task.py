"""Task request and response schemas."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from ..models import TaskStatus

TASK_READ_EXAMPLE = {
    "id": "6b1f0e0a-9c1d-4f3e-8a8e-2f9c7d6b5a41",
    "title": "Draft landing page copy",
    "description": "Hero, features and pricing sections.",
    "status": TaskStatus.PENDING.value,
    "project_id": "2f0c6f1e-8a8b-4c55-9f1a-3a8f2b1f6d10",
    "creator_id": "8d7e3c52-41f4-4bde-a0a6-5d1b0d4e9b27",
    "assignee_id": None,
    "created_at": "2024-01-01T12:00:00Z",
    "updated_at": "2024-01-02T08:30:00Z",
}


class TaskCreate(BaseModel):
    """Payload for creating a task inside a project."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Draft landing page copy",
                "description": "Hero, features and pricing sections.",
                "status": TaskStatus.PENDING.value,
            }
        }
    )

    title: str = Field(min_length=1, max_length=255)
    description: str | None = None
    status: TaskStatus = TaskStatus.PENDING

    @field_validator("status", mode="before")
    @classmethod
    def _status_not_null(cls, value: object) -> object:
        if value is None:
            raise ValueError("The status field may not be null.")
        return value


class TaskUpdate(BaseModel):
    """Partial update: only keys present in the body are applied.

    ``assignee_id`` may be set to ``null`` to unassign the task; whether a
    non-null value names an existing user is checked by the task service.
    The key may also be sent as ``assignee``.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "status": TaskStatus.IN_PROGRESS.value,
                "assignee_id": "0b9c8d7e-6f5a-4b3c-9d2e-1f0a9b8c7d6e",
            }
        }
    )

    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    status: TaskStatus | None = None
    assignee_id: uuid.UUID | None = Field(
        default=None,
        validation_alias=AliasChoices("assignee_id", "assignee"),
    )

    @field_validator("title", "status")
    @classmethod
    def _not_null(cls, value: object, info) -> object:
        if value is None:
            raise ValueError(f"The {info.field_name} field may not be null.")
        return value


class TaskRead(BaseModel):
    """Public representation of a task."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={"example": TASK_READ_EXAMPLE},
    )

    id: uuid.UUID
    title: str
    description: str | None = None
    status: TaskStatus
    project_id: uuid.UUID
    creator_id: uuid.UUID
    assignee_id: uuid.UUID | None = None
    created_at: datetime
    updated_at: datetime


__all__ = ["TaskCreate", "TaskRead", "TaskUpdate"]
