"""Task models. Tasks live inside exactly one project and may be assigned to a user."""

# No ``from __future__ import annotations`` here: SQLModel resolves the
# ``Relationship`` target from the literal annotation string.

import uuid
from enum import Enum

import sqlalchemy as sa
from sqlmodel import Field, Relationship, SQLModel

from .common import TimestampMixin, new_identifier
from .project import Project


class TaskStatus(str, Enum):
    """Task states. Transitions are unrestricted: any state may follow any other."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class TaskBase(SQLModel, table=False):
    """Shared attributes for task models."""

    title: str = Field(
        max_length=255,
        sa_column=sa.Column(sa.String(length=255), nullable=False),
    )
    description: str | None = Field(
        default=None,
        sa_column=sa.Column(sa.Text(), nullable=True),
    )
    status: TaskStatus = Field(
        default=TaskStatus.PENDING,
        sa_column=sa.Column(
            sa.Enum(
                TaskStatus,
                name="task_status",
                native_enum=False,
                validate_strings=True,
                values_callable=lambda members: [member.value for member in members],
            ),
            nullable=False,
            server_default=TaskStatus.PENDING.value,
        ),
    )


class Task(TaskBase, TimestampMixin, table=True):
    """Persistent task model."""

    __tablename__ = "tasks"
    __table_args__ = (
        sa.CheckConstraint("length(title) > 0", name="ck_tasks_title_length"),
        sa.Index("ix_tasks_project_id", "project_id"),
        sa.Index("ix_tasks_assignee_id", "assignee_id"),
    )

    id: uuid.UUID = Field(default_factory=new_identifier, primary_key=True)
    project_id: uuid.UUID = Field(
        sa_column=sa.Column(
            sa.Uuid(),
            sa.ForeignKey("projects.id", ondelete="CASCADE"),
            nullable=False,
        ),
    )
    creator_id: uuid.UUID = Field(
        sa_column=sa.Column(
            sa.Uuid(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
    )
    assignee_id: uuid.UUID | None = Field(
        default=None,
        sa_column=sa.Column(
            sa.Uuid(),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
    )
    # Loaded eagerly so task policies can read ``task.project.owner_id``
    # without lazy I/O on the async session.
    project: Project = Relationship(sa_relationship_kwargs={"lazy": "selectin"})


__all__ = ["Task", "TaskBase", "TaskStatus"]
