"""Project models. A project has exactly one owner, fixed at creation."""

from __future__ import annotations

import uuid

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

from .common import TimestampMixin, new_identifier


class ProjectBase(SQLModel, table=False):
    """Shared attributes for project models."""

    name: str = Field(
        max_length=255,
        sa_column=sa.Column(sa.String(length=255), nullable=False),
    )
    description: str | None = Field(
        default=None,
        sa_column=sa.Column(sa.Text(), nullable=True),
    )


class Project(ProjectBase, TimestampMixin, table=True):
    """Persistent project model."""

    __tablename__ = "projects"
    __table_args__ = (
        sa.CheckConstraint("length(name) > 0", name="ck_projects_name_length"),
        sa.Index("ix_projects_owner_id", "owner_id"),
    )

    id: uuid.UUID = Field(default_factory=new_identifier, primary_key=True)
    owner_id: uuid.UUID = Field(
        sa_column=sa.Column(
            sa.Uuid(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
    )


__all__ = ["Project", "ProjectBase"]
