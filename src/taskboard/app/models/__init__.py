"""Persistence models for users, projects and tasks."""

from __future__ import annotations

from .common import TimestampMixin
from .project import Project, ProjectBase
from .task import Task, TaskBase, TaskStatus
from .user import User, UserBase

__all__ = [
    "Project",
    "ProjectBase",
    "Task",
    "TaskBase",
    "TaskStatus",
    "TimestampMixin",
    "User",
    "UserBase",
]
