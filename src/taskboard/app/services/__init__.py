"""Domain service layer package."""

from __future__ import annotations

from .auth import AuthService
from .projects import ProjectService
from .tasks import TaskService
from .users import UserService

__all__ = ["AuthService", "ProjectService", "TaskService", "UserService"]
