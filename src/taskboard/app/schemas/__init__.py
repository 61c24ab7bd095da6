"""Pydantic schemas for public interfaces."""

from __future__ import annotations

from .auth import AccessTokenResponse, AuthResponse, RegisterRequest, TokenPayload
from .project import ProjectCreate, ProjectRead, ProjectUpdate
from .system import ErrorDetails, ErrorResponse, HealthCheckResponse, ReadinessResponse, RootResponse
from .task import TaskCreate, TaskRead, TaskUpdate
from .user import UserPublic

__all__ = [
    "AccessTokenResponse",
    "AuthResponse",
    "ErrorDetails",
    "ErrorResponse",
    "HealthCheckResponse",
    "ProjectCreate",
    "ProjectRead",
    "ProjectUpdate",
    "ReadinessResponse",
    "RegisterRequest",
    "RootResponse",
    "TaskCreate",
    "TaskRead",
    "TaskUpdate",
    "TokenPayload",
    "UserPublic",
]
