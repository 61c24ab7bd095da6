"""Project lifecycle: create, partial update, and cascading delete."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping
from typing import Any

from sqlmodel.ext.asyncio.session import AsyncSession

from ..errors import NotFoundError
from ..models import Project
from ..repositories import ProjectRepository, TaskRepository
from .identifiers import parse_identifier

logger = logging.getLogger(__name__)

_MUTABLE_FIELDS = frozenset({"name", "description"})


class ProjectService:
    """High-level business orchestration for ``Project`` entities."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._repository = ProjectRepository(session)
        self._task_repository = TaskRepository(session)

    async def get_project(self, project_id: uuid.UUID | str) -> Project | None:
        """Return the project or ``None``; malformed ids never match."""
        identifier = parse_identifier(project_id)
        if identifier is None:
            return None
        return await self._repository.get(identifier)

    async def require_project(
        self,
        project_id: uuid.UUID | str,
        *,
        error: type[NotFoundError] = NotFoundError,
    ) -> Project:
        """Resolve a project or raise ``error`` (404)."""
        project = await self.get_project(project_id)
        if project is None:
            raise error(f"Project {project_id} not found.")
        return project

    async def list_projects_for_owner(self, owner_id: uuid.UUID) -> list[Project]:
        return await self._repository.list_for_owner(owner_id)

    async def create_project(
        self,
        *,
        owner_id: uuid.UUID,
        name: str,
        description: str | None = None,
    ) -> Project:
        """Persist a project owned by ``owner_id``."""
        project = await self._repository.create(
            owner_id=owner_id,
            name=name,
            description=description,
        )
        await self._session.commit()
        logger.info(
            "Project created",
            extra={"project_id": str(project.id), "owner_id": str(owner_id)},
        )
        return project

    async def update_project(self, project: Project, changes: Mapping[str, Any]) -> Project:
        """Apply the present keys of ``changes``; ownership is never reassigned here."""
        applied = {key: value for key, value in changes.items() if key in _MUTABLE_FIELDS}
        project = await self._repository.update(project, applied)
        await self._session.commit()
        logger.info(
            "Project updated",
            extra={"project_id": str(project.id), "fields": sorted(applied)},
        )
        return project

    async def delete_project(self, project: Project) -> int:
        """Delete the project together with its tasks; return the task count removed."""
        project_id = project.id
        removed = await self._task_repository.delete_for_project(project_id)
        await self._repository.delete(project)
        await self._session.commit()
        logger.info(
            "Project deleted",
            extra={"project_id": str(project_id), "tasks_removed": removed},
        )
        return removed


__all__ = ["ProjectService"]
