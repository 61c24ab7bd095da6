"""Repository for task persistence."""

from __future__ import annotations

import uuid

from sqlalchemy import delete
from sqlalchemy.orm import selectinload
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from ..models import Task
from .base import BaseRepository


class TaskRepository(BaseRepository[Task]):
    """Concrete repository encapsulating ``Task`` persistence operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Task)

    async def get(self, entity_id: uuid.UUID) -> Task | None:
        """Return the task with its parent project populated, or ``None``."""
        result = await self.session.execute(
            select(Task)
            .where(Task.id == entity_id)
            .options(selectinload(Task.project))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_for_project(self, project_id: uuid.UUID) -> list[Task]:
        """Return all tasks contained in the given project, oldest first."""
        result = await self.session.execute(
            select(Task)
            .where(Task.project_id == project_id)
            .order_by(Task.created_at, Task.id)
        )
        return list(result.scalars().all())

    async def list_for_assignee(self, assignee_id: uuid.UUID) -> list[Task]:
        """Return every task currently assigned to the given user."""
        result = await self.session.execute(
            select(Task)
            .where(Task.assignee_id == assignee_id)
            .order_by(Task.created_at, Task.id)
        )
        return list(result.scalars().all())

    async def delete_for_project(self, project_id: uuid.UUID) -> int:
        """Delete all tasks of a project and return how many rows were removed."""
        result = await self.session.execute(
            delete(Task).where(Task.project_id == project_id)
        )
        await self.session.flush()
        return int(result.rowcount or 0)
