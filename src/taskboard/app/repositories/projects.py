"""Repository for project persistence."""

from __future__ import annotations

import uuid

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from ..models import Project
from .base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    """Concrete repository encapsulating ``Project`` persistence operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Project)

    async def list_for_owner(self, owner_id: uuid.UUID) -> list[Project]:
        """Return the projects owned by ``owner_id``, oldest first."""
        result = await self.session.execute(
            select(Project)
            .where(Project.owner_id == owner_id)
            .order_by(Project.created_at, Project.id)
        )
        return list(result.scalars().all())
