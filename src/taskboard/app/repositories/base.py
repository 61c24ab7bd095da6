"""Generic entity store operations over an asynchronous SQLModel session.

Repositories flush but never commit; the calling service owns the unit of
work and decides when to commit.
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from ..models import TimestampMixin

ModelType = TypeVar("ModelType", bound=SQLModel)


class BaseRepository(Generic[ModelType]):
    """Create/find/update/delete for one model type."""

    def __init__(self, session: AsyncSession, model_type: type[ModelType]) -> None:
        self._session = session
        self._model_type = model_type

    @property
    def session(self) -> AsyncSession:
        """Return the session associated with the repository."""
        return self._session

    async def get(self, entity_id: uuid.UUID) -> ModelType | None:
        """Return the entity with primary key ``entity_id`` or ``None``."""
        return await self._session.get(self._model_type, entity_id)

    async def create(self, **fields: Any) -> ModelType:
        """Insert a new row and read back server-generated values."""
        instance = self._model_type(**fields)
        self._session.add(instance)
        await self._session.flush()
        await self._session.refresh(instance)
        return instance

    async def update(self, instance: ModelType, changes: Mapping[str, Any]) -> ModelType:
        """Assign only the keys present in ``changes``; other columns stay untouched."""
        for field, value in changes.items():
            setattr(instance, field, value)
        if changes and isinstance(instance, TimestampMixin):
            instance.touch()
        self._session.add(instance)
        await self._session.flush()
        await self._session.refresh(instance)
        return instance

    async def delete(self, instance: ModelType) -> None:
        """Delete an entity instance and flush the change."""
        await self._session.delete(instance)
        await self._session.flush()
