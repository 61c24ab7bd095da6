"""Service layer encapsulating task-related operations."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping
from typing import Any

from sqlmodel.ext.asyncio.session import AsyncSession

from ..errors import NotFoundError, ValidationFailedError
from ..models import Project, Task, TaskStatus
from ..repositories import TaskRepository, UserRepository
from ..schemas import TaskUpdate
from ..validation import merge_field_errors, present_fields, validate_payload
from .identifiers import parse_identifier

logger = logging.getLogger(__name__)

_MUTABLE_FIELDS = frozenset({"title", "description", "status", "assignee_id"})
_UNKNOWN_ASSIGNEE = "The selected assignee does not exist."


class TaskService:
    """High-level business orchestration for ``Task`` entities."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._repository = TaskRepository(session)
        self._user_repository = UserRepository(session)

    async def get_task(self, task_id: uuid.UUID | str) -> Task | None:
        """Return the task (with its project loaded) or ``None``."""
        identifier = parse_identifier(task_id)
        if identifier is None:
            return None
        return await self._repository.get(identifier)

    async def require_task(self, task_id: uuid.UUID | str) -> Task:
        task = await self.get_task(task_id)
        if task is None:
            raise NotFoundError(f"Task {task_id} not found.")
        return task

    async def list_tasks_for_project(self, project_id: uuid.UUID) -> list[Task]:
        return await self._repository.list_for_project(project_id)

    async def list_tasks_for_assignee(self, assignee_id: uuid.UUID) -> list[Task]:
        return await self._repository.list_for_assignee(assignee_id)

    async def create_task(
        self,
        *,
        project: Project,
        creator_id: uuid.UUID,
        title: str,
        description: str | None = None,
        status: TaskStatus = TaskStatus.PENDING,
    ) -> Task:
        """Create an unassigned task inside ``project``."""
        task = await self._repository.create(
            project_id=project.id,
            creator_id=creator_id,
            title=title,
            description=description,
            status=status,
        )
        await self._session.commit()
        logger.info(
            "Task created",
            extra={"task_id": str(task.id), "project_id": str(project.id), "creator_id": str(creator_id)},
        )
        return task

    async def _assignee_errors(self, assignee_id: uuid.UUID | None) -> dict[str, list[str]]:
        if assignee_id is None or await self._user_repository.get(assignee_id) is not None:
            return {}
        return {"assignee_id": [_UNKNOWN_ASSIGNEE]}

    async def _ensure_assignee_exists(self, assignee_id: uuid.UUID | None) -> None:
        errors = await self._assignee_errors(assignee_id)
        if errors:
            raise ValidationFailedError(errors)

    async def validate_changes(self, payload: Any) -> dict[str, Any]:
        """Validate an update body, reporting schema and assignee errors together.

        The assignee lookup still runs when other fields fail, as long as the
        sent assignee is a well-formed identifier.
        """
        try:
            return present_fields(validate_payload(TaskUpdate, payload))
        except ValidationFailedError as exc:
            schema_errors = exc.errors
        assignee_errors: dict[str, list[str]] = {}
        if isinstance(payload, Mapping) and "assignee_id" not in schema_errors:
            sent = payload.get("assignee_id", payload.get("assignee"))
            if isinstance(sent, str):
                assignee_errors = await self._assignee_errors(parse_identifier(sent))
        raise ValidationFailedError(merge_field_errors(schema_errors, assignee_errors))

    async def update_task(self, task: Task, changes: Mapping[str, Any]) -> Task:
        """Apply the present keys of ``changes``; ``project_id`` and ``creator_id`` are fixed."""
        applied = {key: value for key, value in changes.items() if key in _MUTABLE_FIELDS}
        if "assignee_id" in applied:
            await self._ensure_assignee_exists(applied["assignee_id"])
        task = await self._repository.update(task, applied)
        await self._session.commit()
        logger.info(
            "Task updated",
            extra={"task_id": str(task.id), "fields": sorted(applied)},
        )
        return task

    async def delete_task(self, task: Task) -> None:
        task_id = task.id
        await self._repository.delete(task)
        await self._session.commit()
        logger.info("Task deleted", extra={"task_id": str(task_id)})


__all__ = ["TaskService"]
