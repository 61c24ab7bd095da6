"""Ownership-based authorization predicates.

Every predicate is a pure function of ``(actor, target)``: it reads ids off
the objects it is given and never touches the session. Handlers look the
predicate up in ``POLICY_REGISTRY`` by ``(Action, ResourceKind)`` and call
``authorize`` before any mutation.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from .errors import ForbiddenError


@runtime_checkable
class Actor(Protocol):
    id: uuid.UUID


@runtime_checkable
class OwnedProject(Protocol):
    owner_id: uuid.UUID


@runtime_checkable
class ScopedTask(Protocol):
    assignee_id: uuid.UUID | None
    project: OwnedProject


class Action(str, Enum):
    LIST = "list"
    VIEW = "view"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    RESTORE = "restore"
    FORCE_DELETE = "force_delete"


class ResourceKind(str, Enum):
    PROJECT = "project"
    TASK = "task"


def _is_authenticated(actor: Actor | None) -> bool:
    return actor is not None and getattr(actor, "id", None) is not None


def _owns(actor: Actor | None, project: OwnedProject) -> bool:
    return _is_authenticated(actor) and actor.id == project.owner_id  # type: ignore[union-attr]


# Projects


def can_list_projects(actor: Actor | None, _: Any = None) -> bool:
    """Any authenticated user may list; results are scoped to their own projects."""
    return _is_authenticated(actor)


def can_create_project(actor: Actor | None, _: Any = None) -> bool:
    return _is_authenticated(actor)


def can_view_project(actor: Actor | None, project: OwnedProject) -> bool:
    return _owns(actor, project)


def can_update_project(actor: Actor | None, project: OwnedProject) -> bool:
    return _owns(actor, project)


def can_delete_project(actor: Actor | None, project: OwnedProject) -> bool:
    return _owns(actor, project)


# Tasks


def can_list_tasks(actor: Actor | None, project: OwnedProject) -> bool:
    """Listing a project's tasks requires view rights on the project itself."""
    return can_view_project(actor, project)


def can_create_task(actor: Actor | None, project: OwnedProject) -> bool:
    """Only the project owner may add tasks; assignees cannot create siblings."""
    return can_update_project(actor, project)


def _is_assignee(actor: Actor | None, task: ScopedTask) -> bool:
    return (
        _is_authenticated(actor)
        and task.assignee_id is not None
        and actor.id == task.assignee_id  # type: ignore[union-attr]
    )


def can_view_task(actor: Actor | None, task: ScopedTask) -> bool:
    return _owns(actor, task.project) or _is_assignee(actor, task)


def can_update_task(actor: Actor | None, task: ScopedTask) -> bool:
    return _owns(actor, task.project) or _is_assignee(actor, task)


def can_delete_task(actor: Actor | None, task: ScopedTask) -> bool:
    return _owns(actor, task.project)


def _never(actor: Actor | None, target: Any = None) -> bool:
    return False


Predicate = Callable[[Any, Any], bool]

POLICY_REGISTRY: dict[tuple[Action, ResourceKind], Predicate] = {
    (Action.LIST, ResourceKind.PROJECT): can_list_projects,
    (Action.CREATE, ResourceKind.PROJECT): can_create_project,
    (Action.VIEW, ResourceKind.PROJECT): can_view_project,
    (Action.UPDATE, ResourceKind.PROJECT): can_update_project,
    (Action.DELETE, ResourceKind.PROJECT): can_delete_project,
    (Action.LIST, ResourceKind.TASK): can_list_tasks,
    (Action.CREATE, ResourceKind.TASK): can_create_task,
    (Action.VIEW, ResourceKind.TASK): can_view_task,
    (Action.UPDATE, ResourceKind.TASK): can_update_task,
    (Action.DELETE, ResourceKind.TASK): can_delete_task,
    (Action.RESTORE, ResourceKind.TASK): _never,
    (Action.FORCE_DELETE, ResourceKind.TASK): _never,
}


def get_policy(action: Action, kind: ResourceKind) -> Predicate:
    """Return the predicate registered for ``(action, kind)``; unknown pairs deny."""
    return POLICY_REGISTRY.get((action, kind), _never)


def is_allowed(actor: Actor | None, action: Action, kind: ResourceKind, target: Any = None) -> bool:
    """Evaluate the registered predicate without raising."""
    return get_policy(action, kind)(actor, target)


def authorize(actor: Actor | None, action: Action, kind: ResourceKind, target: Any = None) -> None:
    """Raise ``ForbiddenError`` unless ``actor`` may perform ``action`` on ``target``.

    For ``(CREATE, TASK)`` and ``(LIST, TASK)`` the target is the parent project.
    """
    if not is_allowed(actor, action, kind, target):
        raise ForbiddenError(
            f"You are not permitted to {action.value.replace('_', ' ')} this {kind.value}.",
            details={"action": action.value, "resource": kind.value},
        )


__all__ = [
    "Action",
    "Actor",
    "OwnedProject",
    "POLICY_REGISTRY",
    "ResourceKind",
    "ScopedTask",
    "authorize",
    "can_create_project",
    "can_create_task",
    "can_delete_project",
    "can_delete_task",
    "can_list_projects",
    "can_list_tasks",
    "can_update_project",
    "can_update_task",
    "can_view_project",
    "can_view_task",
    "get_policy",
    "is_allowed",
]
