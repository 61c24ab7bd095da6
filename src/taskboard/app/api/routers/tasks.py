"""Task resource routes, nested under projects for listing and creation."""

from __future__ import annotations

from fastapi import APIRouter, Request, Response, status

from ...deps import CurrentUserDependency, DatabaseSessionDependency
from ...errors import ParentNotFoundError
from ...policies import Action, ResourceKind, authorize
from ...schemas import TaskCreate, TaskRead
from ...services import ProjectService, TaskService
from ...validation import read_payload, validate_payload

router = APIRouter(tags=["tasks"])

@router.get(
    "/projects/{project_id}/tasks",
    response_model=list[TaskRead],
    summary="List the tasks of a project",
)
async def list_project_tasks(
    project_id: str,
    session: DatabaseSessionDependency,
    current_user: CurrentUserDependency,
) -> list[TaskRead]:
    project = await ProjectService(session).require_project(project_id)
    authorize(current_user, Action.LIST, ResourceKind.TASK, project)
    tasks = await TaskService(session).list_tasks_for_project(project.id)
    return [TaskRead.model_validate(task) for task in tasks]


@router.post(
    "/projects/{project_id}/tasks",
    response_model=TaskRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a task in a project",
)
async def create_task(
    project_id: str,
    session: DatabaseSessionDependency,
    current_user: CurrentUserDependency,
    request: Request,
) -> TaskRead:
    project = await ProjectService(session).require_project(project_id, error=ParentNotFoundError)
    authorize(current_user, Action.CREATE, ResourceKind.TASK, project)
    data = validate_payload(TaskCreate, await read_payload(request))
    task = await TaskService(session).create_task(
        project=project,
        creator_id=current_user.id,
        title=data.title,
        description=data.description,
        status=data.status,
    )
    return TaskRead.model_validate(task)


@router.get("/tasks/{task_id}", response_model=TaskRead, summary="Retrieve a task")
async def get_task(
    task_id: str,
    session: DatabaseSessionDependency,
    current_user: CurrentUserDependency,
) -> TaskRead:
    task = await TaskService(session).require_task(task_id)
    authorize(current_user, Action.VIEW, ResourceKind.TASK, task)
    return TaskRead.model_validate(task)


@router.api_route(
    "/tasks/{task_id}",
    methods=["PUT", "PATCH"],
    response_model=TaskRead,
    summary="Update a task's fields, status or assignee",
)
async def update_task(
    task_id: str,
    session: DatabaseSessionDependency,
    current_user: CurrentUserDependency,
    request: Request,
) -> TaskRead:
    service = TaskService(session)
    task = await service.require_task(task_id)
    authorize(current_user, Action.UPDATE, ResourceKind.TASK, task)
    changes = await service.validate_changes(await read_payload(request))
    task = await service.update_task(task, changes)
    return TaskRead.model_validate(task)


@router.delete(
    "/tasks/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a task",
)
async def delete_task(
    task_id: str,
    session: DatabaseSessionDependency,
    current_user: CurrentUserDependency,
) -> Response:
    service = TaskService(session)
    task = await service.require_task(task_id)
    authorize(current_user, Action.DELETE, ResourceKind.TASK, task)
    await service.delete_task(task)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
