"""Project resource routes.

Each handler resolves the target (404), authorizes (403), then validates the
body (422) before touching the store.
"""

from __future__ import annotations

from fastapi import APIRouter, Request, Response, status

from ...deps import CurrentUserDependency, DatabaseSessionDependency
from ...policies import Action, ResourceKind, authorize
from ...schemas import ProjectCreate, ProjectRead, ProjectUpdate
from ...services import ProjectService
from ...validation import present_fields, read_payload, validate_payload

router = APIRouter(prefix="/projects", tags=["projects"])

@router.get("", response_model=list[ProjectRead], summary="List the caller's projects")
async def list_projects(
    session: DatabaseSessionDependency,
    current_user: CurrentUserDependency,
) -> list[ProjectRead]:
    authorize(current_user, Action.LIST, ResourceKind.PROJECT)
    projects = await ProjectService(session).list_projects_for_owner(current_user.id)
    return [ProjectRead.model_validate(project) for project in projects]


@router.post(
    "",
    response_model=ProjectRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a project owned by the caller",
)
async def create_project(
    session: DatabaseSessionDependency,
    current_user: CurrentUserDependency,
    request: Request,
) -> ProjectRead:
    authorize(current_user, Action.CREATE, ResourceKind.PROJECT)
    data = validate_payload(ProjectCreate, await read_payload(request))
    project = await ProjectService(session).create_project(
        owner_id=current_user.id,
        name=data.name,
        description=data.description,
    )
    return ProjectRead.model_validate(project)


@router.get("/{project_id}", response_model=ProjectRead, summary="Retrieve a project")
async def get_project(
    project_id: str,
    session: DatabaseSessionDependency,
    current_user: CurrentUserDependency,
) -> ProjectRead:
    project = await ProjectService(session).require_project(project_id)
    authorize(current_user, Action.VIEW, ResourceKind.PROJECT, project)
    return ProjectRead.model_validate(project)


@router.api_route(
    "/{project_id}",
    methods=["PUT", "PATCH"],
    response_model=ProjectRead,
    summary="Update a project's name or description",
)
async def update_project(
    project_id: str,
    session: DatabaseSessionDependency,
    current_user: CurrentUserDependency,
    request: Request,
) -> ProjectRead:
    service = ProjectService(session)
    project = await service.require_project(project_id)
    authorize(current_user, Action.UPDATE, ResourceKind.PROJECT, project)
    changes = present_fields(validate_payload(ProjectUpdate, await read_payload(request)))
    project = await service.update_project(project, changes)
    return ProjectRead.model_validate(project)


@router.delete(
    "/{project_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a project and all of its tasks",
)
async def delete_project(
    project_id: str,
    session: DatabaseSessionDependency,
    current_user: CurrentUserDependency,
) -> Response:
    service = ProjectService(session)
    project = await service.require_project(project_id)
    authorize(current_user, Action.DELETE, ResourceKind.PROJECT, project)
    await service.delete_project(project)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
