from __future__ import annotations

import os

os.environ.setdefault("TASKBOARD_ENVIRONMENT", "test")
os.environ.setdefault("TASKBOARD_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("TASKBOARD_JWT_SECRET_KEY", "test-secret")

from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass
from itertools import count

import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from taskboard.app.core.config import get_settings
from taskboard.app.core.security import token_blacklist
from taskboard.app.deps import get_db_session
from taskboard.app.main import create_app
from taskboard.app.models import Project, Task, TaskStatus, User
from taskboard.app.services import ProjectService, TaskService, UserService

API_PREFIX = "/v1"
DEFAULT_PASSWORD = "StrongPass123!"


@dataclass(slots=True)
class AuthenticatedUser:
    user: User
    email: str
    password: str
    access_token: str | None

    @property
    def id(self):
        return self.user.id

    @property
    def headers(self) -> dict[str, str]:
        if not self.access_token:
            raise RuntimeError("User has not been authenticated.")
        return {"Authorization": f"Bearer {self.access_token}"}


UserFactory = Callable[..., Awaitable[AuthenticatedUser]]


@pytest_asyncio.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _connection_record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as connection:
        await connection.run_sync(SQLModel.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest_asyncio.fixture
async def session(engine: AsyncEngine) -> AsyncIterator[AsyncSession]:
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        try:
            yield session
        finally:
            if session.in_transaction():
                await session.rollback()


@pytest_asyncio.fixture
async def app(session: AsyncSession) -> AsyncIterator[FastAPI]:
    get_settings.cache_clear()
    application = create_app()

    async def _override_db_session() -> AsyncIterator[AsyncSession]:
        yield session

    application.dependency_overrides[get_db_session] = _override_db_session
    token_blacklist.clear()
    try:
        yield application
    finally:
        application.dependency_overrides.clear()
        token_blacklist.clear()


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as http_client:
        yield http_client


@pytest_asyncio.fixture
async def user_factory(session: AsyncSession, client: AsyncClient) -> UserFactory:
    user_service = UserService(session)
    counter = count()

    async def _factory(
        *,
        email: str | None = None,
        password: str = DEFAULT_PASSWORD,
        name: str | None = None,
        is_active: bool = True,
        login: bool = True,
    ) -> AuthenticatedUser:
        actual_email = email or f"user-{next(counter)}@example.com"
        user = await user_service.create_user(
            email=actual_email,
            password=password,
            name=name,
            is_active=is_active,
        )
        access_token: str | None = None
        if login:
            response = await client.post(
                f"{API_PREFIX}/auth/login",
                data={"username": actual_email, "password": password},
            )
            assert response.status_code == 200, response.text
            access_token = response.json()["token"]["access_token"]
        return AuthenticatedUser(
            user=user,
            email=actual_email,
            password=password,
            access_token=access_token,
        )

    return _factory


@pytest_asyncio.fixture
async def project_factory(session: AsyncSession) -> Callable[..., Awaitable[Project]]:
    service = ProjectService(session)

    async def _factory(owner: AuthenticatedUser, *, name: str = "Alpha", description: str | None = None) -> Project:
        return await service.create_project(owner_id=owner.id, name=name, description=description)

    return _factory


@pytest_asyncio.fixture
async def task_factory(session: AsyncSession) -> Callable[..., Awaitable[Task]]:
    service = TaskService(session)

    async def _factory(
        project: Project,
        creator: AuthenticatedUser,
        *,
        title: str = "Write tests",
        status: TaskStatus = TaskStatus.PENDING,
        assignee: AuthenticatedUser | None = None,
    ) -> Task:
        task = await service.create_task(
            project=project,
            creator_id=creator.id,
            title=title,
            status=status,
        )
        if assignee is not None:
            task = await service.update_task(task, {"assignee_id": assignee.id})
        return task

    return _factory
