"""Service layer orchestrating user-related repository operations."""

from __future__ import annotations

import uuid

from sqlmodel.ext.asyncio.session import AsyncSession

from ..core.security import get_password_hash
from ..models import User
from ..repositories import UserRepository


class UserService:
    """High-level business operations for ``User`` entities."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._repository = UserRepository(session)

    async def create_user(
        self,
        *,
        email: str,
        password: str,
        name: str | None = None,
        is_active: bool = True,
    ) -> User:
        """Create and persist a new user record."""
        user = await self._repository.create(
            email=email.strip().lower(),
            name=name,
            is_active=is_active,
            hashed_password=get_password_hash(password),
        )
        await self._session.commit()
        return user

    async def get_user(self, user_id: uuid.UUID) -> User | None:
        """Fetch a user by primary key."""
        return await self._repository.get(user_id)

    async def get_user_by_email(self, email: str) -> User | None:
        """Fetch a user by their unique email address."""
        return await self._repository.get_by_email(email)
