"""Reusable FastAPI dependencies."""

from __future__ import annotations

import uuid
from collections.abc import AsyncIterator
from typing import Annotated

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from pydantic import ValidationError
from sqlmodel.ext.asyncio.session import AsyncSession

from .core.config import Settings, get_settings
from .core.security import JWTError, decode_access_token, token_blacklist
from .db.session import get_session
from .errors import UnauthenticatedError
from .models import User
from .repositories import UserRepository
from .schemas.auth import TokenPayload

_oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login", auto_error=False)


async def get_db_session() -> AsyncIterator[AsyncSession]:
    """FastAPI dependency that yields a database session."""

    async for session in get_session():
        yield session


SettingsDependency = Annotated[Settings, Depends(get_settings)]
DatabaseSessionDependency = Annotated[AsyncSession, Depends(get_db_session)]


async def get_token_payload(
    settings: SettingsDependency,
    token: str | None = Depends(_oauth2_scheme),
) -> TokenPayload:
    """Decode the bearer credential; any defect is a 401."""

    if not token:
        raise UnauthenticatedError("Not authenticated.")
    try:
        payload = TokenPayload.model_validate(decode_access_token(token, settings))
    except (JWTError, ValidationError) as exc:
        raise UnauthenticatedError() from exc
    if token_blacklist.is_revoked(payload.jti):
        raise UnauthenticatedError("Token has been revoked.")
    return payload


TokenPayloadDependency = Annotated[TokenPayload, Depends(get_token_payload)]


async def get_current_user(
    payload: TokenPayloadDependency,
    session: DatabaseSessionDependency,
) -> User:
    """Resolve the actor for the request from its token subject."""

    try:
        user_id = uuid.UUID(payload.sub)
    except ValueError as exc:
        raise UnauthenticatedError() from exc
    user = await UserRepository(session).get(user_id)
    if user is None or not user.is_active:
        raise UnauthenticatedError()
    return user


CurrentUserDependency = Annotated[User, Depends(get_current_user)]


__all__ = [
    "CurrentUserDependency",
    "DatabaseSessionDependency",
    "SettingsDependency",
    "TokenPayloadDependency",
    "get_current_user",
    "get_db_session",
    "get_token_payload",
]
