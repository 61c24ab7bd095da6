"""Registration, login and token revocation."""

from __future__ import annotations

import logging
from datetime import timezone

from sqlmodel.ext.asyncio.session import AsyncSession

from ..core.config import Settings
from ..core.security import (
    AccessToken,
    create_access_token,
    token_blacklist,
    verify_password,
)
from ..errors import ConflictError, UnauthenticatedError
from ..models import User
from ..schemas.auth import TokenPayload
from .users import UserService

logger = logging.getLogger(__name__)


class AuthService:
    """Authentication workflows backing the ``/auth`` routes."""

    def __init__(self, session: AsyncSession, settings: Settings) -> None:
        self._session = session
        self._settings = settings
        self._user_service = UserService(session)

    async def register_user(
        self,
        *,
        email: str,
        password: str,
        name: str | None = None,
    ) -> User:
        existing = await self._user_service.get_user_by_email(email)
        if existing is not None:
            raise ConflictError("Email is already registered.", code="email_taken")
        user = await self._user_service.create_user(email=email, password=password, name=name)
        logger.info("User registered", extra={"user_id": str(user.id)})
        return user

    async def authenticate_user(self, email: str, password: str) -> User:
        user = await self._user_service.get_user_by_email(email)
        if user is None or not verify_password(password, user.hashed_password):
            raise UnauthenticatedError("Incorrect email or password.")
        if not user.is_active:
            raise UnauthenticatedError("User account is inactive.")
        return user

    def issue_token(self, user: User) -> AccessToken:
        return create_access_token(subject=user.id, settings=self._settings)

    def revoke_token(self, payload: TokenPayload) -> None:
        """Blacklist the token's ``jti`` until it would have expired anyway."""
        expires_at = payload.exp
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        token_blacklist.add(payload.jti, expires_at)
        logger.info("Access token revoked", extra={"user_id": payload.sub})


__all__ = ["AuthService"]
