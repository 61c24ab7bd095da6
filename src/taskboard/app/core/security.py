"""Password hashing and bearer token helpers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from threading import Lock
from typing import Any
from uuid import UUID, uuid4

from jose import JWTError, jwt
from passlib.context import CryptContext

from .config import Settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


@dataclass(slots=True)
class AccessToken:
    """A signed bearer token together with its identifying claims."""

    token: str
    expires_at: datetime
    jti: str


def get_password_hash(password: str) -> str:
    """Return a bcrypt hash of ``password``."""

    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against its hashed counterpart."""

    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(
    *,
    subject: UUID | str,
    settings: Settings,
    expires_delta: timedelta | None = None,
) -> AccessToken:
    """Issue a signed JWT whose ``sub`` claim identifies the user."""

    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    expire = now + expires_delta
    jti = uuid4().hex
    payload: dict[str, Any] = {
        "sub": str(subject),
        "iat": now,
        "exp": expire,
        "jti": jti,
    }
    token = jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)
    return AccessToken(token=token, expires_at=expire, jti=jti)


def decode_access_token(token: str, settings: Settings) -> dict[str, Any]:
    """Decode and verify a JWT, raising ``JWTError`` when it is not acceptable."""

    return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])


class TokenBlacklist:
    """Stores identifiers for revoked tokens until their expiration."""

    def __init__(self) -> None:
        self._revoked: dict[str, datetime] = {}
        self._lock = Lock()

    def add(self, jti: str, expires_at: datetime) -> None:
        with self._lock:
            self._purge_locked(datetime.now(timezone.utc))
            self._revoked[jti] = expires_at

    def is_revoked(self, jti: str) -> bool:
        with self._lock:
            self._purge_locked(datetime.now(timezone.utc))
            return jti in self._revoked

    def _purge_locked(self, current: datetime) -> None:
        expired = [key for key, expiry in self._revoked.items() if expiry <= current]
        for key in expired:
            del self._revoked[key]

    def clear(self) -> None:
        with self._lock:
            self._revoked.clear()


token_blacklist = TokenBlacklist()


__all__ = [
    "AccessToken",
    "JWTError",
    "TokenBlacklist",
    "create_access_token",
    "decode_access_token",
    "get_password_hash",
    "token_blacklist",
    "verify_password",
]
