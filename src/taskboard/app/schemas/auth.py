"""Schemas describing authentication payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from .user import UserPublic


class RegisterRequest(BaseModel):
    """Incoming payload for registering a new user."""

    email: EmailStr
    password: str = Field(min_length=8, max_length=72)
    name: str | None = Field(default=None, max_length=255)


class AccessTokenResponse(BaseModel):
    """Bearer token handed back to clients."""

    access_token: str
    token_type: str = Field(default="bearer", frozen=True)
    expires_in: int


class AuthResponse(BaseModel):
    """Authentication response containing the issued token and user metadata."""

    user: UserPublic
    token: AccessTokenResponse


class TokenPayload(BaseModel):
    """Validated JWT claims."""

    model_config = ConfigDict(extra="ignore")

    sub: str
    exp: datetime
    iat: datetime
    jti: str


__all__ = ["AccessTokenResponse", "AuthResponse", "RegisterRequest", "TokenPayload"]
