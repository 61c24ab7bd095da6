"""Registration, login and logout routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from fastapi.security import OAuth2PasswordRequestForm

from ...core.config import Settings
from ...core.security import AccessToken
from ...deps import (
    CurrentUserDependency,
    DatabaseSessionDependency,
    SettingsDependency,
    TokenPayloadDependency,
)
from ...models import User
from ...schemas import AccessTokenResponse, AuthResponse, RegisterRequest, UserPublic
from ...services import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


def _auth_response(user: User, token: AccessToken, settings: Settings) -> AuthResponse:
    return AuthResponse(
        user=UserPublic.model_validate(user),
        token=AccessTokenResponse(
            access_token=token.token,
            expires_in=settings.access_token_expire_minutes * 60,
        ),
    )


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user account",
)
async def register(
    payload: RegisterRequest,
    session: DatabaseSessionDependency,
    settings: SettingsDependency,
) -> AuthResponse:
    service = AuthService(session, settings)
    user = await service.register_user(
        email=payload.email,
        password=payload.password,
        name=payload.name,
    )
    return _auth_response(user, service.issue_token(user), settings)


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Authenticate using email and password",
)
async def login(
    session: DatabaseSessionDependency,
    settings: SettingsDependency,
    form_data: OAuth2PasswordRequestForm = Depends(),
) -> AuthResponse:
    service = AuthService(session, settings)
    user = await service.authenticate_user(form_data.username, form_data.password)
    return _auth_response(user, service.issue_token(user), settings)


@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Revoke the presented access token",
)
async def logout(
    _: CurrentUserDependency,
    payload: TokenPayloadDependency,
    session: DatabaseSessionDependency,
    settings: SettingsDependency,
) -> Response:
    AuthService(session, settings).revoke_token(payload)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/user", response_model=UserPublic, summary="Return the authenticated user")
async def read_current_user(current_user: CurrentUserDependency) -> UserPublic:
    return UserPublic.model_validate(current_user)
