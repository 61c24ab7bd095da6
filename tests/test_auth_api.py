from __future__ import annotations

from datetime import timedelta

from fastapi import status
from httpx import AsyncClient

from taskboard.app.core.config import get_settings
from taskboard.app.core.security import create_access_token, decode_access_token

API_PREFIX = "/v1"
AUTH_URL = f"{API_PREFIX}/auth"


async def test_register_returns_user_and_token(client: AsyncClient) -> None:
    response = await client.post(
        f"{AUTH_URL}/register",
        json={"email": "New.User@Example.com", "password": "StrongPass123!", "name": "New User"},
    )

    assert response.status_code == status.HTTP_201_CREATED
    payload = response.json()
    assert payload["user"]["email"] == "new.user@example.com"
    assert payload["user"]["name"] == "New User"
    assert payload["token"]["token_type"] == "bearer"
    assert payload["token"]["expires_in"] == get_settings().access_token_expire_minutes * 60

    claims = decode_access_token(payload["token"]["access_token"], get_settings())
    assert claims["sub"] == payload["user"]["id"]

    me = await client.get(
        f"{AUTH_URL}/user",
        headers={"Authorization": f"Bearer {payload['token']['access_token']}"},
    )
    assert me.status_code == status.HTTP_200_OK
    assert me.json() == payload["user"]


async def test_register_duplicate_email_conflicts(client: AsyncClient, user_factory) -> None:
    existing = await user_factory(login=False)

    response = await client.post(
        f"{AUTH_URL}/register",
        json={"email": existing.email.upper(), "password": "StrongPass123!"},
    )

    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["code"] == "email_taken"


async def test_register_validates_fields(client: AsyncClient) -> None:
    response = await client.post(
        f"{AUTH_URL}/register",
        json={"email": "not-an-email", "password": "short"},
    )

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    payload = response.json()
    assert payload["code"] == "validation_failed"
    assert set(payload["details"]["errors"]) == {"email", "password"}


async def test_login_with_wrong_password_is_unauthenticated(client: AsyncClient, user_factory) -> None:
    user = await user_factory(login=False)

    response = await client.post(
        f"{AUTH_URL}/login",
        data={"username": user.email, "password": "WrongPass123!"},
    )

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["code"] == "unauthenticated"


async def test_logout_revokes_the_presented_token(client: AsyncClient, user_factory) -> None:
    user = await user_factory()

    logout = await client.post(f"{AUTH_URL}/logout", headers=user.headers)
    assert logout.status_code == status.HTTP_204_NO_CONTENT

    response = await client.get(f"{API_PREFIX}/projects", headers=user.headers)
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["message"] == "Token has been revoked."


async def test_expired_token_is_rejected(client: AsyncClient, user_factory) -> None:
    user = await user_factory(login=False)
    token = create_access_token(
        subject=user.id,
        settings=get_settings(),
        expires_delta=timedelta(minutes=-1),
    )

    response = await client.get(
        f"{AUTH_URL}/user",
        headers={"Authorization": f"Bearer {token.token}"},
    )

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


async def test_token_for_inactive_user_is_rejected(client: AsyncClient, user_factory) -> None:
    user = await user_factory(login=False, is_active=False)
    token = create_access_token(subject=user.id, settings=get_settings())

    response = await client.get(
        f"{API_PREFIX}/projects",
        headers={"Authorization": f"Bearer {token.token}"},
    )

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


async def test_token_signed_with_another_key_is_rejected(client: AsyncClient, user_factory) -> None:
    user = await user_factory(login=False)
    foreign_settings = get_settings().model_copy(update={"jwt_secret_key": "someone-else"})
    token = create_access_token(subject=user.id, settings=foreign_settings)

    response = await client.get(
        f"{AUTH_URL}/user",
        headers={"Authorization": f"Bearer {token.token}"},
    )

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
