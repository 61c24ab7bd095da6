from __future__ import annotations

import uuid

from fastapi import status
from httpx import AsyncClient

API_PREFIX = "/v1"
PROJECTS_URL = f"{API_PREFIX}/projects"


async def test_create_project_sets_owner_from_actor(client: AsyncClient, user_factory) -> None:
    creator = await user_factory()

    response = await client.post(
        PROJECTS_URL,
        json={"name": "Alpha", "owner_id": str(uuid.uuid4())},
        headers=creator.headers,
    )

    assert response.status_code == status.HTTP_201_CREATED
    body = response.json()
    assert body["name"] == "Alpha"
    assert body["owner_id"] == str(creator.id)
    assert body["description"] is None
    assert uuid.UUID(body["id"])
    assert body["created_at"] and body["updated_at"]


async def test_created_project_can_be_read_back(client: AsyncClient, user_factory) -> None:
    owner = await user_factory()
    created = (
        await client.post(
            PROJECTS_URL,
            json={"name": "Alpha", "description": "First project"},
            headers=owner.headers,
        )
    ).json()

    response = await client.get(f"{PROJECTS_URL}/{created['id']}", headers=owner.headers)

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == created


async def test_create_project_reports_every_invalid_field(client: AsyncClient, user_factory) -> None:
    owner = await user_factory()

    response = await client.post(
        PROJECTS_URL,
        json={"name": "x" * 256, "description": 12},
        headers=owner.headers,
    )

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    payload = response.json()
    assert payload["code"] == "validation_failed"
    assert set(payload["details"]["errors"]) == {"name", "description"}

    listing = await client.get(PROJECTS_URL, headers=owner.headers)
    assert listing.json() == []


async def test_list_projects_is_scoped_to_actor(client: AsyncClient, user_factory, project_factory) -> None:
    alice = await user_factory()
    bob = await user_factory()
    alpha = await project_factory(alice, name="Alpha")
    beta = await project_factory(alice, name="Beta")
    await project_factory(bob, name="Bob's project")

    response = await client.get(PROJECTS_URL, headers=alice.headers)

    assert response.status_code == status.HTTP_200_OK
    assert [project["id"] for project in response.json()] == [str(alpha.id), str(beta.id)]
    assert all(project["owner_id"] == str(alice.id) for project in response.json())


async def test_non_owner_cannot_view_update_or_delete(client: AsyncClient, user_factory, project_factory) -> None:
    owner = await user_factory()
    intruder = await user_factory()
    project = await project_factory(owner, name="Private")
    url = f"{PROJECTS_URL}/{project.id}"

    view = await client.get(url, headers=intruder.headers)
    update = await client.put(url, json={"name": "Mine now"}, headers=intruder.headers)
    delete = await client.delete(url, headers=intruder.headers)

    for response in (view, update, delete):
        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["code"] == "forbidden"

    unchanged = await client.get(url, headers=owner.headers)
    assert unchanged.json()["name"] == "Private"


async def test_forbidden_takes_precedence_over_invalid_payload(
    client: AsyncClient, user_factory, project_factory
) -> None:
    owner = await user_factory()
    intruder = await user_factory()
    project = await project_factory(owner)

    response = await client.patch(
        f"{PROJECTS_URL}/{project.id}",
        json={"name": ""},
        headers=intruder.headers,
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN


async def test_partial_update_leaves_omitted_fields(client: AsyncClient, user_factory, project_factory) -> None:
    owner = await user_factory()
    project = await project_factory(owner, name="Alpha", description="Keep this")

    response = await client.patch(
        f"{PROJECTS_URL}/{project.id}",
        json={"name": "Alpha v2", "owner_id": str(uuid.uuid4())},
        headers=owner.headers,
    )

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["name"] == "Alpha v2"
    assert body["description"] == "Keep this"
    assert body["owner_id"] == str(owner.id)


async def test_put_can_clear_description(client: AsyncClient, user_factory, project_factory) -> None:
    owner = await user_factory()
    project = await project_factory(owner, description="Temporary")

    response = await client.put(
        f"{PROJECTS_URL}/{project.id}",
        json={"description": None},
        headers=owner.headers,
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["description"] is None
    assert response.json()["name"] == "Alpha"


async def test_update_with_null_name_is_rejected_without_mutation(
    client: AsyncClient, user_factory, project_factory
) -> None:
    owner = await user_factory()
    project = await project_factory(owner, name="Alpha")
    url = f"{PROJECTS_URL}/{project.id}"

    response = await client.put(url, json={"name": None, "description": "changed"}, headers=owner.headers)

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert set(response.json()["details"]["errors"]) == {"name"}
    after = (await client.get(url, headers=owner.headers)).json()
    assert after["name"] == "Alpha"
    assert after["description"] is None


async def test_owner_delete_returns_empty_acknowledgement(
    client: AsyncClient, user_factory, project_factory, task_factory
) -> None:
    owner = await user_factory()
    project = await project_factory(owner)
    task = await task_factory(project, owner)
    task_id = task.id

    response = await client.delete(f"{PROJECTS_URL}/{project.id}", headers=owner.headers)

    assert response.status_code == status.HTTP_204_NO_CONTENT
    assert response.content == b""
    missing = await client.get(f"{PROJECTS_URL}/{project.id}", headers=owner.headers)
    assert missing.status_code == status.HTTP_404_NOT_FOUND
    orphan = await client.get(f"{API_PREFIX}/tasks/{task_id}", headers=owner.headers)
    assert orphan.status_code == status.HTTP_404_NOT_FOUND


async def test_unknown_and_malformed_ids_are_not_found(client: AsyncClient, user_factory) -> None:
    user = await user_factory()

    for identifier in (uuid.uuid4(), "not-a-uuid", "123"):
        response = await client.get(f"{PROJECTS_URL}/{identifier}", headers=user.headers)
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["code"] == "not_found"

    delete = await client.delete(f"{PROJECTS_URL}/{uuid.uuid4()}", headers=user.headers)
    assert delete.status_code == status.HTTP_404_NOT_FOUND


async def test_project_routes_require_authentication(client: AsyncClient, user_factory, project_factory) -> None:
    owner = await user_factory()
    project = await project_factory(owner)

    requests = [
        client.get(PROJECTS_URL),
        client.post(PROJECTS_URL, json={"name": "Alpha"}),
        client.get(f"{PROJECTS_URL}/{project.id}"),
        client.put(f"{PROJECTS_URL}/{project.id}", json={"name": "Beta"}),
        client.delete(f"{PROJECTS_URL}/{project.id}"),
        client.get(f"{PROJECTS_URL}/{uuid.uuid4()}", headers={"Authorization": "Bearer not-a-token"}),
    ]
    for pending in requests:
        response = await pending
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["code"] == "unauthenticated"
        assert response.headers["WWW-Authenticate"] == "Bearer"


MALFORMED_JSON = {"content": b"{not json", "headers": {"Content-Type": "application/json"}}


async def test_malformed_body_without_credentials_is_unauthenticated(client: AsyncClient) -> None:
    response = await client.post(PROJECTS_URL, **MALFORMED_JSON)

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["code"] == "unauthenticated"


async def test_malformed_body_from_non_owner_is_forbidden(
    client: AsyncClient, user_factory, project_factory
) -> None:
    owner = await user_factory()
    intruder = await user_factory()
    project = await project_factory(owner)

    response = await client.put(
        f"{PROJECTS_URL}/{project.id}",
        content=MALFORMED_JSON["content"],
        headers={**MALFORMED_JSON["headers"], **intruder.headers},
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN


async def test_malformed_body_from_owner_is_reported_on_body(
    client: AsyncClient, user_factory, project_factory
) -> None:
    owner = await user_factory()
    project = await project_factory(owner, name="Alpha")

    for method, url in (("POST", PROJECTS_URL), ("PATCH", f"{PROJECTS_URL}/{project.id}")):
        response = await client.request(
            method,
            url,
            content=MALFORMED_JSON["content"],
            headers={**MALFORMED_JSON["headers"], **owner.headers},
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["details"]["errors"] == {"body": ["The request body must be valid JSON."]}

    current = (await client.get(f"{PROJECTS_URL}/{project.id}", headers=owner.headers)).json()
    assert current["name"] == "Alpha"
