"""E2E tests for Identity Admin API endpoints.

Tests повного flow через HTTP:
1. Health checks
2. Register / sign-in / access token
3. Error mapping (400 / 401 / 403 / 409 / 422)
"""

from uuid import UUID, uuid4

import pytest
from fastapi.testclient import TestClient

from identity_admin.composition_root import role_id_for
from identity_admin.domain.auth.entities import UserGroup
from identity_admin.domain.auth.value_objects import AuthRole
from identity_admin.main import app
from identity_admin.presentation.api import dependencies

PASSWORD = "Secret#123"


@pytest.fixture
def client():
    """TestClient з lifespan (in-memory SQLite, fresh per test)."""
    with TestClient(app) as test_client:
        yield test_client


def _register(client, email: str, username: str | None = None) -> dict:
    response = client.post(
        "/api/v1/account/register",
        json={"email": email, "password": PASSWORD, "username": username},
    )
    assert response.status_code == 201, response.text
    return response.json()


def _access_token(client, id_token: str) -> str:
    response = client.post("/api/v1/account/access-token", json={"id_token": id_token})
    assert response.status_code == 200, response.text
    return response.json()["token"]


def _auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def _grant_manager(client, user_id: str) -> None:
    """Bootstrap AUTH_MANAGER напряму через repositories (в loop додатку)."""
    container = dependencies.get_container()

    async def grant() -> None:
        group = UserGroup.create(id=uuid4(), name="Managers")
        await container.user_group_repository.save(group)
        await container.user_group_repository.add_role(
            group.id, role_id_for(AuthRole.AUTH_MANAGER.value)
        )
        await container.user_repository.add_to_group(user_id, group.id)

    client.portal.call(grant)


@pytest.fixture
def manager_headers(client) -> dict:
    tokens = _register(client, "admin@example.com")
    _grant_manager(client, UUID(tokens["id"]))
    return _auth(_access_token(client, tokens["id_token"]))


class TestHealth:
    def test_health_check(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["environment"] == "development"
        assert "X-Request-ID" in response.headers

    def test_liveness(self, client):
        response = client.get("/health/live")

        assert response.status_code == 200
        assert response.json() == {"status": "alive"}


class TestAccountAPI:
    def test_register_and_read_profile(self, client):
        tokens = _register(client, "jane@example.com", "jane_doe1")
        token = _access_token(client, tokens["id_token"])

        response = client.get("/api/v1/account/profile", headers=_auth(token))

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == tokens["id"]
        assert data["email"] == "jane@example.com"
        assert data["username"] == "jane_doe1"
        assert data["status"] == "ACTIVE"
        assert data["version"] == 0

    def test_register_invalid_password(self, client):
        response = client.post(
            "/api/v1/account/register",
            json={"email": "jane@example.com", "password": "short"},
        )

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "ValidationException"
        assert data["data"]["field"] == "password"

    def test_register_duplicate_email(self, client):
        _register(client, "jane@example.com")

        response = client.post(
            "/api/v1/account/register",
            json={"email": "jane@example.com", "password": PASSWORD},
        )

        assert response.status_code == 400
        assert response.json()["code"] == "EMAIL_ALREADY_TAKEN"

    def test_sign_in_with_wrong_password(self, client):
        _register(client, "jane@example.com")

        response = client.post(
            "/api/v1/account/sign-in",
            json={"identifier": "jane@example.com", "password": "Wrong#1234"},
        )

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_CREDENTIALS"

    def test_update_profile(self, client):
        tokens = _register(client, "jane@example.com")
        token = _access_token(client, tokens["id_token"])

        response = client.patch(
            "/api/v1/account/profile",
            headers=_auth(token),
            json={"display_name": "Jane D."},
        )

        assert response.status_code == 200
        assert response.json()["display_name"] == "Jane D."
        assert response.json()["version"] == 1

    def test_update_profile_without_changes(self, client):
        tokens = _register(client, "jane@example.com")
        token = _access_token(client, tokens["id_token"])

        response = client.patch("/api/v1/account/profile", headers=_auth(token), json={})

        assert response.status_code == 400
        assert response.json()["code"] == "NO_UPDATES_PROVIDED"

    def test_profile_requires_authentication(self, client):
        response = client.get("/api/v1/account/profile")

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"
        assert response.json()["code"] == "UNAUTHORIZED"

    def test_invalid_bearer_token(self, client):
        response = client.get("/api/v1/account/profile", headers=_auth("garbage"))

        assert response.status_code == 401

    def test_invalid_id_token(self, client):
        response = client.post("/api/v1/account/access-token", json={"id_token": "nope"})

        assert response.status_code == 401

    def test_delete_account(self, client):
        tokens = _register(client, "jane@example.com")
        token = _access_token(client, tokens["id_token"])

        response = client.delete("/api/v1/account/profile", headers=_auth(token))
        second = client.delete("/api/v1/account/profile", headers=_auth(token))

        assert response.status_code == 204
        assert second.status_code == 400
        assert second.json()["code"] == "USER_DELETED"


class TestAdministrationAPI:
    def test_plain_user_is_forbidden(self, client):
        tokens = _register(client, "jane@example.com")
        token = _access_token(client, tokens["id_token"])

        response = client.get("/api/v1/users", headers=_auth(token))

        assert response.status_code == 403
        assert response.json()["code"] == "FORBIDDEN"

    def test_group_crud_and_membership(self, client, manager_headers):
        member = _register(client, "member@example.com")

        created = client.post(
            "/api/v1/user-groups", headers=manager_headers, json={"name": "Viewers"}
        )
        assert created.status_code == 201
        group_id = created.json()["id"]

        renamed = client.patch(
            f"/api/v1/user-groups/{group_id}",
            headers=manager_headers,
            json={"name": "Readers"},
        )
        assert renamed.status_code == 200
        assert renamed.json()["version"] == 1

        viewer_role = role_id_for(AuthRole.AUTH_VIEWER.value)
        assert (
            client.put(
                f"/api/v1/user-groups/{group_id}/roles/{viewer_role}", headers=manager_headers
            ).status_code
            == 204
        )
        assert (
            client.put(
                f"/api/v1/user-groups/{group_id}/users/{member['id']}", headers=manager_headers
            ).status_code
            == 204
        )

        duplicate = client.put(
            f"/api/v1/user-groups/{group_id}/users/{member['id']}", headers=manager_headers
        )
        assert duplicate.status_code == 400
        assert duplicate.json()["code"] == "USER_ALREADY_IN_GROUP"

        users = client.get(
            "/api/v1/users", headers=manager_headers, params={"user_group_id": group_id}
        )
        assert users.status_code == 200
        assert users.json()["count"] == 1
        assert users.json()["data"][0]["email"] == "member@example.com"

        roles = client.get(
            "/api/v1/roles", headers=manager_headers, params={"user_group_id": group_id}
        )
        assert [r["code"] for r in roles.json()["data"]] == ["AUTH_VIEWER"]

        deleted = client.delete(f"/api/v1/user-groups/{group_id}", headers=manager_headers)
        assert deleted.status_code == 204
        missing = client.get(f"/api/v1/user-groups/{group_id}", headers=manager_headers)
        assert missing.status_code == 400
        assert missing.json()["code"] == "USER_GROUP_NOT_FOUND"

    def test_malformed_id(self, client, manager_headers):
        response = client.get("/api/v1/users/not-a-uuid", headers=manager_headers)

        assert response.status_code == 400
        assert response.json()["code"] == "FIELD_IS_INVALID"

    def test_invalid_sort_field(self, client, manager_headers):
        response = client.get(
            "/api/v1/users", headers=manager_headers, params={"sort_field": "password"}
        )

        assert response.status_code == 400
        assert response.json()["data"]["field"] == "sort_field"

    def test_request_validation_error(self, client, manager_headers):
        response = client.post("/api/v1/user-groups", headers=manager_headers, json={})

        assert response.status_code == 422
        assert response.json()["error"] == "RequestValidationError"
