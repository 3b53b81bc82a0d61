"""
Tests for the /users routes
"""
import uuid

import pytest

TEST_PASSWORD = "secret123"

MISSING_ID = "6f4bfc69-0244-4d27-8912-73213f161f12"


@pytest.mark.users
class TestListUsers:
    def test_list_empty(self, client):
        response = client.get("/users")

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "Users retrieved successfully"
        assert data["data"] == []
        assert data["count"] == 0

    def test_list_never_exposes_password(self, client, user):
        response = client.get("/users")

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 1
        record = data["data"][0]
        assert record["id"] == user.id
        assert record["email"] == user.email
        assert "password" not in record
        assert "hashed_password" not in record


@pytest.mark.users
class TestGetUser:
    def test_get_by_id(self, client, user):
        response = client.get(f"/users/{user.id}")

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["data"]["id"] == user.id
        assert "hashed_password" not in data["data"]

    def test_get_by_id_invalid_uuid(self, offline_client):
        response = offline_client.get("/users/invalid-id")

        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Invalid user ID provided"}

    def test_get_by_id_not_found(self, client):
        response = client.get(f"/users/{MISSING_ID}")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "User not found"}

    def test_get_by_email(self, client, user):
        response = client.get(f"/users/email/{user.email}")

        assert response.status_code == 200
        assert response.json()["data"]["email"] == user.email

    def test_get_by_email_invalid(self, offline_client):
        response = offline_client.get("/users/email/invalid-email")

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid email format provided"

    def test_get_by_email_not_found(self, client):
        response = client.get("/users/email/nonexistentuser@test.com")

        assert response.status_code == 404


@pytest.mark.users
class TestCreateUser:
    def test_create(self, client, store):
        response = client.post("/users", json={"email": "a@b.com", "password": "abcdef"})

        assert response.status_code == 201
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "User created successfully"
        assert data["data"]["email"] == "a@b.com"
        assert "password" not in data["data"]
        assert "hashed_password" not in data["data"]
        assert uuid.UUID(data["data"]["id"])

        stored = store.get_by_id(data["data"]["id"])
        assert stored.hashed_password != "abcdef"

    @pytest.mark.parametrize(
        "body",
        [{}, {"email": "a@b.com"}, {"password": "abcdef"}, {"email": "", "password": "abcdef"}],
    )
    def test_create_missing_fields(self, offline_client, body):
        response = offline_client.post("/users", json=body)

        assert response.status_code == 400
        assert response.json()["message"] == "Email and password are required"

    def test_create_invalid_email(self, offline_client):
        response = offline_client.post("/users", json={"email": "not-an-email", "password": "abcdef"})

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid email format"

    def test_create_short_password(self, offline_client):
        response = offline_client.post("/users", json={"email": "a@b.com", "password": "abc"})

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Password must be at least 6 characters long"
        assert "abc" not in body.get("error", "")

    def test_create_duplicate_email(self, client):
        first = client.post("/users", json={"email": "a@b.com", "password": "abcdef"})
        second = client.post("/users", json={"email": "a@b.com", "password": "ghijkl"})

        assert first.status_code == 201
        assert second.status_code == 409
        assert second.json() == {"success": False, "message": "User with this email already exists"}

    def test_create_wrong_field_type(self, offline_client):
        response = offline_client.post("/users", json={"email": 123, "password": "abcdef"})

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Invalid request body"
        assert body["error"] == "email"

    def test_create_malformed_json(self, offline_client):
        response = offline_client.post(
            "/users", content=b"{not json", headers={"content-type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json()["success"] is False


@pytest.mark.users
class TestUpdateUser:
    def test_update_email_only_keeps_password_hash(self, client, store, user):
        response = client.patch(f"/users/{user.id}", json={"email": "new@example.com"})

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "User updated successfully"
        assert data["data"]["email"] == "new@example.com"
        assert "hashed_password" not in data["data"]
        assert store.get_by_id(user.id).hashed_password == user.hashed_password

    def test_update_password_only_keeps_email(self, client, store, user):
        response = client.patch(f"/users/{user.id}", json={"password": "brand-new-pw"})

        assert response.status_code == 200
        stored = store.get_by_id(user.id)
        assert stored.email == user.email
        assert stored.hashed_password != user.hashed_password

        login = client.post("/login", json={"email": user.email, "password": "brand-new-pw"})
        assert login.status_code == 200

    def test_update_empty_body(self, offline_client):
        response = offline_client.patch(f"/users/{MISSING_ID}", json={})

        assert response.status_code == 400
        assert response.json()["message"] == "At least one field (email or password) must be provided"

    def test_update_invalid_uuid(self, offline_client):
        response = offline_client.patch("/users/not-a-uuid", json={"email": "a@b.com"})

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid user ID provided"

    def test_update_invalid_email(self, offline_client):
        response = offline_client.patch(f"/users/{MISSING_ID}", json={"email": "bad"})

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid email format"

    def test_update_short_password(self, offline_client):
        response = offline_client.patch(f"/users/{MISSING_ID}", json={"password": "123"})

        assert response.status_code == 400
        assert response.json()["message"] == "Password must be at least 6 characters long"

    def test_update_email_taken_by_other_user(self, client, store, user):
        other = store.create("other@example.com", "hashed")

        response = client.patch(f"/users/{other.id}", json={"email": user.email})

        assert response.status_code == 409
        assert response.json()["message"] == "Email already exists for another user"

    def test_update_to_own_email(self, client, user):
        response = client.patch(f"/users/{user.id}", json={"email": user.email})

        assert response.status_code == 200

    def test_update_not_found(self, client):
        response = client.patch(f"/users/{MISSING_ID}", json={"email": "a@b.com"})

        assert response.status_code == 404
        assert response.json()["message"] == "User not found"


@pytest.mark.users
class TestDeleteUser:
    def test_delete(self, client, user):
        response = client.delete(f"/users/{user.id}")

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "User deleted successfully"
        assert data["data"]["deletedUser"]["id"] == user.id
        assert data["data"]["deletedUser"]["email"] == user.email
        assert "hashed_password" not in data["data"]["deletedUser"]

        assert client.get(f"/users/{user.id}").status_code == 404

    def test_delete_twice(self, client, user):
        assert client.delete(f"/users/{user.id}").status_code == 200

        response = client.delete(f"/users/{user.id}")
        assert response.status_code == 404
        assert response.json()["message"] == "User not found"

    def test_delete_invalid_uuid(self, offline_client):
        response = offline_client.delete("/users/123")

        assert response.status_code == 400


@pytest.mark.users
def test_internal_error_carries_driver_message(client, store, user):
    from user_api.models import Base

    Base.metadata.drop_all(store.engine)

    response = client.get(f"/users/{user.id}")

    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Failed to fetch user"
    assert body["error"]
    assert TEST_PASSWORD not in body["error"]


@pytest.mark.users
class TestMissingBody:
    def test_create_without_body(self, offline_client):
        response = offline_client.post("/users")

        assert response.status_code == 400
        assert response.json()["message"] == "Email and password are required"

    def test_update_without_body(self, offline_client):
        response = offline_client.patch(f"/users/{MISSING_ID}")

        assert response.status_code == 400
        assert response.json()["message"] == "At least one field (email or password) must be provided"
