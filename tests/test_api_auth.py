"""Tests for the /api/auth endpoints."""

from conftest import bearer, register


class TestRegister:
    def test_register_returns_user_and_token(self, client):
        data = register(client, "Dana.Scully@Example.com", first="Dana", last="Scully")
        assert data["user"]["username"] == "dana.scully"
        assert data["user"]["email"] == "dana.scully@example.com"
        assert data["user"]["role"] == "user"
        assert "passwordHash" not in data["user"]
        assert data["token"]
        assert data["expiresIn"] == "24h"

    def test_duplicate_email(self, client, store):
        register(client, "dana@example.com")
        response = client.post(
            "/api/auth/register",
            json={
                "email": "DANA@example.com",
                "password": "secret123",
                "firstName": "D",
                "lastName": "S",
            },
        )
        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "Registration failed"
        assert store.users.count() == 1

    def test_short_password(self, client, store):
        response = client.post(
            "/api/auth/register",
            json={"email": "d@example.com", "password": "123", "firstName": "D", "lastName": "S"},
        )
        assert response.status_code == 400
        assert "at least 6" in response.json()["message"]
        assert store.users.count() == 0

    def test_invalid_email(self, client):
        response = client.post(
            "/api/auth/register",
            json={"email": "not-an-email", "password": "secret123", "firstName": "D", "lastName": "S"},
        )
        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "Validation failed"
        assert "email" in body["message"]

    def test_missing_fields(self, client):
        response = client.post("/api/auth/register", json={"email": "d@example.com"})
        assert response.status_code == 400
        assert "firstName" in response.json()["message"]

    def test_blank_name(self, client):
        response = client.post(
            "/api/auth/register",
            json={"email": "d@example.com", "password": "secret123", "firstName": "  ", "lastName": "S"},
        )
        assert response.status_code == 400


class TestLogin:
    def test_login(self, client):
        register(client, "dana@example.com", password="secret123")
        response = client.post(
            "/api/auth/login", json={"email": "dana@example.com", "password": "secret123"}
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["user"]["username"] == "dana"
        assert data["token"]

    def test_wrong_password_and_unknown_email_look_the_same(self, client):
        register(client, "dana@example.com", password="secret123")
        wrong = client.post("/api/auth/login", json={"email": "dana@example.com", "password": "nope"})
        unknown = client.post("/api/auth/login", json={"email": "x@example.com", "password": "nope"})
        assert wrong.status_code == unknown.status_code == 401
        assert wrong.json() == unknown.json()

    def test_missing_credentials(self, client):
        response = client.post("/api/auth/login", json={"email": "", "password": ""})
        assert response.status_code == 400

    def test_malformed_json(self, client):
        response = client.post(
            "/api/auth/login",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["success"] is False


class TestMe:
    def test_me(self, client, alice):
        response = client.get("/api/auth/me", headers=alice)
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["username"] == "alice"
        assert "passwordHash" not in data

    def test_no_token(self, client):
        response = client.get("/api/auth/me")
        assert response.status_code == 401
        assert response.json() == {
            "success": False,
            "error": "Access token required",
            "message": "Please provide a valid authentication token",
        }

    def test_invalid_token(self, client):
        response = client.get("/api/auth/me", headers=bearer("garbage"))
        assert response.status_code == 401
        assert response.json()["error"] == "Invalid token"

    def test_token_for_deleted_user(self, client, store):
        data = register(client, "gone@example.com")
        store.users.delete_user(data["user"]["id"])
        response = client.get("/api/auth/me", headers=bearer(data["token"]))
        assert response.status_code == 401

    def test_logout(self, client, alice):
        response = client.post("/api/auth/logout", headers=alice)
        assert response.status_code == 200
        assert response.json()["success"] is True


class TestChangePassword:
    def test_change_password(self, client):
        token = register(client, "dana@example.com", password="secret123")["token"]
        response = client.put(
            "/api/auth/password",
            json={"currentPassword": "secret123", "newPassword": "much-longer"},
            headers=bearer(token),
        )
        assert response.status_code == 200
        login = client.post(
            "/api/auth/login", json={"email": "dana@example.com", "password": "much-longer"}
        )
        assert login.status_code == 200

    def test_wrong_current_password(self, client):
        token = register(client, "dana@example.com", password="secret123")["token"]
        response = client.put(
            "/api/auth/password",
            json={"currentPassword": "wrong", "newPassword": "much-longer"},
            headers=bearer(token),
        )
        assert response.status_code == 401

    def test_new_password_too_short(self, client):
        token = register(client, "dana@example.com", password="secret123")["token"]
        response = client.put(
            "/api/auth/password",
            json={"currentPassword": "secret123", "newPassword": "short12"},
            headers=bearer(token),
        )
        assert response.status_code == 400
        assert "at least 8" in response.json()["message"]
