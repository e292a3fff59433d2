"""Tests for app wiring: health, fixture data, error envelope."""

import pytest
from fastapi.testclient import TestClient

from order_tracker.config import Settings
from order_tracker.errors import (
    AuthenticationError,
    AuthorizationError,
    DuplicateUserError,
    InternalError,
    NotFoundError,
    WeakPasswordError,
)
from order_tracker.main import create_app, status_for


@pytest.fixture
def seeded_client():
    return TestClient(create_app(Settings(jwt_secret="test-secret", seed_data=True)))


def login(client, email, password):
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['data']['token']}"}


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["version"] == "1.0.0"

    def test_unknown_route(self, client):
        response = client.get("/api/nothing-here")
        assert response.status_code == 404
        assert response.json()["error"] == "Route not found"


class TestSeedData:
    def test_admin_sees_all_fixture_orders(self, seeded_client):
        headers = login(seeded_client, "admin@oont.com", "admin123")
        body = seeded_client.get("/api/orders", headers=headers).json()
        assert body["count"] == 14
        created = [o["createdAt"] for o in body["data"]]
        assert created == sorted(created, reverse=True)
        owners = seeded_client.get("/api/orders/users", headers=headers).json()["data"]
        assert owners == ["alice.smith", "bob.johnson", "charlie.brown", "testuser"]

    def test_fixture_user_sees_own_orders(self, seeded_client):
        headers = login(seeded_client, "user@oont.com", "user123")
        body = seeded_client.get("/api/orders", headers=headers).json()
        assert body["count"] == 5
        assert {o["userId"] for o in body["data"]} == {"testuser"}

    def test_no_fixtures_when_disabled(self, store):
        assert store.users.count() == 0
        assert store.orders.count() == 0

    def test_apps_do_not_share_state(self):
        settings = Settings(jwt_secret="s", seed_data=False)
        first, second = create_app(settings), create_app(settings)
        first.state.store.orders.create_order("alice", "X", 1, 1.0)
        assert second.state.store.orders.count() == 0


class TestStatusMapping:
    @pytest.mark.parametrize(
        "exc, code",
        [
            (WeakPasswordError(6), 400),
            (DuplicateUserError(), 400),
            (AuthenticationError("x"), 401),
            (AuthorizationError("x"), 403),
            (NotFoundError("x"), 404),
            (InternalError("x"), 500),
        ],
    )
    def test_status_for(self, exc, code):
        assert status_for(exc) == code
