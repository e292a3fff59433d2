"""Pytest fixtures for order tracker tests."""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from order_tracker.config import Settings
from order_tracker.main import create_app
from order_tracker.models import Order, OrderStatus, UserRole
from order_tracker.services import OrderService, UserService


@pytest.fixture
def settings():
    """Settings with a fixed secret and no fixture data."""
    return Settings(jwt_secret="test-secret", seed_data=False, log_level="WARNING")


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def store(app):
    return app.state.store


@pytest.fixture
def order_service():
    return OrderService()


@pytest.fixture
def user_service():
    return UserService()


def make_order(
    user_id="alice",
    product="Widget",
    status=OrderStatus.PENDING,
    hours_ago=0,
    order_id=None,
):
    """Build an order record with a fixed creation time."""
    created = datetime(2024, 1, 10, 12, 0, tzinfo=timezone.utc) - timedelta(hours=hours_ago)
    return Order(
        id=order_id or f"{user_id}-{product}-{hours_ago}",
        user_id=user_id,
        product=product,
        quantity=1,
        amount=10.0,
        status=status,
        created_at=created,
        updated_at=created,
    )


def register(client, email, password="secret123", first="Test", last="User"):
    """Register through the API and return the response body."""
    response = client.post(
        "/api/auth/register",
        json={"email": email, "password": password, "firstName": first, "lastName": last},
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def alice(client):
    """Headers for a regular user whose username is ``alice``."""
    return bearer(register(client, "alice@example.com")["token"])


@pytest.fixture
def bob(client):
    """Headers for a regular user whose username is ``bob``."""
    return bearer(register(client, "bob@example.com")["token"])


@pytest.fixture
def admin(client, store):
    """Headers for an admin user whose username is ``root``."""
    data = register(client, "root@example.com")
    store.users.update_user_role(data["user"]["id"], UserRole.ADMIN)
    return bearer(data["token"])
