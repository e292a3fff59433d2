# order_tracker/store.py
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from datetime import timedelta
from typing import List, Tuple

from .auth import hash_password
from .models import Order, OrderStatus, User, UserRole, new_id, utcnow
from .services import OrderService, UserService

logger = logging.getLogger(__name__)


@dataclass
class Store:
    """Both services, built once per app and shared by reference."""

    orders: OrderService = field(default_factory=OrderService)
    users: UserService = field(default_factory=UserService)


# (username, email, first, last, role, password)
SAMPLE_USERS: List[Tuple[str, str, str, str, UserRole, str]] = [
    ("alice.smith", "alice.smith@example.com", "Alice", "Smith", UserRole.USER, "password123"),
    ("bob.johnson", "bob.johnson@example.com", "Bob", "Johnson", UserRole.USER, "password123"),
    ("charlie.brown", "charlie.brown@example.com", "Charlie", "Brown", UserRole.USER, "password123"),
    ("admin", "admin@oont.com", "Admin", "User", UserRole.ADMIN, "admin123"),
    ("testuser", "user@oont.com", "Test", "User", UserRole.USER, "user123"),
]

# (owner username, product, quantity, amount, status)
SAMPLE_ORDERS: List[Tuple[str, str, int, float, OrderStatus]] = [
    ("alice.smith", "Wireless Headphones", 1, 129.99, OrderStatus.PENDING),
    ("alice.smith", "Bluetooth Speaker", 1, 89.99, OrderStatus.COMPLETED),
    ("alice.smith", "Phone Case", 2, 25.98, OrderStatus.CANCELLED),
    ("bob.johnson", "Gaming Mouse", 1, 59.99, OrderStatus.COMPLETED),
    ("bob.johnson", "Laptop Stand", 1, 39.99, OrderStatus.PENDING),
    ("bob.johnson", "Webcam HD", 1, 79.99, OrderStatus.COMPLETED),
    ("charlie.brown", "USB-C Cable", 3, 59.97, OrderStatus.CANCELLED),
    ("charlie.brown", "Mechanical Keyboard", 1, 149.99, OrderStatus.COMPLETED),
    ("charlie.brown", "Monitor Stand", 1, 45.99, OrderStatus.PENDING),
    ("testuser", "Smartphone", 1, 699.99, OrderStatus.COMPLETED),
    ("testuser", "Laptop Backpack", 1, 89.99, OrderStatus.PENDING),
    ("testuser", "Wireless Charger", 2, 79.98, OrderStatus.PENDING),
    ("testuser", "Bluetooth Earbuds", 1, 159.99, OrderStatus.CANCELLED),
    ("testuser", "Power Bank", 1, 49.99, OrderStatus.COMPLETED),
]


def sample_users() -> List[User]:
    hashes = {}
    out: List[User] = []
    now = utcnow()
    for username, email, first, last, role, password in SAMPLE_USERS:
        if password not in hashes:
            hashes[password] = hash_password(password)
        out.append(
            User(
                id=new_id(),
                username=username,
                email=email,
                first_name=first,
                last_name=last,
                role=role,
                password_hash=hashes[password],
                created_at=now,
                updated_at=now,
            )
        )
    return out


def sample_orders(rng: random.Random | None = None) -> List[Order]:
    rng = rng or random.Random()
    now = utcnow()
    out: List[Order] = []
    for owner, product, qty, amount, status in SAMPLE_ORDERS:
        created = now - timedelta(hours=rng.randint(1, 48))
        out.append(
            Order(
                id=new_id(),
                user_id=owner,
                product=product,
                quantity=qty,
                amount=amount,
                status=status,
                created_at=created,
                updated_at=created,
            )
        )
    return out


def build_store(seed: bool = True) -> Store:
    store = Store()
    if seed:
        store.users.seed(sample_users())
        store.orders.seed(sample_orders())
        logger.info(
            "Seeded %d users and %d orders", store.users.count(), store.orders.count()
        )
    return store
