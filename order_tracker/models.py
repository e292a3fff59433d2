# order_tracker/models.py
from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid4())


class OrderStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"


class Record(BaseModel):
    # Records are never mutated; updates go through model_copy(update=...)
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class Order(Record):
    id: str
    user_id: str  # owner's username, not the user id
    product: str
    quantity: int
    amount: float
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime
    updated_at: datetime


class PublicUser(Record):
    id: str
    username: str
    email: str
    first_name: str
    last_name: str
    role: UserRole = UserRole.USER
    created_at: datetime
    updated_at: datetime

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class User(PublicUser):
    password_hash: str
