# order_tracker/schemas.py
"""
Request DTOs and the response envelope.

Every request body is parsed into one of these models before any service is
called; anything that does not validate becomes a 400.
"""
from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from .errors import ValidationError
from .models import OrderStatus


class RequestModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _required_text(v: str) -> str:
    v = (v or "").strip()
    if not v:
        raise ValueError("must be a non-empty string")
    return v


# -------------------
# Auth
# -------------------
class RegisterIn(RequestModel):
    email: EmailStr
    password: str
    first_name: str
    last_name: str

    @field_validator("first_name", "last_name")
    @classmethod
    def _names(cls, v: str) -> str:
        return _required_text(v)


class LoginIn(RequestModel):
    email: str
    password: str

    @field_validator("email", "password")
    @classmethod
    def _present(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Email and password are required")
        return v


class PasswordChangeIn(RequestModel):
    current_password: str
    new_password: str


# -------------------
# Orders
# -------------------
class OrderCreateIn(RequestModel):
    # userId is not a field: the owner always comes from the token
    product: str
    quantity: int = Field(..., gt=0, strict=True)
    # finite JSON numbers only; ints widen to float
    amount: float = Field(..., ge=0, strict=True, allow_inf_nan=False)

    @field_validator("product")
    @classmethod
    def _product(cls, v: str) -> str:
        return _required_text(v)


class StatusUpdateIn(RequestModel):
    status: OrderStatus


class OrderFilters(BaseModel):
    status: OrderStatus | None = None
    user_id: str | None = None

    @classmethod
    def from_query(cls, status: str | None, user_id: str | None) -> "OrderFilters":
        parsed: OrderStatus | None = None
        if status:
            try:
                parsed = OrderStatus(status)
            except ValueError:
                allowed = ", ".join(s.value for s in OrderStatus)
                raise ValidationError(f"status filter must be one of: {allowed}")
        return cls(status=parsed, user_id=(user_id or "").strip() or None)


# -------------------
# Envelope
# -------------------
def ok(data: Any = None, message: str = "", **extra: Any) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": True}
    if data is not None:
        body["data"] = data
    body["message"] = message
    body.update(extra)
    return body


def fail(error: str, message: str) -> Dict[str, Any]:
    return {"success": False, "error": error, "message": message}
