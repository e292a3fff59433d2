# order_tracker/deps.py
from __future__ import annotations

from typing import Callable

from fastapi import Depends, Header, Request

from .auth import bearer_token, decode_token
from .config import Settings
from .errors import AuthenticationError, AuthorizationError
from .models import PublicUser, UserRole
from .services import UserService
from .store import Store


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> Store:
    return request.app.state.store


def require_user(
    authorization: str | None = Header(default=None),
    store: Store = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> PublicUser:
    token = bearer_token(authorization)
    if not token:
        raise AuthenticationError(
            "Please provide a valid authentication token", error="Access token required"
        )

    claims = decode_token(token, settings)
    if not claims:
        raise AuthenticationError(
            "The provided token is invalid or expired", error="Invalid token"
        )

    user = store.users.get_user_by_id(claims["userId"])
    if not user:
        raise AuthenticationError(
            "User associated with token not found", error="Invalid token"
        )
    return UserService.sanitize_user(user)


def require_role(*roles: UserRole) -> Callable[..., PublicUser]:
    """Dependency factory: ``Depends(require_role(UserRole.ADMIN))``."""

    def _role_dependency(user: PublicUser = Depends(require_user)) -> PublicUser:
        if user.role not in roles:
            allowed = " or ".join(r.value for r in roles)
            raise AuthorizationError(
                f"Access denied. Required role: {allowed}", error="Insufficient permissions"
            )
        return user

    return _role_dependency


require_admin = require_role(UserRole.ADMIN)
