# order_tracker/routes/auth.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from ..auth import create_token
from ..config import Settings
from ..deps import get_settings, get_store, require_user
from ..errors import AuthenticationError
from ..models import PublicUser, User
from ..schemas import LoginIn, PasswordChangeIn, RegisterIn, ok
from ..services import UserService
from ..store import Store

logger = logging.getLogger(__name__)

router = APIRouter()


def _session(user: User, settings: Settings) -> dict:
    return {
        "user": UserService.sanitize_user(user).to_json(),
        "token": create_token(user, settings),
        "expiresIn": settings.expires_in_label,
    }


@router.post("/register", status_code=201)
def register(
    payload: RegisterIn,
    store: Store = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    user = store.users.create_user(
        email=payload.email,
        password=payload.password,
        first_name=payload.first_name,
        last_name=payload.last_name,
    )
    return ok(_session(user, settings), "User registered successfully")


@router.post("/login")
def login(
    payload: LoginIn,
    store: Store = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    user = store.users.authenticate_user(payload.email, payload.password)
    if not user:
        logger.warning("Failed login for %s", payload.email.strip().lower())
        raise AuthenticationError("Email or password is incorrect", error="Invalid credentials")
    return ok(_session(user, settings), "Login successful")


@router.get("/me")
def me(user: PublicUser = Depends(require_user)):
    return ok(user.to_json(), "User profile retrieved successfully")


@router.post("/logout")
def logout(user: PublicUser = Depends(require_user)):
    # Tokens are stateless; the client just drops it.
    return ok(message="Logout successful. Please remove the token from client storage.")


@router.put("/password")
def change_password(
    payload: PasswordChangeIn,
    user: PublicUser = Depends(require_user),
    store: Store = Depends(get_store),
):
    store.users.update_password(user.id, payload.current_password, payload.new_password)
    return ok(message="Password updated successfully")
