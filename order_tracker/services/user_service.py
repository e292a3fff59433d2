# order_tracker/services/user_service.py
"""
User accounts.

Users live in memory keyed by id. Emails and usernames are stored
lowercased and trimmed, and lookups normalise the same way. The username
is always derived from the email's local part at registration.

Passwords are hashed with argon2 (see ``order_tracker.auth``); the hash
never leaves this module except inside ``User`` records, and the API only
ever returns ``sanitize_user`` output.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List

from ..auth import hash_password, verify_password
from ..errors import (
    AuthenticationError,
    DuplicateUserError,
    NotFoundError,
    ValidationError,
    WeakPasswordError,
)
from ..models import PublicUser, User, UserRole, new_id, utcnow

logger = logging.getLogger(__name__)

# Registration and password change use different minimums; both are kept
# until product decides which one is intended.
MIN_PASSWORD_LENGTH = 6
MIN_NEW_PASSWORD_LENGTH = 8

_PROFILE_FIELDS = {"username", "email", "first_name", "last_name"}


def _norm(value: str) -> str:
    return (value or "").strip().lower()


def username_from_email(email: str) -> str:
    return _norm(email).split("@", 1)[0]


class UserService:
    def __init__(self) -> None:
        self._users: Dict[str, User] = {}

    def seed(self, users: Iterable[User]) -> None:
        for user in users:
            self._users[user.id] = user

    # -------------------
    # Registration / login
    # -------------------
    def create_user(self, email: str, password: str, first_name: str, last_name: str) -> User:
        """Register a new ``user``-role account.

        Raises ``DuplicateUserError`` if the email or the derived username is
        taken and ``WeakPasswordError`` if the password is too short. Nothing
        is stored when either is raised.
        """
        username = username_from_email(email)
        if self.get_user_by_email(email) or self.get_user_by_username(username):
            raise DuplicateUserError()

        if len(password) < MIN_PASSWORD_LENGTH:
            raise WeakPasswordError(MIN_PASSWORD_LENGTH)

        now = utcnow()
        user = User(
            id=new_id(),
            username=username,
            email=_norm(email),
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            password_hash=hash_password(password),
            role=UserRole.USER,
            created_at=now,
            updated_at=now,
        )
        self._users[user.id] = user
        logger.info("Registered user %s", user.username)
        return user

    def authenticate_user(self, email: str, password: str) -> User | None:
        # Unknown email and wrong password look the same to the caller.
        user = self.get_user_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            return None
        return user

    # -------------------
    # Lookups
    # -------------------
    def get_user_by_id(self, user_id: str) -> User | None:
        return self._users.get(user_id)

    def get_user_by_email(self, email: str) -> User | None:
        key = _norm(email)
        for u in self._users.values():
            if u.email == key:
                return u
        return None

    def get_user_by_username(self, username: str) -> User | None:
        key = _norm(username)
        for u in self._users.values():
            if u.username == key:
                return u
        return None

    def get_all_users(self) -> List[User]:
        return sorted(self._users.values(), key=lambda u: u.created_at, reverse=True)

    def search_users(self, query: str) -> List[User]:
        q = _norm(query)
        return [u for u in self._users.values() if q in u.username or q in u.email]

    def count(self) -> int:
        return len(self._users)

    # -------------------
    # Updates
    # -------------------
    def update_user(self, user_id: str, **changes: Any) -> User | None:
        """Replace profile fields (username, email, first/last name).

        Returns None for an unknown id. Raises ``DuplicateUserError`` if the
        new email or username belongs to someone else.
        """
        user = self._users.get(user_id)
        if not user:
            return None

        unknown = set(changes) - _PROFILE_FIELDS
        if unknown:
            raise ValidationError(f"Cannot update fields: {', '.join(sorted(unknown))}")

        if "email" in changes:
            changes["email"] = _norm(changes["email"])
            other = self.get_user_by_email(changes["email"])
            if other and other.id != user_id:
                raise DuplicateUserError("Email already in use by another user")

        if "username" in changes:
            changes["username"] = _norm(changes["username"])
            other = self.get_user_by_username(changes["username"])
            if other and other.id != user_id:
                raise DuplicateUserError("Username already in use by another user")

        updated = user.model_copy(update={**changes, "updated_at": utcnow()})
        self._users[user_id] = updated
        return updated

    def update_password(self, user_id: str, current_password: str, new_password: str) -> User:
        user = self._users.get(user_id)
        if not user:
            raise NotFoundError(f"User with ID {user_id} does not exist", error="User not found")

        if not verify_password(current_password, user.password_hash):
            raise AuthenticationError("Current password is incorrect", error="Invalid credentials")

        if len(new_password) < MIN_NEW_PASSWORD_LENGTH:
            raise WeakPasswordError(MIN_NEW_PASSWORD_LENGTH, subject="New password")

        updated = user.model_copy(
            update={"password_hash": hash_password(new_password), "updated_at": utcnow()}
        )
        self._users[user_id] = updated
        logger.info("Password changed for %s", user.username)
        return updated

    def update_user_role(self, user_id: str, role: UserRole) -> User | None:
        user = self._users.get(user_id)
        if not user:
            return None
        updated = user.model_copy(update={"role": role, "updated_at": utcnow()})
        self._users[user_id] = updated
        logger.info("Role of %s set to %s", user.username, role.value)
        return updated

    def delete_user(self, user_id: str) -> bool:
        return self._users.pop(user_id, None) is not None

    @staticmethod
    def sanitize_user(user: User) -> PublicUser:
        return PublicUser.model_validate(user.model_dump(exclude={"password_hash"}))
