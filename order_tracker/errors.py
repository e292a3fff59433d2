# order_tracker/errors.py
"""Error taxonomy for the order tracker.

Every failure a request can hit is one of these. ``main`` maps them to HTTP
status codes and renders ``{"success": false, "error": ..., "message": ...}``.
"""
from __future__ import annotations



class OrderTrackerError(Exception):
    """Base exception for all order tracker errors."""

    label = "Internal server error"

    def __init__(self, message: str, error: str | None = None):
        self.message = message
        self.error = error or self.label
        super().__init__(message)


class ValidationError(OrderTrackerError):
    """Malformed or missing request fields."""

    label = "Validation failed"


class AuthenticationError(OrderTrackerError):
    """Missing, invalid or expired credentials."""

    label = "Authentication required"


class AuthorizationError(OrderTrackerError):
    """Authenticated, but the role or ownership check failed."""

    label = "Access denied"


class NotFoundError(OrderTrackerError):
    """Raised when an id does not match any record."""

    label = "Not found"


class ConflictError(OrderTrackerError):
    """Raised when a unique field is already taken."""

    label = "Conflict"


class InternalError(OrderTrackerError):
    """Unexpected failure."""

    label = "Internal server error"


class DuplicateUserError(ConflictError):
    """Raised when registering an email or username that already exists."""

    def __init__(self, message: str = "User with this email already exists"):
        super().__init__(message, error="Registration failed")


class WeakPasswordError(ValidationError):
    """Raised when a password is shorter than the required minimum."""

    def __init__(self, min_length: int, subject: str = "Password"):
        self.min_length = min_length
        super().__init__(
            f"{subject} must be at least {min_length} characters long",
            error="Weak password",
        )
