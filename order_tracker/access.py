# order_tracker/access.py
"""
Who may see and change which order.

Ownership is a plain string comparison between ``Order.user_id`` and the
principal's *username*. Admins pass every check. Callers must resolve the
order (404) before calling these, so a missing order is never reported as
forbidden.
"""
from __future__ import annotations

from .errors import AuthorizationError
from .models import Order, OrderStatus, PublicUser


def owns(principal: PublicUser, order: Order) -> bool:
    return order.user_id == principal.username


def ensure_can_view(principal: PublicUser, order: Order) -> None:
    if principal.is_admin or owns(principal, order):
        return
    raise AuthorizationError("You can only access your own orders")


def ensure_can_set_status(principal: PublicUser, order: Order, new_status: OrderStatus) -> None:
    """Non-admins may only cancel their own pending orders.

    Ownership is checked before transition legality.
    """
    if principal.is_admin:
        return
    if not owns(principal, order):
        raise AuthorizationError("You can only modify your own orders")
    if order.status != OrderStatus.PENDING or new_status != OrderStatus.CANCELLED:
        raise AuthorizationError("You can only cancel your own pending orders")


def scope_user_filter(principal: PublicUser, requested: str | None) -> str | None:
    """Owner filter actually applied to a listing.

    Admins get what they asked for (or no filter); everyone else is pinned to
    their own username whatever they asked for.
    """
    if principal.is_admin:
        return requested
    return principal.username
