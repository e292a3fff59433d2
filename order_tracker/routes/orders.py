# order_tracker/routes/orders.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query

from .. import access
from ..deps import get_store, require_admin, require_user
from ..errors import NotFoundError
from ..models import Order, PublicUser
from ..schemas import OrderCreateIn, OrderFilters, StatusUpdateIn, ok
from ..store import Store

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_or_404(store: Store, order_id: str) -> Order:
    order = store.orders.get_order_by_id(order_id)
    if not order:
        raise NotFoundError(
            f"Order with ID {order_id} does not exist", error="Order not found"
        )
    return order


# Registered before /{order_id} so "users" is not read as an id.
@router.get("/users")
def list_order_owners(
    _admin: PublicUser = Depends(require_admin),
    store: Store = Depends(get_store),
):
    users = store.orders.get_all_users()
    return ok(users, "Users retrieved successfully", count=len(users))


@router.post("", status_code=201)
def create_order(
    payload: OrderCreateIn,
    user: PublicUser = Depends(require_user),
    store: Store = Depends(get_store),
):
    order = store.orders.create_order(
        user_id=user.username,
        product=payload.product,
        quantity=payload.quantity,
        amount=payload.amount,
    )
    return ok(order.to_json(), "Order created successfully")


@router.get("")
def list_orders(
    status: str | None = Query(default=None),
    user_id: str | None = Query(default=None, alias="userId"),
    user: PublicUser = Depends(require_user),
    store: Store = Depends(get_store),
):
    filters = OrderFilters.from_query(status, user_id)
    orders = store.orders.get_all_orders(
        status=filters.status,
        user_id=access.scope_user_filter(user, filters.user_id),
    )
    return ok([o.to_json() for o in orders], "Orders retrieved successfully", count=len(orders))


@router.get("/{order_id}")
def get_order(
    order_id: str,
    user: PublicUser = Depends(require_user),
    store: Store = Depends(get_store),
):
    order = _get_or_404(store, order_id)
    access.ensure_can_view(user, order)
    return ok(order.to_json(), "Order retrieved successfully")


@router.put("/{order_id}/status")
def update_order_status(
    order_id: str,
    payload: StatusUpdateIn,
    user: PublicUser = Depends(require_user),
    store: Store = Depends(get_store),
):
    order = _get_or_404(store, order_id)
    access.ensure_can_set_status(user, order, payload.status)

    updated = store.orders.update_order_status(order_id, payload.status)
    if not updated:
        raise NotFoundError(f"Order with ID {order_id} does not exist", error="Order not found")
    return ok(updated.to_json(), "Order status updated successfully")


@router.delete("/{order_id}")
def delete_order(
    order_id: str,
    admin: PublicUser = Depends(require_admin),
    store: Store = Depends(get_store),
):
    if not store.orders.delete_order(order_id):
        raise NotFoundError(f"Order with ID {order_id} does not exist", error="Order not found")
    logger.info("Order %s deleted by %s", order_id, admin.username)
    return ok(message="Order deleted successfully")
