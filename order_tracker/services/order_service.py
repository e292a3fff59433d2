# order_tracker/services/order_service.py
from __future__ import annotations

import logging
from datetime import datetime
from typing import Dict, Iterable, List

from ..models import Order, OrderStatus, new_id, utcnow

logger = logging.getLogger(__name__)


class OrderService:
    """In-memory order store keyed by order id.

    Inputs are assumed to be validated by the caller; ownership and status
    transition rules live in ``order_tracker.access``, not here.
    """

    def __init__(self) -> None:
        self._orders: Dict[str, Order] = {}

    def seed(self, orders: Iterable[Order]) -> None:
        for order in orders:
            self._orders[order.id] = order

    def create_order(self, user_id: str, product: str, quantity: int, amount: float) -> Order:
        now = utcnow()
        order = Order(
            id=new_id(),
            user_id=user_id,
            product=product,
            quantity=quantity,
            amount=amount,
            status=OrderStatus.PENDING,
            created_at=now,
            updated_at=now,
        )
        self._orders[order.id] = order
        logger.info("Created order %s for %s", order.id, user_id)
        return order

    def get_all_orders(
        self,
        status: OrderStatus | None = None,
        user_id: str | None = None,
    ) -> List[Order]:
        orders = list(self._orders.values())
        if status:
            orders = [o for o in orders if o.status == status]
        if user_id:
            orders = [o for o in orders if o.user_id == user_id]
        return sorted(orders, key=lambda o: o.created_at, reverse=True)

    def get_order_by_id(self, order_id: str) -> Order | None:
        return self._orders.get(order_id)

    def update_order_status(self, order_id: str, status: OrderStatus) -> Order | None:
        order = self._orders.get(order_id)
        if not order:
            return None

        updated = order.model_copy(
            update={"status": status, "updated_at": _not_before(utcnow(), order.updated_at)}
        )
        self._orders[order_id] = updated
        logger.info("Order %s status %s -> %s", order_id, order.status.value, status.value)
        return updated

    def delete_order(self, order_id: str) -> bool:
        removed = self._orders.pop(order_id, None) is not None
        if removed:
            logger.info("Deleted order %s", order_id)
        return removed

    def get_all_users(self) -> List[str]:
        return sorted({o.user_id for o in self._orders.values()})

    def count(self) -> int:
        return len(self._orders)


def _not_before(ts: datetime, floor: datetime) -> datetime:
    return ts if ts >= floor else floor
