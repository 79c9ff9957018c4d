"""Order storage."""

import abc
import threading
from datetime import datetime, timezone
from typing import Optional

from order_desk.common import logger
from order_desk.common.structures import Order, OrderRequest


class OrderRepository:
    """Generic storage for persisted orders."""

    @abc.abstractmethod
    def save(self, order_request: OrderRequest) -> Order:
        """Persist a validated order request and return the stored order."""

    @abc.abstractmethod
    def get(self, order_id: int) -> Optional[Order]:
        """Get the order with the given id, None if it does not exist."""

    @abc.abstractmethod
    def list_orders(self) -> list[Order]:
        """List all stored orders in creation order."""


class InMemoryOrderRepository(OrderRepository):
    """Thread-safe order storage kept in process memory.

    Ids start at 1 and grow by one with every save, so repeating a request
    always yields a new, distinct order.
    """

    def __init__(self) -> None:
        self._orders: dict[int, Order] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def save(self, order_request: OrderRequest) -> Order:
        with self._lock:
            order = Order(
                id=self._next_id,
                user_id=order_request.user_id,
                product_id=order_request.product_id,
                mode=order_request.mode,
                created_at=datetime.now(timezone.utc),
            )
            self._orders[order.id] = order
            self._next_id += 1
        logger.debug("Stored order %s", order.id)
        return order

    def get(self, order_id: int) -> Optional[Order]:
        with self._lock:
            return self._orders.get(order_id)

    def list_orders(self) -> list[Order]:
        with self._lock:
            return list(self._orders.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._orders)
