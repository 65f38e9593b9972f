"""Abstract repository for Order aggregate and its items."""

from __future__ import annotations

from abc import ABC, abstractmethod

from smartcart.domain.model.order import Order, OrderItem


class OrderRepository(ABC):

    @abstractmethod
    def get_by_session(self, session_id: str) -> Order | None:
        """Return the order created for a session, or None."""

    @abstractmethod
    def add(self, order: Order) -> None:
        """Persist a new order."""

    @abstractmethod
    def list_items(self, order_id: str) -> list[OrderItem]:
        """Return the items written for an order so far."""

    @abstractmethod
    def add_item(self, item: OrderItem) -> None:
        """Persist one order item."""
