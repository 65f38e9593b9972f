"""Abstract repository for Cart aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. The concrete implementation talks to the remote
row store and lives in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from smartcart.domain.model.cart import Cart, CartStatus


class CartRepository(ABC):

    @abstractmethod
    def get_by_code(self, cart_id: str) -> Cart | None:
        """Return the cart printed with *cart_id*, or None."""

    @abstractmethod
    def set_status(self, cart_id: str, status: CartStatus) -> None:
        """Overwrite the cart's status flag."""
