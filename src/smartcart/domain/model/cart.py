"""Cart aggregate.

Carts are provisioned outside this system (each one has a QR code printed
on it).  The only thing the shopping flow changes is the status flag.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from smartcart.domain.exceptions import CartUnavailable


class CartStatus(Enum):
    AVAILABLE = "available"
    IN_USE = "in_use"


@dataclass
class Cart:
    """A physical cart, claimable by one shopping session at a time."""

    cart_id: str
    status: CartStatus = CartStatus.AVAILABLE
    qr_code_data: str | None = None
    store_location: str | None = None

    @property
    def is_available(self) -> bool:
        return self.status == CartStatus.AVAILABLE

    def claim(self) -> None:
        """Transition available -> in_use."""
        if not self.is_available:
            raise CartUnavailable(f"Cart '{self.cart_id}' is currently in use")
        self.status = CartStatus.IN_USE

    def release(self) -> None:
        self.status = CartStatus.AVAILABLE
