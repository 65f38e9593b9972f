"""ShoppingSession aggregate and its line items.

A session is one customer's use of one cart, from the QR scan that claims
the cart to the checkout that releases it.  Line items belong to exactly
one session and are merged per barcode.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from smartcart.domain.exceptions import ValidationError
from smartcart.domain.model.product import Product
from smartcart.domain.model.value_objects import Money, Quantity


class SessionStatus(Enum):
    ACTIVE = "active"
    COMPLETED = "completed"


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ShoppingSession:
    """Aggregate root for a shopping session.

    Use ``ShoppingSession.start()`` for new sessions.  The ``__init__`` is
    kept plain so repositories can reconstitute stored rows as they are.
    """

    session_id: str
    cart_id: str
    user_id: str
    status: SessionStatus = SessionStatus.ACTIVE
    started_at: datetime = field(default_factory=_now)
    completed_at: datetime | None = None
    total_amount: Money = field(default_factory=Money.zero)

    # --- Factory (used for NEW sessions only) ---------------------------------

    @staticmethod
    def start(cart_id: str, user_id: str) -> ShoppingSession:
        if not cart_id or not cart_id.strip():
            raise ValidationError("Cart code is required")
        if not user_id or not user_id.strip():
            raise ValidationError("User ID is required")
        return ShoppingSession(
            session_id=str(uuid.uuid4()),
            cart_id=cart_id.strip(),
            user_id=user_id.strip(),
        )

    # --- State transitions ----------------------------------------------------

    @property
    def is_active(self) -> bool:
        return self.status == SessionStatus.ACTIVE

    def complete(self, total: Money, at: datetime | None = None) -> None:
        """Transition active -> completed.  Happens exactly once."""
        if self.status != SessionStatus.ACTIVE:
            raise ValidationError(
                f"Cannot complete session {self.session_id}: "
                f"current status is {self.status.value}"
            )
        self.status = SessionStatus.COMPLETED
        self.completed_at = at or _now()
        self.total_amount = total


@dataclass
class SessionItem:
    """A line item: one product in one session, with a running quantity.

    ``unit_price`` is copied from the product at first scan and is not
    refreshed if the catalog price changes afterwards.
    """

    item_id: str
    session_id: str
    product_id: str
    barcode: str
    quantity: Quantity
    unit_price: Money  # locked at first scan
    scanned_by: str = "customer"

    @property
    def total_price(self) -> Money:
        return self.unit_price * self.quantity.value

    @staticmethod
    def first_scan(session_id: str, product: Product, scanned_by: str = "customer") -> SessionItem:
        return SessionItem(
            item_id=str(uuid.uuid4()),
            session_id=session_id,
            product_id=product.product_id,
            barcode=product.barcode,
            quantity=Quantity(1),
            unit_price=product.price,
            scanned_by=scanned_by,
        )

    def increment(self) -> None:
        """Repeat scan of the same barcode."""
        self.quantity = self.quantity + 1

    def change_quantity(self, quantity: int) -> None:
        self.quantity = Quantity(quantity)


def items_total(items: list[SessionItem], currency: str = "USD") -> Money:
    result = Money.zero(currency)
    for item in items:
        result = result + item.total_price
    return result
