"""Order aggregate: the permanent record of a checkout.

An Order is written once, when a session checks out.  Its totals and its
items are a snapshot: later changes to session items or to the product
catalog never reach back into it.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from enum import Enum

from smartcart.domain.exceptions import ValidationError
from smartcart.domain.model.product import Product
from smartcart.domain.model.session import SessionItem, ShoppingSession, items_total
from smartcart.domain.model.value_objects import Money

UNKNOWN_PRODUCT_NAME = "Unknown Product"

# Namespace for deterministic order-item ids, so a retried checkout
# writes the same ids instead of duplicating rows.
_ORDER_ITEM_NAMESPACE = uuid.UUID("8a0f9d43-6b0e-4c55-9f51-2c7d1e0b6a12")


class PaymentStatus(Enum):
    PENDING = "pending"
    COMPLETED = "completed"


class OrderStatus(Enum):
    PENDING = "pending"
    COMPLETED = "completed"


@dataclass(frozen=True)
class OrderItem:
    """Denormalized copy of a session item at checkout time."""

    order_item_id: str
    order_id: str
    product_id: str
    product_name: str
    barcode: str
    quantity: int
    unit_price: Money
    total_price: Money
    category: str | None = None

    @staticmethod
    def snapshot(order_id: str, item: SessionItem, product: Product | None) -> OrderItem:
        """Copy *item* into an order line.

        *product* supplies the display name and category; when it could not
        be resolved the line is still written with a placeholder name.
        """
        return OrderItem(
            order_item_id=OrderItem.id_for(order_id, item.item_id),
            order_id=order_id,
            product_id=item.product_id,
            product_name=product.name if product is not None else UNKNOWN_PRODUCT_NAME,
            barcode=item.barcode,
            quantity=item.quantity.value,
            unit_price=item.unit_price,
            total_price=item.total_price,
            category=product.category if product is not None else None,
        )

    @staticmethod
    def id_for(order_id: str, item_id: str) -> str:
        return str(uuid.uuid5(_ORDER_ITEM_NAMESPACE, f"{order_id}:{item_id}"))


@dataclass(frozen=True)
class Order:
    """Aggregate root for completed purchases.

    Use the ``Order.create()`` factory for new orders; it computes and
    freezes the totals.
    """

    order_id: str
    session_id: str
    user_id: str
    total_amount: Money
    discount_amount: Money
    final_amount: Money
    payment_method: str
    payment_status: PaymentStatus = PaymentStatus.COMPLETED
    order_status: OrderStatus = OrderStatus.COMPLETED

    @staticmethod
    def create(
        session: ShoppingSession,
        items: list[SessionItem],
        payment_method: str,
        discount: Money,
    ) -> Order:
        """Build the order for *session* from a snapshot of its items.

        The final amount never drops below zero: a discount larger than
        the total is absorbed.
        """
        if not payment_method or not payment_method.strip():
            raise ValidationError("Payment method is required")

        total = items_total(items)
        return Order(
            order_id=str(uuid.uuid4()),
            session_id=session.session_id,
            user_id=session.user_id,
            total_amount=total,
            discount_amount=discount,
            final_amount=total.minus_floor_zero(discount),
            payment_method=payment_method.strip(),
        )
