"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry formatted data from the application layer to the CLI without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from smartcart.domain.model.order import Order
from smartcart.domain.model.session import SessionItem, ShoppingSession, items_total


@dataclass(frozen=True)
class SessionItemDTO:
    """A single cart line as displayed to the user."""

    item_id: str
    barcode: str
    quantity: int
    unit_price: str  # formatted, e.g. "$10.00"
    line_total: str


@dataclass(frozen=True)
class CartDTO:
    """The active session together with its lines and running total."""

    session_id: str
    cart_id: str
    user_id: str
    status: str
    started_at: str
    items: list[SessionItemDTO]
    total: str


@dataclass(frozen=True)
class OrderDTO:
    order_id: str
    session_id: str
    payment_method: str
    total: str
    discount: str
    final: str


def cart_dto(session: ShoppingSession, items: list[SessionItem] | tuple[SessionItem, ...]) -> CartDTO:
    return CartDTO(
        session_id=session.session_id,
        cart_id=session.cart_id,
        user_id=session.user_id,
        status=session.status.value,
        started_at=session.started_at.strftime("%Y-%m-%d %H:%M UTC"),
        items=[
            SessionItemDTO(
                item_id=item.item_id,
                barcode=item.barcode,
                quantity=item.quantity.value,
                unit_price=str(item.unit_price),
                line_total=str(item.total_price),
            )
            for item in items
        ],
        total=str(items_total(list(items))),
    )


def order_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        order_id=order.order_id,
        session_id=order.session_id,
        payment_method=order.payment_method,
        total=str(order.total_amount),
        discount=str(order.discount_amount),
        final=str(order.final_amount),
    )
