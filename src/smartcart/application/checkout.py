"""Application service: Checkout use case.

Turns the active session into a permanent Order and gives the cart back.
The store has no multi-row transactions, so checkout is an ordered list
of remote writes, each of which may be the last one to succeed:

1. Order row.  If this fails nothing has changed anywhere.
2. Order items.  A failure leaves an Order with some of its items.
3. Session marked completed.
4. Cart marked available.  A failure here leaves a completed session on
   a cart still flagged in_use; a reconciliation sweep frees such carts.

Local state is cleared only after all four succeed.  Calling checkout
again after a partial failure picks up where the last attempt stopped:
the existing Order is reused (its totals stay frozen) and order items
already written are skipped, because their ids are derived from the
order and session-item ids.

Once the Order row exists the session's items are frozen.  Item changes
are refused with CheckoutInProgress, and a retry whose items, payment
method or discount no longer match the Order is refused the same way.
"""

from __future__ import annotations

from dataclasses import replace

import structlog

from smartcart.application.session_state import SessionState
from smartcart.domain.exceptions import CheckoutInProgress, DomainException
from smartcart.domain.model.cart import CartStatus
from smartcart.domain.model.order import Order, OrderItem
from smartcart.domain.model.product import Product
from smartcart.domain.model.session import SessionItem, ShoppingSession, items_total
from smartcart.domain.model.value_objects import Money
from smartcart.domain.repository.cart_repository import CartRepository
from smartcart.domain.repository.order_repository import OrderRepository
from smartcart.domain.repository.product_repository import ProductRepository
from smartcart.domain.repository.session_item_repository import SessionItemRepository
from smartcart.domain.repository.session_repository import SessionRepository

log = structlog.get_logger(__name__)


def ensure_no_open_order(order_repo: OrderRepository, session: ShoppingSession) -> None:
    order = order_repo.get_by_session(session.session_id)
    if order is not None:
        raise CheckoutInProgress(
            f"Checkout of session {session.session_id} has started (order {order.order_id}); "
            "retry checkout to finish it"
        )


class CheckoutHandler:

    def __init__(
        self,
        state: SessionState,
        cart_repo: CartRepository,
        session_repo: SessionRepository,
        item_repo: SessionItemRepository,
        product_repo: ProductRepository,
        order_repo: OrderRepository,
    ) -> None:
        self._state = state
        self._cart_repo = cart_repo
        self._session_repo = session_repo
        self._item_repo = item_repo
        self._product_repo = product_repo
        self._order_repo = order_repo

    def handle(
        self,
        payment_method: str,
        discount: Money,
        session_id: str | None = None,
    ) -> Order:
        session = self._state.require_active(session_id)

        # Snapshot: anything scanned after this read is not part of the order.
        items = self._item_repo.list_for_session(session.session_id)

        order = self._open_order(session, items, payment_method, discount)
        self._write_order_items(order, items)

        completed = replace(session)
        completed.complete(order.total_amount)
        self._session_repo.save_completion(completed)

        self._cart_repo.set_status(session.cart_id, CartStatus.AVAILABLE)
        log.info("cart_released", cart_id=session.cart_id)

        self._state.clear()
        log.info(
            "checkout_completed",
            order_id=order.order_id,
            session_id=session.session_id,
            items=len(items),
            final_amount=str(order.final_amount),
        )
        return order

    # --- Steps ------------------------------------------------------------------

    def _open_order(
        self,
        session: ShoppingSession,
        items: list[SessionItem],
        payment_method: str,
        discount: Money,
    ) -> Order:
        existing = self._order_repo.get_by_session(session.session_id)
        if existing is None:
            order = Order.create(session, items, payment_method, discount)
            self._order_repo.add(order)
            log.info("order_created", order_id=order.order_id, total=str(order.total_amount))
            return order

        same_terms = (
            (payment_method or "").strip() == existing.payment_method
            and discount == existing.discount_amount
        )
        if not same_terms:
            raise CheckoutInProgress(
                f"Order {existing.order_id} was opened with {existing.payment_method} and "
                f"discount {existing.discount_amount}; retry with the same terms"
            )
        if items_total(items) != existing.total_amount:
            raise CheckoutInProgress(
                f"Items of session {session.session_id} changed after order "
                f"{existing.order_id} was opened at {existing.total_amount}"
            )
        log.warning("checkout_resumed", order_id=existing.order_id, session_id=session.session_id)
        return existing

    def _write_order_items(self, order: Order, items: list[SessionItem]) -> None:
        by_line_id = {OrderItem.id_for(order.order_id, item.item_id): item for item in items}
        written = self._order_repo.list_items(order.order_id)
        for line in written:
            item = by_line_id.get(line.order_item_id)
            if item is None or item.quantity.value != line.quantity:
                raise CheckoutInProgress(
                    f"Order {order.order_id} already holds {line.barcode} x{line.quantity}, "
                    "which no longer matches the session"
                )

        done = {line.order_item_id for line in written}
        for item in items:
            if OrderItem.id_for(order.order_id, item.item_id) in done:
                continue
            line = OrderItem.snapshot(order.order_id, item, self._resolve_product(item))
            self._order_repo.add_item(line)

    def _resolve_product(self, item: SessionItem) -> Product | None:
        try:
            product = self._product_repo.get_by_id(item.product_id)
        except DomainException as exc:
            log.warning("product_lookup_failed", product_id=item.product_id, error=str(exc))
            return None
        if product is None:
            log.warning("product_missing", product_id=item.product_id)
        return product
