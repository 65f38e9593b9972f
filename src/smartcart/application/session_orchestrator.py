"""Session orchestrator: the caller-facing entry point.

Wraps the individual use-case handlers behind one object that owns the
SessionState.  Every operation returns a ``Result``: domain failures are
returned as values, never raised to the caller.  Mutating operations are
serialized on a lock so that two rapid scans of the same barcode cannot
interleave their read-then-write merge.
"""

from __future__ import annotations

import threading
from decimal import Decimal
from typing import Callable, TypeVar

import structlog

from smartcart.application.add_item import AddItemHandler
from smartcart.application.checkout import CheckoutHandler
from smartcart.application.list_products import ListProductsHandler
from smartcart.application.refresh_items import RefreshItemsHandler
from smartcart.application.remove_item import RemoveItemHandler
from smartcart.application.result import Result
from smartcart.application.resume_session import ResumeSessionHandler
from smartcart.application.session_state import SessionState
from smartcart.application.start_session import StartSessionHandler
from smartcart.application.update_quantity import UpdateQuantityHandler
from smartcart.domain.exceptions import DomainException
from smartcart.domain.model.order import Order
from smartcart.domain.model.product import Product
from smartcart.domain.model.session import SessionItem, ShoppingSession
from smartcart.domain.model.value_objects import Money
from smartcart.domain.repository.cart_repository import CartRepository
from smartcart.domain.repository.order_repository import OrderRepository
from smartcart.domain.repository.product_repository import ProductRepository
from smartcart.domain.repository.session_item_repository import SessionItemRepository
from smartcart.domain.repository.session_repository import SessionRepository
from smartcart.domain.repository.user_repository import UserRepository

log = structlog.get_logger(__name__)

T = TypeVar("T")


class SessionOrchestrator:

    def __init__(
        self,
        cart_repo: CartRepository,
        session_repo: SessionRepository,
        item_repo: SessionItemRepository,
        product_repo: ProductRepository,
        order_repo: OrderRepository,
        user_repo: UserRepository,
        state: SessionState | None = None,
    ) -> None:
        self.state = state if state is not None else SessionState()
        self._lock = threading.Lock()

        self._start = StartSessionHandler(self.state, cart_repo, session_repo, user_repo)
        self._resume = ResumeSessionHandler(self.state, session_repo, item_repo)
        self._add = AddItemHandler(self.state, product_repo, item_repo, order_repo)
        self._update = UpdateQuantityHandler(self.state, item_repo, order_repo)
        self._remove = RemoveItemHandler(self.state, item_repo, order_repo)
        self._refresh = RefreshItemsHandler(self.state, item_repo)
        self._products = ListProductsHandler(product_repo)
        self._checkout = CheckoutHandler(
            self.state, cart_repo, session_repo, item_repo, product_repo, order_repo
        )

    # --- Session lifecycle ------------------------------------------------------

    def start_session(self, cart_code: str, user_id: str) -> Result[ShoppingSession]:
        return self._mutate("start_session", self._start.handle, cart_code, user_id)

    def resume_session(self, session_id: str) -> Result[ShoppingSession]:
        return self._mutate("resume_session", self._resume.handle, session_id)

    def checkout(
        self,
        payment_method: str,
        discount: Money | Decimal | str | int = 0,
        session_id: str | None = None,
    ) -> Result[Order]:
        def run() -> Order:
            amount = discount if isinstance(discount, Money) else Money.of(discount)
            return self._checkout.handle(payment_method, amount, session_id)

        return self._mutate("checkout", run)

    # --- Items ------------------------------------------------------------------

    def add_item(self, product_code: str, session_id: str | None = None) -> Result[SessionItem]:
        return self._mutate("add_item", self._add.handle, product_code, session_id)

    def update_quantity(self, item_id: str, quantity: int) -> Result[None]:
        return self._mutate("update_quantity", self._update.handle, item_id, quantity)

    def remove_item(self, item_id: str) -> Result[None]:
        return self._mutate("remove_item", self._remove.handle, item_id)

    def refresh_items(self) -> Result[list[SessionItem]]:
        return self._mutate("refresh_items", self._refresh.handle)

    # --- Queries ----------------------------------------------------------------

    def list_products(self) -> Result[list[Product]]:
        return self._call("list_products", self._products.handle)

    # --- Internal helpers -------------------------------------------------------

    def _mutate(self, operation: str, fn: Callable[..., T], *args: object) -> Result[T]:
        with self._lock:
            return self._call(operation, fn, *args)

    @staticmethod
    def _call(operation: str, fn: Callable[..., T], *args: object) -> Result[T]:
        try:
            return Result.success(fn(*args))
        except DomainException as exc:
            log.warning(
                "operation_failed",
                operation=operation,
                kind=exc.kind.value,
                retryable=exc.retryable,
                error=str(exc),
            )
            return Result.failure(exc)
