"""Application service: Add Item use case (a product scan)."""

from __future__ import annotations

import structlog

from smartcart.application.checkout import ensure_no_open_order
from smartcart.application.refresh_items import RefreshItemsHandler
from smartcart.application.session_state import SessionState
from smartcart.domain.exceptions import ProductNotFound, ValidationError
from smartcart.domain.model.session import SessionItem
from smartcart.domain.repository.order_repository import OrderRepository
from smartcart.domain.repository.product_repository import ProductRepository
from smartcart.domain.repository.session_item_repository import SessionItemRepository

log = structlog.get_logger(__name__)


class AddItemHandler:

    def __init__(
        self,
        state: SessionState,
        product_repo: ProductRepository,
        item_repo: SessionItemRepository,
        order_repo: OrderRepository,
    ) -> None:
        self._state = state
        self._product_repo = product_repo
        self._item_repo = item_repo
        self._order_repo = order_repo
        self._refresh = RefreshItemsHandler(state, item_repo)

    def handle(
        self,
        product_code: str,
        session_id: str | None = None,
        scanned_by: str = "customer",
    ) -> SessionItem:
        """Add one unit of *product_code* to the active session.

        A session holds at most one line per barcode: a repeat scan bumps
        the quantity of the existing line instead of inserting a new one.
        """
        session = self._state.require_active(session_id)
        ensure_no_open_order(self._order_repo, session)

        code = (product_code or "").strip()
        if not code:
            raise ValidationError("Product code is required")

        product = self._product_repo.get_by_barcode(code)
        if product is None:
            raise ProductNotFound(f"Product with code '{code}' not found")

        item = self._item_repo.find_by_barcode(session.session_id, code)
        if item is not None:
            item.increment()
            self._item_repo.save_quantity(item)
            log.info("item_merged", item_id=item.item_id, barcode=code, quantity=item.quantity.value)
        else:
            item = SessionItem.first_scan(session.session_id, product, scanned_by)
            self._item_repo.add(item)
            log.info("item_added", item_id=item.item_id, barcode=code, product=product.name)

        self._refresh.handle(session.session_id)
        return item
