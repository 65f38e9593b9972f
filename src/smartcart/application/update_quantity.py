"""Application service: Update Quantity use case.

A quantity of zero or less removes the line, the same as an explicit
remove.
"""

from __future__ import annotations

import structlog

from smartcart.application.checkout import ensure_no_open_order
from smartcart.application.refresh_items import RefreshItemsHandler
from smartcart.application.session_state import SessionState
from smartcart.domain.exceptions import SessionItemNotFound
from smartcart.domain.model.session import SessionItem, ShoppingSession
from smartcart.domain.repository.order_repository import OrderRepository
from smartcart.domain.repository.session_item_repository import SessionItemRepository

log = structlog.get_logger(__name__)


def _not_in_session(session: ShoppingSession, item_id: str) -> SessionItemNotFound:
    return SessionItemNotFound(f"Item '{item_id}' not found in session {session.session_id}")


def ensure_owned(
    item_repo: SessionItemRepository, session: ShoppingSession, item_id: str
) -> None:
    """Check that *item_id* belongs to *session* without reading the line itself.

    Deleting must work even for a row whose quantity another writer left
    unreadable.
    """
    if item_repo.session_id_of(item_id) != session.session_id:
        raise _not_in_session(session, item_id)


def find_session_item(
    item_repo: SessionItemRepository, session: ShoppingSession, item_id: str
) -> SessionItem:
    item = item_repo.get_by_id(item_id)
    if item is None or item.session_id != session.session_id:
        raise _not_in_session(session, item_id)
    return item


class UpdateQuantityHandler:

    def __init__(
        self,
        state: SessionState,
        item_repo: SessionItemRepository,
        order_repo: OrderRepository,
    ) -> None:
        self._state = state
        self._item_repo = item_repo
        self._order_repo = order_repo
        self._refresh = RefreshItemsHandler(state, item_repo)

    def handle(self, item_id: str, quantity: int) -> None:
        session = self._state.require_active()
        ensure_no_open_order(self._order_repo, session)

        if quantity <= 0:
            ensure_owned(self._item_repo, session, item_id)
            self._item_repo.delete(item_id)
            log.info("item_removed", item_id=item_id, reason="non_positive_quantity")
        else:
            item = find_session_item(self._item_repo, session, item_id)
            item.change_quantity(quantity)
            self._item_repo.save_quantity(item)
            log.info("item_quantity_changed", item_id=item.item_id, quantity=quantity)

        self._refresh.handle(session.session_id)
