"""Application service: Remove Item use case."""

from __future__ import annotations

import structlog

from smartcart.application.checkout import ensure_no_open_order
from smartcart.application.refresh_items import RefreshItemsHandler
from smartcart.application.session_state import SessionState
from smartcart.application.update_quantity import ensure_owned
from smartcart.domain.repository.order_repository import OrderRepository
from smartcart.domain.repository.session_item_repository import SessionItemRepository

log = structlog.get_logger(__name__)


class RemoveItemHandler:

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

    def handle(self, item_id: str) -> None:
        session = self._state.require_active()
        ensure_no_open_order(self._order_repo, session)
        ensure_owned(self._item_repo, session, item_id)

        self._item_repo.delete(item_id)
        log.info("item_removed", item_id=item_id)

        self._refresh.handle(session.session_id)
