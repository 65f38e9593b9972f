"""Application service: re-read the active session's items from the store."""

from __future__ import annotations

import structlog

from smartcart.application.session_state import SessionState
from smartcart.domain.model.session import SessionItem
from smartcart.domain.repository.session_item_repository import SessionItemRepository

log = structlog.get_logger(__name__)


class RefreshItemsHandler:

    def __init__(self, state: SessionState, item_repo: SessionItemRepository) -> None:
        self._state = state
        self._item_repo = item_repo

    def handle(self, session_id: str | None = None) -> list[SessionItem]:
        """Replace the published item list with what the store holds now.

        Mutating use cases call this after their write instead of patching
        the local list, so concurrent writers (a staff scanner, a second
        device) show up too.
        """
        session = self._state.require_active(session_id)
        items = self._item_repo.list_for_session(session.session_id)
        self._state.replace_items(items)
        log.debug("items_refreshed", session_id=session.session_id, count=len(items))
        return items
