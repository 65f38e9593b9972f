"""Application service: Resume Session use case.

Loads an active session that was started earlier (by this process or
another one) into SessionState, together with its current items.
"""

from __future__ import annotations

import structlog

from smartcart.application.session_state import SessionState
from smartcart.domain.exceptions import EntityNotFoundError, NoActiveSession, SessionAlreadyActive
from smartcart.domain.model.session import ShoppingSession
from smartcart.domain.repository.session_item_repository import SessionItemRepository
from smartcart.domain.repository.session_repository import SessionRepository

log = structlog.get_logger(__name__)


class ResumeSessionHandler:

    def __init__(
        self,
        state: SessionState,
        session_repo: SessionRepository,
        item_repo: SessionItemRepository,
    ) -> None:
        self._state = state
        self._session_repo = session_repo
        self._item_repo = item_repo

    def handle(self, session_id: str) -> ShoppingSession:
        current = self._state.current_session.value
        if current is not None and current.session_id != session_id:
            raise SessionAlreadyActive(
                f"Session {current.session_id} is already active on cart '{current.cart_id}'"
            )

        session = self._session_repo.get_by_id(session_id)
        if session is None:
            raise EntityNotFoundError(f"Session {session_id} not found")
        if not session.is_active:
            raise NoActiveSession(
                f"Session {session_id} is {session.status.value}, not active"
            )

        items = self._item_repo.list_for_session(session.session_id)
        self._state.activate(session, items)
        log.info("session_resumed", session_id=session.session_id, items=len(items))
        return session
