"""Application service: Start Session use case.

Claims a cart for a shopper.  The availability check and the claim are
two separate remote calls and the store offers no conditional update, so
two shoppers scanning the same cart at the same moment can both pass the
check.  That race is accepted: last writer wins on the cart row.
"""

from __future__ import annotations

from dataclasses import replace

import structlog

from smartcart.application.ensure_user import EnsureUserHandler
from smartcart.application.session_state import SessionState
from smartcart.domain.exceptions import CartNotFound, DomainException, SessionAlreadyActive
from smartcart.domain.model.session import ShoppingSession
from smartcart.domain.model.value_objects import Money
from smartcart.domain.repository.cart_repository import CartRepository
from smartcart.domain.repository.session_repository import SessionRepository
from smartcart.domain.repository.user_repository import UserRepository

log = structlog.get_logger(__name__)


class StartSessionHandler:

    def __init__(
        self,
        state: SessionState,
        cart_repo: CartRepository,
        session_repo: SessionRepository,
        user_repo: UserRepository,
    ) -> None:
        self._state = state
        self._cart_repo = cart_repo
        self._session_repo = session_repo
        self._ensure_user = EnsureUserHandler(user_repo)

    def handle(self, cart_code: str, user_id: str) -> ShoppingSession:
        """Claim *cart_code* for *user_id* and make the new session current.

        Steps:
        1. Refuse if a session is already held (never replace it silently).
        2. Ensure the user row exists (best effort).
        3. Look up the cart; it must exist and be available.
        4. Write the session row, then flip the cart to in_use.
        5. Publish the session with an empty item list.
        """
        current = self._state.current_session.value
        if current is not None:
            raise SessionAlreadyActive(
                f"Session {current.session_id} is already active on cart '{current.cart_id}'"
            )

        session = ShoppingSession.start(cart_id=cart_code, user_id=user_id)
        self._ensure_user.handle(session.user_id)

        cart = self._cart_repo.get_by_code(session.cart_id)
        if cart is None:
            raise CartNotFound(f"Cart '{session.cart_id}' not found")
        cart.claim()

        self._session_repo.add(session)
        log.info("session_created", session_id=session.session_id, cart_id=cart.cart_id)

        try:
            self._cart_repo.set_status(cart.cart_id, cart.status)
        except DomainException:
            self._abandon(session)
            raise

        self._state.activate(session, [])
        log.info("session_started", session_id=session.session_id, user_id=session.user_id)
        return session

    def _abandon(self, session: ShoppingSession) -> None:
        """Close a session row whose cart could not be claimed."""
        closed = replace(session)
        closed.complete(Money.zero())
        try:
            self._session_repo.save_completion(closed)
        except DomainException as exc:
            log.error(
                "orphaned_session",
                session_id=session.session_id,
                cart_id=session.cart_id,
                error=str(exc),
            )
        else:
            log.warning("session_abandoned", session_id=session.session_id)
