"""Application service: make sure a users row exists for the shopper.

This is a side step of starting a session.  A failure here is logged and
swallowed so that it never blocks the shopper from claiming a cart.
"""

from __future__ import annotations

import structlog

from smartcart.domain.exceptions import DomainException
from smartcart.domain.model.user import GUEST_NAME, User
from smartcart.domain.repository.user_repository import UserRepository

log = structlog.get_logger(__name__)


class EnsureUserHandler:

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def handle(self, user_id: str, name: str = GUEST_NAME) -> bool:
        """Return True if the user exists afterwards, False if that is unknown."""
        try:
            if self._user_repo.get_by_id(user_id) is not None:
                log.debug("user_exists", user_id=user_id)
                return True
            self._user_repo.add(User.guest(user_id, name))
        except DomainException as exc:
            log.warning("ensure_user_failed", user_id=user_id, error=str(exc), kind=exc.kind.value)
            return False
        log.info("user_created", user_id=user_id)
        return True
