"""Row-store implementation of SessionRepository."""

from __future__ import annotations

from smartcart.domain.model.session import SessionStatus, ShoppingSession
from smartcart.domain.repository.session_repository import SessionRepository
from smartcart.infrastructure.persistence.rows import (
    compact,
    decoding,
    from_millis,
    money,
    to_millis,
)
from smartcart.infrastructure.rest.row_store_client import RowStoreClient

RESOURCE = "shopping_sessions"


class RestSessionRepository(SessionRepository):

    def __init__(self, client: RowStoreClient) -> None:
        self._client = client

    # --- SessionRepository interface --------------------------------------------

    def get_by_id(self, session_id: str) -> ShoppingSession | None:
        rows = self._client.query(RESOURCE, {"sessionId": session_id})
        return self._to_domain(rows[0]) if rows else None

    def add(self, session: ShoppingSession) -> None:
        self._client.insert(RESOURCE, self._to_raw(session))

    def save_completion(self, session: ShoppingSession) -> None:
        completed_at = session.completed_at
        self._client.patch(
            RESOURCE,
            {"sessionId": session.session_id},
            {
                "status": session.status.value,
                "completedAt": to_millis(completed_at) if completed_at else None,
                "totalAmount": session.total_amount.to_float(),
            },
        )

    # --- Serialization ----------------------------------------------------------

    @staticmethod
    def _to_raw(session: ShoppingSession) -> dict:
        return compact(
            {
                "sessionId": session.session_id,
                "cartId": session.cart_id,
                "userId": session.user_id,
                "status": session.status.value,
                "startedAt": to_millis(session.started_at),
                "completedAt": to_millis(session.completed_at) if session.completed_at else None,
                "totalAmount": session.total_amount.to_float(),
            }
        )

    @staticmethod
    def _to_domain(raw: dict) -> ShoppingSession:
        with decoding(RESOURCE):
            return ShoppingSession(
                session_id=raw["sessionId"],
                cart_id=raw["cartId"],
                user_id=raw["userId"],
                status=SessionStatus(raw["status"]),
                started_at=from_millis(raw["startedAt"]),  # type: ignore[arg-type]
                completed_at=from_millis(raw.get("completedAt")),
                total_amount=money(raw.get("totalAmount")),
            )
