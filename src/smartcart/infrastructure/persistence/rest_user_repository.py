"""Row-store implementation of UserRepository."""

from __future__ import annotations

from smartcart.domain.model.user import User
from smartcart.domain.repository.user_repository import UserRepository
from smartcart.infrastructure.persistence.rows import compact, decoding
from smartcart.infrastructure.rest.row_store_client import RowStoreClient

RESOURCE = "users"


class RestUserRepository(UserRepository):

    def __init__(self, client: RowStoreClient) -> None:
        self._client = client

    def get_by_id(self, user_id: str) -> User | None:
        rows = self._client.query(RESOURCE, {"userId": user_id})
        if not rows:
            return None
        raw = rows[0]
        with decoding(RESOURCE):
            return User(
                user_id=raw["userId"],
                email=raw.get("email", ""),
                name=raw.get("name", ""),
                phone=raw.get("phone"),
            )

    def add(self, user: User) -> None:
        self._client.insert(
            RESOURCE,
            compact(
                {
                    "userId": user.user_id,
                    "email": user.email,
                    "name": user.name,
                    "phone": user.phone,
                }
            ),
        )
