"""Row-store implementation of CartRepository."""

from __future__ import annotations

from smartcart.domain.model.cart import Cart, CartStatus
from smartcart.domain.repository.cart_repository import CartRepository
from smartcart.infrastructure.persistence.rows import decoding
from smartcart.infrastructure.rest.row_store_client import RowStoreClient

RESOURCE = "carts"


class RestCartRepository(CartRepository):

    def __init__(self, client: RowStoreClient) -> None:
        self._client = client

    # --- CartRepository interface -----------------------------------------------

    def get_by_code(self, cart_id: str) -> Cart | None:
        for raw in self._client.query(RESOURCE, {"cartId": cart_id}):
            if raw.get("cartId") == cart_id:
                return self._to_domain(raw)
        return None

    def set_status(self, cart_id: str, status: CartStatus) -> None:
        self._client.patch(RESOURCE, {"cartId": cart_id}, {"status": status.value})

    # --- Serialization ----------------------------------------------------------

    @staticmethod
    def _to_domain(raw: dict) -> Cart:
        with decoding(RESOURCE):
            return Cart(
                cart_id=raw["cartId"],
                status=CartStatus(raw["status"]),
                qr_code_data=raw.get("qrCodeData"),
                store_location=raw.get("storeLocation"),
            )
