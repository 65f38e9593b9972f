"""Row-store implementation of SessionItemRepository.

Rows with a quantity of zero or less can exist in the store (another
device may write them).  They are not line items: reads skip them and
log ``session_item_skipped``, while ``delete`` and ``session_id_of``
still reach them so the row can be cleared.
"""

from __future__ import annotations

import structlog

from smartcart.domain.model.session import SessionItem
from smartcart.domain.model.value_objects import Quantity
from smartcart.domain.repository.session_item_repository import SessionItemRepository
from smartcart.infrastructure.persistence.rows import decoding, money
from smartcart.infrastructure.rest.row_store_client import RowStoreClient

log = structlog.get_logger(__name__)

RESOURCE = "session_items"


class RestSessionItemRepository(SessionItemRepository):

    def __init__(self, client: RowStoreClient) -> None:
        self._client = client

    # --- SessionItemRepository interface ----------------------------------------

    def get_by_id(self, item_id: str) -> SessionItem | None:
        rows = self._readable(self._client.query(RESOURCE, {"itemId": item_id}))
        return self._to_domain(rows[0]) if rows else None

    def find_by_barcode(self, session_id: str, barcode: str) -> SessionItem | None:
        rows = self._readable(
            self._client.query(RESOURCE, {"sessionId": session_id, "barcode": barcode})
        )
        return self._to_domain(rows[0]) if rows else None

    def list_for_session(self, session_id: str) -> list[SessionItem]:
        rows = self._readable(self._client.query(RESOURCE, {"sessionId": session_id}))
        return [self._to_domain(raw) for raw in rows if raw.get("sessionId") == session_id]

    def session_id_of(self, item_id: str) -> str | None:
        rows = self._client.query(RESOURCE, {"itemId": item_id})
        if not rows:
            return None
        with decoding(RESOURCE):
            return str(rows[0]["sessionId"])

    def add(self, item: SessionItem) -> None:
        self._client.insert(RESOURCE, self._to_raw(item))

    def save_quantity(self, item: SessionItem) -> None:
        self._client.patch(
            RESOURCE,
            {"itemId": item.item_id},
            {
                "quantity": item.quantity.value,
                "totalPrice": item.total_price.to_float(),
            },
        )

    def delete(self, item_id: str) -> None:
        self._client.delete(RESOURCE, {"itemId": item_id})

    # --- Serialization ----------------------------------------------------------

    @staticmethod
    def _readable(rows: list[dict]) -> list[dict]:
        readable = []
        for raw in rows:
            with decoding(RESOURCE):
                units = int(raw["quantity"])
            if units > 0:
                readable.append(raw)
            else:
                log.warning(
                    "session_item_skipped",
                    item_id=raw.get("itemId"),
                    session_id=raw.get("sessionId"),
                    quantity=units,
                )
        return readable

    @staticmethod
    def _to_raw(item: SessionItem) -> dict:
        return {
            "itemId": item.item_id,
            "sessionId": item.session_id,
            "productId": item.product_id,
            "barcode": item.barcode,
            "quantity": item.quantity.value,
            "unitPrice": item.unit_price.to_float(),
            "totalPrice": item.total_price.to_float(),
            "scannedBy": item.scanned_by,
        }

    @staticmethod
    def _to_domain(raw: dict) -> SessionItem:
        with decoding(RESOURCE):
            return SessionItem(
                item_id=raw["itemId"],
                session_id=raw["sessionId"],
                product_id=raw["productId"],
                barcode=raw["barcode"],
                quantity=Quantity(int(raw["quantity"])),
                unit_price=money(raw["unitPrice"]),
                scanned_by=raw.get("scannedBy", "customer"),
            )
