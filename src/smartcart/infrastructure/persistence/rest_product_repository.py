"""Row-store implementation of ProductRepository."""

from __future__ import annotations

from smartcart.domain.model.product import Product
from smartcart.domain.repository.product_repository import ProductRepository
from smartcart.infrastructure.persistence.rows import decoding, money
from smartcart.infrastructure.rest.row_store_client import RowStoreClient

RESOURCE = "products"


class RestProductRepository(ProductRepository):

    def __init__(self, client: RowStoreClient) -> None:
        self._client = client

    # --- ProductRepository interface --------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        rows = self._client.query(RESOURCE, {"productId": product_id})
        return self._to_domain(rows[0]) if rows else None

    def get_by_barcode(self, barcode: str) -> Product | None:
        rows = self._client.query(RESOURCE, {"barcode": barcode})
        return self._to_domain(rows[0]) if rows else None

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._client.query(RESOURCE)]

    # --- Serialization ----------------------------------------------------------

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        with decoding(RESOURCE):
            return Product(
                product_id=raw["productId"],
                barcode=raw["barcode"],
                name=raw["name"],
                price=money(raw["price"]),
                description=raw.get("description"),
                image_url=raw.get("imageUrl"),
                category=raw.get("category"),
                stock_quantity=int(raw.get("stockQuantity") or 0),
            )
