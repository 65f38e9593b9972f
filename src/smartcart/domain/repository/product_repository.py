"""Abstract repository for the read-only product catalog."""

from __future__ import annotations

from abc import ABC, abstractmethod

from smartcart.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_barcode(self, barcode: str) -> Product | None:
        """Return the product with this scannable code, or None."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""
