"""Application service: List Products use case (query)."""

from __future__ import annotations

from smartcart.domain.model.product import Product
from smartcart.domain.repository.product_repository import ProductRepository


class ListProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self) -> list[Product]:
        return sorted(self._product_repo.list_all(), key=lambda p: p.name.lower())
