"""Product reference data.

Products are maintained in the store's catalog; the shopping flow only
reads them.  Session items and order items copy what they need (price,
name, category) at the moment they are created.
"""

from __future__ import annotations

from dataclasses import dataclass

from smartcart.domain.model.value_objects import Money


@dataclass(frozen=True)
class Product:
    """A catalog entry, looked up by its scannable barcode."""

    product_id: str
    barcode: str
    name: str
    price: Money
    description: str | None = None
    image_url: str | None = None
    category: str | None = None
    stock_quantity: int = 0
