"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing storage rows or resource identifiers to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from invtrack.domain.model.product import Product, format_price


@dataclass(frozen=True)
class ProductDTO:
    """Output: a complete product as displayed on the detail view."""

    id: int
    name: str
    price: str  # formatted, e.g. "$5.00"
    quantity: int
    supplier_phone: str
    dial_uri: str
    image_size: int

    @staticmethod
    def from_product(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,
            name=product.name,
            price=format_price(product.price),
            quantity=product.quantity,
            supplier_phone=product.supplier_phone,
            dial_uri=product.dial_uri,
            image_size=len(product.image),
        )
