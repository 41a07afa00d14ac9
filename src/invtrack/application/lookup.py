"""Shared read helper for the single-product use cases."""

from __future__ import annotations

from invtrack.application.product_provider import ProductProvider
from invtrack.domain.exceptions import EntityNotFoundError
from invtrack.domain.model.product import Product
from invtrack.domain.model.resource import product_uri


def load_product(provider: ProductProvider, product_id: int) -> Product:
    rows = provider.query(product_uri(product_id)).fetchall()
    if not rows:
        raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
    return Product.from_row(rows[0])
