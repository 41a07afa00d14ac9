"""Application service: Edit Product use case."""

from __future__ import annotations

from typing import Any

from invtrack.application.dto import ProductDTO
from invtrack.application.lookup import load_product
from invtrack.application.product_provider import ProductProvider
from invtrack.domain.exceptions import EntityNotFoundError
from invtrack.domain.model.resource import product_uri


class EditProductHandler:

    def __init__(self, provider: ProductProvider) -> None:
        self._provider = provider

    def handle(self, product_id: int, **changes: Any) -> ProductDTO:
        """Apply the supplied field changes; untouched fields keep their values.

        With no changes the product is returned as stored.
        """
        if changes:
            rows = self._provider.update(product_uri(product_id), changes)
            if rows == 0:
                raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        return ProductDTO.from_product(load_product(self._provider, product_id))
