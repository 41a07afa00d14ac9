"""Application services: Delete Product and Delete All Products use cases."""

from __future__ import annotations

from invtrack.application.product_provider import ProductProvider
from invtrack.domain.exceptions import EntityNotFoundError
from invtrack.domain.model.resource import PRODUCTS_URI, product_uri


class DeleteProductHandler:

    def __init__(self, provider: ProductProvider) -> None:
        self._provider = provider

    def handle(self, product_id: int) -> None:
        rows = self._provider.delete(product_uri(product_id))
        if rows == 0:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")


class DeleteAllProductsHandler:

    def __init__(self, provider: ProductProvider) -> None:
        self._provider = provider

    def handle(self) -> int:
        """Remove every product; return how many were removed."""
        return self._provider.delete(PRODUCTS_URI)
