"""Application services: sell and restock, one unit at a time by default."""

from __future__ import annotations

from invtrack.application.dto import ProductDTO
from invtrack.application.lookup import load_product
from invtrack.application.product_provider import ProductProvider
from invtrack.domain.exceptions import EntityNotFoundError, ValidationError
from invtrack.domain.model import contract
from invtrack.domain.model.product import Product
from invtrack.domain.model.resource import product_uri


class SellProductHandler:

    def __init__(self, provider: ProductProvider) -> None:
        self._provider = provider

    def handle(self, product_id: int) -> ProductDTO:
        """Record the sale of one unit.

        Raises ValidationError when the product is out of stock.
        """
        product = load_product(self._provider, product_id)
        if product.quantity < 1:
            raise ValidationError(f"{product.name} is out of stock")

        product.quantity -= 1
        _save_quantity(self._provider, product)
        return ProductDTO.from_product(product)


class RestockProductHandler:

    def __init__(self, provider: ProductProvider) -> None:
        self._provider = provider

    def handle(self, product_id: int, amount: int = 1) -> ProductDTO:
        """Add *amount* units to stock."""
        if amount <= 0:
            raise ValidationError("Restock amount must be positive")

        product = load_product(self._provider, product_id)
        product.quantity += amount
        _save_quantity(self._provider, product)
        return ProductDTO.from_product(product)


def _save_quantity(provider: ProductProvider, product: Product) -> None:
    rows = provider.update(product_uri(product.id), {contract.QUANTITY: product.quantity})
    if rows == 0:
        # Deleted between the read and the write
        raise EntityNotFoundError(f"Product with ID '{product.id}' not found")
