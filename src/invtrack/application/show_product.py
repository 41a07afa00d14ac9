"""Application service: Show Product use case (query)."""

from __future__ import annotations

from invtrack.application.dto import ProductDTO
from invtrack.application.lookup import load_product
from invtrack.application.product_provider import ProductProvider


class ShowProductHandler:

    def __init__(self, provider: ProductProvider) -> None:
        self._provider = provider

    def handle(self, product_id: int) -> ProductDTO:
        return ProductDTO.from_product(load_product(self._provider, product_id))
