"""Application service: Add Product use case."""

from __future__ import annotations

from invtrack.application.dto import ProductDTO
from invtrack.application.lookup import load_product
from invtrack.application.product_provider import ProductProvider
from invtrack.domain.model import contract
from invtrack.domain.model.resource import PRODUCTS_URI


class AddProductHandler:

    def __init__(self, provider: ProductProvider) -> None:
        self._provider = provider

    def handle(
        self,
        name: str,
        supplier_phone: str,
        image: bytes,
        price: int | str = 0,
        quantity: int | str = 0,
    ) -> ProductDTO:
        """Add a new product to the inventory."""
        values = {
            contract.NAME: name.strip() if isinstance(name, str) else name,
            contract.PRICE: price,
            contract.QUANTITY: quantity,
            contract.SUPPLIER_PHONE: (
                supplier_phone.strip() if isinstance(supplier_phone, str) else supplier_phone
            ),
            contract.IMAGE: image,
        }
        # Leave out what was not supplied so the provider reports it as missing.
        values = {k: v for k, v in values.items() if v is not None}
        new_uri = self._provider.insert(PRODUCTS_URI, values)
        product = load_product(self._provider, int(new_uri.last_segment))
        return ProductDTO.from_product(product)
