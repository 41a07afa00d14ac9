"""Application service: List Products use case (query)."""

from __future__ import annotations

from dataclasses import dataclass

from invtrack.application.product_provider import ProductProvider
from invtrack.domain.model import contract
from invtrack.domain.model.product import format_price
from invtrack.domain.model.resource import PRODUCTS_URI

# The list view never needs the phone number or the photo blob.
LIST_PROJECTION = (contract.ID, contract.NAME, contract.PRICE, contract.QUANTITY)


@dataclass(frozen=True)
class ProductLineDTO:
    id: int
    name: str
    price: str
    quantity: int


class ListProductsHandler:

    def __init__(self, provider: ProductProvider) -> None:
        self._provider = provider

    def handle(self, in_stock_only: bool = False) -> list[ProductLineDTO]:
        selection, args = (f"{contract.QUANTITY} > ?", (0,)) if in_stock_only else (None, ())
        cursor = self._provider.query(
            PRODUCTS_URI,
            projection=LIST_PROJECTION,
            selection=selection,
            selection_args=args,
            sort_order=f"{contract.ID} ASC",
        )
        return [
            ProductLineDTO(
                id=row[contract.ID],
                name=row[contract.NAME],
                price=format_price(row[contract.PRICE]),
                quantity=row[contract.QUANTITY],
            )
            for row in cursor
        ]
