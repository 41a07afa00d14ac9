"""Product record.

The single entity of the inventory. Instances are reconstituted from
storage rows without re-validation; the validation pipeline guards
every payload on its way in.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from invtrack.domain.model import contract


@dataclass
class Product:
    """A product in stock.

    ``price`` is an integer amount in the smallest currency unit
    (cents), ``image`` is the raw photo blob.
    """

    id: int | None
    name: str
    supplier_phone: str
    image: bytes
    price: int = 0
    quantity: int = 0

    @staticmethod
    def from_row(row: Mapping[str, Any]) -> Product:
        return Product(
            id=row[contract.ID],
            name=row[contract.NAME],
            price=row[contract.PRICE],
            quantity=row[contract.QUANTITY],
            supplier_phone=row[contract.SUPPLIER_PHONE],
            image=bytes(row[contract.IMAGE]),
        )

    def to_values(self) -> dict[str, Any]:
        """Mutation payload for this product (never includes ``id``)."""
        return {
            contract.NAME: self.name,
            contract.PRICE: self.price,
            contract.QUANTITY: self.quantity,
            contract.SUPPLIER_PHONE: self.supplier_phone,
            contract.IMAGE: self.image,
        }

    @property
    def dial_uri(self) -> str:
        return f"tel:{self.supplier_phone}"


def format_price(cents: int) -> str:
    return f"${cents // 100}.{cents % 100:02d}"
