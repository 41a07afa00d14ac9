"""Abstract storage engine for product rows.

Defined in the domain layer so the provider never depends on
infrastructure. The store performs no business validation; callers hand
it payloads that already went through the validation pipeline.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterator, Mapping, Sequence

Row = dict[str, Any]


class ProductStore(ABC):

    @abstractmethod
    def open(self) -> None:
        """Create the backing file and table if absent. Idempotent."""

    @abstractmethod
    def recreate(self) -> None:
        """Drop and recreate the table. All rows are lost."""

    @abstractmethod
    def close(self) -> None:
        """Release the underlying connection."""

    @abstractmethod
    def query(
        self,
        selection: str | None = None,
        selection_args: Sequence[Any] = (),
        projection: Sequence[str] | None = None,
        sort_order: str | None = None,
    ) -> Iterator[Row]:
        """Return a one-shot iterator over matching rows."""

    @abstractmethod
    def insert(self, values: Mapping[str, Any]) -> int:
        """Append a row and return its assigned id."""

    @abstractmethod
    def update(
        self,
        selection: str | None,
        selection_args: Sequence[Any],
        values: Mapping[str, Any],
    ) -> int:
        """Apply *values* to every matching row; return the number changed."""

    @abstractmethod
    def delete(self, selection: str | None, selection_args: Sequence[Any]) -> int:
        """Remove matching rows; return the number removed."""
