"""ProductProvider: the single entry point to product data.

Every request flows router -> validation (mutations only) -> store ->
notifier. Router and validation failures are raised before the store
is touched, so a rejected request never causes a partial write.
"""

from __future__ import annotations

import logging
from typing import Any, Iterator, Mapping, Sequence

from invtrack.application.notifier import ChangeNotifier, Observer, Subscription
from invtrack.domain.exceptions import StorageWriteFailedError, UnsupportedResourceError
from invtrack.domain.model import contract
from invtrack.domain.model.resource import ResourceId
from invtrack.domain.repository.product_store import ProductStore, Row
from invtrack.domain.routing import ResourceKind, ResourceRouter, RouteMatch, product_router
from invtrack.domain.validation import validate_for_insert, validate_for_update

logger = logging.getLogger(__name__)

_BY_ID = f"{contract.ID} = ?"


class ProductCursor:
    """One-shot iterator over query results.

    Carries the queried resource so callers can ``watch()`` it and
    re-query when the underlying rows change.
    """

    def __init__(
        self,
        rows: Iterator[Row],
        notification_resource: ResourceId,
        notifier: ChangeNotifier,
    ) -> None:
        self._rows = rows
        self.notification_resource = notification_resource
        self._notifier = notifier

    def __iter__(self) -> ProductCursor:
        return self

    def __next__(self) -> Row:
        return next(self._rows)

    def fetchall(self) -> list[Row]:
        return list(self._rows)

    def close(self) -> None:
        """Release the underlying rows without reading them."""
        close = getattr(self._rows, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> ProductCursor:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def watch(self, callback: Observer, notify_for_descendants: bool = True) -> Subscription:
        return self._notifier.subscribe(
            self.notification_resource, callback, notify_for_descendants
        )


class ProductProvider:

    def __init__(
        self,
        store: ProductStore,
        notifier: ChangeNotifier | None = None,
        router: ResourceRouter | None = None,
    ) -> None:
        self._store = store
        self.notifier = notifier or ChangeNotifier()
        self._router = router or product_router()

    # --- Queries --------------------------------------------------------------

    def query(
        self,
        resource: str | ResourceId,
        projection: Sequence[str] | None = None,
        selection: str | None = None,
        selection_args: Sequence[Any] = (),
        sort_order: str | None = None,
    ) -> ProductCursor:
        uri = ResourceId.parse(resource)
        match = self._router.classify(uri)
        if match.kind is ResourceKind.ITEM:
            selection, selection_args = _BY_ID, (match.item_id,)

        rows = self._open_store().query(selection, selection_args, projection, sort_order)
        return ProductCursor(rows, uri, self.notifier)

    def type_of(self, resource: str | ResourceId) -> str:
        match = self._router.classify(resource)
        if match.kind is ResourceKind.ITEM:
            return contract.PRODUCT_ITEM_TYPE
        return contract.PRODUCT_LIST_TYPE

    # --- Mutations ------------------------------------------------------------

    def insert(self, resource: str | ResourceId, values: Mapping[str, Any]) -> ResourceId:
        """Insert a product under the collection; return the new item identifier."""
        uri = ResourceId.parse(resource)
        match = self._router.classify(uri)
        if match.kind is not ResourceKind.COLLECTION:
            raise UnsupportedResourceError(uri, operation="Insertion")

        cleaned = validate_for_insert(values)
        new_id = self._open_store().insert(cleaned)
        if new_id is None or new_id < 0:
            raise StorageWriteFailedError(f"Failed to insert row for {uri}")

        logger.info("Inserted product %s (%s)", new_id, cleaned[contract.NAME])
        self.notifier.publish(uri)
        return uri.with_appended_id(new_id)

    def update(
        self,
        resource: str | ResourceId,
        values: Mapping[str, Any],
        selection: str | None = None,
        selection_args: Sequence[Any] = (),
    ) -> int:
        uri = ResourceId.parse(resource)
        match = self._router.classify(uri)
        selection, selection_args = _target(match, selection, selection_args)

        # An empty payload is a no-op for every target kind.
        if not values:
            return 0

        cleaned = validate_for_update(values)
        rows = self._open_store().update(selection, selection_args, cleaned)
        if rows:
            logger.info("Updated %d product row(s) via %s: %s", rows, uri, sorted(cleaned))
            self.notifier.publish(uri)
        return rows

    def delete(
        self,
        resource: str | ResourceId,
        selection: str | None = None,
        selection_args: Sequence[Any] = (),
    ) -> int:
        uri = ResourceId.parse(resource)
        match = self._router.classify(uri)
        selection, selection_args = _target(match, selection, selection_args)

        rows = self._open_store().delete(selection, selection_args)
        if rows:
            logger.info("Deleted %d product row(s) via %s", rows, uri)
            self.notifier.publish(uri)
        return rows

    # --- Internal helpers -----------------------------------------------------

    def _open_store(self) -> ProductStore:
        # open() is idempotent, so a store closed elsewhere is reopened here.
        self._store.open()
        return self._store


def _target(
    match: RouteMatch, selection: str | None, selection_args: Sequence[Any]
) -> tuple[str | None, Sequence[Any]]:
    """Item targets ignore the caller's predicate and filter by id."""
    if match.kind is ResourceKind.ITEM:
        return _BY_ID, (match.item_id,)
    return selection, selection_args
