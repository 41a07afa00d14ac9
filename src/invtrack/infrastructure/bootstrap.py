"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache

from invtrack.application.notifier import ChangeNotifier
from invtrack.application.product_provider import ProductProvider
from invtrack.infrastructure.config import get_settings
from invtrack.infrastructure.persistence.sqlite_product_store import SqliteProductStore


@lru_cache(maxsize=1)
def product_store() -> SqliteProductStore:
    return SqliteProductStore(get_settings().db_path)


@lru_cache(maxsize=1)
def product_provider() -> ProductProvider:
    return ProductProvider(store=product_store(), notifier=ChangeNotifier())
