"""Schema definitions for the products table and its resource identifiers.

Everything that names a table, a column or a resource path lives here so
the router, the validator and the store agree on the same constants.
"""

from __future__ import annotations

SCHEME = "content"
CONTENT_AUTHORITY = "invtrack"
PATH_PRODUCTS = "products"

# Bump when the table layout changes. Stores holding an older version are
# dropped and recreated on open.
SCHEMA_VERSION = 1

TABLE_NAME = "products"

ID = "id"
NAME = "name"
PRICE = "price"
QUANTITY = "quantity"
SUPPLIER_PHONE = "supplier_phone"
IMAGE = "image"

# Largest value an SQLite INTEGER column can hold.
MAX_INTEGER = 2**63 - 1

ALL_COLUMNS =(ID, NAME, PRICE, QUANTITY, SUPPLIER_PHONE, IMAGE)
MUTABLE_COLUMNS = (NAME, PRICE, QUANTITY, SUPPLIER_PHONE, IMAGE)
REQUIRED_ON_CREATE = (NAME, SUPPLIER_PHONE, IMAGE)

# Content type tags returned by ``ProductProvider.type_of``.
PRODUCT_LIST_TYPE = f"vnd.{CONTENT_AUTHORITY}.dir/{PATH_PRODUCTS}"
PRODUCT_ITEM_TYPE = f"vnd.{CONTENT_AUTHORITY}.item/{PATH_PRODUCTS}"

CREATE_TABLE_SQL = f"""
CREATE TABLE IF NOT EXISTS {TABLE_NAME} (
    {ID}             INTEGER PRIMARY KEY AUTOINCREMENT,
    {NAME}           TEXT NOT NULL,
    {PRICE}          INTEGER NOT NULL DEFAULT 0,
    {QUANTITY}       INTEGER NOT NULL DEFAULT 0,
    {SUPPLIER_PHONE} TEXT NOT NULL,
    {IMAGE}          BLOB NOT NULL
)
"""

DROP_TABLE_SQL = f"DROP TABLE IF EXISTS {TABLE_NAME}"
