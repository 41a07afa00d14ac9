"""ResourceId value object.

A resource identifier has the shape ``content://<authority>/<seg>/<seg>``.
It is immutable and compared by value; the router classifies it and the
notifier uses its parent/child relationship to fan out change events.
"""

from __future__ import annotations

from dataclasses import dataclass

from invtrack.domain.model import contract


@dataclass(frozen=True)
class ResourceId:
    """An addressable resource: a collection path or an item below it."""

    scheme: str
    authority: str
    segments: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.segments, tuple):
            object.__setattr__(self, "segments", tuple(self.segments))

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def parse(raw: str | ResourceId) -> ResourceId:
        """Parse ``scheme://authority/a/b``. Never raises; routing decides validity."""
        if isinstance(raw, ResourceId):
            return raw
        scheme, sep, rest = str(raw).partition("://")
        if not sep:
            # Bare path, e.g. "products/3"
            return ResourceId("", "", tuple(s for s in scheme.split("/") if s))
        authority, _, path = rest.partition("/")
        segments = tuple(s for s in path.split("/") if s)
        return ResourceId(scheme=scheme, authority=authority, segments=segments)

    @staticmethod
    def of(*segments: str) -> ResourceId:
        """Build an identifier under this application's authority."""
        return ResourceId(contract.SCHEME, contract.CONTENT_AUTHORITY, tuple(segments))

    # --- Relationships --------------------------------------------------------

    def with_appended_id(self, item_id: int) -> ResourceId:
        return ResourceId(self.scheme, self.authority, self.segments + (str(item_id),))

    @property
    def parent(self) -> ResourceId | None:
        if not self.segments:
            return None
        return ResourceId(self.scheme, self.authority, self.segments[:-1])

    def is_ancestor_of(self, other: ResourceId) -> bool:
        """True when *other* lies strictly below this identifier."""
        if (self.scheme, self.authority) != (other.scheme, other.authority):
            return False
        depth = len(self.segments)
        return len(other.segments) > depth and other.segments[:depth] == self.segments

    @property
    def last_segment(self) -> str | None:
        return self.segments[-1] if self.segments else None

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        path = "/".join(self.segments)
        if not self.scheme and not self.authority:
            return path
        return f"{self.scheme}://{self.authority}/{path}" if path else f"{self.scheme}://{self.authority}"


PRODUCTS_URI = ResourceId.of(contract.PATH_PRODUCTS)


def product_uri(product_id: int) -> ResourceId:
    """Item identifier for a single product."""
    return PRODUCTS_URI.with_appended_id(product_id)
