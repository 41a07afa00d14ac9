"""Resource router: classifies a resource identifier as collection or item.

Rules are evaluated in registration order; the first pattern that matches
wins. A pattern is a tuple of path segments where ``#`` matches a decimal
integer and ``*`` matches any single segment.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from invtrack.domain.exceptions import UnsupportedResourceError
from invtrack.domain.model import contract
from invtrack.domain.model.resource import ResourceId


class ResourceKind(Enum):
    COLLECTION = "COLLECTION"
    ITEM = "ITEM"


@dataclass(frozen=True)
class RouteMatch:
    kind: ResourceKind
    item_id: int | None = None


@dataclass(frozen=True)
class _Rule:
    authority: str
    pattern: tuple[str, ...]
    kind: ResourceKind


class ResourceRouter:

    def __init__(self, scheme: str = contract.SCHEME) -> None:
        self._scheme = scheme
        self._rules: list[_Rule] = []

    def add(self, authority: str, path: str, kind: ResourceKind) -> ResourceRouter:
        pattern = tuple(s for s in path.split("/") if s)
        if kind is ResourceKind.ITEM and (not pattern or pattern[-1] != "#"):
            raise ValueError(f"Item pattern must end with '#': {path!r}")
        self._rules.append(_Rule(authority, pattern, kind))
        return self

    def classify(self, resource: str | ResourceId) -> RouteMatch:
        """Return the first matching rule's kind (and id for items).

        Raises UnsupportedResourceError when no rule matches.
        """
        uri = ResourceId.parse(resource)
        if uri.scheme == self._scheme:
            for rule in self._rules:
                if rule.authority == uri.authority and _matches(rule.pattern, uri.segments):
                    if rule.kind is ResourceKind.ITEM:
                        return RouteMatch(rule.kind, int(uri.segments[-1]))
                    return RouteMatch(rule.kind)
        raise UnsupportedResourceError(uri)


def _matches(pattern: tuple[str, ...], segments: tuple[str, ...]) -> bool:
    if len(pattern) != len(segments):
        return False
    for expected, actual in zip(pattern, segments):
        if expected == "#":
            if not (actual.isascii() and actual.isdigit()):
                return False
            if int(actual) > contract.MAX_INTEGER:
                return False
        elif expected != "*" and expected != actual:
            return False
    return True


def product_router() -> ResourceRouter:
    """Router for ``products`` and ``products/<id>``."""
    return (
        ResourceRouter()
        .add(contract.CONTENT_AUTHORITY, contract.PATH_PRODUCTS, ResourceKind.COLLECTION)
        .add(contract.CONTENT_AUTHORITY, f"{contract.PATH_PRODUCTS}/#", ResourceKind.ITEM)
    )
