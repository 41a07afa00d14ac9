"""Change notifier: a publish/subscribe channel keyed by resource identifier.

A change published on resource R reaches:

- observers registered on R itself
- observers registered on an ancestor of R that asked for descendant changes
- observers registered on a descendant of R (a change to the whole
  collection concerns each item in it)
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor
from dataclasses import dataclass, field
from typing import Callable

from invtrack.domain.model.resource import ResourceId

logger = logging.getLogger(__name__)

Observer = Callable[[ResourceId], None]


@dataclass(eq=False)
class Subscription:
    resource: ResourceId
    callback: Observer
    notify_for_descendants: bool = True
    _notifier: ChangeNotifier | None = field(default=None, repr=False)

    def cancel(self) -> None:
        if self._notifier is not None:
            self._notifier.unsubscribe(self)
            self._notifier = None

    def wants(self, changed: ResourceId) -> bool:
        if changed == self.resource or changed.is_ancestor_of(self.resource):
            return True
        return self.notify_for_descendants and self.resource.is_ancestor_of(changed)


class ChangeNotifier:
    """Delivers change events to registered observers.

    Delivery is fire-and-forget: with an *executor* each callback is
    submitted to it, otherwise callbacks run inline. Either way an
    observer that raises is logged and never affects the publisher.
    """

    def __init__(self, executor: Executor | None = None) -> None:
        self._executor = executor
        self._subscriptions: list[Subscription] = []
        self._lock = threading.Lock()

    def subscribe(
        self,
        resource: str | ResourceId,
        callback: Observer,
        notify_for_descendants: bool = True,
    ) -> Subscription:
        subscription = Subscription(
            resource=ResourceId.parse(resource),
            callback=callback,
            notify_for_descendants=notify_for_descendants,
            _notifier=self,
        )
        with self._lock:
            self._subscriptions.append(subscription)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        with self._lock:
            if subscription in self._subscriptions:
                self._subscriptions.remove(subscription)

    def publish(self, resource: str | ResourceId) -> int:
        """Notify every interested observer; return how many were notified."""
        changed = ResourceId.parse(resource)
        with self._lock:
            targets = [s for s in self._subscriptions if s.wants(changed)]

        logger.debug("Change on %s -> %d observer(s)", changed, len(targets))
        for subscription in targets:
            if self._executor is not None:
                self._executor.submit(_deliver, subscription, changed)
            else:
                _deliver(subscription, changed)
        return len(targets)

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscriptions)


def _deliver(subscription: Subscription, changed: ResourceId) -> None:
    try:
        subscription.callback(changed)
    except Exception:
        logger.exception("Observer on %s failed handling change on %s",
                         subscription.resource, changed)
