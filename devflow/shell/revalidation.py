"""
Cache revalidation channel.

Mutating operations announce, after their store transaction has committed,
the logical page path whose cached rendering is now stale. The bus records
every request and fans it out to subscribers (e.g. a CDN purge hook).

Delivery is fire-and-forget: a failing subscriber is logged and never fails
the operation that triggered it.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime

logger = logging.getLogger(__name__)

Subscriber = Callable[["RevalidationRequest"], None]


@dataclass(frozen=True)
class RevalidationRequest:
    """A request to discard cached output for one path."""

    path: str
    requested_at: datetime


class RevalidationBus:
    def __init__(self, keep_last: int = 1000) -> None:
        self._subscribers: list[Subscriber] = []
        self._requested: list[RevalidationRequest] = []
        self._keep_last = keep_last
        self._lock = threading.Lock()

    def subscribe(self, subscriber: Subscriber) -> None:
        self._subscribers.append(subscriber)

    def revalidate(self, path: str) -> None:
        request = RevalidationRequest(path=path, requested_at=datetime.now(UTC))
        with self._lock:
            self._requested.append(request)
            del self._requested[: -self._keep_last]
        logger.debug("Revalidation requested for %s", path)

        for subscriber in list(self._subscribers):
            try:
                subscriber(request)
            except Exception:
                logger.exception("Revalidation subscriber failed for %s", path)

    @property
    def requested(self) -> list[str]:
        """Paths requested so far, oldest first."""
        with self._lock:
            return [r.path for r in self._requested]

    def clear(self) -> None:
        with self._lock:
            self._requested.clear()
