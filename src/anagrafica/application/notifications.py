"""Snapshot fan-out to subscribers.

SYNC delivery calls the callback inline, in commit order, before the mutating
call returns. BUFFERED delivery appends to a per-subscriber queue and never
blocks the publisher; the queue is unbounded unless max_pending is set, in which
case the oldest snapshot is dropped (and counted) when the queue is full.
A buffered subscription is consumed with get()/drain(), or by a callback that
runs on the subscription's own worker thread.
"""

import itertools
import logging
import threading
from collections import deque
from collections.abc import Callable
from enum import Enum

from anagrafica.domain import Person

logger = logging.getLogger(__name__)

Snapshot = tuple[Person, ...]
SnapshotCallback = Callable[[Snapshot], None]


class DeliveryMode(str, Enum):
    SYNC = "sync"
    BUFFERED = "buffered"


class Subscription:
    """Handle returned by subscribe(). Use it to read buffered snapshots or to unsubscribe."""

    _ids = itertools.count(1)

    def __init__(
        self,
        callback: SnapshotCallback | None,
        mode: DeliveryMode,
        max_pending: int | None = None,
    ) -> None:
        if mode is DeliveryMode.SYNC and callback is None:
            raise ValueError("A synchronous subscription needs a callback.")
        if max_pending is not None and max_pending < 1:
            raise ValueError("max_pending must be a positive integer.")
        self.id = next(self._ids)
        self.mode = mode
        self.max_pending = max_pending
        self.dropped = 0
        self._callback = callback
        self._queue: deque[Snapshot] = deque()
        self._cond = threading.Condition()
        self._closed = False
        self._worker: threading.Thread | None = None
        if mode is DeliveryMode.BUFFERED and callback is not None:
            self._worker = threading.Thread(
                target=self._run_worker,
                name=f"snapshot-subscriber-{self.id}",
                daemon=True,
            )
            self._worker.start()

    @property
    def closed(self) -> bool:
        return self._closed

    def deliver(self, snapshot: Snapshot) -> None:
        if self._closed:
            return
        if self.mode is DeliveryMode.SYNC:
            self._callback(snapshot)
            return
        with self._cond:
            if self.max_pending is not None and len(self._queue) >= self.max_pending:
                self._queue.popleft()
                self.dropped += 1
                logger.warning(
                    "Subscriber %s is behind; dropped oldest snapshot (%s dropped so far)",
                    self.id,
                    self.dropped,
                )
            self._queue.append(snapshot)
            self._cond.notify_all()

    def get(self, timeout: float | None = None) -> Snapshot | None:
        """Pop the oldest pending snapshot, waiting up to timeout. None on timeout or close."""
        with self._cond:
            if not self._cond.wait_for(lambda: self._queue or self._closed, timeout):
                return None
            if self._queue:
                return self._queue.popleft()
            return None

    def drain(self) -> list[Snapshot]:
        """Pop every pending snapshot, oldest first, without waiting."""
        with self._cond:
            items = list(self._queue)
            self._queue.clear()
            return items

    def pending(self) -> int:
        with self._cond:
            return len(self._queue)

    def close(self) -> None:
        with self._cond:
            self._closed = True
            self._cond.notify_all()
        worker = self._worker
        if worker is not None and worker is not threading.current_thread():
            worker.join(timeout=1.0)

    def _run_worker(self) -> None:
        while True:
            with self._cond:
                self._cond.wait_for(lambda: self._queue or self._closed)
                if not self._queue:
                    return
                snapshot = self._queue.popleft()
            try:
                self._callback(snapshot)
            except Exception:
                logger.exception("Snapshot subscriber %s failed", self.id)


class SnapshotPublisher:
    """Ordered fan-out of snapshots to the current subscribers. Callers serialize publish()."""

    def __init__(
        self,
        *,
        default_mode: DeliveryMode = DeliveryMode.SYNC,
        default_max_pending: int | None = None,
    ) -> None:
        self._default_mode = default_mode
        self._default_max_pending = default_max_pending
        self._subscriptions: list[Subscription] = []
        self._lock = threading.Lock()

    def subscribe(
        self,
        callback: SnapshotCallback | None = None,
        *,
        mode: DeliveryMode | str | None = None,
        max_pending: int | None = None,
    ) -> Subscription:
        mode = DeliveryMode(mode) if mode is not None else self._default_mode
        if max_pending is None and mode is DeliveryMode.BUFFERED:
            max_pending = self._default_max_pending
        subscription = Subscription(callback, mode, max_pending)
        with self._lock:
            self._subscriptions.append(subscription)
        logger.debug("Subscriber %s registered (%s)", subscription.id, mode.value)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> bool:
        with self._lock:
            try:
                self._subscriptions.remove(subscription)
            except ValueError:
                return False
        subscription.close()
        logger.debug("Subscriber %s removed", subscription.id)
        return True

    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscriptions)

    def publish(self, snapshot: Snapshot) -> None:
        with self._lock:
            targets = list(self._subscriptions)
        logger.debug("Publishing snapshot of %s persons to %s subscribers", len(snapshot), len(targets))
        for subscription in targets:
            try:
                subscription.deliver(snapshot)
            except Exception:
                logger.exception("Snapshot subscriber %s failed", subscription.id)
