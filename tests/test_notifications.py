"""Tests for SnapshotPublisher and Subscription delivery modes."""

import threading

import pytest

from anagrafica.application import DeliveryMode, SnapshotPublisher


def test_sync_subscription_requires_callback() -> None:
    with pytest.raises(ValueError):
        SnapshotPublisher().subscribe()


def test_sync_fan_out_in_publish_order() -> None:
    publisher = SnapshotPublisher()
    first, second = [], []
    publisher.subscribe(first.append)
    publisher.subscribe(second.append)
    publisher.publish(("a",))
    publisher.publish(("a", "b"))
    assert first == [("a",), ("a", "b")]
    assert second == first


def test_buffered_unbounded_keeps_everything() -> None:
    publisher = SnapshotPublisher()
    sub = publisher.subscribe(mode=DeliveryMode.BUFFERED)
    for i in range(5):
        publisher.publish((i,))
    assert sub.pending() == 5
    assert sub.dropped == 0
    assert sub.get(timeout=0) == (0,)
    assert sub.drain() == [(1,), (2,), (3,), (4,)]


def test_buffered_bounded_drops_oldest() -> None:
    publisher = SnapshotPublisher()
    sub = publisher.subscribe(mode="buffered", max_pending=2)
    for i in range(4):
        publisher.publish((i,))
    assert sub.dropped == 2
    assert sub.drain() == [(2,), (3,)]


def test_default_max_pending_applies_to_buffered_subscribers() -> None:
    publisher = SnapshotPublisher(default_mode=DeliveryMode.BUFFERED, default_max_pending=1)
    sub = publisher.subscribe()
    publisher.publish((1,))
    publisher.publish((2,))
    assert sub.drain() == [(2,)]


def test_get_times_out_when_nothing_pending() -> None:
    sub = SnapshotPublisher().subscribe(mode="buffered")
    assert sub.get(timeout=0.01) is None


def test_invalid_max_pending_rejected() -> None:
    with pytest.raises(ValueError):
        SnapshotPublisher().subscribe(mode="buffered", max_pending=0)


def test_buffered_callback_runs_on_worker_in_order() -> None:
    publisher = SnapshotPublisher()
    received = []
    done = threading.Event()

    def on_snapshot(snapshot):
        received.append(snapshot)
        if len(received) == 3:
            done.set()

    sub = publisher.subscribe(on_snapshot, mode="buffered")
    for i in range(3):
        publisher.publish((i,))
    assert done.wait(timeout=2.0)
    assert received == [(0,), (1,), (2,)]
    assert publisher.unsubscribe(sub) is True
    assert sub.closed


def test_slow_buffered_subscriber_does_not_block_publisher() -> None:
    publisher = SnapshotPublisher()
    release = threading.Event()
    sub = publisher.subscribe(lambda snapshot: release.wait(timeout=2.0), mode="buffered")
    for i in range(10):
        publisher.publish((i,))
    release.set()
    publisher.unsubscribe(sub)


def test_closed_subscription_ignores_new_snapshots() -> None:
    publisher = SnapshotPublisher()
    sub = publisher.subscribe(mode="buffered")
    publisher.unsubscribe(sub)
    sub.deliver(("late",))
    assert sub.pending() == 0
    assert publisher.subscriber_count() == 0
