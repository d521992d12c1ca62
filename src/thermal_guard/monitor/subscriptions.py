"""Published-snapshot slot and subscriber registry.

The cell holds one reference to the latest snapshot. Snapshots are immutable,
so a read is a plain attribute load: readers never take a lock and can never
observe a half-built snapshot. Only the scheduler writes.
"""

import threading
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field

from thermal_guard.sensors.models import SensorSnapshot
from thermal_guard.telemetry import (
    SNAPSHOT_REJECTED,
    SUBSCRIBER_ADDED,
    SUBSCRIBER_CALLBACK_FAILED,
    SUBSCRIBER_REMOVED,
    get_logger,
)

log = get_logger(__name__)

SnapshotCallback = Callable[[SensorSnapshot], None]


@dataclass(frozen=True)
class SubscriptionHandle:
    """Opaque token returned by subscribe(); pass it to unsubscribe()."""

    subscription_id: str = field(default_factory=lambda: str(uuid.uuid4()))


class SnapshotCell:
    """Single-writer, many-reader slot for the current snapshot."""

    def __init__(self, initial: SensorSnapshot) -> None:
        """Initialize the cell with the seed snapshot."""
        self._snapshot = initial
        # Serializes writers only; readers never touch it.
        self._write_lock = threading.Lock()

    def current(self) -> SensorSnapshot:
        """Latest published snapshot."""
        return self._snapshot

    def publish(self, snapshot: SensorSnapshot) -> bool:
        """Swap in a newer snapshot.

        Args:
            snapshot: Candidate snapshot.

        Returns:
            True if published; False if it is not newer than the current one
            (publishing it would let a reader see time go backwards).
        """
        with self._write_lock:
            current = self._snapshot
            if snapshot.sequence <= current.sequence:
                log.warning(
                    SNAPSHOT_REJECTED,
                    sequence=snapshot.sequence,
                    current_sequence=current.sequence,
                )
                return False
            self._snapshot = snapshot
            return True


class SubscriberRegistry:
    """Ordered set of snapshot callbacks."""

    def __init__(self) -> None:  # noqa: D107
        self._callbacks: dict[SubscriptionHandle, SnapshotCallback] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._callbacks)

    def subscribe(self, callback: SnapshotCallback) -> SubscriptionHandle:
        """Register a callback, invoked once per publish.

        Args:
            callback: Called with each newly published snapshot.

        Returns:
            Handle for unsubscribe().
        """
        handle = SubscriptionHandle()
        with self._lock:
            self._callbacks[handle] = callback
        log.debug(SUBSCRIBER_ADDED, subscription_id=handle.subscription_id)
        return handle

    def unsubscribe(self, handle: SubscriptionHandle) -> bool:
        """Remove a callback. Unknown or already-removed handles are ignored.

        Returns:
            True if a callback was removed.
        """
        with self._lock:
            removed = self._callbacks.pop(handle, None) is not None
        if removed:
            log.debug(SUBSCRIBER_REMOVED, subscription_id=handle.subscription_id)
        return removed

    def notify(self, snapshot: SensorSnapshot) -> None:
        """Deliver a snapshot to every callback in registration order.

        A failing callback is logged and skipped; it never reaches the
        publisher or the other subscribers.
        """
        with self._lock:
            subscribers = list(self._callbacks.items())

        for handle, callback in subscribers:
            try:
                callback(snapshot)
            except Exception as e:
                log.error(
                    SUBSCRIBER_CALLBACK_FAILED,
                    subscription_id=handle.subscription_id,
                    sequence=snapshot.sequence,
                    error=str(e),
                    error_type=type(e).__name__,
                    exc_info=True,
                )
