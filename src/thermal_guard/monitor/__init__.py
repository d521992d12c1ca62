"""Sampling scheduler and subscriber interface.

The scheduler owns the refresh cadence and is the only writer of the
published snapshot; subscribers read it or receive push notifications.
"""

from thermal_guard.monitor.diagnostics import DiagnosticsReport, summarize
from thermal_guard.monitor.scheduler import SamplingScheduler, SchedulerState
from thermal_guard.monitor.subscriptions import (
    SnapshotCallback,
    SnapshotCell,
    SubscriberRegistry,
    SubscriptionHandle,
)

__all__ = [
    "SamplingScheduler",
    "SchedulerState",
    "SnapshotCell",
    "SubscriberRegistry",
    "SubscriptionHandle",
    "SnapshotCallback",
    "DiagnosticsReport",
    "summarize",
]
