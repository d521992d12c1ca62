"""Telemetry module for structured logging.

This module provides:
- Structured logging via structlog
- Semantic event constants
"""

from thermal_guard.telemetry.events import (
    FAN_DATA_UNAVAILABLE,
    PROBE_RECOVERED,
    PROBE_UNAVAILABLE,
    SCHEDULER_STARTED,
    SCHEDULER_STOPPED,
    SCHEDULER_TICK_FAILED,
    SENSOR_POLL,
    SNAPSHOT_INVARIANT_VIOLATION,
    SNAPSHOT_PUBLISHED,
    SNAPSHOT_REJECTED,
    SUBSCRIBER_ADDED,
    SUBSCRIBER_CALLBACK_FAILED,
    SUBSCRIBER_REMOVED,
)
from thermal_guard.telemetry.logger import configure_logging, get_logger

__all__ = [
    # Core exports
    "get_logger",
    "configure_logging",
    # Event constants
    "SENSOR_POLL",
    "PROBE_UNAVAILABLE",
    "PROBE_RECOVERED",
    "FAN_DATA_UNAVAILABLE",
    "SCHEDULER_STARTED",
    "SCHEDULER_STOPPED",
    "SCHEDULER_TICK_FAILED",
    "SNAPSHOT_PUBLISHED",
    "SNAPSHOT_REJECTED",
    "SNAPSHOT_INVARIANT_VIOLATION",
    "SUBSCRIBER_ADDED",
    "SUBSCRIBER_REMOVED",
    "SUBSCRIBER_CALLBACK_FAILED",
]
