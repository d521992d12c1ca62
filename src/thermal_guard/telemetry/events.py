"""Semantic event constants for structured logging.

All log events should use these constants rather than magic strings to ensure
consistency and enable reliable querying and analysis.
"""

# Probe events
SENSOR_POLL = "sensor_poll"
PROBE_UNAVAILABLE = "probe_unavailable"
PROBE_RECOVERED = "probe_recovered"
FAN_DATA_UNAVAILABLE = "fan_data_unavailable"

# Scheduler events
SCHEDULER_STARTED = "sampling_scheduler_started"
SCHEDULER_STOPPED = "sampling_scheduler_stopped"
SCHEDULER_TICK_FAILED = "sampling_tick_failed"
SNAPSHOT_PUBLISHED = "snapshot_published"
SNAPSHOT_REJECTED = "snapshot_rejected"
SNAPSHOT_INVARIANT_VIOLATION = "snapshot_invariant_violation"

# Subscriber events
SUBSCRIBER_ADDED = "subscriber_added"
SUBSCRIBER_REMOVED = "subscriber_removed"
SUBSCRIBER_CALLBACK_FAILED = "subscriber_callback_failed"
