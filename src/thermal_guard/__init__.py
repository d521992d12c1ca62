"""Hardware telemetry sampling core.

Periodically samples CPU/memory utilization, derives temperature, usage and
fan readings from them, and publishes immutable snapshots to subscribers.
"""

from thermal_guard.monitor import SamplingScheduler, SchedulerState, SubscriptionHandle
from thermal_guard.sensors import (
    EstimationEngine,
    HardwareProbe,
    ProbeError,
    ProbeUnavailable,
    SensorCategory,
    SensorSnapshot,
)
from thermal_guard.sensors.platforms import PsutilProbe, SimulatedProbe, create_probe

__version__ = "0.1.0"

__all__ = [
    "SamplingScheduler",
    "SchedulerState",
    "SubscriptionHandle",
    "EstimationEngine",
    "HardwareProbe",
    "ProbeError",
    "ProbeUnavailable",
    "SensorCategory",
    "SensorSnapshot",
    "PsutilProbe",
    "SimulatedProbe",
    "create_probe",
]
