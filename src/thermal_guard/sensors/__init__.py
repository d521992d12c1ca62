"""Sensor model, estimation rules and hardware probes.

Structure:
- models.py: sensor types and the immutable SensorSnapshot
- estimation.py: fixed linear models for values the probe cannot supply
- update_rules.py: pure per-tick transform from one snapshot to the next
- catalog.py: seed snapshot
- thresholds.py: severity bands
- probe.py: HardwareProbe protocol and probe errors
- platforms/: live (psutil) and simulated probes
"""

from thermal_guard.sensors.catalog import default_snapshot
from thermal_guard.sensors.estimation import EstimationEngine
from thermal_guard.sensors.models import (
    FanSensor,
    RawMetrics,
    SensorCategory,
    SensorSnapshot,
    TemperatureSensor,
    UsageSensor,
)
from thermal_guard.sensors.probe import HardwareProbe, ProbeError, ProbeUnavailable
from thermal_guard.sensors.thresholds import (
    Severity,
    classify_fan_speed,
    classify_temperature,
    classify_usage,
)
from thermal_guard.sensors.update_rules import (
    InvariantViolation,
    advance_snapshot,
    verify_snapshot,
)

__all__ = [
    "SensorCategory",
    "TemperatureSensor",
    "UsageSensor",
    "FanSensor",
    "RawMetrics",
    "SensorSnapshot",
    "EstimationEngine",
    "HardwareProbe",
    "ProbeError",
    "ProbeUnavailable",
    "InvariantViolation",
    "advance_snapshot",
    "verify_snapshot",
    "default_snapshot",
    "Severity",
    "classify_temperature",
    "classify_usage",
    "classify_fan_speed",
]
