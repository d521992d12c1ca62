"""Diagnostics summary of a snapshot.

Turns a snapshot into availability and severity signals ("Fan Sensors: Not
Available", hottest sensor, overall severity) without any presentation
concerns.
"""

from collections import Counter
from dataclasses import dataclass, field

from thermal_guard.sensors.models import SensorSnapshot, TemperatureSensor
from thermal_guard.sensors.thresholds import (
    Severity,
    classify_fan_speed,
    classify_temperature,
    classify_usage,
)

ACTIVE = "Active"
NOT_AVAILABLE = "Not Available"


@dataclass(frozen=True)
class DiagnosticsReport:
    """Availability and severity summary for one snapshot."""

    sequence: int
    temperature_sensors_status: str
    fan_sensors_status: str
    probe_status: str
    highest_severity: Severity
    hottest_sensor: TemperatureSensor | None
    scheduler_state: str | None = None
    consecutive_probe_failures: int = 0
    sensors_per_category: dict[str, int] = field(default_factory=dict)


def _highest(severities: list[Severity]) -> Severity:
    return max(severities, key=lambda s: s.rank, default=Severity.NORMAL)


def summarize(
    snapshot: SensorSnapshot,
    *,
    scheduler_state: str | None = None,
    consecutive_probe_failures: int = 0,
) -> DiagnosticsReport:
    """Build a diagnostics report.

    Args:
        snapshot: Snapshot to summarize.
        scheduler_state: Optional scheduler state to include.
        consecutive_probe_failures: Failed probe reads since the last success.

    Returns:
        DiagnosticsReport.
    """
    severities = [classify_temperature(t.value) for t in snapshot.temperatures]
    severities += [classify_usage(u.value) for u in snapshot.usages]
    severities += [classify_fan_speed(f.speed) for f in snapshot.fans]

    hottest = max(snapshot.temperatures, key=lambda t: t.value, default=None)
    per_category = Counter(t.category.value for t in snapshot.temperatures)

    return DiagnosticsReport(
        sequence=snapshot.sequence,
        temperature_sensors_status=ACTIVE if snapshot.temperatures else NOT_AVAILABLE,
        fan_sensors_status=ACTIVE if snapshot.has_fan_data else NOT_AVAILABLE,
        probe_status="Live" if snapshot.probe_succeeded else "Estimated",
        highest_severity=_highest(severities),
        hottest_sensor=hottest,
        scheduler_state=scheduler_state,
        consecutive_probe_failures=consecutive_probe_failures,
        sensors_per_category=dict(per_category),
    )
