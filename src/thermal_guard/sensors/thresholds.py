"""Severity bands for readings.

A data-level classification consumers can map to colors or alerts.
"""

from enum import Enum


class Severity(str, Enum):
    """How concerning a reading is, in increasing order."""

    NORMAL = "normal"
    WARM = "warm"
    HOT = "hot"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _RANK[self]


_RANK = {Severity.NORMAL: 0, Severity.WARM: 1, Severity.HOT: 2, Severity.CRITICAL: 3}

# (critical above, hot above, warm above)
TEMPERATURE_BANDS = (80.0, 70.0, 60.0)
USAGE_BANDS = (90.0, 80.0, 70.0)
FAN_SPEED_BANDS = (4000.0, 3000.0, 2000.0)


def _classify(value: float, bands: tuple[float, float, float]) -> Severity:
    critical, hot, warm = bands
    if value > critical:
        return Severity.CRITICAL
    if value > hot:
        return Severity.HOT
    if value > warm:
        return Severity.WARM
    return Severity.NORMAL


def classify_temperature(celsius: float) -> Severity:
    return _classify(celsius, TEMPERATURE_BANDS)


def classify_usage(percent: float) -> Severity:
    return _classify(percent, USAGE_BANDS)


def classify_fan_speed(rpm: float) -> Severity:
    return _classify(rpm, FAN_SPEED_BANDS)
