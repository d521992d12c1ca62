"""Sensor data model.

Sensors and snapshots are frozen Pydantic models: a tick never edits a
sensor in place, it builds a copy with a new value (``model_copy``) and a new
snapshot around the copies. Readers holding an old snapshot keep seeing a
consistent set of readings.
"""

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SensorCategory(str, Enum):
    """Functional grouping of a sensor; drives which derivation rule applies."""

    CPU = "CPU"
    GPU = "GPU"
    MEMORY = "Memory"
    STORAGE = "Storage"
    POWER = "Power"
    NETWORK = "Network"
    WIRELESS = "Wireless"
    AMBIENT = "Ambient"
    BATTERY = "Battery"
    OTHER = "Other"


USAGE_CATEGORIES = frozenset({SensorCategory.CPU, SensorCategory.GPU, SensorCategory.MEMORY})


class TemperatureSensor(BaseModel):
    """A named temperature reading in °C."""

    model_config = ConfigDict(frozen=True)

    MIN_UPDATE_VALUE: ClassVar[float] = 20.0

    name: str = Field(..., description="Display name (not unique)")
    value: float = Field(..., description="Temperature in °C")
    max_value: float = Field(
        ..., ge=MIN_UPDATE_VALUE, description="Upper clamp bound in °C, at least the update floor"
    )
    category: SensorCategory = Field(..., description="Sensor category")
    icon: str = Field("thermometer", description="Icon identifier for presentation")
    color: str = Field("gray", description="Color identifier for presentation")


class UsageSensor(BaseModel):
    """A named utilization percentage."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Display name")
    value: float = Field(..., description="Utilization in percent")
    category: SensorCategory = Field(..., description="CPU, GPU or Memory")
    icon: str = Field("gauge", description="Icon identifier for presentation")
    color: str = Field("blue", description="Color identifier for presentation")
    unit: str = Field("%", description="Display unit")

    @field_validator("category")
    @classmethod
    def validate_category(cls, v: SensorCategory) -> SensorCategory:
        """Only categories with a usage rule are allowed."""
        if v not in USAGE_CATEGORIES:
            allowed = sorted(c.value for c in USAGE_CATEGORIES)
            raise ValueError(f"usage category must be one of {allowed}, got {v.value}")
        return v


class FanSensor(BaseModel):
    """A named fan speed in RPM."""

    model_config = ConfigDict(frozen=True)

    MIN_SPEED: ClassVar[float] = 800.0

    name: str = Field(..., description="Display name")
    speed: float = Field(..., description="Fan speed in RPM")
    max_speed: float = Field(..., gt=800.0, description="Upper clamp bound in RPM")
    icon: str = Field("fan", description="Icon identifier for presentation")
    color: str = Field("cyan", description="Color identifier for presentation")


@dataclass(frozen=True)
class RawMetrics:
    """The only values a tick actually obtains from outside.

    Attributes:
        cpu_usage_pct: Whole-system CPU utilization, 0-100.
        memory_usage_pct: Memory utilization, 0-100.
        probe_succeeded: False when the values are a fallback continuation
            rather than a fresh probe reading.
    """

    cpu_usage_pct: float
    memory_usage_pct: float
    probe_succeeded: bool = True

    @classmethod
    def from_probe(cls, cpu_usage_pct: float, memory_usage_pct: float) -> "RawMetrics":
        """Build metrics from probe readings, clamping percentages to [0, 100].

        Raises:
            ValueError: If a reading is not a finite number.
        """
        cpu = float(cpu_usage_pct)
        memory = float(memory_usage_pct)
        if not (math.isfinite(cpu) and math.isfinite(memory)):
            raise ValueError(f"non-finite probe reading: cpu={cpu!r} memory={memory!r}")
        return cls(
            cpu_usage_pct=min(100.0, max(0.0, cpu)),
            memory_usage_pct=min(100.0, max(0.0, memory)),
        )

    def as_fallback(self) -> "RawMetrics":
        """Return the same readings marked as not freshly probed."""
        return RawMetrics(self.cpu_usage_pct, self.memory_usage_pct, probe_succeeded=False)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SensorSnapshot(BaseModel):
    """Immutable, fully-populated set of sensor readings at one point in time.

    The four summary scalars are derived from the same raw metrics as the
    per-sensor values; they are not independent state.
    """

    model_config = ConfigDict(frozen=True)

    temperatures: tuple[TemperatureSensor, ...] = Field(default_factory=tuple)
    usages: tuple[UsageSensor, ...] = Field(default_factory=tuple)
    fans: tuple[FanSensor, ...] = Field(default_factory=tuple)

    cpu_temp: float = Field(..., description="Summary CPU temperature (°C)")
    gpu_temp: float = Field(..., description="Summary GPU temperature (°C)")
    storage_temp: float = Field(..., description="Summary storage temperature (°C)")
    battery_temp: float = Field(..., description="Summary battery temperature (°C)")

    sequence: int = Field(0, ge=0, description="0 for the seed, +1 per publish")
    taken_at: datetime = Field(default_factory=_utcnow)
    probe_succeeded: bool = Field(True, description="False when built from fallback metrics")

    @property
    def has_fan_data(self) -> bool:
        """Whether any fan sensor is present."""
        return bool(self.fans)

    def temperatures_in(self, category: SensorCategory) -> tuple[TemperatureSensor, ...]:
        """Temperature sensors of one category, in snapshot order."""
        return tuple(s for s in self.temperatures if s.category == category)

    def usages_in(self, category: SensorCategory) -> tuple[UsageSensor, ...]:
        """Usage sensors of one category, in snapshot order."""
        return tuple(s for s in self.usages if s.category == category)

    def usage_value(self, category: SensorCategory) -> float | None:
        """First usage reading of a category, or None if there is none."""
        matches = self.usages_in(category)
        return matches[0].value if matches else None
