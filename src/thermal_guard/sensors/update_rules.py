"""Per-tick update rules.

``advance_snapshot`` is a pure transform: previous snapshot + raw metrics +
fan readings in, brand-new snapshot out. Each sensor keeps its identity
(name, category, bounds, icon, color); only the number changes.
"""

import math
import random
from collections.abc import Mapping
from datetime import datetime, timezone

from thermal_guard.sensors.estimation import EstimationEngine
from thermal_guard.sensors.models import (
    FanSensor,
    RawMetrics,
    SensorCategory,
    SensorSnapshot,
    TemperatureSensor,
    UsageSensor,
)

USAGE_FLOOR = 0.0
USAGE_CEILING = 100.0
FAN_JITTER = 50.0


class InvariantViolation(Exception):
    """Raised when a computed value is outside its declared bound.

    Clamping makes this unreachable for well-formed sensors; seeing it means a
    sensor definition or update rule is wrong.
    """

    pass


def clamp(value: float, floor: float, ceiling: float) -> float:
    """Bound value to [floor, ceiling]."""
    return max(floor, min(ceiling, value))


def update_temperature(
    sensor: TemperatureSensor, raw: RawMetrics, engine: EstimationEngine, rng: random.Random
) -> TemperatureSensor:
    """Category baseline plus bounded jitter, clamped to [20, max_value]."""
    baseline = engine.derive_temperature(sensor.category, raw.cpu_usage_pct)
    spread = engine.jitter_for(sensor.category)
    value = clamp(
        baseline + rng.uniform(-spread, spread),
        TemperatureSensor.MIN_UPDATE_VALUE,
        sensor.max_value,
    )
    return sensor.model_copy(update={"value": value})


def update_usage(
    sensor: UsageSensor, raw: RawMetrics, engine: EstimationEngine, rng: random.Random
) -> UsageSensor:
    """Usage from the estimation rules, clamped to [0, 100]."""
    value = engine.derive_usage(sensor.category, raw.cpu_usage_pct, raw.memory_usage_pct, rng)
    return sensor.model_copy(update={"value": clamp(value, USAGE_FLOOR, USAGE_CEILING)})


def update_fan(sensor: FanSensor, reference_speed: float, rng: random.Random) -> FanSensor:
    """Reference speed plus ±50 RPM, clamped to [800, max_speed]."""
    speed = clamp(
        reference_speed + rng.uniform(-FAN_JITTER, FAN_JITTER),
        FanSensor.MIN_SPEED,
        sensor.max_speed,
    )
    return sensor.model_copy(update={"speed": speed})


def fan_reference_speed(
    fan_speeds: Mapping[str, float], raw: RawMetrics, engine: EstimationEngine
) -> float:
    """First probed fan speed, or the CPU-derived estimate when there is none."""
    for speed in fan_speeds.values():
        if math.isfinite(speed):
            return float(speed)
    return engine.derive_fan_speed(raw.cpu_usage_pct)


def advance_snapshot(
    previous: SensorSnapshot,
    raw: RawMetrics,
    fan_speeds: Mapping[str, float],
    engine: EstimationEngine,
    rng: random.Random,
    *,
    taken_at: datetime | None = None,
) -> SensorSnapshot:
    """Build the snapshot that follows ``previous``.

    Args:
        previous: Currently published snapshot; supplies the sensor layout.
        raw: CPU/memory utilization for this tick (fresh or fallback).
        fan_speeds: Probed fan speeds; may be empty.
        engine: Estimation rules.
        rng: Random source for jitter.
        taken_at: Timestamp for the new snapshot. Defaults to now (UTC).

    Returns:
        New snapshot with ``sequence = previous.sequence + 1``.
    """
    cpu = raw.cpu_usage_pct
    reference_speed = fan_reference_speed(fan_speeds, raw, engine)

    return SensorSnapshot(
        temperatures=tuple(update_temperature(s, raw, engine, rng) for s in previous.temperatures),
        usages=tuple(update_usage(s, raw, engine, rng) for s in previous.usages),
        fans=tuple(update_fan(s, reference_speed, rng) for s in previous.fans),
        cpu_temp=engine.derive_temperature(SensorCategory.CPU, cpu),
        gpu_temp=engine.derive_temperature(SensorCategory.GPU, cpu),
        storage_temp=engine.derive_temperature(SensorCategory.STORAGE, cpu),
        battery_temp=engine.derive_temperature(SensorCategory.BATTERY, cpu),
        sequence=previous.sequence + 1,
        taken_at=taken_at or datetime.now(timezone.utc),
        probe_succeeded=raw.probe_succeeded,
    )


def verify_snapshot(snapshot: SensorSnapshot) -> None:
    """Check every reading against its bound.

    Raises:
        InvariantViolation: Listing every out-of-bounds reading.
    """
    problems: list[str] = []
    floor = TemperatureSensor.MIN_UPDATE_VALUE
    for t in snapshot.temperatures:
        if not floor <= t.value <= t.max_value:
            problems.append(f"temperature {t.name!r}={t.value} outside [{floor}, {t.max_value}]")
    for u in snapshot.usages:
        if not USAGE_FLOOR <= u.value <= USAGE_CEILING:
            problems.append(f"usage {u.name!r}={u.value} outside [0, 100]")
    for f in snapshot.fans:
        if not FanSensor.MIN_SPEED <= f.speed <= f.max_speed:
            problems.append(
                f"fan {f.name!r}={f.speed} outside [{FanSensor.MIN_SPEED}, {f.max_speed}]"
            )
    if problems:
        raise InvariantViolation("; ".join(problems))
