"""Simulated probe for demos and previews.

Produces a bounded random walk so the monitor looks alive without touching
the host. The walk starts from fixed values and is fully reproducible with a
seeded random source.
"""

import random
import threading
from collections.abc import Mapping

from thermal_guard.sensors.models import RawMetrics
from thermal_guard.sensors.probe import ProbeUnavailable
from thermal_guard.telemetry import SENSOR_POLL, get_logger

log = get_logger(__name__)

# (start, step half-width, floor, ceiling)
_CPU_WALK = (25.8, 5.0, 5.0, 95.0)
_MEMORY_WALK = (67.2, 3.0, 20.0, 90.0)
_FAN_WALK_STEP = 100.0
_FAN_FLOOR = 800.0
_FAN_CEILING = 3500.0
_FAN_START = {"Fan 1": 1800.0, "Fan 2": 1650.0}


def _walk(value: float, step: float, floor: float, ceiling: float, rng: random.Random) -> float:
    return max(floor, min(ceiling, value + rng.uniform(-step, step)))


class SimulatedProbe:
    """HardwareProbe that invents plausible readings.

    Each call advances the walk by one step. ``fail_next(n)`` makes the next
    ``n`` usage reads raise ProbeUnavailable, for exercising the fallback path.
    """

    name = "simulated"

    def __init__(self, rng: random.Random | None = None, *, with_fans: bool = True) -> None:
        """Initialize the walk at its starting values.

        Args:
            rng: Random source. Defaults to an unseeded ``random.Random``.
            with_fans: When False, the probe reports no fan telemetry.
        """
        self._rng = rng or random.Random()
        # Usage and fans are sampled concurrently; separate streams keep a
        # seeded walk reproducible regardless of call order.
        self._fan_rng = random.Random(self._rng.random())
        self._lock = threading.Lock()
        self._cpu = _CPU_WALK[0]
        self._memory = _MEMORY_WALK[0]
        self._fans = dict(_FAN_START) if with_fans else {}
        self._failures_pending = 0

    def fail_next(self, count: int = 1) -> None:
        """Make the next ``count`` usage reads fail."""
        with self._lock:
            self._failures_pending += count

    def sample_cpu_and_memory_usage(self) -> RawMetrics:
        """Advance the CPU/memory walk one step.

        Raises:
            ProbeUnavailable: While forced failures are pending.
        """
        with self._lock:
            if self._failures_pending > 0:
                self._failures_pending -= 1
                raise ProbeUnavailable("simulated probe failure")

            self._cpu = _walk(self._cpu, *_CPU_WALK[1:], rng=self._rng)
            self._memory = _walk(self._memory, *_MEMORY_WALK[1:], rng=self._rng)
            metrics = RawMetrics.from_probe(self._cpu, self._memory)

        log.debug(
            SENSOR_POLL,
            probe=self.name,
            cpu_load=metrics.cpu_usage_pct,
            memory_used=metrics.memory_usage_pct,
        )
        return metrics

    def sample_fan_speeds(self) -> Mapping[str, float]:
        """Advance each simulated fan one step."""
        with self._lock:
            for label, speed in self._fans.items():
                self._fans[label] = _walk(
                    speed, _FAN_WALK_STEP, _FAN_FLOOR, _FAN_CEILING, self._fan_rng
                )
            return dict(self._fans)
