"""HardwareProbe capability.

A probe is the boundary to the operating system. The scheduler only depends
on this protocol; which implementation runs (live or simulated) is a
configuration decision made by ``thermal_guard.sensors.platforms.create_probe``.
"""

from collections.abc import Mapping
from typing import Protocol, runtime_checkable

from thermal_guard.sensors.models import RawMetrics


class ProbeError(Exception):
    """Raised when a probe cannot produce a reading."""

    pass


class ProbeUnavailable(ProbeError):
    """Raised when the underlying OS facility failed or is missing."""

    pass


@runtime_checkable
class HardwareProbe(Protocol):
    """Source of raw CPU/memory utilization and (optionally) fan speeds."""

    name: str

    def sample_cpu_and_memory_usage(self) -> RawMetrics:
        """Read CPU and memory utilization.

        Raises:
            ProbeError: If the reading could not be obtained.
        """
        ...

    def sample_fan_speeds(self) -> Mapping[str, float]:
        """Read fan speeds keyed by fan label.

        An empty mapping means the hardware exposes no fan telemetry; it is
        not an error.
        """
        ...
