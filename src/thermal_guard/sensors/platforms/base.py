"""Live probe using psutil.

Cross-platform CPU and memory utilization via psutil. Fan speeds are read
from ``psutil.sensors_fans()`` where the platform provides it (Linux); other
platforms report no fans. Temperatures are not read: every temperature in a
snapshot is estimated from CPU load, which needs no privileged sensor API.
"""

from collections.abc import Mapping

import psutil

from thermal_guard.sensors.models import RawMetrics
from thermal_guard.sensors.probe import ProbeUnavailable
from thermal_guard.telemetry import SENSOR_POLL, get_logger

log = get_logger(__name__)


class PsutilProbe:
    """HardwareProbe backed by the host operating system.

    Attributes:
        name: Probe identifier used in log events.
        cpu_sample_seconds: Window psutil measures CPU load over. Blocks the
            calling thread for that long, so call from a worker thread.
    """

    name = "live"

    def __init__(self, cpu_sample_seconds: float = 0.1) -> None:
        """Initialize the probe.

        Args:
            cpu_sample_seconds: CPU measurement window in seconds.
        """
        self.cpu_sample_seconds = cpu_sample_seconds

    def sample_cpu_and_memory_usage(self) -> RawMetrics:
        """Read CPU and memory utilization.

        Returns:
            RawMetrics with probe_succeeded=True.

        Raises:
            ProbeUnavailable: If psutil fails or returns a non-finite value.
        """
        try:
            cpu_percent = psutil.cpu_percent(interval=self.cpu_sample_seconds)
            memory_percent = psutil.virtual_memory().percent
            metrics = RawMetrics.from_probe(cpu_percent, memory_percent)
        except (psutil.Error, OSError, ValueError) as e:
            raise ProbeUnavailable(f"psutil usage read failed: {e}") from e

        log.debug(
            SENSOR_POLL,
            probe=self.name,
            cpu_load=metrics.cpu_usage_pct,
            memory_used=metrics.memory_usage_pct,
        )
        return metrics

    def sample_fan_speeds(self) -> Mapping[str, float]:
        """Read fan speeds keyed by "<chip> <label>".

        Returns:
            Fan speeds in RPM; empty when the platform exposes none.
        """
        sensors_fans = getattr(psutil, "sensors_fans", None)
        if sensors_fans is None:
            return {}

        try:
            chips = sensors_fans()
        except (psutil.Error, OSError) as e:
            log.debug("fan_read_failed", probe=self.name, error=str(e))
            return {}

        fans: dict[str, float] = {}
        for chip, entries in chips.items():
            for index, entry in enumerate(entries, start=1):
                label = entry.label or f"Fan {index}"
                fans[f"{chip} {label}"] = float(entry.current)
        return fans
