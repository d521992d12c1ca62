"""Fixed linear models for values the probe cannot supply.

Without a privileged sensor API the only real inputs are whole-system CPU and
memory utilization. Temperatures, GPU load and (when no fan telemetry is
exposed) fan speed are estimated from those with the constants below.
"""

import random

from thermal_guard.sensors.models import SensorCategory

CPU_TEMP_BASE = 30.0
CPU_TEMP_PER_PCT = 0.5
GPU_TEMP_BASE = 35.0
GPU_TEMP_PER_PCT = 0.3
STORAGE_TEMP = 25.0
BATTERY_TEMP = 25.0
MEMORY_TEMP_FACTOR = 0.8  # of the CPU estimate
AMBIENT_TEMP_FACTOR = 0.7  # of the CPU estimate; also power, network, wireless, other

GPU_USAGE_FACTOR = 0.6
GPU_USAGE_JITTER = 5.0

FAN_BASE_SPEED = 1000.0
FAN_MAX_FALLBACK_SPEED = 3000.0

_WIDE_JITTER = 2.0
_NARROW_JITTER = 1.0
_WIDE_JITTER_CATEGORIES = frozenset({SensorCategory.CPU, SensorCategory.GPU})


class EstimationEngine:
    """Derives synthetic sensor values from coarse CPU/memory utilization.

    All methods are pure apart from drawing from the random source passed in,
    so a seeded ``random.Random`` makes every derivation reproducible.
    """

    def derive_temperature(self, category: SensorCategory, cpu_usage_pct: float) -> float:
        """Baseline temperature (°C) for a sensor category.

        Args:
            category: Sensor category.
            cpu_usage_pct: CPU utilization, 0-100.

        Returns:
            Estimated temperature before jitter and clamping.
        """
        cpu_temp = CPU_TEMP_BASE + cpu_usage_pct * CPU_TEMP_PER_PCT
        if category == SensorCategory.CPU:
            return cpu_temp
        if category == SensorCategory.GPU:
            return GPU_TEMP_BASE + cpu_usage_pct * GPU_TEMP_PER_PCT
        if category == SensorCategory.STORAGE:
            return STORAGE_TEMP
        if category == SensorCategory.BATTERY:
            return BATTERY_TEMP
        if category == SensorCategory.MEMORY:
            return cpu_temp * MEMORY_TEMP_FACTOR
        return cpu_temp * AMBIENT_TEMP_FACTOR

    def jitter_for(self, category: SensorCategory) -> float:
        """Half-width of the random perturbation applied to a temperature."""
        if category in _WIDE_JITTER_CATEGORIES:
            return _WIDE_JITTER
        return _NARROW_JITTER

    def derive_usage(
        self,
        category: SensorCategory,
        cpu_usage_pct: float,
        memory_usage_pct: float,
        rng: random.Random,
    ) -> float:
        """Usage percentage for a usage sensor, before clamping.

        GPU load is not measured; it is estimated as a share of CPU load plus
        noise.
        """
        if category == SensorCategory.CPU:
            return cpu_usage_pct
        if category == SensorCategory.MEMORY:
            return memory_usage_pct
        if category == SensorCategory.GPU:
            return cpu_usage_pct * GPU_USAGE_FACTOR + rng.uniform(
                -GPU_USAGE_JITTER, GPU_USAGE_JITTER
            )
        raise ValueError(f"no usage rule for category {category.value}")

    def derive_fan_speed(self, cpu_usage_pct: float) -> float:
        """Synthetic fan speed (RPM) used when the probe reports no fans."""
        return FAN_BASE_SPEED + (cpu_usage_pct / 100.0) * (
            FAN_MAX_FALLBACK_SPEED - FAN_BASE_SPEED
        )
