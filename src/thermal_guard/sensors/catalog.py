"""Seed sensor catalog.

The snapshot published before the first tick: the sensor layout of an
Apple Silicon laptop with plausible starting readings. Ticks keep this
layout (names, categories, bounds) and only replace the numbers.
"""

from thermal_guard.sensors.models import (
    FanSensor,
    SensorCategory,
    SensorSnapshot,
    TemperatureSensor,
    UsageSensor,
)

_C = SensorCategory

# name, seed °C, max °C, category, icon, color
_TEMPERATURE_SEEDS: tuple[tuple[str, float, float, SensorCategory, str, str], ...] = (
    ("Efficiency Core 1", 54.0, 100.0, _C.CPU, "cpu", "blue"),
    ("Efficiency Core 2", 53.0, 100.0, _C.CPU, "cpu", "blue"),
    ("Efficiency Core 3", 54.0, 100.0, _C.CPU, "cpu", "blue"),
    ("Efficiency Core 4", 54.0, 100.0, _C.CPU, "cpu", "blue"),
    ("Efficiency Core 5", 51.0, 100.0, _C.CPU, "cpu", "blue"),
    ("Efficiency Core 6", 58.0, 100.0, _C.CPU, "cpu", "blue"),
    ("Performance Core 1", 55.0, 100.0, _C.CPU, "cpu", "blue"),
    ("Performance Core 2", 55.0, 100.0, _C.CPU, "cpu", "blue"),
    ("Performance Core 3", 55.0, 100.0, _C.CPU, "cpu", "blue"),
    ("Performance Core 4", 54.0, 100.0, _C.CPU, "cpu", "blue"),
    ("GPU Cluster", 52.0, 100.0, _C.GPU, "display", "purple"),
    ("GPU Cluster", 46.0, 100.0, _C.GPU, "display", "purple"),
    ("Internal Ambient", 45.0, 80.0, _C.AMBIENT, "thermometer", "gray"),
    ("Ethernet", 45.0, 80.0, _C.NETWORK, "network", "gray"),
    ("Memory Proximity", 42.0, 80.0, _C.MEMORY, "memorychip", "green"),
    ("Memory Proximity", 48.0, 80.0, _C.MEMORY, "memorychip", "green"),
    ("Power Supply", 41.0, 80.0, _C.POWER, "bolt", "yellow"),
    ("Power Supply Proximity", 48.0, 80.0, _C.POWER, "bolt", "yellow"),
    ("Wireless Proximity", 34.0, 80.0, _C.WIRELESS, "wifi", "gray"),
    ("SSD", 41.0, 70.0, _C.STORAGE, "internaldrive", "green"),
    ("SSD (NAND I/O)", 39.0, 70.0, _C.STORAGE, "internaldrive", "green"),
)


def default_temperature_sensors() -> tuple[TemperatureSensor, ...]:
    """Seed temperature sensors in display order."""
    return tuple(
        TemperatureSensor(
            name=name, value=value, max_value=max_value, category=category, icon=icon, color=color
        )
        for name, value, max_value, category, icon, color in _TEMPERATURE_SEEDS
    )


def default_usage_sensors() -> tuple[UsageSensor, ...]:
    """Seed usage sensors (CPU, memory, GPU)."""
    return (
        UsageSensor(name="CPU Usage", value=25.8, category=_C.CPU, icon="cpu", color="blue"),
        UsageSensor(
            name="Memory Usage", value=67.2, category=_C.MEMORY, icon="memorychip", color="purple"
        ),
        UsageSensor(name="GPU Usage", value=15.3, category=_C.GPU, icon="display", color="purple"),
    )


def default_fan_sensors() -> tuple[FanSensor, ...]:
    """Seed fan sensors."""
    return (
        FanSensor(name="Main Fan", speed=1800.0, max_speed=4900.0),
        FanSensor(name="Secondary Fan", speed=1650.0, max_speed=4900.0),
    )


def default_snapshot(*, with_fans: bool = True) -> SensorSnapshot:
    """Build the seed snapshot.

    Args:
        with_fans: When False, the snapshot carries no fan sensors, as on
            hardware without fan telemetry.

    Returns:
        Snapshot with sequence 0.
    """
    return SensorSnapshot(
        temperatures=default_temperature_sensors(),
        usages=default_usage_sensors(),
        fans=default_fan_sensors() if with_fans else (),
        cpu_temp=45.5,
        gpu_temp=52.3,
        storage_temp=38.7,
        battery_temp=32.1,
        sequence=0,
    )
