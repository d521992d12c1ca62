"""Tests for sensor models."""

import math

import pytest
from pydantic import ValidationError

from thermal_guard.sensors.catalog import default_snapshot
from thermal_guard.sensors.models import (
    FanSensor,
    RawMetrics,
    SensorCategory,
    TemperatureSensor,
    UsageSensor,
)


class TestRawMetrics:
    """RawMetrics construction."""

    def test_from_probe_keeps_valid_values(self) -> None:
        raw = RawMetrics.from_probe(12.5, 64.0)
        assert raw.cpu_usage_pct == 12.5
        assert raw.memory_usage_pct == 64.0
        assert raw.probe_succeeded is True

    def test_from_probe_clamps_out_of_range(self) -> None:
        """Test percentages are bounded to [0, 100]."""
        raw = RawMetrics.from_probe(-3.0, 140.0)
        assert raw.cpu_usage_pct == 0.0
        assert raw.memory_usage_pct == 100.0

    @pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
    def test_from_probe_rejects_non_finite(self, bad: float) -> None:
        with pytest.raises(ValueError):
            RawMetrics.from_probe(bad, 10.0)

    def test_as_fallback(self) -> None:
        """Test fallback keeps the readings and clears the success flag."""
        fallback = RawMetrics.from_probe(40.0, 50.0).as_fallback()
        assert fallback == RawMetrics(40.0, 50.0, probe_succeeded=False)


class TestSensorModels:
    """Sensor immutability and validation."""

    def test_sensors_are_frozen(self) -> None:
        sensor = TemperatureSensor(
            name="SSD", value=40.0, max_value=70.0, category=SensorCategory.STORAGE
        )
        with pytest.raises(ValidationError):
            sensor.value = 50.0  # type: ignore[misc]

    def test_model_copy_preserves_identity(self) -> None:
        sensor = FanSensor(name="Main Fan", speed=1800.0, max_speed=4900.0)
        updated = sensor.model_copy(update={"speed": 2000.0})
        assert updated.name == "Main Fan"
        assert updated.max_speed == 4900.0
        assert updated.speed == 2000.0
        assert sensor.speed == 1800.0

    def test_fan_max_speed_must_exceed_floor(self) -> None:
        with pytest.raises(ValidationError):
            FanSensor(name="Tiny", speed=500.0, max_speed=600.0)

    def test_temperature_max_below_update_floor_rejected(self) -> None:
        """Test a sensor whose clamp range would be empty cannot be built."""
        with pytest.raises(ValidationError):
            TemperatureSensor(
                name="Broken", value=10.0, max_value=15.0, category=SensorCategory.OTHER
            )

    def test_temperature_max_at_update_floor_allowed(self) -> None:
        sensor = TemperatureSensor(
            name="Cold Plate", value=20.0, max_value=20.0, category=SensorCategory.AMBIENT
        )
        assert sensor.max_value == TemperatureSensor.MIN_UPDATE_VALUE

    @pytest.mark.parametrize(
        "category", [SensorCategory.CPU, SensorCategory.GPU, SensorCategory.MEMORY]
    )
    def test_usage_categories_with_rules_allowed(self, category: SensorCategory) -> None:
        sensor = UsageSensor(name="Usage", value=10.0, category=category)
        assert sensor.category is category

    @pytest.mark.parametrize(
        "category", [SensorCategory.STORAGE, SensorCategory.BATTERY, SensorCategory.OTHER]
    )
    def test_usage_category_without_rule_rejected(self, category: SensorCategory) -> None:
        """Test a usage sensor the estimation rules cannot update fails at construction."""
        with pytest.raises(ValidationError, match="usage category"):
            UsageSensor(name="Disk", value=10.0, category=category)


class TestSeedSnapshot:
    """The built-in seed snapshot."""

    def test_layout(self) -> None:
        snapshot = default_snapshot()
        assert snapshot.sequence == 0
        assert len(snapshot.temperatures) == 21
        assert [u.name for u in snapshot.usages] == ["CPU Usage", "Memory Usage", "GPU Usage"]
        assert [f.name for f in snapshot.fans] == ["Main Fan", "Secondary Fan"]
        assert snapshot.cpu_temp == 45.5
        assert snapshot.gpu_temp == 52.3
        assert snapshot.storage_temp == 38.7
        assert snapshot.battery_temp == 32.1

    def test_category_filters(self) -> None:
        snapshot = default_snapshot()
        assert len(snapshot.temperatures_in(SensorCategory.CPU)) == 10
        assert len(snapshot.temperatures_in(SensorCategory.GPU)) == 2
        assert len(snapshot.temperatures_in(SensorCategory.STORAGE)) == 2
        assert snapshot.temperatures_in(SensorCategory.BATTERY) == ()
        assert snapshot.usage_value(SensorCategory.MEMORY) == 67.2
        assert snapshot.usage_value(SensorCategory.STORAGE) is None

    def test_without_fans(self) -> None:
        snapshot = default_snapshot(with_fans=False)
        assert snapshot.fans == ()
        assert snapshot.has_fan_data is False
