"""Tests for the estimation engine."""

import random

import pytest

from thermal_guard.sensors.estimation import EstimationEngine
from thermal_guard.sensors.models import SensorCategory


@pytest.fixture
def engine() -> EstimationEngine:
    return EstimationEngine()


class TestDeriveTemperature:
    """Temperature baselines per category."""

    def test_cpu_baseline(self, engine: EstimationEngine) -> None:
        """Test CPU baseline is 30 + 0.5 * usage."""
        assert engine.derive_temperature(SensorCategory.CPU, 40.0) == pytest.approx(50.0)

    def test_gpu_baseline(self, engine: EstimationEngine) -> None:
        """Test GPU baseline is 35 + 0.3 * usage."""
        assert engine.derive_temperature(SensorCategory.GPU, 40.0) == pytest.approx(47.0)

    def test_storage_and_battery_are_constant(self, engine: EstimationEngine) -> None:
        """Test storage and battery ignore CPU load."""
        for cpu in (0.0, 50.0, 100.0):
            assert engine.derive_temperature(SensorCategory.STORAGE, cpu) == 25.0
            assert engine.derive_temperature(SensorCategory.BATTERY, cpu) == 25.0

    def test_memory_tracks_cpu_estimate(self, engine: EstimationEngine) -> None:
        """Test memory sensors run at 80% of the CPU estimate."""
        assert engine.derive_temperature(SensorCategory.MEMORY, 40.0) == pytest.approx(40.0)

    @pytest.mark.parametrize(
        "category",
        [
            SensorCategory.AMBIENT,
            SensorCategory.POWER,
            SensorCategory.NETWORK,
            SensorCategory.WIRELESS,
            SensorCategory.OTHER,
        ],
    )
    def test_other_categories_track_cpu_estimate(
        self, engine: EstimationEngine, category: SensorCategory
    ) -> None:
        """Test ambient-like sensors run at 70% of the CPU estimate."""
        assert engine.derive_temperature(category, 40.0) == pytest.approx(35.0)

    def test_idle_cpu(self, engine: EstimationEngine) -> None:
        """Test zero load gives the model intercepts."""
        assert engine.derive_temperature(SensorCategory.CPU, 0.0) == 30.0
        assert engine.derive_temperature(SensorCategory.GPU, 0.0) == 35.0


class TestJitter:
    """Perturbation widths."""

    def test_cpu_and_gpu_are_wide(self, engine: EstimationEngine) -> None:
        assert engine.jitter_for(SensorCategory.CPU) == 2.0
        assert engine.jitter_for(SensorCategory.GPU) == 2.0

    def test_everything_else_is_narrow(self, engine: EstimationEngine) -> None:
        for category in SensorCategory:
            if category not in (SensorCategory.CPU, SensorCategory.GPU):
                assert engine.jitter_for(category) == 1.0


class TestDeriveUsage:
    """Usage derivation."""

    def test_cpu_passthrough(self, engine: EstimationEngine) -> None:
        """Test CPU usage is the probed value."""
        assert engine.derive_usage(SensorCategory.CPU, 33.0, 70.0, random.Random(0)) == 33.0

    def test_memory_passthrough(self, engine: EstimationEngine) -> None:
        """Test memory usage is the probed value."""
        assert engine.derive_usage(SensorCategory.MEMORY, 33.0, 70.0, random.Random(0)) == 70.0

    def test_gpu_is_share_of_cpu_plus_noise(self, engine: EstimationEngine) -> None:
        """Test GPU usage stays within 0.6 * cpu ± 5."""
        rng = random.Random(7)
        for _ in range(200):
            value = engine.derive_usage(SensorCategory.GPU, 50.0, 0.0, rng)
            assert 25.0 <= value <= 35.0

    def test_unsupported_category_raises(self, engine: EstimationEngine) -> None:
        """Test categories without a usage rule are rejected."""
        with pytest.raises(ValueError):
            engine.derive_usage(SensorCategory.STORAGE, 10.0, 10.0, random.Random(0))


class TestDeriveFanSpeed:
    """Fallback fan speed."""

    def test_half_load(self, engine: EstimationEngine) -> None:
        """Test 50% load gives 1000 + 0.5 * 2000 RPM."""
        assert engine.derive_fan_speed(50.0) == pytest.approx(2000.0)

    def test_range(self, engine: EstimationEngine) -> None:
        assert engine.derive_fan_speed(0.0) == 1000.0
        assert engine.derive_fan_speed(100.0) == 3000.0
