"""Tests for hardware probe implementations."""

import random
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import psutil
import pytest

from thermal_guard.sensors.platforms import PsutilProbe, SimulatedProbe, create_probe
from thermal_guard.sensors.probe import HardwareProbe, ProbeUnavailable


def _mock_psutil(cpu: float = 40.0, memory: float = 55.0) -> MagicMock:
    mock = MagicMock()
    mock.Error = psutil.Error
    mock.cpu_percent.return_value = cpu
    mock.virtual_memory.return_value = SimpleNamespace(percent=memory)
    return mock


class TestPsutilProbe:
    """Live probe backed by psutil (mocked)."""

    def test_satisfies_protocol(self) -> None:
        assert isinstance(PsutilProbe(), HardwareProbe)

    def test_reads_cpu_and_memory(self) -> None:
        mock = _mock_psutil(cpu=40.0, memory=55.0)
        with patch("thermal_guard.sensors.platforms.base.psutil", mock):
            metrics = PsutilProbe(cpu_sample_seconds=0.0).sample_cpu_and_memory_usage()

        assert metrics.cpu_usage_pct == 40.0
        assert metrics.memory_usage_pct == 55.0
        assert metrics.probe_succeeded is True
        mock.cpu_percent.assert_called_once_with(interval=0.0)

    def test_os_error_becomes_probe_unavailable(self) -> None:
        mock = _mock_psutil()
        mock.cpu_percent.side_effect = OSError("no /proc")
        with patch("thermal_guard.sensors.platforms.base.psutil", mock):
            with pytest.raises(ProbeUnavailable):
                PsutilProbe().sample_cpu_and_memory_usage()

    def test_psutil_error_becomes_probe_unavailable(self) -> None:
        mock = _mock_psutil()
        mock.virtual_memory.side_effect = psutil.AccessDenied()
        with patch("thermal_guard.sensors.platforms.base.psutil", mock):
            with pytest.raises(ProbeUnavailable):
                PsutilProbe().sample_cpu_and_memory_usage()

    def test_non_finite_reading_becomes_probe_unavailable(self) -> None:
        mock = _mock_psutil(cpu=float("nan"))
        with patch("thermal_guard.sensors.platforms.base.psutil", mock):
            with pytest.raises(ProbeUnavailable):
                PsutilProbe().sample_cpu_and_memory_usage()

    def test_fan_speeds_flattened(self) -> None:
        mock = _mock_psutil()
        mock.sensors_fans.return_value = {
            "applesmc": [
                SimpleNamespace(label="Exhaust", current=2100),
                SimpleNamespace(label="", current=1900),
            ]
        }
        with patch("thermal_guard.sensors.platforms.base.psutil", mock):
            fans = PsutilProbe().sample_fan_speeds()

        assert fans == {"applesmc Exhaust": 2100.0, "applesmc Fan 2": 1900.0}
        assert list(fans) == ["applesmc Exhaust", "applesmc Fan 2"]

    def test_no_fan_support_returns_empty(self) -> None:
        """Test platforms without sensors_fans report no fans."""
        mock = _mock_psutil()
        del mock.sensors_fans
        with patch("thermal_guard.sensors.platforms.base.psutil", mock):
            assert PsutilProbe().sample_fan_speeds() == {}

    def test_fan_read_failure_returns_empty(self) -> None:
        mock = _mock_psutil()
        mock.sensors_fans.side_effect = OSError("permission denied")
        with patch("thermal_guard.sensors.platforms.base.psutil", mock):
            assert PsutilProbe().sample_fan_speeds() == {}


@pytest.mark.integration
def test_psutil_probe_on_host() -> None:
    """Test the live probe against the real host."""
    probe = PsutilProbe(cpu_sample_seconds=0.0)
    metrics = probe.sample_cpu_and_memory_usage()
    assert 0.0 <= metrics.cpu_usage_pct <= 100.0
    assert 0.0 <= metrics.memory_usage_pct <= 100.0
    assert isinstance(probe.sample_fan_speeds(), dict)


class TestSimulatedProbe:
    """Demo probe random walk."""

    def test_satisfies_protocol(self) -> None:
        assert isinstance(SimulatedProbe(), HardwareProbe)

    def test_walk_stays_in_bounds(self) -> None:
        probe = SimulatedProbe(rng=random.Random(3))
        for _ in range(500):
            metrics = probe.sample_cpu_and_memory_usage()
            assert 5.0 <= metrics.cpu_usage_pct <= 95.0
            assert 20.0 <= metrics.memory_usage_pct <= 90.0
            fans = probe.sample_fan_speeds()
            assert set(fans) == {"Fan 1", "Fan 2"}
            assert all(800.0 <= speed <= 3500.0 for speed in fans.values())

    def test_first_step_starts_near_seed(self) -> None:
        metrics = SimulatedProbe(rng=random.Random(0)).sample_cpu_and_memory_usage()
        assert abs(metrics.cpu_usage_pct - 25.8) <= 5.0
        assert abs(metrics.memory_usage_pct - 67.2) <= 3.0

    def test_seeded_walk_is_reproducible(self) -> None:
        a = SimulatedProbe(rng=random.Random(21))
        b = SimulatedProbe(rng=random.Random(21))
        for _ in range(10):
            # Interleave fan reads differently; streams are independent
            b.sample_fan_speeds()
            assert a.sample_cpu_and_memory_usage() == b.sample_cpu_and_memory_usage()

    def test_fail_next(self) -> None:
        probe = SimulatedProbe(rng=random.Random(0))
        probe.fail_next(2)
        for _ in range(2):
            with pytest.raises(ProbeUnavailable):
                probe.sample_cpu_and_memory_usage()
        assert probe.sample_cpu_and_memory_usage().probe_succeeded is True

    def test_without_fans(self) -> None:
        assert SimulatedProbe(with_fans=False).sample_fan_speeds() == {}


class TestCreateProbe:
    """Probe selection by configuration."""

    def test_live(self) -> None:
        assert isinstance(create_probe("live"), PsutilProbe)

    def test_simulated_case_insensitive(self) -> None:
        assert isinstance(create_probe("Simulated"), SimulatedProbe)

    def test_unknown_mode(self) -> None:
        with pytest.raises(ValueError):
            create_probe("smc")
