"""Tests for severity bands."""

import pytest

from thermal_guard.sensors.thresholds import (
    Severity,
    classify_fan_speed,
    classify_temperature,
    classify_usage,
)


@pytest.mark.parametrize(
    ("celsius", "expected"),
    [
        (45.0, Severity.NORMAL),
        (60.0, Severity.NORMAL),
        (60.1, Severity.WARM),
        (70.5, Severity.HOT),
        (80.0, Severity.HOT),
        (95.0, Severity.CRITICAL),
    ],
)
def test_classify_temperature(celsius: float, expected: Severity) -> None:
    assert classify_temperature(celsius) == expected


@pytest.mark.parametrize(
    ("percent", "expected"),
    [
        (10.0, Severity.NORMAL),
        (75.0, Severity.WARM),
        (85.0, Severity.HOT),
        (99.0, Severity.CRITICAL),
    ],
)
def test_classify_usage(percent: float, expected: Severity) -> None:
    assert classify_usage(percent) == expected


@pytest.mark.parametrize(
    ("rpm", "expected"),
    [
        (1800.0, Severity.NORMAL),
        (2500.0, Severity.WARM),
        (3500.0, Severity.HOT),
        (4500.0, Severity.CRITICAL),
    ],
)
def test_classify_fan_speed(rpm: float, expected: Severity) -> None:
    assert classify_fan_speed(rpm) == expected


def test_severity_rank_orders_levels() -> None:
    ranks = [s.rank for s in (Severity.NORMAL, Severity.WARM, Severity.HOT, Severity.CRITICAL)]
    assert ranks == sorted(ranks)
    assert len(set(ranks)) == 4
