"""HardwareProbe implementations.

- `base.py`: live probe using psutil (CPU, memory, fans where exposed)
- `simulated.py`: bounded random walk for demos and previews

Callers pick one through configuration with ``create_probe``; nothing
downstream branches on which probe is running.
"""

import random

from thermal_guard.config.validators import validate_probe_mode
from thermal_guard.sensors.platforms.base import PsutilProbe
from thermal_guard.sensors.platforms.simulated import SimulatedProbe
from thermal_guard.sensors.probe import HardwareProbe


def create_probe(probe_mode: str, rng: random.Random | None = None) -> HardwareProbe:
    """Build the probe for a configured mode.

    Args:
        probe_mode: 'live' or 'simulated'.
        rng: Random source for the simulated probe.

    Returns:
        A HardwareProbe.

    Raises:
        ValueError: If probe_mode is unknown.
    """
    if validate_probe_mode(probe_mode) == "simulated":
        return SimulatedProbe(rng=rng)
    return PsutilProbe()


__all__ = ["PsutilProbe", "SimulatedProbe", "create_probe"]
