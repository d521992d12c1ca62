"""Configuration management for the thermal monitor.

Settings come from environment variables (``THERMAL_`` prefix), layered
.env files and defaults, validated by Pydantic.
"""

from thermal_guard.config.env_loader import Environment, get_environment, load_env_files
from thermal_guard.config.settings import MonitorConfig, get_settings, load_monitor_config

# Singleton instance
settings = get_settings()

__all__ = [
    "settings",
    "MonitorConfig",
    "get_settings",
    "load_monitor_config",
    "Environment",
    "get_environment",
    "load_env_files",
]
