"""Monitor configuration settings.

This module provides the MonitorConfig class and settings singleton.
"""

from pathlib import Path

import structlog
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from thermal_guard.config.env_loader import Environment, get_environment, load_env_files
from thermal_guard.config.validators import (
    resolve_path,
    validate_log_format,
    validate_log_level,
    validate_probe_mode,
)

log = structlog.get_logger(__name__)


class MonitorConfig(BaseSettings):
    """Unified monitor configuration.

    Loads configuration from environment variables, .env files, and defaults.
    Validates all values using Pydantic.
    """

    model_config = SettingsConfigDict(
        # .env files are loaded manually via env_loader so that
        # environment-specific files can take priority
        env_prefix="THERMAL_",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Environment
    environment: Environment = Field(
        default_factory=get_environment, description="Current environment"
    )
    debug: bool = Field(default=False, description="Debug mode flag")

    # Telemetry
    log_dir: Path = Field(default=Path("telemetry/logs"), description="Log directory path")
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_format: str = Field(
        default="console", description="Console log format (json or console)"
    )

    # Sampling
    probe_mode: str = Field(
        default="live",
        description="Hardware probe to use: 'live' (psutil) or 'simulated' (demo data)",
    )
    live_interval_seconds: float = Field(
        default=2.0, gt=0, description="Tick interval when sampling the live probe"
    )
    simulated_interval_seconds: float = Field(
        default=1.0, gt=0, description="Tick interval when sampling the simulated probe"
    )
    probe_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Probe call timeout; defaults to one tick interval when unset",
    )
    random_seed: int | None = Field(
        default=None, description="Seed for sensor jitter (unset = nondeterministic)"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        return validate_log_level(v)

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format."""
        return validate_log_format(v)

    @field_validator("probe_mode")
    @classmethod
    def validate_probe_mode(cls, v: str) -> str:
        """Validate probe mode."""
        return validate_probe_mode(v)

    @field_validator("log_dir", mode="before")
    @classmethod
    def resolve_paths(cls, v: Path | str) -> Path:
        """Resolve relative paths to absolute."""
        return resolve_path(v)

    def interval_for(self, probe_mode: str | None = None) -> float:
        """Return the tick cadence for a probe mode.

        Args:
            probe_mode: 'live' or 'simulated'. Defaults to the configured mode.

        Returns:
            Interval in seconds.
        """
        mode = validate_probe_mode(probe_mode or self.probe_mode)
        if mode == "simulated":
            return self.simulated_interval_seconds
        return self.live_interval_seconds


_settings: MonitorConfig | None = None


def load_monitor_config() -> MonitorConfig:
    """Load and validate monitor configuration.

    This function:
    1. Loads .env files in priority order (via env_loader)
    2. Creates MonitorConfig instance (reads from environment variables)
    3. Validates all values using Pydantic

    Returns:
        Validated MonitorConfig instance.

    Raises:
        ValidationError: If configuration validation fails.
    """
    log.info("loading_monitor_config", environment=get_environment().value)

    load_env_files()

    try:
        config = MonitorConfig()
        log.info(
            "monitor_config_loaded",
            environment=config.environment.value,
            probe_mode=config.probe_mode,
            interval_seconds=config.interval_for(),
            log_level=config.log_level,
        )
        return config
    except Exception as e:
        log.error("monitor_config_load_failed", error=str(e), error_type=type(e).__name__)
        raise


def get_settings() -> MonitorConfig:
    """Get the monitor settings singleton.

    Returns:
        MonitorConfig instance (singleton pattern).
    """
    global _settings
    if _settings is None:
        _settings = load_monitor_config()
    return _settings
