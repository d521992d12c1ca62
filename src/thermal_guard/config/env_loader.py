"""Environment variable file loader with priority-based loading.

Environment-specific .env files are layered so that local overrides win over
shared defaults, and explicit process environment variables win over all files.
"""

from enum import Enum
from pathlib import Path

from dotenv import load_dotenv

from thermal_guard.telemetry import get_logger

log = get_logger(__name__)


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TEST = "test"


def get_environment() -> Environment:
    """Detect current environment from THERMAL_ENV environment variable.

    Returns:
        Environment enum value.

    Environment variable mapping:
    - "production" or "prod" → Environment.PRODUCTION
    - "staging" or "stage" → Environment.STAGING
    - "test" → Environment.TEST
    - Default → Environment.DEVELOPMENT

    Note: This function uses os.getenv() directly because environment
    detection must happen before settings are loaded.
    """
    import os  # noqa: PLC0415

    app_env = os.getenv("THERMAL_ENV", "").lower()

    if app_env in ("production", "prod"):
        return Environment.PRODUCTION
    elif app_env in ("staging", "stage"):
        return Environment.STAGING
    elif app_env == "test":
        return Environment.TEST
    else:
        return Environment.DEVELOPMENT


def load_env_files(project_root: Path | None = None) -> list[str]:
    """Load .env files in priority order.

    Priority order (highest to lowest):
    1. `.env.{environment}.local`
    2. `.env.{environment}`
    3. `.env.local`
    4. `.env`

    Args:
        project_root: Path to project root. If None, detects from current file location.

    Returns:
        Loaded file names, relative to the project root.
    """
    if project_root is None:
        # src/thermal_guard/config -> project root
        project_root = Path(__file__).parent.parent.parent.parent

    env_name = get_environment().value

    env_files = [
        project_root / f".env.{env_name}.local",
        project_root / f".env.{env_name}",
        project_root / ".env.local",
        project_root / ".env",
    ]

    loaded_files = []
    for env_file in env_files:
        if env_file.exists():
            # override=False: a value set by a higher-priority file (or the
            # process environment) is never replaced by a lower one.
            load_dotenv(env_file, override=False)
            loaded_files.append(str(env_file.relative_to(project_root)))

    if loaded_files:
        log.info(
            "env_files_loaded",
            environment=env_name,
            files=loaded_files,
            project_root=str(project_root),
        )
    else:
        log.debug(
            "no_env_files_found",
            environment=env_name,
            project_root=str(project_root),
        )
    return loaded_files
