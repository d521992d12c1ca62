"""Structured logging configuration using structlog.

This module configures structlog for structured logging with:
- JSON formatter for file output
- Pretty-printed (or JSON) console output
- UTC timestamps
- File rotation for log management
- Component and event tracking
"""

import logging
import logging.handlers
import pathlib
import sys
from datetime import datetime, timezone
from typing import Any

import structlog


def _get_log_level() -> str:
    """Get log level from configuration.

    Returns:
        Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    # Bootstrap from environment to avoid circular imports during startup.
    from thermal_guard.config.bootstrap import get_bootstrap_log_level  # noqa: PLC0415

    return get_bootstrap_log_level()


def _get_log_format() -> str:
    """Get console log format from configuration.

    Returns:
        'json' or 'console'.
    """
    from thermal_guard.config.bootstrap import get_bootstrap_log_format  # noqa: PLC0415

    return get_bootstrap_log_format()


def _get_log_dir() -> pathlib.Path:
    """Get log directory path.

    Returns:
        Path to telemetry/logs directory.
    """
    try:
        from thermal_guard.config.settings import get_settings  # noqa: PLC0415

        return pathlib.Path(str(get_settings().log_dir))
    except Exception:
        # Settings still initializing (logging is configured lazily on first
        # get_logger call, which can happen while config is importing)
        project_root = pathlib.Path(__file__).parent.parent.parent.parent
        return project_root / "telemetry" / "logs"


def _add_timestamp(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add UTC timestamp to log event.

    Args:
        logger: The logger instance.
        method_name: The log method name (info, error, etc.).
        event_dict: The event dictionary.

    Returns:
        Event dictionary with timestamp added.
    """
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def _add_component(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add component name to a foreign (stdlib) log event.

    Args:
        logger: The logger instance.
        method_name: The log method name (info, error, etc.).
        event_dict: The event dictionary.

    Returns:
        Event dictionary with component added.
    """
    # ProcessorFormatter passes no logger for foreign records; add_logger_name
    # has already put the record's name in the event dict.
    logger_name = getattr(logger, "name", None) or event_dict.get("logger")
    if not logger_name:
        event_dict["component"] = "unknown"
        return event_dict

    event_dict["component"] = logger_name.split(".")[-1]
    return event_dict


def _add_component_from_event_dict(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add component name to log event from event_dict logger name.

    Runs after structlog's add_logger_name processor, so the dotted logger
    name is already in the event dict.

    Args:
        logger: The structlog logger instance.
        method_name: The log method name (info, error, etc.).
        event_dict: The event dictionary.

    Returns:
        Event dictionary with component added.
    """
    logger_name = event_dict.get("logger", "")
    # Explicit component=... passed by the caller wins
    if "component" not in event_dict:
        event_dict["component"] = logger_name.split(".")[-1] if logger_name else "unknown"
    return event_dict


def _foreign_pre_chain() -> list[Any]:
    return [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        _add_timestamp,
        _add_component,
    ]


def _configure_file_handler(log_dir: pathlib.Path) -> logging.handlers.RotatingFileHandler:
    """Configure rotating file handler for JSON logs.

    Args:
        log_dir: Directory for log files.

    Returns:
        Configured RotatingFileHandler.
    """
    log_dir.mkdir(parents=True, exist_ok=True)

    log_file = log_dir / "current.jsonl"
    handler = logging.handlers.RotatingFileHandler(
        filename=str(log_file),
        maxBytes=20 * 1024 * 1024,  # 20 MB
        backupCount=5,
        encoding="utf-8",
    )
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.processors.JSONRenderer(),
            foreign_pre_chain=_foreign_pre_chain(),
        )
    )
    return handler


def _configure_console_handler(log_format: str) -> logging.StreamHandler[Any]:
    """Configure console handler.

    Args:
        log_format: 'console' for pretty-printed output, 'json' for JSON lines.

    Returns:
        Configured StreamHandler.
    """
    handler = logging.StreamHandler(sys.stderr)

    renderer: Any
    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=_foreign_pre_chain(),
        )
    )
    return handler


def configure_logging() -> None:
    """Configure structlog for structured logging.

    This function should be called once at application startup to set up
    structured logging with JSON file output and console output. It is also
    called lazily by get_logger() when nothing has configured structlog yet.
    """
    log_level = _get_log_level()
    log_format = _get_log_format()
    log_dir = _get_log_dir()

    # Root logger accepts all levels; individual handlers gate output.
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()

    configured_level = getattr(logging, log_level, logging.INFO)

    # File handler captures INFO+ regardless of user config
    file_handler = _configure_file_handler(log_dir)
    file_handler.setLevel(min(logging.INFO, configured_level))
    root_logger.addHandler(file_handler)

    console_handler = _configure_console_handler(log_format)
    console_handler.setLevel(configured_level)
    root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            _add_component_from_event_dict,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> Any:  # Returns structlog.stdlib.BoundLogger
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__ of the calling module).

    Returns:
        Configured structlog logger instance.

    Example:
        >>> from thermal_guard.telemetry import get_logger
        >>> log = get_logger(__name__)
        >>> log.info("snapshot_published", sequence=3)
    """
    # Ensure logging is configured (idempotent)
    if not structlog.is_configured():
        configure_logging()

    return structlog.get_logger(name)
