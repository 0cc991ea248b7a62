"""Logging configuration using loguru."""

import sys
from pathlib import Path
from typing import Any

from loguru import logger

from sandbox_guard.config import GuardConfig

# Rotation policy for the optional log file sink
LOG_FILE_ROTATION = "10 MB"
LOG_FILE_RETENTION = "7 days"


def _sink_options(config: GuardConfig) -> dict[str, Any]:
    if config.json_logging:
        # Rejected values are already sanitized; keep frame locals out of JSON records
        return {"level": config.log_level, "serialize": True, "diagnose": False}
    return {"level": config.log_level, "format": config.log_format, "diagnose": True}


def setup_logger(config: GuardConfig, log_file: Path | None = None) -> None:
    """Configure loguru for sandbox-guard.

    Records go to stderr, as colored text or as JSON lines when
    ``config.json_logging`` is set. A log file, when given, receives the same
    records in the same shape and is rotated and compressed.

    Args:
        config: Guard configuration
        log_file: Optional path to an additional log file

    """
    logger.remove()

    options = _sink_options(config)
    logger.add(sys.stderr, colorize=not config.json_logging, backtrace=True, **options)
    if log_file is not None:
        logger.add(
            log_file,
            rotation=LOG_FILE_ROTATION,
            retention=LOG_FILE_RETENTION,
            compression="zip",
            backtrace=True,
            **options,
        )
        logger.debug(f"Logging to file: {log_file}")

    logger.debug(f"Logger initialized with level: {config.log_level}")


def get_logger(name: str | None = None) -> Any:  # noqa: ARG001
    """Return the shared loguru logger; ``name`` is accepted for call-site symmetry."""
    return logger
