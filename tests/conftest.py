"""Pytest configuration and shared fixtures."""

from collections.abc import Generator

import pytest
from loguru import logger

from sandbox_guard.config import GuardConfig


@pytest.fixture
def guard_config() -> GuardConfig:
    """Create a test configuration with verbose logging."""
    return GuardConfig(log_level="DEBUG", log_format="{level} - {message}")


@pytest.fixture(autouse=True)
def _reset_logger() -> Generator[None, None, None]:
    """Drop any sinks a test installed so log files are closed between tests."""
    yield
    logger.remove()
