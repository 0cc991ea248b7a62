"""Utility modules for sandbox-guard."""

from sandbox_guard.utils.errors import ConfigLoadError, SandboxGuardError, UnsafeConfigError
from sandbox_guard.utils.exec_safety import is_safe_executable_value, is_safe_path_value
from sandbox_guard.utils.lexical import RejectionReason
from sandbox_guard.utils.logger import setup_logger

__all__ = [
    "ConfigLoadError",
    "RejectionReason",
    "SandboxGuardError",
    "UnsafeConfigError",
    "is_safe_executable_value",
    "is_safe_path_value",
    "setup_logger",
]
