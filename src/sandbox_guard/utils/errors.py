"""Custom exceptions for sandbox-guard.

The validation engine itself never raises for bad input; these exceptions are
only used at the edges (file loading, enforcement, settings).
"""

from typing import Any


class SandboxGuardError(Exception):
    """Base exception for all sandbox-guard errors."""


class ConfigLoadError(SandboxGuardError):
    """Raised when a configuration document cannot be read or parsed."""


class UnsafeConfigError(SandboxGuardError):
    """Raised when a configuration document fails sandbox validation.

    Carries the full validation result so callers can report every issue.
    """

    def __init__(self, message: str, result: Any) -> None:
        super().__init__(message)
        self.result = result
