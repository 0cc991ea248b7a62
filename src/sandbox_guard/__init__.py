"""Input validation for sandboxed command execution.

Classifies executable names, filesystem paths and docker sandbox settings
before they are used to launch or configure a process.
"""

from sandbox_guard.schema import ValidationIssue, ValidationResult, validate_config_object
from sandbox_guard.utils.exec_safety import is_safe_executable_value, is_safe_path_value
from sandbox_guard.utils.lexical import RejectionReason
from sandbox_guard.version import __version__

__all__ = [
    "RejectionReason",
    "ValidationIssue",
    "ValidationResult",
    "__version__",
    "is_safe_executable_value",
    "is_safe_path_value",
    "validate_config_object",
]
