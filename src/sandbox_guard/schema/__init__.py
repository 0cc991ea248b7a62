"""Schema validation for docker sandbox settings.

This package locates the docker sandbox sections of a configuration document
and applies the field rules for image, workdir, user, tmpfs and extraHosts.
"""

from sandbox_guard.schema.models import SandboxDockerConfig, ValidationIssue, ValidationResult
from sandbox_guard.schema.validator import validate_config_object

__all__ = [
    "SandboxDockerConfig",
    "ValidationIssue",
    "ValidationResult",
    "validate_config_object",
]
