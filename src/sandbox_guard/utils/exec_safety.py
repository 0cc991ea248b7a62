"""Safety classifiers for executable and filesystem path values.

These run before a configured value is substituted into a process-spawn
argument list. Both classifiers are pure: they never raise and never touch
the filesystem.
"""

import re

from sandbox_guard.utils.lexical import MAX_PATH_LENGTH, RejectionReason, screen_string
from sandbox_guard.utils.log_sanitizer import sanitize_for_log
from sandbox_guard.utils.logger import get_logger

logger = get_logger(__name__)

BARE_NAME_PATTERN = re.compile(r"^[A-Za-z0-9._+-]+\Z")
DRIVE_LETTER_PATTERN = re.compile(r"^[A-Za-z]:[\\/]")


def is_likely_path(value: str) -> bool:
    """Check if an executable reference is written as a path.

    Relative (./, ../), home-relative (~), anything with a separator, and
    Windows drive-letter paths (C:\\ or C:/) count as paths.

    Args:
        value: Trimmed executable reference

    Returns:
        True if the value should be treated as a path, False for a bare name

    """
    if value.startswith((".", "~")):
        return True
    if "/" in value or "\\" in value:
        return True
    return DRIVE_LETTER_PATTERN.match(value) is not None


def executable_rejection(value: str | None) -> RejectionReason | None:
    """Classify an executable value and report why it was rejected.

    Args:
        value: Executable path or bare command name

    Returns:
        The rejection reason, or None if the value is safe

    """
    reason = screen_string(value)
    if reason is not None:
        return reason

    trimmed = str(value).strip()

    # Paths may contain spaces and unicode that a bare name may not
    if is_likely_path(trimmed):
        return None
    if trimmed.startswith("-"):
        return RejectionReason.FLAG_INJECTION_SHAPE
    if BARE_NAME_PATTERN.match(trimmed) is None:
        return RejectionReason.MALFORMED_BARE_NAME
    return None


def path_rejection(value: str | None) -> RejectionReason | None:
    """Classify a filesystem path value and report why it was rejected.

    More permissive than executable_rejection: a leading dash is a valid
    literal path component and no bare-name alphabet applies.

    Args:
        value: Filesystem path

    Returns:
        The rejection reason, or None if the value is safe

    """
    return screen_string(value, max_length=MAX_PATH_LENGTH)


def is_safe_executable_value(value: str | None) -> bool:
    """Check if a value is safe to use as an executable.

    Args:
        value: Executable path or bare command name

    Returns:
        True if the value is safe, False otherwise

    """
    reason = executable_rejection(value)
    if reason is not None:
        logger.debug(f"Rejected executable value {sanitize_for_log(value)}: {reason.value}")
        return False
    return True


def is_safe_path_value(value: str | None) -> bool:
    """Check if a value is safe to use as a filesystem path.

    Args:
        value: Filesystem path

    Returns:
        True if the value is safe, False otherwise

    """
    reason = path_rejection(value)
    if reason is not None:
        logger.debug(f"Rejected path value {sanitize_for_log(value)}: {reason.value}")
        return False
    return True
