"""Shared lexical screens for sandbox configuration values.

All checks are plain character-class tests; none of them backtrack.
"""

import re
from enum import Enum

# Input size limits
MAX_PATH_LENGTH = 4096  # 4 KB - maximum file path length

SHELL_METACHARS_PATTERN = re.compile(r"[;&|`$<>]")  # chaining, pipes, substitution, redirects
CONTROL_CHARS_PATTERN = re.compile(r"[\r\n]")
QUOTE_CHARS_PATTERN = re.compile(r"[\"']")
NULL_BYTE = "\0"


class RejectionReason(str, Enum):
    """Why a value was rejected."""

    EMPTY_OR_ABSENT = "empty_or_absent"
    CONTAINS_NULL_BYTE = "contains_null_byte"
    CONTAINS_CONTROL_CHARACTER = "contains_control_character"
    CONTAINS_SHELL_METACHARACTER = "contains_shell_metacharacter"
    CONTAINS_QUOTE = "contains_quote"
    FLAG_INJECTION_SHAPE = "flag_injection_shape"
    MALFORMED_BARE_NAME = "malformed_bare_name"
    OVER_LENGTH = "over_length"
    NON_ABSOLUTE_PATH = "non_absolute_path"
    DISALLOWED_MOUNT_OPTION = "disallowed_mount_option"
    MALFORMED_HOST_ENTRY = "malformed_host_entry"
    DISALLOWED_METADATA_ADDRESS = "disallowed_metadata_address"
    PRIVILEGED_IDENTITY = "privileged_identity"
    MALFORMED_USER = "malformed_user"
    WRONG_TYPE = "wrong_type"


REASON_MESSAGES = {
    RejectionReason.EMPTY_OR_ABSENT: "value is empty",
    RejectionReason.CONTAINS_NULL_BYTE: "value contains a null byte",
    RejectionReason.CONTAINS_CONTROL_CHARACTER: "value contains a line break",
    RejectionReason.CONTAINS_SHELL_METACHARACTER: (
        "value contains a shell metacharacter (one of ; & | ` $ < >)"
    ),
    RejectionReason.CONTAINS_QUOTE: "value contains a quote character",
    RejectionReason.FLAG_INJECTION_SHAPE: "bare executable name cannot start with '-'",
    RejectionReason.MALFORMED_BARE_NAME: (
        "bare executable name may only contain letters, digits, '.', '_', '+' and '-'"
    ),
    RejectionReason.OVER_LENGTH: f"value exceeds {MAX_PATH_LENGTH} characters",
    RejectionReason.WRONG_TYPE: "value must be a string",
}


def is_empty(value: str | None) -> bool:
    """Return True for None, the empty string and whitespace-only strings."""
    return not value or not value.strip()


def has_null_byte(value: str) -> bool:
    return NULL_BYTE in value


def has_control_chars(value: str) -> bool:
    return CONTROL_CHARS_PATTERN.search(value) is not None


def has_shell_metachars(value: str) -> bool:
    return SHELL_METACHARS_PATTERN.search(value) is not None


def has_quotes(value: str) -> bool:
    return QUOTE_CHARS_PATTERN.search(value) is not None


def screen_string(
    value: str | None,
    *,
    check_quotes: bool = True,
    max_length: int | None = None,
) -> RejectionReason | None:
    """Run the common screens over a candidate value.

    Order: emptiness, length, null byte, line breaks, shell metacharacters,
    quotes. The first failing screen wins. Length is measured on the trimmed
    value; the character screens look at the raw value since trimming would
    drop trailing line breaks.

    Args:
        value: Candidate value (None counts as absent)
        check_quotes: Whether quote characters are rejected
        max_length: Maximum trimmed length, or None for no limit

    Returns:
        The rejection reason, or None if the value passed every screen

    """
    if value is None:
        return RejectionReason.EMPTY_OR_ABSENT
    if not isinstance(value, str):
        return RejectionReason.WRONG_TYPE
    if is_empty(value):
        return RejectionReason.EMPTY_OR_ABSENT

    if max_length is not None and len(value.strip()) > max_length:
        return RejectionReason.OVER_LENGTH
    if has_null_byte(value):
        return RejectionReason.CONTAINS_NULL_BYTE
    if has_control_chars(value):
        return RejectionReason.CONTAINS_CONTROL_CHARACTER
    if has_shell_metachars(value):
        return RejectionReason.CONTAINS_SHELL_METACHARACTER
    if check_quotes and has_quotes(value):
        return RejectionReason.CONTAINS_QUOTE
    return None


def describe(reason: RejectionReason) -> str:
    """Human-readable text for a lexical rejection reason."""
    return REASON_MESSAGES.get(reason, reason.value.replace("_", " "))
