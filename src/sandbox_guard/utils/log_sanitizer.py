"""Log sanitization for rejected configuration values.

Rejected values are attacker-influenced by definition. Before they reach a
log sink they are truncated and have control characters escaped so a value
cannot forge extra log lines.
"""

from typing import Any

DEFAULT_MAX_STRING_LENGTH = 256  # characters shown per value
TRUNCATION_MARKER = "...<truncated>"


def _escape_control_chars(text: str) -> str:
    escaped = []
    for char in text:
        if char in ("\r", "\n", "\t"):
            escaped.append(char.encode("unicode_escape").decode("ascii"))
        elif ord(char) < 0x20 or ord(char) == 0x7F:
            escaped.append(f"\\x{ord(char):02x}")
        else:
            escaped.append(char)
    return "".join(escaped)


def sanitize_for_log(value: Any, max_length: int = DEFAULT_MAX_STRING_LENGTH) -> str:
    """Render a value for a log message.

    Args:
        value: Value to render (strings are quoted, other types use repr)
        max_length: Maximum number of characters kept from the value

    Returns:
        A single-line, length-bounded representation

    """
    text = value if isinstance(value, str) else repr(value)
    suffix = ""
    if len(text) > max_length:
        text = text[:max_length]
        suffix = TRUNCATION_MARKER
    if isinstance(value, str):
        return f"'{_escape_control_chars(text)}{suffix}'"
    return f"{_escape_control_chars(text)}{suffix}"
