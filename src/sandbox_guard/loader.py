"""Loading configuration documents and enforcing sandbox validation on them."""

import json
from pathlib import Path
from typing import Any

import yaml

from sandbox_guard.config import GuardConfig
from sandbox_guard.schema import ValidationResult, validate_config_object
from sandbox_guard.utils.errors import ConfigLoadError, UnsafeConfigError
from sandbox_guard.utils.logger import get_logger

logger = get_logger(__name__)

JSON_EXTENSIONS = {".json"}
YAML_EXTENSIONS = {".yml", ".yaml"}


def load_config_file(file_path: str | Path) -> dict[str, Any]:
    """Read a JSON or YAML configuration document.

    Args:
        file_path: Path to the document

    Returns:
        Parsed document

    Raises:
        ConfigLoadError: If the file is missing, unreadable, unparsable, or
            its top level is not a mapping

    """
    path = Path(file_path)
    suffix = path.suffix.lower()
    if suffix not in JSON_EXTENSIONS | YAML_EXTENSIONS:
        raise ConfigLoadError(
            f"Invalid config file extension: {path.suffix or '(none)'}. "
            f"Expected one of: {', '.join(sorted(JSON_EXTENSIONS | YAML_EXTENSIONS))}"
        )

    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ConfigLoadError(f"Config file not found: {file_path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigLoadError(f"Failed to read config file {file_path}: {e}") from e

    try:
        data = json.loads(text) if suffix in JSON_EXTENSIONS else yaml.safe_load(text)
    except json.JSONDecodeError as e:
        raise ConfigLoadError(f"Invalid JSON in config file: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigLoadError(f"Invalid YAML in config file: {e}") from e

    if not isinstance(data, dict):
        raise ConfigLoadError(
            f"Config file must contain a mapping at the top level, got: {type(data).__name__}"
        )

    logger.debug(f"Loaded config file: {path}")
    return data


def check_config_file(
    file_path: str | Path,
    config: GuardConfig | None = None,
) -> ValidationResult:
    """Load a configuration document and validate its sandbox settings.

    Raises:
        ConfigLoadError: If the document cannot be loaded

    """
    return validate_config_object(load_config_file(file_path), config)


def enforce_safe_config(raw: Any, config: GuardConfig | None = None) -> ValidationResult:
    """Validate a configuration document and refuse it if anything is unsafe.

    Args:
        raw: Parsed configuration document
        config: Optional guard configuration

    Returns:
        The (passing) validation result

    Raises:
        UnsafeConfigError: If any violation was found; the exception carries
            the full result

    """
    result = validate_config_object(raw, config)
    if not result.ok:
        for issue in result.errors:
            logger.warning(f"Unsafe sandbox setting at {issue.path}: {issue.message}")
        raise UnsafeConfigError(
            f"Sandbox configuration has {len(result.errors)} unsafe setting(s)",
            result,
        )
    return result
