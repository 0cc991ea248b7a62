"""Schema validation for docker sandbox settings inside a config document.

Walks ``agents.defaults.sandbox.docker`` and every per-agent override at
``agents.list[i].sandbox.docker``, validates the security-sensitive fields,
and reports every violation in one pass.
"""

import ipaddress
from collections.abc import Iterator, Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from sandbox_guard.config import GuardConfig
from sandbox_guard.schema.fields import CLOUD_METADATA_ADDRESSES
from sandbox_guard.schema.models import (
    DENIED_ADDRESSES_CONTEXT_KEY,
    SandboxDockerConfig,
    ValidationIssue,
    ValidationResult,
)
from sandbox_guard.utils.lexical import RejectionReason
from sandbox_guard.utils.logger import get_logger

logger = get_logger(__name__)

_REASONS_BY_VALUE = {reason.value: reason for reason in RejectionReason}


def _get_mapping(container: Mapping[str, Any], key: str) -> Mapping[str, Any] | None:
    value = container.get(key)
    return value if isinstance(value, Mapping) else None


def iter_docker_sections(raw: Any) -> Iterator[tuple[str, Any]]:
    """Yield (path, value) for every docker sandbox section in a config document.

    Sections that are absent, or whose parents are not mappings, are skipped;
    the shape of the rest of the document belongs to the config loader.

    Args:
        raw: Parsed configuration document

    Yields:
        Dotted path of the docker section and its raw value

    """
    if not isinstance(raw, Mapping):
        return
    agents = _get_mapping(raw, "agents")
    if agents is None:
        return

    defaults = _get_mapping(agents, "defaults")
    sandbox = _get_mapping(defaults, "sandbox") if defaults is not None else None
    if sandbox is not None and "docker" in sandbox:
        yield "agents.defaults.sandbox.docker", sandbox["docker"]

    agent_list = agents.get("list")
    if not isinstance(agent_list, list):
        return
    for index, agent in enumerate(agent_list):
        if not isinstance(agent, Mapping):
            continue
        sandbox = _get_mapping(agent, "sandbox")
        if sandbox is not None and "docker" in sandbox:
            yield f"agents.list.{index}.sandbox.docker", sandbox["docker"]


def _issues_from_pydantic(prefix: str, error: PydanticValidationError) -> list[ValidationIssue]:
    issues = []
    for detail in error.errors(include_url=False):
        location = ".".join(str(part) for part in detail["loc"])
        issues.append(
            ValidationIssue(
                path=f"{prefix}.{location}" if location else prefix,
                message=detail["msg"],
                reason=_REASONS_BY_VALUE.get(detail["type"], RejectionReason.WRONG_TYPE),
            )
        )
    return issues


def validate_docker_section(
    path: str,
    section: Any,
    denied_addresses: frozenset[ipaddress.IPv4Address | ipaddress.IPv6Address],
) -> list[ValidationIssue]:
    """Validate one docker sandbox section.

    Args:
        path: Dotted path of the section, used as the issue prefix
        section: Raw section value
        denied_addresses: Addresses extraHosts entries may never map to

    Returns:
        Every violation found in the section (empty if it is safe)

    """
    if not isinstance(section, Mapping):
        return [
            ValidationIssue(
                path=path,
                message="docker sandbox settings must be an object",
                reason=RejectionReason.WRONG_TYPE,
            )
        ]

    # Non-string keys can never name a judged field
    fields = {key: value for key, value in section.items() if isinstance(key, str)}
    try:
        SandboxDockerConfig.model_validate(
            fields,
            context={DENIED_ADDRESSES_CONTEXT_KEY: denied_addresses},
        )
    except PydanticValidationError as e:
        return _issues_from_pydantic(path, e)
    return []


def _denied_addresses(
    config: GuardConfig | None,
) -> frozenset[ipaddress.IPv4Address | ipaddress.IPv6Address]:
    if config is None or not config.denied_host_addresses:
        return CLOUD_METADATA_ADDRESSES
    extra = {ipaddress.ip_address(address) for address in config.denied_host_addresses}
    return CLOUD_METADATA_ADDRESSES | extra


def validate_config_object(raw: Any, config: GuardConfig | None = None) -> ValidationResult:
    """Validate every docker sandbox section of a configuration document.

    Fields that are absent are not defaulted or inferred. Violations are
    collected across all sections and fields, never only the first one.

    Args:
        raw: Parsed configuration document
        config: Optional guard configuration (extra denied host addresses)

    Returns:
        ValidationResult with one issue per violation

    """
    denied = _denied_addresses(config)
    errors: list[ValidationIssue] = []
    for path, section in iter_docker_sections(raw):
        errors.extend(validate_docker_section(path, section, denied))

    for issue in errors:
        logger.debug(f"Sandbox config violation at {issue.path}: {issue.reason.value}")
    if errors:
        logger.debug(f"Sandbox config rejected with {len(errors)} violation(s)")
    return ValidationResult(errors=errors)
