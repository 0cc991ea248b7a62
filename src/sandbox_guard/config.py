"""Configuration management for sandbox-guard."""

import ipaddress
import json

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def split_address_entries(value: str | list[str] | None) -> list[str]:
    """Split a denied address setting into trimmed, non-empty entries.

    The environment form is either a JSON array or a comma-separated string.
    A string that looks like a JSON array but does not parse is an error,
    since a bare IP address never starts with '['.
    """
    if value is None:
        return []
    if isinstance(value, str):
        text = value.strip()
        if text.startswith("["):
            try:
                value = json.loads(text)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid denied host address list: {text}") from e
        else:
            value = text.split(",")
    entries = (str(item).strip() for item in value)
    return [entry for entry in entries if entry]


class GuardConfig(BaseSettings):
    """Sandbox validation and logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SANDBOX_GUARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Note: Using str | list[str] type to prevent Pydantic Settings from trying JSON parsing
    # on empty strings, which causes errors. The validator handles conversion to list[str].
    denied_host_addresses: str | list[str] = Field(
        default=[],
        description=(
            "Additional IP addresses that extraHosts entries may never map to. "
            "Always added to the built-in cloud metadata denylist, never replacing it. "
            "Can be set via SANDBOX_GUARD_DENIED_HOST_ADDRESSES as comma-separated string."
        ),
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_format: str = Field(
        default=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        description="Log format string for loguru",
    )
    json_logging: bool = Field(
        default=False,
        description="Enable JSON structured logging (for SIEM/production)",
    )

    @field_validator("denied_host_addresses", mode="before")
    @classmethod
    def parse_address_list(cls, value: str | list[str] | None) -> list[str]:
        """Parse and validate the extra denied address list.

        Args:
            value: Addresses as comma-separated string, JSON array, list, or None

        Returns:
            Normalized list of addresses in canonical form

        Raises:
            ValueError: If any entry is not an unscoped IPv4 or IPv6 address
        """
        addresses = []
        for item in split_address_entries(value):
            if "%" in item:
                raise ValueError(f"Invalid denied host address (zone id not allowed): {item}")
            try:
                addresses.append(str(ipaddress.ip_address(item)))
            except ValueError as e:
                raise ValueError(f"Invalid denied host address: {item}") from e
        return addresses

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, level: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        level_upper = level.upper()
        if level_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {level}. Must be one of {valid_levels}")
        return level_upper
