"""Field rules for docker sandbox settings.

Each structured field (user, tmpfs, extraHosts) is parsed into either a
``Parsed*`` value or a ``Malformed`` value carrying the rejection reason.
The schema models reduce these to validation issues.
"""

import ipaddress
import re
from collections.abc import Iterable
from dataclasses import dataclass

from sandbox_guard.utils.lexical import (
    MAX_PATH_LENGTH,
    RejectionReason,
    describe,
    screen_string,
)

# Cloud instance metadata endpoints reachable from inside a container
CLOUD_METADATA_ADDRESSES = frozenset(
    {
        ipaddress.ip_address("169.254.169.254"),  # AWS, GCP, Azure, OpenStack, DigitalOcean
        ipaddress.ip_address("fd00:ec2::254"),  # AWS IMDS over IPv6
        ipaddress.ip_address("100.100.100.200"),  # Alibaba Cloud
    }
)

# tmpfs mount options that only narrow what the mount permits
SAFE_TMPFS_FLAGS = frozenset({"ro", "rw", "noexec", "nosuid", "nodev", "noatime"})
SAFE_TMPFS_OPTION_PATTERNS = (
    re.compile(r"^size=[0-9]+[kKmMgG%]?\Z"),
    re.compile(r"^nr_inodes=[0-9]+[kKmMgG]?\Z"),
    re.compile(r"^mode=[0-7]{3,4}\Z"),
    re.compile(r"^uid=[0-9]+\Z"),
    re.compile(r"^gid=[0-9]+\Z"),
)

USER_COMPONENT_PATTERN = re.compile(r"^[A-Za-z0-9_.][A-Za-z0-9_.-]*\Z")
NUMERIC_ID_PATTERN = re.compile(r"^[0-9]+\Z")
HOSTNAME_LABEL = r"[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"
HOSTNAME_PATTERN = re.compile(rf"^{HOSTNAME_LABEL}(?:\.{HOSTNAME_LABEL})*\Z")
MAX_HOSTNAME_LENGTH = 253
PRIVILEGED_USER_NAME = "root"


@dataclass(frozen=True)
class Malformed:
    """A value that failed its field rule."""

    reason: RejectionReason
    message: str


@dataclass(frozen=True)
class ParsedUser:
    identity: str
    group: str | None = None


@dataclass(frozen=True)
class ParsedTmpfs:
    path: str
    options: tuple[str, ...] = ()


@dataclass(frozen=True)
class ParsedHost:
    hostname: str
    address: ipaddress.IPv4Address | ipaddress.IPv6Address


def _lexical_failure(reason: RejectionReason | None, field: str) -> Malformed | None:
    if reason is None:
        return None
    return Malformed(reason, f"{field}: {describe(reason)}")


def check_image(value: str) -> Malformed | None:
    """Screen a docker image reference for injection characters."""
    return _lexical_failure(screen_string(value, check_quotes=False), "image")


def check_workdir(value: str) -> Malformed | None:
    """Screen a container working directory for injection characters."""
    return _lexical_failure(screen_string(value, check_quotes=False), "workdir")


def parse_user(value: str) -> ParsedUser | Malformed:
    """Parse a container user spec (name, uid, name:group or uid:gid).

    The identity part may never be the root user, by name or by uid 0.

    Args:
        value: User spec from the sandbox settings

    Returns:
        ParsedUser on success, Malformed otherwise

    """
    failure = _lexical_failure(screen_string(value), "user")
    if failure is not None:
        return failure

    parts = value.strip().split(":")
    if len(parts) > 2 or not all(USER_COMPONENT_PATTERN.match(part) for part in parts):
        return Malformed(
            RejectionReason.MALFORMED_USER,
            "user must be <name|uid> or <name|uid>:<group|gid>",
        )

    identity = parts[0]
    if identity.lower() == PRIVILEGED_USER_NAME or (
        NUMERIC_ID_PATTERN.match(identity) and not identity.strip("0")
    ):
        return Malformed(
            RejectionReason.PRIVILEGED_IDENTITY,
            "sandbox containers cannot run as root (user 'root' or uid 0)",
        )

    return ParsedUser(identity=identity, group=parts[1] if len(parts) == 2 else None)


def _is_safe_tmpfs_option(option: str) -> bool:
    if option in SAFE_TMPFS_FLAGS:
        return True
    return any(pattern.match(option) for pattern in SAFE_TMPFS_OPTION_PATTERNS)


def parse_tmpfs_entry(value: str) -> ParsedTmpfs | Malformed:
    """Parse a tmpfs mount spec of the form <absolute-path>[:<options>].

    Args:
        value: tmpfs entry from the sandbox settings

    Returns:
        ParsedTmpfs on success, Malformed otherwise

    """
    failure = _lexical_failure(screen_string(value, max_length=MAX_PATH_LENGTH), "tmpfs")
    if failure is not None:
        return failure

    path, separator, raw_options = value.strip().partition(":")
    if not path.startswith("/"):
        return Malformed(
            RejectionReason.NON_ABSOLUTE_PATH,
            "tmpfs mount path must be absolute (start with '/')",
        )

    if not separator:
        return ParsedTmpfs(path=path)

    options = tuple(raw_options.split(","))
    for option in options:
        if not _is_safe_tmpfs_option(option):
            return Malformed(
                RejectionReason.DISALLOWED_MOUNT_OPTION,
                f"tmpfs option {option!r} is not allowed. Allowed: "
                f"{', '.join(sorted(SAFE_TMPFS_FLAGS))}, size=, nr_inodes=, mode=, uid=, gid=",
            )
    return ParsedTmpfs(path=path, options=options)


def _parse_address(text: str) -> ipaddress.IPv4Address | ipaddress.IPv6Address | None:
    # Scoped literals (fe80::1%eth0) never compare equal to their unscoped form
    if "%" in text:
        return None
    if text.startswith("[") and text.endswith("]"):
        text = text[1:-1]
    try:
        return ipaddress.ip_address(text)
    except ValueError:
        return None


def is_denied_address(
    address: ipaddress.IPv4Address | ipaddress.IPv6Address,
    denied: Iterable[ipaddress.IPv4Address | ipaddress.IPv6Address] = CLOUD_METADATA_ADDRESSES,
) -> bool:
    """Check an address against the denylist, including IPv4-mapped IPv6 forms."""
    denied_set = set(denied)
    if address in denied_set:
        return True
    mapped = getattr(address, "ipv4_mapped", None)
    return mapped is not None and mapped in denied_set


def parse_extra_host(
    value: str,
    denied: Iterable[ipaddress.IPv4Address | ipaddress.IPv6Address] = CLOUD_METADATA_ADDRESSES,
) -> ParsedHost | Malformed:
    """Parse an extra host mapping of the form <hostname>:<ip>.

    The address is matched literally against the denylist; the hostname is
    never resolved.

    Args:
        value: extraHosts entry from the sandbox settings
        denied: Addresses a host may never map to

    Returns:
        ParsedHost on success, Malformed otherwise

    """
    failure = _lexical_failure(screen_string(value), "extraHosts")
    if failure is not None:
        return failure

    hostname, separator, address_text = value.strip().partition(":")
    address = _parse_address(address_text) if separator else None
    if (
        address is None
        or len(hostname) > MAX_HOSTNAME_LENGTH
        or HOSTNAME_PATTERN.match(hostname) is None
    ):
        return Malformed(
            RejectionReason.MALFORMED_HOST_ENTRY,
            "extraHosts entry must be <hostname>:<ipv4-or-ipv6-address>",
        )

    if is_denied_address(address, denied):
        return Malformed(
            RejectionReason.DISALLOWED_METADATA_ADDRESS,
            f"extraHosts entry maps to blocked metadata address {address}",
        )

    return ParsedHost(hostname=hostname, address=address)
