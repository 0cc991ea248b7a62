"""Pydantic models for docker sandbox settings and validation results."""

from typing import Annotated, Any, NoReturn

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    computed_field,
    field_validator,
)
from pydantic_core import PydanticCustomError

from sandbox_guard.schema.fields import (
    CLOUD_METADATA_ADDRESSES,
    Malformed,
    check_image,
    check_workdir,
    parse_extra_host,
    parse_tmpfs_entry,
    parse_user,
)
from sandbox_guard.utils.lexical import RejectionReason

DENIED_ADDRESSES_CONTEXT_KEY = "denied_addresses"


def _raise_malformed(result: Malformed) -> NoReturn:
    # The error type carries the rejection reason so callers can map it back
    raise PydanticCustomError(result.reason.value, result.message)


def _check_tmpfs_entry(value: str) -> str:
    result = parse_tmpfs_entry(value)
    if isinstance(result, Malformed):
        _raise_malformed(result)
    return value


def _check_extra_host(value: str, info: ValidationInfo) -> str:
    denied = CLOUD_METADATA_ADDRESSES
    if info.context:
        denied = info.context.get(DENIED_ADDRESSES_CONTEXT_KEY, denied)
    result = parse_extra_host(value, denied)
    if isinstance(result, Malformed):
        _raise_malformed(result)
    return value


TmpfsEntry = Annotated[str, AfterValidator(_check_tmpfs_entry)]
ExtraHostEntry = Annotated[str, AfterValidator(_check_extra_host)]


class SandboxDockerConfig(BaseModel):
    """Security-sensitive subset of an agent's docker sandbox settings.

    Only the fields below are judged. Other docker settings pass through
    untouched; they are the config loader's concern.
    """

    model_config = ConfigDict(strict=True, extra="allow", populate_by_name=True)

    image: str | None = Field(default=None, description="Container image reference")
    workdir: str | None = Field(default=None, description="Working directory inside container")
    user: str | None = Field(default=None, description="Container user (name, uid, or uid:gid)")
    tmpfs: list[TmpfsEntry] | None = Field(
        default=None,
        description="tmpfs mounts as <absolute-path>[:<options>]",
    )
    extra_hosts: list[ExtraHostEntry] | None = Field(
        default=None,
        alias="extraHosts",
        description="Host mappings as <hostname>:<ip>",
    )

    @field_validator("image")
    @classmethod
    def validate_image(cls, value: str | None) -> str | None:
        """Reject injection characters in the image reference."""
        if value is not None and (failure := check_image(value)) is not None:
            _raise_malformed(failure)
        return value

    @field_validator("workdir")
    @classmethod
    def validate_workdir(cls, value: str | None) -> str | None:
        """Reject injection characters in the working directory."""
        if value is not None and (failure := check_workdir(value)) is not None:
            _raise_malformed(failure)
        return value

    @field_validator("user")
    @classmethod
    def validate_user(cls, value: str | None) -> str | None:
        """Reject malformed user specs and the root identity."""
        if value is not None:
            result = parse_user(value)
            if isinstance(result, Malformed):
                _raise_malformed(result)
        return value


class ValidationIssue(BaseModel):
    """One violation found in a configuration document."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(description="Dotted path of the offending field")
    message: str = Field(description="Human-readable reason")
    reason: RejectionReason = Field(description="Machine-readable rejection reason")


class ValidationResult(BaseModel):
    """Aggregate outcome of validating a configuration document."""

    errors: list[ValidationIssue] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def ok(self) -> bool:
        """True iff no violation was found."""
        return not self.errors

    def to_dict(self) -> dict[str, Any]:
        """Serialize to plain JSON-compatible data."""
        return self.model_dump(mode="json")
