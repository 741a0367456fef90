"""semroute exception hierarchy.

Construction-time errors (``InvalidHandler``, ``InvalidConfiguration``)
are raised from ``VersionRouter.__init__``. Per-request errors
(``MissingVersion``, ``InvalidVersionFormat``, ``VersionNotFound``) are
built by the router and turned into JSON responses; they are only raised
if an ``on_error`` hook chooses to raise them.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Literal, TypeAlias

ErrorCode: TypeAlias = Literal[
    "MISSING_VERSION",
    "VERSION_NOT_FOUND",
    "INVALID_VERSION_FORMAT",
    "INVALID_HANDLER",
    "INVALID_CONFIGURATION",
]


class SemrouteError(Exception):
    """Base for all semroute-specific errors."""


@dataclass(frozen=True, slots=True)
class VersioningError(SemrouteError):
    """A versioning failure with a stable code and an HTTP status."""

    code: ErrorCode
    message: str
    status: int = 422
    requested_version: str | None = None
    available_versions: tuple[str, ...] | None = None

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation, including the status code."""
        data: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "status": self.status,
        }
        if self.requested_version is not None:
            data["requestedVersion"] = self.requested_version
        if self.available_versions is not None:
            data["availableVersions"] = list(self.available_versions)
        return data


class MissingVersion(VersioningError):  # noqa: N818
    """No version could be extracted and one is required."""

    def __init__(self, message: str = "API version is required", status: int = 422) -> None:
        super().__init__(code="MISSING_VERSION", message=message, status=status)


class InvalidVersionFormat(VersioningError):  # noqa: N818
    """The request carried version text that does not parse."""

    def __init__(self, version: str, status: int = 400) -> None:
        super().__init__(
            code="INVALID_VERSION_FORMAT",
            message=f"Invalid version format: '{version}'",
            status=status,
            requested_version=version,
        )


class VersionNotFound(VersioningError):  # noqa: N818
    """The version parsed but no route matched and fallback was exhausted."""

    def __init__(
        self,
        requested_version: str | None,
        available_versions: Sequence[str],
        *,
        message: str = "",
        status: int = 422,
    ) -> None:
        label = requested_version if requested_version is not None else "unknown"
        super().__init__(
            code="VERSION_NOT_FOUND",
            message=message or f"No handler found for API version '{label}'",
            status=status,
            requested_version=requested_version,
            available_versions=tuple(available_versions),
        )


class InvalidHandler(VersioningError):  # noqa: N818
    """A registration key is not a valid range or its handler is not callable."""

    def __init__(self, key: object, reason: str) -> None:
        super().__init__(
            code="INVALID_HANDLER",
            message=f"Invalid handler for version '{key}': {reason}",
            status=500,
        )


class InvalidConfiguration(VersioningError):  # noqa: N818
    """Router options are malformed."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            code="INVALID_CONFIGURATION",
            message=f"Invalid configuration: {reason}",
            status=500,
        )


def is_versioning_error(error: object) -> bool:
    return isinstance(error, VersioningError)


def has_error_code(error: object, code: ErrorCode) -> bool:
    """True if *error* is a ``VersioningError`` carrying *code*."""
    return isinstance(error, VersioningError) and error.code == code
