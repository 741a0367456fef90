"""Router configuration.

Every record is a frozen dataclass — immutable after creation, with
defaults for every field. Override what you need::

    config = VersioningConfig(
        extraction=ExtractionConfig(sources=("header", "path")),
        fallback_strategy="latest",
    )

``resolve_config`` merges partial options (a config object or a nested
mapping with the same keys) over the defaults and validates the result
once. Routers never re-validate per request.
"""

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, fields, is_dataclass, replace
from typing import Any, Literal, TypeAlias, TypeVar

from semroute.errors import InvalidConfiguration

SourceName: TypeAlias = Literal["header", "query", "path", "custom"]
FallbackStrategy: TypeAlias = Literal["none", "latest", "default"]

SOURCES: frozenset[str] = frozenset({"header", "query", "path", "custom"})
FALLBACK_STRATEGIES: frozenset[str] = frozenset({"none", "latest", "default"})

DEFAULT_PATH_PATTERN = re.compile(r"/v(\d+(?:\.\d+)?(?:\.\d+)?)/")


@dataclass(frozen=True, slots=True)
class HeaderConfig:
    name: str = "accept-version"


@dataclass(frozen=True, slots=True)
class QueryConfig:
    name: str = "v"


@dataclass(frozen=True, slots=True)
class PathConfig:
    """Path extraction. Group 1 of *pattern* is the version text.

    Text patterns are compiled during ``resolve_config``.
    """

    pattern: str | re.Pattern[str] = DEFAULT_PATH_PATTERN


@dataclass(frozen=True, slots=True)
class ExtractionConfig:
    """Where to look for the version, in order."""

    sources: tuple[SourceName, ...] = ("header", "query")
    header: HeaderConfig = field(default_factory=HeaderConfig)
    query: QueryConfig = field(default_factory=QueryConfig)
    path: PathConfig = field(default_factory=PathConfig)
    custom: Callable[..., str | None] | None = None


@dataclass(frozen=True, slots=True)
class ErrorResponseConfig:
    """Status codes and messages for per-request errors.

    ``on_error(error, request)`` sees every error first. Returning a value
    other than ``None`` takes over the response; ``None`` declines.
    """

    missing_version_status: int = 422
    version_not_found_status: int = 422
    invalid_version_status: int = 400
    missing_version_message: str = "API version is required"
    version_not_found_message: str | Callable[[str], str] = (
        "No handler found for the requested API version"
    )
    include_requested_version: bool = True
    on_error: Callable[..., Any] | None = None


@dataclass(frozen=True, slots=True)
class VersioningConfig:
    """Top-level router configuration. Immutable after creation."""

    extraction: ExtractionConfig = field(default_factory=ExtractionConfig)
    error_response: ErrorResponseConfig = field(default_factory=ErrorResponseConfig)
    fallback_strategy: FallbackStrategy = "default"
    default_handler: Callable[..., Any] | None = None
    validate_handlers: bool = True
    attach_version_info: bool = True
    require_version: bool = True


DEFAULT_CONFIG = VersioningConfig()


T = TypeVar("T")


def _merge(base: T, overrides: Mapping[str, Any] | T | None, where: str) -> T:
    """Overlay a partial mapping (or a whole record) onto a dataclass record."""
    if overrides is None:
        return base
    if isinstance(overrides, type(base)):
        return overrides
    if not isinstance(overrides, Mapping):
        msg = f"'{where}' must be a mapping or {type(base).__name__}, got {type(overrides).__name__}"
        raise InvalidConfiguration(msg)

    known = {f.name: f for f in fields(base)}  # type: ignore[arg-type]
    unknown = sorted(set(overrides) - set(known))
    if unknown:
        msg = f"unknown option(s) in '{where}': {', '.join(unknown)}"
        raise InvalidConfiguration(msg)

    changes: dict[str, Any] = {}
    for name, value in overrides.items():
        current = getattr(base, name)
        if is_dataclass(current):
            changes[name] = _merge(current, value, f"{where}.{name}")
        else:
            changes[name] = value
    return replace(base, **changes)  # type: ignore[type-var]


def _compile_pattern(pattern: object) -> re.Pattern[str]:
    if isinstance(pattern, re.Pattern):
        compiled = pattern
    elif isinstance(pattern, str):
        try:
            compiled = re.compile(pattern)
        except re.error as exc:
            msg = f"path pattern does not compile: {exc}"
            raise InvalidConfiguration(msg) from None
    else:
        msg = "path pattern must be a string or compiled regular expression"
        raise InvalidConfiguration(msg)
    if compiled.groups < 1:
        msg = "path pattern must contain a capture group for the version"
        raise InvalidConfiguration(msg)
    return compiled


def _check_status(name: str, status: object) -> None:
    if isinstance(status, bool) or not isinstance(status, int) or not 100 <= status <= 599:
        msg = f"{name} must be a valid HTTP status code (100-599)"
        raise InvalidConfiguration(msg)


def _validate(config: VersioningConfig) -> VersioningConfig:
    extraction = config.extraction
    if isinstance(extraction.sources, str):
        msg = "extraction.sources must be a sequence of source names, not a string"
        raise InvalidConfiguration(msg)
    if not isinstance(extraction.sources, (list, tuple)):
        msg = "extraction.sources must be a list or tuple of source names"
        raise InvalidConfiguration(msg)
    sources = tuple(extraction.sources)
    if not sources:
        msg = "at least one version source is required"
        raise InvalidConfiguration(msg)
    for source in sources:
        if not isinstance(source, str) or source not in SOURCES:
            msg = f"Invalid version source: '{source}'. Valid sources: header, query, path, custom"
            raise InvalidConfiguration(msg)
    if "custom" in sources and extraction.custom is None:
        msg = "Custom extractor function is required when 'custom' source is used"
        raise InvalidConfiguration(msg)
    if extraction.custom is not None and not callable(extraction.custom):
        msg = "custom extractor must be callable"
        raise InvalidConfiguration(msg)
    for where, name in (("header", extraction.header.name), ("query", extraction.query.name)):
        if not isinstance(name, str) or not name.strip():
            msg = f"extraction.{where}.name must be a non-empty string"
            raise InvalidConfiguration(msg)

    errors = config.error_response
    _check_status("missing_version_status", errors.missing_version_status)
    _check_status("version_not_found_status", errors.version_not_found_status)
    _check_status("invalid_version_status", errors.invalid_version_status)
    if errors.on_error is not None and not callable(errors.on_error):
        msg = "on_error must be callable"
        raise InvalidConfiguration(msg)

    if config.fallback_strategy not in FALLBACK_STRATEGIES:
        msg = (
            f"Invalid fallback strategy: '{config.fallback_strategy}'. "
            "Valid strategies: none, latest, default"
        )
        raise InvalidConfiguration(msg)
    if config.default_handler is not None and not callable(config.default_handler):
        msg = "default_handler must be callable"
        raise InvalidConfiguration(msg)

    path = replace(extraction.path, pattern=_compile_pattern(extraction.path.pattern))
    return replace(config, extraction=replace(extraction, sources=sources, path=path))


def resolve_config(
    options: VersioningConfig | Mapping[str, Any] | None = None,
    defaults: VersioningConfig = DEFAULT_CONFIG,
) -> VersioningConfig:
    """Merge *options* over *defaults* and validate.

    Nested mappings only override the keys they name::

        resolve_config({"extraction": {"header": {"name": "x-api-version"}}})

    Raises:
        InvalidConfiguration: On unknown keys or invalid values.
    """
    return _validate(_merge(defaults, options, "options"))
