"""Version extraction — pull the client's version text out of a request.

Sources are tried in the configured order; the first non-blank value
wins. A version already set on the request by upstream code
(``request.with_version(...)``) beats every configured source and is
reported with the source tag ``"request"``.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal, TypeAlias

from semroute.config import VersioningConfig
from semroute.http.request import Request

VersionSource: TypeAlias = Literal["header", "query", "path", "custom", "request"]


@dataclass(frozen=True, slots=True)
class ExtractionResult:
    """Version text and the channel it was read from."""

    version: str
    source: VersionSource


@dataclass(frozen=True, slots=True)
class VersionInfo:
    """What the router resolved for a request.

    ``matched`` is the registration key of the handler that ran, or
    ``"default"`` for the configured default handler.
    """

    requested: str
    matched: str
    source: VersionSource


def _clean(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def from_header(request: Request, name: str) -> str | None:
    values = request.headers.get_list(name)
    return _clean(values[0]) if values else None


def from_query(request: Request, name: str) -> str | None:
    return _clean(request.query.get(name))


def from_path(request: Request, pattern: re.Pattern[str]) -> str | None:
    # Pattern.search keeps no position between calls, so one pattern
    # object can serve every request.
    match = pattern.search(request.path)
    if match is None:
        return None
    return _clean(match.group(1))


def from_request(request: Request) -> str | None:
    return _clean(request.version)


class VersionExtractor:
    """Callable built once from a resolved config.

    Usage::

        extract = VersionExtractor(config)
        result = extract(request)  # ExtractionResult | None
    """

    __slots__ = ("_readers",)

    def __init__(self, config: VersioningConfig) -> None:
        extraction = config.extraction
        readers: list[tuple[VersionSource, Callable[[Request], str | None]]] = []
        for source in extraction.sources:
            match source:
                case "header":
                    name = extraction.header.name
                    readers.append(("header", lambda r, n=name: from_header(r, n)))
                case "query":
                    name = extraction.query.name
                    readers.append(("query", lambda r, n=name: from_query(r, n)))
                case "path":
                    pattern = extraction.path.pattern
                    if isinstance(pattern, str):
                        pattern = re.compile(pattern)
                    readers.append(("path", lambda r, p=pattern: from_path(r, p)))
                case "custom":
                    custom = extraction.custom
                    if custom is not None:
                        readers.append(("custom", lambda r, fn=custom: _clean(fn(r))))
        self._readers = tuple(readers)

    def __call__(self, request: Request) -> ExtractionResult | None:
        preset = from_request(request)
        if preset is not None:
            return ExtractionResult(version=preset, source="request")

        for source, read in self._readers:
            version = read(request)
            if version is not None:
                return ExtractionResult(version=version, source=source)
        return None

    @property
    def sources(self) -> tuple[VersionSource, ...]:
        return tuple(source for source, _ in self._readers)
