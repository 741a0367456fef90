"""Version parsing and range matching.

Two parse entry points with different grammars:

- ``parse_version`` reads a client-supplied version (``"1"``, ``"1.2"``,
  ``"1.2.3"``). Prefixed input is rejected.
- ``parse_range`` reads a handler registration key, which may carry a
  ``^`` (caret) or ``~`` (tilde) prefix.

Both are total: malformed input yields ``None``, never an exception.

Matching rules (``satisfies``)::

    1.2.3    exact     1.2.3 only
    ~1.2.3   tilde     >=1.2.3 <1.3.0
    ^1.2.3   caret     >=1.2.3 <2.0.0
    ^0.2.3   caret     >=0.2.3 <0.3.0
    ^0.0.3   caret     >=0.0.3 <0.0.4
    ^0.2     caret     >=0.2.0 <0.3.0
    ^0       caret     >=0.0.0 <1.0.0
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Literal, TypeAlias

RangeKind: TypeAlias = Literal["exact", "tilde", "caret"]

# Components are capped at 16 digits; longer runs are rejected, not converted.
_VERSION_RE = re.compile(r"([0-9]{1,16})(?:\.([0-9]{1,16}))?(?:\.([0-9]{1,16}))?")
_PREFIX_KINDS: dict[str, RangeKind] = {"^": "caret", "~": "tilde"}


@dataclass(frozen=True, slots=True, order=True)
class Version:
    """A parsed ``major.minor.patch`` triple.

    Ordering compares the numeric components only; ``raw`` keeps the
    text as written (``"1.2"`` parses to ``1.2.0`` with ``raw="1.2"``).
    """

    major: int
    minor: int
    patch: int
    raw: str = field(default="", compare=False)

    def __post_init__(self) -> None:
        if min(self.major, self.minor, self.patch) < 0:
            msg = f"Version components must be non-negative, got {self.triple}"
            raise ValueError(msg)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    @property
    def triple(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)


@dataclass(frozen=True, slots=True)
class VersionRange:
    """A handler registration key: a base version plus a matching kind.

    ``precision`` is how many components were written out (1, 2 or 3).
    It only changes the meaning of caret ranges below ``0.1.0``.
    """

    kind: RangeKind
    version: Version
    raw: str
    precision: int = 3

    def __str__(self) -> str:
        return self.raw


def _split(text: str) -> tuple[Version, int] | None:
    match = _VERSION_RE.fullmatch(text)
    if match is None:
        return None
    parts = [p for p in match.groups() if p is not None]
    major, minor, patch = (int(p) for p in (*parts, "0", "0")[:3])
    return Version(major, minor, patch, raw=text), len(parts)


def parse_version(text: str) -> Version | None:
    """Parse a client version such as ``"2"``, ``"2.1"`` or ``"2.1.4"``.

    Missing components default to zero. Returns ``None`` for anything
    else, including range prefixes (``"^1.0.0"``), four components,
    signs, components longer than 16 digits, and empty or whitespace-only
    text.
    """
    if not isinstance(text, str):
        return None
    parsed = _split(text.strip())
    return parsed[0] if parsed else None


def parse_range(text: str) -> VersionRange | None:
    """Parse a registration key such as ``"^1"``, ``"~2.1"`` or ``"3.0.0"``."""
    if not isinstance(text, str):
        return None
    trimmed = text.strip()
    kind: RangeKind = _PREFIX_KINDS.get(trimmed[:1], "exact")
    body = trimmed[1:] if kind != "exact" else trimmed
    parsed = _split(body)
    if parsed is None:
        return None
    version, precision = parsed
    return VersionRange(kind=kind, version=version, raw=trimmed, precision=precision)


def compare_versions(a: Version, b: Version) -> Literal[-1, 0, 1]:
    """Compare by major, then minor, then patch."""
    if a.triple == b.triple:
        return 0
    return 1 if a.triple > b.triple else -1


def _caret_zero(client: Version, base: Version, precision: int) -> bool:
    # ^0.m.p with m > 0: the minor is the leftmost nonzero component
    if base.minor > 0:
        return client.minor == base.minor and client.patch >= base.patch
    if precision == 1:
        return True
    if precision == 2:
        return client.minor == 0
    return client.minor == 0 and client.patch == base.patch


def satisfies(client: Version, version_range: VersionRange) -> bool:
    """True if *client* falls inside *version_range*."""
    base = version_range.version
    match version_range.kind:
        case "exact":
            return client.triple == base.triple
        case "tilde":
            return (
                client.major == base.major
                and client.minor == base.minor
                and client.patch >= base.patch
            )
        case "caret":
            if client.major != base.major:
                return False
            if base.major == 0:
                return _caret_zero(client, base, version_range.precision)
            return (client.minor, client.patch) >= (base.minor, base.patch)
    return False


def is_valid_version(text: str) -> bool:
    return parse_version(text) is not None


def is_valid_range(text: str) -> bool:
    return parse_range(text) is not None


def normalize_version(text: str) -> str | None:
    """Expand a version or range to ``M.m.p``, dropping any prefix.

    ``"1"`` -> ``"1.0.0"``, ``"^1.2"`` -> ``"1.2.0"``.
    """
    parsed = parse_range(text)
    if parsed is None:
        return None
    return str(parsed.version)


def find_latest_version(texts: Iterable[str]) -> str | None:
    """Return the highest base version among range texts, without prefix.

    Invalid entries are skipped. On ties the first occurrence wins.
    """
    latest: Version | None = None
    for text in texts:
        parsed = parse_range(text)
        if parsed is None:
            continue
        if latest is None or parsed.version > latest:
            latest = parsed.version
    return latest.raw if latest is not None else None
