"""Handler compilation — registration mapping to a priority-sorted tuple.

Compiled once when a router is built; immutable afterwards. Matching is a
linear scan in priority order, so the sort *is* the dispatch rule:

1. every exact route, highest version first
2. every tilde route, highest version first
3. every caret route, highest version first

Within one kind and base version, the key that spells out more
components ranks first (``^0.0.0`` before ``^0``). Remaining ties keep
registration order.
"""

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from semroute.errors import InvalidHandler
from semroute.version import Version, VersionRange, parse_range, satisfies

_KIND_BANDS = {"caret": 1, "tilde": 2, "exact": 3}
_PRECISION_BITS = 2


@dataclass(frozen=True, slots=True)
class CompiledRoute:
    """A registration key resolved into a range, with its sort priority."""

    key: str
    range: VersionRange
    handler: Callable[..., Any]
    priority: int


def route_priority(version_range: VersionRange, bits: int) -> int:
    """Pack kind band, version and precision into one integer.

    *bits* is the width of each version field; it must cover the largest
    component in the route set.
    """
    base = version_range.version
    value = _KIND_BANDS[version_range.kind]
    for component in (base.major, base.minor, base.patch):
        value = (value << bits) | component
    return (value << _PRECISION_BITS) | version_range.precision


def compile_routes(
    handlers: Mapping[str, Callable[..., Any]],
    validate: bool = True,
) -> tuple[CompiledRoute, ...]:
    """Parse, validate and sort the registration mapping.

    Raises:
        InvalidHandler: When *validate* is true and a key is not a valid
            range or its handler is not callable. Without *validate*,
            such entries are skipped.
    """
    parsed: list[tuple[str, VersionRange, Callable[..., Any]]] = []
    for key, handler in handlers.items():
        if not callable(handler):
            if validate:
                raise InvalidHandler(key, "handler must be callable")
            continue
        version_range = parse_range(key)
        if version_range is None:
            if validate:
                raise InvalidHandler(
                    key, 'invalid version format. Expected: "1.0.0", "^1.0", "~1.2", etc.'
                )
            continue
        parsed.append((key, version_range, handler))

    largest = max(
        (c for _, r, _ in parsed for c in r.version.triple),
        default=0,
    )
    bits = max(largest.bit_length(), 1)
    routes = [
        CompiledRoute(key=key, range=r, handler=handler, priority=route_priority(r, bits))
        for key, r, handler in parsed
    ]
    # sorted() is stable: equal priorities stay in registration order
    return tuple(sorted(routes, key=lambda route: route.priority, reverse=True))


def find_match(client: Version, routes: Sequence[CompiledRoute]) -> CompiledRoute | None:
    """Return the first route, in priority order, whose range admits *client*."""
    for route in routes:
        if satisfies(client, route.range):
            return route
    return None


def find_latest(routes: Sequence[CompiledRoute]) -> CompiledRoute | None:
    """Return the route with the highest base version, regardless of kind."""
    latest: CompiledRoute | None = None
    for route in routes:
        if latest is None or route.range.version > latest.range.version:
            latest = route
    return latest


def available_versions(routes: Sequence[CompiledRoute]) -> tuple[str, ...]:
    return tuple(route.key for route in routes)
