"""Immutable, case-insensitive HTTP headers.

Names are folded to lowercase once, at construction. Lookups return the
first value; ``get_list`` returns every value for repeated headers.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping


class Headers(Mapping[str, str]):
    """Read-only header multimap.

    Build from ASGI byte pairs with ``Headers.from_raw`` or from strings
    with ``Headers.from_pairs`` / ``Headers.from_mapping``.
    """

    __slots__ = ("_pairs",)

    def __init__(self, pairs: Iterable[tuple[str, str]] = ()) -> None:
        folded = tuple((name.lower(), value) for name, value in pairs)
        object.__setattr__(self, "_pairs", folded)

    @classmethod
    def from_raw(cls, raw: Iterable[tuple[bytes, bytes]]) -> Headers:
        """Decode ASGI ``(name, value)`` byte pairs (latin-1)."""
        return cls((name.decode("latin-1"), value.decode("latin-1")) for name, value in raw)

    @classmethod
    def from_pairs(cls, *pairs: tuple[str, str]) -> Headers:
        return cls(pairs)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str] | None) -> Headers:
        return cls((mapping or {}).items())

    def __setattr__(self, name: str, value: object) -> None:
        msg = "Headers is immutable"
        raise AttributeError(msg)

    def __getitem__(self, key: str) -> str:
        wanted = key.lower()
        for name, value in self._pairs:
            if name == wanted:
                return value
        raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        wanted = key.lower()
        return any(name == wanted for name, _ in self._pairs)

    def __iter__(self) -> Iterator[str]:
        return iter(dict.fromkeys(name for name, _ in self._pairs))

    def __len__(self) -> int:
        return len(dict.fromkeys(name for name, _ in self._pairs))

    def __repr__(self) -> str:
        return f"Headers({list(self._pairs)!r})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        try:
            return self[key]
        except KeyError:
            return default

    def get_list(self, key: str) -> list[str]:
        """Return every value for *key*, in arrival order."""
        wanted = key.lower()
        return [value for name, value in self._pairs if name == wanted]

    @property
    def raw(self) -> tuple[tuple[bytes, bytes], ...]:
        """Encode back to ASGI byte pairs."""
        return tuple(
            (name.encode("latin-1"), value.encode("latin-1")) for name, value in self._pairs
        )
