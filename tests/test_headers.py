"""Tests for semroute.http.headers — immutable, case-insensitive Headers."""

import pytest

from semroute.http.headers import Headers


def _h(*pairs: tuple[str, str]) -> Headers:
    """Shorthand: build Headers from ASGI byte pairs."""
    raw = tuple((k.encode("latin-1"), v.encode("latin-1")) for k, v in pairs)
    return Headers.from_raw(raw)


class TestHeaders:
    def test_getitem(self) -> None:
        h = _h(("Accept-Version", "1.2.3"))
        assert h["Accept-Version"] == "1.2.3"

    def test_case_insensitive(self) -> None:
        h = _h(("Accept-Version", "2"))
        assert h["accept-version"] == "2"
        assert h["ACCEPT-VERSION"] == "2"

    def test_missing_key_raises(self) -> None:
        h = _h(("Accept", "*/*"))
        with pytest.raises(KeyError):
            h["X-Missing"]

    def test_contains(self) -> None:
        h = _h(("Accept", "*/*"))
        assert "accept" in h
        assert "Accept" in h
        assert "x-missing" not in h

    def test_contains_rejects_non_str(self) -> None:
        h = _h(("Accept", "*/*"))
        assert 42 not in h  # type: ignore[operator]

    def test_len_counts_unique_names(self) -> None:
        h = _h(("Accept", "*/*"), ("X-Tag", "a"), ("x-tag", "b"))
        assert len(h) == 2
        assert list(h) == ["accept", "x-tag"]

    def test_get_default(self) -> None:
        h = _h()
        assert h.get("accept-version") is None
        assert h.get("accept-version", "1") == "1"

    def test_repeated_header(self) -> None:
        h = _h(("Accept-Version", "1.0"), ("Accept-Version", "2.0"))
        assert h["accept-version"] == "1.0"
        assert h.get_list("accept-version") == ["1.0", "2.0"]
        assert h.get_list("x-missing") == []

    def test_immutable(self) -> None:
        h = _h(("Accept", "*/*"))
        with pytest.raises(AttributeError, match="immutable"):
            h.extra = "x"  # type: ignore[attr-defined]
        with pytest.raises(TypeError):
            h["accept"] = "text/html"  # type: ignore[index]

    def test_raw_roundtrip(self) -> None:
        h = Headers.from_pairs(("X-Api-Version", "3"))
        assert h.raw == ((b"x-api-version", b"3"),)

    def test_from_mapping(self) -> None:
        h = Headers.from_mapping({"Accept-Version": "4"})
        assert h["accept-version"] == "4"
        assert len(Headers.from_mapping(None)) == 0

    def test_latin1_values(self) -> None:
        h = Headers.from_raw([(b"x-name", "café".encode("latin-1"))])
        assert h["x-name"] == "café"
