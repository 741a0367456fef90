"""Tests for semroute.http.request — the immutable Request."""

import pytest

from semroute.extraction import VersionInfo
from semroute.http.request import Request


def _scope(**overrides: object) -> dict[str, object]:
    """Build a minimal valid ASGI HTTP scope dict."""
    base: dict[str, object] = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "GET",
        "path": "/",
        "query_string": b"",
        "headers": [],
    }
    base.update(overrides)
    return base


class TestFromAsgi:
    def test_basic(self) -> None:
        request = Request.from_asgi(
            _scope(
                method="POST",
                path="/users",
                query_string=b"v=2",
                headers=[(b"Accept-Version", b"1.0")],
            )
        )
        assert request.method == "POST"
        assert request.path == "/users"
        assert request.query["v"] == "2"
        assert request.headers["accept-version"] == "1.0"
        assert request.version is None
        assert request.version_info is None

    def test_state_version(self) -> None:
        request = Request.from_asgi(_scope(state={"semroute.version": "3.1"}))
        assert request.version == "3.1"

    def test_missing_optional_keys(self) -> None:
        request = Request.from_asgi({"type": "http", "path": "/x"})
        assert request.method == "GET"
        assert len(request.headers) == 0
        assert len(request.query) == 0

    def test_scope_kept_but_not_compared(self) -> None:
        a = Request.from_asgi(_scope(client=("1.2.3.4", 1)))
        b = Request.from_asgi(_scope(client=("5.6.7.8", 2)))
        assert a.scope["client"] == ("1.2.3.4", 1)
        assert a == b


class TestTransformations:
    def test_with_version_returns_copy(self) -> None:
        original = Request.build()
        changed = original.with_version("2")
        assert changed.version == "2"
        assert original.version is None

    def test_with_version_info(self) -> None:
        info = VersionInfo(requested="1.4", matched="^1", source="query")
        request = Request.build().with_version_info(info)
        assert request.version_info is info

    def test_frozen(self) -> None:
        request = Request.build()
        with pytest.raises(AttributeError):
            request.path = "/other"  # type: ignore[misc]


class TestBuild:
    def test_defaults(self) -> None:
        request = Request.build()
        assert request.method == "GET"
        assert request.path == "/"
        assert request.url == "/"

    def test_query_mapping_and_text(self) -> None:
        assert Request.build("/a", query={"v": "1"}).url == "/a?v=1"
        assert Request.build("/a", query="v=2&x=1").query["v"] == "2"

    def test_headers_and_version(self) -> None:
        request = Request.build(method="PUT", headers={"X-Api-Version": "5"}, version="5.1")
        assert request.method == "PUT"
        assert request.headers["x-api-version"] == "5"
        assert request.version == "5.1"
