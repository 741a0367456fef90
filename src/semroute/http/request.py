"""Immutable HTTP request.

Only the metadata version routing needs: method, path, headers, query
string, and two version fields. ``version`` is set by upstream code that
already knows the client's version; ``version_info`` is set by the router
on the request it hands to the selected handler.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from semroute.http.headers import Headers
from semroute.http.query import QueryParams

if TYPE_CHECKING:
    from semroute.extraction import VersionInfo


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    Transformations (``with_version``, ``with_version_info``) return a new
    request; the original is never modified.
    """

    method: str
    path: str
    headers: Headers = field(default_factory=Headers)
    query: QueryParams = field(default_factory=QueryParams)
    version: str | None = None
    version_info: VersionInfo | None = None
    scope: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)

    def with_version(self, version: str | None) -> Request:
        """Return a copy carrying a version chosen by upstream code."""
        return replace(self, version=version)

    def with_version_info(self, info: VersionInfo) -> Request:
        return replace(self, version_info=info)

    @property
    def url(self) -> str:
        """Path plus query string."""
        if self.query.raw:
            return f"{self.path}?{self.query.raw}"
        return self.path

    @classmethod
    def build(
        cls,
        path: str = "/",
        *,
        method: str = "GET",
        headers: Mapping[str, str] | None = None,
        query: Mapping[str, str] | str | None = None,
        version: str | None = None,
    ) -> Request:
        """Construct a request from plain strings (tests, non-ASGI hosts)."""
        if isinstance(query, str):
            params = QueryParams(query)
        else:
            params = QueryParams.from_mapping(query)
        return cls(
            method=method,
            path=path,
            headers=Headers.from_mapping(headers),
            query=params,
            version=version,
        )

    @classmethod
    def from_asgi(cls, scope: Mapping[str, Any]) -> Request:
        """Create a Request from an ASGI HTTP scope.

        A ``semroute.version`` entry in the scope's ``state`` (set by
        upstream ASGI middleware) becomes the pre-set ``version``.
        """
        state = scope.get("state") or {}
        return cls(
            method=scope.get("method", "GET"),
            path=scope["path"],
            headers=Headers.from_raw(scope.get("headers", ())),
            query=QueryParams(scope.get("query_string", b"")),
            version=state.get("semroute.version"),
            scope=scope,
        )
