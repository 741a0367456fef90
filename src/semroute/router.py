"""Version router — dispatch a request to the handler for its API version.

A router is built once from a mapping of range keys to handlers and is
then awaited per request::

    router = VersionRouter(
        {
            "^1": list_users_v1,
            "~2.1": list_users_v21,
            "3.0.0": list_users_v3,
        },
        VersioningConfig(fallback_strategy="latest"),
    )

    response = await router(request)

Per request: extract the version text, parse it, scan the compiled routes
in priority order, and fall back (``none``, ``latest`` or ``default``)
when nothing matches. Missing, malformed or unmatched versions become
JSON error responses; exceptions raised by handlers propagate unchanged.
"""

import logging
import warnings
from collections.abc import Callable, Mapping
from typing import Any

from semroute._internal.invoke import invoke
from semroute.compiler import (
    CompiledRoute,
    available_versions,
    compile_routes,
    find_latest,
    find_match,
)
from semroute.config import VersioningConfig, resolve_config
from semroute.errors import (
    InvalidConfiguration,
    InvalidVersionFormat,
    MissingVersion,
    VersioningError,
    VersionNotFound,
)
from semroute.extraction import ExtractionResult, VersionExtractor, VersionInfo
from semroute.http.request import Request
from semroute.http.response import Response, json_response
from semroute.version import parse_version

logger = logging.getLogger("semroute.router")

DEFAULT_MATCH_KEY = "default"


class VersionRouter:
    """Dispatch engine. Immutable after construction, safe to share.

    Raises at construction (never per request):
        InvalidConfiguration: Malformed options or an empty mapping.
        InvalidHandler: A bad range key or non-callable handler while
            ``validate_handlers`` is on.
    """

    __slots__ = ("_available", "_extract", "config", "routes")

    def __init__(
        self,
        handlers: Mapping[str, Callable[..., Any]],
        config: VersioningConfig | Mapping[str, Any] | None = None,
    ) -> None:
        if not isinstance(handlers, Mapping):
            msg = "'handlers' must be a mapping of version ranges to handlers"
            raise InvalidConfiguration(msg)

        self.config = resolve_config(config)
        self.routes = compile_routes(handlers, self.config.validate_handlers)
        if not self.routes:
            msg = "No valid handlers provided. At least one handler is required."
            raise InvalidConfiguration(msg)

        self._extract = VersionExtractor(self.config)
        self._available = available_versions(self.routes)

    @property
    def available_versions(self) -> tuple[str, ...]:
        """Registered keys in priority order."""
        return self._available

    def __repr__(self) -> str:
        return f"VersionRouter({list(self._available)!r})"

    async def __call__(self, request: Request) -> Any:
        """Dispatch *request* and return the handler's (or error) response."""
        extraction = self._extract(request)

        if extraction is None:
            if self.config.require_version:
                error = MissingVersion(
                    self.config.error_response.missing_version_message,
                    self.config.error_response.missing_version_status,
                )
                return await self._error(error, request)
            return await self._fallback(None, request)

        client = parse_version(extraction.version)
        if client is None:
            error = InvalidVersionFormat(
                extraction.version,
                self.config.error_response.invalid_version_status,
            )
            return await self._error(error, request)

        route = find_match(client, self.routes)
        if route is not None:
            logger.debug(
                "version %s (%s) matched %s", extraction.version, extraction.source, route.key
            )
            return await self._run(route.handler, route.key, extraction, request)

        return await self._fallback(extraction, request)

    # -- Fallback --

    async def _fallback(self, extraction: ExtractionResult | None, request: Request) -> Any:
        strategy = self.config.fallback_strategy
        requested = extraction.version if extraction is not None else None
        logger.debug("no route for version %s, fallback=%s", requested, strategy)

        if strategy == "default" and self.config.default_handler is not None:
            return await self._run(
                self.config.default_handler, DEFAULT_MATCH_KEY, extraction, request
            )

        if strategy in ("latest", "default"):
            latest = find_latest(self.routes)
            if latest is not None:
                return await self._run(latest.handler, latest.key, extraction, request)

        return await self._error(self._not_found(requested), request)

    def _not_found(self, requested: str | None) -> VersionNotFound:
        errors = self.config.error_response
        message = errors.version_not_found_message
        if callable(message):
            message = message(requested if requested is not None else "unknown")
        return VersionNotFound(
            requested,
            self._available,
            message=message,
            status=errors.version_not_found_status,
        )

    # -- Invocation --

    async def _run(
        self,
        handler: Callable[..., Any],
        matched: str,
        extraction: ExtractionResult | None,
        request: Request,
    ) -> Any:
        if self.config.attach_version_info and extraction is not None:
            request = request.with_version_info(
                VersionInfo(
                    requested=extraction.version,
                    matched=matched,
                    source=extraction.source,
                )
            )
        return await invoke(handler, request)

    # -- Errors --

    async def _error(self, error: VersioningError, request: Request) -> Any:
        logger.debug("%d %s %s: %s", error.status, request.method, request.path, error.code)
        hook = self.config.error_response.on_error
        if hook is not None:
            handled = await invoke(hook, error, request)
            if handled is not None:
                return handled
        return self.error_response(error)

    def error_response(self, error: VersioningError) -> Response:
        """Default JSON error body for a per-request error."""
        body: dict[str, Any] = {"error": error.code, "message": error.message}
        if self.config.error_response.include_requested_version and error.requested_version:
            body["requestedVersion"] = error.requested_version
        if error.available_versions:
            body["availableVersions"] = list(error.available_versions)
        return json_response(body, status=error.status)


def create_version_middleware(
    handlers: Mapping[str, Callable[..., Any]],
    default_handler: Callable[..., Any] | None = None,
) -> VersionRouter:
    """Build a router with the ``default`` fallback strategy.

    .. deprecated::
        Use ``VersionRouter(handlers, VersioningConfig(default_handler=...))``.
    """
    warnings.warn(
        "create_version_middleware() is deprecated; use VersionRouter instead",
        DeprecationWarning,
        stacklevel=2,
    )
    return VersionRouter(
        handlers,
        VersioningConfig(fallback_strategy="default", default_handler=default_handler),
    )
