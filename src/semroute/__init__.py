"""semroute — semantic-version request routing for ASGI services.

Dispatches each request to the handler registered for the client's API
version. Versions come from a header, query parameter, path segment,
custom extractor, or a value set upstream; handlers are registered under
exact (``"2.1.0"``), tilde (``"~2.1"``) or caret (``"^2"``) keys.

Basic usage::

    from semroute import VersionRouter, VersioningConfig

    router = VersionRouter(
        {"^1": users_v1, "^2": users_v2},
        VersioningConfig(fallback_strategy="latest"),
    )

    response = await router(request)

Standalone ASGI app::

    from semroute import VersionedApp

    app = VersionedApp(router)
"""

__version__ = "0.1.0"

# Public name -> defining module. Resolved on first access.
_LAZY_IMPORTS: dict[str, str] = {
    # Router
    "VersionRouter": "semroute.router",
    "create_version_middleware": "semroute.router",
    # ASGI
    "VersionedApp": "semroute.asgi",
    # Config
    "DEFAULT_CONFIG": "semroute.config",
    "ErrorResponseConfig": "semroute.config",
    "ExtractionConfig": "semroute.config",
    "HeaderConfig": "semroute.config",
    "PathConfig": "semroute.config",
    "QueryConfig": "semroute.config",
    "VersioningConfig": "semroute.config",
    "resolve_config": "semroute.config",
    # Versions
    "Version": "semroute.version",
    "VersionRange": "semroute.version",
    "compare_versions": "semroute.version",
    "find_latest_version": "semroute.version",
    "is_valid_range": "semroute.version",
    "is_valid_version": "semroute.version",
    "normalize_version": "semroute.version",
    "parse_range": "semroute.version",
    "parse_version": "semroute.version",
    "satisfies": "semroute.version",
    # Extraction
    "ExtractionResult": "semroute.extraction",
    "VersionInfo": "semroute.extraction",
    # HTTP
    "Request": "semroute.http.request",
    "Response": "semroute.http.response",
    # Errors
    "InvalidConfiguration": "semroute.errors",
    "InvalidHandler": "semroute.errors",
    "InvalidVersionFormat": "semroute.errors",
    "MissingVersion": "semroute.errors",
    "SemrouteError": "semroute.errors",
    "VersionNotFound": "semroute.errors",
    "VersioningError": "semroute.errors",
    "has_error_code": "semroute.errors",
    "is_versioning_error": "semroute.errors",
}

__all__ = sorted(_LAZY_IMPORTS)


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import semroute`` cheap while providing a flat top-level API.
    """
    module_path = _LAZY_IMPORTS.get(name)
    if module_path is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    from importlib import import_module

    return getattr(import_module(module_path), name)
