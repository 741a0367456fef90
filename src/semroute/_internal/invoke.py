"""Invoke helpers — call sync or async handlers uniformly.

Versioned handlers, default handlers and ``on_error`` hooks can all be
``def`` or ``async def``. The sync/async check lives here so every caller
observes both branches the same way: a sync raise and an awaitable that
fails both surface as an exception from ``await invoke(...)``, exactly
once.

Usage::

    from semroute._internal.invoke import invoke

    result = await invoke(handler, request)
"""

import inspect
from collections.abc import Callable
from typing import Any


async def invoke(handler: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    """Call *handler* and await the result if it is awaitable."""
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
