"""ASGI adapter — mount a ``VersionRouter`` under any ASGI server.

The only module that touches raw ASGI messages. Converts the scope to a
``Request``, awaits the router, converts the returned value to a
``Response`` and sends it::

    app = VersionedApp(VersionRouter({"^1": v1, "^2": v2}))
    # uvicorn module:app, hypercorn module:app, ...
"""

import logging
from typing import Any

from semroute._internal.asgi import Receive, Scope, Send
from semroute.http.request import Request
from semroute.http.response import Response, json_response
from semroute.router import VersionRouter

logger = logging.getLogger("semroute.server")


def to_response(value: Any) -> Response:
    """Convert a handler's return value to a Response.

    1. ``Response``            -> pass through
    2. ``str``                 -> 200, text/plain
    3. ``bytes``               -> 200, application/octet-stream
    4. ``dict`` / ``list``     -> 200, application/json
    5. ``None``                -> 204, empty
    6. ``(value, int)``        -> convert value, override status
    """
    match value:
        case Response():
            return value
        case tuple() if len(value) == 2 and isinstance(value[1], int):
            return to_response(value[0]).with_status(value[1])
        case str():
            return Response(body=value)
        case bytes():
            return Response(body=value, content_type="application/octet-stream")
        case dict() | list():
            return json_response(value)
        case None:
            return Response(status=204)
    msg = f"Cannot convert {type(value).__name__} to a response"
    raise TypeError(msg)


def _body_allowed(status: int) -> bool:
    return not (100 <= status < 200 or status in {204, 304})


async def send_response(response: Response, send: Send) -> None:
    """Translate a Response into ASGI ``send()`` calls."""
    body = response.body_bytes if _body_allowed(response.status) else b""
    raw_headers = [
        (b"content-type", response.content_type.encode("latin-1")),
        *(
            (name.lower().encode("latin-1"), value.encode("latin-1"))
            for name, value in response.headers
        ),
        (b"content-length", str(len(body)).encode("latin-1")),
    ]
    await send({"type": "http.response.start", "status": response.status, "headers": raw_headers})
    await send({"type": "http.response.body", "body": body})


async def _lifespan(receive: Receive, send: Send) -> None:
    while True:
        message = await receive()
        if message["type"] == "lifespan.startup":
            await send({"type": "lifespan.startup.complete"})
        elif message["type"] == "lifespan.shutdown":
            await send({"type": "lifespan.shutdown.complete"})
            return


class VersionedApp:
    """ASGI 3 application wrapping a router.

    Handler exceptions are logged and answered with a JSON 500
    (``{"error": "INTERNAL_ERROR", "message": "Internal Server Error"}``).
    The body never carries the exception text or a traceback.
    """

    __slots__ = ("router",)

    def __init__(self, router: VersionRouter) -> None:
        self.router = router

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "lifespan":
            await _lifespan(receive, send)
            return
        if scope["type"] != "http":
            return

        request = Request.from_asgi(scope)
        try:
            response = to_response(await self.router(request))
        except Exception:
            logger.exception("500 %s %s", request.method, request.path)
            response = json_response(
                {"error": "INTERNAL_ERROR", "message": "Internal Server Error"}, status=500
            )
        await send_response(response, send)
