"""ASGI adapter — run a middleware stack in front of any ASGI app.

For each HTTP request the stack runs first. A result ends the request
and is sent as the response; ``None`` forwards the request to the
wrapped app, with any path rewrite applied to the scope::

    app = StackMiddleware(inner_app, middleware_stack([...]))
"""

import logging
from typing import Any
from urllib.parse import quote

from wren._internal.asgi import ASGIApp, Receive, Scope, Send
from wren.http.request import Request
from wren.http.response import Response
from wren.middleware.protocol import Dispatch

logger = logging.getLogger("wren.server")


def negotiate(value: Any) -> Response:
    """Convert a stack result to a ``Response``.

    Dispatch order:

    1. ``Response``         -> pass through
    2. ``str``              -> 200, text/html
    3. ``bytes``            -> 200, application/octet-stream
    4. ``dict`` / ``list``  -> 200, application/json
    """
    match value:
        case Response():
            return value
        case str():
            return Response(body=value, content_type="text/html; charset=utf-8")
        case bytes():
            return Response(body=value, content_type="application/octet-stream")
        case dict() | list():
            return Response.json(value)
        case _:
            msg = f"Cannot convert {type(value).__name__} to a response."
            raise TypeError(msg)


async def send_response(response: Response, send: Send) -> None:
    """Translate a Response into ASGI send() calls."""
    raw_headers: list[tuple[bytes, bytes]] = [
        (b"content-type", response.content_type.encode("latin-1")),
    ]
    for name, value in response.headers:
        raw_headers.append((name.lower().encode("latin-1"), value.encode("latin-1")))

    # RFC: 1xx, 204, and 304 responses do not include a message body.
    body_allowed = not (100 <= response.status < 200 or response.status in {204, 304})
    body = response.body_bytes if body_allowed else b""
    raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))

    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": raw_headers,
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": body,
        }
    )


class StackMiddleware:
    """ASGI middleware that runs a stack before the wrapped app.

    Non-HTTP scopes (lifespan, websocket) pass straight through.
    """

    __slots__ = ("app", "stack")

    def __init__(self, app: ASGIApp, stack: Dispatch) -> None:
        self.app = app
        self.stack = stack

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request.from_asgi(scope, receive)
        result = await self.stack(request)
        if result is not None:
            await send_response(negotiate(result), send)
            return

        path = request.path if request.path is not None else request.url_path
        if path != scope["path"]:
            logger.debug("Forwarding %s as %s", scope["path"], path)
            # raw_path is the percent-encoded form of path
            scope = {**scope, "path": path, "raw_path": quote(path).encode("ascii")}
        await self.app(scope, receive, send)
