"""Mutable HTTP request.

Unlike the response, a request is expected to change while a stack runs:
a pipe may rewrite ``path`` (or ``url``) and every later pipe matches
against the new value. Body access is async and cached.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator, Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote, urlsplit

from wren._internal.asgi import Receive, Scope
from wren.http.headers import Headers


async def _empty_receive() -> dict[str, Any]:
    return {"type": "http.request", "body": b"", "more_body": False}


@dataclass(slots=True)
class Request:
    """An HTTP request as seen by a middleware stack.

    ``url`` is the full request URL. ``path`` is the pre-parsed path
    supplied by the server; when it is ``None`` the path is derived from
    ``url`` on demand (see ``wren.middleware.stack.current_path``).
    """

    url: str
    method: str = "GET"
    path: str | None = None
    headers: Headers = field(default_factory=Headers)
    query_string: bytes = b""

    # Private: ASGI receive callable for body streaming
    _receive: Receive = field(default=_empty_receive, repr=False, compare=False)

    # Private: mutable cache for the body
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    # -- Computed properties --

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    @property
    def url_path(self) -> str:
        """Path component of ``url``, ignoring any rewritten ``path``."""
        return urlsplit(self.url).path or "/"

    # -- Async body access --

    async def body(self) -> bytes:
        """Read the full request body.

        Result is cached — the ASGI receive is consumed once, then
        the same bytes are returned on subsequent calls.
        """
        if "_body" in self._cache:
            return self._cache["_body"]
        chunks = [chunk async for chunk in self.stream()]
        result = b"".join(chunks)
        self._cache["_body"] = result
        return result

    async def stream(self) -> AsyncGenerator[bytes]:
        """Stream the request body in chunks."""
        while True:
            message = await self._receive()
            body = message.get("body", b"")
            if body:
                yield body
            if not message.get("more_body", False):
                break

    async def json(self) -> Any:
        """Parse the body as JSON."""
        import json as json_module

        raw = await self.body()
        return json_module.loads(raw)

    async def text(self) -> str:
        """Read the body as text (UTF-8)."""
        raw = await self.body()
        return raw.decode("utf-8")

    # -- Factories --

    @classmethod
    def from_url(
        cls,
        url: str,
        *,
        method: str = "GET",
        headers: Mapping[str, str] | None = None,
    ) -> Request:
        """Create a Request from a URL string.

        The path is left unset, so it is derived from *url*. Non-ASCII
        query text is percent-encoded the way it would arrive over ASGI::

            request = Request.from_url("http://localhost/users/42")
        """
        return cls(
            url=url,
            method=method.upper(),
            headers=Headers.from_dict(headers or {}),
            query_string=quote(urlsplit(url).query, safe="=&%+").encode("ascii"),
        )

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        """Create a Request from an ASGI scope and receive callable."""
        scheme = scope.get("scheme", "http")
        server = scope.get("server")
        host = f"{server[0]}:{server[1]}" if server else "localhost"
        path = scope["path"]
        query_string = scope.get("query_string", b"")
        url = f"{scheme}://{host}{scope.get('root_path', '')}{path}"
        if query_string:
            url = f"{url}?{query_string.decode('latin-1')}"
        return cls(
            url=url,
            method=scope.get("method", "GET"),
            path=path,
            headers=Headers.from_asgi(scope.get("headers", ())),
            query_string=query_string,
            _receive=receive,
        )
