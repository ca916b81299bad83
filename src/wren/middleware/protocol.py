"""Pattern, handler, and middleware type aliases.

A handler is any callable matching::

    def handler(request: Request) -> Response | None: ...
    async def handler(request: Request) -> Response | None: ...

Returning ``None`` lets the stack continue with the next pipe.
Returning anything else short-circuits the stack with that value.
"""

import re
from collections.abc import Awaitable, Callable
from typing import Any, Protocol

from wren.http.request import Request
from wren.http.response import Response

# A predicate pattern, sync or async
type PatternFn = Callable[[Any], bool | Awaitable[bool]]

# Anything a pipe can match with
type Pattern = str | re.Pattern[str] | PatternFn

# A pipe handler, sync or async; None means "continue"
type MiddlewareHandler = Callable[[Any], Any | None | Awaitable[Any | None]]

# The function produced by middleware_stack()
type Dispatch = Callable[[Any], Awaitable[Any | None]]

# The next handler in a (request, next) middleware chain
type Next = Callable[[Request], Awaitable[Response]]


class Middleware(Protocol):
    """Protocol for ``(request, next)`` middleware.

    ``as_middleware()`` produces callables of this shape so a stack can
    sit in a framework's middleware chain::

        async def timing(request: Request, next: Next) -> Response:
            start = time.monotonic()
            response = await next(request)
            elapsed = time.monotonic() - start
            return response.with_header("X-Time", f"{elapsed:.3f}")
    """

    async def __call__(self, request: Request, next: Next) -> Response: ...
