"""Run a middleware stack inside a ``(request, next)`` middleware chain."""

from wren.http.request import Request
from wren.http.response import Response
from wren.middleware.asgi import negotiate
from wren.middleware.protocol import Dispatch, Middleware, Next


def as_middleware(stack: Dispatch) -> Middleware:
    """Wrap *stack* as ``async def mw(request, next)``.

    The stack's result is returned (as a ``Response``) when there is
    one; otherwise the request, possibly rewritten by the stack, goes
    to ``next``::

        chain_middleware = as_middleware(middleware_stack([...]))
    """

    async def middleware(request: Request, next: Next) -> Response:
        result = await stack(request)
        if result is not None:
            return negotiate(result)
        return await next(request)

    return middleware
