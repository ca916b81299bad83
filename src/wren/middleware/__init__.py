"""Middleware — ordered pipes with short-circuit dispatch.

A stack is built from pipes and called once per request:
    stack = middleware_stack([pipe(pattern, handler), ...])
    result = await stack(request)

Adapters:
    StackMiddleware -- Run a stack in front of an ASGI app
    as_middleware -- Run a stack inside a (request, next) chain
"""

from wren.middleware.adapter import as_middleware
from wren.middleware.asgi import StackMiddleware, negotiate, send_response
from wren.middleware.protocol import (
    Dispatch,
    Middleware,
    MiddlewareHandler,
    Next,
    Pattern,
    PatternFn,
)
from wren.middleware.stack import Pipe, current_path, middleware_stack, pipe

__all__ = [
    "Dispatch",
    "Middleware",
    "MiddlewareHandler",
    "Next",
    "Pattern",
    "PatternFn",
    "Pipe",
    "StackMiddleware",
    "as_middleware",
    "current_path",
    "middleware_stack",
    "negotiate",
    "pipe",
    "send_response",
]
