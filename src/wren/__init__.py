"""Wren — ordered middleware pipes with short-circuit dispatch.

Pair patterns with handlers, run them in order, stop at the first
handler that answers.

Basic usage::

    import re

    from wren import Response, middleware_stack, pipe

    async def block(request):
        return Response("Forbidden", status=403)

    stack = middleware_stack([
        pipe(re.compile(r"^/admin/"), block),
        pipe("/users/:id", load_user),
        pipe(lambda request: True, log_request),
    ])

    response = await stack(request)  # None when no handler answered

In front of an ASGI app::

    from wren import StackMiddleware

    app = StackMiddleware(inner_app, stack)
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "Headers",
    "PathMatch",
    "Pipe",
    "Request",
    "Response",
    "StackConfig",
    "StackMiddleware",
    "WrenError",
    "as_middleware",
    "compare_path",
    "current_path",
    "middleware_stack",
    "pipe",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import wren`` fast while providing a clean top-level API.
    """
    if name in ("Pipe", "current_path", "middleware_stack", "pipe"):
        from wren.middleware import stack as _stack

        return getattr(_stack, name)

    if name == "StackMiddleware":
        from wren.middleware.asgi import StackMiddleware

        return StackMiddleware

    if name == "as_middleware":
        from wren.middleware.adapter import as_middleware

        return as_middleware

    if name in ("PathMatch", "compare_path"):
        from wren.routing import compare as _compare

        return getattr(_compare, name)

    if name == "Request":
        from wren.http.request import Request

        return Request

    if name == "Response":
        from wren.http.response import Response

        return Response

    if name == "Headers":
        from wren.http.headers import Headers

        return Headers

    if name == "StackConfig":
        from wren.config import StackConfig

        return StackConfig

    if name in ("WrenError", "ConfigurationError"):
        from wren import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
