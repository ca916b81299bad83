"""Invoke helpers — call sync or async callables uniformly.

Patterns and handlers in a wren stack can be ``def`` or ``async def``.
Any code that calls a user-provided callable must handle both cases.
This module provides a single helper so the sync/async check lives in
exactly one place.

Usage::

    from wren._internal.invoke import invoke

    result = await invoke(handler, request)
"""

import inspect
from typing import Any


async def invoke(func: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *func* and await the result if it is awaitable.

    Works with both sync and async callables::

        # sync: returns immediately
        def is_admin(request):
            return request.headers.get("x-role") == "admin"

        # async: returns a coroutine, awaited here
        async def is_admin(request):
            return await lookup_role(request) == "admin"
    """
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
