"""Ordered middleware pipes.

A stack is a tuple of pipes evaluated left to right. Each pipe pairs a
pattern with a handler; when the pattern matches, the handler runs.
The first handler to return something other than ``None`` ends the
stack and its return value becomes the result::

    from wren import middleware_stack, pipe

    stack = middleware_stack([
        pipe("/users/:id", load_user),
        pipe(re.compile(r"^/admin/"), require_admin),
        pipe(lambda request: True, add_timing),
    ])

    response = await stack(request)  # Response, or None if nothing answered

Patterns:
    str          route template, compared with ``compare_path``
    re.Pattern   matches when ``pattern.search(path)`` finds something
    callable     ``(request) -> bool``, sync or async

The path is read from the request at the top of every iteration, so a
handler that rewrites ``request.path`` changes what later pipes see.
"""

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlsplit

from wren._internal.invoke import invoke
from wren.config import StackConfig
from wren.errors import ConfigurationError
from wren.middleware.protocol import Dispatch, MiddlewareHandler, Pattern
from wren.routing.compare import compare_path

logger = logging.getLogger("wren.stack")

# Only pipe() holds this; Pipe(...) built any other way is rejected
_PIPE_BRAND = object()


@dataclass(frozen=True, slots=True)
class Pipe:
    """A pattern paired with the handler it guards.

    Create with ``pipe()``. Instantiating ``Pipe`` directly raises
    ``ConfigurationError``, and a plain ``(pattern, handler)`` tuple is
    refused by ``middleware_stack()``.
    """

    pattern: Pattern
    handler: MiddlewareHandler
    _brand: object = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self._brand is not _PIPE_BRAND:
            msg = "Pipe values must be created with pipe(pattern, handler)."
            raise ConfigurationError(msg)


def pipe(pattern: Pattern, handler: MiddlewareHandler) -> Pipe:
    """Create a middleware pipe (pattern + handler)."""
    return Pipe(pattern=pattern, handler=handler, _brand=_PIPE_BRAND)


def current_path(request: Any) -> str:
    """Return the path a pipe should match against.

    Prefers the pre-parsed ``request.path``; falls back to the path
    component of ``request.url``.
    """
    path = getattr(request, "path", None)
    if path is not None:
        return path
    return urlsplit(request.url).path or "/"


async def _matches(pattern: Any, request: Any, path: str, config: StackConfig) -> bool:
    match pattern:
        case str():
            return compare_path(
                pattern,
                path,
                strict_slashes=config.strict_slashes,
                case_sensitive=config.case_sensitive,
            ).matched
        case re.Pattern():
            return pattern.search(path) is not None
        case _ if callable(pattern):
            return bool(await invoke(pattern, request))
        case _:
            return False


def middleware_stack(
    pipes: Sequence[Pipe],
    *,
    config: StackConfig | None = None,
) -> Dispatch:
    """Create a middleware stack that executes pipes in order.

    - For each pipe: if the pattern matches, run the handler.
    - If the handler returns anything but ``None``, short-circuit and
      return it.
    - Otherwise continue to the next pipe.

    Errors raised by patterns or handlers propagate unchanged.

    Raises ``ConfigurationError`` if any element of *pipes* was not
    created with ``pipe()``.
    """
    cfg = config or StackConfig()
    frozen = tuple(pipes)
    for index, entry in enumerate(frozen):
        if not isinstance(entry, Pipe):
            msg = (
                f"Stack {cfg.name!r} entry {index} is {type(entry).__name__}, not Pipe. "
                "Wrap each (pattern, handler) with pipe()."
            )
            raise ConfigurationError(msg)

    async def dispatch(request: Any) -> Any | None:
        for index, entry in enumerate(frozen):
            # Recompute each iteration: a previous handler may rewrite the path
            path = current_path(request)
            if not await _matches(entry.pattern, request, path, cfg):
                continue

            logger.debug("%s: pipe %d matched %s", cfg.name, index, path)
            result = await invoke(entry.handler, request)
            if result is not None:
                logger.debug("%s: pipe %d short-circuited %s", cfg.name, index, path)
                return result
        return None

    return dispatch
