"""Wren exception hierarchy.

Build-time problems raise ``ConfigurationError``. Errors raised by
patterns or handlers while a stack runs are never wrapped: they reach
the caller of the dispatch function unchanged.
"""


class WrenError(Exception):
    """Base for all wren-specific errors."""


class ConfigurationError(WrenError):
    """Raised when a stack or route template is malformed.

    Typically raised by ``middleware_stack()`` at build time, or by
    ``compare_path()`` the first time a bad template is evaluated.
    """
