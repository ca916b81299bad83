"""Routing — route-template parsing and path comparison.

String patterns in a middleware stack are route templates. This
package decides whether a concrete path satisfies one::

    from wren.routing import compare_path

    matched, params = compare_path("/users/:id", "/users/42")
"""

from wren.routing.compare import CONVERTERS, PathMatch, compare_path, parse_template

__all__ = [
    "CONVERTERS",
    "PathMatch",
    "compare_path",
    "parse_template",
]
