"""Route-template comparison.

Decides whether a concrete request path satisfies a route template and
extracts named segments. Templates are parsed once and cached.

Segment syntax::

    /users            static segment
    /users/:id        named segment (one path segment)
    /users/{id}       named segment, brace form
    /users/{id:int}   named segment validated by a converter
    /files/{rest:path}  one or more remaining segments, captured
    /assets/*         exactly one segment, not captured
    /assets/**        zero or more remaining segments, not captured
"""

import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from functools import lru_cache

from wren.errors import ConfigurationError

# Segment regex for each supported ``{name:converter}``
CONVERTERS: dict[str, str] = {
    "str": r"[^/]+",
    "int": r"\d+",
    "float": r"\d+(?:\.\d+)?",
    "path": r".+",
}


@dataclass(frozen=True, slots=True)
class TemplateSegment:
    """A parsed segment of a route template.

    Static:   ``users``     (is_param=False)
    Param:    ``:id``       (is_param=True, param_name="id")
    Typed:    ``{id:int}``  (is_param=True, param_name="id", param_type="int")
    Wildcard: ``*``         (is_param=True, param_name=None)
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    param_type: str = "str"
    regex: re.Pattern[str] | None = None

    @property
    def is_catch_all(self) -> bool:
        return self.param_type == "path"


@dataclass(frozen=True, slots=True)
class Template:
    """A parsed route template."""

    source: str
    segments: tuple[TemplateSegment, ...]
    trailing_slash: bool


@dataclass(frozen=True, slots=True)
class PathMatch:
    """Result of comparing a path against a template.

    Truthy only when the path matched. Unpacks as ``(matched, params)``::

        if compare_path("/users/:id", path):
            ...
        matched, params = compare_path("/users/:id", path)
    """

    matched: bool
    params: dict[str, str] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return self.matched

    def __iter__(self) -> Iterator[object]:
        yield self.matched
        yield self.params


def _has_trailing_slash(path: str) -> bool:
    return len(path) > 1 and path.endswith("/")


def _param_segment(part: str, name: str, param_type: str, template: str) -> TemplateSegment:
    if not name:
        msg = f"Empty parameter name in route template {template!r}."
        raise ConfigurationError(msg)
    if param_type not in CONVERTERS:
        known = ", ".join(sorted(CONVERTERS))
        msg = (
            f"Unknown converter {param_type!r} in route template {template!r}. "
            f"Known converters: {known}."
        )
        raise ConfigurationError(msg)
    pattern = CONVERTERS[param_type]
    return TemplateSegment(
        value=part,
        is_param=True,
        param_name=name,
        param_type=param_type,
        regex=re.compile(pattern),
    )


@lru_cache(maxsize=512)
def parse_template(template: str) -> Template:
    """Parse a route template into segments.

    Examples::

        "/users"            -> [TemplateSegment("users")]
        "/users/:id"        -> [TemplateSegment("users"), TemplateSegment(":id", is_param=True, ...)]
        "/users/{id:int}"   -> [..., TemplateSegment("{id:int}", is_param=True, param_type="int")]
        "/files/{rest:path}" -> [..., TemplateSegment("{rest:path}", is_param=True, param_type="path")]

    Raises ``ConfigurationError`` for malformed templates.
    """
    segments: list[TemplateSegment] = []
    for part in template.strip("/").split("/"):
        if not part:
            continue
        if segments and segments[-1].is_catch_all:
            msg = f"Catch-all segment must be last in route template {template!r}."
            raise ConfigurationError(msg)
        if part.startswith("<") and part.endswith(">"):
            msg = (
                f"Route template {template!r} uses <param> syntax. "
                "Use :param or {param} instead."
            )
            raise ConfigurationError(msg)
        if part.startswith("{") and part.endswith("}"):
            inner = part[1:-1]
            if ":" in inner:
                name, param_type = inner.split(":", 1)
            else:
                name, param_type = inner, "str"
            segments.append(_param_segment(part, name, param_type, template))
        elif part.startswith(":"):
            segments.append(_param_segment(part, part[1:], "str", template))
        elif part == "*":
            pattern = CONVERTERS["str"]
            segments.append(TemplateSegment(value=part, is_param=True, regex=re.compile(pattern)))
        elif part == "**":
            segments.append(TemplateSegment(value=part, is_param=True, param_type="path"))
        else:
            segments.append(TemplateSegment(value=part))
    return Template(
        source=template,
        segments=tuple(segments),
        trailing_slash=_has_trailing_slash(template),
    )



def compare_path(
    template: str,
    path: str,
    *,
    strict_slashes: bool = False,
    case_sensitive: bool = True,
) -> PathMatch:
    """Compare *path* against route *template*.

    Returns a ``PathMatch`` whose ``params`` holds the named segments.
    Trailing slashes are ignored unless *strict_slashes* is set.
    """
    parsed = parse_template(template)
    if strict_slashes and parsed.trailing_slash != _has_trailing_slash(path):
        return PathMatch(matched=False)

    parts = [p for p in path.split("/") if p]
    params: dict[str, str] = {}

    for index, seg in enumerate(parsed.segments):
        if seg.is_catch_all:
            rest = parts[index:]
            # Named catch-all needs at least one segment; ``**`` accepts none
            if seg.param_name is not None:
                if not rest:
                    return PathMatch(matched=False)
                params[seg.param_name] = "/".join(rest)
            return PathMatch(matched=True, params=params)

        if index >= len(parts):
            return PathMatch(matched=False)
        part = parts[index]

        if seg.is_param:
            if seg.regex is None or seg.regex.fullmatch(part) is None:
                return PathMatch(matched=False)
            if seg.param_name is not None:
                params[seg.param_name] = part
        elif case_sensitive:
            if seg.value != part:
                return PathMatch(matched=False)
        elif seg.value.casefold() != part.casefold():
            return PathMatch(matched=False)

    if len(parts) != len(parsed.segments):
        return PathMatch(matched=False)
    return PathMatch(matched=True, params=params)
