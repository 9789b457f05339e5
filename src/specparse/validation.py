"""Primitive validators and first-error traversal helpers.

Every function here either returns ``None`` or raises a single
:class:`~specparse.exceptions.SpecValidationError` carrying the breadcrumb
path it was given. None of them know anything about the document tree; the
``check`` methods on the models string them together in a fixed order, so the
first rule broken in that order is the one reported and nothing after it
runs.

Breadcrumbs are built by the callers: ``.name`` for object descent and
``[index]`` for array descent. :func:`check_map_values` and
:func:`check_list_items` extend the path for each element they visit.

Missing values (``None``) are treated as "nothing to check" by every type,
format, enum and pattern validator. Required-ness is a separate concern
handled by :func:`check_required`.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Mapping
from typing import Any, Optional
from urllib.parse import urlsplit

from specparse.exceptions import SpecValidationError

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)
_STATUS_CLASS_RE = re.compile(r"^[1-5]XX$")
_STATUS_CODE_RE = re.compile(r"^[1-5][0-9][0-9]$")
_MEDIA_TYPE_RE = re.compile(
    r"^[a-zA-Z0-9][a-zA-Z0-9!#$&\-^_+.]*/[a-zA-Z0-9][a-zA-Z0-9!#$&\-^_+.]*$"
)
_MEDIA_RANGE_RE = re.compile(r"^[a-zA-Z0-9]+/\*$")
_WHITESPACE_RE = re.compile(r"\s")

_TYPE_NAMES = {
    "string": "a string",
    "integer": "an integer",
    "number": "a number",
    "boolean": "a boolean",
    "map": "a map",
    "list": "a list",
}


def _matches_type(value: Any, kind: str) -> bool:
    if kind == "string":
        return isinstance(value, str)
    if kind == "integer":
        return isinstance(value, int) and not isinstance(value, bool)
    if kind == "number":
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if kind == "boolean":
        return isinstance(value, bool)
    if kind == "map":
        return isinstance(value, Mapping)
    if kind == "list":
        return isinstance(value, list)
    raise ValueError(f"Unknown type kind: {kind}")


# --- Presence and shape ---


def check_required(fields: Mapping[str, Any], context: str) -> None:
    """Fail if any of *fields* (document name -> value) is ``None``.

    All missing names are reported together, in the order given.
    """
    missing = [name for name, value in fields.items() if value is None]
    if missing:
        raise SpecValidationError(context, f"Required field(s) missing: {', '.join(missing)}")


def check_type(value: Any, kind: str, path: str) -> None:
    """Check that *value* is of *kind*.

    *kind* is one of ``string``, ``integer``, ``number``, ``boolean``,
    ``map`` or ``list``. Booleans never count as integers or numbers.
    """
    if value is None:
        return
    if not _matches_type(value, kind):
        raise SpecValidationError(path, f"must be {_TYPE_NAMES[kind]}, got: {value!r}")


def check_list_of(value: Any, kind: str, path: str) -> None:
    """Check that *value* is a list whose every element is of *kind*."""
    if value is None:
        return
    check_type(value, "list", path)
    for index, item in enumerate(value):
        check_type(item, kind, f"{path}[{index}]")


def check_non_negative_integer(value: Any, path: str) -> None:
    """Check that *value* is an integer greater than or equal to zero."""
    if value is None:
        return
    check_type(value, "integer", path)
    if value < 0:
        raise SpecValidationError(path, f"must be a non-negative integer, got: {value!r}")


# --- Formats ---


def check_format(value: Any, kind: str, path: str) -> None:
    """Check the string format of *value*.

    *kind* is one of ``email``, ``uri``, ``uri-reference``, ``url`` or
    ``uuid``. ``None``, the empty string, and non-string values pass; type
    problems are reported by :func:`check_type`.
    """
    if not value or not isinstance(value, str):
        return

    if kind == "email":
        if not _EMAIL_RE.fullmatch(value):
            raise SpecValidationError(path, "must be a valid email address")
    elif kind == "uri":
        parts = _split(value)
        if parts is None or not parts.scheme:
            raise SpecValidationError(path, "must be a valid URI")
    elif kind == "uri-reference":
        if _WHITESPACE_RE.search(value) or _split(value) is None:
            raise SpecValidationError(path, "must be a valid URI reference")
    elif kind == "url":
        parts = _split(value)
        if parts is None or parts.scheme not in ("http", "https") or not parts.netloc:
            raise SpecValidationError(path, "must be a valid URL")
    elif kind == "uuid":
        if not _UUID_RE.fullmatch(value):
            raise SpecValidationError(path, "must be a valid UUID")
    else:
        raise ValueError(f"Unknown format kind: {kind}")


def _split(value: str):  # noqa: ANN202
    """``urlsplit`` that returns ``None`` instead of raising on malformed input."""
    try:
        return urlsplit(value)
    except ValueError:
        return None


def check_enum(value: Any, allowed: Iterable[Any], path: str) -> None:
    """Check that *value* is one of *allowed*."""
    if value is None:
        return
    allowed = list(allowed)
    if value not in allowed:
        options = ", ".join(repr(item) for item in allowed)
        raise SpecValidationError(path, f"must be one of: {options}, got: {value!r}")


def check_pattern(value: Optional[str], pattern: str | re.Pattern[str], path: str) -> None:
    """Check that *value* contains a match for *pattern*."""
    if not value:
        return
    if not re.search(pattern, value):
        raise SpecValidationError(path, "does not match the required pattern")


def check_status_code(code: str | int, path: str) -> None:
    """Check an HTTP status code key.

    Accepts a literal code from 100 to 599 (string or integer), ``"default"``,
    or a range pattern ``"1XX"`` .. ``"5XX"``.
    """
    text = str(code)
    if text == "default" or _STATUS_CLASS_RE.fullmatch(text) or _STATUS_CODE_RE.fullmatch(text):
        return
    raise SpecValidationError(
        path,
        "must be a valid HTTP status code or pattern (e.g., '200', '2XX', 'default')",
    )


def check_path_format(value: str, path: str) -> None:
    """Check that a path template starts with a forward slash."""
    if not str(value).startswith("/"):
        raise SpecValidationError(path, f"must start with '/', got: {value}")


def check_reference(ref: Any, path: str) -> None:
    """Check a ``$ref`` pointer.

    Valid pointers are internal fragments (``#/...``), absolute URIs (contain
    ``://``), or relative paths with a fragment (contain ``#``).
    """
    if ref is None:
        raise SpecValidationError(path, "$ref is required")
    if not isinstance(ref, str):
        raise SpecValidationError(path, f"$ref must be a string, got: {ref!r}")
    if ref.startswith("#/") or "://" in ref or "#" in ref:
        return
    raise SpecValidationError(path, "$ref must be a valid reference (internal or external)")


def check_content_type(value: str, path: str) -> None:
    """Check a media type: ``type/subtype``, ``type/*`` or ``*/*``."""
    text = str(value)
    if text == "*/*" or _MEDIA_TYPE_RE.fullmatch(text) or _MEDIA_RANGE_RE.fullmatch(text):
        return
    raise SpecValidationError(path, "must be a valid media type")


# --- Cross-field helpers ---


def check_mutually_exclusive(first: tuple[str, Any], second: tuple[str, Any], context: str) -> None:
    """Fail when both ``(name, value)`` pairs carry a value."""
    (first_name, first_value), (second_name, second_value) = first, second
    if first_value is not None and second_value is not None:
        raise SpecValidationError(
            context, f"{first_name} and {second_name} are mutually exclusive"
        )


# --- Traversal ---


def check_map_values(
    mapping: Optional[Mapping[Any, Any]],
    validator: Callable[[Any, str], None],
    path: str,
) -> None:
    """Run *validator* on each value of *mapping* as ``validator(value, "<path>.<key>")``."""
    if not mapping:
        return
    for key, value in mapping.items():
        validator(value, f"{path}.{key}")


def check_list_items(
    items: Optional[list[Any]],
    validator: Callable[[Any, str], None],
    path: str,
) -> None:
    """Run *validator* on each element of *items* as ``validator(item, "<path>[<index>]")``."""
    if not items:
        return
    for index, item in enumerate(items):
        validator(item, f"{path}[{index}]")


def check_node(node: Any, path: str) -> None:
    """Check an optional child node (concrete object or Reference)."""
    if node is not None:
        node.check(path)


def check_nodes(value: Any, path: str) -> None:
    """Check every node in a list or in the values of a map of child nodes."""
    if isinstance(value, Mapping):
        check_map_values(value, check_node, path)
    else:
        check_list_items(value, check_node, path)
