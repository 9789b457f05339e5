"""Read API-description documents from a URL, local file, or stdin.

This module owns all I/O and text decoding. It turns a source into the
decoded top-level map that :mod:`specparse.parser.dispatch` inspects.

The public functions are:

* :func:`load_spec` -- Read a source and decode it.
* :func:`read_source` -- Read a source and return its text with a format hint.
* :func:`decode_content` -- Decode JSON or YAML text.
* :func:`format_from_path` -- Pick a format from a file extension.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

import httpx
import yaml

from specparse.exceptions import SpecLoadError

logger = logging.getLogger(__name__)

FORMATS = ("auto", "json", "yaml")


def load_spec(source: str, format: str = "auto") -> dict[str, Any]:
    """Load a document from URL, file path, or stdin ('-').

    Args:
        source: A URL (http/https), file path, or '-' for stdin.
        format: ``"auto"``, ``"json"`` or ``"yaml"``. With ``"auto"`` the
            file extension or response content type is used as a hint.

    Returns:
        The decoded top-level map.

    Raises:
        SpecLoadError: If the source cannot be read or decoded.
    """
    content, hint = read_source(source)
    if format == "auto" and hint:
        format = hint
    return decode_content(content, format)


def read_source(source: str) -> tuple[str, str]:
    """Return ``(content, format_hint)`` for *source*.

    The hint is ``"json"``, ``"yaml"`` or ``""`` when nothing is known.
    """
    if source == "-":
        return _read_stdin(), ""
    elif source.startswith(("http://", "https://")):
        return _read_url(source)
    else:
        return _read_file(source)


def _read_stdin() -> str:
    try:
        content = sys.stdin.read()
    except OSError as exc:
        raise SpecLoadError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise SpecLoadError("No input received from stdin")
    return content


def _read_url(url: str) -> tuple[str, str]:
    """Fetch a document over HTTP(S).

    Raises:
        SpecLoadError: If the URL cannot be fetched.
    """
    logger.debug("Fetching %s", url)
    try:
        response = httpx.get(url, timeout=30.0, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise SpecLoadError(
            f"HTTP {exc.response.status_code} fetching document from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise SpecLoadError(f"Failed to fetch document from {url}: {exc}") from exc

    content_type = response.headers.get("content-type", "")
    hint = ""
    if "json" in content_type:
        hint = "json"
    elif "yaml" in content_type or "yml" in content_type:
        hint = "yaml"
    return response.text, hint


def _read_file(path: str) -> tuple[str, str]:
    file_path = Path(path)
    if not file_path.is_file():
        raise SpecLoadError(f"Document file not found: {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SpecLoadError(f"Failed to read file {path}: {exc}") from exc

    if not content.strip():
        raise SpecLoadError(f"Document file is empty: {path}")

    hint = format_from_path(path)
    return content, "" if hint == "auto" else hint


def format_from_path(path: str | Path, format: str = "auto") -> str:
    """Resolve ``"auto"`` from the file extension; explicit formats win."""
    if format != "auto":
        return format
    suffix = Path(path).suffix.lower()
    if suffix == ".json":
        return "json"
    if suffix in (".yaml", ".yml"):
        return "yaml"
    return "auto"


def decode_content(content: str, format: str = "auto") -> dict[str, Any]:
    """Decode *content* as JSON or YAML.

    ``"auto"`` tries JSON first and falls back to YAML, since valid JSON is
    also valid YAML but JSON parsing is stricter.

    Args:
        content: The raw text.
        format: ``"auto"``, ``"json"`` or ``"yaml"``.

    Returns:
        The decoded top-level map.

    Raises:
        SpecLoadError: If the text cannot be decoded in the requested
            format, or the top level is not a map.
    """
    if format not in FORMATS:
        raise SpecLoadError(f"Unknown format: {format} (expected one of: {', '.join(FORMATS)})")

    if format == "json":
        result = _decode_json(content)
    elif format == "yaml":
        result = _decode_yaml(content)
    else:
        try:
            result = json.loads(content)
        except json.JSONDecodeError:
            logger.debug("Content is not JSON, trying YAML")
            result = _decode_yaml(content)

    if not isinstance(result, dict):
        kind = type(result).__name__ if result is not None else "empty document"
        raise SpecLoadError(f"Document must be a JSON/YAML object (got {kind})")
    return result


def _decode_json(content: str) -> Any:
    try:
        return json.loads(content)
    except json.JSONDecodeError as exc:
        raise SpecLoadError(f"JSON decode error: {exc}") from exc


def _decode_yaml(content: str) -> Any:
    try:
        return yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise SpecLoadError(f"YAML decode error: {exc}") from exc
