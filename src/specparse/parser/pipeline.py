"""The parse pipeline: decode, detect, construct, resolve, validate.

Each entry point stops at the first failure and raises it unchanged:

* :class:`~specparse.exceptions.SpecLoadError` -- the text cannot be decoded.
* :class:`~specparse.exceptions.UnsupportedVersionError` -- unknown dialect.
* :class:`~specparse.exceptions.StructuralError` -- construction failed.
* :class:`~specparse.exceptions.SpecValidationError` -- the first semantic error.

``validate=False`` is the "parse only" mode: the tree is built but not checked.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from specparse.exceptions import SpecLoadError, StructuralError
from specparse.models.document import RootDocument
from specparse.parser.dispatch import construct_document
from specparse.parser.loader import decode_content, format_from_path, read_source
from specparse.parser.resolver import resolve_references

logger = logging.getLogger(__name__)

# Maps and lists, counted from the top-level object. Construction and
# validation recurse once per level, so this bounds the Python stack.
MAX_NESTING_DEPTH = 128


def check_nesting_depth(data: Any, limit: int = MAX_NESTING_DEPTH) -> None:
    """Raise ``StructuralError`` when *data* nests deeper than *limit*.

    The walk keeps its own stack, so it never recurses itself.
    """
    pending = [(data, 1)]
    while pending:
        value, depth = pending.pop()
        if isinstance(value, dict):
            children = list(value.values())
        elif isinstance(value, list):
            children = value
        else:
            continue
        if depth > limit:
            raise StructuralError(f"Document nesting too deep (more than {limit} levels)")
        pending.extend((child, depth + 1) for child in children)


def parse_data(
    data: dict[str, Any],
    validate: bool = True,
    resolve_refs: bool = False,
) -> RootDocument:
    """Run the pipeline on an already decoded map."""
    if not isinstance(data, dict):
        raise SpecLoadError(f"Document must be a JSON/YAML object (got {type(data).__name__})")
    check_nesting_depth(data)
    document = construct_document(data)
    if resolve_refs:
        document = resolve_references(document)
    if validate:
        document.check()
        logger.debug("%s document is valid", document.version.label)
    return document


def parse(
    content: str,
    format: str = "auto",
    validate: bool = True,
    resolve_refs: bool = False,
) -> RootDocument:
    """Decode *content* and run the pipeline.

    Args:
        content: JSON or YAML text.
        format: ``"auto"`` (JSON, then YAML), ``"json"`` or ``"yaml"``.
        validate: Check the built tree and raise its first error.
        resolve_refs: Run the reference-resolution pass before validating.

    Returns:
        The tagged root document.
    """
    data = decode_content(content, format)
    return parse_data(data, validate=validate, resolve_refs=resolve_refs)


def parse_file(
    path: str | Path,
    format: str = "auto",
    validate: bool = True,
    resolve_refs: bool = False,
) -> RootDocument:
    """Read a local file and run the pipeline.

    With ``format="auto"`` the extension (``.json``, ``.yaml``, ``.yml``)
    selects the decoder.
    """
    file_path = Path(path)
    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SpecLoadError(f"Failed to read file {path}: {exc}") from exc
    return parse(
        content,
        format=format_from_path(file_path, format),
        validate=validate,
        resolve_refs=resolve_refs,
    )


def parse_source(
    source: str,
    format: str = "auto",
    validate: bool = True,
    resolve_refs: bool = False,
) -> RootDocument:
    """Read a file path, URL or ``-`` (stdin) and run the pipeline."""
    content, hint = read_source(source)
    if format == "auto" and hint:
        format = hint
    return parse(content, format=format, validate=validate, resolve_refs=resolve_refs)
