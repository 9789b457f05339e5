"""The ``specparse inspect`` command -- summarise a parsed document."""

from __future__ import annotations

from typing import Any, Optional

import typer

from specparse.commands.validate import load_document
from specparse.models.document import RootDocument
from specparse.output import OutputFormat, get_output


def summarize(root: RootDocument) -> dict[str, Any]:
    """Return the headline counts shown by ``inspect``."""
    return {
        "dialect": root.version.label,
        "title": root.title,
        "version": root.api_version,
        "paths": root.path_count,
        "operations": sum(1 for _ in root.operations()),
        "schemas": root.schema_count,
    }


def operation_rows(root: RootDocument) -> list[list[str]]:
    """One ``[METHOD, path, operationId]`` row per operation, sorted by path."""
    rows = [
        [method.upper(), path, operation.operation_id or "-"]
        for path, method, operation in root.operations()
    ]
    return sorted(rows, key=lambda row: (row[1], row[0]))


def inspect_command(
    source: str = typer.Argument(..., help="File path, URL, or '-' for stdin."),
    format: Optional[str] = typer.Option(
        None, "--format", help="Input format: auto, json or yaml."
    ),
    parse_only: bool = typer.Option(
        False, "--parse-only", help="Build the document without validating it."
    ),
) -> None:
    """Show a document's dialect, title, counts, and operations.

    Example::

        specparse inspect openapi.yaml
        specparse --json inspect swagger.json
    """
    root = load_document(source, format=format, parse_only=parse_only)
    summary = summarize(root)
    headers = ["Method", "Path", "Operation ID"]
    rows = operation_rows(root)

    output = get_output()
    if output.format == OutputFormat.JSON:
        summary["operation_list"] = [dict(zip(headers, row)) for row in rows]
        output.print_json(summary)
        return

    output.print_record(summary, title=f"{root.title} ({root.version.label})")
    if rows:
        output.print_table(headers, rows, title=f"Operations ({len(rows)})")
    else:
        output.info("No operations defined.")
