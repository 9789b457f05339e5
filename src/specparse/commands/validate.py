"""The ``specparse validate`` command."""

from __future__ import annotations

import logging
from typing import Optional

import typer

from specparse.config import resolve_options
from specparse.exceptions import InvalidUsageError, SpecparseError
from specparse.models.document import RootDocument
from specparse.output import OutputFormat, error, get_output
from specparse.parser import parse_source
from specparse.parser.loader import FORMATS

logger = logging.getLogger(__name__)


def load_document(
    source: str,
    format: Optional[str] = None,
    parse_only: bool = False,
    resolve_refs: bool = False,
) -> RootDocument:
    """Resolve options and run the parse pipeline for a CLI command.

    Flags that were not given fall through to the environment and the
    project config.

    Raises:
        typer.Exit: With the error's exit code after printing the single
            diagnostic to stderr.
    """
    try:
        if format is not None and format not in FORMATS:
            raise InvalidUsageError(
                f"--format must be one of: {', '.join(FORMATS)} (got {format!r})"
            )
        options = resolve_options(
            cli_format=format,
            cli_validate=False if parse_only else None,
            cli_resolve_refs=True if resolve_refs else None,
        )
        logger.debug("Effective options: %s", options)
        return parse_source(
            source,
            format=options.format,
            validate=options.run_validation,
            resolve_refs=options.resolve_refs,
        )
    except SpecparseError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


def validate_command(
    source: str = typer.Argument(..., help="File path, URL, or '-' for stdin."),
    format: Optional[str] = typer.Option(
        None, "--format", help="Input format: auto, json or yaml."
    ),
    parse_only: bool = typer.Option(
        False, "--parse-only", help="Build the document without validating it."
    ),
    resolve_refs: bool = typer.Option(
        False, "--resolve-refs", help="Run reference resolution before validating."
    ),
) -> None:
    """Parse and validate an API-description document.

    Prints ``OK <dialect> <title> <version>`` and exits 0 when the document
    is valid. Otherwise prints the first error and exits with its code.

    Example::

        specparse validate openapi.yaml
        cat swagger.json | specparse validate -
    """
    root = load_document(source, format=format, parse_only=parse_only, resolve_refs=resolve_refs)

    output = get_output()
    if output.format == OutputFormat.JSON:
        output.print_json(
            {
                "status": "ok",
                "dialect": root.version.label,
                "title": root.title,
                "version": root.api_version,
            }
        )
    else:
        output.print_data(f"OK {root.version.label} {root.title} {root.api_version}")
