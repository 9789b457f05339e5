"""Typer application and CLI entry point for specparse.

This module wires the top-level Typer application, registers the built-in
commands (``validate`` and ``inspect``), and configures output and logging
from the global options.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``.

See Also:
    :mod:`specparse.config`: Parse option resolution.
    :mod:`specparse.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import logging
import signal
import sys
from typing import Any

import typer

from specparse import __version__
from specparse.commands.inspect import inspect_command
from specparse.commands.validate import validate_command
from specparse.exit_codes import EXIT_GENERIC_FAILURE

app = typer.Typer(
    name="specparse",
    help="Parse and validate Swagger 2.0 / OpenAPI 3.0 / OpenAPI 3.1 documents.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command("validate")(validate_command)
app.command("inspect")(inspect_command)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"specparse {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    """Send library log records to stderr; DEBUG with ``--verbose``."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(
        False, "--json", help="JSON output format."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Plain text output."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug logging on stderr."
    ),
) -> None:
    """Root callback executed before every command.

    Initialises the global :class:`~specparse.output.OutputManager` from the
    output flags and configures logging.

    Args:
        version: If ``True``, print the version string and exit.
        json_output: Force JSON output format.
        plain_output: Force plain-text output format.
        no_color: Disable all colour and Rich markup.
        quiet: Suppress non-essential diagnostic output.
        verbose: Enable debug-level logging.
    """
    from specparse.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet))
    _configure_logging(verbose)


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``specparse`` console script.

    Unhandled :class:`~specparse.exceptions.SpecparseError` instances cause
    a clean exit with the error's ``exit_code``. Anything else is reported
    as an unexpected error with a generic failure exit.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from specparse.exceptions import SpecparseError
        from specparse.output import error

        if isinstance(exc, SpecparseError):
            error(str(exc))
            sys.exit(exc.exit_code)
        else:
            logging.getLogger(__name__).debug("Unexpected error", exc_info=True)
            error(f"Unexpected error: {exc}")
            sys.exit(EXIT_GENERIC_FAILURE)
