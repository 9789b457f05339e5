"""Exception hierarchy for specparse.

All exceptions inherit from :class:`SpecparseError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`specparse.exit_codes`.
The CLI entry point catches ``SpecparseError`` and exits with the appropriate
code.

The three failure classes of the parse engine are kept apart:

* :class:`StructuralError` -- raised by ``from_raw`` constructors when a
  required field is absent or a value has the wrong shape. The innermost
  message propagates unchanged; nothing wraps or enriches it on the way up.
* :class:`SpecValidationError` -- raised by ``check`` methods. Always
  carries the breadcrumb path of the offending node.
* :class:`UnsupportedVersionError` -- raised only by root dispatch.

Subclass hierarchy::

    SpecparseError              (exit 1)
    +-- InvalidUsageError       (exit 2)
    +-- SpecLoadError           (exit 7)
    +-- StructuralError         (exit 8)
    +-- SpecValidationError     (exit 9)
    +-- UnsupportedVersionError (exit 10)
    +-- ConfigError             (exit 1)
"""

from __future__ import annotations

from specparse.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_LOAD_ERROR,
    EXIT_STRUCTURAL_ERROR,
    EXIT_UNSUPPORTED_VERSION,
    EXIT_VALIDATION_ERROR,
)


class SpecparseError(Exception):
    """Base exception for all specparse errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`specparse.exit_codes`.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(SpecparseError):
    """Raised for invalid CLI arguments."""

    exit_code = EXIT_INVALID_USAGE


class SpecLoadError(SpecparseError):
    """Raised when a document cannot be read or decoded as JSON/YAML."""

    exit_code = EXIT_LOAD_ERROR


class StructuralError(SpecparseError):
    """Raised when raw data cannot be constructed into a typed node."""

    exit_code = EXIT_STRUCTURAL_ERROR


class SpecValidationError(SpecparseError):
    """Raised on the first semantic rule a constructed tree breaks.

    Args:
        path: Dotted/bracketed breadcrumb of the offending node, e.g.
            ``"paths./users.get.parameters[0]"``. May be empty for
            document-level rules.
        reason: Human-readable description of the broken rule.
    """

    exit_code = EXIT_VALIDATION_ERROR

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}" if path else reason)


class UnsupportedVersionError(SpecparseError):
    """Raised when the version marker is missing or names an unsupported dialect."""

    exit_code = EXIT_UNSUPPORTED_VERSION


class ConfigError(SpecparseError):
    """Raised for configuration problems (invalid project file or environment values)."""

    exit_code = EXIT_GENERIC_FAILURE
