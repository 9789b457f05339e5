"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~specparse.exceptions.SpecparseError` subclass.
CI scripts can inspect the exit code to tell a document that failed to load
from one that loaded but is invalid, without parsing stderr.

Example::

    $ specparse validate swagger.yaml
    $ echo $?
    9   # EXIT_VALIDATION_ERROR -- the document broke a semantic rule
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_LOAD_ERROR = 7
"""The document could not be read or decoded as JSON/YAML."""

EXIT_STRUCTURAL_ERROR = 8
"""The document could not be constructed into a typed tree."""

EXIT_VALIDATION_ERROR = 9
"""The document was constructed but failed semantic validation."""

EXIT_UNSUPPORTED_VERSION = 10
"""The document declares a missing or unsupported dialect version."""
