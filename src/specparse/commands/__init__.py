"""Built-in CLI commands for specparse.

* :mod:`~specparse.commands.validate` -- parse a document and report the
  first error, if any.
* :mod:`~specparse.commands.inspect` -- summarise a document and list its
  operations.

Each module exports a plain callback function registered directly on the
root app.
"""
