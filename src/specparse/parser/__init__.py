"""Document parser -- load, detect the dialect, construct, and validate.

Typical usage::

    from specparse.parser import parse_file

    root = parse_file("swagger.yaml")
    root.version          # SpecVersion.SWAGGER_2_0
    root.document.info    # Info(title=..., version=...)

Sub-modules:

* :mod:`~specparse.parser.loader` -- I/O layer (URL, file, stdin) and
  JSON/YAML decoding.
* :mod:`~specparse.parser.dispatch` -- Dialect detection and root construction.
* :mod:`~specparse.parser.resolver` -- ``$ref`` resolution extension point.
* :mod:`~specparse.parser.pipeline` -- The ``parse*`` entry points.
"""

from specparse.parser.dispatch import construct_document, detect_version
from specparse.parser.loader import decode_content, load_spec
from specparse.parser.pipeline import parse, parse_data, parse_file, parse_source
from specparse.parser.resolver import resolve_references

__all__ = [
    "construct_document",
    "decode_content",
    "detect_version",
    "load_spec",
    "parse",
    "parse_data",
    "parse_file",
    "parse_source",
    "resolve_references",
]
