"""specparse -- Parse and validate Swagger 2.0 / OpenAPI 3.0 / OpenAPI 3.1 documents.

This package turns a decoded API-description document into a strongly-typed,
read-only tree of Pydantic models and validates it with precise, reproducible
error locations. Every object kind follows the same two-phase pattern: a
``from_raw`` constructor that builds the typed node (failing fast on structural
problems) and a ``check`` method that walks it and raises the first semantic
error it finds.

Typical workflow::

    from specparse.parser import parse_file

    document = parse_file("openapi.yaml")
    print(document.version, document.document.info.title)

Modules:
    keys: Bounded allow-list normalizer for untrusted object keys.
    validation: Primitive validators and first-error combinators.
    models: Typed document models for all three dialects.
    parser: Loading, version dispatch, and the parse pipeline.
    config: Parse options with environment/project-file precedence.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
    app: Typer CLI entry point.
"""

__version__ = "0.1.0"
