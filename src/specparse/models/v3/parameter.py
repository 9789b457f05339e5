"""Parameter Object (OpenAPI 3.x)."""

from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import Field

from specparse.exceptions import SpecValidationError
from specparse.keys import Key, normalize_shallow
from specparse.models.base import Node, Reference, SpecVersion, expect_map
from specparse.models.v3.media import (
    Example,
    MediaType,
    build_content,
    build_examples,
    build_schema,
    check_content,
    check_single_content,
)
from specparse.models.v3.schema import Schema
from specparse.validation import (
    check_enum,
    check_mutually_exclusive,
    check_node,
    check_nodes,
    check_required,
    check_type,
)

LOCATIONS = ("query", "header", "path", "cookie")
STYLES = (
    "matrix",
    "label",
    "form",
    "simple",
    "spaceDelimited",
    "pipeDelimited",
    "deepObject",
)


class Parameter(Node):
    """A single operation parameter, identified by ``name`` and ``in``.

    A parameter describes its value either with ``schema`` or with a
    single-entry ``content`` map, never both. Path parameters must be
    required.
    """

    name: Optional[str] = None
    location: Optional[str] = Field(default=None, alias="in")
    description: Optional[str] = None
    required: Optional[bool] = None
    deprecated: Optional[bool] = None
    allow_empty_value: Optional[bool] = Field(default=None, alias="allowEmptyValue")
    style: Optional[str] = None
    explode: Optional[bool] = None
    allow_reserved: Optional[bool] = Field(default=None, alias="allowReserved")
    schema_: Optional[Union[Reference, Schema]] = Field(default=None, alias="schema")
    example: Any = None
    examples: Optional[dict[str, Union[Reference, Example]]] = None
    content: Optional[dict[str, MediaType]] = None

    @classmethod
    def from_raw(cls, data: Any, dialect: SpecVersion = SpecVersion.OPENAPI_3_1) -> Parameter:
        data = normalize_shallow(expect_map(data, "parameter"))
        return cls.model_construct(
            name=data.get(Key.NAME),
            location=data.get(Key.IN),
            description=data.get(Key.DESCRIPTION),
            required=data.get(Key.REQUIRED),
            deprecated=data.get(Key.DEPRECATED),
            allow_empty_value=data.get(Key.ALLOW_EMPTY_VALUE),
            style=data.get(Key.STYLE),
            explode=data.get(Key.EXPLODE),
            allow_reserved=data.get(Key.ALLOW_RESERVED),
            schema_=build_schema(data.get(Key.SCHEMA), dialect),
            example=data.get(Key.EXAMPLE),
            examples=build_examples(data.get(Key.EXAMPLES)),
            content=build_content(data.get(Key.CONTENT), dialect),
        )

    def check(self, context: str = "parameter") -> None:
        check_required({"name": self.name, "in": self.location}, context)
        check_type(self.name, "string", f"{context}.name")
        check_enum(self.location, LOCATIONS, f"{context}.in")
        if self.location == "path" and self.required is not True:
            raise SpecValidationError(context, "Path parameter must be required")
        check_type(self.description, "string", f"{context}.description")
        check_type(self.required, "boolean", f"{context}.required")
        check_type(self.deprecated, "boolean", f"{context}.deprecated")
        check_type(self.allow_empty_value, "boolean", f"{context}.allowEmptyValue")
        check_type(self.style, "string", f"{context}.style")
        check_enum(self.style, STYLES, f"{context}.style")
        check_type(self.explode, "boolean", f"{context}.explode")
        check_type(self.allow_reserved, "boolean", f"{context}.allowReserved")
        if self.schema_ is None and self.content is None:
            raise SpecValidationError(context, "Either schema or content is required")
        check_mutually_exclusive(("schema", self.schema_), ("content", self.content), context)
        check_single_content(self.content, context)
        check_mutually_exclusive(("example", self.example), ("examples", self.examples), context)
        check_node(self.schema_, f"{context}.schema")
        check_nodes(self.examples, f"{context}.examples")
        check_content(self.content, f"{context}.content")

    @property
    def identity(self) -> tuple[Any, Any]:
        """The ``(name, in)`` pair that must be unique within a parameter list."""
        return (self.name, self.location)
