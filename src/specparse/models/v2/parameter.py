"""Parameter and Header objects (Swagger 2.0)."""

from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import Field

from specparse.exceptions import SpecValidationError, StructuralError
from specparse.keys import Key, normalize_shallow
from specparse.models.base import Reference, expect_map
from specparse.models.v2.schema import (
    COLLECTION_FORMATS,
    PRIMITIVE_TYPES,
    PrimitiveNode,
    Schema,
)
from specparse.validation import (
    check_enum,
    check_node,
    check_required,
    check_type,
)

LOCATIONS = ("query", "header", "path", "formData", "body")
PARAMETER_TYPES = PRIMITIVE_TYPES + ("file",)
PARAMETER_COLLECTION_FORMATS = COLLECTION_FORMATS + ("multi",)


class Parameter(PrimitiveNode):
    """A single operation parameter.

    ``in: body`` parameters carry a ``schema`` and no ``type``. Every other
    location is described by the primitive keywords: ``type`` is required,
    ``file`` is only allowed in ``formData``, and ``collectionFormat: multi``
    only in ``query`` and ``formData``.
    """

    name: Optional[str] = None
    location: Optional[str] = Field(default=None, alias="in")
    description: Optional[str] = None
    required: Optional[bool] = None
    allow_empty_value: Optional[bool] = Field(default=None, alias="allowEmptyValue")
    schema_: Optional[Union[Reference, Schema]] = Field(default=None, alias="schema")

    @classmethod
    def from_raw(cls, data: Any) -> Parameter:
        data = normalize_shallow(expect_map(data, "parameter"))
        schema = data.get(Key.SCHEMA)
        if schema is not None and not isinstance(schema, dict):
            raise StructuralError("schema must be a schema object")
        return cls.model_construct(
            name=data.get(Key.NAME),
            location=data.get(Key.IN),
            description=data.get(Key.DESCRIPTION),
            required=data.get(Key.REQUIRED),
            allow_empty_value=data.get(Key.ALLOW_EMPTY_VALUE),
            schema_=Schema.from_raw(schema) if schema is not None else None,
            **cls.primitive_fields(data),
        )

    def check(self, context: str = "parameter") -> None:
        check_required({"name": self.name, "in": self.location}, context)
        check_type(self.name, "string", f"{context}.name")
        check_enum(self.location, LOCATIONS, f"{context}.in")
        if self.location == "path" and self.required is not True:
            raise SpecValidationError(context, "Path parameter must be required")
        check_type(self.description, "string", f"{context}.description")
        check_type(self.required, "boolean", f"{context}.required")

        if self.location == "body":
            if self.schema_ is None:
                raise SpecValidationError(context, "Body parameter must have a schema")
            if self.type is not None:
                raise SpecValidationError(context, "Body parameter should not have a type field")
            check_node(self.schema_, f"{context}.schema")
            return

        if self.type is None:
            raise SpecValidationError(context, "Non-body parameter must have a type")
        if self.schema_ is not None:
            raise SpecValidationError(context, "Non-body parameter should not have a schema")
        check_type(self.type, "string", f"{context}.type")
        check_enum(self.type, PARAMETER_TYPES, f"{context}.type")
        if self.type == "file" and self.location != "formData":
            raise SpecValidationError(context, "File parameters must be in formData")
        self.check_array_items(context)
        check_type(self.allow_empty_value, "boolean", f"{context}.allowEmptyValue")
        check_enum(
            self.collection_format, PARAMETER_COLLECTION_FORMATS, f"{context}.collectionFormat"
        )
        if self.collection_format == "multi" and self.location not in ("query", "formData"):
            raise SpecValidationError(
                f"{context}.collectionFormat",
                "multi is only valid for query or formData parameters",
            )
        self.check_constraints(context)
        check_node(self.items, f"{context}.items")

    @property
    def identity(self) -> tuple[Any, Any]:
        return (self.name, self.location)


class Header(PrimitiveNode):
    """A response header; described with the primitive keywords only."""

    description: Optional[str] = None

    @classmethod
    def from_raw(cls, data: Any) -> Header:
        data = normalize_shallow(expect_map(data, "header"))
        return cls.model_construct(description=data.get(Key.DESCRIPTION), **cls.primitive_fields(data))

    def check(self, context: str = "header") -> None:
        check_required({"type": self.type}, context)
        check_type(self.type, "string", f"{context}.type")
        check_enum(self.type, PRIMITIVE_TYPES, f"{context}.type")
        self.check_array_items(context)
        check_type(self.description, "string", f"{context}.description")
        check_enum(self.collection_format, COLLECTION_FORMATS, f"{context}.collectionFormat")
        self.check_constraints(context)
        check_node(self.items, f"{context}.items")


Parameter.model_rebuild()
Header.model_rebuild()
