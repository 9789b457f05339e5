"""Schema and Items objects (Swagger 2.0).

Swagger 2.0 has two type systems. :class:`Schema` is the JSON-Schema subset
used for bodies, responses and ``definitions``. :class:`Items` is the flat
primitive description used by non-body parameters and headers, which share
their constraint keywords through :class:`PrimitiveNode`.
"""

from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import Field

from specparse.exceptions import SpecValidationError, StructuralError
from specparse.keys import Key, normalize_shallow
from specparse.models.base import (
    Node,
    Reference,
    build_list,
    build_map,
    build_optional,
    expect_map,
    has_ref,
)
from specparse.models.common import ExternalDocumentation, Xml
from specparse.validation import (
    check_enum,
    check_list_of,
    check_node,
    check_nodes,
    check_non_negative_integer,
    check_required,
    check_type,
)

SCHEMA_TYPES = ("string", "number", "integer", "boolean", "array", "object", "file")
PRIMITIVE_TYPES = ("string", "number", "integer", "boolean", "array")
COLLECTION_FORMATS = ("csv", "ssv", "tsv", "pipes")


class PrimitiveNode(Node):
    """Validation keywords shared by Items, Header and non-body Parameter."""

    type: Optional[str] = None
    format: Optional[str] = None
    items: Optional[Items] = None
    collection_format: Optional[str] = Field(default=None, alias="collectionFormat")
    default: Any = None
    maximum: Optional[float] = None
    exclusive_maximum: Optional[bool] = Field(default=None, alias="exclusiveMaximum")
    minimum: Optional[float] = None
    exclusive_minimum: Optional[bool] = Field(default=None, alias="exclusiveMinimum")
    max_length: Optional[int] = Field(default=None, alias="maxLength")
    min_length: Optional[int] = Field(default=None, alias="minLength")
    pattern: Optional[str] = None
    max_items: Optional[int] = Field(default=None, alias="maxItems")
    min_items: Optional[int] = Field(default=None, alias="minItems")
    unique_items: Optional[bool] = Field(default=None, alias="uniqueItems")
    enum: Optional[list[Any]] = None
    multiple_of: Optional[float] = Field(default=None, alias="multipleOf")

    @staticmethod
    def primitive_fields(data: dict[Any, Any]) -> dict[str, Any]:
        """Read the shared keywords from an already normalized map."""
        return dict(
            type=data.get(Key.TYPE),
            format=data.get(Key.FORMAT),
            items=build_optional(data.get(Key.ITEMS), Items.from_raw),
            collection_format=data.get(Key.COLLECTION_FORMAT),
            default=data.get(Key.DEFAULT),
            maximum=data.get(Key.MAXIMUM),
            exclusive_maximum=data.get(Key.EXCLUSIVE_MAXIMUM),
            minimum=data.get(Key.MINIMUM),
            exclusive_minimum=data.get(Key.EXCLUSIVE_MINIMUM),
            max_length=data.get(Key.MAX_LENGTH),
            min_length=data.get(Key.MIN_LENGTH),
            pattern=data.get(Key.PATTERN),
            max_items=data.get(Key.MAX_ITEMS),
            min_items=data.get(Key.MIN_ITEMS),
            unique_items=data.get(Key.UNIQUE_ITEMS),
            enum=data.get(Key.ENUM),
            multiple_of=data.get(Key.MULTIPLE_OF),
        )

    def check_array_items(self, context: str) -> None:
        if self.type == "array" and self.items is None:
            raise SpecValidationError(context, "items is required when type is array")

    def check_constraints(self, context: str) -> None:
        check_type(self.format, "string", f"{context}.format")
        check_type(self.maximum, "number", f"{context}.maximum")
        check_type(self.exclusive_maximum, "boolean", f"{context}.exclusiveMaximum")
        check_type(self.minimum, "number", f"{context}.minimum")
        check_type(self.exclusive_minimum, "boolean", f"{context}.exclusiveMinimum")
        check_non_negative_integer(self.max_length, f"{context}.maxLength")
        check_non_negative_integer(self.min_length, f"{context}.minLength")
        check_type(self.pattern, "string", f"{context}.pattern")
        check_non_negative_integer(self.max_items, f"{context}.maxItems")
        check_non_negative_integer(self.min_items, f"{context}.minItems")
        check_type(self.unique_items, "boolean", f"{context}.uniqueItems")
        check_type(self.enum, "list", f"{context}.enum")
        check_type(self.multiple_of, "number", f"{context}.multipleOf")
        if self.multiple_of is not None and self.multiple_of <= 0:
            raise SpecValidationError(f"{context}.multipleOf", "must be greater than 0")


class Items(PrimitiveNode):
    """Type of the elements of an array parameter or header."""

    @classmethod
    def from_raw(cls, data: Any) -> Items:
        data = normalize_shallow(expect_map(data, "items"))
        return cls.model_construct(**cls.primitive_fields(data))

    def check(self, context: str = "items") -> None:
        check_required({"type": self.type}, context)
        check_type(self.type, "string", f"{context}.type")
        check_enum(self.type, PRIMITIVE_TYPES, f"{context}.type")
        self.check_array_items(context)
        check_enum(self.collection_format, COLLECTION_FORMATS, f"{context}.collectionFormat")
        self.check_constraints(context)
        check_node(self.items, f"{context}.items")


SchemaOrRef = Union[Reference, "Schema"]


class Schema(Node):
    """A Swagger 2.0 Schema Object.

    Differs from the 3.x schema: a single ``type`` string (``file`` is
    allowed), boolean exclusive bounds, ``discriminator`` as a plain property
    name, and no ``oneOf``/``anyOf``/``not``.
    """

    type: Optional[str] = None
    format: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    default: Any = None
    enum: Optional[list[Any]] = None
    example: Any = None

    maximum: Optional[float] = None
    exclusive_maximum: Optional[bool] = Field(default=None, alias="exclusiveMaximum")
    minimum: Optional[float] = None
    exclusive_minimum: Optional[bool] = Field(default=None, alias="exclusiveMinimum")
    multiple_of: Optional[float] = Field(default=None, alias="multipleOf")
    max_length: Optional[int] = Field(default=None, alias="maxLength")
    min_length: Optional[int] = Field(default=None, alias="minLength")
    pattern: Optional[str] = None

    items: Optional[SchemaOrRef] = None
    max_items: Optional[int] = Field(default=None, alias="maxItems")
    min_items: Optional[int] = Field(default=None, alias="minItems")
    unique_items: Optional[bool] = Field(default=None, alias="uniqueItems")

    properties: Optional[dict[str, SchemaOrRef]] = None
    additional_properties: Optional[Union[bool, Reference, Schema]] = Field(
        default=None, alias="additionalProperties"
    )
    required: Optional[list[str]] = None
    max_properties: Optional[int] = Field(default=None, alias="maxProperties")
    min_properties: Optional[int] = Field(default=None, alias="minProperties")
    all_of: Optional[list[SchemaOrRef]] = Field(default=None, alias="allOf")

    discriminator: Optional[str] = None
    read_only: Optional[bool] = Field(default=None, alias="readOnly")
    xml: Optional[Xml] = None
    external_docs: Optional[ExternalDocumentation] = Field(default=None, alias="externalDocs")

    @classmethod
    def from_raw(cls, data: Any) -> Any:
        if has_ref(data):
            return Reference.from_raw(data)
        data = normalize_shallow(expect_map(data, "schema"))

        def sub(value: Any, what: str) -> Any:
            if value is None:
                return None
            if not isinstance(value, dict):
                raise StructuralError(f"{what} must be a schema object")
            return cls.from_raw(value)

        additional = data.get(Key.ADDITIONAL_PROPERTIES)
        return cls.model_construct(
            type=data.get(Key.TYPE),
            format=data.get(Key.FORMAT),
            title=data.get(Key.TITLE),
            description=data.get(Key.DESCRIPTION),
            default=data.get(Key.DEFAULT),
            enum=data.get(Key.ENUM),
            example=data.get(Key.EXAMPLE),
            maximum=data.get(Key.MAXIMUM),
            exclusive_maximum=data.get(Key.EXCLUSIVE_MAXIMUM),
            minimum=data.get(Key.MINIMUM),
            exclusive_minimum=data.get(Key.EXCLUSIVE_MINIMUM),
            multiple_of=data.get(Key.MULTIPLE_OF),
            max_length=data.get(Key.MAX_LENGTH),
            min_length=data.get(Key.MIN_LENGTH),
            pattern=data.get(Key.PATTERN),
            items=sub(data.get(Key.ITEMS), "items"),
            max_items=data.get(Key.MAX_ITEMS),
            min_items=data.get(Key.MIN_ITEMS),
            unique_items=data.get(Key.UNIQUE_ITEMS),
            properties=build_map(
                data.get(Key.PROPERTIES), lambda raw: sub(raw, "properties"), "properties"
            ),
            additional_properties=(
                additional
                if isinstance(additional, bool)
                else sub(additional, "additionalProperties")
            ),
            required=data.get(Key.REQUIRED),
            max_properties=data.get(Key.MAX_PROPERTIES),
            min_properties=data.get(Key.MIN_PROPERTIES),
            all_of=build_list(data.get(Key.ALL_OF), lambda raw: sub(raw, "allOf"), "allOf"),
            discriminator=data.get(Key.DISCRIMINATOR),
            read_only=data.get(Key.READ_ONLY),
            xml=build_optional(data.get(Key.XML), Xml.from_raw),
            external_docs=build_optional(data.get(Key.EXTERNAL_DOCS), ExternalDocumentation.from_raw),
        )

    def check(self, context: str = "schema") -> None:
        check_type(self.type, "string", f"{context}.type")
        check_enum(self.type, SCHEMA_TYPES, f"{context}.type")
        if self.type == "array" and self.items is None:
            raise SpecValidationError(context, "items is required when type is array")
        check_type(self.format, "string", f"{context}.format")
        check_type(self.title, "string", f"{context}.title")
        check_type(self.description, "string", f"{context}.description")
        check_type(self.enum, "list", f"{context}.enum")
        check_type(self.maximum, "number", f"{context}.maximum")
        check_type(self.exclusive_maximum, "boolean", f"{context}.exclusiveMaximum")
        check_type(self.minimum, "number", f"{context}.minimum")
        check_type(self.exclusive_minimum, "boolean", f"{context}.exclusiveMinimum")
        check_type(self.multiple_of, "number", f"{context}.multipleOf")
        check_non_negative_integer(self.max_length, f"{context}.maxLength")
        check_non_negative_integer(self.min_length, f"{context}.minLength")
        check_type(self.pattern, "string", f"{context}.pattern")
        check_non_negative_integer(self.max_items, f"{context}.maxItems")
        check_non_negative_integer(self.min_items, f"{context}.minItems")
        check_type(self.unique_items, "boolean", f"{context}.uniqueItems")
        check_list_of(self.required, "string", f"{context}.required")
        check_non_negative_integer(self.max_properties, f"{context}.maxProperties")
        check_non_negative_integer(self.min_properties, f"{context}.minProperties")
        check_type(self.discriminator, "string", f"{context}.discriminator")
        check_type(self.read_only, "boolean", f"{context}.readOnly")

        check_node(self.items, f"{context}.items")
        check_nodes(self.properties, f"{context}.properties")
        if not isinstance(self.additional_properties, bool):
            check_node(self.additional_properties, f"{context}.additionalProperties")
        check_nodes(self.all_of, f"{context}.allOf")
        check_node(self.external_docs, f"{context}.externalDocs")
        check_node(self.xml, f"{context}.xml")


PrimitiveNode.model_rebuild()
Items.model_rebuild()
Schema.model_rebuild()
