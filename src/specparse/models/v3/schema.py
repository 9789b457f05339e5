"""The recursive Schema Object for OpenAPI 3.0 and 3.1.

A single :class:`Schema` model serves both 3.x generations. The dialect is
passed to :meth:`Schema.from_raw` and stored on every node (it is not part of
the dumped document), because the same keyword has different legal values per
dialect:

============================  ==========================  ==========================
Keyword                       OpenAPI 3.0                 OpenAPI 3.1 (2020-12)
============================  ==========================  ==========================
``type``                      one string, no ``null``     string or list, ``null`` ok
``nullable``                  read                        not read
``exclusiveMinimum/Maximum``  boolean                     number
``prefixItems``, ``$defs`` .. not read                    read and recursed into
============================  ==========================  ==========================

Construction recurses into every sub-schema position. A nested position that
is not a map is a structural error, except the positions that also accept a
boolean. A map carrying ``$ref`` becomes a :class:`~specparse.models.base.Reference`
and its other keys are dropped.
"""

from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import Field

from specparse.exceptions import SpecValidationError, StructuralError
from specparse.keys import Key, normalize_shallow
from specparse.models.base import (
    Node,
    Reference,
    SpecVersion,
    build_list,
    build_map,
    build_optional,
    data_key,
    expect_map,
    has_ref,
)
from specparse.models.common import ExternalDocumentation, Xml
from specparse.validation import (
    check_content_type,
    check_enum,
    check_format,
    check_list_of,
    check_map_values,
    check_node,
    check_nodes,
    check_non_negative_integer,
    check_pattern,
    check_required,
    check_type,
)

V30_TYPES = ("string", "number", "integer", "boolean", "array", "object")
V31_TYPES = V30_TYPES + ("null",)

ANCHOR_PATTERN = r"^[A-Za-z_][-A-Za-z0-9._]*\Z"


class Discriminator(Node):
    """Hint for telling apart the alternatives of a ``oneOf``/``anyOf``."""

    property_name: Optional[str] = Field(default=None, alias="propertyName")
    mapping: Optional[dict[str, str]] = None

    @classmethod
    def from_raw(cls, data: Any) -> Discriminator:
        data = normalize_shallow(expect_map(data, "discriminator"))
        mapping = data.get(Key.MAPPING)
        if isinstance(mapping, dict):
            mapping = {data_key(key): value for key, value in mapping.items()}
        return cls.model_construct(property_name=data.get(Key.PROPERTY_NAME), mapping=mapping)

    def check(self, context: str = "discriminator") -> None:
        check_required({"propertyName": self.property_name}, context)
        check_type(self.property_name, "string", f"{context}.propertyName")
        check_type(self.mapping, "map", f"{context}.mapping")
        if self.mapping:
            for key, target in self.mapping.items():
                check_type(target, "string", f"{context}.mapping.{key}")


SchemaOrRef = Union[Reference, "Schema"]


class Schema(Node):
    """A JSON-Schema-derived data type definition.

    Every nested position holds either a :class:`Schema` or a
    :class:`~specparse.models.base.Reference`. ``additionalProperties``,
    ``unevaluatedProperties`` and ``unevaluatedItems`` may also hold a boolean,
    as may ``items`` under OpenAPI 3.1.
    """

    dialect: SpecVersion = Field(default=SpecVersion.OPENAPI_3_1, exclude=True)

    # Core (2020-12)
    schema_id: Optional[str] = Field(default=None, alias="$id")
    meta_schema: Optional[str] = Field(default=None, alias="$schema")
    anchor: Optional[str] = Field(default=None, alias="$anchor")
    dynamic_anchor: Optional[str] = Field(default=None, alias="$dynamicAnchor")
    dynamic_ref: Optional[str] = Field(default=None, alias="$dynamicRef")
    comment: Optional[str] = Field(default=None, alias="$comment")
    defs: Optional[dict[str, SchemaOrRef]] = Field(default=None, alias="$defs")

    # Type and metadata
    type: Optional[Union[str, list[str]]] = None
    format: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    default: Any = None
    enum: Optional[list[Any]] = None
    const: Any = None
    example: Any = None
    examples: Optional[list[Any]] = None
    deprecated: Optional[bool] = None

    # Numbers
    maximum: Optional[float] = None
    minimum: Optional[float] = None
    exclusive_maximum: Optional[Union[bool, float]] = Field(default=None, alias="exclusiveMaximum")
    exclusive_minimum: Optional[Union[bool, float]] = Field(default=None, alias="exclusiveMinimum")
    multiple_of: Optional[float] = Field(default=None, alias="multipleOf")

    # Strings
    max_length: Optional[int] = Field(default=None, alias="maxLength")
    min_length: Optional[int] = Field(default=None, alias="minLength")
    pattern: Optional[str] = None
    content_encoding: Optional[str] = Field(default=None, alias="contentEncoding")
    content_media_type: Optional[str] = Field(default=None, alias="contentMediaType")
    content_schema: Optional[SchemaOrRef] = Field(default=None, alias="contentSchema")

    # Arrays
    items: Optional[Union[bool, Reference, Schema]] = None
    prefix_items: Optional[list[SchemaOrRef]] = Field(default=None, alias="prefixItems")
    contains: Optional[SchemaOrRef] = None
    min_contains: Optional[int] = Field(default=None, alias="minContains")
    max_contains: Optional[int] = Field(default=None, alias="maxContains")
    max_items: Optional[int] = Field(default=None, alias="maxItems")
    min_items: Optional[int] = Field(default=None, alias="minItems")
    unique_items: Optional[bool] = Field(default=None, alias="uniqueItems")
    unevaluated_items: Optional[Union[bool, Reference, Schema]] = Field(
        default=None, alias="unevaluatedItems"
    )

    # Objects
    properties: Optional[dict[str, SchemaOrRef]] = None
    pattern_properties: Optional[dict[str, SchemaOrRef]] = Field(
        default=None, alias="patternProperties"
    )
    additional_properties: Optional[Union[bool, Reference, Schema]] = Field(
        default=None, alias="additionalProperties"
    )
    property_names: Optional[SchemaOrRef] = Field(default=None, alias="propertyNames")
    unevaluated_properties: Optional[Union[bool, Reference, Schema]] = Field(
        default=None, alias="unevaluatedProperties"
    )
    dependent_schemas: Optional[dict[str, SchemaOrRef]] = Field(
        default=None, alias="dependentSchemas"
    )
    required: Optional[list[str]] = None
    max_properties: Optional[int] = Field(default=None, alias="maxProperties")
    min_properties: Optional[int] = Field(default=None, alias="minProperties")

    # Composition and conditionals
    all_of: Optional[list[SchemaOrRef]] = Field(default=None, alias="allOf")
    any_of: Optional[list[SchemaOrRef]] = Field(default=None, alias="anyOf")
    one_of: Optional[list[SchemaOrRef]] = Field(default=None, alias="oneOf")
    not_: Optional[SchemaOrRef] = Field(default=None, alias="not")
    if_: Optional[SchemaOrRef] = Field(default=None, alias="if")
    then: Optional[SchemaOrRef] = None
    else_: Optional[SchemaOrRef] = Field(default=None, alias="else")

    # OpenAPI extensions
    discriminator: Optional[Discriminator] = None
    read_only: Optional[bool] = Field(default=None, alias="readOnly")
    write_only: Optional[bool] = Field(default=None, alias="writeOnly")
    nullable: Optional[bool] = None
    xml: Optional[Xml] = None
    external_docs: Optional[ExternalDocumentation] = Field(default=None, alias="externalDocs")

    # --- Construction ---

    @classmethod
    def from_raw(cls, data: Any, dialect: SpecVersion = SpecVersion.OPENAPI_3_1) -> Any:
        """Build a Schema (or a Reference) tree from a raw map.

        Args:
            data: The decoded schema map.
            dialect: ``SpecVersion.OPENAPI_3_0`` or ``SpecVersion.OPENAPI_3_1``.

        Returns:
            A :class:`Reference` if *data* carries ``$ref``, else a :class:`Schema`.

        Raises:
            StructuralError: On the first nested position that cannot be built.
        """
        if has_ref(data):
            return Reference.from_raw(data)
        data = normalize_shallow(expect_map(data, "schema"))
        is_31 = dialect is SpecVersion.OPENAPI_3_1

        def only_31(key: Key) -> Any:
            return data.get(key) if is_31 else None

        def sub(value: Any, what: str) -> Any:
            if value is None:
                return None
            if not isinstance(value, dict):
                raise StructuralError(f"{what} must be a schema object")
            return cls.from_raw(value, dialect)

        def sub_or_bool(value: Any, what: str) -> Any:
            if isinstance(value, bool):
                return value
            return sub(value, what)

        def sub_list(value: Any, what: str) -> Optional[list[Any]]:
            return build_list(value, lambda item: sub(item, what), what)

        def sub_map(value: Any, what: str) -> Optional[dict[Any, Any]]:
            return build_map(value, lambda item: sub(item, what), what)

        items = data.get(Key.ITEMS)
        fields = dict(
            dialect=dialect,
            schema_id=only_31(Key.ID),
            meta_schema=only_31(Key.META_SCHEMA),
            anchor=only_31(Key.ANCHOR),
            dynamic_anchor=only_31(Key.DYNAMIC_ANCHOR),
            dynamic_ref=only_31(Key.DYNAMIC_REF),
            comment=only_31(Key.COMMENT),
            type=data.get(Key.TYPE),
            format=data.get(Key.FORMAT),
            title=data.get(Key.TITLE),
            description=data.get(Key.DESCRIPTION),
            default=data.get(Key.DEFAULT),
            enum=data.get(Key.ENUM),
            const=only_31(Key.CONST),
            example=data.get(Key.EXAMPLE),
            examples=only_31(Key.EXAMPLES),
            deprecated=data.get(Key.DEPRECATED),
            maximum=data.get(Key.MAXIMUM),
            minimum=data.get(Key.MINIMUM),
            exclusive_maximum=data.get(Key.EXCLUSIVE_MAXIMUM),
            exclusive_minimum=data.get(Key.EXCLUSIVE_MINIMUM),
            multiple_of=data.get(Key.MULTIPLE_OF),
            max_length=data.get(Key.MAX_LENGTH),
            min_length=data.get(Key.MIN_LENGTH),
            pattern=data.get(Key.PATTERN),
            content_encoding=only_31(Key.CONTENT_ENCODING),
            content_media_type=only_31(Key.CONTENT_MEDIA_TYPE),
            min_contains=only_31(Key.MIN_CONTAINS),
            max_contains=only_31(Key.MAX_CONTAINS),
            max_items=data.get(Key.MAX_ITEMS),
            min_items=data.get(Key.MIN_ITEMS),
            unique_items=data.get(Key.UNIQUE_ITEMS),
            required=data.get(Key.REQUIRED),
            max_properties=data.get(Key.MAX_PROPERTIES),
            min_properties=data.get(Key.MIN_PROPERTIES),
            read_only=data.get(Key.READ_ONLY),
            write_only=data.get(Key.WRITE_ONLY),
            nullable=None if is_31 else data.get(Key.NULLABLE),
        )

        # Nested positions, built in a fixed order so the first failure is stable.
        fields["items"] = sub_or_bool(items, "items") if is_31 else sub(items, "items")
        fields["properties"] = sub_map(data.get(Key.PROPERTIES), "properties")
        fields["pattern_properties"] = sub_map(only_31(Key.PATTERN_PROPERTIES), "patternProperties")
        fields["property_names"] = sub(only_31(Key.PROPERTY_NAMES), "propertyNames")
        fields["additional_properties"] = sub_or_bool(
            data.get(Key.ADDITIONAL_PROPERTIES), "additionalProperties"
        )
        fields["unevaluated_properties"] = sub_or_bool(
            only_31(Key.UNEVALUATED_PROPERTIES), "unevaluatedProperties"
        )
        fields["unevaluated_items"] = sub_or_bool(only_31(Key.UNEVALUATED_ITEMS), "unevaluatedItems")
        fields["prefix_items"] = sub_list(only_31(Key.PREFIX_ITEMS), "prefixItems")
        fields["contains"] = sub(only_31(Key.CONTAINS), "contains")
        fields["dependent_schemas"] = sub_map(only_31(Key.DEPENDENT_SCHEMAS), "dependentSchemas")
        fields["if_"] = sub(only_31(Key.IF), "if")
        fields["then"] = sub(only_31(Key.THEN), "then")
        fields["else_"] = sub(only_31(Key.ELSE), "else")
        fields["defs"] = sub_map(only_31(Key.DEFS), "$defs")
        fields["all_of"] = sub_list(data.get(Key.ALL_OF), "allOf")
        fields["any_of"] = sub_list(data.get(Key.ANY_OF), "anyOf")
        fields["one_of"] = sub_list(data.get(Key.ONE_OF), "oneOf")
        fields["not_"] = sub(data.get(Key.NOT), "not")
        fields["content_schema"] = sub(only_31(Key.CONTENT_SCHEMA), "contentSchema")
        fields["external_docs"] = build_optional(
            data.get(Key.EXTERNAL_DOCS), ExternalDocumentation.from_raw
        )
        fields["discriminator"] = build_optional(data.get(Key.DISCRIMINATOR), Discriminator.from_raw)
        fields["xml"] = build_optional(data.get(Key.XML), Xml.from_raw)

        return cls.model_construct(**fields)

    # --- Validation ---

    @property
    def types(self) -> list[Any]:
        """The declared type tags as a list (empty when ``type`` is absent)."""
        if self.type is None:
            return []
        if isinstance(self.type, list):
            return list(self.type)
        return [self.type]

    @property
    def is_31(self) -> bool:
        return self.dialect is SpecVersion.OPENAPI_3_1

    def check(self, context: str = "schema") -> None:
        self._check_type(context)
        self._check_metadata(context)
        self._check_numbers(context)
        self._check_strings(context)
        self._check_arrays(context)
        self._check_objects(context)
        if self.is_31:
            self._check_core_keywords(context)
        self._check_children(context)

    def _check_type(self, context: str) -> None:
        path = f"{context}.type"
        if not self.is_31 or not isinstance(self.type, list):
            check_type(self.type, "string", path)
            check_enum(self.type, V31_TYPES if self.is_31 else V30_TYPES, path)
            return
        if not self.type:
            raise SpecValidationError(path, "must not be an empty list")
        for index, tag in enumerate(self.type):
            check_type(tag, "string", f"{path}[{index}]")
            check_enum(tag, V31_TYPES, f"{path}[{index}]")
        if len(set(self.type)) != len(self.type):
            raise SpecValidationError(path, "must not contain duplicate types")

    def _check_metadata(self, context: str) -> None:
        check_type(self.format, "string", f"{context}.format")
        check_type(self.title, "string", f"{context}.title")
        check_type(self.description, "string", f"{context}.description")
        check_type(self.enum, "list", f"{context}.enum")
        check_type(self.examples, "list", f"{context}.examples")
        check_type(self.deprecated, "boolean", f"{context}.deprecated")
        check_type(self.read_only, "boolean", f"{context}.readOnly")
        check_type(self.write_only, "boolean", f"{context}.writeOnly")
        check_type(self.nullable, "boolean", f"{context}.nullable")
        if not self.is_31 and self.read_only is True and self.write_only is True:
            raise SpecValidationError(context, "readOnly and writeOnly cannot both be true")

    def _check_numbers(self, context: str) -> None:
        check_type(self.maximum, "number", f"{context}.maximum")
        check_type(self.minimum, "number", f"{context}.minimum")
        bound_kind = "number" if self.is_31 else "boolean"
        check_type(self.exclusive_maximum, bound_kind, f"{context}.exclusiveMaximum")
        check_type(self.exclusive_minimum, bound_kind, f"{context}.exclusiveMinimum")
        check_type(self.multiple_of, "number", f"{context}.multipleOf")
        if self.multiple_of is not None and self.multiple_of <= 0:
            raise SpecValidationError(f"{context}.multipleOf", "must be greater than 0")

    def _check_strings(self, context: str) -> None:
        check_non_negative_integer(self.max_length, f"{context}.maxLength")
        check_non_negative_integer(self.min_length, f"{context}.minLength")
        check_type(self.pattern, "string", f"{context}.pattern")
        check_type(self.content_encoding, "string", f"{context}.contentEncoding")
        check_type(self.content_media_type, "string", f"{context}.contentMediaType")
        if isinstance(self.content_media_type, str):
            check_content_type(self.content_media_type, f"{context}.contentMediaType")

    def _check_arrays(self, context: str) -> None:
        if (
            "array" in self.types
            and self.items is None
            and self.prefix_items is None
            and self.contains is None
        ):
            needed = "items, prefixItems, or contains" if self.is_31 else "items"
            raise SpecValidationError(context, f"{needed} is required when type is array")
        check_non_negative_integer(self.max_items, f"{context}.maxItems")
        check_non_negative_integer(self.min_items, f"{context}.minItems")
        check_type(self.unique_items, "boolean", f"{context}.uniqueItems")
        check_non_negative_integer(self.min_contains, f"{context}.minContains")
        check_non_negative_integer(self.max_contains, f"{context}.maxContains")
        if (
            self.min_contains is not None
            and self.max_contains is not None
            and self.max_contains < self.min_contains
        ):
            raise SpecValidationError(
                context, "maxContains must be greater than or equal to minContains"
            )

    def _check_objects(self, context: str) -> None:
        check_list_of(self.required, "string", f"{context}.required")
        check_non_negative_integer(self.max_properties, f"{context}.maxProperties")
        check_non_negative_integer(self.min_properties, f"{context}.minProperties")

    def _check_core_keywords(self, context: str) -> None:
        check_type(self.schema_id, "string", f"{context}.$id")
        check_format(self.schema_id, "uri-reference", f"{context}.$id")
        check_type(self.meta_schema, "string", f"{context}.$schema")
        check_format(self.meta_schema, "uri", f"{context}.$schema")
        check_type(self.anchor, "string", f"{context}.$anchor")
        check_pattern(self.anchor, ANCHOR_PATTERN, f"{context}.$anchor")
        check_type(self.dynamic_anchor, "string", f"{context}.$dynamicAnchor")
        check_pattern(self.dynamic_anchor, ANCHOR_PATTERN, f"{context}.$dynamicAnchor")
        check_type(self.dynamic_ref, "string", f"{context}.$dynamicRef")
        check_format(self.dynamic_ref, "uri-reference", f"{context}.$dynamicRef")
        check_type(self.comment, "string", f"{context}.$comment")

    def _check_children(self, context: str) -> None:
        _check_schema_or_bool(self.items, f"{context}.items")
        check_nodes(self.prefix_items, f"{context}.prefixItems")
        check_node(self.contains, f"{context}.contains")
        _check_schema_or_bool(self.unevaluated_items, f"{context}.unevaluatedItems")
        check_nodes(self.properties, f"{context}.properties")
        check_nodes(self.pattern_properties, f"{context}.patternProperties")
        _check_schema_or_bool(self.additional_properties, f"{context}.additionalProperties")
        check_node(self.property_names, f"{context}.propertyNames")
        _check_schema_or_bool(self.unevaluated_properties, f"{context}.unevaluatedProperties")
        check_nodes(self.dependent_schemas, f"{context}.dependentSchemas")
        check_nodes(self.all_of, f"{context}.allOf")
        check_nodes(self.any_of, f"{context}.anyOf")
        check_nodes(self.one_of, f"{context}.oneOf")
        check_node(self.not_, f"{context}.not")
        check_node(self.if_, f"{context}.if")
        check_node(self.then, f"{context}.then")
        check_node(self.else_, f"{context}.else")
        check_map_values(self.defs, check_node, f"{context}.$defs")
        check_node(self.content_schema, f"{context}.contentSchema")
        check_node(self.external_docs, f"{context}.externalDocs")
        check_node(self.discriminator, f"{context}.discriminator")
        check_node(self.xml, f"{context}.xml")


def _check_schema_or_bool(value: Any, path: str) -> None:
    if isinstance(value, bool):
        return
    check_node(value, path)


Schema.model_rebuild()
