"""Payload description objects: Example, Header, Encoding, MediaType, RequestBody.

Header, Encoding and MediaType refer to each other (a header may describe its
value with ``content``; an encoding carries headers), so they live in one
module. The ``content`` helpers at the bottom are shared with
:mod:`specparse.models.v3.parameter` and :mod:`specparse.models.v3.response`.
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
    build_map,
    expect_map,
    ref_or,
)
from specparse.models.v3.schema import Schema
from specparse.validation import (
    check_content_type,
    check_enum,
    check_format,
    check_mutually_exclusive,
    check_node,
    check_nodes,
    check_required,
    check_type,
)

ENCODING_STYLES = ("form", "spaceDelimited", "pipeDelimited", "deepObject")


class Example(Node):
    summary: Optional[str] = None
    description: Optional[str] = None
    value: Any = None
    external_value: Optional[str] = Field(default=None, alias="externalValue")

    @classmethod
    def from_raw(cls, data: Any) -> Example:
        data = normalize_shallow(expect_map(data, "example"))
        return cls.model_construct(
            summary=data.get(Key.SUMMARY),
            description=data.get(Key.DESCRIPTION),
            value=data.get(Key.VALUE),
            external_value=data.get(Key.EXTERNAL_VALUE),
        )

    def check(self, context: str = "example") -> None:
        check_type(self.summary, "string", f"{context}.summary")
        check_type(self.description, "string", f"{context}.description")
        check_type(self.external_value, "string", f"{context}.externalValue")
        check_format(self.external_value, "url", f"{context}.externalValue")
        check_mutually_exclusive(
            ("value", self.value), ("externalValue", self.external_value), context
        )


class Header(Node):
    """A response or encoding header.

    Follows the Parameter shape without ``name`` and ``in``; the only
    allowed style is ``simple``.
    """

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
    def from_raw(cls, data: Any, dialect: SpecVersion = SpecVersion.OPENAPI_3_1) -> Header:
        data = normalize_shallow(expect_map(data, "header"))
        return cls.model_construct(
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

    def check(self, context: str = "header") -> None:
        check_type(self.description, "string", f"{context}.description")
        check_type(self.required, "boolean", f"{context}.required")
        check_type(self.deprecated, "boolean", f"{context}.deprecated")
        check_type(self.explode, "boolean", f"{context}.explode")
        check_type(self.style, "string", f"{context}.style")
        check_enum(self.style, ("simple",), f"{context}.style")
        check_mutually_exclusive(("schema", self.schema_), ("content", self.content), context)
        check_single_content(self.content, context)
        check_mutually_exclusive(("example", self.example), ("examples", self.examples), context)
        check_node(self.schema_, f"{context}.schema")
        check_nodes(self.examples, f"{context}.examples")
        check_content(self.content, f"{context}.content")


class Encoding(Node):
    """Serialization rules for a single property of a multipart/form body."""

    content_type: Optional[str] = Field(default=None, alias="contentType")
    headers: Optional[dict[str, Union[Reference, Header]]] = None
    style: Optional[str] = None
    explode: Optional[bool] = None
    allow_reserved: Optional[bool] = Field(default=None, alias="allowReserved")

    @classmethod
    def from_raw(cls, data: Any, dialect: SpecVersion = SpecVersion.OPENAPI_3_1) -> Encoding:
        data = normalize_shallow(expect_map(data, "encoding"))
        return cls.model_construct(
            content_type=data.get(Key.CONTENT_TYPE),
            headers=build_headers(data.get(Key.HEADERS), dialect),
            style=data.get(Key.STYLE),
            explode=data.get(Key.EXPLODE),
            allow_reserved=data.get(Key.ALLOW_RESERVED),
        )

    def check(self, context: str = "encoding") -> None:
        check_type(self.content_type, "string", f"{context}.contentType")
        check_nodes(self.headers, f"{context}.headers")
        check_type(self.style, "string", f"{context}.style")
        check_enum(self.style, ENCODING_STYLES, f"{context}.style")
        check_type(self.explode, "boolean", f"{context}.explode")
        check_type(self.allow_reserved, "boolean", f"{context}.allowReserved")


class MediaType(Node):
    schema_: Optional[Union[Reference, Schema]] = Field(default=None, alias="schema")
    example: Any = None
    examples: Optional[dict[str, Union[Reference, Example]]] = None
    encoding: Optional[dict[str, Encoding]] = None

    @classmethod
    def from_raw(cls, data: Any, dialect: SpecVersion = SpecVersion.OPENAPI_3_1) -> MediaType:
        data = normalize_shallow(expect_map(data, "media type"))
        return cls.model_construct(
            schema_=build_schema(data.get(Key.SCHEMA), dialect),
            example=data.get(Key.EXAMPLE),
            examples=build_examples(data.get(Key.EXAMPLES)),
            encoding=build_map(
                data.get(Key.ENCODING), lambda raw: Encoding.from_raw(raw, dialect), "encoding"
            ),
        )

    def check(self, context: str = "mediaType") -> None:
        check_node(self.schema_, f"{context}.schema")
        check_nodes(self.examples, f"{context}.examples")
        check_nodes(self.encoding, f"{context}.encoding")
        check_mutually_exclusive(("example", self.example), ("examples", self.examples), context)


class RequestBody(Node):
    description: Optional[str] = None
    content: dict[str, MediaType] = Field(default_factory=dict)
    required: Optional[bool] = None

    @classmethod
    def from_raw(cls, data: Any, dialect: SpecVersion = SpecVersion.OPENAPI_3_1) -> RequestBody:
        data = normalize_shallow(expect_map(data, "requestBody"))
        if data.get(Key.CONTENT) is None:
            raise StructuralError("content is required")
        return cls.model_construct(
            description=data.get(Key.DESCRIPTION),
            content=build_content(data[Key.CONTENT], dialect),
            required=data.get(Key.REQUIRED),
        )

    def check(self, context: str = "requestBody") -> None:
        check_required({"content": self.content}, context)
        check_type(self.description, "string", f"{context}.description")
        check_type(self.required, "boolean", f"{context}.required")
        check_content(self.content, f"{context}.content")


# --- Shared builders and checks ---


def build_schema(value: Any, dialect: SpecVersion) -> Any:
    """Build an optional ``schema`` position (Schema or Reference)."""
    if value is None:
        return None
    if not isinstance(value, dict):
        raise StructuralError("schema must be a schema object")
    return Schema.from_raw(value, dialect)


def build_examples(value: Any) -> Optional[dict[str, Any]]:
    return build_map(value, ref_or(Example.from_raw), "examples")


def build_headers(value: Any, dialect: SpecVersion) -> Optional[dict[str, Any]]:
    return build_map(value, ref_or(lambda raw: Header.from_raw(raw, dialect)), "headers")


def build_content(value: Any, dialect: SpecVersion) -> Optional[dict[str, MediaType]]:
    return build_map(value, lambda raw: MediaType.from_raw(raw, dialect), "content")


def check_content(content: Optional[dict[str, MediaType]], path: str) -> None:
    """Check each media type key of a ``content`` map, then its MediaType."""
    if not content:
        return
    for media_type, entry in content.items():
        entry_path = f"{path}.{media_type}"
        check_content_type(media_type, entry_path)
        entry.check(entry_path)


def check_single_content(content: Optional[dict[str, Any]], context: str) -> None:
    """``content`` on a parameter or header must hold exactly one entry."""
    if content is not None and len(content) != 1:
        raise SpecValidationError(f"{context}.content", "must contain exactly one entry")


Header.model_rebuild()
Encoding.model_rebuild()
MediaType.model_rebuild()
RequestBody.model_rebuild()
