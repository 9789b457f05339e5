"""Response, Responses, Operation and PathItem objects (Swagger 2.0)."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
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
    data_key,
    expect_map,
    ref_or,
)
from specparse.models.common import (
    ExternalDocumentation,
    SecurityRequirement,
    check_unique_parameters,
)
from specparse.models.v2.parameter import Header, Parameter
from specparse.models.v2.schema import Schema
from specparse.validation import (
    check_content_type,
    check_enum,
    check_list_of,
    check_node,
    check_nodes,
    check_required,
    check_status_code,
    check_type,
)

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch")
TRANSFER_SCHEMES = ("http", "https", "ws", "wss")

_METHOD_KEYS = {
    "get": Key.GET,
    "put": Key.PUT,
    "post": Key.POST,
    "delete": Key.DELETE,
    "options": Key.OPTIONS,
    "head": Key.HEAD,
    "patch": Key.PATCH,
}


def check_media_types(values: Any, path: str) -> None:
    """Check a ``consumes``/``produces`` list of MIME types."""
    check_list_of(values, "string", path)
    for index, value in enumerate(values or []):
        check_content_type(value, f"{path}[{index}]")


def check_schemes(values: Any, path: str) -> None:
    check_list_of(values, "string", path)
    for index, value in enumerate(values or []):
        check_enum(value, TRANSFER_SCHEMES, f"{path}[{index}]")


def build_parameters(value: Any) -> Optional[list[Any]]:
    return build_list(value, ref_or(Parameter.from_raw), "parameters")


def build_security(value: Any) -> Optional[list[SecurityRequirement]]:
    return build_list(value, SecurityRequirement.from_raw, "security")


class Response(Node):
    description: Optional[str] = None
    schema_: Optional[Union[Reference, Schema]] = Field(default=None, alias="schema")
    headers: Optional[dict[str, Header]] = None
    examples: Optional[dict[str, Any]] = None

    @classmethod
    def from_raw(cls, data: Any) -> Response:
        data = normalize_shallow(expect_map(data, "response"))
        schema = data.get(Key.SCHEMA)
        if schema is not None and not isinstance(schema, dict):
            raise StructuralError("schema must be a schema object")
        examples = data.get(Key.EXAMPLES)
        if isinstance(examples, dict):
            examples = {data_key(key): value for key, value in examples.items()}
        return cls.model_construct(
            description=data.get(Key.DESCRIPTION),
            schema_=Schema.from_raw(schema) if schema is not None else None,
            headers=build_map(data.get(Key.HEADERS), Header.from_raw, "headers"),
            examples=examples,
        )

    def check(self, context: str = "response") -> None:
        check_required({"description": self.description}, context)
        check_type(self.description, "string", f"{context}.description")
        check_node(self.schema_, f"{context}.schema")
        check_nodes(self.headers, f"{context}.headers")
        check_type(self.examples, "map", f"{context}.examples")
        for mime_type in self.examples or {}:
            check_content_type(mime_type, f"{context}.examples.{mime_type}")


class Responses(Node):
    responses: dict[str, Union[Reference, Response]] = Field(default_factory=dict)

    @classmethod
    def from_raw(cls, data: Any) -> Responses:
        data = expect_map(data, "responses")
        build = ref_or(Response.from_raw)
        return cls.model_construct(
            responses={str(data_key(code)): build(raw) for code, raw in data.items()}
        )

    def check(self, context: str = "responses") -> None:
        if not self.responses:
            raise SpecValidationError(context, "At least one response is required")
        for code, response in self.responses.items():
            path = f"{context}.{code}"
            check_status_code(code, path)
            response.check(path)


class Operation(Node):
    tags: Optional[list[str]] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    external_docs: Optional[ExternalDocumentation] = Field(default=None, alias="externalDocs")
    operation_id: Optional[str] = Field(default=None, alias="operationId")
    consumes: Optional[list[str]] = None
    produces: Optional[list[str]] = None
    parameters: Optional[list[Union[Reference, Parameter]]] = None
    responses: Optional[Responses] = None
    schemes: Optional[list[str]] = None
    deprecated: Optional[bool] = None
    security: Optional[list[SecurityRequirement]] = None

    @classmethod
    def from_raw(cls, data: Any) -> Operation:
        data = normalize_shallow(expect_map(data, "operation"))
        responses = data.get(Key.RESPONSES)
        if responses is None:
            raise StructuralError("responses is required")
        return cls.model_construct(
            tags=data.get(Key.TAGS),
            summary=data.get(Key.SUMMARY),
            description=data.get(Key.DESCRIPTION),
            external_docs=build_optional(data.get(Key.EXTERNAL_DOCS), ExternalDocumentation.from_raw),
            operation_id=data.get(Key.OPERATION_ID),
            consumes=data.get(Key.CONSUMES),
            produces=data.get(Key.PRODUCES),
            parameters=build_parameters(data.get(Key.PARAMETERS)),
            responses=Responses.from_raw(responses),
            schemes=data.get(Key.SCHEMES),
            deprecated=data.get(Key.DEPRECATED),
            security=build_security(data.get(Key.SECURITY)),
        )

    def check(self, context: str = "operation") -> None:
        check_required({"responses": self.responses}, context)
        check_list_of(self.tags, "string", f"{context}.tags")
        check_type(self.summary, "string", f"{context}.summary")
        check_type(self.description, "string", f"{context}.description")
        check_type(self.operation_id, "string", f"{context}.operationId")
        check_type(self.deprecated, "boolean", f"{context}.deprecated")
        check_node(self.external_docs, f"{context}.externalDocs")
        check_media_types(self.consumes, f"{context}.consumes")
        check_media_types(self.produces, f"{context}.produces")
        check_schemes(self.schemes, f"{context}.schemes")
        check_nodes(self.parameters, f"{context}.parameters")
        check_unique_parameters(self.parameters, f"{context}.parameters")
        check_node(self.responses, f"{context}.responses")
        check_nodes(self.security, f"{context}.security")


class PathItem(Node):
    get: Optional[Operation] = None
    put: Optional[Operation] = None
    post: Optional[Operation] = None
    delete: Optional[Operation] = None
    options: Optional[Operation] = None
    head: Optional[Operation] = None
    patch: Optional[Operation] = None
    parameters: Optional[list[Union[Reference, Parameter]]] = None

    @classmethod
    def from_raw(cls, data: Any) -> PathItem:
        data = normalize_shallow(expect_map(data, "path item"))
        operations = {
            method: build_optional(data.get(key), Operation.from_raw)
            for method, key in _METHOD_KEYS.items()
        }
        return cls.model_construct(
            parameters=build_parameters(data.get(Key.PARAMETERS)),
            **operations,
        )

    def operations(self) -> Iterator[tuple[str, Operation]]:
        for method in HTTP_METHODS:
            operation = getattr(self, method)
            if operation is not None:
                yield method, operation

    def check(self, context: str = "pathItem") -> None:
        for method, operation in self.operations():
            operation.check(f"{context}.{method}")
        check_nodes(self.parameters, f"{context}.parameters")
        check_unique_parameters(self.parameters, f"{context}.parameters")


def walk_operations(
    path_items: Optional[Mapping[str, Any]], context: str
) -> Iterator[tuple[str, Operation]]:
    """Yield ``(breadcrumb, operation)`` for every concrete path item."""
    for key, item in (path_items or {}).items():
        if item.is_reference:
            continue
        for method, operation in item.operations():
            yield f"{context}.{key}.{method}", operation
