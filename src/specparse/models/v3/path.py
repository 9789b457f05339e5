"""Operation, PathItem and Callback objects (OpenAPI 3.x).

The three refer to each other (an operation carries callbacks, a callback is a
map of path items, a path item carries operations), so they share a module.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any, Optional, Union

from pydantic import Field

from specparse.exceptions import StructuralError
from specparse.keys import Key, normalize_shallow
from specparse.models.base import (
    Node,
    Reference,
    SpecVersion,
    build_list,
    build_map,
    build_optional,
    expect_map,
    ref_or,
)
from specparse.models.common import (
    ExternalDocumentation,
    SecurityRequirement,
    check_unique_parameters,
)
from specparse.models.v3.media import RequestBody
from specparse.models.v3.parameter import Parameter
from specparse.models.v3.response import Responses
from specparse.models.v3.server import Server
from specparse.validation import (
    check_list_of,
    check_node,
    check_nodes,
    check_type,
)

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

_METHOD_KEYS = {
    "get": Key.GET,
    "put": Key.PUT,
    "post": Key.POST,
    "delete": Key.DELETE,
    "options": Key.OPTIONS,
    "head": Key.HEAD,
    "patch": Key.PATCH,
    "trace": Key.TRACE,
}


def build_parameters(value: Any, dialect: SpecVersion) -> Optional[list[Any]]:
    return build_list(value, ref_or(lambda raw: Parameter.from_raw(raw, dialect)), "parameters")


def build_servers(value: Any) -> Optional[list[Server]]:
    return build_list(value, Server.from_raw, "servers")


def build_security(value: Any) -> Optional[list[SecurityRequirement]]:
    return build_list(value, SecurityRequirement.from_raw, "security")


def build_path_items(value: Any, dialect: SpecVersion, what: str) -> Optional[dict[str, Any]]:
    """Build a map of path items (``paths``, ``webhooks``, callback expressions)."""
    return build_map(value, ref_or(lambda raw: PathItem.from_raw(raw, dialect)), what)


class Callback(Node):
    """Out-of-band requests the API may initiate, keyed by runtime expression."""

    expressions: dict[str, Union[Reference, PathItem]] = Field(default_factory=dict)

    @classmethod
    def from_raw(cls, data: Any, dialect: SpecVersion = SpecVersion.OPENAPI_3_1) -> Callback:
        return cls.model_construct(
            expressions=build_path_items(expect_map(data, "callback"), dialect, "callback")
        )

    def check(self, context: str = "callback") -> None:
        check_nodes(self.expressions, context)


class Operation(Node):
    tags: Optional[list[str]] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    external_docs: Optional[ExternalDocumentation] = Field(default=None, alias="externalDocs")
    operation_id: Optional[str] = Field(default=None, alias="operationId")
    parameters: Optional[list[Union[Reference, Parameter]]] = None
    request_body: Optional[Union[Reference, RequestBody]] = Field(default=None, alias="requestBody")
    responses: Optional[Responses] = None
    callbacks: Optional[dict[str, Union[Reference, Callback]]] = None
    deprecated: Optional[bool] = None
    security: Optional[list[SecurityRequirement]] = None
    servers: Optional[list[Server]] = None

    @classmethod
    def from_raw(cls, data: Any, dialect: SpecVersion = SpecVersion.OPENAPI_3_1) -> Operation:
        """Build an Operation.

        ``responses`` is required by OpenAPI 3.0 and optional in 3.1.

        Raises:
            StructuralError: If a required field is absent or a nested object
                cannot be built.
        """
        data = normalize_shallow(expect_map(data, "operation"))
        responses = data.get(Key.RESPONSES)
        if responses is None and dialect is SpecVersion.OPENAPI_3_0:
            raise StructuralError("responses is required")
        return cls.model_construct(
            tags=data.get(Key.TAGS),
            summary=data.get(Key.SUMMARY),
            description=data.get(Key.DESCRIPTION),
            external_docs=build_optional(data.get(Key.EXTERNAL_DOCS), ExternalDocumentation.from_raw),
            operation_id=data.get(Key.OPERATION_ID),
            parameters=build_parameters(data.get(Key.PARAMETERS), dialect),
            request_body=build_optional(
                data.get(Key.REQUEST_BODY), ref_or(lambda raw: RequestBody.from_raw(raw, dialect))
            ),
            responses=build_optional(responses, lambda raw: Responses.from_raw(raw, dialect)),
            callbacks=build_map(
                data.get(Key.CALLBACKS),
                ref_or(lambda raw: Callback.from_raw(raw, dialect)),
                "callbacks",
            ),
            deprecated=data.get(Key.DEPRECATED),
            security=build_security(data.get(Key.SECURITY)),
            servers=build_servers(data.get(Key.SERVERS)),
        )

    def check(self, context: str = "operation") -> None:
        check_list_of(self.tags, "string", f"{context}.tags")
        check_type(self.summary, "string", f"{context}.summary")
        check_type(self.description, "string", f"{context}.description")
        check_type(self.operation_id, "string", f"{context}.operationId")
        check_type(self.deprecated, "boolean", f"{context}.deprecated")
        check_node(self.external_docs, f"{context}.externalDocs")
        check_nodes(self.parameters, f"{context}.parameters")
        check_unique_parameters(self.parameters, f"{context}.parameters")
        check_node(self.request_body, f"{context}.requestBody")
        check_node(self.responses, f"{context}.responses")
        check_nodes(self.callbacks, f"{context}.callbacks")
        check_nodes(self.security, f"{context}.security")
        check_nodes(self.servers, f"{context}.servers")


class PathItem(Node):
    """The operations available on a single path."""

    summary: Optional[str] = None
    description: Optional[str] = None
    get: Optional[Operation] = None
    put: Optional[Operation] = None
    post: Optional[Operation] = None
    delete: Optional[Operation] = None
    options: Optional[Operation] = None
    head: Optional[Operation] = None
    patch: Optional[Operation] = None
    trace: Optional[Operation] = None
    servers: Optional[list[Server]] = None
    parameters: Optional[list[Union[Reference, Parameter]]] = None

    @classmethod
    def from_raw(cls, data: Any, dialect: SpecVersion = SpecVersion.OPENAPI_3_1) -> PathItem:
        data = normalize_shallow(expect_map(data, "path item"))
        operations = {
            method: build_optional(data.get(key), lambda raw: Operation.from_raw(raw, dialect))
            for method, key in _METHOD_KEYS.items()
        }
        return cls.model_construct(
            summary=data.get(Key.SUMMARY),
            description=data.get(Key.DESCRIPTION),
            servers=build_servers(data.get(Key.SERVERS)),
            parameters=build_parameters(data.get(Key.PARAMETERS), dialect),
            **operations,
        )

    def operations(self) -> Iterator[tuple[str, Operation]]:
        """Yield ``(method, operation)`` for each declared method, in a fixed order."""
        for method in HTTP_METHODS:
            operation = getattr(self, method)
            if operation is not None:
                yield method, operation

    def check(self, context: str = "pathItem") -> None:
        check_type(self.summary, "string", f"{context}.summary")
        check_type(self.description, "string", f"{context}.description")
        for method, operation in self.operations():
            operation.check(f"{context}.{method}")
        check_nodes(self.servers, f"{context}.servers")
        check_nodes(self.parameters, f"{context}.parameters")
        check_unique_parameters(self.parameters, f"{context}.parameters")


def walk_operations(
    path_items: Optional[Mapping[str, Any]], context: str
) -> Iterator[tuple[str, Operation]]:
    """Yield ``(breadcrumb, operation)`` for every operation under *path_items*.

    Operations nested in callbacks follow the operation that declares them.
    References are not followed.
    """
    if not path_items:
        return
    for key, item in path_items.items():
        if item.is_reference:
            continue
        for method, operation in item.operations():
            location = f"{context}.{key}.{method}"
            yield location, operation
            for name, callback in (operation.callbacks or {}).items():
                if not callback.is_reference:
                    yield from walk_operations(
                        callback.expressions, f"{location}.callbacks.{name}"
                    )


Callback.model_rebuild()
Operation.model_rebuild()
PathItem.model_rebuild()
