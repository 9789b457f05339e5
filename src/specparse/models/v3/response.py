"""Link, Response and Responses objects (OpenAPI 3.x)."""

from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import Field

from specparse.exceptions import SpecValidationError
from specparse.keys import Key, normalize_shallow
from specparse.models.base import (
    Node,
    Reference,
    SpecVersion,
    build_map,
    build_optional,
    data_key,
    expect_map,
    ref_or,
)
from specparse.models.v3.media import Header, MediaType, build_content, build_headers, check_content
from specparse.models.v3.server import Server
from specparse.validation import (
    check_node,
    check_nodes,
    check_required,
    check_status_code,
    check_type,
)


class Link(Node):
    """A design-time link from a response to another operation."""

    operation_ref: Optional[str] = Field(default=None, alias="operationRef")
    operation_id: Optional[str] = Field(default=None, alias="operationId")
    parameters: Optional[dict[str, Any]] = None
    request_body: Any = Field(default=None, alias="requestBody")
    description: Optional[str] = None
    server: Optional[Server] = None

    @classmethod
    def from_raw(cls, data: Any) -> Link:
        data = normalize_shallow(expect_map(data, "link"))
        parameters = data.get(Key.PARAMETERS)
        if isinstance(parameters, dict):
            parameters = {data_key(key): value for key, value in parameters.items()}
        return cls.model_construct(
            operation_ref=data.get(Key.OPERATION_REF),
            operation_id=data.get(Key.OPERATION_ID),
            parameters=parameters,
            request_body=data.get(Key.REQUEST_BODY),
            description=data.get(Key.DESCRIPTION),
            server=build_optional(data.get(Key.SERVER), Server.from_raw),
        )

    def check(self, context: str = "link") -> None:
        if self.operation_ref is None and self.operation_id is None:
            raise SpecValidationError(context, "Either operationRef or operationId is required")
        if self.operation_ref is not None and self.operation_id is not None:
            raise SpecValidationError(context, "operationRef and operationId are mutually exclusive")
        check_type(self.operation_ref, "string", f"{context}.operationRef")
        check_type(self.operation_id, "string", f"{context}.operationId")
        check_type(self.parameters, "map", f"{context}.parameters")
        check_type(self.description, "string", f"{context}.description")
        check_node(self.server, f"{context}.server")


class Response(Node):
    description: Optional[str] = None
    headers: Optional[dict[str, Union[Reference, Header]]] = None
    content: Optional[dict[str, MediaType]] = None
    links: Optional[dict[str, Union[Reference, Link]]] = None

    @classmethod
    def from_raw(cls, data: Any, dialect: SpecVersion = SpecVersion.OPENAPI_3_1) -> Response:
        data = normalize_shallow(expect_map(data, "response"))
        return cls.model_construct(
            description=data.get(Key.DESCRIPTION),
            headers=build_headers(data.get(Key.HEADERS), dialect),
            content=build_content(data.get(Key.CONTENT), dialect),
            links=build_map(data.get(Key.LINKS), ref_or(Link.from_raw), "links"),
        )

    def check(self, context: str = "response") -> None:
        check_required({"description": self.description}, context)
        check_type(self.description, "string", f"{context}.description")
        check_nodes(self.headers, f"{context}.headers")
        check_content(self.content, f"{context}.content")
        check_nodes(self.links, f"{context}.links")


class Responses(Node):
    """Expected responses of an operation, keyed by status code or ``default``."""

    responses: dict[str, Union[Reference, Response]] = Field(default_factory=dict)

    @classmethod
    def from_raw(cls, data: Any, dialect: SpecVersion = SpecVersion.OPENAPI_3_1) -> Responses:
        data = expect_map(data, "responses")
        build = ref_or(lambda raw: Response.from_raw(raw, dialect))
        # YAML turns unquoted status codes into integers.
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
