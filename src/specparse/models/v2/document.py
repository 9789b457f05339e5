"""Root object of a Swagger 2.0 document."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any, ClassVar, Optional, Union

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
    expect_map,
    ref_or,
)
from specparse.models.common import (
    ExternalDocumentation,
    Info,
    SecurityRequirement,
    Tag,
    check_unique_operation_ids,
    check_unique_tags,
)
from specparse.models.v2.parameter import Parameter
from specparse.models.v2.path import (
    Operation,
    PathItem,
    Response,
    build_security,
    check_media_types,
    check_schemes,
    walk_operations,
)
from specparse.models.v2.schema import Schema
from specparse.models.v2.security import SecurityScheme
from specparse.validation import (
    check_node,
    check_nodes,
    check_path_format,
    check_type,
)

logger = logging.getLogger(__name__)


def check_host(host: Optional[str], path: str) -> None:
    """``host`` is a bare name (optionally with a port): no scheme, no path."""
    if host is None:
        return
    check_type(host, "string", path)
    if "://" in host:
        raise SpecValidationError(path, f"must not include a scheme, got: {host}")
    if "/" in host:
        raise SpecValidationError(path, f"must not include a path, got: {host}")


class SwaggerDocument(Node):
    """A Swagger 2.0 document.

    Unlike OpenAPI 3.x the server is described by ``host``, ``basePath`` and
    ``schemes``, reusable objects live under ``definitions``, ``parameters``,
    ``responses`` and ``securityDefinitions``, and ``paths`` is required.
    """

    dialect: ClassVar[SpecVersion] = SpecVersion.SWAGGER_2_0

    swagger: Optional[str] = None
    info: Optional[Info] = None
    host: Optional[str] = None
    base_path: Optional[str] = Field(default=None, alias="basePath")
    schemes: Optional[list[str]] = None
    consumes: Optional[list[str]] = None
    produces: Optional[list[str]] = None
    paths: Optional[dict[str, Union[Reference, PathItem]]] = None
    definitions: Optional[dict[str, Union[Reference, Schema]]] = None
    parameters: Optional[dict[str, Union[Reference, Parameter]]] = None
    responses: Optional[dict[str, Union[Reference, Response]]] = None
    security_definitions: Optional[dict[str, SecurityScheme]] = Field(
        default=None, alias="securityDefinitions"
    )
    security: Optional[list[SecurityRequirement]] = None
    tags: Optional[list[Tag]] = None
    external_docs: Optional[ExternalDocumentation] = Field(default=None, alias="externalDocs")

    @classmethod
    def from_raw(cls, data: Any) -> SwaggerDocument:
        """Build the whole document tree.

        Raises:
            StructuralError: If ``info`` or ``paths`` is missing, or any
                nested object cannot be built.
        """
        data = normalize_shallow(expect_map(data, "document"))

        raw_info = data.get(Key.INFO)
        if not isinstance(raw_info, dict):
            raise StructuralError("info is required")
        raw_paths = data.get(Key.PATHS)
        if not isinstance(raw_paths, dict):
            raise StructuralError("paths is required")

        logger.debug("Constructing %s document", cls.dialect.label)
        return cls.model_construct(
            swagger=data.get(Key.SWAGGER),
            info=Info.from_raw(raw_info, cls.dialect),
            host=data.get(Key.HOST),
            base_path=data.get(Key.BASE_PATH),
            schemes=data.get(Key.SCHEMES),
            consumes=data.get(Key.CONSUMES),
            produces=data.get(Key.PRODUCES),
            paths=build_map(raw_paths, ref_or(PathItem.from_raw), "paths"),
            definitions=build_map(data.get(Key.DEFINITIONS), Schema.from_raw, "definitions"),
            parameters=build_map(
                data.get(Key.PARAMETERS), ref_or(Parameter.from_raw), "parameters"
            ),
            responses=build_map(data.get(Key.RESPONSES), ref_or(Response.from_raw), "responses"),
            security_definitions=build_map(
                data.get(Key.SECURITY_DEFINITIONS), SecurityScheme.from_raw, "securityDefinitions"
            ),
            security=build_security(data.get(Key.SECURITY)),
            tags=build_list(data.get(Key.TAGS), Tag.from_raw, "tags"),
            external_docs=build_optional(data.get(Key.EXTERNAL_DOCS), ExternalDocumentation.from_raw),
        )

    def check(self, context: str = "") -> None:
        prefix = f"{context}." if context else ""
        check_type(self.swagger, "string", f"{prefix}swagger")
        check_node(self.info, f"{prefix}info")
        if self.paths is None:
            raise SpecValidationError(context, "paths is required")
        check_host(self.host, f"{prefix}host")
        check_type(self.base_path, "string", f"{prefix}basePath")
        if self.base_path is not None:
            check_path_format(self.base_path, f"{prefix}basePath")
        check_schemes(self.schemes, f"{prefix}schemes")
        check_media_types(self.consumes, f"{prefix}consumes")
        check_media_types(self.produces, f"{prefix}produces")
        for path, item in self.paths.items():
            item_path = f"{prefix}paths.{path}"
            check_path_format(path, item_path)
            item.check(item_path)
        check_nodes(self.definitions, f"{prefix}definitions")
        check_nodes(self.parameters, f"{prefix}parameters")
        check_nodes(self.responses, f"{prefix}responses")
        check_nodes(self.security_definitions, f"{prefix}securityDefinitions")
        check_nodes(self.security, f"{prefix}security")
        check_nodes(self.tags, f"{prefix}tags")
        check_unique_tags(self.tags, f"{prefix}tags")
        check_node(self.external_docs, f"{prefix}externalDocs")
        check_unique_operation_ids(self.walk_operations(prefix))

    def walk_operations(self, prefix: str = "") -> Iterator[tuple[str, Operation]]:
        yield from walk_operations(self.paths, f"{prefix}paths")

    def operations(self) -> Iterator[tuple[str, str, Operation]]:
        """Yield ``(path, method, operation)`` for every concrete path item."""
        for path, item in (self.paths or {}).items():
            if item.is_reference:
                continue
            for method, operation in item.operations():
                yield path, method, operation

    @property
    def schema_count(self) -> int:
        return len(self.definitions or {})
