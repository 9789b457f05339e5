"""Root documents for OpenAPI 3.0 and OpenAPI 3.1.

Both dialects share :class:`OpenAPIDocument`; the two subclasses only pin the
dialect that is threaded through every nested constructor. Root validation
uses an empty context, so breadcrumbs read ``paths./users.get`` rather than
``openapi.paths./users.get``.
"""

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
    build_optional,
    expect_map,
)
from specparse.models.common import (
    ExternalDocumentation,
    Info,
    SecurityRequirement,
    Tag,
    check_unique_operation_ids,
    check_unique_tags,
)
from specparse.models.v3.components import Components
from specparse.models.v3.path import (
    Operation,
    PathItem,
    build_path_items,
    build_security,
    build_servers,
    walk_operations,
)
from specparse.models.v3.server import Server
from specparse.validation import (
    check_format,
    check_node,
    check_nodes,
    check_path_format,
    check_type,
)

logger = logging.getLogger(__name__)


class OpenAPIDocument(Node):
    """Root object of an OpenAPI 3.x document."""

    dialect: ClassVar[SpecVersion] = SpecVersion.OPENAPI_3_1

    openapi: Optional[str] = None
    info: Optional[Info] = None
    json_schema_dialect: Optional[str] = Field(default=None, alias="jsonSchemaDialect")
    servers: Optional[list[Server]] = None
    paths: Optional[dict[str, Union[Reference, PathItem]]] = None
    webhooks: Optional[dict[str, Union[Reference, PathItem]]] = None
    components: Optional[Components] = None
    security: Optional[list[SecurityRequirement]] = None
    tags: Optional[list[Tag]] = None
    external_docs: Optional[ExternalDocumentation] = Field(default=None, alias="externalDocs")

    @classmethod
    def from_raw(cls, data: Any) -> OpenAPIDocument:
        """Build the whole document tree.

        Raises:
            StructuralError: If ``info`` is missing or any nested object
                cannot be built. The innermost message is kept.
        """
        data = normalize_shallow(expect_map(data, "document"))
        dialect = cls.dialect
        is_31 = dialect is SpecVersion.OPENAPI_3_1

        raw_info = data.get(Key.INFO)
        if not isinstance(raw_info, dict):
            raise StructuralError("info is required")

        logger.debug("Constructing %s document", dialect.label)
        return cls.model_construct(
            openapi=data.get(Key.OPENAPI),
            info=Info.from_raw(raw_info, dialect),
            json_schema_dialect=data.get(Key.JSON_SCHEMA_DIALECT) if is_31 else None,
            servers=build_servers(data.get(Key.SERVERS)),
            paths=build_path_items(data.get(Key.PATHS), dialect, "paths"),
            webhooks=build_path_items(data.get(Key.WEBHOOKS), dialect, "webhooks") if is_31 else None,
            components=build_optional(
                data.get(Key.COMPONENTS), lambda raw: Components.from_raw(raw, dialect)
            ),
            security=build_security(data.get(Key.SECURITY)),
            tags=build_list(data.get(Key.TAGS), Tag.from_raw, "tags"),
            external_docs=build_optional(data.get(Key.EXTERNAL_DOCS), ExternalDocumentation.from_raw),
        )

    def check(self, context: str = "") -> None:
        prefix = f"{context}." if context else ""
        check_type(self.openapi, "string", f"{prefix}openapi")
        check_node(self.info, f"{prefix}info")
        self._check_top_level_sections(context)
        check_type(self.json_schema_dialect, "string", f"{prefix}jsonSchemaDialect")
        check_format(self.json_schema_dialect, "uri", f"{prefix}jsonSchemaDialect")
        check_nodes(self.servers, f"{prefix}servers")
        if self.paths:
            for path, item in self.paths.items():
                item_path = f"{prefix}paths.{path}"
                check_path_format(path, item_path)
                item.check(item_path)
        check_nodes(self.webhooks, f"{prefix}webhooks")
        check_node(self.components, f"{prefix}components")
        check_nodes(self.security, f"{prefix}security")
        check_nodes(self.tags, f"{prefix}tags")
        check_unique_tags(self.tags, f"{prefix}tags")
        check_node(self.external_docs, f"{prefix}externalDocs")
        check_unique_operation_ids(self.walk_operations(prefix))

    def _check_top_level_sections(self, context: str) -> None:
        if self.dialect is SpecVersion.OPENAPI_3_1:
            if self.paths is None and self.components is None and self.webhooks is None:
                raise SpecValidationError(
                    context,
                    "At least one of paths, components, or webhooks must be present (OpenAPI 3.1)",
                )
        elif self.paths is None:
            raise SpecValidationError(context, "paths is required")

    def walk_operations(self, prefix: str = "") -> Iterator[tuple[str, Operation]]:
        """Yield ``(breadcrumb, operation)`` for paths, then webhooks."""
        yield from walk_operations(self.paths, f"{prefix}paths")
        yield from walk_operations(self.webhooks, f"{prefix}webhooks")

    def operations(self) -> Iterator[tuple[str, str, Operation]]:
        """Yield ``(path, method, operation)`` for every concrete path item."""
        for path, item in (self.paths or {}).items():
            if item.is_reference:
                continue
            for method, operation in item.operations():
                yield path, method, operation

    @property
    def schema_count(self) -> int:
        if self.components is None or not self.components.schemas:
            return 0
        return len(self.components.schemas)


class OpenAPI30Document(OpenAPIDocument):
    dialect: ClassVar[SpecVersion] = SpecVersion.OPENAPI_3_0


class OpenAPI31Document(OpenAPIDocument):
    dialect: ClassVar[SpecVersion] = SpecVersion.OPENAPI_3_1
