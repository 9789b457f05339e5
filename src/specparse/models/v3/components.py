"""Components Object (OpenAPI 3.x): reusable objects addressed by ``$ref``."""

from __future__ import annotations

import re
from typing import Any, Optional, Union

from pydantic import Field

from specparse.exceptions import SpecValidationError
from specparse.keys import Key, normalize_shallow
from specparse.models.base import Node, Reference, SpecVersion, build_map, expect_map, ref_or
from specparse.models.v3.media import (
    Example,
    Header,
    RequestBody,
    build_examples,
    build_headers,
)
from specparse.models.v3.parameter import Parameter
from specparse.models.v3.path import Callback, PathItem, build_path_items
from specparse.models.v3.response import Link, Response
from specparse.models.v3.schema import Schema
from specparse.models.v3.security import SecurityScheme

COMPONENT_KEY_RE = re.compile(r"^[a-zA-Z0-9.\-_]+$")


class Components(Node):
    """Holds reusable objects for the rest of the document.

    Every slot is a map from a component name to either the slot's native
    type or a :class:`~specparse.models.base.Reference`. ``pathItems`` only
    exists in OpenAPI 3.1.
    """

    schemas: Optional[dict[str, Union[Reference, Schema]]] = None
    responses: Optional[dict[str, Union[Reference, Response]]] = None
    parameters: Optional[dict[str, Union[Reference, Parameter]]] = None
    examples: Optional[dict[str, Union[Reference, Example]]] = None
    request_bodies: Optional[dict[str, Union[Reference, RequestBody]]] = Field(
        default=None, alias="requestBodies"
    )
    headers: Optional[dict[str, Union[Reference, Header]]] = None
    security_schemes: Optional[dict[str, Union[Reference, SecurityScheme]]] = Field(
        default=None, alias="securitySchemes"
    )
    links: Optional[dict[str, Union[Reference, Link]]] = None
    callbacks: Optional[dict[str, Union[Reference, Callback]]] = None
    path_items: Optional[dict[str, Union[Reference, PathItem]]] = Field(
        default=None, alias="pathItems"
    )

    @classmethod
    def from_raw(cls, data: Any, dialect: SpecVersion = SpecVersion.OPENAPI_3_1) -> Components:
        data = normalize_shallow(expect_map(data, "components"))

        def slot(key: Key, builder: Any) -> Optional[dict[str, Any]]:
            return build_map(data.get(key), ref_or(builder), str(key))

        return cls.model_construct(
            schemas=slot(Key.SCHEMAS, lambda raw: Schema.from_raw(raw, dialect)),
            responses=slot(Key.RESPONSES, lambda raw: Response.from_raw(raw, dialect)),
            parameters=slot(Key.PARAMETERS, lambda raw: Parameter.from_raw(raw, dialect)),
            examples=build_examples(data.get(Key.EXAMPLES)),
            request_bodies=slot(Key.REQUEST_BODIES, lambda raw: RequestBody.from_raw(raw, dialect)),
            headers=build_headers(data.get(Key.HEADERS), dialect),
            security_schemes=slot(
                Key.SECURITY_SCHEMES, lambda raw: SecurityScheme.from_raw(raw, dialect)
            ),
            links=slot(Key.LINKS, Link.from_raw),
            callbacks=slot(Key.CALLBACKS, lambda raw: Callback.from_raw(raw, dialect)),
            path_items=(
                build_path_items(data.get(Key.PATH_ITEMS), dialect, "pathItems")
                if dialect is SpecVersion.OPENAPI_3_1
                else None
            ),
        )

    def slots(self) -> dict[str, Optional[dict[str, Any]]]:
        """Return every slot keyed by its document name, in validation order."""
        return {
            "schemas": self.schemas,
            "responses": self.responses,
            "parameters": self.parameters,
            "examples": self.examples,
            "requestBodies": self.request_bodies,
            "headers": self.headers,
            "securitySchemes": self.security_schemes,
            "links": self.links,
            "callbacks": self.callbacks,
            "pathItems": self.path_items,
        }

    def check(self, context: str = "components") -> None:
        for slot_name, entries in self.slots().items():
            if not entries:
                continue
            for name, entry in entries.items():
                path = f"{context}.{slot_name}.{name}"
                if not isinstance(name, str) or not COMPONENT_KEY_RE.fullmatch(name):
                    raise SpecValidationError(
                        path, "component name must match ^[a-zA-Z0-9.\\-_]+$"
                    )
                entry.check(path)
