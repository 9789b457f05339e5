"""Server and ServerVariable objects (OpenAPI 3.x)."""

from __future__ import annotations

from typing import Any, Optional

from specparse.exceptions import SpecValidationError
from specparse.keys import Key, normalize_shallow
from specparse.models.base import Node, build_map, expect_map
from specparse.validation import (
    check_list_of,
    check_map_values,
    check_node,
    check_required,
    check_type,
)


class ServerVariable(Node):
    """A substitution variable for a server URL template."""

    enum: Optional[list[str]] = None
    default: Optional[str] = None
    description: Optional[str] = None

    @classmethod
    def from_raw(cls, data: Any) -> ServerVariable:
        data = normalize_shallow(expect_map(data, "server variable"))
        return cls.model_construct(
            enum=data.get(Key.ENUM),
            default=data.get(Key.DEFAULT),
            description=data.get(Key.DESCRIPTION),
        )

    def check(self, context: str = "serverVariable") -> None:
        check_required({"default": self.default}, context)
        check_type(self.default, "string", f"{context}.default")
        check_type(self.description, "string", f"{context}.description")
        check_list_of(self.enum, "string", f"{context}.enum")
        if self.enum is not None:
            if not self.enum:
                raise SpecValidationError(f"{context}.enum", "must not be empty")
            if self.default not in self.enum:
                raise SpecValidationError(
                    f"{context}.default", "must be one of the enum values"
                )


class Server(Node):
    url: Optional[str] = None
    description: Optional[str] = None
    variables: Optional[dict[str, ServerVariable]] = None

    @classmethod
    def from_raw(cls, data: Any) -> Server:
        data = normalize_shallow(expect_map(data, "server"))
        return cls.model_construct(
            url=data.get(Key.URL),
            description=data.get(Key.DESCRIPTION),
            variables=build_map(data.get(Key.VARIABLES), ServerVariable.from_raw, "variables"),
        )

    def check(self, context: str = "server") -> None:
        check_required({"url": self.url}, context)
        check_type(self.url, "string", f"{context}.url")
        check_type(self.description, "string", f"{context}.description")
        check_map_values(self.variables, check_node, f"{context}.variables")
