"""Swagger 2.0 object models."""

from specparse.models.v2.document import SwaggerDocument
from specparse.models.v2.parameter import Header, Parameter
from specparse.models.v2.path import Operation, PathItem, Response, Responses
from specparse.models.v2.schema import Items, Schema
from specparse.models.v2.security import SecurityScheme

__all__ = [
    "Header",
    "Items",
    "Operation",
    "Parameter",
    "PathItem",
    "Response",
    "Responses",
    "Schema",
    "SecurityScheme",
    "SwaggerDocument",
]
