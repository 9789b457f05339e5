"""OpenAPI 3.0 and 3.1 object models.

A single family serves both dialects; constructors take a
:class:`~specparse.models.base.SpecVersion` and read 3.1-only keywords only
when it is ``OPENAPI_3_1``.
"""

from specparse.models.v3.components import Components
from specparse.models.v3.document import OpenAPI30Document, OpenAPI31Document, OpenAPIDocument
from specparse.models.v3.media import Encoding, Example, Header, MediaType, RequestBody
from specparse.models.v3.parameter import Parameter
from specparse.models.v3.path import Callback, Operation, PathItem
from specparse.models.v3.response import Link, Response, Responses
from specparse.models.v3.schema import Discriminator, Schema
from specparse.models.v3.security import OAuthFlow, OAuthFlows, SecurityScheme
from specparse.models.v3.server import Server, ServerVariable

__all__ = [
    "Callback",
    "Components",
    "Discriminator",
    "Encoding",
    "Example",
    "Header",
    "Link",
    "MediaType",
    "OAuthFlow",
    "OAuthFlows",
    "OpenAPI30Document",
    "OpenAPI31Document",
    "OpenAPIDocument",
    "Operation",
    "Parameter",
    "PathItem",
    "RequestBody",
    "Response",
    "Responses",
    "Schema",
    "SecurityScheme",
    "Server",
    "ServerVariable",
]
