"""Bounded allow-list normalizer for untrusted object keys.

Documents often arrive from untrusted sources (uploaded files, remote URLs),
so object keys are attacker-controlled text. Before any structural
interpretation every key is mapped through a fixed vocabulary: a key that
appears in the allow-list becomes the matching :class:`Key` member, and any
other key is kept verbatim as a plain string. No new identifiers are ever
created from input, so the set of canonical keys is fixed when the module is
imported no matter what is fed in.

Both functions are pure and idempotent::

    >>> normalize_shallow({"title": "Pets", "x-internal": True})
    {<Key.TITLE: 'title'>: 'Pets', 'x-internal': True}

:func:`normalize_shallow` is what the ``from_raw`` constructors use on each
object they read. User-named maps (``paths``, ``properties``, ``responses``
...) are never normalized by the constructors because their keys are data,
not field names.
"""

from __future__ import annotations

import enum
from typing import Any


class Key(str, enum.Enum):
    """Canonical identifiers for every field name the object models read.

    Members hash and compare like their string values (``str`` precedes
    ``Enum`` in the MRO), so a normalized map answers lookups by member or by
    plain string alike. ``str(member)`` and f-string formatting yield the
    field name.
    """

    # Version markers
    SWAGGER = "swagger"
    OPENAPI = "openapi"
    JSON_SCHEMA_DIALECT = "jsonSchemaDialect"

    # Metadata
    INFO = "info"
    TITLE = "title"
    VERSION = "version"
    SUMMARY = "summary"
    DESCRIPTION = "description"
    TERMS_OF_SERVICE = "termsOfService"
    CONTACT = "contact"
    NAME = "name"
    URL = "url"
    EMAIL = "email"
    LICENSE = "license"
    IDENTIFIER = "identifier"
    EXTERNAL_DOCS = "externalDocs"
    TAGS = "tags"

    # Servers and hosts
    SERVERS = "servers"
    SERVER = "server"
    HOST = "host"
    BASE_PATH = "basePath"
    SCHEMES = "schemes"
    VARIABLES = "variables"
    ENUM = "enum"
    DEFAULT = "default"

    # Paths and operations
    PATHS = "paths"
    WEBHOOKS = "webhooks"
    GET = "get"
    PUT = "put"
    POST = "post"
    DELETE = "delete"
    OPTIONS = "options"
    HEAD = "head"
    PATCH = "patch"
    TRACE = "trace"
    OPERATION_ID = "operationId"
    OPERATION_REF = "operationRef"
    CONSUMES = "consumes"
    PRODUCES = "produces"
    DEPRECATED = "deprecated"

    # Parameters, headers and content
    PARAMETERS = "parameters"
    IN = "in"
    REQUIRED = "required"
    ALLOW_EMPTY_VALUE = "allowEmptyValue"
    STYLE = "style"
    EXPLODE = "explode"
    ALLOW_RESERVED = "allowReserved"
    SCHEMA = "schema"
    EXAMPLE = "example"
    EXAMPLES = "examples"
    CONTENT = "content"
    ENCODING = "encoding"
    CONTENT_TYPE = "contentType"
    COLLECTION_FORMAT = "collectionFormat"
    VALUE = "value"
    EXTERNAL_VALUE = "externalValue"

    # Requests and responses
    REQUEST_BODY = "requestBody"
    RESPONSES = "responses"
    HEADERS = "headers"
    LINKS = "links"
    CALLBACKS = "callbacks"

    # Schema structure
    TYPE = "type"
    FORMAT = "format"
    ITEMS = "items"
    PROPERTIES = "properties"
    ADDITIONAL_PROPERTIES = "additionalProperties"
    PATTERN_PROPERTIES = "patternProperties"
    PROPERTY_NAMES = "propertyNames"
    UNEVALUATED_PROPERTIES = "unevaluatedProperties"
    UNEVALUATED_ITEMS = "unevaluatedItems"
    PREFIX_ITEMS = "prefixItems"
    CONTAINS = "contains"
    MIN_CONTAINS = "minContains"
    MAX_CONTAINS = "maxContains"
    DEPENDENT_SCHEMAS = "dependentSchemas"
    ALL_OF = "allOf"
    ANY_OF = "anyOf"
    ONE_OF = "oneOf"
    NOT = "not"
    IF = "if"
    THEN = "then"
    ELSE = "else"
    CONST = "const"

    # Schema constraints
    MAXIMUM = "maximum"
    MINIMUM = "minimum"
    EXCLUSIVE_MAXIMUM = "exclusiveMaximum"
    EXCLUSIVE_MINIMUM = "exclusiveMinimum"
    MULTIPLE_OF = "multipleOf"
    MAX_LENGTH = "maxLength"
    MIN_LENGTH = "minLength"
    PATTERN = "pattern"
    MAX_ITEMS = "maxItems"
    MIN_ITEMS = "minItems"
    UNIQUE_ITEMS = "uniqueItems"
    MAX_PROPERTIES = "maxProperties"
    MIN_PROPERTIES = "minProperties"

    # JSON Schema core keywords
    REF = "$ref"
    ID = "$id"
    META_SCHEMA = "$schema"
    ANCHOR = "$anchor"
    DYNAMIC_ANCHOR = "$dynamicAnchor"
    DYNAMIC_REF = "$dynamicRef"
    COMMENT = "$comment"
    DEFS = "$defs"

    # OpenAPI schema extensions
    DISCRIMINATOR = "discriminator"
    PROPERTY_NAME = "propertyName"
    MAPPING = "mapping"
    READ_ONLY = "readOnly"
    WRITE_ONLY = "writeOnly"
    NULLABLE = "nullable"
    XML = "xml"
    NAMESPACE = "namespace"
    PREFIX = "prefix"
    ATTRIBUTE = "attribute"
    WRAPPED = "wrapped"
    CONTENT_ENCODING = "contentEncoding"
    CONTENT_MEDIA_TYPE = "contentMediaType"
    CONTENT_SCHEMA = "contentSchema"

    # Components and definitions
    COMPONENTS = "components"
    SCHEMAS = "schemas"
    REQUEST_BODIES = "requestBodies"
    SECURITY_SCHEMES = "securitySchemes"
    PATH_ITEMS = "pathItems"
    DEFINITIONS = "definitions"
    SECURITY_DEFINITIONS = "securityDefinitions"

    # Security
    SECURITY = "security"
    SCHEME = "scheme"
    BEARER_FORMAT = "bearerFormat"
    FLOWS = "flows"
    FLOW = "flow"
    IMPLICIT = "implicit"
    PASSWORD = "password"
    CLIENT_CREDENTIALS = "clientCredentials"
    AUTHORIZATION_CODE = "authorizationCode"
    AUTHORIZATION_URL = "authorizationUrl"
    TOKEN_URL = "tokenUrl"
    REFRESH_URL = "refreshUrl"
    SCOPES = "scopes"
    OPEN_ID_CONNECT_URL = "openIdConnectUrl"

    def __str__(self) -> str:
        return self.value


_KNOWN: dict[str, Key] = {member.value: member for member in Key}


def normalize_key(key: Any) -> Any:
    """Return the :class:`Key` member for *key*, or *key* unchanged.

    Keys that are already members, unknown strings, and non-string keys
    (YAML happily produces integer keys such as ``200:``) pass through as-is.
    """
    if isinstance(key, Key):
        return key
    if isinstance(key, str):
        return _KNOWN.get(key, key)
    return key


def normalize_shallow(mapping: dict[Any, Any]) -> dict[Any, Any]:
    """Normalize the top-level keys of *mapping* without touching its values."""
    return {normalize_key(key): value for key, value in mapping.items()}


def normalize(value: Any) -> Any:
    """Recursively normalize every map key found in *value*.

    Dicts have their keys normalized and their values visited; lists have
    each element visited; scalars are returned unchanged.
    """
    if isinstance(value, dict):
        return {normalize_key(key): normalize(item) for key, item in value.items()}
    if isinstance(value, list):
        return [normalize(item) for item in value]
    return value
