"""Object kinds shared by all three dialects.

Info, Contact, License, Tag, ExternalDocumentation, Xml and
SecurityRequirement have (nearly) the same shape in Swagger 2.0 and both
OpenAPI 3.x generations. Where a field only exists in 3.1 (``Info.summary``,
``License.identifier``) the constructor reads it only for that dialect.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Optional

from pydantic import Field

from specparse.exceptions import SpecValidationError
from specparse.keys import Key, normalize_shallow
from specparse.models.base import (
    Node,
    SpecVersion,
    build_optional,
    data_key,
    expect_map,
)
from specparse.validation import (
    check_format,
    check_list_of,
    check_mutually_exclusive,
    check_node,
    check_required,
    check_type,
)


class ExternalDocumentation(Node):
    """A pointer to additional documentation for the owning object."""

    url: Optional[str] = None
    description: Optional[str] = None

    @classmethod
    def from_raw(cls, data: Any) -> ExternalDocumentation:
        data = normalize_shallow(expect_map(data, "externalDocs"))
        return cls.model_construct(
            url=data.get(Key.URL),
            description=data.get(Key.DESCRIPTION),
        )

    def check(self, context: str = "externalDocs") -> None:
        check_required({"url": self.url}, context)
        check_type(self.url, "string", f"{context}.url")
        check_format(self.url, "url", f"{context}.url")
        check_type(self.description, "string", f"{context}.description")


class Contact(Node):
    name: Optional[str] = None
    url: Optional[str] = None
    email: Optional[str] = None

    @classmethod
    def from_raw(cls, data: Any) -> Contact:
        data = normalize_shallow(expect_map(data, "contact"))
        return cls.model_construct(
            name=data.get(Key.NAME),
            url=data.get(Key.URL),
            email=data.get(Key.EMAIL),
        )

    def check(self, context: str = "contact") -> None:
        check_type(self.name, "string", f"{context}.name")
        check_type(self.url, "string", f"{context}.url")
        check_format(self.url, "url", f"{context}.url")
        check_type(self.email, "string", f"{context}.email")
        check_format(self.email, "email", f"{context}.email")


class License(Node):
    """License information for the exposed API.

    ``identifier`` (an SPDX expression) is an OpenAPI 3.1 addition and may
    not be combined with ``url``.
    """

    name: Optional[str] = None
    url: Optional[str] = None
    identifier: Optional[str] = None

    @classmethod
    def from_raw(cls, data: Any, dialect: SpecVersion = SpecVersion.OPENAPI_3_1) -> License:
        data = normalize_shallow(expect_map(data, "license"))
        return cls.model_construct(
            name=data.get(Key.NAME),
            url=data.get(Key.URL),
            identifier=data.get(Key.IDENTIFIER) if dialect is SpecVersion.OPENAPI_3_1 else None,
        )

    def check(self, context: str = "license") -> None:
        check_required({"name": self.name}, context)
        check_type(self.name, "string", f"{context}.name")
        check_type(self.url, "string", f"{context}.url")
        check_format(self.url, "url", f"{context}.url")
        check_type(self.identifier, "string", f"{context}.identifier")
        check_mutually_exclusive(("identifier", self.identifier), ("url", self.url), context)


class Info(Node):
    """Metadata about the API: title, version, and optional contact/license."""

    title: Optional[str] = None
    version: Optional[str] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    terms_of_service: Optional[str] = Field(default=None, alias="termsOfService")
    contact: Optional[Contact] = None
    license: Optional[License] = None

    @classmethod
    def from_raw(cls, data: Any, dialect: SpecVersion = SpecVersion.OPENAPI_3_1) -> Info:
        data = normalize_shallow(expect_map(data, "info"))
        return cls.model_construct(
            title=data.get(Key.TITLE),
            version=data.get(Key.VERSION),
            summary=data.get(Key.SUMMARY) if dialect is SpecVersion.OPENAPI_3_1 else None,
            description=data.get(Key.DESCRIPTION),
            terms_of_service=data.get(Key.TERMS_OF_SERVICE),
            contact=build_optional(data.get(Key.CONTACT), Contact.from_raw),
            license=build_optional(
                data.get(Key.LICENSE), lambda raw: License.from_raw(raw, dialect)
            ),
        )

    def check(self, context: str = "info") -> None:
        check_required({"title": self.title, "version": self.version}, context)
        check_type(self.title, "string", f"{context}.title")
        check_type(self.version, "string", f"{context}.version")
        check_type(self.summary, "string", f"{context}.summary")
        check_type(self.description, "string", f"{context}.description")
        check_type(self.terms_of_service, "string", f"{context}.termsOfService")
        check_format(self.terms_of_service, "uri", f"{context}.termsOfService")
        check_node(self.contact, f"{context}.contact")
        check_node(self.license, f"{context}.license")


class Tag(Node):
    name: Optional[str] = None
    description: Optional[str] = None
    external_docs: Optional[ExternalDocumentation] = Field(default=None, alias="externalDocs")

    @classmethod
    def from_raw(cls, data: Any) -> Tag:
        data = normalize_shallow(expect_map(data, "tag"))
        return cls.model_construct(
            name=data.get(Key.NAME),
            description=data.get(Key.DESCRIPTION),
            external_docs=build_optional(data.get(Key.EXTERNAL_DOCS), ExternalDocumentation.from_raw),
        )

    def check(self, context: str = "tag") -> None:
        check_required({"name": self.name}, context)
        check_type(self.name, "string", f"{context}.name")
        check_type(self.description, "string", f"{context}.description")
        check_node(self.external_docs, f"{context}.externalDocs")


class Xml(Node):
    """Fine-tuning of the XML representation of a schema."""

    name: Optional[str] = None
    namespace: Optional[str] = None
    prefix: Optional[str] = None
    attribute: Optional[bool] = None
    wrapped: Optional[bool] = None

    @classmethod
    def from_raw(cls, data: Any) -> Xml:
        data = normalize_shallow(expect_map(data, "xml"))
        return cls.model_construct(
            name=data.get(Key.NAME),
            namespace=data.get(Key.NAMESPACE),
            prefix=data.get(Key.PREFIX),
            attribute=data.get(Key.ATTRIBUTE),
            wrapped=data.get(Key.WRAPPED),
        )

    def check(self, context: str = "xml") -> None:
        check_type(self.name, "string", f"{context}.name")
        check_type(self.namespace, "string", f"{context}.namespace")
        check_format(self.namespace, "uri", f"{context}.namespace")
        check_type(self.prefix, "string", f"{context}.prefix")
        check_type(self.attribute, "boolean", f"{context}.attribute")
        check_type(self.wrapped, "boolean", f"{context}.wrapped")


class SecurityRequirement(Node):
    """Map of security scheme names to the scopes (or roles) they require.

    An empty requirement (``{}``) is allowed and makes security optional.
    """

    requirements: dict[str, list[str]] = Field(default_factory=dict)

    @classmethod
    def from_raw(cls, data: Any) -> SecurityRequirement:
        data = expect_map(data, "security requirement")
        return cls.model_construct(
            requirements={data_key(name): scopes for name, scopes in data.items()}
        )

    def check(self, context: str = "security") -> None:
        for name, scopes in self.requirements.items():
            check_type(name, "string", context)
            check_list_of(scopes, "string", f"{context}.{name}")


# --- Document-level uniqueness rules ---


def check_unique_tags(tags: Optional[list[Tag]], path: str) -> None:
    """Fail on the first tag whose name repeats an earlier tag's name."""
    if not tags:
        return
    seen: set[str] = set()
    for index, tag in enumerate(tags):
        if tag.name in seen:
            raise SpecValidationError(f"{path}[{index}]", f"Duplicate tag name: {tag.name}")
        seen.add(tag.name)


def check_unique_operation_ids(operations: Iterable[tuple[str, Any]]) -> None:
    """Fail on the first operation whose ``operationId`` was already used.

    *operations* yields ``(breadcrumb, operation)`` pairs in traversal order.
    """
    seen: set[str] = set()
    for location, operation in operations:
        operation_id = operation.operation_id
        if operation_id is None:
            continue
        if operation_id in seen:
            raise SpecValidationError(
                f"{location}.operationId", f"Duplicate operationId: {operation_id}"
            )
        seen.add(operation_id)


def check_unique_parameters(parameters: Optional[list[Any]], path: str) -> None:
    """Fail on the first concrete parameter that repeats an earlier ``(name, in)`` pair.

    References are skipped; their targets are not looked up.
    """
    if not parameters:
        return
    seen: set[tuple[Any, Any]] = set()
    for index, parameter in enumerate(parameters):
        if parameter.is_reference:
            continue
        identity = parameter.identity
        if identity in seen:
            name, location = identity
            raise SpecValidationError(
                f"{path}[{index}]",
                f"Duplicate parameter: name '{name}' in '{location}'",
            )
        seen.add(identity)
