"""Tests for the Swagger 2.0 object models."""

from __future__ import annotations

import pytest

from specparse.exceptions import SpecValidationError, StructuralError
from specparse.models.v2.parameter import Header, Parameter
from specparse.models.v2.path import Operation, PathItem, Response, check_schemes
from specparse.models.v2.schema import Items, Schema
from specparse.models.v2.security import SecurityScheme


# ---------------------------------------------------------------------------
# Parameter
# ---------------------------------------------------------------------------


class TestBodyParameter:
    def test_body_with_schema(self) -> None:
        Parameter.from_raw(
            {"name": "pet", "in": "body", "schema": {"$ref": "#/definitions/Pet"}}
        ).check("p")

    def test_body_without_schema(self) -> None:
        with pytest.raises(SpecValidationError, match="Body parameter must have a schema"):
            Parameter.from_raw({"name": "pet", "in": "body"}).check("p")

    def test_body_with_type(self) -> None:
        param = Parameter.from_raw(
            {"name": "pet", "in": "body", "type": "string", "schema": {"type": "object"}}
        )
        with pytest.raises(SpecValidationError, match="should not have a type"):
            param.check("p")

    def test_schema_must_be_map(self) -> None:
        with pytest.raises(StructuralError, match="schema must be a schema object"):
            Parameter.from_raw({"name": "pet", "in": "body", "schema": "Pet"})


class TestNonBodyParameter:
    def test_query_parameter(self) -> None:
        Parameter.from_raw({"name": "limit", "in": "query", "type": "integer"}).check("p")

    def test_type_required(self) -> None:
        with pytest.raises(SpecValidationError, match="Non-body parameter must have a type"):
            Parameter.from_raw({"name": "limit", "in": "query"}).check("p")

    def test_schema_not_allowed(self) -> None:
        param = Parameter.from_raw(
            {"name": "limit", "in": "query", "type": "integer", "schema": {"type": "integer"}}
        )
        with pytest.raises(SpecValidationError, match="should not have a schema"):
            param.check("p")

    def test_file_only_in_form_data(self) -> None:
        Parameter.from_raw({"name": "upload", "in": "formData", "type": "file"}).check("p")
        with pytest.raises(SpecValidationError, match="File parameters must be in formData"):
            Parameter.from_raw({"name": "upload", "in": "query", "type": "file"}).check("p")

    def test_array_requires_items(self) -> None:
        with pytest.raises(SpecValidationError, match="items is required"):
            Parameter.from_raw({"name": "ids", "in": "query", "type": "array"}).check("p")

    def test_multi_collection_format(self) -> None:
        raw = {
            "name": "ids",
            "in": "query",
            "type": "array",
            "items": {"type": "string"},
            "collectionFormat": "multi",
        }
        Parameter.from_raw(raw).check("p")
        raw["in"] = "header"
        with pytest.raises(SpecValidationError) as exc_info:
            Parameter.from_raw(raw).check("p")
        assert exc_info.value.path == "p.collectionFormat"

    def test_path_parameter_required(self) -> None:
        with pytest.raises(SpecValidationError, match="Path parameter must be required"):
            Parameter.from_raw({"name": "id", "in": "path", "type": "string"}).check("p")

    def test_nested_items_error_path(self) -> None:
        param = Parameter.from_raw(
            {"name": "ids", "in": "query", "type": "array", "items": {"type": "object"}}
        )
        with pytest.raises(SpecValidationError) as exc_info:
            param.check("p")
        assert exc_info.value.path == "p.items.type"


class TestHeaderAndItems:
    def test_header_type_required(self) -> None:
        with pytest.raises(SpecValidationError, match="type"):
            Header.from_raw({"description": "rate limit"}).check("h")

    def test_items_collection_format(self) -> None:
        with pytest.raises(SpecValidationError) as exc_info:
            Items.from_raw({"type": "string", "collectionFormat": "multi"}).check("items")
        assert exc_info.value.path == "items.collectionFormat"


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------


class TestSwaggerSchema:
    def test_file_type_allowed(self) -> None:
        Schema.from_raw({"type": "file"}).check("schema")

    def test_null_type_rejected(self) -> None:
        with pytest.raises(SpecValidationError):
            Schema.from_raw({"type": "null"}).check("schema")

    def test_array_requires_items(self) -> None:
        with pytest.raises(SpecValidationError, match="items is required"):
            Schema.from_raw({"type": "array"}).check("schema")

    def test_discriminator_is_string(self) -> None:
        Schema.from_raw({"type": "object", "discriminator": "petType"}).check("schema")
        with pytest.raises(SpecValidationError):
            Schema.from_raw({"discriminator": {"propertyName": "petType"}}).check("schema")

    def test_boolean_additional_properties(self) -> None:
        schema = Schema.from_raw({"type": "object", "additionalProperties": True})
        assert schema.additional_properties is True
        schema.check("schema")


# ---------------------------------------------------------------------------
# Operations and responses
# ---------------------------------------------------------------------------


class TestSwaggerOperation:
    def test_responses_structural(self) -> None:
        with pytest.raises(StructuralError, match="responses is required"):
            Operation.from_raw({"operationId": "x"})

    def test_response_examples_keyed_by_mime_type(self) -> None:
        Response.from_raw(
            {"description": "ok", "examples": {"application/json": {"id": 1}}}
        ).check("r")
        with pytest.raises(SpecValidationError, match="media type"):
            Response.from_raw({"description": "ok", "examples": {"json": {}}}).check("r")

    def test_invalid_consumes(self) -> None:
        op = Operation.from_raw(
            {"consumes": ["application/json", "bogus"], "responses": {"200": {"description": "ok"}}}
        )
        with pytest.raises(SpecValidationError) as exc_info:
            op.check("op")
        assert exc_info.value.path == "op.consumes[1]"

    def test_no_trace_method(self) -> None:
        item = PathItem.from_raw({"trace": {"responses": {"200": {"description": "ok"}}}})
        assert list(item.operations()) == []

    def test_schemes(self) -> None:
        check_schemes(["https", "wss"], "schemes")
        with pytest.raises(SpecValidationError) as exc_info:
            check_schemes(["https", "ftp"], "schemes")
        assert exc_info.value.path == "schemes[1]"


# ---------------------------------------------------------------------------
# Security definitions
# ---------------------------------------------------------------------------


class TestSwaggerSecurityScheme:
    def test_basic(self) -> None:
        SecurityScheme.from_raw({"type": "basic"}).check("s")

    def test_http_not_a_swagger_type(self) -> None:
        with pytest.raises(SpecValidationError) as exc_info:
            SecurityScheme.from_raw({"type": "http"}).check("s")
        assert exc_info.value.path == "s.type"

    def test_api_key_cookie_not_allowed(self) -> None:
        with pytest.raises(SpecValidationError) as exc_info:
            SecurityScheme.from_raw({"type": "apiKey", "name": "k", "in": "cookie"}).check("s")
        assert exc_info.value.path == "s.in"

    def test_oauth2_flow_required(self) -> None:
        with pytest.raises(SpecValidationError, match="flow is required"):
            SecurityScheme.from_raw({"type": "oauth2", "scopes": {}}).check("s")

    def test_oauth2_access_code_urls(self) -> None:
        scheme = SecurityScheme.from_raw(
            {
                "type": "oauth2",
                "flow": "accessCode",
                "authorizationUrl": "https://example.com/auth",
                "scopes": {},
            }
        )
        with pytest.raises(SpecValidationError, match="tokenUrl"):
            scheme.check("s")

    def test_oauth2_implicit(self) -> None:
        SecurityScheme.from_raw(
            {
                "type": "oauth2",
                "flow": "implicit",
                "authorizationUrl": "https://example.com/auth",
                "scopes": {"read:pets": "read your pets"},
            }
        ).check("s")

    def test_oauth2_scope_description_must_be_string(self) -> None:
        scheme = SecurityScheme.from_raw(
            {
                "type": "oauth2",
                "flow": "implicit",
                "authorizationUrl": "https://example.com/auth",
                "scopes": {"read:pets": 5},
            }
        )
        with pytest.raises(SpecValidationError) as exc_info:
            scheme.check("s")
        assert exc_info.value.path == "s.scopes.read:pets"
