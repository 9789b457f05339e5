"""Tests for the root document objects of all three dialects."""

from __future__ import annotations

from typing import Any

import pytest

from specparse.exceptions import SpecValidationError, StructuralError
from specparse.models.base import SpecVersion
from specparse.models.v2.document import SwaggerDocument, check_host
from specparse.models.v3.document import OpenAPI30Document, OpenAPI31Document

OK_RESPONSES = {"200": {"description": "OK"}}


# ---------------------------------------------------------------------------
# Minimal documents
# ---------------------------------------------------------------------------


class TestMinimalDocuments:
    """The smallest legal document of each dialect builds and validates."""

    def test_swagger(self, minimal_swagger: dict[str, Any]) -> None:
        doc = SwaggerDocument.from_raw(minimal_swagger)
        doc.check()
        assert doc.dialect is SpecVersion.SWAGGER_2_0
        assert doc.paths == {}

    def test_openapi30(self, minimal_openapi30: dict[str, Any]) -> None:
        OpenAPI30Document.from_raw(minimal_openapi30).check()

    def test_openapi31(self, minimal_openapi31: dict[str, Any]) -> None:
        OpenAPI31Document.from_raw(minimal_openapi31).check()

    def test_openapi31_components_only(self) -> None:
        doc = OpenAPI31Document.from_raw(
            {"openapi": "3.1.0", "info": {"title": "T", "version": "1"}, "components": {}}
        )
        doc.check()

    def test_openapi31_webhooks_only(self) -> None:
        doc = OpenAPI31Document.from_raw(
            {
                "openapi": "3.1.0",
                "info": {"title": "T", "version": "1"},
                "webhooks": {"ping": {"post": {"responses": OK_RESPONSES}}},
            }
        )
        doc.check()


# ---------------------------------------------------------------------------
# Required top-level sections
# ---------------------------------------------------------------------------


class TestTopLevelSections:
    def test_info_is_structural(self) -> None:
        with pytest.raises(StructuralError, match="info is required"):
            OpenAPI30Document.from_raw({"openapi": "3.0.0", "paths": {}})

    def test_swagger_paths_is_structural(self) -> None:
        with pytest.raises(StructuralError, match="paths is required"):
            SwaggerDocument.from_raw({"swagger": "2.0", "info": {"title": "T", "version": "1"}})

    def test_openapi30_paths_required(self, minimal_openapi30: dict[str, Any]) -> None:
        del minimal_openapi30["paths"]
        with pytest.raises(SpecValidationError) as exc_info:
            OpenAPI30Document.from_raw(minimal_openapi30).check()
        assert str(exc_info.value) == "paths is required"

    def test_openapi31_needs_one_section(self, minimal_openapi31: dict[str, Any]) -> None:
        del minimal_openapi31["paths"]
        with pytest.raises(SpecValidationError) as exc_info:
            OpenAPI31Document.from_raw(minimal_openapi31).check()
        reason = exc_info.value.reason
        assert "paths" in reason
        assert "components" in reason
        assert "webhooks" in reason

    def test_webhooks_ignored_in_30(self, minimal_openapi30: dict[str, Any]) -> None:
        minimal_openapi30["webhooks"] = {"ping": {"post": {"responses": OK_RESPONSES}}}
        assert OpenAPI30Document.from_raw(minimal_openapi30).webhooks is None

    def test_info_errors_come_first(self) -> None:
        doc = OpenAPI30Document.from_raw({"openapi": "3.0.0", "info": {"title": "T"}})
        with pytest.raises(SpecValidationError) as exc_info:
            doc.check()
        assert exc_info.value.path == "info"


# ---------------------------------------------------------------------------
# Paths and uniqueness
# ---------------------------------------------------------------------------


class TestPathsAndUniqueness:
    def test_path_key_must_start_with_slash(self, minimal_openapi30: dict[str, Any]) -> None:
        minimal_openapi30["paths"] = {"users": {"get": {"responses": OK_RESPONSES}}}
        with pytest.raises(SpecValidationError) as exc_info:
            OpenAPI30Document.from_raw(minimal_openapi30).check()
        assert exc_info.value.path == "paths.users"
        assert "must start with" in exc_info.value.reason

    def test_swagger_path_key(self, minimal_swagger: dict[str, Any]) -> None:
        minimal_swagger["paths"] = {"pets": {}}
        with pytest.raises(SpecValidationError, match="must start with"):
            SwaggerDocument.from_raw(minimal_swagger).check()

    def test_breadcrumb_is_root_relative(self, minimal_openapi31: dict[str, Any]) -> None:
        minimal_openapi31["paths"] = {
            "/users": {"get": {"parameters": [{"name": "id", "in": "path", "schema": {}}]}}
        }
        with pytest.raises(SpecValidationError) as exc_info:
            OpenAPI31Document.from_raw(minimal_openapi31).check()
        assert exc_info.value.path == "paths./users.get.parameters[0]"

    def test_duplicate_operation_ids(self, minimal_openapi30: dict[str, Any]) -> None:
        minimal_openapi30["paths"] = {
            "/a": {"get": {"operationId": "dup", "responses": OK_RESPONSES}},
            "/b": {"get": {"operationId": "dup", "responses": OK_RESPONSES}},
        }
        with pytest.raises(SpecValidationError) as exc_info:
            OpenAPI30Document.from_raw(minimal_openapi30).check()
        assert exc_info.value.path == "paths./b.get.operationId"
        assert exc_info.value.reason == "Duplicate operationId: dup"

    def test_duplicate_operation_id_in_callback(self, openapi30_raw: dict[str, Any]) -> None:
        callback = openapi30_raw["paths"]["/pets"]["post"]["callbacks"]["onCreated"]
        callback["{$request.body#/callbackUrl}"]["post"]["operationId"] = "listPets"
        with pytest.raises(SpecValidationError, match="Duplicate operationId: listPets"):
            OpenAPI30Document.from_raw(openapi30_raw).check()

    def test_duplicate_operation_id_across_webhooks(self, openapi31_raw: dict[str, Any]) -> None:
        openapi31_raw["webhooks"]["newPet"]["post"]["operationId"] = "listPets"
        with pytest.raises(SpecValidationError) as exc_info:
            OpenAPI31Document.from_raw(openapi31_raw).check()
        assert exc_info.value.path == "webhooks.newPet.post.operationId"

    def test_duplicate_tags(self, minimal_swagger: dict[str, Any]) -> None:
        minimal_swagger["tags"] = [{"name": "pets"}, {"name": "store"}, {"name": "pets"}]
        with pytest.raises(SpecValidationError) as exc_info:
            SwaggerDocument.from_raw(minimal_swagger).check()
        assert exc_info.value.path == "tags[2]"
        assert exc_info.value.reason == "Duplicate tag name: pets"


# ---------------------------------------------------------------------------
# Swagger 2.0 server description
# ---------------------------------------------------------------------------


class TestSwaggerHost:
    @pytest.mark.parametrize("host", ["api.example.com", "localhost:8080", None])
    def test_valid_hosts(self, host: Any) -> None:
        check_host(host, "host")

    def test_host_with_scheme(self) -> None:
        with pytest.raises(SpecValidationError, match="must not include a scheme"):
            check_host("https://api.example.com", "host")

    def test_host_with_path(self) -> None:
        with pytest.raises(SpecValidationError, match="must not include a path"):
            check_host("api.example.com/v1", "host")

    def test_base_path_leading_slash(self, minimal_swagger: dict[str, Any]) -> None:
        minimal_swagger["basePath"] = "v1"
        with pytest.raises(SpecValidationError) as exc_info:
            SwaggerDocument.from_raw(minimal_swagger).check()
        assert exc_info.value.path == "basePath"

    def test_bad_scheme(self, minimal_swagger: dict[str, Any]) -> None:
        minimal_swagger["schemes"] = ["https", "gopher"]
        with pytest.raises(SpecValidationError) as exc_info:
            SwaggerDocument.from_raw(minimal_swagger).check()
        assert exc_info.value.path == "schemes[1]"


# ---------------------------------------------------------------------------
# Full fixtures
# ---------------------------------------------------------------------------


class TestFixtureDocuments:
    def test_swagger_fixture(self, swagger_raw: dict[str, Any]) -> None:
        doc = SwaggerDocument.from_raw(swagger_raw)
        doc.check()
        assert doc.host == "api.example.com"
        assert doc.schema_count == 2
        assert [(path, method) for path, method, _ in doc.operations()] == [
            ("/pets", "get"),
            ("/pets", "post"),
            ("/pets/{petId}", "get"),
        ]
        assert doc.security_definitions["petstore_auth"].flow == "implicit"

    def test_openapi30_fixture(self, openapi30_raw: dict[str, Any]) -> None:
        doc = OpenAPI30Document.from_raw(openapi30_raw)
        doc.check()
        assert doc.schema_count == 3
        operation_ids = [op.operation_id for _, op in doc.walk_operations()]
        assert operation_ids == ["listPets", "createPet", "petCreatedCallback", "showPetById"]

    def test_openapi31_fixture(self, openapi31_raw: dict[str, Any]) -> None:
        doc = OpenAPI31Document.from_raw(openapi31_raw)
        doc.check()
        assert doc.info.summary == "Pets and webhooks"
        assert doc.components.path_items["PetsItem"].get is not None
        pet = doc.components.schemas["Pet"]
        assert pet.properties["tag"].type == ["string", "null"]
        assert pet.additional_properties is False
