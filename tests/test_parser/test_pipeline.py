"""Tests for the parse entry points in specparse.parser.pipeline."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from specparse.exceptions import (
    SpecLoadError,
    SpecValidationError,
    StructuralError,
    UnsupportedVersionError,
)
from specparse.models.base import SpecVersion
from specparse.parser import parse, parse_data, parse_file, parse_source, resolve_references

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


# ---------------------------------------------------------------------------
# parse / parse_data
# ---------------------------------------------------------------------------


class TestParse:
    def test_json_text(self, minimal_openapi31: dict[str, Any]) -> None:
        root = parse(json.dumps(minimal_openapi31))
        assert root.version is SpecVersion.OPENAPI_3_1
        assert root.title == "T"
        assert root.api_version == "1"

    def test_yaml_text(self) -> None:
        root = parse('swagger: "2.0"\ninfo: {title: T, version: "1"}\npaths: {}\n', format="yaml")
        assert root.version is SpecVersion.SWAGGER_2_0

    def test_decode_error_stops_pipeline(self) -> None:
        with pytest.raises(SpecLoadError):
            parse("{not json", format="json")

    def test_unsupported_version(self) -> None:
        with pytest.raises(UnsupportedVersionError):
            parse('{"openapi": "2.5.0"}')

    def test_structural_error(self) -> None:
        with pytest.raises(StructuralError, match="info is required"):
            parse('{"openapi": "3.0.0", "paths": {}}')

    def test_first_validation_error(self, minimal_openapi30: dict[str, Any]) -> None:
        minimal_openapi30["info"] = {"title": 5, "version": "1"}
        minimal_openapi30["paths"] = {"users": {}}
        with pytest.raises(SpecValidationError) as exc_info:
            parse(json.dumps(minimal_openapi30))
        assert exc_info.value.path == "info.title"

    def test_parse_only_skips_validation(self, minimal_openapi30: dict[str, Any]) -> None:
        minimal_openapi30["paths"] = {"users": {}}
        root = parse(json.dumps(minimal_openapi30), validate=False)
        assert root.path_count == 1
        with pytest.raises(SpecValidationError):
            root.check()

    def test_parse_data_rejects_non_map(self) -> None:
        with pytest.raises(SpecLoadError, match="got list"):
            parse_data([])  # type: ignore[arg-type]


def _nested_schema(levels: int) -> dict[str, Any]:
    schema: dict[str, Any] = {"type": "string"}
    for _ in range(levels):
        schema = {"type": "object", "properties": {"child": schema}}
    return schema


class TestNestingDepth:
    def test_deep_schema_is_structural(self, minimal_openapi31: dict[str, Any]) -> None:
        minimal_openapi31["components"] = {"schemas": {"Deep": _nested_schema(400)}}
        with pytest.raises(StructuralError, match="nesting too deep"):
            parse(json.dumps(minimal_openapi31))

    def test_deep_schema_rejected_in_parse_only_mode(
        self, minimal_openapi30: dict[str, Any]
    ) -> None:
        minimal_openapi30["components"] = {"schemas": {"Deep": _nested_schema(400)}}
        with pytest.raises(StructuralError, match="nesting too deep"):
            parse_data(minimal_openapi30, validate=False)

    def test_deep_list_is_structural(self, minimal_swagger: dict[str, Any]) -> None:
        value: Any = "leaf"
        for _ in range(300):
            value = [value]
        minimal_swagger["x-deep"] = value
        with pytest.raises(StructuralError, match="nesting too deep"):
            parse_data(minimal_swagger)

    def test_realistic_depth_is_accepted(self, minimal_openapi31: dict[str, Any]) -> None:
        minimal_openapi31["components"] = {"schemas": {"Tree": _nested_schema(40)}}
        root = parse(json.dumps(minimal_openapi31))
        assert root.schema_count == 1


# ---------------------------------------------------------------------------
# Reference resolution hook
# ---------------------------------------------------------------------------


class TestResolveReferences:
    def test_identity(self, openapi30_raw: dict[str, Any]) -> None:
        root = parse_data(openapi30_raw, validate=False)
        assert resolve_references(root) is root

    def test_references_kept(self, openapi30_raw: dict[str, Any]) -> None:
        root = parse_data(openapi30_raw, resolve_refs=True)
        pets = root.document.components.schemas["Pets"]
        assert pets.items.is_reference
        assert pets.items.ref == "#/components/schemas/Pet"


# ---------------------------------------------------------------------------
# Files and sources
# ---------------------------------------------------------------------------


class TestParseFile:
    @pytest.mark.parametrize(
        "name,version,paths,schemas",
        [
            ("swagger_2.0.json", SpecVersion.SWAGGER_2_0, 2, 2),
            ("openapi_3.0.json", SpecVersion.OPENAPI_3_0, 2, 3),
            ("openapi_3.1.json", SpecVersion.OPENAPI_3_1, 1, 2),
        ],
    )
    def test_fixtures(
        self, name: str, version: SpecVersion, paths: int, schemas: int
    ) -> None:
        root = parse_file(FIXTURES_DIR / name)
        assert root.version is version
        assert root.path_count == paths
        assert root.schema_count == schemas

    def test_yaml_with_integer_status_codes(self) -> None:
        root = parse_file(FIXTURES_DIR / "petstore.yaml")
        operation = root.document.paths["/pets"].get
        assert set(operation.responses.responses) == {"200", "default"}
        assert [(path, method) for path, method, _ in root.operations()] == [("/pets", "get")]

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(SpecLoadError, match="Failed to read file"):
            parse_file(tmp_path / "missing.json")


class TestParseSource:
    def test_file_path(self) -> None:
        root = parse_source(str(FIXTURES_DIR / "openapi_3.1.json"))
        assert root.title == "Webhook Example"

    def test_stdin(self, minimal_swagger: dict[str, Any]) -> None:
        with patch("specparse.parser.pipeline.read_source", return_value=(json.dumps(minimal_swagger), "")):
            root = parse_source("-")
        assert root.version is SpecVersion.SWAGGER_2_0

    def test_explicit_format_overrides_hint(self, tmp_path: Path) -> None:
        doc = tmp_path / "api.json"
        doc.write_text('openapi: "3.0.0"\ninfo: {title: T, version: "1"}\npaths: {}\n')
        with pytest.raises(SpecLoadError, match="JSON decode error"):
            parse_source(str(doc))
        assert parse_source(str(doc), format="yaml").version is SpecVersion.OPENAPI_3_0
