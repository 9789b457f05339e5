"""Tests for specparse.validation (primitive validators)."""

from __future__ import annotations

import pytest

from specparse.exceptions import SpecValidationError
from specparse.validation import (
    check_content_type,
    check_enum,
    check_format,
    check_list_of,
    check_mutually_exclusive,
    check_non_negative_integer,
    check_path_format,
    check_pattern,
    check_reference,
    check_required,
    check_status_code,
    check_type,
)


# ---------------------------------------------------------------------------
# Presence and type
# ---------------------------------------------------------------------------


class TestCheckRequired:
    def test_all_present(self) -> None:
        check_required({"title": "T", "version": "1"}, "info")

    def test_lists_every_missing_field(self) -> None:
        with pytest.raises(SpecValidationError) as exc_info:
            check_required({"title": None, "version": None}, "info")
        assert str(exc_info.value) == "info: Required field(s) missing: title, version"

    def test_empty_context_has_no_prefix(self) -> None:
        with pytest.raises(SpecValidationError) as exc_info:
            check_required({"paths": None}, "")
        assert str(exc_info.value) == "Required field(s) missing: paths"


class TestCheckType:
    @pytest.mark.parametrize(
        "value,kind",
        [("a", "string"), (1, "integer"), (1.5, "number"), (2, "number"), (True, "boolean"),
         ({}, "map"), ([], "list"), (None, "string")],
    )
    def test_accepts(self, value, kind) -> None:
        check_type(value, kind, "x")

    @pytest.mark.parametrize(
        "value,kind",
        [(5, "string"), (True, "integer"), (False, "number"), ("1", "integer"), ([], "map")],
    )
    def test_rejects(self, value, kind) -> None:
        with pytest.raises(SpecValidationError):
            check_type(value, kind, "x")

    def test_message_names_value(self) -> None:
        with pytest.raises(SpecValidationError) as exc_info:
            check_type(5, "string", "info.title")
        assert exc_info.value.path == "info.title"
        assert exc_info.value.reason == "must be a string, got: 5"

    def test_list_of_reports_index(self) -> None:
        with pytest.raises(SpecValidationError) as exc_info:
            check_list_of(["a", 2], "string", "tags")
        assert exc_info.value.path == "tags[1]"

    def test_non_negative_integer(self) -> None:
        check_non_negative_integer(0, "minLength")
        with pytest.raises(SpecValidationError, match="non-negative"):
            check_non_negative_integer(-1, "minLength")


# ---------------------------------------------------------------------------
# Formats
# ---------------------------------------------------------------------------


class TestCheckFormat:
    def test_none_and_empty_pass(self) -> None:
        for kind in ("email", "uri", "url", "uuid", "uri-reference"):
            check_format(None, kind, "x")
            check_format("", kind, "x")

    def test_email(self) -> None:
        check_format("api@example.com", "email", "contact.email")
        with pytest.raises(SpecValidationError, match="valid email"):
            check_format("not-an-email", "email", "contact.email")
        with pytest.raises(SpecValidationError, match="valid email"):
            check_format("api@example.com\n", "email", "contact.email")

    def test_uri_requires_scheme(self) -> None:
        check_format("urn:isbn:0451450523", "uri", "x")
        with pytest.raises(SpecValidationError, match="valid URI"):
            check_format("relative/path", "uri", "x")

    def test_uri_reference_allows_relative(self) -> None:
        check_format("schemas/pet.json", "uri-reference", "x")
        with pytest.raises(SpecValidationError, match="URI reference"):
            check_format("has space", "uri-reference", "x")

    def test_url_requires_http_and_host(self) -> None:
        check_format("https://example.com/docs", "url", "x")
        with pytest.raises(SpecValidationError, match="valid URL"):
            check_format("ftp://example.com", "url", "x")
        with pytest.raises(SpecValidationError, match="valid URL"):
            check_format("https://", "url", "x")

    def test_uuid(self) -> None:
        check_format("123e4567-e89b-12d3-a456-426614174000", "uuid", "x")
        with pytest.raises(SpecValidationError, match="valid UUID"):
            check_format("123", "uuid", "x")
        with pytest.raises(SpecValidationError, match="valid UUID"):
            check_format("123e4567-e89b-12d3-a456-426614174000\n", "uuid", "x")


class TestCheckEnumAndPattern:
    def test_enum(self) -> None:
        check_enum("query", ("query", "path"), "in")
        check_enum(None, ("query",), "in")
        with pytest.raises(SpecValidationError) as exc_info:
            check_enum("body", ("query", "path"), "in")
        assert "must be one of: 'query', 'path'" in exc_info.value.reason

    def test_pattern(self) -> None:
        check_pattern("abc", r"^[a-z]+$", "name")
        with pytest.raises(SpecValidationError, match="pattern"):
            check_pattern("ABC", r"^[a-z]+$", "name")


# ---------------------------------------------------------------------------
# Document-specific shapes
# ---------------------------------------------------------------------------


class TestCheckStatusCode:
    @pytest.mark.parametrize("code", ["200", 404, "default", "2XX", "5XX", "100", "599"])
    def test_accepts(self, code) -> None:
        check_status_code(code, "responses")

    @pytest.mark.parametrize("code", ["600", "99", "2xx", "6XX", "ok", 700, "200\n", "2XX\n"])
    def test_rejects(self, code) -> None:
        with pytest.raises(SpecValidationError, match="valid HTTP status code"):
            check_status_code(code, "responses")


class TestCheckPathFormat:
    def test_leading_slash(self) -> None:
        check_path_format("/users", "paths./users")

    def test_missing_slash(self) -> None:
        with pytest.raises(SpecValidationError) as exc_info:
            check_path_format("users", "paths.users")
        assert "must start with" in str(exc_info.value)


class TestCheckReference:
    @pytest.mark.parametrize(
        "ref",
        ["#/components/schemas/Pet", "https://example.com/schemas/pet.json", "pet.yaml#/Pet"],
    )
    def test_accepts(self, ref) -> None:
        check_reference(ref, "schema")

    def test_rejects_plain_path(self) -> None:
        with pytest.raises(SpecValidationError, match=r"\$ref must be a valid reference"):
            check_reference("Pet", "schema")

    def test_missing(self) -> None:
        with pytest.raises(SpecValidationError, match=r"\$ref is required"):
            check_reference(None, "schema")

    def test_not_a_string(self) -> None:
        with pytest.raises(SpecValidationError, match="must be a string"):
            check_reference(5, "schema")


class TestCheckContentType:
    @pytest.mark.parametrize(
        "value", ["application/json", "application/vnd.api+json", "text/*", "*/*"]
    )
    def test_accepts(self, value) -> None:
        check_content_type(value, "content")

    @pytest.mark.parametrize("value", ["json", "application/", "*/json", "application/json\n"])
    def test_rejects(self, value) -> None:
        with pytest.raises(SpecValidationError, match="valid media type"):
            check_content_type(value, "content")


class TestCheckMutuallyExclusive:
    def test_one_side_set(self) -> None:
        check_mutually_exclusive(("example", 1), ("examples", None), "parameter")

    def test_both_set(self) -> None:
        with pytest.raises(SpecValidationError) as exc_info:
            check_mutually_exclusive(("example", 1), ("examples", {}), "parameter")
        assert str(exc_info.value) == "parameter: example and examples are mutually exclusive"
