"""Tests for specparse.config -- option sources and precedence."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from specparse.config import (
    ParseOptions,
    load_env_options,
    load_project_config,
    resolve_options,
)
from specparse.exceptions import ConfigError


# ---------------------------------------------------------------------------
# Sources
# ---------------------------------------------------------------------------


class TestProjectConfig:
    def test_missing_file(self, isolated_env: Path) -> None:
        assert load_project_config() is None

    def test_reads_object(self, isolated_env: Path) -> None:
        (isolated_env / "specparse.json").write_text(json.dumps({"format": "yaml"}))
        assert load_project_config() == {"format": "yaml"}

    def test_explicit_directory(self, tmp_path: Path) -> None:
        (tmp_path / "specparse.json").write_text('{"validate": false}')
        assert load_project_config(tmp_path) == {"validate": False}

    def test_invalid_json(self, isolated_env: Path) -> None:
        (isolated_env / "specparse.json").write_text("{not json")
        with pytest.raises(ConfigError, match="Invalid project config"):
            load_project_config()

    def test_non_object(self, isolated_env: Path) -> None:
        (isolated_env / "specparse.json").write_text("[1, 2]")
        with pytest.raises(ConfigError, match="expected a JSON object"):
            load_project_config()


class TestEnvOptions:
    def test_empty(self, isolated_env: Path) -> None:
        assert load_env_options() == {}

    @pytest.mark.parametrize("value,expected", [("1", True), ("yes", True), ("OFF", False), ("false", False)])
    def test_booleans(self, isolated_env: Path, monkeypatch: pytest.MonkeyPatch, value: str, expected: bool) -> None:
        monkeypatch.setenv("SPECPARSE_VALIDATE", value)
        assert load_env_options() == {"validate": expected}

    def test_invalid_boolean(self, isolated_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SPECPARSE_RESOLVE_REFS", "maybe")
        with pytest.raises(ConfigError, match="Invalid boolean for SPECPARSE_RESOLVE_REFS"):
            load_env_options()

    def test_format_passed_through(self, isolated_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SPECPARSE_FORMAT", "json")
        assert load_env_options() == {"format": "json"}


# ---------------------------------------------------------------------------
# Precedence
# ---------------------------------------------------------------------------


class TestResolveOptions:
    def test_defaults(self, isolated_env: Path) -> None:
        assert resolve_options() == ParseOptions(format="auto", validate=True, resolve_refs=False)

    def test_project_over_defaults(self, isolated_env: Path) -> None:
        (isolated_env / "specparse.json").write_text('{"format": "yaml", "resolve_refs": true}')
        options = resolve_options()
        assert options.format == "yaml"
        assert options.resolve_refs is True

    def test_env_over_project(self, isolated_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (isolated_env / "specparse.json").write_text('{"format": "yaml"}')
        monkeypatch.setenv("SPECPARSE_FORMAT", "json")
        assert resolve_options().format == "json"

    def test_cli_over_env(self, isolated_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SPECPARSE_VALIDATE", "false")
        assert resolve_options(cli_validate=True).run_validation is True
        assert resolve_options().run_validation is False

    def test_none_cli_values_fall_through(self, isolated_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SPECPARSE_FORMAT", "yaml")
        assert resolve_options(cli_format=None).format == "yaml"

    def test_invalid_format(self, isolated_env: Path) -> None:
        with pytest.raises(ConfigError, match="Invalid options: format"):
            resolve_options(cli_format="toml")

    def test_unknown_project_key(self, isolated_env: Path) -> None:
        (isolated_env / "specparse.json").write_text('{"colour": "red"}')
        with pytest.raises(ConfigError, match="colour"):
            resolve_options()
