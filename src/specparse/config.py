"""Parse options with precedence resolution.

:class:`ParseOptions` holds the three knobs of the parse pipeline. The
effective options are merged by :func:`resolve_options` from, highest
precedence first:

1. CLI flags
2. Environment variables (``SPECPARSE_FORMAT``, ``SPECPARSE_VALIDATE``,
   ``SPECPARSE_RESOLVE_REFS``)
3. Project config (``./specparse.json``)
4. Defaults
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from specparse.exceptions import ConfigError

_PROJECT_CONFIG_FILENAME = "specparse.json"

_ENV_VARS = {
    "format": "SPECPARSE_FORMAT",
    "validate": "SPECPARSE_VALIDATE",
    "resolve_refs": "SPECPARSE_RESOLVE_REFS",
}

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


class ParseOptions(BaseModel):
    """Effective options for one parse run."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    format: Literal["auto", "json", "yaml"] = "auto"
    # ``validate`` would shadow BaseModel.validate.
    run_validation: bool = Field(default=True, alias="validate")
    resolve_refs: bool = False


# --- Sources ---


def load_project_config(directory: Optional[Path] = None) -> Optional[dict[str, Any]]:
    """Load project-local configuration from ``./specparse.json``.

    Args:
        directory: Directory to look in. Defaults to the working directory.

    Returns:
        The parsed JSON object, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file exists but is not a JSON object.
    """
    path = (directory or Path.cwd()) / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected a JSON object")
    return data


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigError(f"Invalid boolean for {name}: {value!r}")


def load_env_options() -> dict[str, Any]:
    """Read options set through ``SPECPARSE_*`` environment variables."""
    options: dict[str, Any] = {}
    for field, env_var in _ENV_VARS.items():
        value = os.environ.get(env_var)
        if not value:
            continue
        options[field] = value if field == "format" else _parse_bool(env_var, value)
    return options


# --- Precedence resolution ---


def resolve_options(
    cli_format: Optional[str] = None,
    cli_validate: Optional[bool] = None,
    cli_resolve_refs: Optional[bool] = None,
    directory: Optional[Path] = None,
) -> ParseOptions:
    """Merge every source into the effective :class:`ParseOptions`.

    ``None`` CLI arguments mean "not given" and fall through to the next
    source.

    Raises:
        ConfigError: If the project file or an environment variable holds an
            invalid value.
    """
    merged: dict[str, Any] = {}

    # 3. Project-local config
    project = load_project_config(directory)
    if project is not None:
        merged.update(project)

    # 2. Environment variables
    merged.update(load_env_options())

    # 1. CLI flags
    cli = {"format": cli_format, "validate": cli_validate, "resolve_refs": cli_resolve_refs}
    merged.update({key: value for key, value in cli.items() if value is not None})

    try:
        return ParseOptions.model_validate(merged)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(loc) for loc in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        raise ConfigError(f"Invalid options: {problems}") from exc
