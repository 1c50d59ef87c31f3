"""
TOML-based config file loading for resource selection.

Searches for `.resource-selector.toml`, `resource-selector.toml`, or
`pyproject.toml [tool.resource-selector]` walking up from the current directory.
Config values are merged with CLI flags using three-way precedence: explicit CLI
flags > config file > built-in defaults.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, TypeVar, cast

if sys.version_info >= (3, 11):
    import tomllib  # pyright: ignore[reportUnreachable]
else:
    import tomli as tomllib  # type: ignore[no-redef]  # pyright: ignore[reportUnreachable]

TOOL_NAME = "resource-selector"

logger = logging.getLogger("resource_selector.config")


class ConfigError(ValueError):
    """A config file value has the wrong type."""


@dataclass
class ResourceSelectorConfig:
    """
    Parsed config from a TOML file. Fields are `None` when not set in the config,
    allowing the merge logic to distinguish "not configured" from "explicitly set
    to default value".
    """

    exclusions: list[str] | None = None
    # Resolved against the config file's directory when loaded.
    subprojects: list[str] | None = None
    size_threshold_mb: int | None = None
    skip_directories: list[str] | None = None


# Config file search order (first match wins within each directory level)
_CONFIG_FILENAMES = [f".{TOOL_NAME}.toml", f"{TOOL_NAME}.toml", "pyproject.toml"]

_KEBAB_TO_SNAKE: dict[str, str] = {
    "size-threshold-mb": "size_threshold_mb",
    "skip-directories": "skip_directories",
}

_VALID_FIELDS = {f.name for f in fields(ResourceSelectorConfig)}


def find_config_file(start_dir: Path) -> Path | None:
    """
    Walk up from `start_dir` looking for a config file. Returns the first
    found, or `None`. Search order per directory: `.resource-selector.toml` >
    `resource-selector.toml` > `pyproject.toml` (only if it has
    `[tool.resource-selector]`).
    """
    current = start_dir.resolve()
    while True:
        for filename in _CONFIG_FILENAMES:
            candidate = current / filename
            if candidate.is_file():
                if filename == "pyproject.toml":
                    if _pyproject_has_tool_section(candidate):
                        return candidate
                else:
                    return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def _pyproject_has_tool_section(path: Path) -> bool:
    try:
        data = tomllib.loads(path.read_text())
        return TOOL_NAME in data.get("tool", {})
    except (tomllib.TOMLDecodeError, OSError):
        return False


def load_config(config_path: Path) -> ResourceSelectorConfig:
    """
    Load a `ResourceSelectorConfig` from a TOML file. Supports both standalone
    `resource-selector.toml` / `.resource-selector.toml` and `pyproject.toml`
    (extracts `[tool.resource-selector]`). Relative subproject paths are
    resolved against the directory holding the config file. Raises `ConfigError`
    when a value has the wrong type.
    """
    try:
        data = tomllib.loads(config_path.read_text())
    except tomllib.TOMLDecodeError as e:
        logger.warning("Ignoring malformed config file %s: %s", config_path, e)
        return ResourceSelectorConfig()

    if config_path.name == "pyproject.toml":
        data = data.get("tool", {}).get(TOOL_NAME, {})

    try:
        config = _parse_config_data(data)
    except ConfigError as e:
        raise ConfigError(f"{config_path}: {e}") from e
    if config.subprojects is not None:
        config_dir = config_path.resolve().parent
        config.subprojects = [str(config_dir / sub) for sub in config.subprojects]
    return config


def _flatten_sections(data: dict[str, Any]) -> dict[str, Any]:
    # A table such as [selection] contributes its keys at the top level.
    flat: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, dict):
            flat.update(cast(dict[str, Any], value))
        else:
            flat[key] = value
    return flat


def _checked_value(name: str, key: str, value: Any) -> Any:
    if name == "size_threshold_mb":
        # bool is an int subclass; `true` is not a size.
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{key}` must be an integer number of megabytes, got {value!r}")
        return value
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"`{key}` must be a list of strings, got {value!r}")
    return list(cast(list[str], value))


def _parse_config_data(data: dict[str, Any]) -> ResourceSelectorConfig:
    """
    Map TOML keys (kebab or snake case, flat or inside one level of tables) onto
    config fields. Unknown keys are logged and ignored; a value of the wrong type
    raises `ConfigError`.
    """
    values: dict[str, Any] = {}
    for key, value in _flatten_sections(data).items():
        name = _KEBAB_TO_SNAKE.get(key, key.replace("-", "_"))
        if name not in _VALID_FIELDS:
            logger.warning("Ignoring unrecognized config key: %s", key)
            continue
        values[name] = _checked_value(name, key, value)
    return ResourceSelectorConfig(**values)


_T = TypeVar("_T")


def merge_cli_with_config(
    cli_opts: _T,
    config: ResourceSelectorConfig | None,
    explicit_flags: set[str],
) -> _T:
    """
    Merge CLI options with config file settings.

    Precedence: explicit CLI flags > config file > built-in defaults.
    """
    if config is None:
        return cli_opts

    for cfg_field in fields(ResourceSelectorConfig):
        cfg_value = getattr(config, cfg_field.name)
        if cfg_value is None:
            continue  # Not set in config

        if cfg_field.name in explicit_flags:
            continue

        if hasattr(cli_opts, cfg_field.name):
            setattr(cli_opts, cfg_field.name, cfg_value)

    return cli_opts
