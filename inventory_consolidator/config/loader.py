from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..services.column_mapper import DEFAULT_COLUMN_HINTS
from ..services.exporter import DEFAULT_CSV_FILE_NAME

"""Config loader.

Responsibilities:
- Load the optional YAML config (default `config/consolidate.yml`)
- Validate it against the packaged JSON schema (no extra keys)
- Apply defaults for everything left out

Path resolution: explicit path > CONSOLIDATOR_CONFIG env var > default path.
Only an explicitly requested file must exist.
"""

SCHEMA_PATH = Path(__file__).parent / "config_schema.json"
DEFAULT_CONFIG_PATH = Path("config/consolidate.yml")
CONFIG_ENV_VAR = "CONSOLIDATOR_CONFIG"


class ConfigError(Exception):
    pass


def _default_hints() -> dict[str, list[str]]:
    return {role: list(hints) for role, hints in DEFAULT_COLUMN_HINTS.items()}


@dataclass(frozen=True)
class ConsolidatorConfig:
    column_hints: dict[str, list[str]] = field(default_factory=_default_hints)
    export_directory: str = "."
    csv_file_name: str = DEFAULT_CSV_FILE_NAME
    logs_directory: str = "./logs"


def _validate_config_schema(data: dict) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: If the schema file is missing or invalid, or the config
            data violates the schema
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def resolve_config_path(explicit: Path | None = None) -> tuple[Path, bool]:
    """Return (path, required) following the resolution order above."""
    if explicit is not None:
        return explicit, True
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path), True
    return DEFAULT_CONFIG_PATH, False


def load_config(path: Path | None = None) -> ConsolidatorConfig:
    config_path, required = resolve_config_path(path)
    if not config_path.exists():
        if required:
            raise ConfigError(f"config file not found: {config_path}")
        return ConsolidatorConfig()
    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("config validation failed: top level must be a mapping")

    _validate_config_schema(data)

    hints = _default_hints()
    hints.update(data.get("column_hints", {}))
    export = data.get("export", {})
    return ConsolidatorConfig(
        column_hints=hints,
        export_directory=export.get("directory", "."),
        csv_file_name=export.get("csv_file_name", DEFAULT_CSV_FILE_NAME),
        logs_directory=data.get("logs_directory", "./logs"),
    )
