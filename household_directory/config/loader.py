from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from household_directory.models.config_models import DirectoryConfig, HighlightConfig

"""Config loader.

Responsibilities:
- Load YAML config/directory.yml
- Validate against the bundled JSON schema (config_schema.json)
- Apply defaults (timezone=UTC, first sheet, [ ] highlight markers)
- Apply the HOUSEHOLD_DIRECTORY_STORE environment override for store_path
"""

SCHEMA_PATH = Path(__file__).parent / "config_schema.json"
DEFAULT_CONFIG_PATH = Path("config/directory.yml")
STORE_ENV_VAR = "HOUSEHOLD_DIRECTORY_STORE"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against JSON schema.

    Raises:
        ConfigError: If the schema file is missing or not valid JSON, or the
            config data fails schema validation.
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


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> DirectoryConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")

    _validate_config_schema(data)

    tz = data.get("timezone", "UTC")
    try:
        ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigError(f"unknown timezone: {tz}") from e

    hl_raw = data.get("highlight", {})
    highlight = HighlightConfig(
        open=hl_raw.get("open", "["),
        close=hl_raw.get("close", "]"),
    )
    # 環境変数が設定ファイルより優先
    store_path = os.getenv(STORE_ENV_VAR) or data["store_path"]
    return DirectoryConfig(
        store_path=store_path,
        timezone=tz,
        sheet=data.get("sheet"),
        highlight=highlight,
    )
