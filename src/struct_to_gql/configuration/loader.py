"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from struct_to_gql.schema_rendering import RenderOptions, RequiredTag

from .runtime_settings import Configuration


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    naming = _optional_mapping(parsed.get("naming"), "naming")
    required_tag = _parse_required_section(parsed.get("required"))

    render_options = RenderOptions(
        use_json_tags=_optional_bool(naming.get("use_json_tags"), "naming.use_json_tags"),
        custom_tag=_optional_string(naming.get("custom_tag"), "naming.custom_tag"),
        ignore_value=_optional_raw_string(naming.get("ignore_value"), "naming.ignore_value"),
        required_tag=required_tag,
    )
    return Configuration(path=path, render_options=render_options)


def _parse_required_section(value: Any) -> RequiredTag | None:
    section = _optional_mapping(value, "required")
    key = _optional_string(section.get("key"), "required.key")
    tag_value = _optional_string(section.get("value"), "required.value")
    if key is None and tag_value is None:
        return None
    if key is None or tag_value is None:
        raise ConfigurationError("required.key and required.value must be set together.")
    return RequiredTag(key=key, value=tag_value)


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _optional_bool(value: Any, field_name: str) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be a boolean.")
    return value


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _optional_raw_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    return value
