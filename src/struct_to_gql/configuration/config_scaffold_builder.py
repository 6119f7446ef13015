"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "struct-to-gql.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Conversion configuration for struct-to-gql.
# Every key is optional; command line flags override the values set here.

naming:
  # Rename fields using the json tag name when the tag is present.
  use_json_tags: false
  # Rename fields using this tag instead; takes precedence over the json tag.
  custom_tag: null
  # Drop fields whose resolved name equals this value.
  # Defaults to "-" when a tag is used for naming, otherwise to "".
  ignore_value: null

required:
  # Mark a field non-null ("!") when the tag `key` carries `value`,
  # e.g. key: validate / value: required. Set both or neither.
  key: null
  value: null
"""


def build_placeholder_configuration() -> str:
    """Build a YAML configuration template with inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
