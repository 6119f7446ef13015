"""Configuration scaffold builder tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from struct_to_gql.configuration import load_configuration
from struct_to_gql.configuration.config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from struct_to_gql.schema_rendering import RenderOptions


def test_build_placeholder_configuration_contains_all_supported_sections() -> None:
    scaffold = build_placeholder_configuration()

    assert "# Conversion configuration for struct-to-gql." in scaffold
    assert "naming:" in scaffold
    assert "use_json_tags:" in scaffold
    assert "custom_tag:" in scaffold
    assert "ignore_value:" in scaffold
    assert "required:" in scaffold


def test_write_placeholder_configuration_writes_file(tmp_path: Path) -> None:
    output_path = tmp_path / DEFAULT_CONFIG_FILENAME

    written_path = write_placeholder_configuration(output_path)

    assert written_path == output_path.resolve()
    assert output_path.read_text(encoding="utf-8") == build_placeholder_configuration()


def test_written_scaffold_loads_as_default_options(tmp_path: Path) -> None:
    written_path = write_placeholder_configuration(tmp_path / "config.yaml")

    assert load_configuration(written_path).render_options == RenderOptions()


def test_write_placeholder_configuration_fails_when_file_exists(tmp_path: Path) -> None:
    output_path = tmp_path / "config.yaml"
    output_path.write_text("existing", encoding="utf-8")

    with pytest.raises(FileExistsError, match="Configuration file already exists"):
        write_placeholder_configuration(output_path)

    assert output_path.read_text(encoding="utf-8") == "existing"
