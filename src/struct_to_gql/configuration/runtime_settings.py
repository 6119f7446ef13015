"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from struct_to_gql.schema_rendering import RenderOptions


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path
    render_options: RenderOptions
