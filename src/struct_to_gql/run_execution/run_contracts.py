"""Run execution entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from struct_to_gql.schema_rendering import RenderOptions


@dataclass(frozen=True)
class ConversionRequest:
    """Input contract for converting one source file."""

    source_path: Path | str
    render_options: RenderOptions = field(default_factory=RenderOptions)


@dataclass(frozen=True)
class ConversionOutcome:
    """Output contract for one completed conversion."""

    schema_text: str
    type_names: tuple[str, ...]
