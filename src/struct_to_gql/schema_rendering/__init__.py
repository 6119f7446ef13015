"""Schema rendering exports."""

from .render_options import RenderOptions, RequiredTag, parse_required_tag
from .schema_renderer import SchemaRenderError, collect_scalar_names, render_schema

__all__ = [
    "RenderOptions",
    "RequiredTag",
    "SchemaRenderError",
    "collect_scalar_names",
    "parse_required_tag",
    "render_schema",
]
