"""Source discovery exports."""

from .discovery_errors import (
    DiscoveryError,
    NoStructsFoundError,
    SourceReadError,
    SourceSyntaxError,
    TypeCheckError,
)
from .go_declarations import GoSourceFile, parse_go_source
from .struct_discovery import discover_structs
from .type_resolution import resolve_struct_types

__all__ = [
    "DiscoveryError",
    "GoSourceFile",
    "NoStructsFoundError",
    "SourceReadError",
    "SourceSyntaxError",
    "TypeCheckError",
    "discover_structs",
    "parse_go_source",
    "resolve_struct_types",
]
