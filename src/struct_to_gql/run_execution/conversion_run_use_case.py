"""Conversion run use-case service."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from struct_to_gql.schema_rendering import SchemaRenderError, render_schema
from struct_to_gql.source_discovery import DiscoveryError, discover_structs
from struct_to_gql.tag_parsing import TagFormatError
from struct_to_gql.type_catalog import DiscoveredType
from struct_to_gql.type_conversion import TypeMappingError, build_type_definitions

from .run_contracts import ConversionOutcome, ConversionRequest

_LOGGER = logging.getLogger(__name__)

StructDiscoverer = Callable[[Path | str], list[DiscoveredType]]


class ConversionRunError(Exception):
    """Raised when a conversion run cannot be completed."""


def execute_conversion_run(
    request: ConversionRequest, *, discover: StructDiscoverer | None = None
) -> ConversionOutcome:
    """Discover structs, build their GraphQL types and render the schema text."""
    resolved_discover = discover or discover_structs
    try:
        discovered = resolved_discover(request.source_path)
        type_definitions = build_type_definitions(discovered)
        schema_text = render_schema(type_definitions, request.render_options)
    except (DiscoveryError, TypeMappingError, TagFormatError, SchemaRenderError) as exc:
        raise ConversionRunError(str(exc)) from exc

    _LOGGER.info(
        "Rendered schema for %d structs from %s", len(type_definitions), request.source_path
    )
    return ConversionOutcome(
        schema_text=schema_text,
        type_names=tuple(definition.name for definition in type_definitions),
    )
