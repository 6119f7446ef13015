"""Build GraphQL type definitions from discovered structs."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from struct_to_gql.type_catalog import DiscoveredField, DiscoveredType, PrimitiveKind, SourceType

from .definition_models import FieldDefinition, FieldTypeResult, ScalarType, TypeDefinition
from .type_mapper import PRIMITIVE_SCALARS, map_type

_LOGGER = logging.getLogger(__name__)


def build_type_definitions(
    discovered_types: Iterable[DiscoveredType],
    *,
    primitive_scalars: Mapping[PrimitiveKind, ScalarType] = PRIMITIVE_SCALARS,
) -> list[TypeDefinition]:
    """Build one type definition per struct; the first failure aborts the batch."""
    definitions = [
        build_type_definition(discovered, primitive_scalars=primitive_scalars)
        for discovered in discovered_types
    ]
    _LOGGER.info("Built %d GraphQL type definitions", len(definitions))
    return definitions


def build_type_definition(
    discovered: DiscoveredType,
    *,
    primitive_scalars: Mapping[PrimitiveKind, ScalarType] = PRIMITIVE_SCALARS,
    expanding: tuple[str, ...] = (),
) -> TypeDefinition:
    """Build the type definition of one struct, keeping field order.

    Raises:
      TypeMappingError: If any field type cannot be mapped. No partial
        definition is returned.
    """
    chain = (*expanding, discovered.name)
    fields = tuple(
        _build_field(field, chain=chain, primitive_scalars=primitive_scalars)
        for field in discovered.fields
    )
    return TypeDefinition(name=discovered.name, fields=fields)


def map_field_type(
    source_type: SourceType,
    *,
    field_name: str = "",
    embedded: bool = False,
    primitive_scalars: Mapping[PrimitiveKind, ScalarType] = PRIMITIVE_SCALARS,
) -> FieldTypeResult:
    """Map one Go type using this module to build synthesized and embedded structs."""
    return map_type(
        source_type,
        build_aggregate=_aggregate_builder(primitive_scalars),
        field_name=field_name,
        embedded=embedded,
        primitive_scalars=primitive_scalars,
    )


def _build_field(
    field: DiscoveredField,
    *,
    chain: tuple[str, ...],
    primitive_scalars: Mapping[PrimitiveKind, ScalarType],
) -> FieldDefinition:
    result = map_type(
        field.source_type,
        build_aggregate=_aggregate_builder(primitive_scalars),
        field_name=field.name,
        embedded=field.embedded,
        expanding=chain,
        primitive_scalars=primitive_scalars,
    )
    return FieldDefinition(
        name=field.name,
        type_name=result.type_name,
        tag=field.tag,
        embedded=field.embedded,
        is_opaque_scalar=result.is_opaque_scalar,
        nested_types=result.auxiliary_types,
        embedded_fields=result.embedded_fields if field.embedded else (),
    )


def _aggregate_builder(primitive_scalars: Mapping[PrimitiveKind, ScalarType]):
    def build(discovered: DiscoveredType, expanding: tuple[str, ...]) -> TypeDefinition:
        return build_type_definition(
            discovered, primitive_scalars=primitive_scalars, expanding=expanding
        )

    return build
