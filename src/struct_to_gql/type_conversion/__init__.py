"""Type conversion exports."""

from .aggregate_builder import build_type_definition, build_type_definitions, map_field_type
from .definition_models import FieldDefinition, FieldTypeResult, ScalarType, TypeDefinition
from .type_mapper import (
    EMPTY_INTERFACE_SCALAR,
    MAP_TYPE_SUFFIX,
    PRIMITIVE_SCALARS,
    CircularTypeError,
    TypeMappingError,
    map_type,
)

__all__ = [
    "CircularTypeError",
    "EMPTY_INTERFACE_SCALAR",
    "FieldDefinition",
    "FieldTypeResult",
    "MAP_TYPE_SUFFIX",
    "PRIMITIVE_SCALARS",
    "ScalarType",
    "TypeDefinition",
    "TypeMappingError",
    "build_type_definition",
    "build_type_definitions",
    "map_field_type",
    "map_type",
]
