"""Map Go source types onto the GraphQL type vocabulary."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import replace
from types import MappingProxyType

from struct_to_gql.type_catalog import (
    Associative,
    DiscoveredField,
    DiscoveredType,
    NamedAggregate,
    NamedScalar,
    Open,
    Optional,
    Primitive,
    PrimitiveKind,
    Sequence,
    SourceType,
)

from .definition_models import FieldTypeResult, ScalarType, TypeDefinition

MAP_TYPE_SUFFIX = "Map"
MAP_KEY_FIELD = "key"
MAP_VALUE_FIELD = "values"
EMPTY_INTERFACE_SCALAR = "interfaceEmpty"
INTERFACE_SCALAR_PREFIX = "interface"

_BIG_INT = ScalarType("BigInt", is_opaque=True)  # GraphQL Int is a signed 32-bit integer
_COMPLEX_NUMBER = ScalarType("ComplexNumber", is_opaque=True)

PRIMITIVE_SCALARS: Mapping[PrimitiveKind, ScalarType] = MappingProxyType(
    {
        PrimitiveKind.BOOL: ScalarType("Boolean"),
        PrimitiveKind.INT: ScalarType("Int"),
        PrimitiveKind.INT8: ScalarType("Int"),
        PrimitiveKind.INT16: ScalarType("Int"),
        PrimitiveKind.INT32: ScalarType("Int"),
        PrimitiveKind.INT64: _BIG_INT,
        PrimitiveKind.UINT: ScalarType("Int"),
        PrimitiveKind.UINT8: ScalarType("Int"),
        PrimitiveKind.UINT16: ScalarType("Int"),
        PrimitiveKind.UINT32: ScalarType("Int"),
        PrimitiveKind.UINT64: _BIG_INT,
        PrimitiveKind.UINTPTR: _BIG_INT,
        PrimitiveKind.FLOAT32: ScalarType("Float"),
        PrimitiveKind.FLOAT64: ScalarType("Float"),
        PrimitiveKind.COMPLEX64: _COMPLEX_NUMBER,
        PrimitiveKind.COMPLEX128: _COMPLEX_NUMBER,
        PrimitiveKind.STRING: ScalarType("String"),
        PrimitiveKind.UNSAFE_POINTER: ScalarType("UnsafePointer", is_opaque=True),
        PrimitiveKind.UNTYPED_BOOL: ScalarType("Boolean"),
        PrimitiveKind.UNTYPED_INT: _BIG_INT,
        PrimitiveKind.UNTYPED_RUNE: ScalarType("Int"),
        PrimitiveKind.UNTYPED_FLOAT: ScalarType("Float"),
        PrimitiveKind.UNTYPED_COMPLEX: _COMPLEX_NUMBER,
        PrimitiveKind.UNTYPED_STRING: ScalarType("String"),
        PrimitiveKind.UNTYPED_NIL: ScalarType("UntypedNil", is_opaque=True),
    }
)

AggregateBuilder = Callable[[DiscoveredType, tuple[str, ...]], TypeDefinition]


class TypeMappingError(Exception):
    """Raised when a Go type has no GraphQL representation."""


class CircularTypeError(TypeMappingError):
    """Raised when embedded structs expand into themselves."""


def map_type(
    source_type: SourceType,
    *,
    build_aggregate: AggregateBuilder,
    field_name: str = "",
    embedded: bool = False,
    expanding: tuple[str, ...] = (),
    primitive_scalars: Mapping[PrimitiveKind, ScalarType] = PRIMITIVE_SCALARS,
) -> FieldTypeResult:
    """Resolve the GraphQL type of one field.

    Args:
      source_type: Go type of the field.
      build_aggregate: Builds a type definition for a struct; called for
        synthesized map types and for embedded structs. Receives the chain of
        struct names currently being expanded.
      field_name: Declared field name, used to name synthesized types.
      embedded: Whether the field is embedded and must be flattened.
      expanding: Names of the structs whose embedded fields are being expanded.
      primitive_scalars: Basic kind to scalar table.

    Raises:
      TypeMappingError: If the type, or any type nested in it, is unsupported.
    """

    def recurse(inner: SourceType, inner_embedded: bool = False) -> FieldTypeResult:
        return map_type(
            inner,
            build_aggregate=build_aggregate,
            field_name=field_name,
            embedded=inner_embedded,
            expanding=expanding,
            primitive_scalars=primitive_scalars,
        )

    if isinstance(source_type, Primitive):
        return _map_primitive(source_type, primitive_scalars)
    if isinstance(source_type, Sequence):
        element = recurse(source_type.element)
        return replace(element, type_name=f"[{element.type_name}]", embedded_fields=())
    if isinstance(source_type, Optional):
        # Nullability is not reflected; required markers come from tags only.
        return recurse(source_type.referent, embedded)
    if isinstance(source_type, Associative):
        return _map_associative(source_type, field_name, expanding, build_aggregate)
    if isinstance(source_type, NamedAggregate):
        return _map_named_aggregate(source_type, embedded, expanding, build_aggregate)
    if isinstance(source_type, NamedScalar):
        return FieldTypeResult(type_name=source_type.name, is_opaque_scalar=True)
    if isinstance(source_type, Open):
        if source_type.empty:
            return FieldTypeResult(type_name=EMPTY_INTERFACE_SCALAR, is_opaque_scalar=True)
        return FieldTypeResult(
            type_name=f"{INTERFACE_SCALAR_PREFIX}{field_name}", is_opaque_scalar=True
        )
    raise TypeMappingError(f"invalid type: {source_type.describe()}")


def _map_primitive(
    source_type: Primitive, primitive_scalars: Mapping[PrimitiveKind, ScalarType]
) -> FieldTypeResult:
    scalar = primitive_scalars.get(source_type.kind)
    if source_type.kind is PrimitiveKind.INVALID or scalar is None:
        raise TypeMappingError(f"invalid type: {source_type.describe()}")
    return FieldTypeResult(type_name=scalar.name, is_opaque_scalar=scalar.is_opaque)


def _map_associative(
    source_type: Associative,
    field_name: str,
    expanding: tuple[str, ...],
    build_aggregate: AggregateBuilder,
) -> FieldTypeResult:
    synthetic = DiscoveredType(
        name=f"{field_name}{MAP_TYPE_SUFFIX}",
        fields=(
            DiscoveredField(name=MAP_KEY_FIELD, source_type=source_type.key),
            DiscoveredField(name=MAP_VALUE_FIELD, source_type=source_type.value),
        ),
    )
    definition = build_aggregate(synthetic, expanding)
    return FieldTypeResult(type_name=synthetic.name, auxiliary_types=(definition,))


def _map_named_aggregate(
    source_type: NamedAggregate,
    embedded: bool,
    expanding: tuple[str, ...],
    build_aggregate: AggregateBuilder,
) -> FieldTypeResult:
    if not embedded:
        return FieldTypeResult(type_name=source_type.name)
    if source_type.name in expanding:
        chain = " -> ".join((*expanding, source_type.name))
        raise CircularTypeError(f"circular type: {chain}")
    expanded = build_aggregate(
        DiscoveredType(name=source_type.name, fields=tuple(source_type.fields)), expanding
    )
    return FieldTypeResult(type_name=source_type.name, embedded_fields=expanded.fields)
