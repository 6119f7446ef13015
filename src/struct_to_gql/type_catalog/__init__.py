"""Type catalog exports."""

from .catalog_models import (
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
    Unsupported,
)

__all__ = [
    "Associative",
    "DiscoveredField",
    "DiscoveredType",
    "NamedAggregate",
    "NamedScalar",
    "Open",
    "Optional",
    "Primitive",
    "PrimitiveKind",
    "Sequence",
    "SourceType",
    "Unsupported",
]
