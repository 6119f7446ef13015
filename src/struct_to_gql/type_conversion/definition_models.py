"""GraphQL type definition entities."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScalarType:
    """GraphQL scalar a Go basic kind maps to."""

    name: str
    is_opaque: bool = False


@dataclass(frozen=True)
class FieldDefinition:
    """Resolved GraphQL field.

    `embedded_fields` is only populated for embedded struct fields and holds the
    already resolved fields of the embedded type, ready to be flattened.
    """

    name: str
    type_name: str
    tag: str = ""
    embedded: bool = False
    is_opaque_scalar: bool = False
    nested_types: tuple[TypeDefinition, ...] = ()
    embedded_fields: tuple[FieldDefinition, ...] = ()

    @property
    def scalar_name(self) -> str | None:
        """Return the scalar to declare for this field, stripped of list brackets."""
        if not self.is_opaque_scalar:
            return None
        return self.type_name.strip("[]")


@dataclass(frozen=True)
class TypeDefinition:
    """GraphQL object type built from one struct."""

    name: str
    fields: tuple[FieldDefinition, ...] = ()


@dataclass(frozen=True)
class FieldTypeResult:
    """Outcome of mapping one Go type for one field."""

    type_name: str
    is_opaque_scalar: bool = False
    auxiliary_types: tuple[TypeDefinition, ...] = ()
    embedded_fields: tuple[FieldDefinition, ...] = ()
