"""Type catalog entities produced by source discovery."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class PrimitiveKind(str, Enum):
    """Go basic type kinds."""

    INVALID = "invalid type"
    BOOL = "bool"
    INT = "int"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT = "uint"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    UINTPTR = "uintptr"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    COMPLEX64 = "complex64"
    COMPLEX128 = "complex128"
    STRING = "string"
    UNSAFE_POINTER = "unsafe.Pointer"
    UNTYPED_BOOL = "untyped bool"
    UNTYPED_INT = "untyped int"
    UNTYPED_RUNE = "untyped rune"
    UNTYPED_FLOAT = "untyped float"
    UNTYPED_COMPLEX = "untyped complex"
    UNTYPED_STRING = "untyped string"
    UNTYPED_NIL = "untyped nil"


@dataclass(frozen=True)
class Primitive:
    """Basic type such as `int64` or `string`."""

    kind: PrimitiveKind

    def describe(self) -> str:
        return self.kind.value


@dataclass(frozen=True)
class Sequence:
    """Slice or array of `element`."""

    element: SourceType

    def describe(self) -> str:
        return f"[]{self.element.describe()}"


@dataclass(frozen=True)
class Optional:
    """Pointer to `referent`."""

    referent: SourceType

    def describe(self) -> str:
        return f"*{self.referent.describe()}"


@dataclass(frozen=True)
class Associative:
    """Map from `key` to `value`."""

    key: SourceType
    value: SourceType

    def describe(self) -> str:
        return f"map[{self.key.describe()}]{self.value.describe()}"


@dataclass(frozen=True, eq=False)
class NamedAggregate:
    """Named type whose underlying type is a struct.

    `fields` is completed by discovery after the instance exists, which lets a
    struct refer to itself (`Next *Node`). Instances compare by identity.
    """

    name: str
    fields: list[DiscoveredField] = field(default_factory=list, repr=False)

    def describe(self) -> str:
        return self.name


@dataclass(frozen=True)
class NamedScalar:
    """Named type over anything other than a struct (`type Status string`)."""

    name: str

    def describe(self) -> str:
        return self.name


@dataclass(frozen=True)
class Open:
    """Interface type; `empty` when it declares no method or constraint."""

    empty: bool
    description: str = "interface{}"

    def describe(self) -> str:
        return self.description


@dataclass(frozen=True)
class Unsupported:
    """Type shape with no GraphQL counterpart (channels, functions, ...)."""

    description: str

    def describe(self) -> str:
        return self.description


SourceType = (
    Primitive
    | Sequence
    | Optional
    | Associative
    | NamedAggregate
    | NamedScalar
    | Open
    | Unsupported
)


@dataclass(frozen=True)
class DiscoveredField:
    """One struct field in declaration order."""

    name: str
    source_type: SourceType
    tag: str = ""
    embedded: bool = False


@dataclass(frozen=True)
class DiscoveredType:
    """Struct type declared in the scanned source file."""

    name: str
    fields: tuple[DiscoveredField, ...]
