"""Resolve parsed Go type expressions into catalog types."""

from __future__ import annotations

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
    Unsupported,
)

from .discovery_errors import TypeCheckError
from .go_declarations import (
    ArrayExpr,
    GoSourceFile,
    InterfaceExpr,
    MapExpr,
    OpaqueExpr,
    PointerExpr,
    SliceExpr,
    StructExpr,
    TypeExpr,
    TypeRef,
    TypeSpec,
)

_PREDECLARED_KINDS = {
    "bool": PrimitiveKind.BOOL,
    "int": PrimitiveKind.INT,
    "int8": PrimitiveKind.INT8,
    "int16": PrimitiveKind.INT16,
    "int32": PrimitiveKind.INT32,
    "int64": PrimitiveKind.INT64,
    "uint": PrimitiveKind.UINT,
    "uint8": PrimitiveKind.UINT8,
    "uint16": PrimitiveKind.UINT16,
    "uint32": PrimitiveKind.UINT32,
    "uint64": PrimitiveKind.UINT64,
    "uintptr": PrimitiveKind.UINTPTR,
    "float32": PrimitiveKind.FLOAT32,
    "float64": PrimitiveKind.FLOAT64,
    "complex64": PrimitiveKind.COMPLEX64,
    "complex128": PrimitiveKind.COMPLEX128,
    "string": PrimitiveKind.STRING,
    "byte": PrimitiveKind.UINT8,
    "rune": PrimitiveKind.INT32,
}


def resolve_struct_types(source_file: GoSourceFile) -> list[DiscoveredType]:
    """Type check the declarations and return every struct type, sorted by name.

    Raises:
      TypeCheckError: On undefined names, redeclarations, invalid recursive
        types or misuse of constraint-only types.
    """
    return _TypeResolver(source_file).struct_types()


class _TypeResolver:
    def __init__(self, source_file: GoSourceFile) -> None:
        self._filename = source_file.filename
        self._imports = source_file.imports
        self._dot_import = source_file.dot_import
        self._specs: dict[str, TypeSpec] = {}
        for spec in source_file.type_specs:
            if spec.name == "_":
                continue
            if spec.name in self._specs:
                raise self._error(spec.line, f"{spec.name} redeclared in this block")
            self._specs[spec.name] = spec
        self._resolved: dict[str, SourceType] = {}
        self._resolving_aliases: set[str] = set()

    def struct_types(self) -> list[DiscoveredType]:
        for spec in self._specs.values():
            self._resolve_spec(spec)
            self._check_contains_itself(spec)

        discovered: list[DiscoveredType] = []
        for name in sorted(self._specs):
            spec = self._specs[name]
            underlying, owner = self._underlying(spec.expr, spec, (name,))
            if not isinstance(underlying, StructExpr):
                continue
            resolved = self._resolved[name]
            if isinstance(resolved, NamedAggregate):
                fields = tuple(resolved.fields)
            else:
                fields = self._resolve_fields(underlying, owner.type_params)
            discovered.append(DiscoveredType(name=name, fields=fields))
        return discovered

    def _resolve_spec(self, spec: TypeSpec) -> SourceType:
        cached = self._resolved.get(spec.name)
        if cached is not None:
            return cached

        if spec.alias:
            if spec.name in self._resolving_aliases:
                raise self._error(spec.line, f"invalid recursive type alias {spec.name}")
            self._resolving_aliases.add(spec.name)
            resolved = self._resolve_expr(spec.expr, spec.type_params)
            self._resolving_aliases.discard(spec.name)
            self._resolved[spec.name] = resolved
            return resolved

        underlying, owner = self._underlying(spec.expr, spec, (spec.name,))
        if isinstance(underlying, StructExpr):
            aggregate = NamedAggregate(name=spec.name)
            self._resolved[spec.name] = aggregate
            aggregate.fields.extend(self._resolve_fields(underlying, owner.type_params))
            return aggregate

        scalar = NamedScalar(name=spec.name)
        self._resolved[spec.name] = scalar
        self._resolve_expr(spec.expr, spec.type_params)
        return scalar

    def _underlying(
        self, expr: TypeExpr, owner: TypeSpec, visited: tuple[str, ...]
    ) -> tuple[TypeExpr, TypeSpec]:
        target = self._local_spec(expr, owner.type_params)
        if target is None:
            return expr, owner
        if target.name in visited:
            raise self._error(target.line, f"invalid recursive type {target.name}")
        return self._underlying(target.expr, target, (*visited, target.name))

    def _resolve_fields(
        self, struct: StructExpr, type_params: tuple[str, ...]
    ) -> tuple[DiscoveredField, ...]:
        return tuple(
            DiscoveredField(
                name=field.name,
                source_type=self._resolve_expr(field.expr, type_params),
                tag=field.tag,
                embedded=field.embedded,
            )
            for field in struct.fields
        )

    def _resolve_expr(self, expr: TypeExpr, type_params: tuple[str, ...]) -> SourceType:
        if isinstance(expr, TypeRef):
            return self._resolve_ref(expr, type_params)
        if isinstance(expr, PointerExpr):
            return Optional(self._resolve_expr(expr.element, type_params))
        if isinstance(expr, SliceExpr | ArrayExpr):
            return Sequence(self._resolve_expr(expr.element, type_params))
        if isinstance(expr, MapExpr):
            return Associative(
                key=self._resolve_expr(expr.key, type_params),
                value=self._resolve_expr(expr.value, type_params),
            )
        if isinstance(expr, StructExpr):
            self._resolve_fields(expr, type_params)
            return Unsupported(expr.text)
        if isinstance(expr, InterfaceExpr):
            return Open(empty=expr.empty, description=expr.text)
        if isinstance(expr, OpaqueExpr):
            return Unsupported(expr.text)
        raise TypeError(f"unexpected type expression: {expr!r}")

    def _resolve_ref(self, ref: TypeRef, type_params: tuple[str, ...]) -> SourceType:
        if ref.package is not None:
            import_path = self._imports.get(ref.package)
            if import_path is None:
                raise self._error(ref.line, f"undefined: {ref.package}")
            if import_path == "unsafe" and ref.name == "Pointer":
                return Primitive(PrimitiveKind.UNSAFE_POINTER)
            return NamedScalar(name=ref.name)
        if ref.name in type_params:
            return Unsupported(ref.name)
        spec = self._specs.get(ref.name)
        if spec is not None:
            return self._resolve_spec(spec)
        kind = _PREDECLARED_KINDS.get(ref.name)
        if kind is not None:
            return Primitive(kind)
        if ref.name == "error":
            return NamedScalar(name="error")
        if ref.name == "any":
            return Open(empty=True, description="any")
        if ref.name == "comparable":
            raise self._error(ref.line, "cannot use type comparable outside a type constraint")
        if self._dot_import:
            return NamedScalar(name=ref.name)
        raise self._error(ref.line, f"undefined: {ref.name}")

    def _check_contains_itself(self, spec: TypeSpec) -> None:
        if spec.alias:
            return
        if self._contains_by_value(spec.expr, spec.name, spec.type_params, visited=set()):
            raise self._error(spec.line, f"invalid recursive type {spec.name}")

    def _contains_by_value(
        self, expr: TypeExpr, target: str, type_params: tuple[str, ...], visited: set[str]
    ) -> bool:
        local = self._local_spec(expr, type_params)
        if local is not None:
            if local.name == target:
                return True
            if local.name in visited:
                return False
            visited.add(local.name)
            return self._contains_by_value(local.expr, target, local.type_params, visited)
        if isinstance(expr, ArrayExpr):
            return self._contains_by_value(expr.element, target, type_params, visited)
        if isinstance(expr, StructExpr):
            return any(
                self._contains_by_value(field.expr, target, type_params, visited)
                for field in expr.fields
            )
        return False

    def _local_spec(self, expr: TypeExpr, type_params: tuple[str, ...]) -> TypeSpec | None:
        if not isinstance(expr, TypeRef) or expr.package is not None:
            return None
        if expr.name in type_params:
            return None
        return self._specs.get(expr.name)

    def _error(self, line: int, message: str) -> TypeCheckError:
        return TypeCheckError(f"{self._filename}:{line}: {message}")

