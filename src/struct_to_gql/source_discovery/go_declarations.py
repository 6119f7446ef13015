"""Parse package-level Go type declarations.

Only the parts of a Go file that describe types are modelled: the package
clause, imports and `type` declarations. `func`, `var` and `const`
declarations are skipped after checking their brackets balance.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TypeVar

from struct_to_gql.tag_parsing import TagFormatError, unquote_interpreted_string

from .discovery_errors import SourceSyntaxError
from .go_tokens import Token, TokenKind, tokenize

_VERSION_SEGMENT = re.compile(r"^v\d+$")
_BRACKET_PAIRS = {"(": ")", "[": "]", "{": "}"}
_TYPE_START_KEYWORDS = frozenset({"chan", "func", "interface", "map", "struct"})
_TYPE_START_OPERATORS = frozenset({"*", "[", "(", "<-"})

_SpecT = TypeVar("_SpecT")


@dataclass(frozen=True)
class TypeRef:
    """Reference to a named type, optionally package qualified."""

    name: str
    package: str | None
    line: int


@dataclass(frozen=True)
class PointerExpr:
    element: TypeExpr


@dataclass(frozen=True)
class SliceExpr:
    element: TypeExpr


@dataclass(frozen=True)
class ArrayExpr:
    element: TypeExpr


@dataclass(frozen=True)
class MapExpr:
    key: TypeExpr
    value: TypeExpr


@dataclass(frozen=True)
class FieldSpec:
    """One struct field; `embedded` fields are named after their type."""

    name: str
    expr: TypeExpr
    tag: str = ""
    embedded: bool = False


@dataclass(frozen=True)
class StructExpr:
    fields: tuple[FieldSpec, ...]
    text: str


@dataclass(frozen=True)
class InterfaceExpr:
    empty: bool
    text: str


@dataclass(frozen=True)
class OpaqueExpr:
    """Channel or function type."""

    text: str


TypeExpr = (
    TypeRef
    | PointerExpr
    | SliceExpr
    | ArrayExpr
    | MapExpr
    | StructExpr
    | InterfaceExpr
    | OpaqueExpr
)


@dataclass(frozen=True)
class TypeSpec:
    """`type Name[Params] Expr` or `type Name = Expr`."""

    name: str
    expr: TypeExpr
    line: int
    alias: bool = False
    type_params: tuple[str, ...] = ()


@dataclass(frozen=True)
class GoSourceFile:
    """Type-relevant declarations of one Go file."""

    filename: str
    package: str
    imports: dict[str, str] = field(default_factory=dict)
    dot_import: bool = False
    type_specs: tuple[TypeSpec, ...] = ()


def parse_go_source(source: str, filename: str = "<source>") -> GoSourceFile:
    """Parse Go source text into its package-level type declarations.

    Raises:
      SourceSyntaxError: If the text is not syntactically valid Go.
    """
    return _DeclarationParser(source, tokenize(source, filename), filename).parse_file()


class _DeclarationParser:
    def __init__(self, source: str, tokens: list[Token], filename: str) -> None:
        self._source = source
        self._tokens = tokens
        self._filename = filename
        self._index = 0

    def parse_file(self) -> GoSourceFile:
        self._expect_keyword("package")
        package = self._expect(TokenKind.IDENT).value
        self._expect_declaration_end()

        imports: dict[str, str] = {}
        dot_import = False
        while self._peek().is_keyword("import"):
            self._advance()
            for local_name, path in self._parse_grouped(self._parse_import_spec):
                if local_name == ".":
                    dot_import = True
                elif local_name != "_":
                    imports[local_name] = path
            self._expect_declaration_end()

        type_specs: list[TypeSpec] = []
        while self._peek().kind is not TokenKind.EOF:
            token = self._peek()
            if token.is_keyword("type"):
                self._advance()
                type_specs.extend(self._parse_grouped(self._parse_type_spec))
                self._expect_declaration_end()
            elif token.kind is TokenKind.KEYWORD and token.value in ("func", "var", "const"):
                self._skip_declaration()
            else:
                raise self._error(token, "non-declaration statement outside function body")

        return GoSourceFile(
            filename=self._filename,
            package=package,
            imports=imports,
            dot_import=dot_import,
            type_specs=tuple(type_specs),
        )

    def _parse_grouped(self, parse_spec: Callable[[], _SpecT]) -> list[_SpecT]:
        if not self._accept_operator("("):
            return [parse_spec()]
        specs: list[_SpecT] = []
        while not self._accept_operator(")"):
            specs.append(parse_spec())
            if not self._accept(TokenKind.SEMICOLON) and not self._peek().is_operator(")"):
                raise self._error(self._peek(), "expected ';' or ')'")
        return specs

    def _parse_import_spec(self) -> tuple[str, str]:
        token = self._peek()
        local_name: str | None = None
        if token.kind is TokenKind.IDENT or token.is_operator("."):
            local_name = self._advance().value
        path_token = self._advance()
        if path_token.kind not in (TokenKind.STRING, TokenKind.RAW_STRING):
            raise self._error(path_token, "expected import path")
        path = self._string_value(path_token)
        return local_name or _default_package_name(path), path

    def _parse_type_spec(self) -> TypeSpec:
        name_token = self._expect(TokenKind.IDENT)
        type_params: tuple[str, ...] = ()
        if self._peek().is_operator("[") and self._starts_type_params():
            type_params = self._parse_type_params()
        alias = self._accept_operator("=")
        expr = self._parse_type()
        return TypeSpec(
            name=name_token.value,
            expr=expr,
            line=name_token.line,
            alias=alias,
            type_params=type_params,
        )

    def _starts_type_params(self) -> bool:
        first, second = self._peek(1), self._peek(2)
        if first.kind is not TokenKind.IDENT:
            return False
        return second.kind in (TokenKind.IDENT, TokenKind.KEYWORD) or second.value in ("~", ",")

    def _parse_type_params(self) -> tuple[str, ...]:
        group_tokens = self._skip_balanced()[1:-1]
        names: list[str] = []
        expect_name = True
        depth = 0
        for token in group_tokens:
            if expect_name and token.kind is TokenKind.IDENT:
                names.append(token.value)
            expect_name = False
            if token.kind is TokenKind.OPERATOR and token.value in _BRACKET_PAIRS:
                depth += 1
            elif token.kind is TokenKind.OPERATOR and token.value in _BRACKET_PAIRS.values():
                depth -= 1
            elif depth == 0 and token.is_operator(","):
                expect_name = True
        return tuple(names)

    def _parse_type(self) -> TypeExpr:
        token = self._peek()
        if token.kind is TokenKind.IDENT:
            return self._parse_type_name()
        if token.is_operator("*"):
            self._advance()
            return PointerExpr(self._parse_type())
        if token.is_operator("["):
            self._advance()
            if self._accept_operator("]"):
                return SliceExpr(self._parse_type())
            self._skip_until_closing("]")
            return ArrayExpr(self._parse_type())
        if token.is_operator("("):
            self._advance()
            inner = self._parse_type()
            self._expect_operator(")")
            return inner
        if token.is_keyword("map"):
            self._advance()
            self._expect_operator("[")
            key = self._parse_type()
            self._expect_operator("]")
            return MapExpr(key=key, value=self._parse_type())
        if token.is_keyword("chan") or token.is_operator("<-"):
            return self._parse_channel()
        if token.is_keyword("func"):
            self._advance()
            self._parse_signature()
            return OpaqueExpr(self._text_since(token))
        if token.is_keyword("struct"):
            return self._parse_struct()
        if token.is_keyword("interface"):
            self._advance()
            if not self._peek().is_operator("{"):
                raise self._error(self._peek(), "expected '{'")
            body = self._skip_balanced()[1:-1]
            empty = all(inner.kind is TokenKind.SEMICOLON for inner in body)
            return InterfaceExpr(empty=empty, text=self._text_since(token))
        raise self._error(token, "expected type")

    def _parse_type_name(self) -> TypeRef:
        name_token = self._expect(TokenKind.IDENT)
        package: str | None = None
        name = name_token.value
        if self._accept_operator("."):
            package = name
            name = self._expect(TokenKind.IDENT).value
        if self._peek().is_operator("["):
            # Generic instantiation; arguments do not change the GraphQL name.
            self._advance()
            self._parse_type()
            while self._accept_operator(","):
                if self._peek().is_operator("]"):
                    break
                self._parse_type()
            self._expect_operator("]")
        return TypeRef(name=name, package=package, line=name_token.line)

    def _parse_channel(self) -> OpaqueExpr:
        start = self._peek()
        if self._accept_operator("<-"):
            self._expect_keyword("chan")
        else:
            self._expect_keyword("chan")
            self._accept_operator("<-")
        self._parse_type()
        return OpaqueExpr(self._text_since(start))

    def _parse_signature(self) -> None:
        if not self._peek().is_operator("("):
            raise self._error(self._peek(), "expected '('")
        self._skip_balanced()
        result = self._peek()
        if result.is_operator("("):
            self._skip_balanced()
        elif self._starts_type(result):
            self._parse_type()

    def _starts_type(self, token: Token) -> bool:
        if token.kind is TokenKind.IDENT:
            return True
        if token.kind is TokenKind.KEYWORD:
            return token.value in _TYPE_START_KEYWORDS
        return token.kind is TokenKind.OPERATOR and token.value in _TYPE_START_OPERATORS

    def _parse_struct(self) -> StructExpr:
        start = self._expect_keyword("struct")
        self._expect_operator("{")
        fields: list[FieldSpec] = []
        while not self._accept_operator("}"):
            fields.extend(self._parse_field_decl())
            if not self._accept(TokenKind.SEMICOLON) and not self._peek().is_operator("}"):
                raise self._error(self._peek(), "expected ';' or '}'")
        return StructExpr(fields=tuple(fields), text=self._text_since(start))

    def _parse_field_decl(self) -> list[FieldSpec]:
        token = self._peek()
        if token.is_operator("*"):
            self._advance()
            ref = self._parse_type_name()
            return [FieldSpec(ref.name, PointerExpr(ref), self._parse_tag(), embedded=True)]
        if token.kind is not TokenKind.IDENT:
            raise self._error(token, "expected field name or embedded type")

        following = self._peek(1)
        if (
            following.is_operator(".")
            or following.is_operator("}")
            or following.kind in (TokenKind.SEMICOLON, TokenKind.STRING, TokenKind.RAW_STRING)
        ):
            ref = self._parse_type_name()
            return [FieldSpec(ref.name, ref, self._parse_tag(), embedded=True)]

        names = [self._advance().value]
        while self._accept_operator(","):
            names.append(self._expect(TokenKind.IDENT).value)
        expr = self._parse_type()
        tag = self._parse_tag()
        return [FieldSpec(name, expr, tag) for name in names]

    def _parse_tag(self) -> str:
        token = self._peek()
        if token.kind not in (TokenKind.STRING, TokenKind.RAW_STRING):
            return ""
        self._advance()
        return self._string_value(token)

    def _string_value(self, token: Token) -> str:
        if token.kind is TokenKind.RAW_STRING:
            return token.value[1:-1]
        try:
            return unquote_interpreted_string(token.value)
        except TagFormatError as exc:
            raise self._error(token, "invalid string literal") from exc

    def _skip_declaration(self) -> None:
        self._advance()
        while True:
            token = self._peek()
            if token.kind is TokenKind.EOF or token.kind is TokenKind.SEMICOLON:
                self._expect_declaration_end()
                return
            if token.kind is TokenKind.OPERATOR and token.value in _BRACKET_PAIRS:
                self._skip_balanced()
            elif token.kind is TokenKind.OPERATOR and token.value in _BRACKET_PAIRS.values():
                raise self._error(token, "unexpected closing bracket")
            else:
                self._advance()

    def _skip_balanced(self) -> list[Token]:
        """Consume an opening bracket through its matching closer."""
        consumed = [self._advance()]
        closers = [_BRACKET_PAIRS[consumed[0].value]]
        while closers:
            token = self._advance()
            consumed.append(token)
            if token.kind is TokenKind.EOF:
                raise self._error(token, f"expected {closers[-1]!r}")
            if token.kind is not TokenKind.OPERATOR:
                continue
            if token.value in _BRACKET_PAIRS:
                closers.append(_BRACKET_PAIRS[token.value])
            elif token.value in _BRACKET_PAIRS.values():
                if token.value != closers[-1]:
                    raise self._error(token, f"expected {closers[-1]!r}")
                closers.pop()
        return consumed

    def _skip_until_closing(self, closer: str) -> None:
        while True:
            token = self._peek()
            if token.kind is TokenKind.EOF:
                raise self._error(token, f"expected {closer!r}")
            if token.kind is TokenKind.OPERATOR and token.value in _BRACKET_PAIRS:
                self._skip_balanced()
                continue
            self._advance()
            if token.is_operator(closer):
                return
            if token.kind is TokenKind.OPERATOR and token.value in _BRACKET_PAIRS.values():
                raise self._error(token, f"expected {closer!r}")

    def _expect_declaration_end(self) -> None:
        if self._peek().kind is TokenKind.EOF:
            return
        self._expect(TokenKind.SEMICOLON)

    def _text_since(self, start: Token) -> str:
        end = self._tokens[self._index - 1].end
        return " ".join(self._source[start.start : end].split())

    def _peek(self, offset: int = 0) -> Token:
        index = min(self._index + offset, len(self._tokens) - 1)
        return self._tokens[index]

    def _advance(self) -> Token:
        token = self._peek()
        if token.kind is not TokenKind.EOF:
            self._index += 1
        return token

    def _accept(self, kind: TokenKind) -> bool:
        if self._peek().kind is kind:
            self._advance()
            return True
        return False

    def _accept_operator(self, value: str) -> bool:
        if self._peek().is_operator(value):
            self._advance()
            return True
        return False

    def _expect(self, kind: TokenKind) -> Token:
        token = self._peek()
        if token.kind is not kind:
            raise self._error(token, f"expected {kind.value}")
        return self._advance()

    def _expect_operator(self, value: str) -> Token:
        token = self._peek()
        if not token.is_operator(value):
            raise self._error(token, f"expected {value!r}")
        return self._advance()

    def _expect_keyword(self, value: str) -> Token:
        token = self._peek()
        if not token.is_keyword(value):
            raise self._error(token, f"expected {value!r}")
        return self._advance()

    def _error(self, token: Token, message: str) -> SourceSyntaxError:
        return SourceSyntaxError(
            f"{self._filename}:{token.line}: {message}, found {token.describe()}"
        )


def _default_package_name(path: str) -> str:
    segments = [segment for segment in path.split("/") if segment]
    if not segments:
        return path
    name = segments[-1]
    if _VERSION_SEGMENT.match(name) and len(segments) > 1:
        name = segments[-2]
    name = re.sub(r"\.v\d+$", "", name)
    return name.replace("-", "_").replace(".", "_")
