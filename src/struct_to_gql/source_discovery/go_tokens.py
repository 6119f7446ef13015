"""Go lexical scanner with automatic semicolon insertion."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from .discovery_errors import SourceSyntaxError

KEYWORDS = frozenset(
    {
        "break",
        "case",
        "chan",
        "const",
        "continue",
        "default",
        "defer",
        "else",
        "fallthrough",
        "for",
        "func",
        "go",
        "goto",
        "if",
        "import",
        "interface",
        "map",
        "package",
        "range",
        "return",
        "select",
        "struct",
        "switch",
        "type",
        "var",
    }
)

_TOKEN_PATTERN = re.compile(
    r"""
      (?P<newline>\n)
    | (?P<space>[ \t\r\f\ufeff]+)
    | (?P<line_comment>//[^\n]*)
    | (?P<block_comment>/\*.*?\*/)
    | (?P<raw_string>`[^`]*`)
    | (?P<string>"(?:[^"\\\n]|\\.)*")
    | (?P<char>'(?:[^'\\\n]|\\.)+')
    | (?P<number>(?:\d|\.\d)(?:[eEpP][+-]|[\w.])*)
    | (?P<ident>[^\W\d]\w*)
    | (?P<operator>
        \.\.\.|<-|&\^=|<<=|>>=|&&|\|\||\+\+|--|==|!=|<=|>=|:=
        |\+=|-=|\*=|/=|%=|&=|\|=|\^=|<<|>>|&\^
        |[-+*/%&|^<>=!~()\[\]{},;.:]
      )
    """,
    re.VERBOSE | re.DOTALL,
)

_STATEMENT_END_KEYWORDS = frozenset({"break", "continue", "fallthrough", "return"})
_STATEMENT_END_OPERATORS = frozenset({"++", "--", ")", "]", "}"})


class TokenKind(str, Enum):
    """Lexical token categories."""

    IDENT = "identifier"
    KEYWORD = "keyword"
    NUMBER = "number"
    CHAR = "char"
    STRING = "string"
    RAW_STRING = "raw string"
    OPERATOR = "operator"
    SEMICOLON = "semicolon"
    EOF = "EOF"


_LITERAL_KINDS = frozenset(
    {TokenKind.IDENT, TokenKind.NUMBER, TokenKind.CHAR, TokenKind.STRING, TokenKind.RAW_STRING}
)


@dataclass(frozen=True)
class Token:
    """One token with its source line and character offsets."""

    kind: TokenKind
    value: str
    line: int
    start: int
    end: int

    def describe(self) -> str:
        if self.kind is TokenKind.EOF:
            return "EOF"
        if self.kind is TokenKind.SEMICOLON and self.value == "\n":
            return "newline"
        return repr(self.value)

    def is_operator(self, value: str) -> bool:
        return self.kind is TokenKind.OPERATOR and self.value == value

    def is_keyword(self, value: str) -> bool:
        return self.kind is TokenKind.KEYWORD and self.value == value


def tokenize(source: str, filename: str = "<source>") -> list[Token]:
    """Split Go source text into tokens, inserting semicolons at line ends."""
    tokens: list[Token] = []
    position = 0
    line = 1
    while position < len(source):
        match = _TOKEN_PATTERN.match(source, position)
        unterminated_comment = (
            match is not None
            and match.lastgroup != "block_comment"
            and source.startswith("/*", position)
        )
        if match is None or unterminated_comment:
            raise SourceSyntaxError(
                f"{filename}:{line}: unexpected {_unexpected_text(source, position)}"
            )
        group = match.lastgroup
        text = match.group()
        if group == "newline" or (group == "block_comment" and "\n" in text):
            if _ends_statement(tokens):
                tokens.append(Token(TokenKind.SEMICOLON, "\n", line, position, position))
        elif group not in ("space", "line_comment", "block_comment"):
            tokens.append(Token(_token_kind(group, text), text, line, position, match.end()))
        line += text.count("\n")
        position = match.end()

    if _ends_statement(tokens):
        tokens.append(Token(TokenKind.SEMICOLON, "\n", line, position, position))
    tokens.append(Token(TokenKind.EOF, "", line, position, position))
    return tokens


def _token_kind(group: str | None, text: str) -> TokenKind:
    if group == "ident":
        return TokenKind.KEYWORD if text in KEYWORDS else TokenKind.IDENT
    if group == "operator" and text == ";":
        return TokenKind.SEMICOLON
    return {
        "number": TokenKind.NUMBER,
        "char": TokenKind.CHAR,
        "string": TokenKind.STRING,
        "raw_string": TokenKind.RAW_STRING,
    }.get(group or "", TokenKind.OPERATOR)


def _ends_statement(tokens: list[Token]) -> bool:
    if not tokens:
        return False
    last = tokens[-1]
    if last.kind in _LITERAL_KINDS:
        return True
    if last.kind is TokenKind.KEYWORD:
        return last.value in _STATEMENT_END_KEYWORDS
    return last.kind is TokenKind.OPERATOR and last.value in _STATEMENT_END_OPERATORS


def _unexpected_text(source: str, position: int) -> str:
    if source.startswith("/*", position):
        return "unterminated comment"
    char = source[position]
    if char in "\"'`":
        return "unterminated literal"
    return f"character {char!r}"
