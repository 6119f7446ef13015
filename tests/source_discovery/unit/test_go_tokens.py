"""Go tokenizer tests."""

from __future__ import annotations

import pytest
from struct_to_gql.source_discovery import SourceSyntaxError
from struct_to_gql.source_discovery.go_tokens import TokenKind, tokenize


def _kinds_and_values(source: str) -> list[tuple[TokenKind, str]]:
    return [(token.kind, token.value) for token in tokenize(source)]


def test_inserts_semicolon_after_identifier_at_line_end() -> None:
    assert _kinds_and_values("package main\n") == [
        (TokenKind.KEYWORD, "package"),
        (TokenKind.IDENT, "main"),
        (TokenKind.SEMICOLON, "\n"),
        (TokenKind.EOF, ""),
    ]


def test_no_semicolon_after_opening_brace_or_operator() -> None:
    kinds = [token.kind for token in tokenize("type A struct {\n}\n")]

    assert kinds == [
        TokenKind.KEYWORD,
        TokenKind.IDENT,
        TokenKind.KEYWORD,
        TokenKind.OPERATOR,
        TokenKind.OPERATOR,
        TokenKind.SEMICOLON,
        TokenKind.EOF,
    ]


def test_semicolon_inserted_at_end_of_input() -> None:
    tokens = tokenize("return")

    assert tokens[-2].kind is TokenKind.SEMICOLON
    assert tokens[-1].kind is TokenKind.EOF


def test_comments_are_skipped_and_multiline_comment_ends_statement() -> None:
    tokens = tokenize("a // trailing\nb /* one\ntwo */ c")

    assert [token.value for token in tokens] == ["a", "\n", "b", "\n", "c", "\n", ""]


def test_literals_are_classified() -> None:
    tokens = tokenize("x 0x1F 1.5e-3 'a' \"s\\\"q\" `raw\nline`")

    assert [token.kind for token in tokens[:6]] == [
        TokenKind.IDENT,
        TokenKind.NUMBER,
        TokenKind.NUMBER,
        TokenKind.CHAR,
        TokenKind.STRING,
        TokenKind.RAW_STRING,
    ]
    assert tokens[2].value == "1.5e-3"
    assert tokens[5].value == "`raw\nline`"


def test_tracks_line_numbers() -> None:
    tokens = tokenize("package p\n\n/* a\nb */\ntype T int\n")

    type_token = next(token for token in tokens if token.is_keyword("type"))
    assert type_token.line == 5


def test_multi_character_operators_are_single_tokens() -> None:
    values = [token.value for token in tokenize("<-chan ... := &^=")][:5]

    assert values == ["<-", "chan", "...", ":=", "&^="]


@pytest.mark.parametrize(
    ("source", "message"),
    [
        ("package p\n/* never closed", "p.go:2: unexpected unterminated comment"),
        ('package p\nvar s = "open\n', "p.go:2: unexpected unterminated literal"),
        ("package p\nvar x = 1 @ 2\n", "p.go:2: unexpected character '@'"),
    ],
)
def test_invalid_input_reports_file_and_line(source: str, message: str) -> None:
    with pytest.raises(SourceSyntaxError, match=message):
        tokenize(source, "p.go")
