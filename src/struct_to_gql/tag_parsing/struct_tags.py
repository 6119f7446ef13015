"""Go struct tag parsing (`json:"name,omitempty" validate:"required"`)."""

from __future__ import annotations

import re
from dataclasses import dataclass

_ESCAPE_PATTERN = re.compile(
    r'\\(x[0-9a-fA-F]{2}|[0-7]{3}|u[0-9a-fA-F]{4}|U[0-9a-fA-F]{8}|[abfnrtv\\"]|.?)', re.DOTALL
)
_SIMPLE_ESCAPES = {
    "a": b"\a",
    "b": b"\b",
    "f": b"\f",
    "n": b"\n",
    "r": b"\r",
    "t": b"\t",
    "v": b"\v",
    "\\": b"\\",
    '"': b'"',
}


class TagFormatError(Exception):
    """Raised for malformed struct tags or tag arguments."""


@dataclass(frozen=True)
class StructTag:
    """One `key:"name,option..."` pair."""

    key: str
    name: str
    options: tuple[str, ...] = ()


@dataclass(frozen=True)
class StructTags:
    """Parsed tags of one field, in source order."""

    tags: tuple[StructTag, ...] = ()

    def get(self, key: str) -> StructTag | None:
        """Return the first tag registered under `key`, if any."""
        for tag in self.tags:
            if tag.key == key:
                return tag
        return None

    def keys(self) -> tuple[str, ...]:
        return tuple(tag.key for tag in self.tags)


def parse_struct_tag(raw: str) -> StructTags:
    """Parse a raw struct tag string.

    Follows the conventional Go layout: space separated `key:"value"` pairs, where
    each value is an interpreted string literal whose first comma separated
    element is the tag name.

    Raises:
      TagFormatError: If a key, separator or quoted value is malformed.
    """
    tags: list[StructTag] = []
    position = 0
    length = len(raw)
    while position < length:
        while position < length and raw[position] == " ":
            position += 1
        if position >= length:
            break

        key_start = position
        while position < length and _is_key_char(raw[position]):
            position += 1
        if position == key_start:
            raise TagFormatError(f"bad syntax for struct tag key: {raw!r}")
        key = raw[key_start:position]

        if position + 1 >= length or raw[position] != ":":
            raise TagFormatError(f"bad syntax for struct tag pair: {raw!r}")
        if raw[position + 1] != '"':
            raise TagFormatError(f"bad syntax for struct tag value: {raw!r}")

        value_start = position + 1
        position += 2
        while position < length and raw[position] != '"':
            if raw[position] == "\\":
                position += 1
            position += 1
        if position >= length:
            raise TagFormatError(f"bad syntax for struct tag value: {raw!r}")
        position += 1

        try:
            value = unquote_interpreted_string(raw[value_start:position])
        except TagFormatError as exc:
            raise TagFormatError(f"bad syntax for struct tag value: {raw!r}") from exc
        name, *options = value.split(",")
        tags.append(StructTag(key=key, name=name, options=tuple(options)))

    return StructTags(tags=tuple(tags))


def _is_key_char(char: str) -> bool:
    return char > " " and char not in ':"\x7f'


def unquote_interpreted_string(quoted: str) -> str:
    """Decode a double-quoted Go string literal, escapes included.

    `\\x` and octal escapes denote bytes, so the value is assembled as UTF-8 bytes.
    """
    body = quoted[1:-1]
    if len(quoted) < 2 or quoted[0] != '"' or quoted[-1] != '"' or "\n" in body:
        raise TagFormatError(f"invalid string literal: {quoted!r}")
    decoded = bytearray()
    position = 0
    for match in _ESCAPE_PATTERN.finditer(body):
        decoded += body[position : match.start()].encode("utf-8")
        decoded += _decode_escape(match.group(1), quoted)
        position = match.end()
    decoded += body[position:].encode("utf-8")
    return decoded.decode("utf-8", errors="replace")


def _decode_escape(escape: str, quoted: str) -> bytes:
    simple = _SIMPLE_ESCAPES.get(escape)
    if simple is not None:
        return simple
    if escape.startswith("x") and len(escape) == 3:
        return bytes([int(escape[1:], 16)])
    if len(escape) == 3 and escape.isdigit() and int(escape, 8) <= 0xFF:
        return bytes([int(escape, 8)])
    if escape[:1] in ("u", "U") and len(escape) in (5, 9):
        code_point = int(escape[1:], 16)
        if code_point <= 0x10FFFF and not 0xD800 <= code_point <= 0xDFFF:
            return chr(code_point).encode("utf-8")
    raise TagFormatError(f"invalid string literal: {quoted!r}")
