"""Struct tag parsing exports."""

from .struct_tags import (
    StructTag,
    StructTags,
    TagFormatError,
    parse_struct_tag,
    unquote_interpreted_string,
)

__all__ = [
    "StructTag",
    "StructTags",
    "TagFormatError",
    "parse_struct_tag",
    "unquote_interpreted_string",
]
