"""Render GraphQL type definitions as schema text."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence

from struct_to_gql.tag_parsing import StructTags, parse_struct_tag
from struct_to_gql.type_conversion import FieldDefinition, TypeDefinition

from .render_options import RenderOptions, RequiredTag

REQUIRED_MARK = "!"
FIELD_INDENT = "  "


class SchemaRenderError(Exception):
    """Raised when type definitions cannot be rendered consistently."""


def render_schema(
    type_definitions: Sequence[TypeDefinition], options: RenderOptions | None = None
) -> str:
    """Render scalar declarations followed by one block per type.

    Raises:
      TagFormatError: If a field tag is malformed.
      SchemaRenderError: If two different types share one name.
    """
    resolved_options = options or RenderOptions()
    scalar_lines = [f"scalar {name}\n" for name in collect_scalar_names(type_definitions)]
    type_blocks = _render_types(type_definitions, resolved_options, emitted={})
    return "".join(scalar_lines) + "\n" + type_blocks


def collect_scalar_names(type_definitions: Iterable[TypeDefinition]) -> list[str]:
    """Return distinct opaque scalar names in first-seen order."""
    names: dict[str, None] = {}
    for definition in type_definitions:
        _collect_field_scalars(definition.fields, names)
    return list(names)


def _collect_field_scalars(fields: Iterable[FieldDefinition], names: dict[str, None]) -> None:
    for field in fields:
        if field.scalar_name is not None:
            names[field.scalar_name] = None
        for nested in field.nested_types:
            _collect_field_scalars(nested.fields, names)
        _collect_field_scalars(field.embedded_fields, names)


def _render_types(
    type_definitions: Iterable[TypeDefinition],
    options: RenderOptions,
    *,
    emitted: dict[str, TypeDefinition],
) -> str:
    blocks: list[str] = []
    for definition in type_definitions:
        previous = emitted.get(definition.name)
        if previous is not None:
            if previous != definition:
                raise SchemaRenderError(
                    f"conflicting definitions for type {definition.name}"
                )
            continue
        emitted[definition.name] = definition

        blocks.append(f"type {definition.name} {{\n")
        blocks.extend(_render_field(field, options) for field in definition.fields)
        blocks.append("}\n\n")
        blocks.append(
            _render_types(_auxiliary_types(definition.fields), options, emitted=emitted)
        )
    return "".join(blocks)


def _auxiliary_types(fields: Iterable[FieldDefinition]) -> Iterator[TypeDefinition]:
    for field in fields:
        yield from field.nested_types
        if field.embedded:
            yield from _auxiliary_types(field.embedded_fields)


def _render_field(field: FieldDefinition, options: RenderOptions) -> str:
    tags = parse_struct_tag(field.tag)
    name = _output_field_name(field, tags, options.naming_tag)
    if name == options.effective_ignore_value:
        return ""
    if field.embedded:
        return "".join(_render_field(inner, options) for inner in field.embedded_fields)
    mark = REQUIRED_MARK if _is_required(tags, options.required_tag) else ""
    return f"{FIELD_INDENT}{name}: {field.type_name}{mark}\n"


def _output_field_name(field: FieldDefinition, tags: StructTags, naming_tag: str | None) -> str:
    if naming_tag is None:
        return field.name
    tag = tags.get(naming_tag)
    if tag is None or not tag.name:
        return field.name
    return tag.name


def _is_required(tags: StructTags, required_tag: RequiredTag | None) -> bool:
    if required_tag is None or not required_tag.key or not required_tag.value:
        return False
    tag = tags.get(required_tag.key)
    return tag is not None and tag.name == required_tag.value
