"""Aggregate builder tests."""

from __future__ import annotations

import logging

import pytest
from struct_to_gql.type_catalog import (
    Associative,
    DiscoveredField,
    DiscoveredType,
    NamedAggregate,
    NamedScalar,
    Optional,
    Primitive,
    PrimitiveKind,
    Sequence,
    Unsupported,
)
from struct_to_gql.type_conversion import (
    CircularTypeError,
    TypeMappingError,
    build_type_definition,
    build_type_definitions,
)


def _string() -> Primitive:
    return Primitive(PrimitiveKind.STRING)


def test_fields_keep_declaration_order_and_tags() -> None:
    discovered = DiscoveredType(
        name="Person",
        fields=(
            DiscoveredField("Name", _string(), tag='json:"name"'),
            DiscoveredField("Age", Primitive(PrimitiveKind.INT)),
            DiscoveredField("Nickname", Optional(_string())),
        ),
    )

    definition = build_type_definition(discovered)

    assert definition.name == "Person"
    assert [(field.name, field.type_name, field.tag) for field in definition.fields] == [
        ("Name", "String", 'json:"name"'),
        ("Age", "Int", ""),
        ("Nickname", "String", ""),
    ]


def test_opaque_fields_are_flagged() -> None:
    discovered = DiscoveredType(
        name="Record",
        fields=(
            DiscoveredField("CreatedAt", NamedScalar("Time")),
            DiscoveredField("Counters", Sequence(Primitive(PrimitiveKind.UINT64))),
        ),
    )

    definition = build_type_definition(discovered)

    assert [(field.type_name, field.scalar_name) for field in definition.fields] == [
        ("Time", "Time"),
        ("[BigInt]", "BigInt"),
    ]


def test_map_fields_carry_their_synthesized_type() -> None:
    discovered = DiscoveredType(
        name="Person",
        fields=(DiscoveredField("Tags", Associative(_string(), _string())),),
    )

    (tags,) = build_type_definition(discovered).fields

    assert tags.type_name == "TagsMap"
    assert [definition.name for definition in tags.nested_types] == ["TagsMap"]


def test_embedded_struct_fields_are_resolved_for_flattening() -> None:
    metadata = NamedAggregate(
        "Metadata",
        [
            DiscoveredField("CreatedAt", NamedScalar("Time"), tag='json:"created_at"'),
            DiscoveredField("Labels", Associative(_string(), _string())),
        ],
    )
    discovered = DiscoveredType(
        name="Article",
        fields=(
            DiscoveredField("ID", Primitive(PrimitiveKind.INT)),
            DiscoveredField("Metadata", metadata, embedded=True),
        ),
    )

    embedded = build_type_definition(discovered).fields[1]

    assert embedded.embedded is True
    assert embedded.type_name == "Metadata"
    assert [field.name for field in embedded.embedded_fields] == ["CreatedAt", "Labels"]
    assert embedded.embedded_fields[1].nested_types[0].name == "LabelsMap"


def test_named_struct_fields_are_referenced_not_expanded() -> None:
    user = NamedAggregate("User", [DiscoveredField("ID", Primitive(PrimitiveKind.INT))])
    discovered = DiscoveredType(
        name="Comment",
        fields=(DiscoveredField("Author", Optional(user)),),
    )

    (author,) = build_type_definition(discovered).fields

    assert author.type_name == "User"
    assert author.embedded_fields == ()
    assert author.nested_types == ()


def test_self_referencing_pointer_field_is_allowed() -> None:
    node = NamedAggregate("Node")
    node.fields.append(DiscoveredField("Next", Optional(node)))

    definition = build_type_definition(DiscoveredType("Node", tuple(node.fields)))

    assert definition.fields[0].type_name == "Node"


def test_mutually_embedding_structs_fail_with_circular_type() -> None:
    first = NamedAggregate("A")
    second = NamedAggregate("B")
    first.fields.append(DiscoveredField("B", Optional(second), embedded=True))
    second.fields.append(DiscoveredField("A", Optional(first), embedded=True))

    with pytest.raises(CircularTypeError, match="circular type: A -> B -> A"):
        build_type_definition(DiscoveredType("A", tuple(first.fields)))


def test_unsupported_field_aborts_the_whole_batch() -> None:
    good = DiscoveredType("Good", (DiscoveredField("Name", _string()),))
    bad = DiscoveredType("Bad", (DiscoveredField("Events", Unsupported("chan string")),))

    with pytest.raises(TypeMappingError, match="invalid type: chan string"):
        build_type_definitions([good, bad])


def test_batch_keeps_input_order_and_logs_count(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="struct_to_gql")
    discovered = [
        DiscoveredType("Beta", (DiscoveredField("Name", _string()),)),
        DiscoveredType("Alpha", ()),
    ]

    definitions = build_type_definitions(discovered)

    assert [definition.name for definition in definitions] == ["Beta", "Alpha"]
    assert definitions[1].fields == ()
    assert "Built 2 GraphQL type definitions" in caplog.text
