"""Go declaration parser tests."""

from __future__ import annotations

import pytest
from struct_to_gql.source_discovery import SourceSyntaxError, parse_go_source
from struct_to_gql.source_discovery.go_declarations import (
    ArrayExpr,
    InterfaceExpr,
    MapExpr,
    OpaqueExpr,
    PointerExpr,
    SliceExpr,
    StructExpr,
    TypeRef,
)

MODELS_SOURCE = """\
// Package models holds persisted entities.
package models

import (
	"time"
	db "example.com/storage/v2"
	_ "embed"
	"gopkg.in/yaml.v3"
)

const MaxTags = 10

var registry = map[string]int{"a": 1}

type Person struct {
	Name, Nick string `json:"name" validate:"required"`
	*Base
	time.Time
	Tags  map[string][]int
	Grid  [3][4]float64
	Owner *db.User "legacy"
}

func (p *Person) Greet() string {
	if p.Name == "" {
		return "hi"
	}
	return "hello " + p.Name
}
"""


def test_reads_package_and_imports() -> None:
    parsed = parse_go_source(MODELS_SOURCE, "models.go")

    assert parsed.filename == "models.go"
    assert parsed.package == "models"
    assert parsed.imports == {
        "time": "time",
        "db": "example.com/storage/v2",
        "yaml": "gopkg.in/yaml.v3",
    }
    assert parsed.dot_import is False


def test_default_import_names_drop_version_suffixes() -> None:
    parsed = parse_go_source('package p\nimport "example.com/storage/v2"\n')

    assert parsed.imports == {"storage": "example.com/storage/v2"}


def test_dot_import_is_recorded() -> None:
    parsed = parse_go_source('package p\nimport . "example.com/shared"\n')

    assert parsed.dot_import is True
    assert parsed.imports == {}


def test_skips_func_var_and_const_declarations() -> None:
    parsed = parse_go_source(MODELS_SOURCE)

    assert [spec.name for spec in parsed.type_specs] == ["Person"]


def test_struct_fields_keep_order_tags_and_embedding() -> None:
    (person,) = parse_go_source(MODELS_SOURCE).type_specs

    assert isinstance(person.expr, StructExpr)
    fields = person.expr.fields
    assert [(field.name, field.tag, field.embedded) for field in fields] == [
        ("Name", 'json:"name" validate:"required"', False),
        ("Nick", 'json:"name" validate:"required"', False),
        ("Base", "", True),
        ("Time", "", True),
        ("Tags", "", False),
        ("Grid", "", False),
        ("Owner", "legacy", False),
    ]


def test_struct_field_type_shapes() -> None:
    (person,) = parse_go_source(MODELS_SOURCE).type_specs
    assert isinstance(person.expr, StructExpr)
    fields = {field.name: field.expr for field in person.expr.fields}

    base = fields["Base"]
    assert isinstance(base, PointerExpr)
    assert isinstance(base.element, TypeRef)
    assert base.element.name == "Base"

    embedded_time = fields["Time"]
    assert isinstance(embedded_time, TypeRef)
    assert (embedded_time.package, embedded_time.name) == ("time", "Time")

    tags = fields["Tags"]
    assert isinstance(tags, MapExpr)
    assert isinstance(tags.value, SliceExpr)

    grid = fields["Grid"]
    assert isinstance(grid, ArrayExpr)
    assert isinstance(grid.element, ArrayExpr)

    owner = fields["Owner"]
    assert isinstance(owner, PointerExpr)
    assert isinstance(owner.element, TypeRef)
    assert (owner.element.package, owner.element.name) == ("db", "User")


def test_grouped_type_declarations_aliases_and_generics() -> None:
    source = """\
package p

type (
	ID = int64
	Status string
	Pair[K comparable, V any] struct {
		Key   K
		Value V
	}
	Buffer [4]byte
)
"""

    specs = parse_go_source(source).type_specs

    assert [(spec.name, spec.alias, spec.type_params) for spec in specs] == [
        ("ID", True, ()),
        ("Status", False, ()),
        ("Pair", False, ("K", "V")),
        ("Buffer", False, ()),
    ]
    assert isinstance(specs[3].expr, ArrayExpr)


def test_generic_instantiation_is_a_plain_reference() -> None:
    source = "package p\ntype Page struct { Items List[map[string]int, *Item] }\n"

    (page,) = parse_go_source(source).type_specs

    assert isinstance(page.expr, StructExpr)
    items = page.expr.fields[0].expr
    assert isinstance(items, TypeRef)
    assert items.name == "List"


def test_channel_function_and_interface_types_keep_source_text() -> None:
    source = """\
package p

type Worker struct {
	Jobs    <-chan   int
	Done    chan<- bool
	Handler func(ctx Context) (int, error)
	Any     interface{}
	Runner  interface {
		Run() error
	}
}
"""

    (worker,) = parse_go_source(source).type_specs

    assert isinstance(worker.expr, StructExpr)
    exprs = [field.expr for field in worker.expr.fields]
    assert exprs[:3] == [
        OpaqueExpr("<-chan int"),
        OpaqueExpr("chan<- bool"),
        OpaqueExpr("func(ctx Context) (int, error)"),
    ]
    assert exprs[3] == InterfaceExpr(empty=True, text="interface{}")
    assert exprs[4] == InterfaceExpr(empty=False, text="interface { Run() error }")


def test_anonymous_struct_fields_are_parsed() -> None:
    source = 'package p\ntype Outer struct { Inner struct { X int `json:"x"` } }\n'

    (outer,) = parse_go_source(source).type_specs

    assert isinstance(outer.expr, StructExpr)
    inner = outer.expr.fields[0].expr
    assert isinstance(inner, StructExpr)
    assert inner.fields[0].tag == 'json:"x"'
    assert inner.text == 'struct { X int `json:"x"` }'


def test_interpreted_tag_literals_decode_go_escapes() -> None:
    source = r'''package p
type A struct { N int "json:\"n\x41\101\u00e9\"" }
'''

    (spec,) = parse_go_source(source).type_specs

    assert isinstance(spec.expr, StructExpr)
    assert spec.expr.fields[0].tag == 'json:"nAA\u00e9"'


@pytest.mark.parametrize(
    ("source", "message"),
    [
        ("type A struct{}\n", "x.go:1: expected 'package', found 'type'"),
        ("package p\nx := 1\n", "x.go:2: non-declaration statement outside function body"),
        ("package p\ntype A struct {\n\t1 int\n}\n", "x.go:3: expected field name"),
        ("package p\ntype A\n", "x.go:2: expected type, found newline"),
        ("package p\nfunc f() { (}\n", "x.go:2: expected '\\)'"),
        ("package p\ntype A map[string int\n", "x.go:2: expected '\\]'"),
        ('package p\ntype A struct { N int "\\q" }\n', "x.go:2: invalid string literal"),
    ],
)
def test_syntax_errors_report_file_and_line(source: str, message: str) -> None:
    with pytest.raises(SourceSyntaxError, match=message):
        parse_go_source(source, "x.go")
