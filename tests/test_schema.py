"""Tests for the schema model, parser and validation."""

import pytest

from avro_json.exceptions import RecursionLimitExceededException, SchemaParseException
from avro_json.schema import (
    ArraySchema,
    EnumSchema,
    FixedSchema,
    MapSchema,
    Names,
    PrimitiveSchema,
    RecordSchema,
    SchemaKind,
    UnionSchema,
    can_promote,
    match_schemas,
    parse,
    parse_json,
    validate,
)


class TestParsePrimitives:
    """Tests for parsing primitive schemas."""

    @pytest.mark.parametrize(
        "name", ["null", "boolean", "int", "long", "float", "double", "bytes", "string"]
    )
    def test_primitive_name(self, name):
        schema = parse(name)
        assert isinstance(schema, PrimitiveSchema)
        assert schema.type == name
        assert schema.kind == SchemaKind(name)

    def test_primitive_object_form(self):
        assert parse({"type": "long"}).kind == SchemaKind.LONG

    def test_primitives_compare_equal(self):
        assert parse("int") == PrimitiveSchema(SchemaKind.INT)
        assert parse("int") != parse("long")

    def test_primitive_rejects_complex_kind(self):
        with pytest.raises(ValueError):
            PrimitiveSchema(SchemaKind.RECORD)

    def test_unknown_name(self):
        with pytest.raises(SchemaParseException):
            parse("Nope")

    def test_invalid_definition(self):
        with pytest.raises(SchemaParseException):
            parse(42)


class TestParseComplex:
    """Tests for parsing complex schemas."""

    def test_array(self):
        schema = parse({"type": "array", "items": "string"})
        assert isinstance(schema, ArraySchema)
        assert schema.items.kind == SchemaKind.STRING

    def test_array_requires_items(self):
        with pytest.raises(SchemaParseException):
            parse({"type": "array"})

    def test_map(self):
        schema = parse({"type": "map", "values": "double"})
        assert isinstance(schema, MapSchema)
        assert schema.values.kind == SchemaKind.DOUBLE

    def test_map_requires_values(self):
        with pytest.raises(SchemaParseException):
            parse({"type": "map"})

    def test_union(self):
        schema = parse(["null", "string"])
        assert isinstance(schema, UnionSchema)
        assert [s.type for s in schema.schemas] == ["null", "string"]

    def test_union_rejects_duplicates(self):
        with pytest.raises(SchemaParseException):
            parse(["int", "int"])

    def test_union_rejects_nested_union(self):
        with pytest.raises(SchemaParseException):
            parse(["int", ["null", "string"]])

    def test_fixed(self):
        schema = parse({"type": "fixed", "name": "md5", "namespace": "org.example", "size": 16})
        assert isinstance(schema, FixedSchema)
        assert schema.size == 16
        assert schema.name == "md5"
        assert schema.fullname == "org.example.md5"

    def test_fixed_requires_size(self):
        with pytest.raises(SchemaParseException):
            parse({"type": "fixed", "name": "md5"})

    def test_enum(self):
        schema = parse({"type": "enum", "name": "Suit", "symbols": ["SPADES", "HEARTS"]})
        assert isinstance(schema, EnumSchema)
        assert schema.symbols == ("SPADES", "HEARTS")
        assert schema.default is None

    def test_enum_rejects_duplicate_symbols(self):
        with pytest.raises(SchemaParseException):
            parse({"type": "enum", "name": "Suit", "symbols": ["A", "A"]})

    def test_enum_default_must_be_symbol(self):
        with pytest.raises(SchemaParseException):
            parse({"type": "enum", "name": "Suit", "symbols": ["A"], "default": "B"})

    def test_record(self, user_schema):
        assert isinstance(user_schema, RecordSchema)
        assert user_schema.kind == SchemaKind.RECORD
        assert user_schema.fullname == "example.avro.User"
        assert [f.name for f in user_schema.fields] == ["name", "favorite_number"]
        assert user_schema.field("name").type.kind == SchemaKind.STRING
        assert user_schema.field("missing") is None

    def test_record_field_defaults(self, user_schema_v2):
        age = user_schema_v2.field("age")
        nickname = user_schema_v2.field("nickname")
        assert age.has_default is True
        assert age.default == 0
        assert nickname.has_default is False

    def test_null_default_is_declared(self):
        schema = parse({
            "type": "record",
            "name": "R",
            "fields": [{"name": "f", "type": ["null", "int"], "default": None}],
        })
        assert schema.field("f").has_default is True
        assert schema.field("f").default is None

    def test_record_rejects_duplicate_fields(self):
        with pytest.raises(SchemaParseException):
            parse({
                "type": "record",
                "name": "R",
                "fields": [{"name": "a", "type": "int"}, {"name": "a", "type": "long"}],
            })

    def test_error_kind(self):
        schema = parse({"type": "error", "name": "Oops", "fields": []})
        assert schema.kind == SchemaKind.ERROR

    def test_request_kind(self):
        schema = parse({"type": "request", "fields": [{"name": "q", "type": "string"}]})
        assert schema.kind == SchemaKind.REQUEST
        assert schema.to_json() == [{"name": "q", "type": "string"}]

    def test_duplicate_name(self):
        names = Names()
        parse({"type": "fixed", "name": "F", "size": 1}, names)
        with pytest.raises(SchemaParseException):
            parse({"type": "fixed", "name": "F", "size": 2}, names)

    def test_reserved_name(self):
        with pytest.raises(SchemaParseException):
            parse({"type": "fixed", "name": "int", "size": 4})

    def test_named_reference(self):
        schema = parse({
            "type": "record",
            "name": "Pair",
            "namespace": "ns",
            "fields": [
                {"name": "a", "type": {"type": "fixed", "name": "Two", "size": 2}},
                {"name": "b", "type": "Two"},
                {"name": "c", "type": "ns.Two"},
            ],
        })
        a, b, c = (f.type for f in schema.fields)
        assert a is b
        assert a is c
        assert a.fullname == "ns.Two"

    def test_recursive_record_shares_node(self, linked_list_schema):
        next_type = linked_list_schema.field("next").type
        assert next_type.schemas[1] is linked_list_schema

    def test_recursive_record_to_json_uses_reference(self, linked_list_schema):
        definition = linked_list_schema.to_json()
        assert definition["fields"][1]["type"] == ["null", "LongList"]

    def test_parse_json(self):
        schema = parse_json('{"type": "array", "items": "int"}')
        assert schema.kind == SchemaKind.ARRAY

    def test_parse_json_invalid(self):
        with pytest.raises(SchemaParseException) as exc_info:
            parse_json("{not json")
        assert exc_info.value.cause is not None

    def test_to_json_round_trip(self, user_schema_v2):
        definition = user_schema_v2.to_json()
        assert parse(definition).to_json() == definition


class TestValidate:
    """Tests for structural validation of typed values."""

    @pytest.mark.parametrize(
        "definition,datum,expected",
        [
            ("null", None, True),
            ("null", 0, False),
            ("boolean", True, True),
            ("boolean", 1, False),
            ("int", 5, True),
            ("int", True, False),
            ("int", 5.0, False),
            ("int", 2 ** 31, False),
            ("long", 2 ** 31, True),
            ("long", 2 ** 63, False),
            ("float", 1, True),
            ("double", 1.5, True),
            ("double", False, False),
            ("string", "text", True),
            ("string", b"text", False),
            ("bytes", b"\x00", True),
            ("bytes", bytearray(b"\x00"), True),
            ("bytes", "\x00", False),
            ("bytes", 0, False),
        ],
    )
    def test_primitives(self, definition, datum, expected):
        assert validate(parse(definition), datum) is expected

    def test_fixed(self):
        schema = parse({"type": "fixed", "name": "F", "size": 2})
        assert validate(schema, b"ab") is True
        assert validate(schema, b"abc") is False

    def test_enum(self):
        schema = parse({"type": "enum", "name": "E", "symbols": ["A", "B"]})
        assert validate(schema, "A") is True
        assert validate(schema, "C") is False

    def test_array(self):
        schema = parse({"type": "array", "items": "int"})
        assert validate(schema, [1, 2]) is True
        assert validate(schema, [1, "2"]) is False
        assert validate(schema, "12") is False

    def test_map(self):
        schema = parse({"type": "map", "values": "int"})
        assert validate(schema, {"a": 1}) is True
        assert validate(schema, {"a": "1"}) is False
        assert validate(schema, {1: 1}) is False

    def test_union(self):
        schema = parse(["null", "string"])
        assert validate(schema, None) is True
        assert validate(schema, "x") is True
        assert validate(schema, 1) is False

    def test_record(self, user_schema):
        assert validate(user_schema, {"name": "Ada", "favorite_number": 7}) is True
        assert validate(user_schema, {"name": "Ada"}) is True
        assert validate(user_schema, {"favorite_number": 7}) is False
        assert validate(user_schema, ["Ada"]) is False

    def test_recursive_record(self, linked_list_schema):
        datum = {"value": 1, "next": {"value": 2, "next": None}}
        assert validate(linked_list_schema, datum) is True

    def test_text_is_not_fixed(self):
        schema = parse({"type": "fixed", "name": "F", "size": 2})
        assert validate(schema, "ab") is False

    def test_depth_limit(self):
        schema = parse({"type": "array", "items": {"type": "array", "items": "int"}})
        assert validate(schema, [[1]], max_depth=2) is True
        with pytest.raises(RecursionLimitExceededException) as exc_info:
            validate(schema, [[1]], max_depth=1)
        assert exc_info.value.limit == 1

    def test_long_list_hits_default_limit(self, linked_list_schema):
        datum = None
        for value in range(300):
            datum = {"value": value, "next": datum}
        with pytest.raises(RecursionLimitExceededException):
            validate(linked_list_schema, datum)


class TestMatchSchemas:
    """Tests for writer/reader compatibility."""

    @pytest.mark.parametrize(
        "writer,reader,expected",
        [
            ("int", "int", True),
            ("int", "long", True),
            ("int", "float", True),
            ("int", "double", True),
            ("long", "float", True),
            ("long", "int", False),
            ("float", "double", True),
            ("double", "float", False),
            ("string", "bytes", True),
            ("bytes", "string", True),
            ("string", "int", False),
            ("null", "boolean", False),
        ],
    )
    def test_primitives(self, writer, reader, expected):
        assert match_schemas(parse(writer), parse(reader)) is expected

    def test_union_on_either_side(self):
        assert match_schemas(parse(["null", "int"]), parse("string")) is True
        assert match_schemas(parse("string"), parse(["null", "int"])) is True

    def test_named_types_match_by_fullname(self):
        writer = parse({"type": "enum", "name": "a.E", "symbols": ["X"]})
        same = parse({"type": "enum", "name": "a.E", "symbols": ["X", "Y"]})
        other = parse({"type": "enum", "name": "b.E", "symbols": ["X"]})
        assert match_schemas(writer, same) is True
        assert match_schemas(writer, other) is False

    def test_fixed_matches_by_size(self):
        writer = parse({"type": "fixed", "name": "F", "size": 4})
        assert match_schemas(writer, parse({"type": "fixed", "name": "F", "size": 4})) is True
        assert match_schemas(writer, parse({"type": "fixed", "name": "F", "size": 8})) is False

    def test_array_and_map_compare_children(self):
        assert match_schemas(
            parse({"type": "array", "items": "int"}), parse({"type": "array", "items": "int"})
        ) is True
        assert match_schemas(
            parse({"type": "array", "items": "int"}), parse({"type": "array", "items": "long"})
        ) is False
        assert match_schemas(
            parse({"type": "map", "values": "string"}), parse({"type": "map", "values": "string"})
        ) is True

    def test_can_promote(self):
        assert can_promote(SchemaKind.INT, SchemaKind.DOUBLE) is True
        assert can_promote(SchemaKind.DOUBLE, SchemaKind.INT) is False
