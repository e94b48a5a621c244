"""Schema model: node types, parsing, validation and compatibility."""

from avro_json.schema.model import (
    SchemaKind,
    Schema,
    PrimitiveSchema,
    NamedSchema,
    FixedSchema,
    EnumSchema,
    ArraySchema,
    MapSchema,
    UnionSchema,
    RecordSchema,
    Field,
    PRIMITIVE_KINDS,
    NAMED_KINDS,
    RECORD_KINDS,
    SCALAR_KINDS,
)
from avro_json.schema.parser import Names, parse, parse_json
from avro_json.schema.validation import validate, match_schemas, can_promote

__all__ = [
    "SchemaKind",
    "Schema",
    "PrimitiveSchema",
    "NamedSchema",
    "FixedSchema",
    "EnumSchema",
    "ArraySchema",
    "MapSchema",
    "UnionSchema",
    "RecordSchema",
    "Field",
    "PRIMITIVE_KINDS",
    "NAMED_KINDS",
    "RECORD_KINDS",
    "SCALAR_KINDS",
    "Names",
    "parse",
    "parse_json",
    "validate",
    "match_schemas",
    "can_promote",
]
