"""Structural validation of typed values and writer/reader compatibility."""

from typing import Any, Mapping

from avro_json.config import DEFAULT_MAX_DEPTH
from avro_json.exceptions import RecursionLimitExceededException
from avro_json.schema.model import (
    NAMED_KINDS,
    PRIMITIVE_KINDS,
    RECORD_KINDS,
    Schema,
    SchemaKind,
)


INT_MIN_VALUE = -(1 << 31)
INT_MAX_VALUE = (1 << 31) - 1
LONG_MIN_VALUE = -(1 << 63)
LONG_MAX_VALUE = (1 << 63) - 1

BYTE_TYPES = (bytes, bytearray)

_PROMOTIONS = {
    SchemaKind.INT: frozenset({SchemaKind.LONG, SchemaKind.FLOAT, SchemaKind.DOUBLE}),
    SchemaKind.LONG: frozenset({SchemaKind.FLOAT, SchemaKind.DOUBLE}),
    SchemaKind.FLOAT: frozenset({SchemaKind.DOUBLE}),
    SchemaKind.STRING: frozenset({SchemaKind.BYTES}),
    SchemaKind.BYTES: frozenset({SchemaKind.STRING}),
}


def is_integer(datum: Any) -> bool:
    """Check for an integer that is not a bool."""
    return isinstance(datum, int) and not isinstance(datum, bool)


def is_number(datum: Any) -> bool:
    """Check for an int or float that is not a bool."""
    return isinstance(datum, (int, float)) and not isinstance(datum, bool)


def validate(schema: Schema, datum: Any, max_depth: int = DEFAULT_MAX_DEPTH) -> bool:
    """Check that a typed value fits a schema.

    Bytes and fixed accept ``bytes`` or ``bytearray`` only; a ``str`` is
    text and validates as a string. Record values are mappings; a
    missing field is validated as ``None``.

    Args:
        schema: The schema node.
        datum: The typed value.
        max_depth: Maximum nesting depth of the walk.

    Returns:
        True if the value fits the schema.

    Raises:
        RecursionLimitExceededException: If the value nests deeper than
            ``max_depth``.
    """
    return _validate(schema, datum, 0, max_depth)


def _validate(schema: Schema, datum: Any, depth: int, max_depth: int) -> bool:
    if depth > max_depth:
        raise RecursionLimitExceededException(max_depth)

    kind = schema.kind
    if kind == SchemaKind.NULL:
        return datum is None
    elif kind == SchemaKind.BOOLEAN:
        return isinstance(datum, bool)
    elif kind == SchemaKind.INT:
        return is_integer(datum) and INT_MIN_VALUE <= datum <= INT_MAX_VALUE
    elif kind == SchemaKind.LONG:
        return is_integer(datum) and LONG_MIN_VALUE <= datum <= LONG_MAX_VALUE
    elif kind in (SchemaKind.FLOAT, SchemaKind.DOUBLE):
        return is_number(datum)
    elif kind == SchemaKind.STRING:
        return isinstance(datum, str)
    elif kind == SchemaKind.BYTES:
        return isinstance(datum, BYTE_TYPES)
    elif kind == SchemaKind.FIXED:
        return isinstance(datum, BYTE_TYPES) and len(datum) == schema.size
    elif kind == SchemaKind.ENUM:
        return datum in schema.symbols

    # explicit loops: one stack frame per nesting level
    depth += 1
    if kind == SchemaKind.ARRAY:
        if not isinstance(datum, (list, tuple)):
            return False
        for item in datum:
            if not _validate(schema.items, item, depth, max_depth):
                return False
        return True
    elif kind == SchemaKind.MAP:
        if not isinstance(datum, Mapping):
            return False
        for key, value in datum.items():
            if not isinstance(key, str) or not _validate(schema.values, value, depth, max_depth):
                return False
        return True
    elif kind == SchemaKind.UNION:
        for branch in schema.schemas:
            if _validate(branch, datum, depth, max_depth):
                return True
        return False
    elif kind in RECORD_KINDS:
        if not isinstance(datum, Mapping):
            return False
        for field in schema.fields:
            if not _validate(field.type, datum.get(field.name), depth, max_depth):
                return False
        return True
    return False


def match_schemas(writers_schema: Schema, readers_schema: Schema) -> bool:
    """Check whether data written with one schema can be read with another.

    The check is shallow: named types match by full name, arrays and maps
    by the kind of their items or values. A union on either side always
    matches here; branch selection happens while decoding.

    Args:
        writers_schema: The schema the data was written with.
        readers_schema: The schema the data is read as.

    Returns:
        True if the schemas are compatible at this level.
    """
    w_kind = writers_schema.kind
    r_kind = readers_schema.kind

    if w_kind == SchemaKind.UNION or r_kind == SchemaKind.UNION:
        return True

    if w_kind == r_kind:
        if r_kind in PRIMITIVE_KINDS or r_kind == SchemaKind.REQUEST:
            return True
        if r_kind == SchemaKind.FIXED:
            return (
                writers_schema.fullname == readers_schema.fullname
                and writers_schema.size == readers_schema.size
            )
        if r_kind in NAMED_KINDS:
            return writers_schema.fullname == readers_schema.fullname
        if r_kind == SchemaKind.ARRAY:
            return writers_schema.items.kind == readers_schema.items.kind
        if r_kind == SchemaKind.MAP:
            return writers_schema.values.kind == readers_schema.values.kind
        return False

    return r_kind in _PROMOTIONS.get(w_kind, ())


def can_promote(writer_kind: SchemaKind, reader_kind: SchemaKind) -> bool:
    """Check whether a scalar of one kind may be read as another."""
    return reader_kind in _PROMOTIONS.get(writer_kind, ())
