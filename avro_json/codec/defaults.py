"""Materialization of schema-declared field defaults."""

from typing import Any

from avro_json.codec import primitive
from avro_json.config import DEFAULT_MAX_DEPTH
from avro_json.exceptions import (
    RecursionLimitExceededException,
    TypeMismatchException,
    UnknownSchemaKindException,
)
from avro_json.schema.model import (
    PRIMITIVE_KINDS,
    RECORD_KINDS,
    Schema,
    SchemaKind,
)


class DefaultMaterializer:
    """Turns a default literal from a schema into a typed value.

    Defaults are read as if they were already decoded data for the
    field's own schema; no writer's schema is involved. A default for a
    union field is read against the union's first branch.

    Args:
        max_depth: Maximum nesting depth before giving up.

    Example:
        >>> materializer = DefaultMaterializer()
        >>> materializer.materialize(parse({"type": "array", "items": "bytes"}), ["\\u00ff"])
        [b'\\xff']
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH):
        self._max_depth = max_depth

    @property
    def max_depth(self) -> int:
        return self._max_depth

    def materialize(self, field_schema: Schema, default_value: Any) -> Any:
        """Build the typed value for a default literal.

        Args:
            field_schema: The schema the default belongs to.
            default_value: The literal as written in the schema.

        Returns:
            The typed value.

        Raises:
            TypeMismatchException: If the literal does not fit the schema.
            UnknownSchemaKindException: If the schema kind is not handled.
            RecursionLimitExceededException: If nesting is too deep.
        """
        try:
            return self._materialize(field_schema, default_value, 0)
        except RecursionError as e:
            raise RecursionLimitExceededException(self._max_depth, cause=e)

    def _materialize(self, schema: Schema, value: Any, depth: int) -> Any:
        if depth > self._max_depth:
            raise RecursionLimitExceededException(self._max_depth)

        kind = schema.kind
        if kind in PRIMITIVE_KINDS or kind == SchemaKind.FIXED:
            return primitive.decode_scalar(schema, value)
        elif kind == SchemaKind.ENUM:
            return value
        elif kind == SchemaKind.ARRAY:
            if not isinstance(value, list):
                raise TypeMismatchException(schema, value)
            return [self._materialize(schema.items, item, depth + 1) for item in value]
        elif kind == SchemaKind.MAP:
            if not isinstance(value, dict):
                raise TypeMismatchException(schema, value)
            return {
                key: self._materialize(schema.values, item, depth + 1)
                for key, item in value.items()
            }
        elif kind == SchemaKind.UNION:
            if not schema.schemas:
                raise TypeMismatchException(schema, value)
            return self._materialize(schema.schemas[0], value, depth + 1)
        elif kind in RECORD_KINDS:
            return self._materialize_record(schema, value, depth)
        raise UnknownSchemaKindException(kind)

    def _materialize_record(self, schema: Schema, value: Any, depth: int) -> dict:
        if not isinstance(value, dict):
            raise TypeMismatchException(schema, value)
        record = {}
        for field in schema.fields:
            if field.name in value:
                field_value = value[field.name]
            elif field.has_default:
                field_value = field.default
            else:
                # neither the literal nor the nested field supplies a value
                raise TypeMismatchException(schema, value)
            record[field.name] = self._materialize(field.type, field_value, depth + 1)
        return record
