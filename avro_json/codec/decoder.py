"""Schema-driven decoding of JSON values into typed values.

The decoder walks the writer's schema, the reader's schema and a JSON
value together. Where the two schemas differ it applies schema
resolution: a non-union writer is read as the first compatible branch
of a reader union, record fields only the writer knows are dropped, and
record fields only the reader knows are filled from their defaults.

Example:
    >>> writer = parse({"type": "record", "name": "User",
    ...                 "fields": [{"name": "name", "type": "string"}]})
    >>> reader = parse({"type": "record", "name": "User",
    ...                 "fields": [{"name": "name", "type": "string"},
    ...                            {"name": "age", "type": "int", "default": 0}]})
    >>> decode(writer, reader, {"name": "Ada"})
    {'name': 'Ada', 'age': 0}
"""

from typing import Any, Optional

from avro_json.codec import primitive
from avro_json.codec.defaults import DefaultMaterializer
from avro_json.codec.resolver import SchemaResolver
from avro_json.config import DEFAULT_MAX_DEPTH
from avro_json.exceptions import (
    RecursionLimitExceededException,
    TypeMismatchException,
    UnknownSchemaKindException,
)
from avro_json.logging import get_logger
from avro_json.schema.model import (
    RECORD_KINDS,
    SCALAR_KINDS,
    Schema,
    SchemaKind,
)
from avro_json.schema.validation import validate


_logger = get_logger("decoder")


class RecursiveDecoder:
    """Decodes JSON values against a writer's and a reader's schema.

    Instances hold no per-call state and may be shared between threads.

    Args:
        resolver: Schema resolver; a default one is created if omitted.
        materializer: Default materializer; a default one is created if
            omitted.
        max_depth: Maximum nesting depth before giving up.
    """

    def __init__(
        self,
        resolver: Optional[SchemaResolver] = None,
        materializer: Optional[DefaultMaterializer] = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        self._resolver = resolver or SchemaResolver()
        self._materializer = materializer or DefaultMaterializer(max_depth)
        self._max_depth = max_depth

    @property
    def resolver(self) -> SchemaResolver:
        return self._resolver

    @property
    def max_depth(self) -> int:
        return self._max_depth

    def decode(self, writers_schema: Schema, readers_schema: Optional[Schema], data: Any) -> Any:
        """Decode a JSON value.

        Args:
            writers_schema: The schema the data was written with.
            readers_schema: The schema to read the data as. Defaults to
                the writer's schema.
            data: The JSON value (None, bool, int, float, str, list, dict).

        Returns:
            The typed value.

        Raises:
            TypeMismatchException: If the data does not fit the writer's schema.
            SchemaMismatchException: If the schemas cannot be reconciled.
            EncodingRangeException: If bytes cannot be transcoded.
            UnknownSchemaKindException: If a schema kind is not handled.
            RecursionLimitExceededException: If nesting is too deep.
        """
        if readers_schema is None:
            readers_schema = writers_schema
        try:
            return self._read_data(writers_schema, readers_schema, data, 0)
        except RecursionError as e:
            # max_depth set beyond what the interpreter stack can hold
            raise RecursionLimitExceededException(self._max_depth, cause=e)

    def _read_data(self, writers_schema: Schema, readers_schema: Schema, data: Any, depth: int) -> Any:
        if depth > self._max_depth:
            raise RecursionLimitExceededException(self._max_depth)

        self._resolver.ensure_compatible(writers_schema, readers_schema)

        if writers_schema.kind != SchemaKind.UNION and readers_schema.kind == SchemaKind.UNION:
            # the chosen branch is compatible and never itself a union
            readers_schema = self._resolver.resolve_reader_for_union(writers_schema, readers_schema)

        kind = writers_schema.kind
        if kind in SCALAR_KINDS:
            return self._read_scalar(writers_schema, readers_schema, data)
        elif kind == SchemaKind.ARRAY:
            return self._read_array(writers_schema, readers_schema, data, depth)
        elif kind == SchemaKind.MAP:
            return self._read_map(writers_schema, readers_schema, data, depth)
        elif kind == SchemaKind.UNION:
            return self._read_union(writers_schema, readers_schema, data, depth)
        elif kind in RECORD_KINDS:
            return self._read_record(writers_schema, readers_schema, data, depth)
        raise UnknownSchemaKindException(kind)

    def _read_scalar(self, writers_schema: Schema, readers_schema: Schema, data: Any) -> Any:
        kind = writers_schema.kind
        # the primitive decoders check the JSON value's type themselves
        if kind == SchemaKind.ENUM and not validate(writers_schema, data):
            raise TypeMismatchException(writers_schema, data)
        value = primitive.decode_scalar(writers_schema, data)
        return primitive.promote(value, kind, readers_schema.kind)

    def _read_array(self, writers_schema: Schema, readers_schema: Schema, data: Any, depth: int) -> list:
        if data is None:
            return []
        if not isinstance(data, list):
            raise TypeMismatchException(writers_schema, data)
        return [
            self._read_data(writers_schema.items, readers_schema.items, item, depth + 1)
            for item in data
        ]

    def _read_map(self, writers_schema: Schema, readers_schema: Schema, data: Any, depth: int) -> dict:
        if not isinstance(data, dict):
            raise TypeMismatchException(writers_schema, data)
        return {
            key: self._read_data(writers_schema.values, readers_schema.values, value, depth + 1)
            for key, value in data.items()
        }

    def _read_union(self, writers_schema: Schema, readers_schema: Schema, data: Any, depth: int) -> Any:
        if data is None:
            discriminant, value = None, None
        elif isinstance(data, dict) and len(data) == 1:
            discriminant, value = next(iter(data.items()))
        else:
            raise TypeMismatchException(writers_schema, data)

        branch = self._resolver.select_writer_branch(writers_schema, discriminant)
        # the reader union itself is passed on so it can be resolved against the branch
        return self._read_data(branch, readers_schema, value, depth + 1)

    def _read_record(self, writers_schema: Schema, readers_schema: Schema, data: Any, depth: int) -> dict:
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise TypeMismatchException(writers_schema, data)

        readers_fields = readers_schema.fields_dict
        record = {}
        for field in writers_schema.fields:
            readers_field = readers_fields.get(field.name)
            if readers_field is None:
                _logger.debug(
                    "Dropping field %r of %s absent from reader's schema",
                    field.name,
                    writers_schema.fullname,
                )
                continue
            record[field.name] = self._read_data(
                field.type, readers_field.type, data.get(field.name), depth + 1
            )

        writers_fields = writers_schema.fields_dict
        for field in readers_schema.fields:
            if field.name in writers_fields or not field.has_default:
                continue
            _logger.debug(
                "Filling field %r of %s from its default", field.name, readers_schema.fullname
            )
            record[field.name] = self._materializer.materialize(field.type, field.default)

        return record


def decode(
    writers_schema: Schema,
    readers_schema: Optional[Schema],
    data: Any,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Any:
    """Decode a JSON value with a writer's and an optional reader's schema.

    See :meth:`RecursiveDecoder.decode`.
    """
    return RecursiveDecoder(max_depth=max_depth).decode(writers_schema, readers_schema, data)
