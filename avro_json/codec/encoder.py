"""Schema-driven encoding of typed values into JSON values."""

from typing import Any, Mapping

from avro_json.codec import primitive
from avro_json.codec.resolver import branch_discriminant
from avro_json.config import DEFAULT_MAX_DEPTH
from avro_json.exceptions import (
    RecursionLimitExceededException,
    TypeMismatchException,
    UnknownSchemaKindException,
)
from avro_json.schema.model import (
    RECORD_KINDS,
    SCALAR_KINDS,
    Schema,
    SchemaKind,
)
from avro_json.schema.validation import validate


class RecursiveEncoder:
    """Encodes typed values to JSON values according to a schema.

    Union values are written against the first branch they validate
    against, wrapped as ``{"<branch>": value}``; a value matching the
    null branch is written as bare ``null``. Record fields are written
    in declaration order and keys not declared in the schema are
    ignored.

    Args:
        max_depth: Maximum nesting depth before giving up.

    Example:
        >>> RecursiveEncoder().encode(parse(["int", "long"]), 5)
        {'int': 5}
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH):
        self._max_depth = max_depth

    @property
    def max_depth(self) -> int:
        return self._max_depth

    def encode(self, schema: Schema, datum: Any) -> Any:
        """Encode a typed value.

        Args:
            schema: The schema to write the value with.
            datum: The typed value.

        Returns:
            The JSON value.

        Raises:
            TypeMismatchException: If the value does not validate against
                the schema, or against any branch of a union.
            UnknownSchemaKindException: If a schema kind is not handled.
            RecursionLimitExceededException: If nesting is too deep.
        """
        try:
            return self._write_data(schema, datum, 0)
        except RecursionError as e:
            # max_depth set beyond what the interpreter stack can hold
            raise RecursionLimitExceededException(self._max_depth, cause=e)

    def _write_data(self, schema: Schema, datum: Any, depth: int) -> Any:
        if depth > self._max_depth:
            raise RecursionLimitExceededException(self._max_depth)

        # each level checks only its own shape; children are checked as they are written
        kind = schema.kind
        if kind == SchemaKind.UNION:
            return self._write_union(schema, datum, depth)
        elif kind in SCALAR_KINDS:
            if not validate(schema, datum):
                raise TypeMismatchException(schema, datum)
            return primitive.encode_scalar(schema, datum)
        elif kind == SchemaKind.ARRAY:
            if not isinstance(datum, (list, tuple)):
                raise TypeMismatchException(schema, datum)
            return [self._write_data(schema.items, item, depth + 1) for item in datum]
        elif kind == SchemaKind.MAP:
            if not isinstance(datum, Mapping) or not all(isinstance(k, str) for k in datum):
                raise TypeMismatchException(schema, datum)
            return {
                key: self._write_data(schema.values, value, depth + 1)
                for key, value in datum.items()
            }
        elif kind in RECORD_KINDS:
            if not isinstance(datum, Mapping):
                raise TypeMismatchException(schema, datum)
            return self._write_record(schema, datum, depth)
        raise UnknownSchemaKindException(kind)

    def _write_union(self, schema: Schema, datum: Any, depth: int) -> Any:
        branch = self._select_branch(schema, datum, depth)
        encoded = self._write_data(branch, datum, depth + 1)
        if branch.kind == SchemaKind.NULL:
            return encoded
        return {branch_discriminant(branch): encoded}

    def _select_branch(self, schema: Schema, datum: Any, depth: int) -> Schema:
        # the branch is written at depth + 1, so validation may go no deeper than what is left
        remaining = self._max_depth - depth - 1
        try:
            for branch in schema.schemas:
                if validate(branch, datum, remaining):
                    return branch
        except RecursionLimitExceededException as e:
            raise RecursionLimitExceededException(self._max_depth, cause=e)
        raise TypeMismatchException(schema, datum)

    def _write_record(self, schema: Schema, datum: Mapping[str, Any], depth: int) -> dict:
        record = {}
        for field in schema.fields:
            record[field.name] = self._write_data(field.type, datum.get(field.name), depth + 1)
        return record


def encode(schema: Schema, datum: Any, max_depth: int = DEFAULT_MAX_DEPTH) -> Any:
    """Encode a typed value with a schema.

    See :meth:`RecursiveEncoder.encode`.
    """
    return RecursiveEncoder(max_depth).encode(schema, datum)
