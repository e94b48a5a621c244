"""Avro JSON codec exceptions.

This module defines the exception hierarchy for the Avro JSON codec.
All exceptions inherit from :class:`AvroJsonException`.

Example:
    Handling codec exceptions::

        from avro_json.exceptions import (
            AvroJsonException,
            SchemaMismatchException,
            TypeMismatchException,
        )

        try:
            record = decode(writers_schema, readers_schema, data)
        except TypeMismatchException as e:
            print(f"Malformed data: {e}")
        except SchemaMismatchException:
            print("Writer and reader schemas are not compatible")
        except AvroJsonException as e:
            print(f"Codec error: {e}")
"""

from typing import Any


class AvroJsonException(Exception):
    """Base class for all Avro JSON codec exceptions.

    Args:
        message: The error message describing the exception.
        cause: The underlying exception that caused this error, if any.

    Attributes:
        cause: The underlying cause of this exception, if any.
    """

    def __init__(self, message: str = "", cause: Exception = None):
        super().__init__(message)
        self.cause = cause


def _describe(schema: Any) -> str:
    if isinstance(schema, str):
        return schema
    to_json = getattr(schema, "to_json", None)
    if to_json is not None:
        return repr(to_json())
    return repr(schema)


class TypeMismatchException(AvroJsonException):
    """Raised when a value does not have the shape the schema expects.

    Covers both directions: a generic JSON value that does not fit the
    writer's schema during decoding, and a typed value that does not
    validate against the schema during encoding.

    Args:
        expected: The schema node (or a short type description) expected.
        datum: The offending value.

    Example:
        >>> try:
        ...     decode(parse("boolean"), None, "yes")
        ... except TypeMismatchException as e:
        ...     print(e.datum)
        yes
    """

    def __init__(self, expected: Any, datum: Any):
        super().__init__(
            f"The datum {datum!r} is not an example of the schema {_describe(expected)}"
        )
        self._expected = expected
        self._datum = datum

    @property
    def expected(self) -> Any:
        """Get the schema or type description that was expected."""
        return self._expected

    @property
    def datum(self) -> Any:
        """Get the value that failed to match."""
        return self._datum


class SchemaMismatchException(AvroJsonException):
    """Raised when writer and reader schemas cannot be reconciled.

    Also raised when no union branch can be selected for a value during
    decoding.
    """

    def __init__(self, writers_schema: Any, readers_schema: Any, message: str = None):
        if message is None:
            message = (
                f"Schemas do not match: writer {_describe(writers_schema)}, "
                f"reader {_describe(readers_schema)}"
            )
        super().__init__(message)
        self._writers_schema = writers_schema
        self._readers_schema = readers_schema

    @property
    def writers_schema(self) -> Any:
        """Get the writer's schema at the point of failure."""
        return self._writers_schema

    @property
    def readers_schema(self) -> Any:
        """Get the reader's schema at the point of failure."""
        return self._readers_schema


class UnknownSchemaKindException(AvroJsonException):
    """Raised when a schema node carries a kind the codec does not handle.

    This always indicates a programming or configuration error.
    """

    def __init__(self, kind: Any):
        super().__init__(f"Unknown schema kind: {kind}")
        self.kind = kind


class EncodingRangeException(AvroJsonException):
    """Raised when byte transcoding is impossible.

    Bytes travel through JSON as strings with one code point per byte, so
    code points above 255 cannot be represented. Fixed values whose
    length differs from the declared size also raise this exception.
    """
    pass


class RecursionLimitExceededException(AvroJsonException):
    """Raised when a schema/value walk nests deeper than the configured limit."""

    def __init__(self, limit: int, cause: Exception = None):
        super().__init__(f"Maximum nesting depth of {limit} exceeded", cause)
        self.limit = limit


class SchemaParseException(AvroJsonException):
    """Raised when a schema definition cannot be turned into schema nodes."""
    pass


class ConfigurationException(AvroJsonException):
    """Raised when there is a configuration error.

    Example:
        - Non-positive recursion limit
        - Unknown empty input policy
    """
    pass


class AvroJsonSerializationException(AvroJsonException):
    """Raised when JSON text cannot be read or written.

    Example:
        - Malformed JSON document
        - Empty input under the strict empty input policy
        - Values the JSON library refuses to serialize
    """
    pass
