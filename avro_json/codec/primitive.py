"""Scalar conversion between JSON values and typed values.

Each kind has a ``decode_*`` function (JSON value to typed value) and an
``encode_*`` function (typed value to JSON value). Bytes travel through
JSON as strings in which each character is one byte (code points
0-255), the same mapping as Latin-1.

Example:
    >>> encode_bytes(b"\\x00\\xffA")
    '\\x00ÿA'
    >>> decode_bytes('\\x00ÿA')
    b'\\x00\\xffA'
"""

import math
from typing import Any, Callable, Dict, Union

from avro_json.exceptions import EncodingRangeException, TypeMismatchException
from avro_json.schema.model import Schema, SchemaKind
from avro_json.schema.validation import (
    BYTE_TYPES,
    INT_MAX_VALUE,
    INT_MIN_VALUE,
    LONG_MAX_VALUE,
    LONG_MIN_VALUE,
    can_promote,
    is_integer,
    is_number,
)


BYTE_TRANSPORT_ENCODING = "latin-1"

ByteLike = Union[bytes, bytearray]


def decode_null(datum: Any) -> None:
    if datum is not None:
        raise TypeMismatchException("null", datum)
    return None


def decode_boolean(datum: Any) -> bool:
    if not isinstance(datum, bool):
        raise TypeMismatchException("boolean", datum)
    return datum


def _decode_integer(datum: Any, type_name: str, low: int, high: int) -> int:
    if is_integer(datum):
        value = datum
    elif isinstance(datum, float) and math.isfinite(datum) and datum.is_integer():
        value = int(datum)
    else:
        raise TypeMismatchException(type_name, datum)
    if not low <= value <= high:
        raise TypeMismatchException(type_name, datum)
    return value


def decode_int(datum: Any) -> int:
    """Decode a 32-bit integer; integral floats such as ``5.0`` are accepted."""
    return _decode_integer(datum, "int", INT_MIN_VALUE, INT_MAX_VALUE)


def decode_long(datum: Any) -> int:
    """Decode a 64-bit integer; integral floats such as ``5.0`` are accepted."""
    return _decode_integer(datum, "long", LONG_MIN_VALUE, LONG_MAX_VALUE)


def decode_float(datum: Any) -> float:
    if not is_number(datum):
        raise TypeMismatchException("float", datum)
    return float(datum)


def decode_double(datum: Any) -> float:
    if not is_number(datum):
        raise TypeMismatchException("double", datum)
    return float(datum)


def decode_bytes(datum: Any) -> bytes:
    """Transcode a JSON string back to raw bytes.

    Raises:
        TypeMismatchException: If the value is not a string.
        EncodingRangeException: If a character is above U+00FF.
    """
    if not isinstance(datum, str):
        raise TypeMismatchException("bytes", datum)
    try:
        return datum.encode(BYTE_TRANSPORT_ENCODING)
    except UnicodeEncodeError as e:
        raise EncodingRangeException(
            f"Character {datum[e.start]!r} at position {e.start} is outside the byte range",
            cause=e,
        )


def decode_fixed(datum: Any, size: int) -> bytes:
    """Transcode a JSON string back to exactly ``size`` raw bytes.

    Raises:
        TypeMismatchException: If the value is not a string.
        EncodingRangeException: If a character is above U+00FF or the
            length differs from ``size``.
    """
    if not isinstance(datum, str):
        raise TypeMismatchException(f"fixed of size {size}", datum)
    value = decode_bytes(datum)
    if len(value) != size:
        raise EncodingRangeException(
            f"Fixed value has {len(value)} bytes, expected {size}"
        )
    return value


def decode_string(datum: Any) -> str:
    if not isinstance(datum, str):
        raise TypeMismatchException("string", datum)
    return datum


def decode_enum(datum: Any) -> Any:
    """Pass an enum symbol through; symbol validity is checked by validation."""
    return datum


def encode_null(datum: Any) -> None:
    return None


def encode_boolean(datum: bool) -> bool:
    return datum


def encode_int(datum: int) -> int:
    return int(datum)


def encode_long(datum: int) -> int:
    return int(datum)


def encode_float(datum: float) -> float:
    return float(datum)


def encode_double(datum: float) -> float:
    return float(datum)


def encode_bytes(datum: ByteLike) -> str:
    """Transcode raw bytes to a JSON string, one character per byte.

    Raises:
        TypeMismatchException: If the value is not ``bytes`` or ``bytearray``.
    """
    if not isinstance(datum, BYTE_TYPES):
        raise TypeMismatchException("bytes", datum)
    return bytes(datum).decode(BYTE_TRANSPORT_ENCODING)


def encode_fixed(datum: ByteLike, size: int = None) -> str:
    if not isinstance(datum, BYTE_TYPES):
        raise TypeMismatchException(f"fixed of size {size}", datum)
    if size is not None and len(datum) != size:
        raise EncodingRangeException(
            f"Fixed value has {len(datum)} bytes, expected {size}"
        )
    return encode_bytes(datum)


def encode_string(datum: str) -> str:
    return datum


def encode_enum(datum: Any) -> str:
    return str(datum)


_DECODERS: Dict[SchemaKind, Callable[[Any], Any]] = {
    SchemaKind.NULL: decode_null,
    SchemaKind.BOOLEAN: decode_boolean,
    SchemaKind.INT: decode_int,
    SchemaKind.LONG: decode_long,
    SchemaKind.FLOAT: decode_float,
    SchemaKind.DOUBLE: decode_double,
    SchemaKind.BYTES: decode_bytes,
    SchemaKind.STRING: decode_string,
    SchemaKind.ENUM: decode_enum,
}

_ENCODERS: Dict[SchemaKind, Callable[[Any], Any]] = {
    SchemaKind.NULL: encode_null,
    SchemaKind.BOOLEAN: encode_boolean,
    SchemaKind.INT: encode_int,
    SchemaKind.LONG: encode_long,
    SchemaKind.FLOAT: encode_float,
    SchemaKind.DOUBLE: encode_double,
    SchemaKind.BYTES: encode_bytes,
    SchemaKind.STRING: encode_string,
    SchemaKind.ENUM: encode_enum,
}


def decode_scalar(schema: Schema, datum: Any) -> Any:
    """Decode a JSON value for any scalar schema kind."""
    if schema.kind == SchemaKind.FIXED:
        return decode_fixed(datum, schema.size)
    return _DECODERS[schema.kind](datum)


def encode_scalar(schema: Schema, datum: Any) -> Any:
    """Encode a typed value for any scalar schema kind."""
    if schema.kind == SchemaKind.FIXED:
        return encode_fixed(datum, schema.size)
    return _ENCODERS[schema.kind](datum)


def promote(datum: Any, writer_kind: SchemaKind, reader_kind: SchemaKind) -> Any:
    """Convert a decoded scalar to the reader's kind where resolution allows it.

    Values are returned unchanged when the kinds are equal or the pair is
    not a promotion.
    """
    if writer_kind == reader_kind or not can_promote(writer_kind, reader_kind):
        return datum
    if reader_kind in (SchemaKind.FLOAT, SchemaKind.DOUBLE):
        return float(datum)
    if reader_kind == SchemaKind.STRING:
        try:
            return datum.decode("utf-8")
        except UnicodeDecodeError as e:
            raise EncodingRangeException(f"Bytes are not valid UTF-8 text: {e}", cause=e)
    if reader_kind == SchemaKind.BYTES:
        return datum.encode("utf-8")
    return datum
