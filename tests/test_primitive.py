"""Tests for scalar conversion."""

import math

import pytest

from avro_json.codec import primitive
from avro_json.exceptions import EncodingRangeException, TypeMismatchException
from avro_json.schema import SchemaKind, parse


class TestDecodeScalars:
    """Tests for the decode direction."""

    def test_null(self):
        assert primitive.decode_null(None) is None
        with pytest.raises(TypeMismatchException):
            primitive.decode_null(0)

    def test_boolean(self):
        assert primitive.decode_boolean(False) is False
        with pytest.raises(TypeMismatchException):
            primitive.decode_boolean("true")

    def test_int(self):
        assert primitive.decode_int(42) == 42
        assert primitive.decode_int(-(2 ** 31)) == -(2 ** 31)

    def test_int_accepts_integral_float(self):
        value = primitive.decode_int(5.0)
        assert value == 5
        assert isinstance(value, int)

    @pytest.mark.parametrize("datum", [5.5, "5", True, None, 2 ** 31, math.inf])
    def test_int_rejects(self, datum):
        with pytest.raises(TypeMismatchException):
            primitive.decode_int(datum)

    def test_long_range(self):
        assert primitive.decode_long(2 ** 63 - 1) == 2 ** 63 - 1
        with pytest.raises(TypeMismatchException):
            primitive.decode_long(2 ** 63)

    def test_float_and_double(self):
        assert primitive.decode_float(1) == 1.0
        assert isinstance(primitive.decode_float(1), float)
        assert primitive.decode_double(2.5) == 2.5
        with pytest.raises(TypeMismatchException):
            primitive.decode_double("2.5")
        with pytest.raises(TypeMismatchException):
            primitive.decode_float(True)

    def test_string(self):
        assert primitive.decode_string("héllo") == "héllo"
        with pytest.raises(TypeMismatchException):
            primitive.decode_string(b"hello")

    def test_bytes(self):
        assert primitive.decode_bytes("\x00\xffA") == b"\x00\xffA"

    def test_bytes_rejects_non_string(self):
        with pytest.raises(TypeMismatchException):
            primitive.decode_bytes([0, 255])

    def test_bytes_rejects_wide_code_point(self):
        with pytest.raises(EncodingRangeException) as exc_info:
            primitive.decode_bytes("aĀ")
        assert "position 1" in str(exc_info.value)

    def test_fixed(self):
        assert primitive.decode_fixed("ab", 2) == b"ab"

    def test_fixed_wrong_length(self):
        with pytest.raises(EncodingRangeException):
            primitive.decode_fixed("abc", 2)

    def test_fixed_rejects_non_string(self):
        with pytest.raises(TypeMismatchException):
            primitive.decode_fixed(None, 2)

    def test_enum_passes_through(self):
        assert primitive.decode_enum("HEARTS") == "HEARTS"


class TestEncodeScalars:
    """Tests for the encode direction."""

    def test_numbers(self):
        assert primitive.encode_int(7) == 7
        assert primitive.encode_long(2 ** 40) == 2 ** 40
        assert primitive.encode_float(1) == 1.0
        assert isinstance(primitive.encode_double(1), float)

    def test_null_boolean_string(self):
        assert primitive.encode_null(None) is None
        assert primitive.encode_boolean(True) is True
        assert primitive.encode_string("x") == "x"

    def test_bytes(self):
        assert primitive.encode_bytes(b"\x00\xffA") == "\x00\xffA"
        assert primitive.encode_bytes(bytearray(b"\x7f")) == "\x7f"

    @pytest.mark.parametrize("datum", ["\xff", "€", None])
    def test_bytes_rejects_non_bytes(self, datum):
        with pytest.raises(TypeMismatchException):
            primitive.encode_bytes(datum)

    def test_fixed(self):
        assert primitive.encode_fixed(b"ab", 2) == "ab"
        with pytest.raises(EncodingRangeException):
            primitive.encode_fixed(b"abc", 2)
        with pytest.raises(TypeMismatchException):
            primitive.encode_fixed("ab", 2)

    def test_enum(self):
        assert primitive.encode_enum("CLUBS") == "CLUBS"

    def test_all_byte_values_survive(self):
        raw = bytes(range(256))
        assert primitive.decode_bytes(primitive.encode_bytes(raw)) == raw


class TestScalarDispatch:
    """Tests for kind-based dispatch and promotion."""

    def test_decode_scalar(self):
        assert primitive.decode_scalar(parse("long"), 3) == 3
        fixed = parse({"type": "fixed", "name": "F", "size": 1})
        assert primitive.decode_scalar(fixed, "\x01") == b"\x01"

    def test_encode_scalar(self):
        assert primitive.encode_scalar(parse("bytes"), b"\x01") == "\x01"
        fixed = parse({"type": "fixed", "name": "F", "size": 1})
        assert primitive.encode_scalar(fixed, b"\x01") == "\x01"

    def test_promote_to_double(self):
        value = primitive.promote(5, SchemaKind.INT, SchemaKind.DOUBLE)
        assert value == 5.0
        assert isinstance(value, float)

    def test_promote_int_to_long_keeps_int(self):
        assert primitive.promote(5, SchemaKind.INT, SchemaKind.LONG) == 5

    def test_promote_string_and_bytes(self):
        assert primitive.promote("é", SchemaKind.STRING, SchemaKind.BYTES) == "é".encode("utf-8")
        assert primitive.promote(b"abc", SchemaKind.BYTES, SchemaKind.STRING) == "abc"

    def test_promote_invalid_utf8(self):
        with pytest.raises(EncodingRangeException):
            primitive.promote(b"\xff", SchemaKind.BYTES, SchemaKind.STRING)

    def test_promote_unrelated_kinds_is_identity(self):
        assert primitive.promote("x", SchemaKind.STRING, SchemaKind.STRING) == "x"
        assert primitive.promote(1.5, SchemaKind.DOUBLE, SchemaKind.INT) == 1.5
