"""Unit tests for primitive field codecs."""

from __future__ import annotations

import math

import pytest

from bytestruct import (
    FLOAT32,
    FLOAT64,
    INT8,
    INT16,
    INT32,
    INT64,
    INT128,
    UINT8,
    UINT16,
    UINT32,
    UINT64,
    UINT128,
    ByteOrder,
    EncodeError,
)


class TestByteOrder:
    """Test byte order handling."""

    def test_u16_big_endian(self) -> None:
        """Test most-significant byte comes first in big-endian."""
        buf = bytearray(2)
        UINT16.write(0x0102, buf, ByteOrder.BIG)
        assert bytes(buf) == b"\x01\x02"

    def test_u16_little_endian(self) -> None:
        """Test least-significant byte comes first in little-endian."""
        buf = bytearray(2)
        UINT16.write(0x0102, buf, ByteOrder.LITTLE)
        assert bytes(buf) == b"\x02\x01"

    def test_single_byte_order_independent(self) -> None:
        """Test one-byte values encode the same in both orders."""
        big = bytearray(1)
        little = bytearray(1)
        UINT8.write(0xAB, big, ByteOrder.BIG)
        UINT8.write(0xAB, little, ByteOrder.LITTLE)
        assert big == little == bytearray(b"\xab")

    def test_u32_both_orders(self) -> None:
        """Test 32-bit values are mirrored between orders."""
        assert UINT32.read(b"\x9a\xbc\xde\xf0", ByteOrder.BIG) == 0x9ABCDEF0
        assert UINT32.read(b"\xf0\xde\xbc\x9a", ByteOrder.LITTLE) == 0x9ABCDEF0

    def test_byte_order_from_string(self) -> None:
        """Test ByteOrder accepts its string values."""
        assert ByteOrder("big") is ByteOrder.BIG
        assert ByteOrder("little") is ByteOrder.LITTLE


class TestIntegerCodecs:
    """Test integer encoding and decoding."""

    def test_byte_lengths(self) -> None:
        """Test byte length follows bit width."""
        assert [c.byte_len for c in (UINT8, UINT16, UINT32, UINT64, UINT128)] == [1, 2, 4, 8, 16]
        assert [c.byte_len for c in (INT8, INT16, INT32, INT64, INT128)] == [1, 2, 4, 8, 16]
        assert FLOAT32.byte_len == 4
        assert FLOAT64.byte_len == 8

    def test_ranges(self) -> None:
        """Test representable ranges."""
        assert UINT8.max_value == 255
        assert INT8.min_value == -128
        assert INT8.max_value == 127
        assert UINT128.max_value == (1 << 128) - 1
        assert INT64.min_value == -(1 << 63)

    def test_signed_two_complement(self) -> None:
        """Test negative values use two's complement."""
        buf = bytearray(2)
        INT16.write(-2, buf, ByteOrder.BIG)
        assert bytes(buf) == b"\xff\xfe"
        assert INT16.read(b"\xff\xfe", ByteOrder.BIG) == -2
        assert UINT16.read(b"\xff\xfe", ByteOrder.BIG) == 0xFFFE

    def test_i32_extremes(self) -> None:
        """Test the boundaries of a signed 32-bit integer."""
        for value in (INT32.min_value, -1, 0, 1, INT32.max_value):
            buf = bytearray(4)
            INT32.write(value, buf, ByteOrder.LITTLE)
            assert INT32.read(buf, ByteOrder.LITTLE) == value

    def test_u128(self) -> None:
        """Test 128-bit integers."""
        value = 0x0102030405060708090A0B0C0D0E0F10
        buf = bytearray(16)
        UINT128.write(value, buf, ByteOrder.BIG)
        assert bytes(buf) == bytes(range(1, 17))
        assert UINT128.read(bytes(buf), ByteOrder.BIG) == value

    def test_i128_negative(self) -> None:
        """Test signed 128-bit integers."""
        buf = bytearray(16)
        INT128.write(-1, buf, ByteOrder.LITTLE)
        assert bytes(buf) == b"\xff" * 16
        assert INT128.read(bytes(buf), ByteOrder.LITTLE) == -1

    def test_write_into_memoryview_slice(self) -> None:
        """Test writing into a slice of a larger buffer."""
        buf = bytearray(b"\xaa" * 6)
        view = memoryview(buf)
        UINT32.write(0x01020304, view[1:5], ByteOrder.BIG)
        assert bytes(buf) == b"\xaa\x01\x02\x03\x04\xaa"


class TestFloatCodecs:
    """Test IEEE 754 float encoding and decoding."""

    def test_f32_exact_value(self) -> None:
        """Test a value representable in single precision."""
        buf = bytearray(4)
        FLOAT32.write(1.5, buf, ByteOrder.BIG)
        assert bytes(buf) == b"\x3f\xc0\x00\x00"
        assert FLOAT32.read(bytes(buf), ByteOrder.BIG) == 1.5

    def test_f32_rounds_to_single_precision(self) -> None:
        """Test f32 keeps single precision only."""
        buf = bytearray(4)
        FLOAT32.write(0.1, buf, ByteOrder.LITTLE)
        assert FLOAT32.read(bytes(buf), ByteOrder.LITTLE) == pytest.approx(0.1, rel=1e-7)

    def test_f64_both_orders(self) -> None:
        """Test double precision in both byte orders."""
        big = bytearray(8)
        little = bytearray(8)
        FLOAT64.write(-2.25, big, ByteOrder.BIG)
        FLOAT64.write(-2.25, little, ByteOrder.LITTLE)
        assert bytes(big) == bytes(reversed(little))
        assert FLOAT64.read(bytes(big), ByteOrder.BIG) == -2.25
        assert FLOAT64.read(bytes(little), ByteOrder.LITTLE) == -2.25

    def test_special_values(self) -> None:
        """Test infinities and NaN decode."""
        assert FLOAT32.read(b"\x7f\x80\x00\x00", ByteOrder.BIG) == math.inf
        assert math.isnan(FLOAT64.read(b"\x7f\xf8" + b"\x00" * 6, ByteOrder.BIG))

    def test_f32_signalling_nan_preserved(self) -> None:
        """Test signalling NaN bits are not quieted."""
        for raw in (b"\x01\x00\x80\x7f", b"\x55\x55\xa5\xff"):
            value = FLOAT32.read(raw, ByteOrder.LITTLE)
            assert math.isnan(value)

            buf = bytearray(4)
            FLOAT32.write(value, buf, ByteOrder.LITTLE)
            assert bytes(buf) == raw

    def test_f32_nan_byte_order(self) -> None:
        """Test NaN bits follow the requested byte order."""
        value = FLOAT32.read(b"\x7f\x80\x12\x34", ByteOrder.BIG)

        buf = bytearray(4)
        FLOAT32.write(value, buf, ByteOrder.LITTLE)
        assert bytes(buf) == b"\x34\x12\x80\x7f"

    def test_python_nan_to_f32(self) -> None:
        """Test the default NaN encodes as the canonical quiet NaN."""
        buf = bytearray(4)
        FLOAT32.write(math.nan, buf, ByteOrder.BIG)
        assert bytes(buf) == b"\x7f\xc0\x00\x00"

    def test_narrow_payload_nan_stays_nan(self) -> None:
        """Test an f64 NaN with only low payload bits is still NaN as f32."""
        value = FLOAT64.read(b"\x7f\xf0\x00\x00\x00\x00\x00\x01", ByteOrder.BIG)

        buf = bytearray(4)
        FLOAT32.write(value, buf, ByteOrder.BIG)
        assert math.isnan(FLOAT32.read(bytes(buf), ByteOrder.BIG))

    def test_int_accepted_for_float(self) -> None:
        """Test integers are encoded as floats."""
        buf = bytearray(8)
        FLOAT64.write(3, buf, ByteOrder.LITTLE)
        assert FLOAT64.read(bytes(buf), ByteOrder.LITTLE) == 3.0


class TestPrimitiveErrors:
    """Test encoding error handling."""

    def test_unsigned_overflow(self) -> None:
        """Test out-of-bounds error."""
        with pytest.raises(EncodeError, match="out of bounds"):
            UINT8.write(256, bytearray(1), ByteOrder.LITTLE)

    def test_negative_unsigned(self) -> None:
        """Test negative values are rejected for unsigned codecs."""
        with pytest.raises(EncodeError, match="out of bounds"):
            UINT16.write(-1, bytearray(2), ByteOrder.LITTLE)

    def test_wrong_type(self) -> None:
        """Test type mismatch."""
        with pytest.raises(EncodeError, match="expected int"):
            UINT16.write("12", bytearray(2), ByteOrder.LITTLE)  # type: ignore[arg-type]

        with pytest.raises(EncodeError, match="expected float"):
            FLOAT32.write("1.0", bytearray(4), ByteOrder.LITTLE)  # type: ignore[arg-type]

    def test_f32_overflow(self) -> None:
        """Test doubles too large for single precision."""
        with pytest.raises(EncodeError, match="cannot encode"):
            FLOAT32.write(1e300, bytearray(4), ByteOrder.LITTLE)
