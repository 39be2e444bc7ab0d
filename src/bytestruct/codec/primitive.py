"""Fixed-width primitive codecs.

Each codec converts one numeric value to or from exactly ``byte_len`` bytes
under a byte order supplied by the caller. Primitives carry no byte order of
their own: the enclosing struct (or an explicit override) decides it.
"""

from __future__ import annotations

import enum
import math
import struct
from dataclasses import dataclass

from ..exceptions import EncodeError

_F32_SIGN = 0x80000000
_F32_EXPONENT = 0x7F800000
_F32_MANTISSA = 0x007FFFFF
_F32_QUIET = 0x00400000
# f64 has 29 more mantissa bits than f32
_MANTISSA_SHIFT = 29


def _f32_nan_to_float(bits: int) -> float:
    """Widen an f32 NaN to a float, keeping its sign and payload bits.

    The f64 bit pattern is built directly: a C ``float`` conversion would
    quiet signalling NaNs.
    """
    payload = (bits & _F32_MANTISSA) << _MANTISSA_SHIFT
    wide = ((bits & _F32_SIGN) << 32) | (0x7FF << 52) | payload
    return struct.unpack("<d", wide.to_bytes(8, "little"))[0]


def _float_to_f32_nan(value: float) -> int:
    """Narrow a NaN float to f32 bits, inverse of ``_f32_nan_to_float``."""
    wide = int.from_bytes(struct.pack("<d", value), "little")
    mantissa = (wide >> _MANTISSA_SHIFT) & _F32_MANTISSA
    if mantissa == 0:
        # payload only in the dropped low bits
        mantissa = _F32_QUIET
    return ((wide >> 32) & _F32_SIGN) | _F32_EXPONENT | mantissa


class ByteOrder(str, enum.Enum):
    """Byte order of multi-byte values.

    The values match the ``byteorder`` argument of ``int.to_bytes()``.
    """

    LITTLE = "little"
    BIG = "big"

    @property
    def struct_prefix(self) -> str:
        """Return the matching ``struct`` module format prefix."""
        return "<" if self is ByteOrder.LITTLE else ">"


@dataclass(frozen=True)
class PrimitiveCodec:
    """Codec for a single fixed-width integer or IEEE 754 float.

    Attributes:
        name: Short type name (e.g. ``u16``)
        byte_len: Number of bytes occupied
        signed: Whether integers use two's complement
        is_float: Whether the value is an IEEE 754 float

    Example:
        >>> buf = bytearray(2)
        >>> UINT16.write(0x0102, buf, ByteOrder.BIG)
        >>> bytes(buf)
        b'\\x01\\x02'
        >>> UINT16.read(b"\\x02\\x01", ByteOrder.LITTLE)
        258
    """

    name: str
    byte_len: int
    signed: bool = False
    is_float: bool = False

    @property
    def bit_len(self) -> int:
        return self.byte_len * 8

    @property
    def min_value(self) -> int:
        """Smallest representable integer (integers only)."""
        if self.signed:
            return -(1 << (self.bit_len - 1))
        return 0

    @property
    def max_value(self) -> int:
        """Largest representable integer (integers only)."""
        if self.signed:
            return (1 << (self.bit_len - 1)) - 1
        return (1 << self.bit_len) - 1

    def _float_format(self, byte_order: ByteOrder) -> str:
        return byte_order.struct_prefix + ("f" if self.byte_len == 4 else "d")

    def read(self, data: bytes | bytearray | memoryview, byte_order: ByteOrder) -> int | float:
        """Decode exactly ``byte_len`` bytes.

        Any bit pattern is a valid value, so this never fails for
        correctly sized input.

        Args:
            data: Exactly ``byte_len`` bytes
            byte_order: Byte order of the encoded value

        Returns:
            Decoded integer or float
        """
        if self.is_float:
            if self.byte_len == 4:
                bits = int.from_bytes(data[:4], byte_order.value)
                if bits & _F32_EXPONENT == _F32_EXPONENT and bits & _F32_MANTISSA:
                    return _f32_nan_to_float(bits)
            return struct.unpack_from(self._float_format(byte_order), data, 0)[0]
        return int.from_bytes(data[: self.byte_len], byte_order.value, signed=self.signed)

    def write(
        self, value: int | float, buffer: bytearray | memoryview, byte_order: ByteOrder
    ) -> None:
        """Encode a value into exactly ``byte_len`` bytes of a writable buffer.

        Args:
            value: Value to encode
            buffer: Writable buffer of exactly ``byte_len`` bytes
            byte_order: Byte order to encode with

        Raises:
            EncodeError: If the value has the wrong type or does not fit
        """
        if self.is_float:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise EncodeError(f"{self.name}: expected float, got {type(value).__name__}")
            if self.byte_len == 4 and math.isnan(value):
                buffer[:4] = _float_to_f32_nan(value).to_bytes(4, byte_order.value)
                return
            try:
                struct.pack_into(self._float_format(byte_order), buffer, 0, value)
            except (OverflowError, struct.error) as e:
                raise EncodeError(f"{self.name}: cannot encode {value!r}: {e}") from e
            return

        if not isinstance(value, int):
            raise EncodeError(f"{self.name}: expected int, got {type(value).__name__}")
        try:
            encoded = value.to_bytes(self.byte_len, byte_order.value, signed=self.signed)
        except OverflowError as e:
            raise EncodeError(
                f"{self.name}: value {value} out of bounds [{self.min_value}, {self.max_value}]"
            ) from e
        buffer[: self.byte_len] = encoded


UINT8 = PrimitiveCodec("u8", 1)
INT8 = PrimitiveCodec("i8", 1, signed=True)
UINT16 = PrimitiveCodec("u16", 2)
INT16 = PrimitiveCodec("i16", 2, signed=True)
UINT32 = PrimitiveCodec("u32", 4)
INT32 = PrimitiveCodec("i32", 4, signed=True)
UINT64 = PrimitiveCodec("u64", 8)
INT64 = PrimitiveCodec("i64", 8, signed=True)
UINT128 = PrimitiveCodec("u128", 16)
INT128 = PrimitiveCodec("i128", 16, signed=True)
FLOAT32 = PrimitiveCodec("f32", 4, is_float=True)
FLOAT64 = PrimitiveCodec("f64", 8, is_float=True)
