"""Bit-level packing and unpacking utilities.

This module packs narrow unsigned values into a single integer and takes them
apart again. Packing is LSB-first: the first value written occupies the
least-significant bits, each following value sits directly above the previous
one. Bit order is a logical convention and is independent of the byte order
used later to serialize the integer.
"""

from __future__ import annotations


def bit_mask(num_bits: int) -> int:
    """Return an integer with the low ``num_bits`` bits set."""
    return (1 << num_bits) - 1


class BitPacker:
    """Packs unsigned values into an integer, least-significant bits first.

    Values wider than their declared width are masked to the low bits
    unless ``strict`` is requested.

    Example:
        >>> packer = BitPacker(8)
        >>> packer.write_uint(1, 1)
        >>> packer.write_uint(3, 3)
        >>> packer.write_uint(1, 1)
        >>> packer.write_uint(7, 3)
        >>> hex(packer.to_int())
        '0xf7'
    """

    def __init__(self, total_bits: int) -> None:
        """Initialize an empty packer.

        Args:
            total_bits: Width of the integer being assembled
        """
        self._total_bits = total_bits
        self._value = 0
        self._position = 0

    def write_bool(self, value: bool) -> None:
        """Write a boolean as a single bit."""
        self.write_uint(1 if value else 0, 1)

    def write_uint(self, value: int, num_bits: int, strict: bool = False) -> None:
        """Write an unsigned value into the next ``num_bits`` bits.

        Args:
            value: Non-negative value to write
            num_bits: Number of bits reserved for the value
            strict: Raise instead of masking when the value does not fit

        Raises:
            ValueError: If value is negative, the packer is full, or (strict
                only) the value needs more than ``num_bits`` bits
        """
        if value < 0:
            raise ValueError(f"write_uint requires non-negative value, got {value}")
        if num_bits < 1:
            raise ValueError(f"num_bits must be positive, got {num_bits}")
        if self._position + num_bits > self._total_bits:
            raise ValueError(
                f"Not enough room: need {num_bits} bits, have {self.bits_remaining()}"
            )

        mask = bit_mask(num_bits)
        if strict and value > mask:
            raise ValueError(f"Value {value} requires more than {num_bits} bits (max: {mask})")

        self._value |= (value & mask) << self._position
        self._position += num_bits

    def bits_remaining(self) -> int:
        return self._total_bits - self._position

    def to_int(self) -> int:
        """Return the packed integer.

        Bits that were never written are zero.
        """
        return self._value


class BitUnpacker:
    """Unpacks unsigned values from an integer, least-significant bits first.

    Example:
        >>> unpacker = BitUnpacker(0xF7, 8)
        >>> [unpacker.read_uint(n) for n in (1, 3, 1, 3)]
        [1, 3, 1, 7]
    """

    def __init__(self, value: int, total_bits: int) -> None:
        """Initialize an unpacker over a packed integer.

        Args:
            value: Packed integer; bits above ``total_bits`` are ignored
            total_bits: Width of the packed integer
        """
        self._value = value & bit_mask(total_bits)
        self._total_bits = total_bits
        self._position = 0

    def read_bool(self) -> bool:
        """Read a single bit as a boolean."""
        return self.read_uint(1) == 1

    def read_uint(self, num_bits: int) -> int:
        """Read the next ``num_bits`` bits as an unsigned integer.

        Raises:
            ValueError: If num_bits is not positive
            IndexError: If not enough bits are left
        """
        if num_bits < 1:
            raise ValueError(f"num_bits must be positive, got {num_bits}")
        if self._position + num_bits > self._total_bits:
            raise IndexError(
                f"Not enough bits: need {num_bits}, have {self.bits_remaining()}"
            )

        value = (self._value >> self._position) & bit_mask(num_bits)
        self._position += num_bits
        return value

    def bits_remaining(self) -> int:
        return self._total_bits - self._position
