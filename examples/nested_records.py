#!/usr/bin/env python3
"""Nested records with mixed byte order.

An outer little-endian record embeds a big-endian record that itself holds a
16-bit bitfield. The inner record keeps its own byte order wherever it is
placed, and arrays of integers follow the outer record's order.
"""

from __future__ import annotations

from typing import ClassVar, List

from bytestruct import (
    U8,
    U16,
    U32,
    UINT16,
    Bitfield,
    Bits,
    ByteStructBE,
    ByteStructLE,
    FixedArray,
    PrimitiveCodec,
)


class Coordinates(Bitfield):
    """Three sub-fields packed into a u16."""

    x: int = Bits(4)
    y: int = Bits(8)
    z: int = Bits(4)

    bytestruct_base: ClassVar[PrimitiveCodec] = UINT16


class Inner(ByteStructBE):
    """Big-endian inner record."""

    b: U16
    c: Coordinates


class Outer(ByteStructLE):
    """Little-endian outer record, 15 bytes."""

    a: U8
    s: Inner
    d: List[U16] = FixedArray(length=3)
    e: U32


def main() -> None:
    """Run the nested records example."""
    record = Outer(
        a=0x12,
        s=Inner(b=0x3456, c=Coordinates(x=0xF, y=0x8F, z=0x7)),
        d=[0x1020, 0x3040, 0x5060],
        e=0x9ABCDEF0,
    )

    data = record.to_bytes()
    print(f"{Outer.__name__}: {Outer.BYTE_LEN} bytes")
    print(f"  encoded: {data.hex(' ')}")

    raw = bytes(range(0x00, 0x100, 0x11))
    decoded = Outer.read_bytes(raw)
    print(f"  decoded from {raw.hex(' ')}:")
    print(f"    a={decoded.a:#x} b={decoded.s.b:#x}")
    print(f"    c=(x={decoded.s.c.x:#x}, y={decoded.s.c.y:#x}, z={decoded.s.c.z:#x})")
    print(f"    d=[{', '.join(f'{v:#x}' for v in decoded.d)}] e={decoded.e:#x}")


if __name__ == "__main__":
    main()
