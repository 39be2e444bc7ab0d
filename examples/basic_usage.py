#!/usr/bin/env python3
"""Basic usage example for bytestruct.

This example demonstrates:
1. Declaring a packed record with a bitfield
2. Decoding it from raw bytes
3. Encoding it back, into a new buffer or into an existing one
4. Inspecting the layout
"""

from __future__ import annotations

from bytestruct import (
    U8,
    U16,
    Bitfield,
    Bits,
    ByteStructLE,
    decode,
    encode,
    encode_into,
    field_offsets,
)


class ColorTableInfo(Bitfield):
    """Packed color table byte of a GIF logical screen descriptor."""

    global_color_table_flag: int = Bits(1)
    color_resolution: int = Bits(3)
    sort_flag: int = Bits(1)
    global_color_table_size: int = Bits(3)


class GIFLogicalScreenDescriptor(ByteStructLE):
    """GIF logical screen descriptor, 7 bytes, little-endian."""

    width: U16
    height: U16
    color_table_info: ColorTableInfo
    background_color_index: U8
    pixel_aspect_ratio: U8


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("bytestruct Basic Usage Example")
    print("=" * 60)
    print()

    # Decode from raw bytes
    print("1. Decoding a logical screen descriptor...")
    raw = bytes([0x03, 0x00, 0x05, 0x00, 0xF7, 0x00, 0x00])
    descriptor = decode(GIFLogicalScreenDescriptor, raw)

    print(f"   Size: {descriptor.width}x{descriptor.height}")
    info = descriptor.color_table_info
    print(f"   Global color table flag: {info.global_color_table_flag}")
    print(f"   Color resolution: {info.color_resolution}")
    print(f"   Sort flag: {info.sort_flag}")
    print(f"   Global color table size: {info.global_color_table_size}")
    print()

    # Analyze the layout
    print("2. Analyzing the layout...")
    for field_name, (offset, size) in field_offsets(GIFLogicalScreenDescriptor).items():
        print(f"   {field_name}: offset {offset}, {size} bytes")
    print(f"   Total: {GIFLogicalScreenDescriptor.BYTE_LEN} bytes")
    print()

    # Modify and encode
    print("3. Encoding a modified copy...")
    resized = descriptor.model_copy(update={"width": 640, "height": 480})
    encoded_data = encode(resized)

    print(f"   Hex: {encoded_data.hex()}")
    print()

    # Write into part of a larger buffer
    print("4. Writing into an existing buffer at offset 6...")
    buffer = bytearray(b"GIF89a") + bytearray(GIFLogicalScreenDescriptor.BYTE_LEN)
    written = encode_into(resized, buffer, offset=6)

    print(f"   Wrote {written} bytes: {bytes(buffer)!r}")
    print()

    # Verify round-trip
    print("5. Verifying round-trip...")
    if encode(descriptor) == raw:
        print("   Round-trip successful! Bytes match.")
    else:
        print("   Round-trip failed! Bytes don't match.")
    print()

    print("=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
