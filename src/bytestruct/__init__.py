"""bytestruct: Packed and Bit-Field Binary Records

A Python library for converting fixed-layout records to and from raw bytes.
Records are declared as Pydantic models; their byte layout is derived once,
when the class is created, and every read or write walks that fixed layout.

Key Features:
- Pydantic-based record modeling
- Packed layout: members concatenated in declaration order, no padding
- Per-struct and per-member byte order
- Bitfields packed LSB-first into one unsigned integer
- Nested structs and fixed-size arrays

Quick Start:
    >>> from bytestruct import U8, U16, Bitfield, Bits, ByteStructLE, decode, encode
    >>>
    >>> class ColorTableInfo(Bitfield):
    ...     global_color_table_flag: int = Bits(1)
    ...     color_resolution: int = Bits(3)
    ...     sort_flag: int = Bits(1)
    ...     global_color_table_size: int = Bits(3)
    >>>
    >>> class LogicalScreenDescriptor(ByteStructLE):
    ...     width: U16
    ...     height: U16
    ...     color_table_info: ColorTableInfo
    ...     background_color_index: U8
    ...     pixel_aspect_ratio: U8
    >>>
    >>> LogicalScreenDescriptor.BYTE_LEN
    7
    >>> desc = decode(LogicalScreenDescriptor, bytes([3, 0, 5, 0, 0xF7, 0, 0]))
    >>> encode(desc)
    b'\\x03\\x00\\x05\\x00\\xf7\\x00\\x00'
"""

from __future__ import annotations

from .codec import ByteOrder, PrimitiveCodec, decode, encode, encode_into
from .codec.primitive import (
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
)
from .exceptions import BufferTooShortError, ByteStructError, EncodeError, LayoutError
from .models import (
    F32,
    F64,
    I8,
    I16,
    I32,
    I64,
    I128,
    U8,
    U16,
    U32,
    U64,
    U128,
    Bitfield,
    Bits,
    ByteStruct,
    ByteStructBE,
    ByteStructLE,
    FixedArray,
    FixedBytes,
    Flag,
)
from .utils import encoded_size, field_offsets, field_sizes

__version__ = "0.1.0"

__all__ = [
    # Core API
    "ByteStruct",
    "ByteStructLE",
    "ByteStructBE",
    "Bitfield",
    "encode",
    "encode_into",
    "decode",
    "ByteOrder",
    # Field helpers
    "Bits",
    "Flag",
    "FixedArray",
    "FixedBytes",
    "U8",
    "I8",
    "U16",
    "I16",
    "U32",
    "I32",
    "U64",
    "I64",
    "U128",
    "I128",
    "F32",
    "F64",
    # Primitive codecs
    "PrimitiveCodec",
    "UINT8",
    "INT8",
    "UINT16",
    "INT16",
    "UINT32",
    "INT32",
    "UINT64",
    "INT64",
    "UINT128",
    "INT128",
    "FLOAT32",
    "FLOAT64",
    # Exceptions
    "ByteStructError",
    "LayoutError",
    "BufferTooShortError",
    "EncodeError",
    # Utilities
    "encoded_size",
    "field_sizes",
    "field_offsets",
    # Version
    "__version__",
]
