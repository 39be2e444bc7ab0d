"""Packed binary encoder for ByteStruct models.

This module provides the encode() and encode_into() functions that convert
a ByteStruct instance to its fixed-length packed representation.
"""

from __future__ import annotations

from typing import Any

from .buffer import WritableBuffer, checked_view


def encode_into(message: Any, buffer: WritableBuffer, offset: int = 0) -> int:
    """Pack a ByteStruct instance into a caller-owned buffer.

    Members are written in declaration order into contiguous slices of the
    buffer. Bytes outside ``[offset, offset + BYTE_LEN)`` are left untouched.

    Args:
        message: ByteStruct instance to encode
        buffer: Writable buffer (bytearray, writable memoryview, ...)
        offset: Position of the first byte to write

    Returns:
        Number of bytes written, always the struct's ``BYTE_LEN``

    Raises:
        BufferTooShortError: If fewer than ``BYTE_LEN`` bytes follow ``offset``
        EncodeError: If a member value bypassed validation and cannot be represented
        TypeError: If the buffer is read-only or the message is not a ByteStruct

    Example:
        ```python
        buf = bytearray(GIFLogicalScreenDescriptor.BYTE_LEN)
        encode_into(descriptor, buf)
        ```
    """
    schema_of = getattr(type(message), "struct_schema", None)
    if schema_of is None:
        raise TypeError(f"{type(message).__name__} is not a ByteStruct")
    schema = schema_of()

    view = checked_view(type(message).__name__, buffer, offset, schema.byte_len, writable=True)
    schema.write(message, view)
    return schema.byte_len


def encode(message: Any) -> bytes:
    """Pack a ByteStruct instance into a new bytes object.

    Args:
        message: ByteStruct instance to encode

    Returns:
        Exactly ``BYTE_LEN`` bytes

    Raises:
        EncodeError: If a member value bypassed validation and cannot be represented

    Example:
        ```python
        descriptor = GIFLogicalScreenDescriptor(width=3, height=5, ...)
        data = encode(descriptor)
        assert len(data) == GIFLogicalScreenDescriptor.BYTE_LEN
        ```
    """
    schema_of = getattr(type(message), "struct_schema", None)
    if schema_of is None:
        raise TypeError(f"{type(message).__name__} is not a ByteStruct")

    buffer = bytearray(schema_of().byte_len)
    encode_into(message, buffer)
    return bytes(buffer)
