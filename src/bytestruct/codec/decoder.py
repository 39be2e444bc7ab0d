"""Packed binary decoder for ByteStruct models.

This module provides the decode() function that converts packed bytes back
to a ByteStruct instance.
"""

from __future__ import annotations

from typing import Any, Type, TypeVar

from .buffer import Buffer, checked_view

T = TypeVar("T")


def decode(message_class: Type[T], data: Buffer, offset: int = 0) -> T:
    """Unpack a ByteStruct instance from bytes.

    Reads exactly ``BYTE_LEN`` bytes starting at ``offset``; any further
    bytes are ignored. Every byte pattern decodes to some value, so the only
    failure is a buffer that is too short.

    Args:
        message_class: ByteStruct class to decode to
        data: Bytes-like object holding the packed record
        offset: Position of the first byte to read

    Returns:
        Decoded message instance

    Raises:
        BufferTooShortError: If fewer than ``BYTE_LEN`` bytes follow ``offset``
        TypeError: If ``message_class`` is not a ByteStruct

    Example:
        ```python
        raw = bytes([0x03, 0x00, 0x05, 0x00, 0xF7, 0x00, 0x00])
        descriptor = decode(GIFLogicalScreenDescriptor, raw)
        assert descriptor.width == 3
        ```
    """
    schema_of = getattr(message_class, "struct_schema", None)
    if schema_of is None:
        raise TypeError(f"{message_class!r} is not a ByteStruct")
    schema = schema_of()

    view = checked_view(message_class.__name__, data, offset, schema.byte_len)
    decoded: T = schema.read(view)
    return decoded
