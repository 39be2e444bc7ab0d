"""Buffer bounds checking shared by readers and writers."""

from __future__ import annotations

from typing import Union

from ..exceptions import BufferTooShortError

Buffer = Union[bytes, bytearray, memoryview]
WritableBuffer = Union[bytearray, memoryview]


def checked_view(
    type_name: str, data: Buffer, offset: int, byte_len: int, writable: bool = False
) -> memoryview:
    """Return a byte view of exactly ``byte_len`` bytes starting at ``offset``.

    The view borrows ``data``; nothing is copied.

    Args:
        type_name: Name of the type being read or written (for error messages)
        data: Any object supporting the buffer protocol
        offset: Position of the first byte
        byte_len: Number of bytes required
        writable: Whether the view will be written to

    Raises:
        ValueError: If offset is negative
        TypeError: If a writable buffer is required but ``data`` is read-only
        BufferTooShortError: If fewer than ``byte_len`` bytes follow ``offset``
    """
    if offset < 0:
        raise ValueError(f"offset must be non-negative, got {offset}")

    view = memoryview(data).cast("B")
    if writable and view.readonly:
        raise TypeError(f"cannot write {type_name} into read-only {type(data).__name__}")

    available = max(len(view) - offset, 0)
    if available < byte_len:
        raise BufferTooShortError(type_name, byte_len, available)
    return view[offset : offset + byte_len]
