"""Exception hierarchy for bytestruct.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from ByteStructError for easy catching of any bytestruct-specific error.
"""

from __future__ import annotations


class ByteStructError(Exception):
    """Base exception for all bytestruct errors."""

    pass


class LayoutError(ByteStructError):
    """Raised when a struct or bitfield declaration has no valid fixed layout.

    Raised once, when the class is created, never during read or write.

    Examples:
        - Bitfield widths do not add up to the width of the backing integer
        - Bitfield backed by a signed or floating point type
        - Member type without a fixed byte length
        - Array or bytes member without a fixed length
    """

    pass


class BufferTooShortError(ByteStructError):
    """Raised when a buffer cannot hold a whole record.

    The buffer is never truncated or padded; the caller has to supply at
    least ``required`` bytes.

    Attributes:
        required: Number of bytes the layout occupies
        available: Number of bytes present after the requested offset
    """

    def __init__(self, type_name: str, required: int, available: int) -> None:
        self.type_name = type_name
        self.required = required
        self.available = available
        super().__init__(
            f"{type_name} needs {required} bytes, buffer has {available} bytes available"
        )


class EncodeError(ByteStructError):
    """Raised when a value cannot be written into its layout.

    Model validation normally rules these out; they surface for instances
    built with ``model_construct()`` or otherwise mutated around validation.

    Examples:
        - Member value of the wrong type
        - Array with the wrong number of elements
        - Integer outside the range of its width
        - Overflowing sub-field of a strict bitfield
    """

    pass
