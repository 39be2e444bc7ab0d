"""Field type helpers and utilities.

This module provides the fixed-width type aliases used to annotate struct
members and convenience functions for arrays, raw bytes and bitfield
sub-fields.

Integer aliases carry range validators so Pydantic rejects values that do
not fit the declared width. A member's byte order is overridden by adding a
ByteOrder to its annotation:

    >>> class Packet(ByteStruct):
    ...     length: U16                             # struct's byte order
    ...     crc: Annotated[U32, ByteOrder.BIG]      # always big-endian
"""

from __future__ import annotations

import struct
from typing import Annotated, Any, cast

from pydantic import AfterValidator, Field
from pydantic.fields import FieldInfo

from ..codec.primitive import (
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
    PrimitiveCodec,
)


def _fits(codec: PrimitiveCodec) -> AfterValidator:
    """Validator rejecting integers outside the range of ``codec``."""

    def check(value: int) -> int:
        if not codec.min_value <= value <= codec.max_value:
            raise ValueError(
                f"value {value} out of bounds for {codec.name} "
                f"[{codec.min_value}, {codec.max_value}]"
            )
        return value

    return AfterValidator(check)


def _fits_f32() -> AfterValidator:
    """Validator rejecting finite floats too large for single precision."""

    def check(value: float) -> float:
        try:
            struct.pack("<f", value)
        except OverflowError as e:
            raise ValueError(f"value {value!r} out of range for {FLOAT32.name}") from e
        return value

    return AfterValidator(check)


U8 = Annotated[int, UINT8, _fits(UINT8)]
I8 = Annotated[int, INT8, _fits(INT8)]
U16 = Annotated[int, UINT16, _fits(UINT16)]
I16 = Annotated[int, INT16, _fits(INT16)]
U32 = Annotated[int, UINT32, _fits(UINT32)]
I32 = Annotated[int, INT32, _fits(INT32)]
U64 = Annotated[int, UINT64, _fits(UINT64)]
I64 = Annotated[int, INT64, _fits(INT64)]
U128 = Annotated[int, UINT128, _fits(UINT128)]
I128 = Annotated[int, INT128, _fits(INT128)]
F32 = Annotated[float, FLOAT32, _fits_f32()]
F64 = Annotated[float, FLOAT64]


def FixedArray(*, length: int, **kwargs: Any) -> FieldInfo:
    """Create a fixed-length array field.

    The element type comes from the ``List[...]`` annotation and may be any
    type with a fixed layout, including structs, bitfields and other arrays.

    Args:
        length: Exact number of elements
        **kwargs: Additional Field() arguments

    Returns:
        Pydantic FieldInfo suitable for use as a field default/metadata.

    Example:
        >>> class Message(ByteStruct):
        ...     samples: List[U16] = FixedArray(length=3)
        ...     matrix: List[Annotated[List[U8], FixedArray(length=2)]] = FixedArray(length=2)
    """
    return cast(FieldInfo, Field(min_length=length, max_length=length, **kwargs))


def FixedBytes(*, length: int, **kwargs: Any) -> FieldInfo:
    """Create a fixed-length bytes field.

    Args:
        length: Exact length in bytes
        **kwargs: Additional Field() arguments

    Returns:
        Pydantic FieldInfo suitable for use as a field default/metadata.

    Example:
        >>> class Message(ByteStruct):
        ...     signature: bytes = FixedBytes(length=6)
    """
    return cast(FieldInfo, Field(min_length=length, max_length=length, **kwargs))


def Bits(width: int, **kwargs: Any) -> FieldInfo:
    """Create a bitfield sub-field.

    Sub-fields take consecutive bits of the backing integer, starting at the
    least-significant bit, in declaration order.

    Args:
        width: Number of bits
        **kwargs: Additional Field() arguments (default, description, etc.)

    Returns:
        Pydantic FieldInfo suitable for use as a field default/metadata.

    Example:
        >>> class Flags(Bitfield):
        ...     mode: int = Bits(3)
        ...     reserved: int = Bits(5, default=0)

    Note:
        Only negative values are rejected on assignment. A value wider than
        ``width`` is accepted and masked to its low bits when packed.
    """
    return cast(FieldInfo, Field(ge=0, json_schema_extra={"bits": width}, **kwargs))


def Flag(**kwargs: Any) -> FieldInfo:
    """Create a one-bit boolean bitfield sub-field.

    Example:
        >>> class Flags(Bitfield):
        ...     enabled: bool = Flag()
        ...     level: int = Bits(7)
    """
    return cast(FieldInfo, Field(json_schema_extra={"bits": 1}, **kwargs))
