"""Pydantic record modeling for bytestruct.

This module provides the ByteStruct and Bitfield base classes and the field
utilities for declaring fixed-layout records.
"""

from __future__ import annotations

from .base import Bitfield, ByteStruct, ByteStructBE, ByteStructLE
from .fields import (
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
    Bits,
    FixedArray,
    FixedBytes,
    Flag,
)

__all__ = [
    "ByteStruct",
    "ByteStructLE",
    "ByteStructBE",
    "Bitfield",
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
]
