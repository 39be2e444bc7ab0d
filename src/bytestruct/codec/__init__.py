"""Packed binary codec for bytestruct.

This module provides the primitive, struct and bitfield codecs and the
encode/decode entry points built on them.
"""

from __future__ import annotations

from .decoder import decode
from .encoder import encode, encode_into
from .primitive import ByteOrder, PrimitiveCodec
from .schema import BitfieldSchema, MemberSchema, StructSchema, SubfieldSchema

__all__ = [
    "encode",
    "encode_into",
    "decode",
    "ByteOrder",
    "PrimitiveCodec",
    "StructSchema",
    "MemberSchema",
    "BitfieldSchema",
    "SubfieldSchema",
]
