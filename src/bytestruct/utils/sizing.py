"""Record size and layout utilities.

This module provides functions to query the packed size and member placement
of a struct without encoding anything. All figures come from the layout
computed when the class was created and never depend on field values.
"""

from __future__ import annotations

from typing import Any, Dict, Tuple

from ..codec.schema import StructSchema


def _schema_of(message_or_class: Any) -> StructSchema:
    # Get the class if we were passed an instance
    if isinstance(message_or_class, type):
        message_class = message_or_class
    else:
        message_class = type(message_or_class)

    schema_of = getattr(message_class, "struct_schema", None)
    if schema_of is None:
        raise TypeError(f"{message_class!r} is not a ByteStruct")
    schema: StructSchema = schema_of()
    return schema


def encoded_size(message_or_class: Any) -> int:
    """Return the packed size of a struct in bytes.

    Args:
        message_or_class: ByteStruct instance or class

    Returns:
        ``BYTE_LEN`` of the struct

    Example:
        >>> encoded_size(GIFLogicalScreenDescriptor)
        7
    """
    return _schema_of(message_or_class).byte_len


def field_sizes(message_or_class: Any) -> Dict[str, int]:
    """Get the size in bytes of each member of a struct.

    Args:
        message_or_class: ByteStruct instance or class

    Returns:
        Dictionary mapping member names to their size in bytes, in declaration order

    Example:
        >>> field_sizes(GIFLogicalScreenDescriptor)
        {'width': 2, 'height': 2, 'color_table_info': 1, 'background_color_index': 1, ...}
    """
    return {member.name: member.byte_len for member in _schema_of(message_or_class).members}


def field_offsets(message_or_class: Any) -> Dict[str, Tuple[int, int]]:
    """Get the byte offset and size of each member of a struct.

    Args:
        message_or_class: ByteStruct instance or class

    Returns:
        Dictionary mapping member names to ``(offset, size)`` tuples

    Example:
        >>> field_offsets(GIFLogicalScreenDescriptor)["color_table_info"]
        (4, 1)
    """
    return {
        member.name: (member.offset, member.byte_len)
        for member in _schema_of(message_or_class).members
    }
