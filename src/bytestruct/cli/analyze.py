"""Layout analysis CLI command."""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from pathlib import Path
from typing import List, Type

from ..codec.members import ArrayMember, BitfieldMember, MemberCodec, StructMember
from ..codec.schema import BitfieldSchema
from ..models.base import Bitfield, ByteStruct

logger = logging.getLogger(__name__)


def analyze_file(file_path: Path) -> None:
    """Analyze all ByteStruct and Bitfield classes in a Python file.

    Args:
        file_path: Path to Python file containing record definitions
    """
    # Load the Python module
    spec = importlib.util.spec_from_file_location("user_module", file_path)
    if spec is None or spec.loader is None:
        raise ValueError(f"Could not load module from {file_path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules["user_module"] = module
    spec.loader.exec_module(module)

    # Only include classes defined in this file (not imported)
    structs: List[Type[ByteStruct]] = []
    bitfields: List[Type[Bitfield]] = []
    for _name, obj in inspect.getmembers(module, inspect.isclass):
        if obj.__module__ != "user_module":
            continue
        if issubclass(obj, ByteStruct):
            structs.append(obj)
        elif issubclass(obj, Bitfield):
            bitfields.append(obj)
    logger.debug("found %d structs, %d bitfields in %s", len(structs), len(bitfields), file_path)

    if not structs and not bitfields:
        print(f"No ByteStruct or Bitfield classes found in {file_path}")
        return

    total = len(structs) + len(bitfields)
    print("|" * 7, "bytestruct: Packed Binary Records", "|" * 7)
    print(f"{total} layout{'s' if total != 1 else ''} loaded.")
    print("Offsets and sizes are in bytes, bitfield positions in bits (LSB = 0).")
    print()

    for struct_class in structs:
        analyze_struct_class(struct_class)
    for bitfield_class in bitfields:
        analyze_bitfield_class(bitfield_class)


def analyze_struct_class(struct_class: Type[ByteStruct]) -> None:
    """Print the member layout of a single struct.

    Args:
        struct_class: Struct class to analyze
    """
    schema = struct_class.struct_schema()

    print(f"{'=' * 19} {struct_class.__name__} {'=' * 19}")
    print(f"Size: {schema.byte_len} bytes / {schema.byte_len * 8} bits")
    print(f"Byte order: {schema.byte_order.value}-endian")
    print()

    print(f"{'-' * 28} Body {'-' * 28}")
    for i, member in enumerate(schema.members, 1):
        field_desc = f"{i}. {member.name}"
        placement = f"@{member.offset:<4d} {member.byte_len:>4d} bytes"
        dots = "." * max(1, 40 - len(field_desc))
        print(f"        {field_desc}{dots}{placement}  {member.codec.describe()}")
        for line in _bitfield_lines(member.codec):
            print(f"            {line}")

    print()


def analyze_bitfield_class(bitfield_class: Type[Bitfield]) -> None:
    """Print the bit layout of a single bitfield.

    Args:
        bitfield_class: Bitfield class to analyze
    """
    schema = bitfield_class.bitfield_schema()

    print(f"{'=' * 19} {bitfield_class.__name__} {'=' * 19}")
    print(f"Base: {schema.base.name} ({schema.byte_len} bytes)")
    if schema.strict:
        print("Overflow: strict (raises)")
    else:
        print("Overflow: masked to field width")
    print()

    for line in _subfield_lines(schema):
        print(f"        {line}")

    print()


def _bitfield_lines(codec: MemberCodec) -> List[str]:
    if isinstance(codec, BitfieldMember):
        return _subfield_lines(codec.schema)
    if isinstance(codec, ArrayMember):
        return _bitfield_lines(codec.element)
    if isinstance(codec, StructMember):
        return [f"(layout of {codec.schema.model_class.__name__} listed separately)"]
    return []


def _subfield_lines(schema: BitfieldSchema) -> List[str]:
    lines = []
    for sub in schema.subfields:
        high = sub.shift + sub.bits - 1
        bits = f"bit {sub.shift}" if sub.bits == 1 else f"bits {sub.shift}-{high}"
        dots = "." * max(1, 32 - len(sub.name))
        lines.append(f"{sub.name}{dots}{bits} (mask 0x{sub.mask:x})")
    return lines
