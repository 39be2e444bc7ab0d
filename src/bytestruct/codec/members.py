"""Member codecs composed by struct layouts.

Every member of a struct is handled by a MemberCodec: it knows its fixed
byte length and reads or writes exactly that many bytes. A struct passes its
own byte order down as the default; members that carry an explicit override
use it instead, and nested structs always keep the order they were declared
with.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, List, Optional

from ..exceptions import EncodeError
from .primitive import ByteOrder, PrimitiveCodec

if TYPE_CHECKING:
    from .schema import BitfieldSchema, StructSchema


class MemberCodec(ABC):
    """Abstract codec for one fixed-size member."""

    byte_len: int

    @abstractmethod
    def read(self, data: memoryview, byte_order: ByteOrder) -> Any:
        """Decode exactly ``byte_len`` bytes."""

    @abstractmethod
    def write(self, value: Any, buffer: memoryview, byte_order: ByteOrder) -> None:
        """Encode ``value`` into exactly ``byte_len`` bytes."""

    @abstractmethod
    def describe(self) -> str:
        """Return a short human-readable type description."""


class PrimitiveMember(MemberCodec):
    """A single integer or float."""

    def __init__(self, codec: PrimitiveCodec, byte_order: Optional[ByteOrder] = None) -> None:
        self.codec = codec
        self.byte_order = byte_order
        self.byte_len = codec.byte_len

    def read(self, data: memoryview, byte_order: ByteOrder) -> Any:
        return self.codec.read(data, self.byte_order or byte_order)

    def write(self, value: Any, buffer: memoryview, byte_order: ByteOrder) -> None:
        self.codec.write(value, buffer, self.byte_order or byte_order)

    def describe(self) -> str:
        if self.byte_order is not None and self.byte_len > 1:
            return f"{self.codec.name} ({self.byte_order.value})"
        return self.codec.name


class BitfieldMember(MemberCodec):
    """A bitfield, serialized through its backing integer."""

    def __init__(self, schema: BitfieldSchema, byte_order: Optional[ByteOrder] = None) -> None:
        self.schema = schema
        self.byte_order = byte_order
        self.byte_len = schema.byte_len

    def read(self, data: memoryview, byte_order: ByteOrder) -> Any:
        raw = self.schema.base.read(data, self.byte_order or byte_order)
        return self.schema.unpack(raw)

    def write(self, value: Any, buffer: memoryview, byte_order: ByteOrder) -> None:
        if not isinstance(value, self.schema.model_class):
            raise EncodeError(
                f"expected {self.schema.model_class.__name__}, got {type(value).__name__}"
            )
        raw = self.schema.pack(value)
        self.schema.base.write(raw, buffer, self.byte_order or byte_order)

    def describe(self) -> str:
        return f"{self.schema.model_class.__name__} (bitfield {self.schema.base.name})"


class StructMember(MemberCodec):
    """A nested struct. The caller's byte order is ignored."""

    def __init__(self, schema: StructSchema) -> None:
        self.schema = schema
        self.byte_len = schema.byte_len

    def read(self, data: memoryview, byte_order: ByteOrder) -> Any:
        return self.schema.read(data)

    def write(self, value: Any, buffer: memoryview, byte_order: ByteOrder) -> None:
        if not isinstance(value, self.schema.model_class):
            raise EncodeError(
                f"expected {self.schema.model_class.__name__}, got {type(value).__name__}"
            )
        self.schema.write(value, buffer)

    def describe(self) -> str:
        return f"{self.schema.model_class.__name__} (struct, {self.schema.byte_order.value})"


class ArrayMember(MemberCodec):
    """A fixed number of elements laid out back to back in index order."""

    def __init__(self, element: MemberCodec, length: int) -> None:
        self.element = element
        self.length = length
        self.byte_len = element.byte_len * length

    def read(self, data: memoryview, byte_order: ByteOrder) -> List[Any]:
        size = self.element.byte_len
        return [
            self.element.read(data[i * size : (i + 1) * size], byte_order)
            for i in range(self.length)
        ]

    def write(self, value: Any, buffer: memoryview, byte_order: ByteOrder) -> None:
        if not isinstance(value, (list, tuple)):
            raise EncodeError(f"expected list, got {type(value).__name__}")
        if len(value) != self.length:
            raise EncodeError(f"expected {self.length} elements, got {len(value)} elements")

        size = self.element.byte_len
        for i, element in enumerate(value):
            try:
                self.element.write(element, buffer[i * size : (i + 1) * size], byte_order)
            except EncodeError as e:
                raise EncodeError(f"element {i}: {e}") from e

    def describe(self) -> str:
        return f"[{self.element.describe()}; {self.length}]"


class BytesMember(MemberCodec):
    """Raw bytes copied verbatim."""

    def __init__(self, length: int) -> None:
        self.byte_len = length

    def read(self, data: memoryview, byte_order: ByteOrder) -> bytes:
        return bytes(data)

    def write(self, value: Any, buffer: memoryview, byte_order: ByteOrder) -> None:
        if not isinstance(value, (bytes, bytearray)):
            raise EncodeError(f"expected bytes, got {type(value).__name__}")
        if len(value) != self.byte_len:
            raise EncodeError(f"expected {self.byte_len} bytes, got {len(value)} bytes")
        buffer[:] = value

    def describe(self) -> str:
        return f"bytes[{self.byte_len}]"
