"""Base model classes and bytestruct-specific Pydantic configuration.

This module provides ByteStruct, the base class of every packed record, and
Bitfield, the base class of every bit-packed integer. The layout of each
subclass is derived once, when the class is created, and cached on it.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict

from ..codec.buffer import Buffer, WritableBuffer, checked_view
from ..codec.decoder import decode
from ..codec.encoder import encode, encode_into
from ..codec.primitive import UINT8, ByteOrder, PrimitiveCodec
from ..codec.schema import BitfieldSchema, StructSchema

_MODEL_CONFIG = ConfigDict(
    # Reject values that do not fit their declared width on assignment too
    validate_assignment=True,
    # Forbid extra fields not defined in schema
    extra="forbid",
)


class ByteStruct(BaseModel):
    """Base class for all packed records.

    Members are declared as annotated fields and are serialized in
    declaration order with no padding. Integer and float members take the
    struct's byte order unless they carry their own.

    bytestruct-specific options are configured as ClassVar attributes:

    Example:
        >>> from typing import List
        >>> class Header(ByteStruct):
        ...     magic: Annotated[U32, ByteOrder.BIG]
        ...     version: U16
        ...     samples: List[U16] = FixedArray(length=3)
        ...
        ...     bytestruct_byte_order: ClassVar[ByteOrder] = ByteOrder.LITTLE
        >>> Header.BYTE_LEN
        12

    Attributes:
        bytestruct_byte_order: Default byte order of the members
        BYTE_LEN: Packed length in bytes, fixed when the class is created
    """

    model_config = _MODEL_CONFIG

    bytestruct_byte_order: ClassVar[ByteOrder] = ByteOrder.LITTLE
    BYTE_LEN: ClassVar[int] = 0

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        """Hook called once Pydantic has finished building a subclass.

        Derives and caches the layout so that declaration errors surface at
        class creation. Classes with unresolved forward references are laid
        out on first use instead.
        """
        super().__pydantic_init_subclass__(**kwargs)
        if cls.__pydantic_complete__:
            cls.struct_schema()

    @classmethod
    def struct_schema(cls) -> StructSchema:
        """Return the cached layout descriptor of this struct."""
        schema = cls.__dict__.get("__bytestruct_schema__")
        if schema is None:
            if not cls.__pydantic_complete__:
                cls.model_rebuild()
            schema = StructSchema.from_model(cls)
            cls.__bytestruct_schema__ = schema
            cls.BYTE_LEN = schema.byte_len
        return schema

    @classmethod
    def read_bytes(cls, data: Buffer, offset: int = 0) -> Any:
        """Unpack an instance from a buffer.

        See :func:`bytestruct.decode`.
        """
        return decode(cls, data, offset)

    def write_bytes(self, buffer: WritableBuffer, offset: int = 0) -> int:
        """Pack this instance into a writable buffer.

        See :func:`bytestruct.encode_into`.
        """
        return encode_into(self, buffer, offset)

    def to_bytes(self) -> bytes:
        """Pack this instance into a new bytes object."""
        return encode(self)


class ByteStructLE(ByteStruct):
    """ByteStruct whose members default to little-endian."""

    bytestruct_byte_order: ClassVar[ByteOrder] = ByteOrder.LITTLE


class ByteStructBE(ByteStruct):
    """ByteStruct whose members default to big-endian."""

    bytestruct_byte_order: ClassVar[ByteOrder] = ByteOrder.BIG


class Bitfield(BaseModel):
    """Base class for bit-packed integers.

    Sub-fields are declared with Bits() from the least-significant bit
    upwards and must fill the backing integer exactly; use an explicit
    field for padding. A Bitfield has no byte order of its own: inside a
    struct it follows the struct's order, standalone the caller picks one.

    Writing a value wider than its field keeps only its low bits. Set
    ``bytestruct_strict`` to raise EncodeError instead.

    Example:
        >>> class ColorTableInfo(Bitfield):
        ...     global_color_table_flag: int = Bits(1)
        ...     color_resolution: int = Bits(3)
        ...     sort_flag: int = Bits(1)
        ...     global_color_table_size: int = Bits(3)
        ...
        ...     bytestruct_base: ClassVar[PrimitiveCodec] = UINT8
        >>> ColorTableInfo.from_raw(0xF7)
        ColorTableInfo(global_color_table_flag=1, color_resolution=3, sort_flag=1, ...)

    Attributes:
        bytestruct_base: Unsigned integer codec backing the bitfield
        bytestruct_strict: Raise on overflow instead of masking
        BYTE_LEN: Length of the backing integer in bytes
    """

    model_config = _MODEL_CONFIG

    bytestruct_base: ClassVar[PrimitiveCodec] = UINT8
    bytestruct_strict: ClassVar[bool] = False
    BYTE_LEN: ClassVar[int] = 0

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        """Validate the layout when the class is created.

        Subclasses without fields only carry configuration for further
        subclasses and are not laid out.
        """
        super().__pydantic_init_subclass__(**kwargs)
        if cls.__pydantic_complete__ and cls.model_fields:
            cls.bitfield_schema()

    @classmethod
    def bitfield_schema(cls) -> BitfieldSchema:
        """Return the cached layout descriptor of this bitfield."""
        schema = cls.__dict__.get("__bytestruct_schema__")
        if schema is None:
            if not cls.__pydantic_complete__:
                cls.model_rebuild()
            schema = BitfieldSchema.from_model(cls)
            cls.__bytestruct_schema__ = schema
            cls.BYTE_LEN = schema.byte_len
        return schema

    @classmethod
    def from_raw(cls, raw: int) -> Any:
        """Split a backing integer into sub-fields."""
        return cls.bitfield_schema().unpack(raw)

    def to_raw(self) -> int:
        """Combine the sub-fields into the backing integer."""
        return self.bitfield_schema().pack(self)

    @classmethod
    def read_bytes(
        cls, data: Buffer, byte_order: ByteOrder = ByteOrder.LITTLE, offset: int = 0
    ) -> Any:
        """Unpack an instance from a buffer.

        Args:
            data: Buffer holding at least ``BYTE_LEN`` bytes after ``offset``
            byte_order: Byte order of the backing integer
            offset: Position of the first byte

        Raises:
            BufferTooShortError: If the buffer is too short
        """
        schema = cls.bitfield_schema()
        view = checked_view(cls.__name__, data, offset, schema.byte_len)
        return schema.unpack(schema.base.read(view, ByteOrder(byte_order)))

    def write_bytes(
        self,
        buffer: WritableBuffer,
        byte_order: ByteOrder = ByteOrder.LITTLE,
        offset: int = 0,
    ) -> int:
        """Pack this instance into a writable buffer.

        Returns:
            Number of bytes written

        Raises:
            BufferTooShortError: If the buffer is too short
            EncodeError: If a sub-field cannot be packed
        """
        schema = self.bitfield_schema()
        view = checked_view(type(self).__name__, buffer, offset, schema.byte_len, writable=True)
        schema.base.write(schema.pack(self), view, ByteOrder(byte_order))
        return schema.byte_len

    def to_bytes(self, byte_order: ByteOrder = ByteOrder.LITTLE) -> bytes:
        """Pack this instance into a new bytes object."""
        buffer = bytearray(self.BYTE_LEN)
        self.write_bytes(buffer, byte_order)
        return bytes(buffer)

