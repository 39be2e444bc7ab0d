"""Layout introspection for Pydantic models.

This module analyzes ByteStruct and Bitfield models once, when the class is
created, and turns their annotated fields into immutable layout descriptors:
StructSchema (member order, offsets, byte lengths and codecs) and
BitfieldSchema (sub-field order, widths and bit positions). Reads and writes
only ever walk these descriptors; nothing is re-validated per call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import (
    Annotated,
    Any,
    Dict,
    Iterable,
    List,
    Optional,
    Tuple,
    Type,
    get_args,
    get_origin,
)

from pydantic import BaseModel
from pydantic.fields import FieldInfo

from ..exceptions import EncodeError, LayoutError
from .bitpack import BitPacker, BitUnpacker, bit_mask
from .members import (
    ArrayMember,
    BitfieldMember,
    BytesMember,
    MemberCodec,
    PrimitiveMember,
    StructMember,
)
from .primitive import ByteOrder, PrimitiveCodec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MemberSchema:
    """Placement of a single struct member.

    Attributes:
        name: Field name
        offset: Byte offset from the start of the struct
        codec: Codec reading and writing the member
    """

    name: str
    offset: int
    codec: MemberCodec

    @property
    def byte_len(self) -> int:
        return self.codec.byte_len

    @property
    def end(self) -> int:
        return self.offset + self.codec.byte_len


@dataclass(frozen=True)
class StructSchema:
    """Layout descriptor of a ByteStruct model.

    Members are packed back to back in declaration order with no padding,
    so ``byte_len`` is exactly the sum of the member lengths.

    Example:
        >>> schema = StructSchema.from_model(GIFLogicalScreenDescriptor)
        >>> schema.byte_len
        7
        >>> [(m.name, m.offset) for m in schema.members]
        [('width', 0), ('height', 2), ('color_table_info', 4), ...]
    """

    model_class: Type[BaseModel]
    byte_order: ByteOrder
    members: Tuple[MemberSchema, ...]
    byte_len: int

    @classmethod
    def from_model(cls, model_class: Type[BaseModel]) -> StructSchema:
        """Build the layout of a ByteStruct model.

        Args:
            model_class: Pydantic model class to introspect

        Returns:
            StructSchema instance

        Raises:
            LayoutError: If a member has no fixed byte layout
        """
        byte_order = _coerce_byte_order(
            getattr(model_class, "bytestruct_byte_order", ByteOrder.LITTLE), model_class.__name__
        )

        members: List[MemberSchema] = []
        offset = 0
        for field_name, field_info in model_class.model_fields.items():
            codec = _codec_for_field(model_class.__name__, field_name, field_info)
            members.append(MemberSchema(name=field_name, offset=offset, codec=codec))
            offset += codec.byte_len

        schema = cls(
            model_class=model_class,
            byte_order=byte_order,
            members=tuple(members),
            byte_len=offset,
        )
        logger.debug(
            "built layout for %s: %d bytes, %d members, %s-endian",
            model_class.__name__,
            schema.byte_len,
            len(schema.members),
            byte_order.value,
        )
        return schema

    def read(self, data: memoryview) -> Any:
        """Decode a model instance from exactly ``byte_len`` bytes."""
        values: Dict[str, Any] = {}
        for member in self.members:
            view = data[member.offset : member.end]
            values[member.name] = member.codec.read(view, self.byte_order)
        return self.model_class.model_construct(**values)

    def write(self, message: BaseModel, buffer: memoryview) -> None:
        """Encode a model instance into exactly ``byte_len`` writable bytes.

        Raises:
            EncodeError: If a member value cannot be represented
        """
        for member in self.members:
            value = getattr(message, member.name)
            try:
                member.codec.write(value, buffer[member.offset : member.end], self.byte_order)
            except EncodeError as e:
                raise EncodeError(f"Field {member.name}: {e}") from e


@dataclass(frozen=True)
class SubfieldSchema:
    """Placement of a single bitfield sub-field.

    Attributes:
        name: Field name
        bits: Declared width in bits
        shift: Position of the lowest bit within the backing integer
        is_bool: Whether the field decodes to ``bool``
    """

    name: str
    bits: int
    shift: int
    is_bool: bool = False

    @property
    def is_flag(self) -> bool:
        """Whether the field is a single-bit boolean."""
        return self.is_bool and self.bits == 1

    @property
    def mask(self) -> int:
        """Mask of the sub-field in place within the backing integer."""
        return bit_mask(self.bits) << self.shift


@dataclass(frozen=True)
class BitfieldSchema:
    """Layout descriptor of a Bitfield model.

    Sub-fields are packed LSB-first: the first declared field occupies the
    least-significant bits of the backing integer. Their widths add up to the
    width of the backing integer exactly.

    On pack, a value wider than its field is masked to the low bits unless
    the model is strict, in which case EncodeError is raised.
    """

    model_class: Type[BaseModel]
    base: PrimitiveCodec
    subfields: Tuple[SubfieldSchema, ...]
    strict: bool = False

    @property
    def byte_len(self) -> int:
        return self.base.byte_len

    @classmethod
    def from_model(cls, model_class: Type[BaseModel]) -> BitfieldSchema:
        """Build and validate the layout of a Bitfield model.

        Raises:
            LayoutError: If the base is not an unsigned integer, a field has no
                positive width, or the widths do not sum to the base width
        """
        name = model_class.__name__
        base = getattr(model_class, "bytestruct_base", None)
        if not isinstance(base, PrimitiveCodec) or base.is_float or base.signed:
            raise LayoutError(
                f"Bitfield {name}: base must be an unsigned integer codec, got {base!r}"
            )

        subfields: List[SubfieldSchema] = []
        shift = 0
        for field_name, field_info in model_class.model_fields.items():
            bits = _bits_for_field(field_info)
            if bits is None:
                raise LayoutError(
                    f"Bitfield {name}: field {field_name} needs a width, declare it with Bits()"
                )
            if not isinstance(bits, int) or bits < 1:
                raise LayoutError(f"Bitfield {name}: field {field_name} has invalid width {bits!r}")
            subfields.append(
                SubfieldSchema(
                    name=field_name,
                    bits=bits,
                    shift=shift,
                    is_bool=field_info.annotation is bool,
                )
            )
            shift += bits

        if shift != base.bit_len:
            raise LayoutError(
                f"Bitfield {name}: field widths add up to {shift} bits, "
                f"base {base.name} has {base.bit_len} bits"
            )

        schema = cls(
            model_class=model_class,
            base=base,
            subfields=tuple(subfields),
            strict=bool(getattr(model_class, "bytestruct_strict", False)),
        )
        logger.debug(
            "built bitfield layout for %s: %s, %d fields",
            name,
            base.name,
            len(schema.subfields),
        )
        return schema

    def unpack(self, raw: int) -> Any:
        """Split a backing integer into a model instance."""
        unpacker = BitUnpacker(raw, self.base.bit_len)
        values: Dict[str, Any] = {}
        for sub in self.subfields:
            if sub.is_flag:
                values[sub.name] = unpacker.read_bool()
            else:
                value = unpacker.read_uint(sub.bits)
                values[sub.name] = bool(value) if sub.is_bool else value
        return self.model_class.model_construct(**values)

    def pack(self, message: BaseModel) -> int:
        """Combine the sub-fields of a model instance into the backing integer.

        Raises:
            EncodeError: If a value is not an integer, is negative, or (strict
                models only) does not fit its width
        """
        packer = BitPacker(self.base.bit_len)
        for sub in self.subfields:
            value = getattr(message, sub.name)
            if not isinstance(value, int):
                raise EncodeError(
                    f"Field {sub.name}: expected int, got {type(value).__name__}"
                )
            if sub.is_flag and isinstance(value, bool):
                packer.write_bool(value)
                continue
            try:
                packer.write_uint(int(value), sub.bits, strict=self.strict)
            except ValueError as e:
                raise EncodeError(f"Field {sub.name}: {e}") from e
        return packer.to_int()


def _coerce_byte_order(value: Any, owner: str) -> ByteOrder:
    try:
        return ByteOrder(value)
    except ValueError as e:
        raise LayoutError(f"{owner}: invalid byte order {value!r}") from e


def _bits_for_field(field_info: FieldInfo) -> Optional[int]:
    extra = field_info.json_schema_extra
    if isinstance(extra, dict):
        return extra.get("bits")  # type: ignore[return-value]
    return None


def _flatten_metadata(metadata: Iterable[Any]) -> List[Any]:
    """Expand FieldInfo objects found in Annotated metadata into their constraints."""
    flat: List[Any] = []
    for item in metadata:
        if isinstance(item, FieldInfo):
            flat.extend(item.metadata)
        else:
            flat.append(item)
    return flat


def _fixed_length(metadata: List[Any]) -> Optional[int]:
    min_length = None
    max_length = None
    for constraint in metadata:
        if hasattr(constraint, "min_length"):
            min_length = constraint.min_length
        if hasattr(constraint, "max_length"):
            max_length = constraint.max_length
    if max_length is None or min_length != max_length:
        return None
    return max_length


def _codec_for_field(owner: str, name: str, field_info: FieldInfo) -> MemberCodec:
    annotation = field_info.annotation
    if annotation is None:
        raise LayoutError(f"{owner}: field {name} has no type annotation")
    return _resolve_codec(owner, name, annotation, _flatten_metadata(field_info.metadata), None)


def _resolve_codec(
    owner: str,
    name: str,
    annotation: Any,
    metadata: List[Any],
    inherited_order: Optional[ByteOrder],
) -> MemberCodec:
    """Map an annotation and its metadata to a member codec.

    Args:
        owner: Name of the struct being built (for error messages)
        name: Field name (for error messages)
        annotation: Type annotation with top-level Annotated already stripped
        metadata: Flattened Annotated metadata of the field
        inherited_order: Byte order override of an enclosing array
    """
    byte_order = inherited_order
    codec: Optional[PrimitiveCodec] = None
    for item in metadata:
        if isinstance(item, ByteOrder):
            byte_order = item
        elif isinstance(item, PrimitiveCodec):
            codec = item

    if codec is not None:
        return PrimitiveMember(codec, byte_order)

    origin = get_origin(annotation)
    if origin is list:
        length = _fixed_length(metadata)
        if length is None:
            raise LayoutError(
                f"{owner}: list field {name} needs a fixed length, declare it with FixedArray()"
            )
        args = get_args(annotation)
        if not args:
            raise LayoutError(f"{owner}: list field {name} needs an element type")
        element_annotation, element_metadata = _split_annotated(args[0])
        element = _resolve_codec(owner, name, element_annotation, element_metadata, byte_order)
        return ArrayMember(element, length)

    if annotation is bytes:
        length = _fixed_length(metadata)
        if length is None:
            raise LayoutError(
                f"{owner}: bytes field {name} needs a fixed length, declare it with FixedBytes()"
            )
        return BytesMember(length)

    # Anything exposing a layout classmethod composes, not only the bundled base classes
    if isinstance(annotation, type):
        if hasattr(annotation, "bitfield_schema"):
            return BitfieldMember(annotation.bitfield_schema(), byte_order)
        if hasattr(annotation, "struct_schema"):
            if byte_order is not None:
                raise LayoutError(
                    f"{owner}: field {name} overrides the byte order of nested struct "
                    f"{annotation.__name__}, which always uses its own"
                )
            return StructMember(annotation.struct_schema())

    if annotation in (int, float):
        raise LayoutError(
            f"{owner}: field {name} needs a fixed width, use one of U8..U128, I8..I128, F32, F64"
        )

    raise LayoutError(f"{owner}: field {name} has type {annotation!r} with no fixed byte layout")


def _split_annotated(annotation: Any) -> Tuple[Any, List[Any]]:
    if get_origin(annotation) is Annotated:
        inner, *metadata = get_args(annotation)
        return inner, _flatten_metadata(metadata)
    return annotation, []
