"""Property-based tests using hypothesis."""

from __future__ import annotations

import struct
from typing import Annotated, ClassVar, List

from hypothesis import given
from hypothesis import strategies as st

from bytestruct import (
    F32,
    F64,
    I32,
    U8,
    U16,
    U64,
    Bitfield,
    Bits,
    ByteOrder,
    ByteStructBE,
    ByteStructLE,
    FixedArray,
    Flag,
    decode,
    encode,
)
from bytestruct.codec.primitive import (
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

INTEGER_CODECS = [
    UINT8,
    INT8,
    UINT16,
    INT16,
    UINT32,
    INT32,
    UINT64,
    INT64,
    UINT128,
    INT128,
]

byte_orders = st.sampled_from([ByteOrder.LITTLE, ByteOrder.BIG])


class Status(Bitfield):
    """Mixed-width bitfield for property testing."""

    ready: bool = Flag()
    mode: int = Bits(3)
    level: int = Bits(12)

    bytestruct_base: ClassVar[PrimitiveCodec] = UINT16


class Sample(ByteStructBE):
    """Big-endian sample."""

    channel: U8
    reading: I32


class Navigation(ByteStructLE):
    """Record with float members."""

    depth: F32
    heading: F64


class Record(ByteStructLE):
    """Record for property testing."""

    sequence: U64
    status: Status
    samples: List[Sample] = FixedArray(length=2)
    checksum: Annotated[U16, ByteOrder.BIG]


records = st.builds(
    Record,
    sequence=st.integers(min_value=0, max_value=UINT64.max_value),
    status=st.builds(
        Status,
        ready=st.booleans(),
        mode=st.integers(min_value=0, max_value=7),
        level=st.integers(min_value=0, max_value=4095),
    ),
    samples=st.lists(
        st.builds(
            Sample,
            channel=st.integers(min_value=0, max_value=255),
            reading=st.integers(min_value=INT32.min_value, max_value=INT32.max_value),
        ),
        min_size=2,
        max_size=2,
    ),
    checksum=st.integers(min_value=0, max_value=0xFFFF),
)


class TestPrimitiveProperties:
    """Property-based tests for primitive codecs."""

    @given(data=st.data(), byte_order=byte_orders)
    def test_integer_roundtrip(self, data: st.DataObject, byte_order: ByteOrder) -> None:
        """Test read(write(v)) == v for every integer width."""
        codec = data.draw(st.sampled_from(INTEGER_CODECS))
        value = data.draw(st.integers(min_value=codec.min_value, max_value=codec.max_value))
        buffer = bytearray(codec.byte_len)

        codec.write(value, memoryview(buffer), byte_order)

        assert codec.read(memoryview(buffer), byte_order) == value

    @given(data=st.data(), byte_order=byte_orders)
    def test_integer_bytes_roundtrip(self, data: st.DataObject, byte_order: ByteOrder) -> None:
        """Test write(read(bytes)) == bytes for every integer width."""
        codec = data.draw(st.sampled_from(INTEGER_CODECS))
        raw = data.draw(st.binary(min_size=codec.byte_len, max_size=codec.byte_len))
        buffer = bytearray(codec.byte_len)

        codec.write(codec.read(memoryview(raw), byte_order), memoryview(buffer), byte_order)

        assert bytes(buffer) == raw

    @given(value=st.floats(allow_nan=False), byte_order=byte_orders)
    def test_f64_roundtrip(self, value: float, byte_order: ByteOrder) -> None:
        """Test f64 values survive unchanged."""
        buffer = bytearray(8)
        FLOAT64.write(value, memoryview(buffer), byte_order)

        assert FLOAT64.read(memoryview(buffer), byte_order) == value

    @given(raw=st.binary(min_size=4, max_size=4), byte_order=byte_orders)
    def test_f32_bytes_roundtrip(self, raw: bytes, byte_order: ByteOrder) -> None:
        """Test every f32 bit pattern survives unchanged, NaN payloads included."""
        value = FLOAT32.read(memoryview(raw), byte_order)
        buffer = bytearray(4)

        FLOAT32.write(value, memoryview(buffer), byte_order)

        assert bytes(buffer) == raw

    @given(raw=st.binary(min_size=8, max_size=8), byte_order=byte_orders)
    def test_f64_bytes_roundtrip(self, raw: bytes, byte_order: ByteOrder) -> None:
        """Test every f64 bit pattern survives unchanged."""
        buffer = bytearray(8)

        FLOAT64.write(FLOAT64.read(memoryview(raw), byte_order), memoryview(buffer), byte_order)

        assert bytes(buffer) == raw

    @given(value=st.integers(min_value=0, max_value=0xFFFFFFFF))
    def test_byte_orders_are_reversed(self, value: int) -> None:
        """Test big-endian bytes are the reverse of little-endian bytes."""
        little = bytearray(4)
        big = bytearray(4)
        UINT32.write(value, memoryview(little), ByteOrder.LITTLE)
        UINT32.write(value, memoryview(big), ByteOrder.BIG)

        assert bytes(big) == bytes(reversed(little))
        assert bytes(big) == struct.pack(">I", value)


class TestBitfieldProperties:
    """Property-based tests for bitfields."""

    @given(raw=st.integers(min_value=0, max_value=0xFFFF))
    def test_raw_roundtrip(self, raw: int) -> None:
        """Test to_raw(from_raw(raw)) == raw."""
        assert Status.from_raw(raw).to_raw() == raw

    @given(
        ready=st.booleans(),
        mode=st.integers(min_value=0, max_value=7),
        level=st.integers(min_value=0, max_value=4095),
    )
    def test_fields_roundtrip(self, ready: bool, mode: int, level: int) -> None:
        """Test values within their widths survive unchanged."""
        status = Status(ready=ready, mode=mode, level=level)

        assert Status.from_raw(status.to_raw()) == status

    @given(mode=st.integers(min_value=0, max_value=1 << 20))
    def test_overflow_is_masked(self, mode: int) -> None:
        """Test oversized values keep only their low bits."""
        status = Status(ready=False, mode=mode, level=0)

        assert Status.from_raw(status.to_raw()).mode == mode & 0b111


class TestStructProperties:
    """Property-based tests for struct codec."""

    @given(record=records)
    def test_encode_decode_roundtrip(self, record: Record) -> None:
        """Test decode(encode(v)) == v."""
        data = encode(record)

        assert len(data) == Record.BYTE_LEN
        assert decode(Record, data) == record

    @given(raw=st.binary(min_size=Record.BYTE_LEN, max_size=Record.BYTE_LEN))
    def test_decode_encode_roundtrip(self, raw: bytes) -> None:
        """Test encode(decode(bytes)) == bytes."""
        assert encode(decode(Record, raw)) == raw

    @given(
        raw=st.binary(min_size=Record.BYTE_LEN, max_size=Record.BYTE_LEN),
        prefix=st.binary(max_size=8),
        suffix=st.binary(max_size=8),
    )
    def test_decode_at_offset(self, raw: bytes, prefix: bytes, suffix: bytes) -> None:
        """Test the surrounding bytes do not affect decoding."""
        assert decode(Record, prefix + raw + suffix, offset=len(prefix)) == decode(Record, raw)

    @given(record=records, prefix=st.binary(max_size=8), suffix=st.binary(max_size=8))
    def test_encode_into_leaves_surroundings(
        self, record: Record, prefix: bytes, suffix: bytes
    ) -> None:
        """Test encode_into only touches its own bytes."""
        buffer = bytearray(prefix + bytes(Record.BYTE_LEN) + suffix)
        written = record.write_bytes(buffer, offset=len(prefix))

        assert written == Record.BYTE_LEN
        assert buffer == bytearray(prefix + encode(record) + suffix)

    @given(
        depth=st.floats(allow_nan=False, width=32),
        heading=st.floats(allow_nan=False),
    )
    def test_float_struct_roundtrip(self, depth: float, heading: float) -> None:
        """Test float members survive unchanged."""
        msg = Navigation(depth=depth, heading=heading)

        assert decode(Navigation, encode(msg)) == msg

    @given(raw=st.binary(min_size=Navigation.BYTE_LEN, max_size=Navigation.BYTE_LEN))
    def test_float_struct_bytes_roundtrip(self, raw: bytes) -> None:
        """Test encode(decode(bytes)) == bytes with float members."""
        assert encode(decode(Navigation, raw)) == raw
