"""
codec/decoder.py - Generic BCS decoder driven by codec.schema.

decode() is pure: same bytes and schema always give the same value.
It consumes exactly the bytes the schema implies; short buffers,
overrunning length prefixes and trailing bytes raise DecodeError.
"""

from typing import Any, List, Sequence as Seq

from codec import schema as s
from core.constants import ErrorCode, SUI_ADDRESS_LENGTH
from core.exceptions import DecodeError

# ULEB128 lengths in BCS are capped at u32
MAX_ULEB128_BYTES = 5
MAX_SEQUENCE_LENGTH = 2**31 - 1


class BcsReader:
    """Cursor over a byte buffer."""

    def __init__(self, data: bytes):
        self.data = bytes(data)
        self.offset = 0

    @property
    def remaining(self) -> int:
        return len(self.data) - self.offset

    def read(self, size: int) -> bytes:
        if size > self.remaining:
            raise DecodeError(
                f"Buffer too short: need {size} bytes at offset {self.offset}, "
                f"{self.remaining} left",
                code=ErrorCode.DECODE_SHORT_BUFFER,
                details={"offset": self.offset, "needed": size, "remaining": self.remaining},
            )
        chunk = self.data[self.offset:self.offset + size]
        self.offset += size
        return chunk

    def read_uint(self, width: int) -> int:
        return int.from_bytes(self.read(width), "little")

    def read_uleb128(self) -> int:
        value = 0
        for shift_index in range(MAX_ULEB128_BYTES):
            byte = self.read(1)[0]
            value |= (byte & 0x7F) << (7 * shift_index)
            if not byte & 0x80:
                # Canonical form only: no redundant trailing zero groups
                if byte == 0 and shift_index > 0:
                    raise DecodeError(
                        "Non-canonical ULEB128 length",
                        code=ErrorCode.DECODE_BAD_LENGTH,
                        details={"offset": self.offset},
                    )
                if value > MAX_SEQUENCE_LENGTH:
                    break
                return value
        raise DecodeError(
            "ULEB128 length out of range",
            code=ErrorCode.DECODE_BAD_LENGTH,
            details={"offset": self.offset},
        )


def _min_encoded_size(schema: s.Schema) -> int:
    """Smallest number of bytes one element of schema can occupy."""
    if isinstance(schema, s.Scalar):
        return schema.width
    if isinstance(schema, s.Bool):
        return 1
    if isinstance(schema, s.Address):
        return SUI_ADDRESS_LENGTH
    if isinstance(schema, (s.Sequence, s.SetOf)):
        return 1
    if isinstance(schema, s.Struct):
        return sum(_min_encoded_size(f) for _, f in schema.fields)
    raise TypeError(f"Not a schema: {schema!r}")


def _read_elements(reader: BcsReader, element: s.Schema) -> List[Any]:
    start = reader.offset
    length = reader.read_uleb128()
    needed = length * _min_encoded_size(element)
    if needed > reader.remaining:
        raise DecodeError(
            f"Length prefix {length} overruns buffer: needs at least {needed} bytes, "
            f"{reader.remaining} left",
            code=ErrorCode.DECODE_BAD_LENGTH,
            details={"offset": start, "length": length, "remaining": reader.remaining},
        )
    return [_read_value(reader, element) for _ in range(length)]


def _read_value(reader: BcsReader, schema: s.Schema) -> Any:
    if isinstance(schema, s.Scalar):
        return reader.read_uint(schema.width)

    if isinstance(schema, s.Bool):
        byte = reader.read(1)[0]
        if byte > 1:
            raise DecodeError(
                f"Invalid bool byte: {byte}",
                code=ErrorCode.DECODE_BAD_VALUE,
                details={"offset": reader.offset - 1, "byte": byte},
            )
        return byte == 1

    if isinstance(schema, s.Address):
        return "0x" + reader.read(SUI_ADDRESS_LENGTH).hex()

    if isinstance(schema, s.Sequence):
        return _read_elements(reader, schema.element)

    if isinstance(schema, s.SetOf):
        start = reader.offset
        elements = _read_elements(reader, schema.element)
        seen = set()
        for element in elements:
            marker = repr(element)
            if marker in seen:
                raise DecodeError(
                    f"Duplicate element in {s.describe(schema)}: {element}",
                    code=ErrorCode.DECODE_BAD_VALUE,
                    details={"offset": start},
                )
            seen.add(marker)
        return elements

    if isinstance(schema, s.Struct):
        values = {name: _read_value(reader, field) for name, field in schema.fields}
        if len(values) == 1:
            return next(iter(values.values()))
        return values

    raise TypeError(f"Not a schema: {schema!r}")


def decode(buffer: bytes, schema: s.Schema) -> Any:
    """
    Decode one BCS value.

    Args:
        buffer: Raw bytes of one return slot
        schema: Shape of the value

    Returns:
        int, bool, address str, list or dict depending on schema

    Raises:
        DecodeError: short buffer, bad length prefix, bad bool, duplicate
            set element or trailing bytes
    """
    reader = BcsReader(buffer)
    value = _read_value(reader, schema)
    if reader.remaining:
        raise DecodeError(
            f"{reader.remaining} trailing bytes after {s.describe(schema)}",
            code=ErrorCode.DECODE_TRAILING_BYTES,
            details={"consumed": reader.offset, "total": len(reader.data)},
        )
    return value


def decode_all(buffers: Seq[bytes], schemas: Seq[s.Schema]) -> List[Any]:
    """Decode return slots in order; slot count must match schema count."""
    if len(buffers) != len(schemas):
        raise DecodeError(
            f"Expected {len(schemas)} return values, got {len(buffers)}",
            code=ErrorCode.DECODE_SLOT_MISMATCH,
            details={"expected": len(schemas), "actual": len(buffers)},
        )
    return [decode(buffer, schema) for buffer, schema in zip(buffers, schemas)]
