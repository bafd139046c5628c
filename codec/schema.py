"""
codec/schema.py - Declarative BCS return-value schemas.

A schema is plain data describing the shape of one return slot:
- Scalar(width): little-endian unsigned int of width bytes
- Bool: one byte, 0 or 1
- Address: 32 raw bytes
- Sequence(T): ULEB128 length, then that many T
- SetOf(T): encoded like Sequence(T); elements must be unique
- Struct(fields): fields decoded back to back

New return shapes are new schema values, not new decoding code.
"""

from dataclasses import dataclass
from typing import Tuple, Union


@dataclass(frozen=True)
class Scalar:
    width: int
    name: str = ""

    def __post_init__(self):
        if self.width not in (1, 2, 4, 8, 16, 32):
            raise ValueError(f"Unsupported scalar width: {self.width}")


@dataclass(frozen=True)
class Bool:
    pass


@dataclass(frozen=True)
class Address:
    pass


@dataclass(frozen=True)
class Sequence:
    element: "Schema"


@dataclass(frozen=True)
class SetOf:
    element: "Schema"


@dataclass(frozen=True)
class Struct:
    """
    Named fields decoded in order.

    A single-field struct decodes to the field's value so Move
    wrappers like ID { bytes } stay transparent.
    """
    name: str
    fields: Tuple[Tuple[str, "Schema"], ...]

    def __post_init__(self):
        names = [name for name, _ in self.fields]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate field names in struct {self.name}: {duplicates}")


Schema = Union[Scalar, Bool, Address, Sequence, SetOf, Struct]


U8 = Scalar(1, "u8")
U16 = Scalar(2, "u16")
U32 = Scalar(4, "u32")
U64 = Scalar(8, "u64")
U128 = Scalar(16, "u128")
U256 = Scalar(32, "u256")
BOOL = Bool()
ADDRESS = Address()

# sui::object::ID
ID = Struct("ID", (("bytes", ADDRESS),))

# sui::vec_set::VecSet<u128>, as returned by pool::account_open_orders
ORDER_ID_SET = Struct("VecSet", (("contents", SetOf(U128)),))

U64_VECTOR = Sequence(U64)


def describe(schema: Schema) -> str:
    """Human-readable schema name for error messages."""
    if isinstance(schema, Scalar):
        return schema.name or f"u{schema.width * 8}"
    if isinstance(schema, Bool):
        return "bool"
    if isinstance(schema, Address):
        return "address"
    if isinstance(schema, Sequence):
        return f"vector<{describe(schema.element)}>"
    if isinstance(schema, SetOf):
        return f"set<{describe(schema.element)}>"
    if isinstance(schema, Struct):
        return schema.name
    raise TypeError(f"Not a schema: {schema!r}")
