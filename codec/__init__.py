"""
codec/ - BCS decoding of view-call return values.

Modules:
- schema: declarative return-value schemas
- decoder: generic schema-driven decoder
"""

from codec.decoder import BcsReader, decode, decode_all
from codec.schema import (
    ADDRESS,
    BOOL,
    ID,
    ORDER_ID_SET,
    U8,
    U16,
    U32,
    U64,
    U64_VECTOR,
    U128,
    U256,
    Address,
    Bool,
    Scalar,
    Schema,
    Sequence,
    SetOf,
    Struct,
)

__all__ = [
    # Decoding
    "BcsReader",
    "decode",
    "decode_all",
    # Schemas
    "ADDRESS",
    "BOOL",
    "ID",
    "ORDER_ID_SET",
    "U8",
    "U16",
    "U32",
    "U64",
    "U64_VECTOR",
    "U128",
    "U256",
    "Address",
    "Bool",
    "Scalar",
    "Schema",
    "Sequence",
    "SetOf",
    "Struct",
]
