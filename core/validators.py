# PATH: core/validators.py
"""
Validators for Sui addresses and object ids.

CONTRACTS:
- normalize_sui_address(): "0x" + 64 lowercase hex chars, left-padded
- is_valid_sui_address(): True for 1..64 hex chars with optional 0x prefix
"""

import re

from core.constants import SUI_ADDRESS_LENGTH
from core.exceptions import ValidationError

_HEX_ADDRESS_RE = re.compile(r"^(0x)?[0-9a-fA-F]{1,64}$")


def is_valid_sui_address(value: str) -> bool:
    """Check that value is a hex Sui address (short forms allowed)."""
    return isinstance(value, str) and bool(_HEX_ADDRESS_RE.match(value))


def normalize_sui_address(value: str) -> str:
    """
    Normalize a Sui address or object id.

    Example: normalize_sui_address("0xA") -> "0x000...00a"
    """
    if not is_valid_sui_address(value):
        raise ValidationError(
            f"Invalid Sui address: {value!r}",
            details={"value": value},
        )
    hex_part = value[2:] if value.lower().startswith("0x") else value
    return "0x" + hex_part.lower().rjust(SUI_ADDRESS_LENGTH * 2, "0")
