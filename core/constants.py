# PATH: core/constants.py
"""
Constants for the DeepBook query client.

Contains enums, scalars, well-known object ids and RPC defaults.
"""

from enum import Enum
from typing import Final

# =============================================================================
# SCALARS
# =============================================================================

# On-chain prices are fixed point with 9 decimals
FLOAT_SCALAR: Final[int] = 1_000_000_000

# DEEP has 6 decimals
DEEP_SCALAR: Final[int] = 1_000_000

# Decimal precision for normalization. u256 fits in 78 digits.
DECIMAL_PRECISION: Final[int] = 78

# Largest value a Move u64 argument can carry
U64_MAX: Final[int] = 2**64 - 1

# =============================================================================
# WELL-KNOWN OBJECTS AND ADDRESSES
# =============================================================================

SUI_ADDRESS_LENGTH: Final[int] = 32

# Shared clock object
SUI_CLOCK_OBJECT_ID: Final[str] = "0x" + "6".rjust(64, "0")

# Placeholder sender for view calls that read no sender context
PLACEHOLDER_SENDER: Final[str] = "0x" + "a".rjust(64, "0")

# =============================================================================
# RPC DEFAULTS
# =============================================================================

DEFAULT_RPC_TIMEOUT_SECONDS: Final[int] = 10

DEFAULT_RPC_URLS: Final[dict[str, tuple[str, ...]]] = {
    "mainnet": ("https://fullnode.mainnet.sui.io:443",),
    "testnet": ("https://fullnode.testnet.sui.io:443",),
}


class Environment(str, Enum):
    """Sui networks with a DeepBook deployment."""
    MAINNET = "mainnet"
    TESTNET = "testnet"


class ErrorCode(str, Enum):
    """Error codes carried by every DeepBookError."""
    # Lookup failures
    NOT_FOUND = "NOT_FOUND"
    MANAGER_NOT_FOUND = "MANAGER_NOT_FOUND"
    COIN_NOT_FOUND = "COIN_NOT_FOUND"
    POOL_NOT_FOUND = "POOL_NOT_FOUND"

    # Decoding
    DECODE_SHORT_BUFFER = "DECODE_SHORT_BUFFER"
    DECODE_TRAILING_BYTES = "DECODE_TRAILING_BYTES"
    DECODE_BAD_LENGTH = "DECODE_BAD_LENGTH"
    DECODE_BAD_VALUE = "DECODE_BAD_VALUE"
    DECODE_SLOT_MISMATCH = "DECODE_SLOT_MISMATCH"

    # Simulation
    SIMULATION_ABORTED = "SIMULATION_ABORTED"
    SIMULATION_REJECTED = "SIMULATION_REJECTED"

    # Infrastructure
    INFRA_RPC_ERROR = "INFRA_RPC_ERROR"
    INFRA_TIMEOUT = "INFRA_TIMEOUT"

    # Local validation / configuration
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONFIG_ERROR = "CONFIG_ERROR"

    UNKNOWN = "UNKNOWN"
