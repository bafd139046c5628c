"""
core - Core utilities and models for the DeepBook query client.

This package contains:
- models.py: Coin/Pool/BalanceManager descriptors and query results
- constants.py: Scalars, well-known ids, error codes
- exceptions.py: Typed exceptions with error codes
- math.py: Scalar normalization (no float)
- validators.py: Sui address and Move target validation
- time.py: Timestamps and latency helpers
- logging.py: Structured JSON logging
"""

from core.constants import (
    DEEP_SCALAR,
    FLOAT_SCALAR,
    PLACEHOLDER_SENDER,
    SUI_CLOCK_OBJECT_ID,
    Environment,
    ErrorCode,
)
from core.exceptions import (
    ConfigError,
    DecodeError,
    DeepBookError,
    InfraError,
    NotFoundError,
    RPCError,
    SimulationError,
    ValidationError,
)
from core.logging import get_logger, setup_logging
from core.models import (
    BalanceManager,
    Coin,
    Level2Book,
    ManagerBalance,
    Pool,
    QuantityOut,
    VaultBalances,
)

__all__ = [
    # Constants
    "DEEP_SCALAR",
    "FLOAT_SCALAR",
    "PLACEHOLDER_SENDER",
    "SUI_CLOCK_OBJECT_ID",
    "Environment",
    "ErrorCode",
    # Exceptions
    "ConfigError",
    "DecodeError",
    "DeepBookError",
    "InfraError",
    "NotFoundError",
    "RPCError",
    "SimulationError",
    "ValidationError",
    # Models
    "BalanceManager",
    "Coin",
    "Level2Book",
    "ManagerBalance",
    "Pool",
    "QuantityOut",
    "VaultBalances",
    # Logging
    "get_logger",
    "setup_logging",
]
