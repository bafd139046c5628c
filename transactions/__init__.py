"""
transactions/ - View-call composition on pysui transactions.

Modules:
- deepbook: pool and registry view calls
- balance_manager: balance manager view calls
"""

from transactions.balance_manager import BalanceManagerContract
from transactions.deepbook import Compose, DeepBookContract, move_call

__all__ = [
    "BalanceManagerContract",
    "Compose",
    "DeepBookContract",
    "move_call",
]
