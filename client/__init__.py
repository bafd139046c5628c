"""
client/ - Public query API.

Modules:
- deepbook: DeepBookClient query facade
- registry: balance manager registry
"""

from client.deepbook import DeepBookClient
from client.registry import BalanceManagerRegistry

__all__ = [
    "BalanceManagerRegistry",
    "DeepBookClient",
]
