# PATH: core/models.py
"""
Core data models for the DeepBook query client.

Descriptors (Coin, Pool, BalanceManager) are immutable and resolved by
configuration or registration. Result models carry Decimal values that
are already normalized; raw on-chain integers never leave the facade.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional


# ============================================================================
# DESCRIPTORS
# ============================================================================

@dataclass(frozen=True)
class Coin:
    """
    An asset known to the client.

    scalar is 10^decimals, e.g. 10**9 for SUI.
    """
    key: str
    address: str
    type: str
    scalar: int

    def __post_init__(self):
        if self.scalar <= 0:
            raise ValueError(f"Coin {self.key}: scalar must be positive")


@dataclass(frozen=True)
class Pool:
    """A DeepBook pool with its base and quote coins."""
    key: str
    address: str
    base_coin: Coin
    quote_coin: Coin

    @property
    def type_arguments(self) -> List[str]:
        """Move type arguments for pool::* calls."""
        return [self.base_coin.type, self.quote_coin.type]


@dataclass(frozen=True)
class BalanceManager:
    """
    Reference to an on-chain balance manager.

    trade_cap is only needed for delegated trading; queries ignore it.
    """
    address: str
    trade_cap: Optional[str] = None


# ============================================================================
# QUERY RESULTS
# ============================================================================

@dataclass
class ManagerBalance:
    """Balance of one coin held by a balance manager."""
    coin_type: str
    balance: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {"coin_type": self.coin_type, "balance": str(self.balance)}


@dataclass
class QuantityOut:
    """Result of a quantity-out dry run."""
    base_out: Decimal
    quote_out: Decimal
    deep_required: Decimal
    base_quantity: Optional[Decimal] = None
    quote_quantity: Optional[Decimal] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        if self.base_quantity is not None:
            result["base_quantity"] = str(self.base_quantity)
        if self.quote_quantity is not None:
            result["quote_quantity"] = str(self.quote_quantity)
        result.update({
            "base_out": str(self.base_out),
            "quote_out": str(self.quote_out),
            "deep_required": str(self.deep_required),
        })
        return result


@dataclass
class Level2Book:
    """
    Order book levels as two parallel sequences.

    prices[i] is quote per base; quantities[i] is base quantity at that price.
    """
    prices: List[Decimal] = field(default_factory=list)
    quantities: List[Decimal] = field(default_factory=list)

    def __post_init__(self):
        if len(self.prices) != len(self.quantities):
            raise ValueError(
                f"Level2Book length mismatch: {len(self.prices)} prices, "
                f"{len(self.quantities)} quantities"
            )

    def __len__(self) -> int:
        return len(self.prices)

    @property
    def levels(self) -> List[tuple]:
        """(price, quantity) pairs in book order."""
        return list(zip(self.prices, self.quantities))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "prices": [str(p) for p in self.prices],
            "quantities": [str(q) for q in self.quantities],
        }


@dataclass
class VaultBalances:
    """Base, quote and DEEP held in a pool vault."""
    base: Decimal
    quote: Decimal
    deep: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {
            "base": str(self.base),
            "quote": str(self.quote),
            "deep": str(self.deep),
        }
