"""
transactions/balance_manager.py - Balance manager view calls.
"""

from pysui.sui.sui_types.scalars import ObjectID

from core.models import Coin
from transactions.deepbook import Compose, move_call


class BalanceManagerContract:
    """Builders for balance_manager::* view functions."""

    def __init__(self, config):
        self.config = config

    def check_manager_balance(self, manager_id: str, coin: Coin) -> Compose:
        """balance_manager::balance<T>(&BalanceManager): u64"""
        return move_call(
            f"{self.config.deepbook_package_id}::balance_manager::balance",
            [ObjectID(manager_id)],
            [coin.type],
        )
