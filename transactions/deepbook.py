"""
transactions/deepbook.py - DeepBook pool view calls.

Each method returns a coroutine closure that appends exactly one Move
call to a pysui AsyncTransaction:

    txn = AsyncTransaction(client=client, initial_sender=sender)
    await contract.mid_price(pool)(txn)

Human quantities and prices are converted to on-chain integers when the
closure is created, using the pool's coin scalars, so bad input fails
before anything reaches the node.
"""

from decimal import Decimal
from typing import Any, Awaitable, Callable, Union

from pysui.sui.sui_types.scalars import ObjectID, SuiBoolean, SuiU64

from core.constants import SUI_CLOCK_OBJECT_ID
from core.math import denormalize_amount, denormalize_price, validate_u64
from core.models import Pool

Quantity = Union[int, str, Decimal]

# (txn) -> result argument of the appended call
Compose = Callable[[Any], Awaitable[Any]]


def move_call(target: str, arguments: list, type_arguments: list) -> Compose:
    """Closure appending one Move call with already typed arguments."""
    async def compose(txn):
        return await txn.move_call(
            target=target,
            arguments=arguments,
            type_arguments=type_arguments,
        )
    return compose


class DeepBookContract:
    """
    Builders for pool::* and registry view functions.

    Args:
        config: Resolver exposing deepbook_package_id and registry_id
    """

    def __init__(self, config):
        self.config = config

    def _target(self, function: str) -> str:
        return f"{self.config.deepbook_package_id}::pool::{function}"

    def whitelisted(self, pool: Pool) -> Compose:
        return move_call(
            self._target("whitelisted"),
            [ObjectID(pool.address)],
            pool.type_arguments,
        )

    def get_quote_quantity_out(self, pool: Pool, base_quantity: Quantity) -> Compose:
        raw_base = denormalize_amount(base_quantity, pool.base_coin.scalar)
        return move_call(
            self._target("get_quote_quantity_out"),
            [ObjectID(pool.address), SuiU64(raw_base), ObjectID(SUI_CLOCK_OBJECT_ID)],
            pool.type_arguments,
        )

    def get_base_quantity_out(self, pool: Pool, quote_quantity: Quantity) -> Compose:
        raw_quote = denormalize_amount(quote_quantity, pool.quote_coin.scalar)
        return move_call(
            self._target("get_base_quantity_out"),
            [ObjectID(pool.address), SuiU64(raw_quote), ObjectID(SUI_CLOCK_OBJECT_ID)],
            pool.type_arguments,
        )

    def get_quantity_out(self, pool: Pool, base_quantity: Quantity, quote_quantity: Quantity) -> Compose:
        raw_base = denormalize_amount(base_quantity, pool.base_coin.scalar)
        raw_quote = denormalize_amount(quote_quantity, pool.quote_coin.scalar)
        return move_call(
            self._target("get_quantity_out"),
            [
                ObjectID(pool.address),
                SuiU64(raw_base),
                SuiU64(raw_quote),
                ObjectID(SUI_CLOCK_OBJECT_ID),
            ],
            pool.type_arguments,
        )

    def account_open_orders(self, pool: Pool, manager_id: str) -> Compose:
        return move_call(
            self._target("account_open_orders"),
            [ObjectID(pool.address), ObjectID(manager_id)],
            pool.type_arguments,
        )

    def get_level2_range(
        self,
        pool: Pool,
        price_low: Quantity,
        price_high: Quantity,
        is_bid: bool,
    ) -> Compose:
        base_scalar = pool.base_coin.scalar
        quote_scalar = pool.quote_coin.scalar
        raw_low = denormalize_price(price_low, base_scalar, quote_scalar)
        raw_high = denormalize_price(price_high, base_scalar, quote_scalar)
        return move_call(
            self._target("get_level2_range"),
            [
                ObjectID(pool.address),
                SuiU64(raw_low),
                SuiU64(raw_high),
                SuiBoolean(is_bid),
                ObjectID(SUI_CLOCK_OBJECT_ID),
            ],
            pool.type_arguments,
        )

    def get_level2_ticks_from_mid(self, pool: Pool, ticks: int) -> Compose:
        ticks = validate_u64(ticks, "ticks")
        return move_call(
            self._target("get_level2_ticks_from_mid"),
            [ObjectID(pool.address), SuiU64(ticks), ObjectID(SUI_CLOCK_OBJECT_ID)],
            pool.type_arguments,
        )

    def vault_balances(self, pool: Pool) -> Compose:
        return move_call(
            self._target("vault_balances"),
            [ObjectID(pool.address)],
            pool.type_arguments,
        )

    def get_pool_id_by_assets(self, base_type: str, quote_type: str) -> Compose:
        return move_call(
            self._target("get_pool_id_by_asset"),
            [ObjectID(self.config.registry_id)],
            [base_type, quote_type],
        )

    def mid_price(self, pool: Pool) -> Compose:
        return move_call(
            self._target("mid_price"),
            [ObjectID(pool.address), ObjectID(SUI_CLOCK_OBJECT_ID)],
            pool.type_arguments,
        )
