"""
client/deepbook.py - Read-only DeepBook query facade.

Every query follows the same pipeline:
    resolve descriptors -> compose one view call -> dev-inspect
    -> decode each return slot -> normalize -> typed result

Errors (NotFoundError, DecodeError, SimulationError, RPCError) propagate
unchanged; a query either returns a fully normalized result or raises.

Usage:
    client = DeepBookClient.from_env("mainnet")
    await client.init()
    price = await client.mid_price("SUI_USDC")
    await client.close()
"""

import os
from decimal import Decimal
from typing import Any, List, Optional, Sequence, Union

from chains.providers import SuiRPCProvider, resolve_rpc_urls
from chains.simulate import SimulationAdapter
from client.registry import BalanceManagerRegistry
from codec import schema
from codec.decoder import decode_all
from config import DeepBookConfig
from core.constants import DEEP_SCALAR, DEFAULT_RPC_TIMEOUT_SECONDS, PLACEHOLDER_SENDER, ErrorCode
from core.exceptions import DecodeError
from core.logging import get_logger
from core.math import normalize_amount, normalize_price, safe_decimal
from core.models import Level2Book, ManagerBalance, Pool, QuantityOut, VaultBalances
from core.time import elapsed_ms, now_ms
from core.validators import normalize_sui_address
from transactions.balance_manager import BalanceManagerContract
from transactions.deepbook import Compose, DeepBookContract

logger = get_logger(__name__)

Quantity = Union[int, str, Decimal]

QUANTITY_OUT_SLOTS = (schema.U64, schema.U64, schema.U64)
LEVEL2_SLOTS = (schema.U64_VECTOR, schema.U64_VECTOR)


class DeepBookClient:
    """
    DeepBook query client.

    Args:
        config: Coin/pool resolver (initialized via init())
        adapter: Dev-inspect adapter
        registry: Balance manager registry; a fresh one if omitted
        sender: Address used for account-scoped queries
    """

    def __init__(
        self,
        config: DeepBookConfig,
        adapter: SimulationAdapter,
        registry: Optional[BalanceManagerRegistry] = None,
        sender: Optional[str] = None,
    ):
        self.config = config
        self.adapter = adapter
        self.registry = registry if registry is not None else BalanceManagerRegistry()
        self.sender = normalize_sui_address(sender) if sender else PLACEHOLDER_SENDER
        self.deepbook = DeepBookContract(config)
        self.balance_manager = BalanceManagerContract(config)

    @classmethod
    def from_env(
        cls,
        env: str = "mainnet",
        rpc_urls: Optional[List[str]] = None,
        sender: Optional[str] = None,
        timeout_seconds: int = DEFAULT_RPC_TIMEOUT_SECONDS,
        registry: Optional[BalanceManagerRegistry] = None,
    ) -> "DeepBookClient":
        """Build a client from environment (SUI_RPC_URL, SUI_SENDER_ADDRESS)."""
        provider = SuiRPCProvider(resolve_rpc_urls(env, rpc_urls), timeout_seconds)
        return cls(
            config=DeepBookConfig(env),
            adapter=SimulationAdapter(provider),
            registry=registry,
            sender=sender or os.getenv("SUI_SENDER_ADDRESS") or None,
        )

    async def init(self) -> None:
        """Initialize the config resolver. Required before the first query."""
        await self.config.init()

    async def close(self) -> None:
        await self.adapter.provider.close()

    def add_balance_manager(self, manager_key: str, manager_id: str, trade_cap_id: Optional[str] = None) -> None:
        self.registry.add(manager_key, manager_id, trade_cap_id)

    async def _query(
        self,
        operation: str,
        compose: Compose,
        slots: Sequence[schema.Schema],
        sender: str = PLACEHOLDER_SENDER,
        context: Optional[dict] = None,
    ) -> List[Any]:
        """Compose one call, dev-inspect it and decode its return slots."""
        start_ms = now_ms()
        results = await self.adapter.simulate([compose], sender)
        values = decode_all(results[0].buffers, slots)

        logger.debug(
            f"{operation} completed",
            extra={"context": {**(context or {}), "latency_ms": elapsed_ms(start_ms)}},
        )
        return values

    def _quantity_out(self, pool: Pool, raw: List[int], **inputs) -> QuantityOut:
        base_out, quote_out, deep_required = raw
        return QuantityOut(
            base_out=normalize_amount(base_out, pool.base_coin.scalar),
            quote_out=normalize_amount(quote_out, pool.quote_coin.scalar),
            deep_required=normalize_amount(deep_required, DEEP_SCALAR),
            **inputs,
        )

    def _level2(self, pool: Pool, raw: List[List[int]]) -> Level2Book:
        prices, quantities = raw
        if len(prices) != len(quantities):
            raise DecodeError(
                f"Level2 slots disagree: {len(prices)} prices, {len(quantities)} quantities",
                code=ErrorCode.DECODE_SLOT_MISMATCH,
                details={"pool": pool.key, "prices": len(prices), "quantities": len(quantities)},
            )
        base_scalar = pool.base_coin.scalar
        quote_scalar = pool.quote_coin.scalar
        return Level2Book(
            prices=[normalize_price(p, base_scalar, quote_scalar) for p in prices],
            quantities=[normalize_amount(q, base_scalar) for q in quantities],
        )

    # -------------------------------------------------------------------------
    # Balance manager
    # -------------------------------------------------------------------------

    async def check_manager_balance(self, manager_key: str, coin_key: str) -> ManagerBalance:
        """Balance of coin_key held by the registered balance manager."""
        manager = self.registry.lookup(manager_key)
        coin = self.config.get_coin(coin_key)

        (balance,) = await self._query(
            "check_manager_balance",
            self.balance_manager.check_manager_balance(manager.address, coin),
            (schema.U64,),
            sender=self.sender,
            context={"manager_key": manager_key, "coin": coin_key},
        )
        return ManagerBalance(
            coin_type=coin.type,
            balance=normalize_amount(balance, coin.scalar),
        )

    # -------------------------------------------------------------------------
    # Pool
    # -------------------------------------------------------------------------

    async def whitelisted(self, pool_key: str) -> bool:
        pool = self.config.get_pool(pool_key)
        (whitelisted,) = await self._query(
            "whitelisted",
            self.deepbook.whitelisted(pool),
            (schema.BOOL,),
            context={"pool": pool_key},
        )
        return whitelisted

    async def get_quote_quantity_out(self, pool_key: str, base_quantity: Quantity) -> QuantityOut:
        """Quote received (and DEEP fee) for selling base_quantity."""
        pool = self.config.get_pool(pool_key)
        raw = await self._query(
            "get_quote_quantity_out",
            self.deepbook.get_quote_quantity_out(pool, base_quantity),
            QUANTITY_OUT_SLOTS,
            context={"pool": pool_key, "base_quantity": str(base_quantity)},
        )
        return self._quantity_out(pool, raw, base_quantity=safe_decimal(base_quantity))

    async def get_base_quantity_out(self, pool_key: str, quote_quantity: Quantity) -> QuantityOut:
        """Base received (and DEEP fee) for spending quote_quantity."""
        pool = self.config.get_pool(pool_key)
        raw = await self._query(
            "get_base_quantity_out",
            self.deepbook.get_base_quantity_out(pool, quote_quantity),
            QUANTITY_OUT_SLOTS,
            context={"pool": pool_key, "quote_quantity": str(quote_quantity)},
        )
        return self._quantity_out(pool, raw, quote_quantity=safe_decimal(quote_quantity))

    async def get_quantity_out(
        self,
        pool_key: str,
        base_quantity: Quantity,
        quote_quantity: Quantity,
    ) -> QuantityOut:
        pool = self.config.get_pool(pool_key)
        raw = await self._query(
            "get_quantity_out",
            self.deepbook.get_quantity_out(pool, base_quantity, quote_quantity),
            QUANTITY_OUT_SLOTS,
            context={
                "pool": pool_key,
                "base_quantity": str(base_quantity),
                "quote_quantity": str(quote_quantity),
            },
        )
        return self._quantity_out(
            pool,
            raw,
            base_quantity=safe_decimal(base_quantity),
            quote_quantity=safe_decimal(quote_quantity),
        )

    async def account_open_orders(self, pool_key: str, manager_key: str) -> List[int]:
        """Open order ids (u128) of a balance manager in a pool."""
        manager = self.registry.lookup(manager_key)
        pool = self.config.get_pool(pool_key)
        (order_ids,) = await self._query(
            "account_open_orders",
            self.deepbook.account_open_orders(pool, manager.address),
            (schema.ORDER_ID_SET,),
            context={"pool": pool_key, "manager_key": manager_key},
        )
        return order_ids

    async def get_level2_range(
        self,
        pool_key: str,
        price_low: Quantity,
        price_high: Quantity,
        is_bid: bool,
    ) -> Level2Book:
        """Book levels with price in [price_low, price_high] on one side."""
        pool = self.config.get_pool(pool_key)
        raw = await self._query(
            "get_level2_range",
            self.deepbook.get_level2_range(pool, price_low, price_high, is_bid),
            LEVEL2_SLOTS,
            context={
                "pool": pool_key,
                "price_low": str(price_low),
                "price_high": str(price_high),
                "is_bid": is_bid,
            },
        )
        return self._level2(pool, raw)

    async def get_level2_ticks_from_mid(self, pool_key: str, ticks: int) -> Level2Book:
        """Book levels within ticks of the mid price."""
        pool = self.config.get_pool(pool_key)
        raw = await self._query(
            "get_level2_ticks_from_mid",
            self.deepbook.get_level2_ticks_from_mid(pool, ticks),
            LEVEL2_SLOTS,
            context={"pool": pool_key, "ticks": ticks},
        )
        return self._level2(pool, raw)

    async def vault_balances(self, pool_key: str) -> VaultBalances:
        pool = self.config.get_pool(pool_key)
        base, quote, deep = await self._query(
            "vault_balances",
            self.deepbook.vault_balances(pool),
            (schema.U64, schema.U64, schema.U64),
            context={"pool": pool_key},
        )
        return VaultBalances(
            base=normalize_amount(base, pool.base_coin.scalar),
            quote=normalize_amount(quote, pool.quote_coin.scalar),
            deep=normalize_amount(deep, DEEP_SCALAR),
        )

    async def get_pool_id_by_assets(self, base_type: str, quote_type: str) -> str:
        """Pool object id registered for a base/quote type pair."""
        (pool_id,) = await self._query(
            "get_pool_id_by_assets",
            self.deepbook.get_pool_id_by_assets(base_type, quote_type),
            (schema.ID,),
            context={"base_type": base_type, "quote_type": quote_type},
        )
        return pool_id

    async def mid_price(self, pool_key: str) -> Decimal:
        """Mid price in quote per base."""
        pool = self.config.get_pool(pool_key)
        (raw_price,) = await self._query(
            "mid_price",
            self.deepbook.mid_price(pool),
            (schema.U64,),
            context={"pool": pool_key},
        )
        return normalize_price(raw_price, pool.base_coin.scalar, pool.quote_coin.scalar)
