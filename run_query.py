#!/usr/bin/env python3
"""
run_query.py - CLI entrypoint for read-only DeepBook queries.

Usage:
    python run_query.py mid-price SUI_USDC
    python run_query.py --env testnet vault DEEP_SUI
    python run_query.py --manager main=0x... balance main SUI
    python run_query.py level2-range SUI_USDC 3.0 4.0 --bid
"""

import asyncio
import json
import sys
from decimal import Decimal
from typing import Any, Awaitable, Callable

import click

from client.deepbook import DeepBookClient
from core.exceptions import DeepBookError
from core.logging import get_logger, setup_logging

logger = get_logger("deepbook.query")


def _to_jsonable(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, list):
        return [_to_jsonable(v) for v in value]
    return value


def _parse_manager(value: str) -> tuple[str, str]:
    if "=" not in value:
        raise click.BadParameter(f"expected KEY=OBJECT_ID, got {value!r}")
    key, object_id = value.split("=", 1)
    return key.strip(), object_id.strip()


def run(ctx: click.Context, query: Callable[[DeepBookClient], Awaitable[Any]]) -> None:
    """Run one query and print its JSON result."""
    options = ctx.obj

    async def _main() -> Any:
        client = DeepBookClient.from_env(
            env=options["env"],
            rpc_urls=list(options["rpc_urls"]) or None,
            sender=options["sender"],
        )
        try:
            await client.init()
            for key, object_id in options["managers"]:
                client.add_balance_manager(key, object_id)
            return await query(client)
        finally:
            await client.close()

    try:
        result = asyncio.run(_main())
    except DeepBookError as e:
        logger.error(
            f"Query failed: {e}",
            extra={"context": {"code": e.code.value, "details": e.details}},
        )
        click.echo(json.dumps({"error": e.code.value, "message": e.message}), err=True)
        sys.exit(1)

    click.echo(json.dumps(_to_jsonable(result), indent=2))


@click.group()
@click.option("--env", "-e", default="mainnet", type=click.Choice(["mainnet", "testnet"]), envvar="DEEPBOOK_ENV")
@click.option("--rpc-url", "rpc_urls", multiple=True, help="RPC endpoint (repeat for failover)")
@click.option("--sender", default=None, help="Sender address for account-scoped queries")
@click.option("--manager", "managers", multiple=True, help="Balance manager as KEY=OBJECT_ID")
@click.option("--log-level", "-l", default="WARNING", type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]))
@click.option("--json-logs/--no-json-logs", default=False)
@click.pass_context
def cli(ctx, env, rpc_urls, sender, managers, log_level, json_logs):
    """Read-only DeepBook queries via dev-inspect."""
    setup_logging(level=log_level, json_format=json_logs)
    ctx.obj = {
        "env": env,
        "rpc_urls": rpc_urls,
        "sender": sender,
        "managers": [_parse_manager(m) for m in managers],
    }


@cli.command()
@click.argument("manager_key")
@click.argument("coin_key")
@click.pass_context
def balance(ctx, manager_key, coin_key):
    """Balance of COIN_KEY in balance manager MANAGER_KEY."""
    run(ctx, lambda c: c.check_manager_balance(manager_key, coin_key))


@cli.command()
@click.argument("pool_key")
@click.pass_context
def whitelisted(ctx, pool_key):
    """Whether POOL_KEY is whitelisted."""
    run(ctx, lambda c: c.whitelisted(pool_key))


@cli.command("quote-out")
@click.argument("pool_key")
@click.argument("base_quantity")
@click.pass_context
def quote_out(ctx, pool_key, base_quantity):
    """Quote out for selling BASE_QUANTITY."""
    run(ctx, lambda c: c.get_quote_quantity_out(pool_key, base_quantity))


@cli.command("base-out")
@click.argument("pool_key")
@click.argument("quote_quantity")
@click.pass_context
def base_out(ctx, pool_key, quote_quantity):
    """Base out for spending QUOTE_QUANTITY."""
    run(ctx, lambda c: c.get_base_quantity_out(pool_key, quote_quantity))


@cli.command("quantity-out")
@click.argument("pool_key")
@click.argument("base_quantity")
@click.argument("quote_quantity")
@click.pass_context
def quantity_out(ctx, pool_key, base_quantity, quote_quantity):
    """Quantities out for BASE_QUANTITY and QUOTE_QUANTITY."""
    run(ctx, lambda c: c.get_quantity_out(pool_key, base_quantity, quote_quantity))


@cli.command("open-orders")
@click.argument("pool_key")
@click.argument("manager_key")
@click.pass_context
def open_orders(ctx, pool_key, manager_key):
    """Open order ids of MANAGER_KEY in POOL_KEY."""
    run(ctx, lambda c: c.account_open_orders(pool_key, manager_key))


@cli.command("level2-range")
@click.argument("pool_key")
@click.argument("price_low")
@click.argument("price_high")
@click.option("--bid/--ask", default=True)
@click.pass_context
def level2_range(ctx, pool_key, price_low, price_high, bid):
    """Book levels between PRICE_LOW and PRICE_HIGH."""
    run(ctx, lambda c: c.get_level2_range(pool_key, price_low, price_high, bid))


@cli.command("level2-ticks")
@click.argument("pool_key")
@click.argument("ticks", type=int)
@click.pass_context
def level2_ticks(ctx, pool_key, ticks):
    """Book levels within TICKS of mid."""
    run(ctx, lambda c: c.get_level2_ticks_from_mid(pool_key, ticks))


@cli.command()
@click.argument("pool_key")
@click.pass_context
def vault(ctx, pool_key):
    """Vault balances of POOL_KEY."""
    run(ctx, lambda c: c.vault_balances(pool_key))


@cli.command("pool-id")
@click.argument("base_type")
@click.argument("quote_type")
@click.pass_context
def pool_id(ctx, base_type, quote_type):
    """Pool id for BASE_TYPE/QUOTE_TYPE."""
    run(ctx, lambda c: c.get_pool_id_by_assets(base_type, quote_type))


@cli.command("mid-price")
@click.argument("pool_key")
@click.pass_context
def mid_price(ctx, pool_key):
    """Mid price of POOL_KEY."""
    run(ctx, lambda c: c.mid_price(pool_key))


if __name__ == "__main__":
    cli()
