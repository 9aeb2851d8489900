#!/usr/bin/env python3

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from mmvault.config import PoolConfig, load_pool_config
from mmvault.core.pool import LiquidityPool
from mmvault.errors import PoolError
from mmvault.integration import InMemoryCustody, InMemoryMatchingFacility, RoleRegistry, snapshot_from_pool
from mmvault.state import CreateOrderIntent, OrderSide, ShareLedger


ADMIN = "0x" + "a0" * 20
LP_ALICE = "0x" + "a1" * 20
LP_BOB = "0x" + "b0" * 20
MAKER = "0x" + "c0" * 20


def _default_config() -> PoolConfig:
    return PoolConfig(
        pool_address="0x" + "70" * 20,
        matching_engine="0x" + "e0" * 20,
        native_wrapper_asset="0x" + "11" * 20,
        base_asset="0x" + "11" * 20,
        quote_asset="0x" + "22" * 20,
    )


def run_demo(config: PoolConfig, *, base_amount: int, quote_amount: int) -> LiquidityPool:
    custody = InMemoryCustody(native_wrapper_asset=config.native_wrapper_asset)
    pool = LiquidityPool(
        custody=custody,
        shares=ShareLedger(),
        access=RoleRegistry(),
        facility=InMemoryMatchingFacility(),
    )
    pool.initialize(ADMIN, config)

    for account in (LP_ALICE, LP_BOB):
        custody.mint(account, config.base_asset, base_amount * 2)
        custody.mint(account, config.quote_asset, quote_amount * 2)

    alice_shares = pool.deposit(LP_ALICE, base_amount, quote_amount)
    print(f"[vault-demo] alice deposited ({base_amount}, {quote_amount}) -> {alice_shares} shares")
    print(f"[vault-demo] reserves={pool.get_reserves()} total_shares={pool.total_shares()}")

    bob_shares = pool.deposit(LP_BOB, base_amount // 2, quote_amount)
    print(f"[vault-demo] bob deposited ({base_amount // 2}, {quote_amount}) -> {bob_shares} shares")

    pool.grant_market_maker(ADMIN, MAKER)
    results = pool.create_orders(
        MAKER,
        [
            CreateOrderIntent(market="BASE-QUOTE", side=OrderSide.BID, price=99, size=1_000),
            CreateOrderIntent(market="BASE-QUOTE", side=OrderSide.ASK, price=101, size=1_000),
        ],
    )
    print(f"[vault-demo] maker placed {len(results)} orders: {[r.order_id for r in results]}")

    base_out, quote_out = pool.withdraw(LP_ALICE, alice_shares)
    print(f"[vault-demo] alice withdrew {alice_shares} shares -> ({base_out}, {quote_out})")

    print(f"[vault-demo] synced reserves={pool.sync_reserves(ADMIN)}")
    snap = snapshot_from_pool(pool)
    print(f"[vault-demo] snapshot commitment={snap.commitment_hex()}")
    return pool


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Offline liquidity vault walkthrough")
    parser.add_argument("--config", type=Path, default=None, help="YAML pool config (defaults to a built-in pool)")
    parser.add_argument("--base", type=int, default=1_000_000, help="First deposit base amount")
    parser.add_argument("--quote", type=int, default=1_000_000, help="First deposit quote amount")
    parser.add_argument("--verbose", action="store_true", help="Log pool events at DEBUG")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_pool_config(args.config) if args.config is not None else _default_config()
        run_demo(config, base_amount=args.base, quote_amount=args.quote)
    except PoolError as exc:
        print(f"[vault-demo] FAIL ({exc.code}): {exc}")
        return 1
    print("[vault-demo] OK")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
