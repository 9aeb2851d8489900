from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import pytest

from mmvault.config import PoolConfig
from mmvault.core.pool import LiquidityPool
from mmvault.integration import InMemoryCustody, InMemoryMatchingFacility, RoleRegistry
from mmvault.state import ShareLedger


BASE = "0x" + "11" * 20
QUOTE = "0x" + "22" * 20
WRAPPER = "0x" + "33" * 20
POOL = "0x" + "70" * 20
ENGINE = "0x" + "e0" * 20


@dataclass
class VaultHarness:
    pool: LiquidityPool
    custody: InMemoryCustody
    access: RoleRegistry
    facility: InMemoryMatchingFacility
    shares: ShareLedger
    config: PoolConfig

    admin: str = "0x" + "a0" * 20
    alice: str = "0x" + "a1" * 20
    bob: str = "0x" + "b0" * 20
    maker: str = "0x" + "c0" * 20

    def fund(self, account: str, base: int, quote: int) -> None:
        if base:
            self.custody.mint(account, self.config.base_asset, base)
        if quote:
            self.custody.mint(account, self.config.quote_asset, quote)

    def wallet(self, account: str) -> Tuple[int, int]:
        return (
            self.custody.balance_of(self.config.base_asset, account),
            self.custody.balance_of(self.config.quote_asset, account),
        )

    def held_by_pool(self) -> Tuple[int, int]:
        return self.wallet(self.config.pool_address)


def make_harness(config: PoolConfig, *, initialize: bool = True) -> VaultHarness:
    custody = InMemoryCustody(native_wrapper_asset=config.native_wrapper_asset)
    access = RoleRegistry()
    facility = InMemoryMatchingFacility()
    shares = ShareLedger()
    pool = LiquidityPool(custody=custody, shares=shares, access=access, facility=facility)
    h = VaultHarness(pool=pool, custody=custody, access=access, facility=facility, shares=shares, config=config)
    if initialize:
        pool.initialize(h.admin, config)
    return h


@pytest.fixture
def pool_config() -> PoolConfig:
    return PoolConfig(
        pool_address=POOL,
        matching_engine=ENGINE,
        native_wrapper_asset=WRAPPER,
        base_asset=BASE,
        quote_asset=QUOTE,
    )


@pytest.fixture
def native_pool_config() -> PoolConfig:
    return PoolConfig(
        pool_address=POOL,
        matching_engine=ENGINE,
        native_wrapper_asset=WRAPPER,
        base_asset=WRAPPER,
        quote_asset=QUOTE,
    )


@pytest.fixture
def vault(pool_config: PoolConfig) -> VaultHarness:
    return make_harness(pool_config)


@pytest.fixture
def native_vault(native_pool_config: PoolConfig) -> VaultHarness:
    return make_harness(native_pool_config)


@pytest.fixture
def seeded_vault(vault: VaultHarness) -> VaultHarness:
    """Pool bootstrapped by alice with (1_000_000, 1_000_000)."""
    vault.fund(vault.alice, 1_000_000, 1_000_000)
    vault.pool.deposit(vault.alice, 1_000_000, 1_000_000)
    return vault


@pytest.fixture
def uninitialized_vault(pool_config: PoolConfig) -> VaultHarness:
    return make_harness(pool_config, initialize=False)
