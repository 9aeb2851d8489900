"""
Core vault algorithms
"""

from .bootstrap import MINIMUM_LIQUIDITY, BootstrapMint, compute_bootstrap_mint
from .reserves import DepositPlan, WithdrawPlan, plan_deposit, plan_withdraw, share_value
from .guard import ReentrancyGuard
from .interfaces import (
    ADMIN_ROLE,
    MARKET_MAKER_ROLE,
    SHARE_ADMIN_ROLE,
    AccessGate,
    AssetTransfers,
    MatchingFacility,
    require_role,
)
from .events import EventKind, LiquidityAdded, LiquidityRemoved, PoolEvent
from .router import OrderRouter, rewrite_beneficiary
from .transfers import FungibleLegs
from .native import NativeAssetAdapter, require_native_support
from .pool import LiquidityPool

__all__ = [
    "MINIMUM_LIQUIDITY",
    "BootstrapMint",
    "compute_bootstrap_mint",
    "DepositPlan",
    "WithdrawPlan",
    "plan_deposit",
    "plan_withdraw",
    "share_value",
    "ReentrancyGuard",
    "ADMIN_ROLE",
    "MARKET_MAKER_ROLE",
    "SHARE_ADMIN_ROLE",
    "AccessGate",
    "AssetTransfers",
    "MatchingFacility",
    "require_role",
    "EventKind",
    "LiquidityAdded",
    "LiquidityRemoved",
    "PoolEvent",
    "OrderRouter",
    "rewrite_beneficiary",
    "FungibleLegs",
    "NativeAssetAdapter",
    "require_native_support",
    "LiquidityPool",
]
