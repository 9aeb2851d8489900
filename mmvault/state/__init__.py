"""
State management for the liquidity vault
"""

from .balances import NATIVE_ASSET, BalanceTable
from .orders import CancelOrderIntent, CreateOrderIntent, OrderResult, OrderSide, OrderStatus, UpdateOrderIntent
from .reserves import PoolStatus, ReserveState
from .shares import LOCK_ACCOUNT, ShareLedger

__all__ = [
    "NATIVE_ASSET",
    "BalanceTable",
    "CancelOrderIntent",
    "CreateOrderIntent",
    "OrderResult",
    "OrderSide",
    "OrderStatus",
    "UpdateOrderIntent",
    "PoolStatus",
    "ReserveState",
    "LOCK_ACCOUNT",
    "ShareLedger",
]
