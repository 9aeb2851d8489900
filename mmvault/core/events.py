"""Events emitted by the pool for external observers and indexers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique
from typing import Union

from ..state.balances import Address, Amount


@unique
class EventKind(Enum):
    LIQUIDITY_ADDED = "LiquidityAdded"
    LIQUIDITY_REMOVED = "LiquidityRemoved"


@dataclass(frozen=True)
class LiquidityAdded:
    provider: Address
    base_amount: Amount
    quote_amount: Amount
    shares_issued: Amount

    kind = EventKind.LIQUIDITY_ADDED


@dataclass(frozen=True)
class LiquidityRemoved:
    provider: Address
    base_amount: Amount
    quote_amount: Amount
    shares_burned: Amount

    kind = EventKind.LIQUIDITY_REMOVED


PoolEvent = Union[LiquidityAdded, LiquidityRemoved]
