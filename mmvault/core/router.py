"""
Order routing to the external matching facility.

The router is pure data transformation plus delegation: it checks the
market-maker capability, rewrites each intent's beneficiary to the pool, and
returns whatever the facility returns. It never touches reserves or shares;
fills settle against custody out of band and `sync_reserves` reconciles.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Sequence, TypeVar, Union

from ..state.balances import Address, Amount
from ..state.orders import CancelOrderIntent, CreateOrderIntent, OrderResult, UpdateOrderIntent
from .interfaces import MARKET_MAKER_ROLE, AccessGate, MatchingFacility, require_role

logger = logging.getLogger(__name__)

_Beneficiary = TypeVar("_Beneficiary", CreateOrderIntent, UpdateOrderIntent)


def rewrite_beneficiary(intents: Sequence[_Beneficiary], beneficiary: Address) -> List[_Beneficiary]:
    """Return copies of `intents` whose beneficiary is `beneficiary`."""
    return [replace(intent, beneficiary=beneficiary) for intent in intents]


class OrderRouter:
    def __init__(self, *, pool_address: Address, access: AccessGate, facility: MatchingFacility) -> None:
        self._pool_address = pool_address
        self._access = access
        self._facility = facility

    def create_orders(self, caller: Address, intents: Sequence[CreateOrderIntent]) -> List[OrderResult]:
        forwarded = self._authorize_and_rewrite(caller, intents)
        results = self._facility.create_orders(forwarded)
        self._log_batch("orders.create", caller, len(forwarded))
        return results

    def update_orders(self, caller: Address, intents: Sequence[UpdateOrderIntent]) -> List[OrderResult]:
        forwarded = self._authorize_and_rewrite(caller, intents)
        results = self._facility.update_orders(forwarded)
        self._log_batch("orders.update", caller, len(forwarded))
        return results

    def cancel_orders(self, caller: Address, intents: Sequence[CancelOrderIntent]) -> List[Amount]:
        require_role(self._access, MARKET_MAKER_ROLE, caller)
        refunds = self._facility.cancel_orders(list(intents))
        self._log_batch("orders.cancel", caller, len(intents))
        return refunds

    def _authorize_and_rewrite(
        self, caller: Address, intents: Sequence[Union[CreateOrderIntent, UpdateOrderIntent]]
    ) -> list:
        require_role(self._access, MARKET_MAKER_ROLE, caller)
        return rewrite_beneficiary(intents, self._pool_address)

    def _log_batch(self, event: str, caller: Address, count: int) -> None:
        logger.info(
            "Order batch forwarded",
            extra={"event": event, "caller": caller, "count": count},
        )
