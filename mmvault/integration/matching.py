"""
In-memory matching facility.

A minimal price-time order book: it assigns order ids, crosses new orders
against resting ones, keeps the latest version of each order, and records
every batch it receives so callers can inspect exactly what was forwarded.
Fills only change order sizes here; the asset side of a fill settles against
custody out of band in a real deployment. Updates reprice in place and never
cross.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Sequence, Tuple

from ..core.interfaces import MatchingFacility
from ..state.balances import Address, Amount
from ..state.orders import (
    CancelOrderIntent,
    CreateOrderIntent,
    OrderResult,
    OrderSide,
    OrderStatus,
    UpdateOrderIntent,
)


@dataclass(frozen=True)
class RestingOrder:
    order_id: int
    market: str
    side: OrderSide
    price: int
    size: int
    beneficiary: Address
    client_order_id: Optional[str] = None

    def locked_amount(self) -> Amount:
        """Amount escrowed by the order: base units for asks, quote units for bids."""
        if self.side is OrderSide.ASK:
            return self.size
        return self.size * self.price


class InMemoryMatchingFacility(MatchingFacility):
    def __init__(self) -> None:
        self.orders: Dict[int, RestingOrder] = {}
        self.batches: List[Tuple[str, list]] = []
        self._next_id = 1
        self._lock = threading.Lock()

    def create_orders(self, intents: Sequence[CreateOrderIntent]) -> List[OrderResult]:
        """
        Match each intent against the opposite side of its market, then rest
        any remainder.

        Resting orders fill at their own price, best price first and oldest
        first within a price. A `post_only` intent that would cross is
        rejected and nothing rests.
        """
        results: List[OrderResult] = []
        with self._lock:
            self.batches.append(("create", list(intents)))
            for intent in intents:
                order_id = self._next_id
                self._next_id += 1
                makers = self._crossing(intent)
                if makers and intent.post_only:
                    results.append(OrderResult(order_id=order_id, status=OrderStatus.REJECTED, reason="would cross"))
                    continue

                remaining = intent.size
                for maker in makers:
                    if remaining == 0:
                        break
                    fill = min(remaining, maker.size)
                    remaining -= fill
                    if fill == maker.size:
                        del self.orders[maker.order_id]
                    else:
                        self.orders[maker.order_id] = replace(maker, size=maker.size - fill)

                filled = intent.size - remaining
                if remaining == 0:
                    results.append(OrderResult(order_id=order_id, status=OrderStatus.FILLED, filled_size=filled))
                    continue
                self.orders[order_id] = RestingOrder(
                    order_id=order_id,
                    market=intent.market,
                    side=intent.side,
                    price=intent.price,
                    size=remaining,
                    beneficiary=intent.beneficiary,
                    client_order_id=intent.client_order_id,
                )
                status = OrderStatus.PARTIALLY_FILLED if filled else OrderStatus.OPEN
                results.append(OrderResult(order_id=order_id, status=status, filled_size=filled))
        return results

    def _crossing(self, intent: CreateOrderIntent) -> List[RestingOrder]:
        """Resting orders `intent` would trade against, in fill priority."""
        if intent.side is OrderSide.BID:
            makers = [
                o for o in self.orders.values()
                if o.market == intent.market and o.side is OrderSide.ASK and o.price <= intent.price
            ]
            makers.sort(key=lambda o: (o.price, o.order_id))
        else:
            makers = [
                o for o in self.orders.values()
                if o.market == intent.market and o.side is OrderSide.BID and o.price >= intent.price
            ]
            makers.sort(key=lambda o: (-o.price, o.order_id))
        return makers

    def update_orders(self, intents: Sequence[UpdateOrderIntent]) -> List[OrderResult]:
        results: List[OrderResult] = []
        with self._lock:
            self.batches.append(("update", list(intents)))
            for intent in intents:
                order = self.orders.get(intent.order_id)
                if order is None or order.market != intent.market:
                    results.append(
                        OrderResult(order_id=intent.order_id, status=OrderStatus.REJECTED, reason="unknown order")
                    )
                    continue
                self.orders[order.order_id] = replace(
                    order, price=intent.price, size=intent.size, beneficiary=intent.beneficiary
                )
                results.append(OrderResult(order_id=order.order_id, status=OrderStatus.OPEN))
        return results

    def cancel_orders(self, intents: Sequence[CancelOrderIntent]) -> List[Amount]:
        refunds: List[Amount] = []
        with self._lock:
            self.batches.append(("cancel", list(intents)))
            for intent in intents:
                order = self.orders.get(intent.order_id)
                if order is None or order.market != intent.market:
                    refunds.append(0)
                    continue
                del self.orders[order.order_id]
                refunds.append(order.locked_amount())
        return refunds

    def open_orders(self, beneficiary: Optional[Address] = None) -> List[RestingOrder]:
        with self._lock:
            out = [o for o in self.orders.values() if beneficiary is None or o.beneficiary == beneficiary]
        out.sort(key=lambda o: o.order_id)
        return out
