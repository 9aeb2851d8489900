# [TESTER] v1

from __future__ import annotations

from mmvault.integration.matching import InMemoryMatchingFacility
from mmvault.state.orders import CreateOrderIntent, OrderSide, OrderStatus

MARKET = "BASE-QUOTE"
POOL = "0x" + "70" * 20
TAKER = "0x" + "b0" * 20


def _order(side: OrderSide, price: int, size: int, *, post_only: bool = False, beneficiary: str = POOL):
    return CreateOrderIntent(
        market=MARKET, side=side, price=price, size=size, beneficiary=beneficiary, post_only=post_only
    )


def _book() -> InMemoryMatchingFacility:
    facility = InMemoryMatchingFacility()
    facility.create_orders(
        [
            _order(OrderSide.ASK, 101, 5),
            _order(OrderSide.ASK, 100, 5),
            _order(OrderSide.BID, 98, 10),
        ]
    )
    return facility


def test_non_crossing_orders_rest_open() -> None:
    facility = _book()
    assert [(o.side, o.price, o.size) for o in facility.open_orders()] == [
        (OrderSide.ASK, 101, 5),
        (OrderSide.ASK, 100, 5),
        (OrderSide.BID, 98, 10),
    ]


def test_crossing_bid_fills_best_ask_first() -> None:
    facility = _book()
    (result,) = facility.create_orders([_order(OrderSide.BID, 100, 3, beneficiary=TAKER)])

    assert result.status is OrderStatus.FILLED
    assert result.filled_size == 3
    assert result.order_id not in facility.orders
    asks = {o.price: o.size for o in facility.open_orders() if o.side is OrderSide.ASK}
    assert asks == {100: 2, 101: 5}


def test_partial_fill_rests_the_remainder() -> None:
    facility = _book()
    (result,) = facility.create_orders([_order(OrderSide.BID, 101, 12, beneficiary=TAKER)])

    assert result.status is OrderStatus.PARTIALLY_FILLED
    assert result.filled_size == 10
    rest = facility.orders[result.order_id]
    assert (rest.side, rest.price, rest.size) == (OrderSide.BID, 101, 2)
    assert [o.side for o in facility.open_orders()] == [OrderSide.BID, OrderSide.BID]
    assert facility.open_orders(beneficiary=TAKER) == [rest]


def test_post_only_order_that_would_cross_is_rejected() -> None:
    facility = _book()
    before = dict(facility.orders)
    (rejected, accepted) = facility.create_orders(
        [
            _order(OrderSide.ASK, 98, 4, post_only=True),
            _order(OrderSide.ASK, 99, 4, post_only=True),
        ]
    )

    assert rejected.status is OrderStatus.REJECTED
    assert (rejected.reason, rejected.filled_size) == ("would cross", 0)
    assert rejected.order_id not in facility.orders
    assert accepted.status is OrderStatus.OPEN
    assert facility.orders[accepted.order_id].size == 4
    assert all(facility.orders[oid] == order for oid, order in before.items())


def test_orders_in_other_markets_do_not_cross() -> None:
    facility = _book()
    other = CreateOrderIntent(market="OTHER-QUOTE", side=OrderSide.BID, price=500, size=1, post_only=True)
    (result,) = facility.create_orders([other])
    assert result.status is OrderStatus.OPEN
