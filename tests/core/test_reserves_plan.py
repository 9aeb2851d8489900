# [TESTER] v1

from __future__ import annotations

import pytest

from mmvault.core.reserves import plan_deposit, plan_withdraw, share_value
from mmvault.errors import (
    InsufficientBalanceError,
    InsufficientLiquidityError,
    InsufficientSharesError,
    InvalidArgumentError,
    NoLiquidityError,
)
from mmvault.state.reserves import ReserveState

BASE = "0x" + "11" * 20
QUOTE = "0x" + "22" * 20


def _reserves(base: int, quote: int) -> ReserveState:
    return ReserveState(base_asset=BASE, quote_asset=QUOTE, base_reserve=base, quote_reserve=quote)


def test_first_deposit_plan_is_bootstrap() -> None:
    plan = plan_deposit(_reserves(0, 0), 0, 1_000_000, 1_000_000)
    assert plan.is_bootstrap
    assert plan.shares_issued == 999_000
    assert plan.locked_shares == 1000
    assert plan.new_reserves.as_tuple() == (1_000_000, 1_000_000)


def test_deposit_issues_min_of_proportional_shares() -> None:
    # Pool ratio 1:2. Base-implied shares: 100 * 1000 / 1000 = 100.
    # Quote-implied shares: 150 * 1000 / 2000 = 75.
    plan = plan_deposit(_reserves(1000, 2000), 1000, 100, 150)
    assert plan.shares_issued == 75
    assert plan.locked_shares == 0
    # Full amounts accrue to reserves even though shares were clamped.
    assert plan.new_reserves.as_tuple() == (1100, 2150)


def test_deposit_rounds_down() -> None:
    plan = plan_deposit(_reserves(3, 3), 1000, 1, 1)
    assert plan.shares_issued == 333


def test_deposit_too_small_for_one_share() -> None:
    with pytest.raises(InsufficientSharesError):
        plan_deposit(_reserves(10_000, 10_000), 1000, 1, 1)


def test_deposit_against_drained_reserve_is_rejected() -> None:
    with pytest.raises(InsufficientLiquidityError):
        plan_deposit(_reserves(0, 500), 1000, 10, 10)


@pytest.mark.parametrize("base,quote", [(0, 1), (1, 0)])
def test_deposit_rejects_zero_amounts(base: int, quote: int) -> None:
    with pytest.raises(InvalidArgumentError):
        plan_deposit(_reserves(1000, 1000), 1000, base, quote)


def test_withdraw_plan_is_proportional_and_floors() -> None:
    plan = plan_withdraw(_reserves(1000, 3001), 3000, 1000, holder_balance=1000)
    assert (plan.base_amount, plan.quote_amount) == (333, 1000)
    assert plan.new_reserves.as_tuple() == (667, 2001)


def test_withdraw_error_precedence() -> None:
    with pytest.raises(InvalidArgumentError):
        plan_withdraw(_reserves(0, 0), 0, 0, holder_balance=0)
    with pytest.raises(NoLiquidityError):
        plan_withdraw(_reserves(0, 0), 0, 1, holder_balance=0)
    with pytest.raises(InsufficientBalanceError):
        plan_withdraw(_reserves(1000, 1000), 1000, 11, holder_balance=10)


def test_withdraw_yielding_zero_of_an_asset_is_rejected() -> None:
    with pytest.raises(InsufficientLiquidityError):
        plan_withdraw(_reserves(1, 1_000_000), 1_000_000, 10, holder_balance=10)


def test_share_value_of_empty_pool_is_zero() -> None:
    assert share_value(_reserves(0, 0), 0, 12345) == (0, 0)
    assert share_value(_reserves(1000, 2000), 1000, 500) == (500, 1000)
