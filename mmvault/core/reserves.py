"""
Reserve and share accounting: deposit/withdraw planning.

These functions are pure. They validate a request against the current
`ReserveState` and share supply and return the deltas the pool must apply;
they never touch custody or the share ledger.

Deposit (non-empty pool):
    shares = min(floor(base_amount * S / base_reserve),
                 floor(quote_amount * S / quote_reserve))
Reserves always grow by the *full* deposited amounts; value in excess of the
pool ratio accrues to existing holders.

Withdraw:
    base_out  = floor(shares * base_reserve  / S)
    quote_out = floor(shares * quote_reserve / S)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from ..errors import (
    InsufficientBalanceError,
    InsufficientLiquidityError,
    InsufficientSharesError,
    InvalidArgumentError,
    NoLiquidityError,
)
from ..kernels.python.share_math import (
    checked_add,
    checked_sub,
    proportional_amount,
    proportional_shares,
    require_uint,
)
from ..state.balances import Amount
from ..state.reserves import ReserveState
from .bootstrap import compute_bootstrap_mint


@dataclass(frozen=True)
class DepositPlan:
    shares_issued: Amount
    locked_shares: Amount
    new_reserves: ReserveState

    @property
    def is_bootstrap(self) -> bool:
        return self.locked_shares > 0


@dataclass(frozen=True)
class WithdrawPlan:
    base_amount: Amount
    quote_amount: Amount
    new_reserves: ReserveState


def _require_positive(name: str, value: int) -> None:
    require_uint(name, value)
    if value == 0:
        raise InvalidArgumentError(f"{name} must be positive")


def plan_deposit(
    reserves: ReserveState,
    total_shares: Amount,
    base_amount: Amount,
    quote_amount: Amount,
) -> DepositPlan:
    """
    Compute shares to issue for a two-sided deposit.

    For an empty share supply the bootstrap rule applies (see
    `mmvault/core/bootstrap.py`); `locked_shares` is then MINIMUM_LIQUIDITY.

    Raises:
        InvalidArgumentError: If either amount is not positive
        InsufficientInitialLiquidityError: First deposit too small to cover the lock
        InsufficientLiquidityError: Shares outstanding but a reserve is empty
        InsufficientSharesError: The deposit would issue zero shares
        ArithmeticOverflowError: Reserve or share arithmetic leaves uint256
    """
    _require_positive("base_amount", base_amount)
    _require_positive("quote_amount", quote_amount)
    require_uint("total_shares", total_shares)

    locked = 0
    if total_shares == 0:
        boot = compute_bootstrap_mint(base_amount, quote_amount)
        shares = boot.depositor_shares
        locked = boot.locked_shares
    else:
        if reserves.base_reserve == 0 or reserves.quote_reserve == 0:
            raise InsufficientLiquidityError("cannot price a deposit against an empty reserve")
        from_base = proportional_shares(base_amount, reserves.base_reserve, total_shares)
        from_quote = proportional_shares(quote_amount, reserves.quote_reserve, total_shares)
        # Conservative bound: never credit a ratio the pool does not hold.
        shares = min(from_base, from_quote)

    if shares == 0:
        raise InsufficientSharesError("deposit too small to issue any shares")

    checked_add(checked_add(total_shares, shares), locked)
    new_reserves = reserves.with_reserves(
        checked_add(reserves.base_reserve, base_amount),
        checked_add(reserves.quote_reserve, quote_amount),
    )
    return DepositPlan(shares_issued=shares, locked_shares=locked, new_reserves=new_reserves)


def plan_withdraw(
    reserves: ReserveState,
    total_shares: Amount,
    shares: Amount,
    holder_balance: Amount,
) -> WithdrawPlan:
    """
    Compute the asset amounts returned for burning `shares`.

    Raises:
        InvalidArgumentError: If shares is not positive
        NoLiquidityError: If no shares are outstanding
        InsufficientBalanceError: If the holder owns fewer than `shares`
        InsufficientLiquidityError: If either output would be zero
    """
    _require_positive("shares", shares)
    require_uint("total_shares", total_shares)
    if total_shares == 0:
        raise NoLiquidityError("pool has no outstanding shares")
    if holder_balance < shares:
        raise InsufficientBalanceError(f"share balance {holder_balance} < requested {shares}")

    base_out = proportional_amount(shares, reserves.base_reserve, total_shares)
    quote_out = proportional_amount(shares, reserves.quote_reserve, total_shares)
    if base_out == 0 or quote_out == 0:
        raise InsufficientLiquidityError(
            f"withdrawal of {shares} shares yields ({base_out}, {quote_out})"
        )

    new_reserves = reserves.with_reserves(
        checked_sub(reserves.base_reserve, base_out),
        checked_sub(reserves.quote_reserve, quote_out),
    )
    return WithdrawPlan(base_amount=base_out, quote_amount=quote_out, new_reserves=new_reserves)


def share_value(reserves: ReserveState, total_shares: Amount, shares: Amount) -> Tuple[Amount, Amount]:
    """(base, quote) currently redeemable for `shares`; (0, 0) for an empty supply."""
    require_uint("shares", shares)
    require_uint("total_shares", total_shares)
    if total_shares == 0:
        return 0, 0
    return (
        proportional_amount(shares, reserves.base_reserve, total_shares),
        proportional_amount(shares, reserves.quote_reserve, total_shares),
    )
