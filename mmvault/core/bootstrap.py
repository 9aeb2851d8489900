"""
First-deposit (bootstrap) share sizing.

The first deposit into an empty pool seeds the share supply at the geometric
mean of the two deposited amounts:

    raw_shares = isqrt(base_amount * quote_amount)

and permanently locks MINIMUM_LIQUIDITY of those shares to an unspendable
account, so total supply can never again be driven near zero and rounding
cannot be used against later depositors.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import InsufficientInitialLiquidityError, InvalidArgumentError
from ..kernels.python.share_math import integer_sqrt, require_uint


MINIMUM_LIQUIDITY = 1000


@dataclass(frozen=True)
class BootstrapMint:
    raw_shares: int
    locked_shares: int
    depositor_shares: int


def compute_bootstrap_mint(base_amount: int, quote_amount: int) -> BootstrapMint:
    """
    Size the initial share supply.

    Raises:
        InvalidArgumentError: If either amount is not positive
        InsufficientInitialLiquidityError: If isqrt(base * quote) <= MINIMUM_LIQUIDITY
    """
    require_uint("base_amount", base_amount)
    require_uint("quote_amount", quote_amount)
    if base_amount == 0 or quote_amount == 0:
        raise InvalidArgumentError(f"Initial deposits must be positive: ({base_amount}, {quote_amount})")

    raw_shares = integer_sqrt(base_amount * quote_amount)
    if raw_shares <= MINIMUM_LIQUIDITY:
        raise InsufficientInitialLiquidityError(
            f"isqrt(base_amount * quote_amount) = {raw_shares} <= MINIMUM_LIQUIDITY ({MINIMUM_LIQUIDITY})"
        )

    return BootstrapMint(
        raw_shares=raw_shares,
        locked_shares=MINIMUM_LIQUIDITY,
        depositor_shares=raw_shares - MINIMUM_LIQUIDITY,
    )
