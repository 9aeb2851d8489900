"""
Share math kernel.

Pure integer functions used by the reserve ledger:
- `integer_sqrt` sizes the bootstrap share supply,
- `proportional_shares` / `proportional_amount` convert between asset amounts
  and shares with floor rounding.

All values live in the unsigned 256-bit domain. Intermediate products may be
up to 512 bits wide (Python ints are arbitrary precision); only inputs and
results are range-checked.
"""

from __future__ import annotations

from ...errors import ArithmeticOverflowError, InvalidArgumentError


MAX_UINT256 = (1 << 256) - 1


def require_uint(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidArgumentError(f"{name} must be an int, got {type(value).__name__}")
    if value < 0:
        raise InvalidArgumentError(f"{name} must be non-negative: {value}")
    if value > MAX_UINT256:
        raise ArithmeticOverflowError(f"{name} exceeds uint256: {value}")


def checked_add(a: int, b: int) -> int:
    """a + b, rejecting results outside uint256."""
    require_uint("a", a)
    require_uint("b", b)
    out = a + b
    if out > MAX_UINT256:
        raise ArithmeticOverflowError(f"addition overflows uint256: {a} + {b}")
    return out


def checked_sub(a: int, b: int) -> int:
    require_uint("a", a)
    require_uint("b", b)
    if b > a:
        raise ArithmeticOverflowError(f"subtraction underflows: {a} - {b}")
    return a - b


def integer_sqrt(y: int) -> int:
    """
    Largest z such that z * z <= y.

    Newton's method seeded at y // 2 + 1; the iterate decreases monotonically
    until it stops improving, so the loop always terminates at floor(sqrt(y)).
    The product of two uint256 values is accepted here (up to 512 bits).
    """
    if not isinstance(y, int) or isinstance(y, bool):
        raise InvalidArgumentError(f"y must be an int, got {type(y).__name__}")
    if y < 0:
        raise InvalidArgumentError(f"y must be non-negative: {y}")
    if y > MAX_UINT256 * MAX_UINT256:
        raise ArithmeticOverflowError("y exceeds the uint256 product domain")

    if y > 3:
        z = y
        x = y // 2 + 1
        while x < z:
            z = x
            x = (y // x + x) // 2
        return z
    if y != 0:
        return 1
    return 0


def mul_div(a: int, b: int, denominator: int) -> int:
    """
    floor(a * b / denominator) with a full-width intermediate product.

    Raises ArithmeticOverflowError if the quotient does not fit in uint256.
    """
    require_uint("a", a)
    require_uint("b", b)
    require_uint("denominator", denominator)
    if denominator == 0:
        raise InvalidArgumentError("denominator must be positive")

    out = (a * b) // denominator
    if out > MAX_UINT256:
        raise ArithmeticOverflowError(f"mul_div result exceeds uint256: {a} * {b} / {denominator}")
    return out


def proportional_shares(contributed: int, total_of_asset: int, total_shares: int) -> int:
    """floor(contributed * total_shares / total_of_asset)."""
    if total_of_asset == 0:
        raise InvalidArgumentError("total_of_asset must be positive")
    return mul_div(contributed, total_shares, total_of_asset)


def proportional_amount(shares: int, total_of_asset: int, total_shares: int) -> int:
    """floor(shares * total_of_asset / total_shares)."""
    if total_shares == 0:
        raise InvalidArgumentError("total_shares must be positive")
    return mul_div(shares, total_of_asset, total_shares)
