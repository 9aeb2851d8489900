"""Exception types for the liquidity vault.

Every failure surfaced by a pool entry point is a `PoolError` subclass with a
stable `code` string. Callers that only care about the broad category can
still catch the builtin base (`ValueError`, `PermissionError`,
`OverflowError`) where one is mixed in.
"""

from __future__ import annotations


class PoolError(Exception):
    """Base class for all pool failures."""

    code = "PoolError"


class InvalidArgumentError(PoolError, ValueError):
    """Raised for zero/negative amounts and malformed configuration."""

    code = "InvalidArgument"


class UnauthorizedError(PoolError, PermissionError):
    """Raised when the caller lacks the capability an operation requires."""

    code = "Unauthorized"

    def __init__(self, role: str, account: str) -> None:
        self.role = role
        self.account = account
        super().__init__(f"account {account!r} is missing role {role!r}")


class AlreadyInitializedError(PoolError):
    code = "AlreadyInitialized"


class NotInitializedError(PoolError):
    code = "NotInitialized"


class UnsupportedAssetError(PoolError):
    """Raised when the native-asset path is used on a pool not configured for it."""

    code = "UnsupportedAsset"


class InsufficientInitialLiquidityError(PoolError):
    code = "InsufficientInitialLiquidity"


class InsufficientSharesError(PoolError):
    """Raised when a deposit would issue zero shares."""

    code = "InsufficientShares"


class InsufficientLiquidityError(PoolError):
    """Raised when a withdrawal would return zero of either asset."""

    code = "InsufficientLiquidity"


class InsufficientBalanceError(PoolError):
    code = "InsufficientBalance"


class NoLiquidityError(PoolError):
    code = "NoLiquidity"


class TransferFailedError(PoolError):
    code = "TransferFailed"


class ArithmeticOverflowError(PoolError, OverflowError):
    """Raised when a value leaves the unsigned 256-bit amount domain."""

    code = "Overflow"


class ReentrantError(PoolError):
    code = "Reentrant"


__all__ = [
    "PoolError",
    "InvalidArgumentError",
    "UnauthorizedError",
    "AlreadyInitializedError",
    "NotInitializedError",
    "UnsupportedAssetError",
    "InsufficientInitialLiquidityError",
    "InsufficientSharesError",
    "InsufficientLiquidityError",
    "InsufficientBalanceError",
    "NoLiquidityError",
    "TransferFailedError",
    "ArithmeticOverflowError",
    "ReentrantError",
]
