"""
Reserve state for the vault.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Tuple

from ..errors import InvalidArgumentError
from .balances import Amount, AssetId


class PoolStatus(Enum):
    """Lifecycle of a pool instance. There is no transition back to UNINITIALIZED."""
    UNINITIALIZED = "UNINITIALIZED"
    ACTIVE = "ACTIVE"


@dataclass(frozen=True)
class ReserveState:
    """
    Recorded reserves of the two pooled assets.

    Attributes:
        base_asset: Base asset identifier (immutable after initialization)
        quote_asset: Quote asset identifier (immutable after initialization)
        base_reserve: Recorded base amount; <= custodied base balance after every call
        quote_reserve: Recorded quote amount; <= custodied quote balance after every call
    """
    base_asset: AssetId
    quote_asset: AssetId
    base_reserve: Amount = 0
    quote_reserve: Amount = 0

    def __post_init__(self) -> None:
        if not self.base_asset or not self.quote_asset:
            raise InvalidArgumentError("asset identifiers must be non-empty")
        if self.base_asset == self.quote_asset:
            raise InvalidArgumentError(f"base and quote assets must differ: {self.base_asset}")
        if self.base_reserve < 0 or self.quote_reserve < 0:
            raise InvalidArgumentError(
                f"Reserves must be non-negative: ({self.base_reserve}, {self.quote_reserve})"
            )

    def as_tuple(self) -> Tuple[Amount, Amount]:
        return self.base_reserve, self.quote_reserve

    def with_reserves(self, base_reserve: Amount, quote_reserve: Amount) -> "ReserveState":
        return replace(self, base_reserve=base_reserve, quote_reserve=quote_reserve)

    def get_reserve(self, asset: AssetId) -> Amount:
        """
        Raises:
            InvalidArgumentError: If asset is not pooled here
        """
        if asset == self.base_asset:
            return self.base_reserve
        if asset == self.quote_asset:
            return self.quote_reserve
        raise InvalidArgumentError(f"Asset {asset} is not pooled")

    def __repr__(self) -> str:
        return (
            f"ReserveState(assets=({self.base_asset[:10]}..., {self.quote_asset[:10]}...), "
            f"reserves=({self.base_reserve}, {self.quote_reserve}))"
        )
