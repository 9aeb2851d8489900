"""
Asset legs of deposit/withdraw.

`FungibleLegs` moves the base and quote tokens between a caller and the pool
in a single all-or-nothing custody call. The native-asset variant lives in
`mmvault/core/native.py` and overrides both directions.
"""

from __future__ import annotations

from ..state.balances import Address, Amount, AssetId
from .interfaces import AssetTransfers


class FungibleLegs:
    def __init__(
        self,
        *,
        custody: AssetTransfers,
        pool_address: Address,
        base_asset: AssetId,
        quote_asset: AssetId,
    ) -> None:
        self.custody = custody
        self.pool_address = pool_address
        self.base_asset = base_asset
        self.quote_asset = quote_asset

    def pull_in(self, caller: Address, base_amount: Amount, quote_amount: Amount) -> None:
        self.custody.pull(
            caller,
            self.pool_address,
            {self.base_asset: base_amount, self.quote_asset: quote_amount},
        )

    def push_out(self, caller: Address, base_amount: Amount, quote_amount: Amount) -> None:
        self.custody.push(
            self.pool_address,
            caller,
            {self.base_asset: base_amount, self.quote_asset: quote_amount},
        )
