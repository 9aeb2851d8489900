"""
Native-asset deposit/withdraw legs.

The native paths share the fungible accounting exactly; only the base leg
changes. Deposited native value is wrapped into the base asset (which must be
the native wrapper), and withdrawn base is unwrapped and paid out as native
value. Recorded base reserves therefore always track wrapper custody.
"""

from __future__ import annotations

from ..errors import UnsupportedAssetError
from ..state.balances import Address, Amount, AssetId
from .interfaces import AssetTransfers
from .transfers import FungibleLegs


def require_native_support(base_asset: AssetId, native_wrapper_asset: AssetId) -> None:
    if base_asset != native_wrapper_asset:
        raise UnsupportedAssetError(
            f"base asset {base_asset} is not the native wrapper {native_wrapper_asset}"
        )


class NativeAssetAdapter(FungibleLegs):
    def __init__(
        self,
        *,
        custody: AssetTransfers,
        pool_address: Address,
        base_asset: AssetId,
        quote_asset: AssetId,
        native_wrapper_asset: AssetId,
    ) -> None:
        require_native_support(base_asset, native_wrapper_asset)
        super().__init__(
            custody=custody,
            pool_address=pool_address,
            base_asset=base_asset,
            quote_asset=quote_asset,
        )

    def pull_in(self, caller: Address, base_amount: Amount, quote_amount: Amount) -> None:
        self.custody.pull_wrapped(caller, self.pool_address, base_amount, {self.quote_asset: quote_amount})

    def push_out(self, caller: Address, base_amount: Amount, quote_amount: Amount) -> None:
        self.custody.push_unwrapped(self.pool_address, caller, base_amount, {self.quote_asset: quote_amount})

    def receive(self, sender: Address, value: Amount) -> None:
        """Accept bare native value into custody (wrapped; reserves untouched)."""
        self.custody.pull_wrapped(sender, self.pool_address, value, {})
