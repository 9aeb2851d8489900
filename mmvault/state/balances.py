"""
Custodied asset balances: (account, asset) -> amount.

Identities and asset ids are opaque hex strings; amounts are non-negative
Python ints (the uint256 bound is enforced by whoever credits them).
"""

from typing import Dict, Tuple


Address = str
AssetId = str
Amount = int

# Chain-native value attached to a call. It is not a token, so it gets a
# reserved id that no deployed asset can take.
NATIVE_ASSET = "0x" + "00" * 20


class BalanceTable:
    """
    Sparse per-asset balance book.

    Storage is asset -> {account -> amount}; accounts whose balance drops to
    zero are removed, and assets with no holders disappear with them.
    """

    def __init__(self) -> None:
        self._by_asset: Dict[AssetId, Dict[Address, Amount]] = {}

    def get(self, address: Address, asset: AssetId) -> Amount:
        return self._by_asset.get(asset, {}).get(address, 0)

    def set(self, address: Address, asset: AssetId, amount: Amount) -> None:
        """
        Raises:
            ValueError: If amount is negative
        """
        if amount < 0:
            raise ValueError(f"negative balance for {address} in {asset}: {amount}")
        holders = self._by_asset.setdefault(asset, {})
        if amount:
            holders[address] = amount
            return
        holders.pop(address, None)
        if not holders:
            del self._by_asset[asset]

    def add(self, address: Address, asset: AssetId, delta: Amount) -> None:
        """Apply a signed delta; a result below zero raises ValueError and changes nothing."""
        have = self.get(address, asset)
        if have + delta < 0:
            raise ValueError(f"insufficient {asset} for {address}: have {have}, need {-delta}")
        self.set(address, asset, have + delta)

    def subtract(self, address: Address, asset: AssetId, delta: Amount) -> None:
        if delta < 0:
            raise ValueError(f"subtract expects a non-negative amount, got {delta}")
        self.add(address, asset, -delta)

    def get_all_balances(self) -> Dict[Tuple[Address, AssetId], Amount]:
        return {
            (address, asset): amount
            for asset, holders in self._by_asset.items()
            for address, amount in holders.items()
        }

    def get_balances_for_address(self, address: Address) -> Dict[AssetId, Amount]:
        return {
            asset: holders[address]
            for asset, holders in self._by_asset.items()
            if address in holders
        }

    def total_of(self, asset: AssetId) -> Amount:
        return sum(self._by_asset.get(asset, {}).values())

    def copy(self) -> "BalanceTable":
        out = BalanceTable()
        out._by_asset = {asset: dict(holders) for asset, holders in self._by_asset.items()}
        return out

    def __repr__(self) -> str:
        return f"BalanceTable({len(self._by_asset)} assets)"
