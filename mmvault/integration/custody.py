"""
In-memory custody backend.

Reference implementation of `AssetTransfers` on top of `BalanceTable`, used by
tests and the offline demo. Multi-leg transfers, and the combined wrap and unwrap
movements of native value, are all-or-nothing: every leg is applied or none is.

Receive hooks model contract recipients. A hook registered for an address is
invoked after every transfer into that address, while the caller's operation
is still in progress; if the hook raises, the whole transfer (including
anything the hook itself moved) is reverted and the hook's exception
propagates unchanged.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Callable, Dict, Iterator, Mapping, Optional, Set

from ..errors import ArithmeticOverflowError, InvalidArgumentError, TransferFailedError
from ..core.interfaces import AssetTransfers
from ..kernels.python.share_math import MAX_UINT256, require_uint
from ..state.balances import NATIVE_ASSET, Address, Amount, AssetId, BalanceTable

logger = logging.getLogger(__name__)

ReceiveHook = Callable[[Address, Dict[AssetId, Amount]], None]


class InMemoryCustody(AssetTransfers):
    def __init__(self, *, native_wrapper_asset: AssetId, balances: Optional[BalanceTable] = None) -> None:
        self.native_wrapper_asset = native_wrapper_asset
        self._table = balances if balances is not None else BalanceTable()
        self._hooks: Dict[Address, ReceiveHook] = {}
        self._frozen: Set[AssetId] = set()
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Test and demo helpers
    # ------------------------------------------------------------------

    def mint(self, account: Address, asset: AssetId, amount: Amount) -> None:
        """Credit `amount` of `asset` to `account` out of thin air."""
        require_uint("amount", amount)
        with self._lock:
            new_balance = self._table.get(account, asset) + amount
            if new_balance > MAX_UINT256:
                raise ArithmeticOverflowError(f"balance of {asset} for {account} leaves uint256")
            self._table.set(account, asset, new_balance)

    def set_receive_hook(self, address: Address, hook: Optional[ReceiveHook]) -> None:
        with self._lock:
            if hook is None:
                self._hooks.pop(address, None)
            else:
                self._hooks[address] = hook

    def freeze_asset(self, asset: AssetId, frozen: bool = True) -> None:
        """Make every movement of `asset` fail (a paused or reverting token)."""
        with self._lock:
            if frozen:
                self._frozen.add(asset)
            else:
                self._frozen.discard(asset)

    def balances(self) -> BalanceTable:
        with self._lock:
            return self._table.copy()

    # ------------------------------------------------------------------
    # AssetTransfers
    # ------------------------------------------------------------------

    def balance_of(self, asset: AssetId, account: Address) -> Amount:
        with self._lock:
            return self._table.get(account, asset)

    def pull(self, owner: Address, recipient: Address, amounts: Mapping[AssetId, Amount]) -> None:
        legs = self._legs(amounts)
        with self._transaction(owner, recipient, legs):
            self._debit_credit(owner, recipient, legs)
            self._notify(owner, recipient, legs)

    def push(self, sender: Address, recipient: Address, amounts: Mapping[AssetId, Amount]) -> None:
        legs = self._legs(amounts)
        with self._transaction(sender, recipient, legs):
            self._debit_credit(sender, recipient, legs)
            self._notify(sender, recipient, legs)

    def pull_wrapped(
        self, owner: Address, recipient: Address, native_value: Amount, amounts: Mapping[AssetId, Amount]
    ) -> None:
        legs = self._legs({NATIVE_ASSET: native_value, **amounts})
        with self._transaction(owner, recipient, legs):
            self._debit_credit(owner, recipient, legs)
            self._convert(recipient, NATIVE_ASSET, self.native_wrapper_asset, native_value)
            self._notify(owner, recipient, legs)

    def push_unwrapped(
        self, sender: Address, recipient: Address, native_value: Amount, amounts: Mapping[AssetId, Amount]
    ) -> None:
        legs = self._legs({NATIVE_ASSET: native_value, **amounts})
        with self._transaction(sender, recipient, legs):
            self._convert(sender, self.native_wrapper_asset, NATIVE_ASSET, native_value)
            self._debit_credit(sender, recipient, legs)
            self._notify(sender, recipient, legs)

    # ------------------------------------------------------------------

    @staticmethod
    def _legs(amounts: Mapping[AssetId, Amount]) -> Dict[AssetId, Amount]:
        legs = dict(amounts)
        if not legs:
            raise InvalidArgumentError("transfer has no legs")
        for asset, amount in legs.items():
            require_uint(f"amount[{asset}]", amount)
        return legs

    @contextmanager
    def _transaction(self, src: Address, dst: Address, legs: Dict[AssetId, Amount]) -> Iterator[None]:
        """Hold the book lock; any exception restores the book as it was on entry."""
        with self._lock:
            checkpoint = self._table.copy()
            try:
                yield
            except Exception as exc:
                self._table = checkpoint
                if isinstance(exc, TransferFailedError):
                    logger.debug(
                        "Transfer rejected",
                        extra={"event": "custody.transfer_failed", "src": src, "dst": dst, "legs": legs},
                    )
                raise

    def _debit_credit(self, src: Address, dst: Address, legs: Mapping[AssetId, Amount]) -> None:
        try:
            for asset, amount in legs.items():
                if amount == 0:
                    continue
                self._check_not_frozen(asset)
                self._table.subtract(src, asset, amount)
                self._credit(dst, asset, amount)
        except ValueError as exc:
            raise TransferFailedError(f"transfer {src} -> {dst} failed: {exc}") from exc

    def _convert(self, account: Address, from_asset: AssetId, to_asset: AssetId, amount: Amount) -> None:
        if amount == 0:
            return
        self._check_not_frozen(from_asset)
        self._check_not_frozen(to_asset)
        try:
            self._table.subtract(account, from_asset, amount)
        except ValueError as exc:
            raise TransferFailedError(f"convert {from_asset} -> {to_asset} failed: {exc}") from exc
        self._credit(account, to_asset, amount)

    def _notify(self, src: Address, dst: Address, legs: Dict[AssetId, Amount]) -> None:
        # Runs inside the transaction: a raising hook undoes the whole operation.
        hook = self._hooks.get(dst)
        if hook is not None:
            hook(src, legs)

    def _credit(self, account: Address, asset: AssetId, amount: Amount) -> None:
        new_balance = self._table.get(account, asset) + amount
        if new_balance > MAX_UINT256:
            raise TransferFailedError(f"balance of {asset} for {account} would leave uint256")
        self._table.set(account, asset, new_balance)

    def _check_not_frozen(self, asset: AssetId) -> None:
        if asset in self._frozen:
            raise TransferFailedError(f"asset {asset} is frozen")
