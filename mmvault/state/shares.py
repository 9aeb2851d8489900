"""
Share (LP token) ledger for the vault.

Shares are a single fungible claim token scoped to one pool. The ledger only
does bookkeeping; the pool decides when to mint and burn.
"""

from __future__ import annotations

from typing import Dict

from ..errors import InsufficientBalanceError, InvalidArgumentError
from .balances import Address, Amount

# Unspendable holder of the minimum-liquidity lock. Nobody controls this
# address, and the ledger refuses transfers out of it.
LOCK_ACCOUNT: Address = "0x" + "00" * 18 + "dead"


class ShareLedger:
    """
    Share balance table mapping address -> shares, plus the total supply.

    Notes:
    - Balances are always non-negative.
    - Zero balances are omitted to keep the table sparse.
    - `total_supply()` always equals the sum of all balances.
    """

    def __init__(self, name: str = "", symbol: str = "") -> None:
        self.name = name
        self.symbol = symbol
        self._balances: Dict[Address, Amount] = {}
        self._total_supply: Amount = 0

    def balance_of(self, account: Address) -> Amount:
        """Get share balance for `account`. Returns 0 if not found."""
        return self._balances.get(account, 0)

    def total_supply(self) -> Amount:
        return self._total_supply

    def set_metadata(self, name: str, symbol: str) -> None:
        self.name = name
        self.symbol = symbol

    def mint(self, account: Address, amount: Amount) -> None:
        if amount <= 0:
            raise InvalidArgumentError(f"mint amount must be positive: {amount}")
        self._balances[account] = self.balance_of(account) + amount
        self._total_supply += amount

    def spendable_balance(self, account: Address) -> Amount:
        """Shares `account` may burn or transfer; always 0 for the lock account."""
        if account == LOCK_ACCOUNT:
            return 0
        return self.balance_of(account)

    def burn(self, account: Address, amount: Amount) -> None:
        if amount <= 0:
            raise InvalidArgumentError(f"burn amount must be positive: {amount}")
        if account == LOCK_ACCOUNT:
            raise InsufficientBalanceError("minimum-liquidity lock shares are never burned")
        current = self.balance_of(account)
        if amount > current:
            raise InsufficientBalanceError(
                f"cannot burn {amount} shares from {account}: balance is {current}"
            )
        self._set(account, current - amount)
        self._total_supply -= amount

    def revert_mint(self, account: Address, amount: Amount) -> None:
        """Undo a `mint` made earlier in the same pool call (rollback only)."""
        current = self.balance_of(account)
        if amount <= 0 or amount > current:
            raise InvalidArgumentError(f"cannot revert mint of {amount} from balance {current}")
        self._set(account, current - amount)
        self._total_supply -= amount

    def transfer(self, sender: Address, recipient: Address, amount: Amount) -> None:
        """Move shares between holders. Lock-account shares never move."""
        if sender == LOCK_ACCOUNT:
            raise InvalidArgumentError("minimum-liquidity lock shares are not transferable")
        if amount <= 0:
            raise InvalidArgumentError(f"transfer amount must be positive: {amount}")
        current = self.balance_of(sender)
        if amount > current:
            raise InsufficientBalanceError(
                f"cannot transfer {amount} shares from {sender}: balance is {current}"
            )
        self._set(sender, current - amount)
        self._balances[recipient] = self.balance_of(recipient) + amount

    def get_all_balances(self) -> Dict[Address, Amount]:
        return dict(self._balances)

    def _set(self, account: Address, amount: Amount) -> None:
        if amount == 0:
            self._balances.pop(account, None)
        else:
            self._balances[account] = amount

    def __repr__(self) -> str:
        return f"ShareLedger({self.symbol or '?'}, {len(self._balances)} holders, supply={self._total_supply})"
