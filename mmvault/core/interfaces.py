"""
Collaborator interfaces consumed by the pool core.

The core never owns custody, role storage, or the order book. It talks to
them through these small interfaces; `mmvault/integration/` provides
in-memory implementations. The share ledger is consumed through
`mmvault.state.shares.ShareLedger` directly (mint / burn / balance_of /
total_supply).
"""

from __future__ import annotations

from typing import List, Mapping, Sequence

from ..errors import UnauthorizedError
from ..state.balances import Address, Amount, AssetId
from ..state.orders import CancelOrderIntent, CreateOrderIntent, OrderResult, UpdateOrderIntent


ADMIN_ROLE = "DEFAULT_ADMIN_ROLE"
SHARE_ADMIN_ROLE = "SHARE_ADMIN_ROLE"
MARKET_MAKER_ROLE = "MARKET_MAKER_ROLE"


class AccessGate:
    """Capability registry: answers "does `account` hold `role`?"."""

    def has_role(self, role: str, account: Address) -> bool:
        raise NotImplementedError

    def grant_role(self, role: str, account: Address) -> None:
        raise NotImplementedError

    def revoke_role(self, role: str, account: Address) -> None:
        raise NotImplementedError


def require_role(gate: AccessGate, role: str, account: Address) -> None:
    if not gate.has_role(role, account):
        raise UnauthorizedError(role, account)


class AssetTransfers:
    """
    Asset movement primitives.

    `pull` and `push` move several assets in one call and are all-or-nothing:
    either every leg is applied or none is, and failure is reported as
    `TransferFailedError`. Native value uses `mmvault.state.balances.NATIVE_ASSET`
    as its asset id.
    """

    def pull(self, owner: Address, recipient: Address, amounts: Mapping[AssetId, Amount]) -> None:
        raise NotImplementedError

    def push(self, sender: Address, recipient: Address, amounts: Mapping[AssetId, Amount]) -> None:
        raise NotImplementedError

    def balance_of(self, asset: AssetId, account: Address) -> Amount:
        raise NotImplementedError

    def pull_wrapped(
        self, owner: Address, recipient: Address, native_value: Amount, amounts: Mapping[AssetId, Amount]
    ) -> None:
        """
        Pull `native_value` of native value plus `amounts` from `owner` and
        wrap the native value at `recipient`, as one all-or-nothing step.
        """
        raise NotImplementedError

    def push_unwrapped(
        self, sender: Address, recipient: Address, native_value: Amount, amounts: Mapping[AssetId, Amount]
    ) -> None:
        """Unwrap `native_value` at `sender` and push it plus `amounts` to `recipient`, all-or-nothing."""
        raise NotImplementedError


class MatchingFacility:
    """External order-matching venue."""

    def create_orders(self, intents: Sequence[CreateOrderIntent]) -> List[OrderResult]:
        raise NotImplementedError

    def update_orders(self, intents: Sequence[UpdateOrderIntent]) -> List[OrderResult]:
        raise NotImplementedError

    def cancel_orders(self, intents: Sequence[CancelOrderIntent]) -> List[Amount]:
        """Cancel orders; returns the refunded amount per intent."""
        raise NotImplementedError
