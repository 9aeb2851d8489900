"""
Two-asset liquidity vault (imperative shell around the accounting core).

Lifecycle:
    pool = LiquidityPool(custody=..., shares=..., access=..., facility=...)
    pool.initialize(admin, PoolConfig(...))      # UNINITIALIZED -> ACTIVE, once

Every state-mutating entry point runs inside the pool's `ReentrancyGuard` and
follows the same order:

    validate -> compute deltas -> apply reserves -> apply shares -> move assets

Asset movement is the only step that can hand control to outside code, so it
runs last on deposit and after the burn and reserve decrement on withdraw. If
it fails, the reserve and share deltas are reverted before the error
propagates; nothing is committed on failure.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from ..config import PoolConfig
from ..errors import (
    AlreadyInitializedError,
    InvalidArgumentError,
    NotInitializedError,
    UnsupportedAssetError,
)
from ..kernels.python.share_math import require_uint
from ..state.balances import Address, Amount
from ..state.orders import CancelOrderIntent, CreateOrderIntent, OrderResult, UpdateOrderIntent
from ..state.reserves import PoolStatus, ReserveState
from ..state.shares import LOCK_ACCOUNT, ShareLedger
from .events import LiquidityAdded, LiquidityRemoved, PoolEvent
from .guard import ReentrancyGuard
from .interfaces import (
    ADMIN_ROLE,
    MARKET_MAKER_ROLE,
    SHARE_ADMIN_ROLE,
    AccessGate,
    AssetTransfers,
    MatchingFacility,
    require_role,
)
from .native import NativeAssetAdapter
from .reserves import plan_deposit, plan_withdraw, share_value
from .router import OrderRouter
from .transfers import FungibleLegs

logger = logging.getLogger(__name__)

EventCallback = Callable[[PoolEvent], None]


class LiquidityPool:
    def __init__(
        self,
        *,
        custody: AssetTransfers,
        shares: ShareLedger,
        access: AccessGate,
        facility: MatchingFacility,
        guard: Optional[ReentrancyGuard] = None,
    ) -> None:
        self._custody = custody
        self._shares = shares
        self._access = access
        self._facility = facility
        self._guard = guard if guard is not None else ReentrancyGuard()

        self._status = PoolStatus.UNINITIALIZED
        self._config: Optional[PoolConfig] = None
        self._reserves: Optional[ReserveState] = None
        self._legs: Optional[FungibleLegs] = None
        self._native: Optional[NativeAssetAdapter] = None
        self._router: Optional[OrderRouter] = None

        self.events: List[PoolEvent] = []
        self._subscribers: List[EventCallback] = []

    # ------------------------------------------------------------------
    # Initialization
    # ------------------------------------------------------------------

    def initialize(self, caller: Address, config: PoolConfig) -> None:
        """
        Configure the pool once and grant `caller` the admin capabilities.

        Raises:
            AlreadyInitializedError: On any second call
        """
        with self._guard:
            if self._status is not PoolStatus.UNINITIALIZED:
                raise AlreadyInitializedError("pool is already initialized")
            if not isinstance(config, PoolConfig):
                raise InvalidArgumentError("config must be a PoolConfig")

            self._access.grant_role(ADMIN_ROLE, caller)
            self._access.grant_role(SHARE_ADMIN_ROLE, caller)
            self._shares.set_metadata(config.name, config.symbol)

            self._config = config
            self._reserves = ReserveState(base_asset=config.base_asset, quote_asset=config.quote_asset)
            self._legs = FungibleLegs(
                custody=self._custody,
                pool_address=config.pool_address,
                base_asset=config.base_asset,
                quote_asset=config.quote_asset,
            )
            if config.native_enabled:
                self._native = NativeAssetAdapter(
                    custody=self._custody,
                    pool_address=config.pool_address,
                    base_asset=config.base_asset,
                    quote_asset=config.quote_asset,
                    native_wrapper_asset=config.native_wrapper_asset,
                )
            self._router = OrderRouter(
                pool_address=config.pool_address,
                access=self._access,
                facility=self._facility,
            )
            self._status = PoolStatus.ACTIVE

        logger.info(
            "Pool initialized",
            extra={
                "event": "pool.initialized",
                "pool": config.pool_address,
                "admin": caller,
                "native_enabled": config.native_enabled,
            },
        )

    # ------------------------------------------------------------------
    # Liquidity
    # ------------------------------------------------------------------

    def deposit(self, caller: Address, base_amount: Amount, quote_amount: Amount) -> Amount:
        """Deposit both assets; returns the number of shares issued to `caller`."""
        with self._guard:
            self._require_active()
            return self._deposit(caller, base_amount, quote_amount, self._legs)

    def withdraw(self, caller: Address, shares: Amount) -> Tuple[Amount, Amount]:
        """Burn `shares` from `caller`; returns the (base, quote) paid out."""
        with self._guard:
            self._require_active()
            return self._withdraw(caller, shares, self._legs)

    def deposit_native(self, caller: Address, quote_amount: Amount, value: Amount) -> Amount:
        """Like `deposit`, with the base leg supplied as native value."""
        with self._guard:
            native = self._require_native()
            return self._deposit(caller, value, quote_amount, native)

    def withdraw_native(self, caller: Address, shares: Amount) -> Tuple[Amount, Amount]:
        """Like `withdraw`, with the base leg paid out as native value."""
        with self._guard:
            native = self._require_native()
            return self._withdraw(caller, shares, native)

    def receive_native(self, sender: Address, value: Amount) -> None:
        """
        Bare native-value receipt outside deposit_native.

        Accepted (and wrapped) only on native-enabled pools; reserves are not
        updated until `sync_reserves`.
        """
        with self._guard:
            native = self._require_native()
            require_uint("value", value)
            if value == 0:
                raise InvalidArgumentError("value must be positive")
            native.receive(sender, value)
        logger.info(
            "Native value received",
            extra={"event": "pool.native_received", "sender": sender, "value": value},
        )

    def _deposit(self, caller: Address, base_amount: Amount, quote_amount: Amount, legs: FungibleLegs) -> Amount:
        plan = plan_deposit(self._reserves, self._shares.total_supply(), base_amount, quote_amount)

        prior = self._reserves
        minted: List[Tuple[Address, Amount]] = []
        self._reserves = plan.new_reserves
        try:
            if plan.locked_shares:
                self._shares.mint(LOCK_ACCOUNT, plan.locked_shares)
                minted.append((LOCK_ACCOUNT, plan.locked_shares))
            self._shares.mint(caller, plan.shares_issued)
            minted.append((caller, plan.shares_issued))
            legs.pull_in(caller, base_amount, quote_amount)
        except Exception:
            self._reserves = prior
            for account, amount in reversed(minted):
                self._shares.revert_mint(account, amount)
            logger.debug("Deposit rolled back", extra={"event": "pool.deposit_rollback", "caller": caller})
            raise

        logger.info(
            "Liquidity added",
            extra={
                "event": "pool.deposit",
                "provider": caller,
                "base_amount": base_amount,
                "quote_amount": quote_amount,
                "shares": plan.shares_issued,
                "bootstrap": plan.is_bootstrap,
            },
        )
        self._emit(LiquidityAdded(caller, base_amount, quote_amount, plan.shares_issued))
        return plan.shares_issued

    def _withdraw(self, caller: Address, shares: Amount, legs: FungibleLegs) -> Tuple[Amount, Amount]:
        plan = plan_withdraw(
            self._reserves,
            self._shares.total_supply(),
            shares,
            self._shares.spendable_balance(caller),
        )

        prior = self._reserves
        burned = False
        self._reserves = plan.new_reserves
        try:
            self._shares.burn(caller, shares)
            burned = True
            legs.push_out(caller, plan.base_amount, plan.quote_amount)
        except Exception:
            self._reserves = prior
            if burned:
                self._shares.mint(caller, shares)
            logger.debug("Withdraw rolled back", extra={"event": "pool.withdraw_rollback", "caller": caller})
            raise

        logger.info(
            "Liquidity removed",
            extra={
                "event": "pool.withdraw",
                "provider": caller,
                "base_amount": plan.base_amount,
                "quote_amount": plan.quote_amount,
                "shares": shares,
            },
        )
        self._emit(LiquidityRemoved(caller, plan.base_amount, plan.quote_amount, shares))
        return plan.base_amount, plan.quote_amount

    # ------------------------------------------------------------------
    # Market making
    # ------------------------------------------------------------------

    def create_orders(self, caller: Address, intents: Sequence[CreateOrderIntent]) -> List[OrderResult]:
        with self._guard:
            self._require_active()
            return self._router.create_orders(caller, intents)

    def update_orders(self, caller: Address, intents: Sequence[UpdateOrderIntent]) -> List[OrderResult]:
        with self._guard:
            self._require_active()
            return self._router.update_orders(caller, intents)

    def cancel_orders(self, caller: Address, intents: Sequence[CancelOrderIntent]) -> List[Amount]:
        with self._guard:
            self._require_active()
            return self._router.cancel_orders(caller, intents)

    # ------------------------------------------------------------------
    # Administration
    # ------------------------------------------------------------------

    def grant_market_maker(self, caller: Address, account: Address) -> None:
        self._require_active()
        require_role(self._access, ADMIN_ROLE, caller)
        self._access.grant_role(MARKET_MAKER_ROLE, account)
        logger.info("Market maker granted", extra={"event": "pool.mm_granted", "account": account})

    def revoke_market_maker(self, caller: Address, account: Address) -> None:
        self._require_active()
        require_role(self._access, ADMIN_ROLE, caller)
        self._access.revoke_role(MARKET_MAKER_ROLE, account)
        logger.info("Market maker revoked", extra={"event": "pool.mm_revoked", "account": account})

    def sync_reserves(self, caller: Address) -> Tuple[Amount, Amount]:
        """
        Overwrite recorded reserves with actual custodied balances.

        Serialized with every other guarded operation. Called from inside a
        guarded call tree (e.g. a transfer hook) it joins that operation's
        hold instead of failing with `ReentrantError`; custody has already
        moved by the time a hook runs.
        """
        self._require_active()
        require_role(self._access, ADMIN_ROLE, caller)
        cfg = self._config
        with self._guard.joined():
            base = self._custody.balance_of(cfg.base_asset, cfg.pool_address)
            quote = self._custody.balance_of(cfg.quote_asset, cfg.pool_address)
            before = self._reserves.as_tuple()
            self._reserves = self._reserves.with_reserves(base, quote)
        logger.info(
            "Reserves synced",
            extra={"event": "pool.sync", "before": before, "after": (base, quote)},
        )
        return base, quote

    # ------------------------------------------------------------------
    # Views (never block, never mutate)
    # ------------------------------------------------------------------

    @property
    def status(self) -> PoolStatus:
        return self._status

    @property
    def config(self) -> Optional[PoolConfig]:
        return self._config

    @property
    def reserves(self) -> Optional[ReserveState]:
        return self._reserves

    def get_reserves(self) -> Tuple[Amount, Amount]:
        self._require_active()
        return self._reserves.as_tuple()

    def get_lp_token_value(self, shares: Amount) -> Tuple[Amount, Amount]:
        self._require_active()
        return share_value(self._reserves, self._shares.total_supply(), shares)

    def total_shares(self) -> Amount:
        return self._shares.total_supply()

    def share_balance_of(self, account: Address) -> Amount:
        return self._shares.balance_of(account)

    def share_balances(self) -> Dict[Address, Amount]:
        return self._shares.get_all_balances()

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def subscribe(self, callback: EventCallback) -> None:
        self._subscribers.append(callback)

    def _emit(self, event: PoolEvent) -> None:
        self.events.append(event)
        for callback in list(self._subscribers):
            try:
                callback(event)
            except Exception:
                # Already committed; observer errors are only logged.
                logger.exception("Event subscriber failed", extra={"event": "pool.subscriber_error"})

    # ------------------------------------------------------------------

    def _require_active(self) -> None:
        if self._status is not PoolStatus.ACTIVE:
            raise NotInitializedError("pool is not initialized")

    def _require_native(self) -> NativeAssetAdapter:
        self._require_active()
        if self._native is None:
            raise UnsupportedAssetError(
                f"base asset {self._config.base_asset} is not the native wrapper; native value is not accepted"
            )
        return self._native

    def __repr__(self) -> str:
        return f"LiquidityPool(status={self._status.value}, reserves={self._reserves!r}, shares={self.total_shares()})"
