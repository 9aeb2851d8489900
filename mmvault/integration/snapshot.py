"""
Pool state snapshots for indexers and auditors.

A snapshot is a versioned, canonical-JSON view of one pool: lifecycle status,
configuration, recorded reserves and the full share register. Its commitment
is SHA-256 over a domain tag plus the canonical bytes; the commitment is kept
outside `data` so the payload never references itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..config import PoolConfig
from ..core.pool import LiquidityPool
from ..state.canonical import canonical_json_bytes, commitment, encode_amount
from ..state.reserves import ReserveState


POOL_SNAPSHOT_VERSION = 1
SNAPSHOT_LABEL = "pool_snapshot"


@dataclass(frozen=True)
class PoolSnapshot:
    version: int
    data: Dict[str, Any]

    def canonical_bytes(self) -> bytes:
        return canonical_json_bytes(self.data)

    def commitment_bytes(self) -> bytes:
        return commitment(SNAPSHOT_LABEL, self.version, self.data)

    def commitment_hex(self) -> str:
        return "0x" + self.commitment_bytes().hex()


def _config_view(cfg: Optional[PoolConfig]) -> Optional[Dict[str, str]]:
    if cfg is None:
        return None
    return {
        "pool_address": cfg.pool_address,
        "matching_engine": cfg.matching_engine,
        "native_wrapper_asset": cfg.native_wrapper_asset,
        "base_asset": cfg.base_asset,
        "quote_asset": cfg.quote_asset,
        "name": cfg.name,
        "symbol": cfg.symbol,
    }


def _reserves_view(reserves: Optional[ReserveState]) -> Optional[Dict[str, str]]:
    if reserves is None:
        return None
    return {
        "base_asset": reserves.base_asset,
        "quote_asset": reserves.quote_asset,
        "base_reserve": encode_amount(reserves.base_reserve),
        "quote_reserve": encode_amount(reserves.quote_reserve),
    }


def snapshot_from_pool(pool: LiquidityPool, *, version: int = POOL_SNAPSHOT_VERSION) -> PoolSnapshot:
    """
    Capture `pool` as a `PoolSnapshot`.

    Share holders are listed in ascending account order so the encoding does
    not depend on ledger insertion order.

    Raises:
        ValueError: If version is not a positive int
    """
    if not isinstance(version, int) or isinstance(version, bool) or version <= 0:
        raise ValueError("version must be a positive int")

    holders = sorted(pool.share_balances().items())
    data: Dict[str, Any] = {
        "version": version,
        "status": pool.status.value,
        "config": _config_view(pool.config),
        "reserves": _reserves_view(pool.reserves),
        "total_shares": encode_amount(pool.total_shares()),
        "shares": [{"account": account, "shares": encode_amount(amount)} for account, amount in holders],
    }
    return PoolSnapshot(version=version, data=data)
