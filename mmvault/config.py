"""
Pool configuration.

`PoolConfig` is consumed exactly once by `LiquidityPool.initialize`. It can be
built directly, loaded from a YAML file, or assembled from environment
variables (container deployments).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml

from .errors import InvalidArgumentError
from .state.balances import Address, AssetId


ENV_PREFIX = "MMVAULT_"


@dataclass(frozen=True)
class PoolConfig:
    """
    One-time pool configuration.

    Attributes:
        pool_address: Identity of the pool (custody holder and order beneficiary)
        matching_engine: Identity of the external order-matching facility
        native_wrapper_asset: Asset id of the wrapped chain-native asset
        base_asset: Base asset id
        quote_asset: Quote asset id
        name: Share token display name
        symbol: Share token display symbol
    """

    pool_address: Address
    matching_engine: Address
    native_wrapper_asset: AssetId
    base_asset: AssetId
    quote_asset: AssetId
    name: str = "Vault Share"
    symbol: str = "VLT"

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, str):
                raise InvalidArgumentError(f"{f.name} must be a string")
            if not value.strip():
                raise InvalidArgumentError(f"{f.name} must be non-empty")
        if self.base_asset == self.quote_asset:
            raise InvalidArgumentError(f"base and quote assets must differ: {self.base_asset}")
        if self.pool_address in (self.base_asset, self.quote_asset):
            raise InvalidArgumentError("pool_address must not collide with an asset id")

    @property
    def native_enabled(self) -> bool:
        """True when the base asset is the native-asset wrapper."""
        return self.base_asset == self.native_wrapper_asset


def pool_config_from_mapping(obj: Mapping[str, Any]) -> PoolConfig:
    if not isinstance(obj, Mapping):
        raise InvalidArgumentError("pool config must be a mapping")
    known = {f.name for f in fields(PoolConfig)}
    unknown = sorted(set(obj) - known)
    if unknown:
        raise InvalidArgumentError(f"unknown pool config keys: {', '.join(unknown)}")
    try:
        return PoolConfig(**dict(obj))
    except TypeError as exc:
        raise InvalidArgumentError(f"incomplete pool config: {exc}") from exc


def load_pool_config(path: Union[str, Path]) -> PoolConfig:
    """Load a `PoolConfig` from a YAML mapping whose keys match the field names."""
    text = Path(path).read_text(encoding="utf-8")
    obj = yaml.safe_load(text)
    if not isinstance(obj, Mapping):
        raise InvalidArgumentError(f"{path}: pool config YAML must be a mapping")
    return pool_config_from_mapping(obj)


def _env_str(name: str, default: Optional[str] = None) -> Optional[str]:
    raw = os.environ.get(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def pool_config_from_env(prefix: str = ENV_PREFIX) -> PoolConfig:
    """
    Build a `PoolConfig` from `<prefix><FIELD_NAME_UPPER>` variables.

    `name` and `symbol` fall back to the dataclass defaults when unset.
    """
    values: dict[str, str] = {}
    missing: list[str] = []
    for f in fields(PoolConfig):
        v = _env_str(prefix + f.name.upper())
        if v is not None:
            values[f.name] = v
        elif f.name not in ("name", "symbol"):
            missing.append(prefix + f.name.upper())
    if missing:
        raise InvalidArgumentError(f"missing pool config environment variables: {', '.join(missing)}")
    return PoolConfig(**values)
