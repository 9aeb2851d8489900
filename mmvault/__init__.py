"""
Two-asset liquidity vault with market-maker order routing.
"""

from .config import PoolConfig, load_pool_config, pool_config_from_env, pool_config_from_mapping
from .core.pool import LiquidityPool

__version__ = "0.1.0"

__all__ = [
    "PoolConfig",
    "load_pool_config",
    "pool_config_from_env",
    "pool_config_from_mapping",
    "LiquidityPool",
]
