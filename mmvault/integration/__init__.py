"""
In-memory collaborators and snapshot encoding for the liquidity vault.
"""

from .access import RoleRegistry
from .custody import InMemoryCustody
from .matching import InMemoryMatchingFacility, RestingOrder
from .snapshot import POOL_SNAPSHOT_VERSION, PoolSnapshot, snapshot_from_pool

__all__ = [
    "RoleRegistry",
    "InMemoryCustody",
    "InMemoryMatchingFacility",
    "RestingOrder",
    "POOL_SNAPSHOT_VERSION",
    "PoolSnapshot",
    "snapshot_from_pool",
]
