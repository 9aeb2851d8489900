"""
Order intent data models.

Intents are market-maker requests (create, update, cancel) that the pool
forwards to the external matching facility. They are built per call and never
persisted by the pool.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..errors import InvalidArgumentError
from .balances import Address


class OrderSide(Enum):
    BID = "BID"
    ASK = "ASK"


class OrderStatus(Enum):
    """Per-order outcome reported by the matching facility."""
    OPEN = "OPEN"
    PARTIALLY_FILLED = "PARTIALLY_FILLED"
    FILLED = "FILLED"
    REJECTED = "REJECTED"


@dataclass(frozen=True)
class CreateOrderIntent:
    """
    New resting order.

    Attributes:
        market: Market identifier on the matching facility
        side: BID or ASK
        price: Limit price in quote units per base unit (positive int)
        size: Order size in base units (positive int)
        beneficiary: Account that owns fills; the pool overwrites it with itself
        client_order_id: Optional caller-chosen correlation id
        post_only: Reject instead of crossing the book
    """
    market: str
    side: OrderSide
    price: int
    size: int
    beneficiary: Address = ""
    client_order_id: Optional[str] = None
    post_only: bool = False

    def __post_init__(self):
        if not self.market:
            raise InvalidArgumentError("Missing required field: market")
        if not isinstance(self.side, OrderSide):
            raise InvalidArgumentError(f"Invalid side: {self.side!r}")
        if self.price <= 0:
            raise InvalidArgumentError(f"price must be positive: {self.price}")
        if self.size <= 0:
            raise InvalidArgumentError(f"size must be positive: {self.size}")


@dataclass(frozen=True)
class UpdateOrderIntent:
    """Reprice and/or resize an existing order."""
    order_id: int
    market: str
    price: int
    size: int
    beneficiary: Address = ""

    def __post_init__(self):
        if self.order_id < 0:
            raise InvalidArgumentError(f"order_id must be non-negative: {self.order_id}")
        if not self.market:
            raise InvalidArgumentError("Missing required field: market")
        if self.price <= 0:
            raise InvalidArgumentError(f"price must be positive: {self.price}")
        if self.size <= 0:
            raise InvalidArgumentError(f"size must be positive: {self.size}")


@dataclass(frozen=True)
class CancelOrderIntent:
    """Cancel an existing order. Carries no beneficiary."""
    order_id: int
    market: str

    def __post_init__(self):
        if self.order_id < 0:
            raise InvalidArgumentError(f"order_id must be non-negative: {self.order_id}")
        if not self.market:
            raise InvalidArgumentError("Missing required field: market")


@dataclass(frozen=True)
class OrderResult:
    order_id: int
    status: OrderStatus
    filled_size: int = 0
    reason: Optional[str] = None
