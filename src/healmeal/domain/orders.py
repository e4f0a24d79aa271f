"""Domain models for orders and delivery."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID

from healmeal.domain.cart import CartItem


class OrderStatus(StrEnum):
    """Lifecycle status of an order."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    READY = "ready"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


DELIVERY_SEQUENCE: tuple[OrderStatus, ...] = (
    OrderStatus.CONFIRMED,
    OrderStatus.PREPARING,
    OrderStatus.READY,
    OrderStatus.OUT_FOR_DELIVERY,
    OrderStatus.DELIVERED,
)

TERMINAL_STATUSES = frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED})


@dataclass(frozen=True)
class RestaurantInfo:
    """Restaurant display info attached to an order."""

    name: str
    address: str


@dataclass(frozen=True)
class Order:
    """A placed order; items and total never change after creation."""

    id: UUID
    user_id: UUID
    items: tuple[CartItem, ...]
    total_price: float
    order_date: datetime
    status: OrderStatus
    delivery_address: str | None
    payment_method: str | None
    estimated_delivery_time: datetime
    restaurant_info: RestaurantInfo | None = None

    @property
    def total_quantity(self) -> int:
        """Return the number of units ordered."""
        return sum(item.quantity for item in self.items)


@dataclass(frozen=True)
class OrderReceipt:
    """Receipt figures for an order."""

    order_id: UUID
    item_count: int
    subtotal: float
    delivery_fee: float
    total: float


@dataclass(frozen=True)
class DeliveryStep:
    """A step on the delivery timeline with its expected time."""

    status: OrderStatus
    title: str
    description: str
    expected_at: datetime
    reached: bool


@dataclass(frozen=True)
class OrderRecord:
    """Order row with its related item rows."""

    id: UUID
    user_id: UUID
    items: tuple[CartItem, ...]
    total_price: float
    order_date: datetime
    status: OrderStatus
    delivery_address: str | None
    payment_method: str | None


def next_status(status: OrderStatus) -> OrderStatus | None:
    """Return the status that follows in the delivery sequence."""
    if status not in DELIVERY_SEQUENCE:
        return None
    index = DELIVERY_SEQUENCE.index(status)
    if index + 1 >= len(DELIVERY_SEQUENCE):
        return None
    return DELIVERY_SEQUENCE[index + 1]
