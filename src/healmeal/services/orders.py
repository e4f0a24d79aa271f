"""Order placement and order history."""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from typing import Protocol
from uuid import UUID

from healmeal.domain.cart import CartItem
from healmeal.domain.meals import MealSource
from healmeal.domain.models import UserRecord
from healmeal.domain.orders import (
    TERMINAL_STATUSES,
    DeliveryStep,
    Order,
    OrderReceipt,
    OrderRecord,
    OrderStatus,
    RestaurantInfo,
    next_status,
)
from healmeal.services.notifications import NotificationService

DEFAULT_RESTAURANT_INFO = RestaurantInfo(
    name="Healthy Eats Restaurant",
    address="123 Nutrition Ave, Wellness City",
)

# Minutes after the order date at which each step is expected.
_TIMELINE: tuple[tuple[OrderStatus, str, str, int], ...] = (
    (
        OrderStatus.CONFIRMED,
        "Order Confirmed",
        "Your order has been received by the restaurant",
        0,
    ),
    (
        OrderStatus.PREPARING,
        "Preparing Your Food",
        "The chef is preparing your meal",
        5,
    ),
    (
        OrderStatus.READY,
        "Order Ready",
        "Your food is packaged and ready for delivery",
        15,
    ),
    (OrderStatus.OUT_FOR_DELIVERY, "Out for Delivery", "Your order is on its way", 17),
    (OrderStatus.DELIVERED, "Delivered", "Your order has been delivered", 30),
)

_logger = logging.getLogger(__name__)


class OrderRepository(Protocol):
    """Persistence interface for orders."""

    def create_order(  # noqa: PLR0913
        self,
        user_id: UUID,
        order_date: datetime,
        total_price: float,
        status: OrderStatus,
        delivery_address: str,
        payment_method: str,
    ) -> UUID:
        """Create an order row and return its id."""

    def create_order_items(self, order_id: UUID, items: Sequence[CartItem]) -> None:
        """Create order item rows."""

    def list_orders(self, user_id: UUID) -> list[OrderRecord]:
        """Return a user's orders, most recent first."""

    def update_status(self, order_id: UUID, status: OrderStatus) -> None:
        """Persist a status change."""

    def delete_order(self, order_id: UUID) -> None:
        """Delete an order row and its items."""


class OrderStateError(Exception):
    """Raised when an order cannot take the requested status."""


class OrderUpdateError(Exception):
    """Raised when a status change could not be persisted."""


@dataclass
class OrderService:
    """Creates orders from cart snapshots and keeps the order history."""

    repository: OrderRepository
    notifications: NotificationService
    delivery_fee: float = 5.99
    delivery_eta_minutes: int = 30
    restaurant_info: RestaurantInfo = DEFAULT_RESTAURANT_INFO
    order_placed_hooks: list[Callable[[Order], None]] = field(default_factory=list)
    _orders: list[Order] = field(default_factory=list, init=False)
    _user: UserRecord | None = field(default=None, init=False)

    @property
    def orders(self) -> list[Order]:
        """Return the order history, most recent first."""
        return list(self._orders)

    def on_auth_change(self, user: UserRecord | None) -> None:
        """Load or discard order history when the user changes."""
        self._user = user
        self._orders = []
        if user is not None:
            self.fetch_orders()

    def fetch_orders(self) -> list[Order]:
        """Reload the signed-in user's order history."""
        if self._user is None:
            return []
        try:
            records = self.repository.list_orders(self._user.id)
        except Exception:
            _logger.exception("Failed to fetch orders for %s", self._user.id)
            self.notifications.error("Error", "Could not load your orders")
            return self.orders
        self._orders = [self._from_record(record) for record in records]
        return self.orders

    def place_order(  # noqa: PLR0913
        self,
        user_id: UUID,
        items: Sequence[CartItem],
        subtotal: float,
        delivery_address: str,
        payment_method: str,
    ) -> Order:
        """Persist an order built from a cart snapshot."""
        order_date = datetime.now(tz=UTC)
        snapshot = tuple(items)
        total_price = round(subtotal + self.delivery_fee, 2)
        order_id = self.repository.create_order(
            user_id=user_id,
            order_date=order_date,
            total_price=total_price,
            status=OrderStatus.CONFIRMED,
            delivery_address=delivery_address,
            payment_method=payment_method,
        )
        persisted_items = [
            item for item in snapshot if item.meal_source == MealSource.PERSISTED
        ]
        if persisted_items:
            try:
                self.repository.create_order_items(order_id, persisted_items)
            except Exception:
                _logger.exception("Failed to create items for order %s", order_id)
                self._discard_order_row(order_id)
                raise
        order = Order(
            id=order_id,
            user_id=user_id,
            items=snapshot,
            total_price=total_price,
            order_date=order_date,
            status=OrderStatus.CONFIRMED,
            delivery_address=delivery_address,
            payment_method=payment_method,
            estimated_delivery_time=self._eta(order_date),
            restaurant_info=self.restaurant_info,
        )
        self._orders.insert(0, order)
        _logger.info("Order %s placed: total=%s", order.id, order.total_price)
        for hook in self.order_placed_hooks:
            try:
                hook(order)
            except Exception:
                _logger.exception("Order placed hook failed for %s", order.id)
        return order

    def get_order(self, order_id: UUID) -> Order | None:
        """Return an order from the history."""
        for order in self._orders:
            if order.id == order_id:
                return order
        return None

    def advance(self, order_id: UUID) -> Order | None:
        """Move an order one step along the delivery sequence."""
        order = self.get_order(order_id)
        if order is None:
            return None
        status = next_status(order.status)
        if status is None:
            return order
        return self.update_status(order_id, status)

    def update_status(self, order_id: UUID, status: OrderStatus) -> Order | None:
        """Set an order's status; only the next delivery step is accepted."""
        order = self.get_order(order_id)
        if order is None:
            return None
        if status == order.status:
            return order
        if status != next_status(order.status):
            raise OrderStateError(
                f"Order {order_id} cannot move from {order.status} to {status}"
            )
        return self._replace(replace(order, status=status))

    def cancel_order(self, order_id: UUID) -> Order | None:
        """Cancel an order that has not reached a terminal status."""
        order = self.get_order(order_id)
        if order is None:
            return None
        if order.status in TERMINAL_STATUSES:
            raise OrderStateError(f"Order {order_id} is already {order.status}")
        try:
            self.repository.update_status(order_id, OrderStatus.CANCELLED)
        except Exception as exc:
            _logger.exception("Failed to cancel order %s", order_id)
            self.notifications.error("Error", "Could not cancel the order")
            raise OrderUpdateError(f"Order {order_id} could not be cancelled") from exc
        _logger.info("Order %s cancelled", order_id)
        return self._replace(replace(order, status=OrderStatus.CANCELLED))

    def receipt(self, order: Order) -> OrderReceipt:
        """Return receipt figures for an order."""
        return OrderReceipt(
            order_id=order.id,
            item_count=order.total_quantity,
            subtotal=round(order.total_price - self.delivery_fee, 2),
            delivery_fee=self.delivery_fee,
            total=order.total_price,
        )

    def timeline(self, order: Order) -> list[DeliveryStep]:
        """Return delivery steps with expected times."""
        reached = _reached_statuses(order.status)
        return [
            DeliveryStep(
                status=status,
                title=title,
                description=description,
                expected_at=order.order_date + timedelta(minutes=offset),
                reached=status in reached,
            )
            for status, title, description, offset in _TIMELINE
        ]

    def _replace(self, order: Order) -> Order:
        self._orders = [
            order if existing.id == order.id else existing for existing in self._orders
        ]
        return order

    def _discard_order_row(self, order_id: UUID) -> None:
        try:
            self.repository.delete_order(order_id)
        except Exception:
            _logger.exception("Failed to delete incomplete order %s", order_id)

    def _eta(self, order_date: datetime) -> datetime:
        return order_date + timedelta(minutes=self.delivery_eta_minutes)

    def _from_record(self, record: OrderRecord) -> Order:
        return Order(
            id=record.id,
            user_id=record.user_id,
            items=record.items,
            total_price=record.total_price,
            order_date=record.order_date,
            status=record.status,
            delivery_address=record.delivery_address,
            payment_method=record.payment_method,
            estimated_delivery_time=self._eta(record.order_date),
            restaurant_info=self.restaurant_info,
        )


def _reached_statuses(status: OrderStatus) -> set[OrderStatus]:
    statuses = [step[0] for step in _TIMELINE]
    if status not in statuses:
        return set()
    return set(statuses[: statuses.index(status) + 1])
