"""Simulated delivery lifecycle for placed orders."""

import asyncio
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import date
from uuid import UUID

from healmeal.domain.cart import CartItem
from healmeal.domain.meals import MealType
from healmeal.domain.models import UserRecord
from healmeal.domain.orders import DELIVERY_SEQUENCE, Order, OrderStatus, next_status
from healmeal.services.meal_logs import MealLogService
from healmeal.services.notifications import NotificationService
from healmeal.services.orders import OrderService

DEFAULT_DWELL_SECONDS: tuple[float, ...] = (5.0, 10.0, 2.0, 13.0)

MEAL_TYPE_CYCLE: tuple[MealType, ...] = (
    MealType.BREAKFAST,
    MealType.LUNCH,
    MealType.DINNER,
    MealType.SNACK,
)

_logger = logging.getLogger(__name__)


def distribute_meal_types(items: Sequence[CartItem]) -> list[tuple[str, MealType]]:
    """Assign one meal type per ordered unit, cycling from breakfast."""
    assignments: list[tuple[str, MealType]] = []
    for item in items:
        for _ in range(item.quantity):
            meal_type = MEAL_TYPE_CYCLE[len(assignments) % len(MEAL_TYPE_CYCLE)]
            assignments.append((item.meal_id, meal_type))
    return assignments


@dataclass
class DeliveryTracker:
    """Advances one order through the delivery sequence.

    Steps can be driven manually with ``advance`` or by ``start``, which
    schedules each step after the dwell time of the current status.
    """

    order_id: UUID
    order_service: OrderService
    on_delivered: Callable[[Order], None]
    dwell_seconds: Sequence[float] = DEFAULT_DWELL_SECONDS
    live: bool = True
    _task: "asyncio.Task[None] | None" = field(default=None, init=False)

    @property
    def status(self) -> OrderStatus | None:
        """Return the tracked order's status, if the order still exists."""
        order = self.order_service.get_order(self.order_id)
        return order.status if order else None

    @property
    def running(self) -> bool:
        """Return True while a scheduled advance is pending."""
        return self._task is not None and not self._task.done()

    def advance(self) -> OrderStatus | None:
        """Move to the next status; returns None once tracking has ended."""
        if not self.live:
            return None
        order = self.order_service.get_order(self.order_id)
        if order is None or order.status not in DELIVERY_SEQUENCE:
            self.live = False
            return None
        if order.status == OrderStatus.DELIVERED:
            self.live = False
            return None
        updated = self.order_service.advance(self.order_id)
        if updated is None:
            self.live = False
            return None
        _logger.info("Order %s is now %s", self.order_id, updated.status)
        if updated.status == OrderStatus.DELIVERED:
            self.live = False
            self.on_delivered(updated)
        return updated.status

    def start(self) -> None:
        """Schedule automatic advances on the running event loop."""
        if self.running:
            return
        self.live = True
        self._task = asyncio.get_running_loop().create_task(self._run())

    def stop(self) -> None:
        """Stop advancing and cancel any pending step."""
        self.live = False
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def _run(self) -> None:
        while self.live:
            delay = self._current_dwell()
            if delay is None:
                self.live = False
                return
            await asyncio.sleep(delay)
            self.advance()

    def _current_dwell(self) -> float | None:
        status = self.status
        if status is None or status not in DELIVERY_SEQUENCE:
            return None
        index = DELIVERY_SEQUENCE.index(status)
        if index >= len(self.dwell_seconds):
            return None
        return self.dwell_seconds[index]


@dataclass
class DeliveryService:
    """Owns delivery trackers and back-fills the tracker on delivery."""

    order_service: OrderService
    meal_log_service: MealLogService
    notifications: NotificationService
    dwell_seconds: Sequence[float] = DEFAULT_DWELL_SECONDS
    auto_start: bool = True
    today: Callable[[], date] = date.today
    _trackers: dict[UUID, DeliveryTracker] = field(default_factory=dict, init=False)

    def track(self, order: Order) -> DeliveryTracker:
        """Return the tracker for an order, creating it on first use."""
        tracker = self._trackers.get(order.id)
        if tracker is None:
            tracker = DeliveryTracker(
                order_id=order.id,
                order_service=self.order_service,
                on_delivered=self.log_delivered_meals,
                dwell_seconds=self.dwell_seconds,
            )
            self._trackers[order.id] = tracker
            if self.auto_start:
                _start_if_loop_running(tracker)
        return tracker

    def tracker(self, order_id: UUID) -> DeliveryTracker | None:
        """Return the tracker for an order id, if tracked."""
        return self._trackers.get(order_id)

    def set_live(self, order_id: UUID, live: bool) -> DeliveryTracker | None:
        """Pause or resume automatic updates for an order."""
        tracker = self._trackers.get(order_id)
        if tracker is None:
            return None
        status = tracker.status
        if not live or status is None or next_status(status) is None:
            tracker.stop()
        else:
            tracker.live = True
            _start_if_loop_running(tracker)
        return tracker

    def stop(self, order_id: UUID) -> None:
        """Stop and forget the tracker of an order."""
        tracker = self._trackers.pop(order_id, None)
        if tracker is not None:
            tracker.stop()

    def stop_all(self) -> None:
        """Stop every tracker."""
        for tracker in self._trackers.values():
            tracker.stop()
        self._trackers.clear()

    def on_auth_change(self, user: UserRecord | None) -> None:
        """Drop all trackers when the user signs out."""
        if user is None:
            self.stop_all()

    def log_delivered_meals(self, order: Order) -> int:
        """Add one tracker entry per delivered unit, dated today."""
        self.notifications.info(
            "Order delivered!", "Your order has been delivered. Enjoy your meal!"
        )
        logged = 0
        log_date = self.today()
        try:
            for meal_id, meal_type in distribute_meal_types(order.items):
                if self.meal_log_service.add_entry(meal_id, log_date, meal_type):
                    logged += 1
        except Exception:
            _logger.exception("Failed to log delivered meals for %s", order.id)
        if logged < order.total_quantity:
            _logger.error(
                "Logged %s of %s delivered meals for %s",
                logged,
                order.total_quantity,
                order.id,
            )
            self.notifications.error(
                "Tracker update incomplete",
                "Some delivered meals could not be added to your meal tracker",
            )
        else:
            self.notifications.info(
                "Meals added to tracker",
                "Your ordered meals have been added to your meal tracker",
            )
        return logged


def _start_if_loop_running(tracker: DeliveryTracker) -> None:
    try:
        tracker.start()
    except RuntimeError:
        _logger.debug("No running event loop; tracker %s is manual", tracker.order_id)
