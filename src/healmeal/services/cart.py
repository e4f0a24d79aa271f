"""Cart bookkeeping and checkout."""

import json
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from pydantic import BaseModel, Field, ValidationError

from healmeal.domain.cart import Cart, CartItem
from healmeal.domain.meals import Meal, MealSource
from healmeal.services.notifications import NotificationService

if TYPE_CHECKING:
    from healmeal.domain.orders import Order
    from healmeal.services.orders import OrderService
    from healmeal.services.users import UserService

CART_STORAGE_KEY = "cart"

_logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Durable local key-value storage."""

    def get(self, key: str) -> str | None:
        """Return the stored value for a key, if any."""

    def set(self, key: str, value: str) -> None:
        """Store a value under a key."""


class StoredCartItem(BaseModel):
    """Cart line as written to local storage."""

    meal_id: str = Field(alias="mealId")
    quantity: int
    price: float = Field(ge=0)
    restaurant_id: str | None = Field(default=None, alias="restaurantId")
    meal_source: MealSource = Field(default=MealSource.CATALOG, alias="mealSource")


class StoredCart(BaseModel):
    """Cart snapshot as written to local storage."""

    items: list[StoredCartItem] = Field(default_factory=list)
    total_price: float = Field(default=0.0, alias="totalPrice")


@dataclass
class CartService:
    """Maintains the session cart and turns it into orders."""

    store: KeyValueStore
    notifications: NotificationService
    order_service: "OrderService"
    user_service: "UserService"
    _cart: Cart = field(default_factory=Cart, init=False)

    def __post_init__(self) -> None:
        self._cart = _restore_cart(self.store)

    @property
    def cart(self) -> Cart:
        """Return the current cart."""
        return self._cart

    def add_item(self, meal: Meal, quantity: int = 1) -> bool:
        """Add a meal, merging with an existing line for the same meal."""
        if not meal.price:
            _logger.error("Meal %s has no price", meal.id)
            self.notifications.error(
                "Error", "Cannot add meal to cart without price"
            )
            return False
        if quantity < 1:
            self.notifications.error("Error", "Quantity must be at least 1")
            return False
        items = list(self._cart.items)
        for index, item in enumerate(items):
            if item.meal_id == meal.id:
                items[index] = CartItem(
                    meal_id=item.meal_id,
                    quantity=item.quantity + quantity,
                    price=item.price,
                    restaurant_id=item.restaurant_id,
                    meal_source=item.meal_source,
                )
                break
        else:
            items.append(
                CartItem(
                    meal_id=meal.id,
                    quantity=quantity,
                    price=meal.price,
                    restaurant_id=meal.restaurant.id if meal.restaurant else None,
                    meal_source=meal.source,
                )
            )
        self._commit(items)
        self.notifications.info("Added to cart", f"{meal.name} added to your cart")
        return True

    def remove_item(self, meal_id: str) -> None:
        """Remove the line for a meal."""
        self._commit([item for item in self._cart.items if item.meal_id != meal_id])

    def set_quantity(self, meal_id: str, quantity: int) -> None:
        """Overwrite a line's quantity; zero or less removes the line."""
        if quantity <= 0:
            self.remove_item(meal_id)
            return
        self._commit(
            [
                CartItem(
                    meal_id=item.meal_id,
                    quantity=quantity,
                    price=item.price,
                    restaurant_id=item.restaurant_id,
                    meal_source=item.meal_source,
                )
                if item.meal_id == meal_id
                else item
                for item in self._cart.items
            ]
        )

    def clear(self) -> None:
        """Empty the cart."""
        self._commit([])

    def checkout(self, address: str, payment_method: str) -> "Order | None":
        """Place an order for the cart; the cart is cleared only on success."""
        if not self._cart.items:
            self.notifications.error("Cart is empty", "Add meals before checkout")
            return None
        if not address.strip():
            self.notifications.error(
                "Missing address", "Please enter a delivery address"
            )
            return None
        user = self.user_service.current_user
        if user is None:
            self.notifications.error("Login required", "Please login to checkout")
            return None
        try:
            order = self.order_service.place_order(
                user_id=user.id,
                items=self._cart.items,
                subtotal=self._cart.total_price,
                delivery_address=address.strip(),
                payment_method=payment_method,
            )
        except Exception:
            _logger.exception("Checkout failed for user %s", user.id)
            self.notifications.error(
                "Checkout Failed", "There was a problem processing your order"
            )
            return None
        self.clear()
        self.notifications.info(
            "Order Placed Successfully", "Your order has been confirmed"
        )
        return order

    def _commit(self, items: list[CartItem]) -> None:
        self._cart = Cart(items=tuple(items))
        try:
            self.store.set(CART_STORAGE_KEY, _serialize_cart(self._cart))
        except OSError:
            _logger.exception("Failed to persist cart")


def _serialize_cart(cart: Cart) -> str:
    stored = StoredCart(
        items=[
            StoredCartItem(
                mealId=item.meal_id,
                quantity=item.quantity,
                price=item.price,
                restaurantId=item.restaurant_id,
                mealSource=item.meal_source,
            )
            for item in cart.items
        ],
        totalPrice=cart.total_price,
    )
    return stored.model_dump_json(by_alias=True)


def _restore_cart(store: KeyValueStore) -> Cart:
    raw = store.get(CART_STORAGE_KEY)
    if not raw:
        return Cart()
    try:
        stored = StoredCart.model_validate(json.loads(raw))
    except (ValueError, ValidationError):
        _logger.warning("Discarding unreadable stored cart")
        return Cart()
    return Cart(
        items=tuple(
            CartItem(
                meal_id=item.meal_id,
                quantity=item.quantity,
                price=item.price,
                restaurant_id=item.restaurant_id,
                meal_source=item.meal_source,
            )
            for item in stored.items
            if item.quantity >= 1
        )
    )
