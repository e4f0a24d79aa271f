"""Domain models for the shopping cart."""

from dataclasses import dataclass

from healmeal.domain.meals import MealSource


@dataclass(frozen=True)
class CartItem:
    """A cart line; the unit price is captured when the meal is added."""

    meal_id: str
    quantity: int
    price: float
    restaurant_id: str | None = None
    meal_source: MealSource = MealSource.CATALOG

    @property
    def line_total(self) -> float:
        """Return quantity times unit price."""
        return self.quantity * self.price


@dataclass(frozen=True)
class Cart:
    """Ordered cart lines with a derived total."""

    items: tuple[CartItem, ...] = ()

    @property
    def total_price(self) -> float:
        """Return the sum of all line totals, rounded to cents."""
        return round(sum(item.line_total for item in self.items), 2)

    @property
    def total_quantity(self) -> int:
        """Return the number of units across all lines."""
        return sum(item.quantity for item in self.items)

    def find(self, meal_id: str) -> CartItem | None:
        """Return the line for a meal id, if present."""
        for item in self.items:
            if item.meal_id == meal_id:
                return item
        return None
