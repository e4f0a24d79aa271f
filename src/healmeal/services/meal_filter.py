"""Filtering meals against a health profile."""

from collections.abc import Iterable, Sequence
from dataclasses import replace

from healmeal.domain.meals import HealthCondition, Meal, Restaurant

DEFAULT_PRICE = 9.99


def filter_meals(
    conditions: Iterable[str], allergies: Iterable[str], meals: Sequence[Meal]
) -> list[Meal]:
    """Return meals suitable for the conditions and free of the allergies.

    An empty condition list, or one containing ``none``, skips the condition
    check. Allergen exclusion always applies.
    """
    wanted = set(conditions)
    avoided = set(allergies)
    check_conditions = bool(wanted) and HealthCondition.NONE not in wanted
    eligible: list[Meal] = []
    for meal in meals:
        if check_conditions and wanted.isdisjoint(meal.suitable_for):
            continue
        if not avoided.isdisjoint(meal.allergens):
            continue
        eligible.append(meal)
    return eligible


def price_from_calories(calories: float) -> float:
    """Derive a listing price from a meal's calories."""
    price = round(calories / 100 * 1.5, 2)
    return price if price > 0 else DEFAULT_PRICE


def apply_listing_defaults(
    meals: Sequence[Meal], restaurants: Sequence[Restaurant]
) -> list[Meal]:
    """Fill in missing prices and restaurants for a meal listing."""
    listed: list[Meal] = []
    for index, meal in enumerate(meals):
        price = meal.price or price_from_calories(meal.calories)
        restaurant = meal.restaurant
        if restaurant is None and restaurants:
            restaurant = restaurants[index % len(restaurants)]
        listed.append(replace(meal, price=price, restaurant=restaurant))
    return listed
