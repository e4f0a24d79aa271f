"""Supabase repository for the meals reference table."""

import logging
from dataclasses import dataclass

from supabase import Client

from healmeal.domain.meals import Meal, MealSource, MealType
from healmeal.services.catalog import MealRepository

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseMealRepository(MealRepository):
    """Read-only access to meals stored in Supabase."""

    client: Client

    def list_meals(self) -> list[Meal]:
        """Return all persisted meals, skipping unreadable rows."""
        response = (
            self.client.table("meals")
            .select(
                "id, name, description, calories, protein, carbs, fats, meal_type, "
                "price, image, preparation"
            )
            .order("name", desc=False)
            .execute()
        )
        meals: list[Meal] = []
        for row in response.data or []:
            try:
                meals.append(_parse_meal(row))
            except (KeyError, TypeError, ValueError) as exc:
                _logger.warning("Skipping meal row %s: %s", row.get("id"), exc)
        return meals


def _parse_meal(row: dict[str, object]) -> Meal:
    return Meal(
        id=str(row["id"]),
        name=str(row["name"]),
        description=str(row.get("description") or ""),
        calories=float(row.get("calories") or 0.0),
        protein_g=float(row.get("protein") or 0.0),
        carbs_g=float(row.get("carbs") or 0.0),
        fats_g=float(row.get("fats") or 0.0),
        meal_type=MealType(str(row.get("meal_type") or MealType.LUNCH)),
        price=float(row.get("price") or 0.0),
        preparation=str(row.get("preparation") or ""),
        image=row.get("image") or None,
        source=MealSource.PERSISTED,
    )
