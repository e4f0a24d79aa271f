"""Meal catalog combining bundled, persisted and recipe API meals."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol

from healmeal.domain.catalog import CATALOG_MEALS, DEMO_RESTAURANTS
from healmeal.domain.meals import Meal, MealType
from healmeal.domain.models import UserRecord
from healmeal.domain.profiles import UserProfile
from healmeal.services.meal_filter import apply_listing_defaults, filter_meals
from healmeal.services.notifications import NotificationService
from healmeal.services.recipes import RecipeService

UNAVAILABLE_MEAL_NAME = "Unavailable meal"

_logger = logging.getLogger(__name__)


class MealRepository(Protocol):
    """Read-only access to meals stored in the backend."""

    def list_meals(self) -> list[Meal]:
        """Return all persisted meals."""


@dataclass
class CatalogService:
    """Builds meal listings and resolves meal ids."""

    recipe_service: RecipeService
    meal_repository: MealRepository
    notifications: NotificationService
    static_meals: Sequence[Meal] = field(default=CATALOG_MEALS)
    recommendation_count: int = 6
    _available: dict[str, Meal] = field(default_factory=dict, init=False)
    _persisted: list[Meal] | None = field(default=None, init=False)

    def catalog(self) -> list[Meal]:
        """Return bundled and persisted meals."""
        return [*self.static_meals, *self.persisted_meals()]

    def persisted_meals(self) -> list[Meal]:
        """Return persisted meals, loading them on first use."""
        if self._persisted is None:
            try:
                self._persisted = self.meal_repository.list_meals()
            except Exception:
                _logger.exception("Failed to load persisted meals")
                return []
        return self._persisted

    async def recommend(
        self, profile: UserProfile, meal_type: MealType | None = None
    ) -> list[Meal]:
        """Return meal suggestions for a profile, optionally by meal type."""
        external = await self.recipe_service.fetch_recommendations(
            profile.conditions,
            profile.allergies,
            number=self.recommendation_count,
        )
        if external:
            listing = external
            self.notifications.info(
                "Meals loaded",
                f"Found {len(listing)} meal suggestions based on your health profile.",
            )
        else:
            catalog = self.catalog()
            eligible = filter_meals(profile.conditions, profile.allergies, catalog)
            if not eligible:
                _logger.info("No catalog meal matches profile %s", profile.id)
                eligible = catalog
            listing = apply_listing_defaults(eligible, DEMO_RESTAURANTS)
            self.notifications.info(
                "Using demo meals",
                "We're showing you pre-defined meals as we couldn't reach the "
                "recipe service.",
            )
        self.remember(listing)
        if meal_type is None:
            return listing
        return [meal for meal in listing if meal.meal_type == meal_type]

    def on_auth_change(self, user: UserRecord | None) -> None:
        """Forget meals listed for the previous user."""
        self._available = {}

    def remember(self, meals: Sequence[Meal]) -> None:
        """Make listed meals resolvable by id."""
        for meal in meals:
            self._available[meal.id] = meal

    def get_meal(self, meal_id: str) -> Meal | None:
        """Resolve a meal id across listed, bundled and persisted meals."""
        meal = self._available.get(meal_id)
        if meal is not None:
            return meal
        for candidate in self.catalog():
            if candidate.id == meal_id:
                return candidate
        return None

    def describe(self, meal_id: str) -> str:
        """Return a display name, with a placeholder for unknown ids."""
        meal = self.get_meal(meal_id)
        return meal.name if meal else UNAVAILABLE_MEAL_NAME
