"""Recipe recommendations from the Spoonacular API."""

import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from pydantic import ValidationError

from healmeal.adapters.recipe_client import RecipeClient
from healmeal.adapters.recipe_models import Recipe, RecipeSearchResponse
from healmeal.domain.catalog import PARTNER_RESTAURANTS
from healmeal.domain.meals import (
    HealthCondition,
    Meal,
    MealSource,
    MealType,
    Restaurant,
)
from healmeal.services.meal_filter import price_from_calories

_logger = logging.getLogger(__name__)

_HTML_TAG = re.compile(r"<[^>]*>")

CONDITION_DIETS: dict[str, tuple[tuple[str, ...], tuple[str, ...]]] = {
    HealthCondition.DIABETES: (("diabetic", "low-carb"), ()),
    HealthCondition.HYPERTENSION: (("dash", "low-sodium"), ()),
    HealthCondition.CELIAC_DISEASE: (("gluten-free",), ("gluten",)),
    HealthCondition.CROHNS_DISEASE: (("fodmap", "low-fiber"), ("dairy",)),
    HealthCondition.ULCERATIVE_COLITIS: (("fodmap", "low-fiber"), ()),
    HealthCondition.IBS: (("fodmap",), ()),
    HealthCondition.CANCER: (("anti-inflammatory",), ()),
    HealthCondition.HYPOTHYROIDISM: (("iodine-rich",), ("soy",)),
    HealthCondition.HYPERTHYROIDISM: (("low-iodine",), ()),
    HealthCondition.ARTHRITIS: (("anti-inflammatory",), ()),
    HealthCondition.LUPUS: (("anti-inflammatory",), ()),
    HealthCondition.MULTIPLE_SCLEROSIS: (("anti-inflammatory",), ()),
    HealthCondition.PARKINSONS: (("high-protein",), ()),
    HealthCondition.ALZHEIMERS: (("mind", "mediterranean"), ()),
    HealthCondition.HEART_DISEASE: (("dash", "mediterranean", "low-fat"), ()),
    HealthCondition.KIDNEY_DISEASE: (
        ("low-protein", "low-sodium", "low-potassium"),
        (),
    ),
    HealthCondition.LIVER_DISEASE: (("low-protein", "low-sodium"), ()),
    HealthCondition.HIGH_CHOLESTEROL: (("low-fat",), ()),
    HealthCondition.NONE: ((), ()),
}

ALLERGY_INTOLERANCES: dict[str, str] = {
    "Dairy": "dairy",
    "Eggs": "egg",
    "Peanuts": "peanut",
    "Tree nuts": "tree nut",
    "Soy": "soy",
    "Wheat": "wheat",
    "Fish": "seafood",
    "Shellfish": "shellfish",
    "Gluten": "gluten",
}

_BREAKFAST_TYPES = {"breakfast", "brunch", "morning meal"}
_LUNCH_TYPES = {"lunch", "main course", "main dish", "salad"}
_DINNER_TYPES = {"dinner"}
_SNACK_TYPES = {"snack", "appetizer", "side dish", "dessert"}


@dataclass
class RecipeService:
    """Fetches recipes and maps them into catalog meals."""

    client: RecipeClient
    restaurants: Sequence[Restaurant] = field(default=PARTNER_RESTAURANTS)

    async def fetch_recommendations(
        self,
        conditions: Iterable[str],
        allergies: Iterable[str],
        meal_type: MealType | None = None,
        number: int = 6,
    ) -> list[Meal]:
        """Return recipes matching the profile, or [] when the API fails."""
        diets, intolerances = build_diet_tags(conditions, allergies)
        params = build_query_params(diets, intolerances, meal_type, number)
        try:
            payload = await self.client.search_recipes(params)
            response = RecipeSearchResponse.model_validate(payload)
        except Exception:
            _logger.exception("Recipe search failed")
            return []
        meals = map_recipes(response.results, self.restaurants)
        _logger.info(
            "Recipe search: diets=%s intolerances=%s results=%s",
            ",".join(diets),
            ",".join(intolerances),
            len(meals),
        )
        return meals


def build_diet_tags(
    conditions: Iterable[str], allergies: Iterable[str]
) -> tuple[list[str], list[str]]:
    """Translate conditions and allergies into de-duplicated API tags."""
    diets: list[str] = []
    intolerances: list[str] = []
    for allergy in allergies:
        intolerance = ALLERGY_INTOLERANCES.get(allergy)
        if intolerance and intolerance not in intolerances:
            intolerances.append(intolerance)
    for condition in conditions:
        condition_diets, condition_intolerances = CONDITION_DIETS.get(
            condition, ((), ())
        )
        diets.extend(diet for diet in condition_diets if diet not in diets)
        intolerances.extend(
            tag for tag in condition_intolerances if tag not in intolerances
        )
    return diets, intolerances


def build_query_params(
    diets: Sequence[str],
    intolerances: Sequence[str],
    meal_type: MealType | None = None,
    number: int = 6,
) -> dict[str, str]:
    """Build query parameters for the complex search endpoint."""
    params = {
        "number": str(number),
        "addRecipeInformation": "true",
        "addRecipeNutrition": "true",
        "fillIngredients": "true",
        "instructionsRequired": "true",
        "sort": "healthiness",
        "sortDirection": "desc",
    }
    if diets:
        params["diet"] = ",".join(diets)
    if intolerances:
        params["intolerances"] = ",".join(intolerances)
    if meal_type:
        params["type"] = str(meal_type)
    return params


def meal_type_from_dish_types(dish_types: Sequence[str]) -> MealType:
    """Pick a meal type from recipe dish types, defaulting to dinner."""
    lowered = {dish_type.lower() for dish_type in dish_types}
    if lowered & _BREAKFAST_TYPES:
        return MealType.BREAKFAST
    if lowered & _LUNCH_TYPES:
        return MealType.LUNCH
    if lowered & _DINNER_TYPES:
        return MealType.DINNER
    if lowered & _SNACK_TYPES:
        return MealType.SNACK
    return MealType.DINNER


def map_recipes(
    results: Sequence[dict[str, object]], restaurants: Sequence[Restaurant]
) -> list[Meal]:
    """Map raw recipe results into meals, skipping malformed recipes."""
    meals: list[Meal] = []
    for raw in results:
        try:
            recipe = Recipe.model_validate(raw)
            restaurant = (
                restaurants[len(meals) % len(restaurants)] if restaurants else None
            )
            meals.append(recipe_to_meal(recipe, restaurant))
        except (ValidationError, ValueError) as exc:
            _logger.warning("Skipping malformed recipe %s: %s", raw.get("id"), exc)
    return meals


def recipe_to_meal(recipe: Recipe, restaurant: Restaurant | None) -> Meal:
    """Translate a validated recipe into an external meal."""
    if recipe.nutrition is None:
        raise ValueError("recipe has no nutrition data")
    macros = {
        "calories": recipe.nutrition.amount("Calories"),
        "protein": recipe.nutrition.amount("Protein"),
        "carbs": recipe.nutrition.amount("Carbohydrates"),
        "fats": recipe.nutrition.amount("Fat"),
    }
    missing = [name for name, value in macros.items() if value is None]
    if missing:
        raise ValueError(f"recipe nutrition lacks {', '.join(missing)}")

    allergens: list[str] = []
    if recipe.dairy_free is False:
        allergens.append("Dairy")
    if recipe.gluten_free is False:
        allergens.append("Gluten")

    calories = round(float(macros["calories"]))
    return Meal(
        id=str(recipe.id),
        name=recipe.title,
        description=_strip_html(recipe.summary) or "A healthy and delicious meal.",
        calories=calories,
        protein_g=round(float(macros["protein"])),
        carbs_g=round(float(macros["carbs"])),
        fats_g=round(float(macros["fats"])),
        suitable_for=tuple(_suitable_conditions(recipe)),
        allergens=tuple(allergens),
        ingredients=tuple(item.original for item in recipe.extended_ingredients),
        preparation=_strip_html(recipe.instructions)
        or "Please visit the recipe source for detailed instructions.",
        meal_type=meal_type_from_dish_types(recipe.dish_types),
        tags=(*recipe.diets, *recipe.dish_types),
        price=price_from_calories(calories),
        restaurant=restaurant,
        image=recipe.image
        or f"https://spoonacular.com/recipeImages/{recipe.id}-556x370.jpg",
        source=MealSource.EXTERNAL,
    )


def _suitable_conditions(recipe: Recipe) -> list[str]:
    conditions: list[str] = []
    for condition, (diets, _) in CONDITION_DIETS.items():
        if any(
            diet in recipe.diets
            or diet in recipe.dish_types
            or (recipe.very_healthy and diet == "anti-inflammatory")
            for diet in diets
        ):
            conditions.append(str(condition))
    return conditions or [str(HealthCondition.NONE)]


def _strip_html(text: str | None) -> str:
    if not text:
        return ""
    return _HTML_TAG.sub("", text).strip()
