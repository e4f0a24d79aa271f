"""Pydantic models for Spoonacular recipe payloads."""

from typing import Any

from pydantic import BaseModel, Field


class RecipeNutrient(BaseModel):
    """Nutrient amount per serving."""

    name: str
    amount: float
    unit: str | None = None


class RecipeNutrition(BaseModel):
    """Nutrition block of a recipe."""

    nutrients: list[RecipeNutrient] = Field(default_factory=list)

    def amount(self, name: str) -> float | None:
        """Return the amount for a nutrient name, if listed."""
        for nutrient in self.nutrients:
            if nutrient.name == name:
                return nutrient.amount
        return None


class RecipeIngredient(BaseModel):
    """Ingredient line of a recipe."""

    original: str


class Recipe(BaseModel):
    """Recipe returned by the complex search endpoint."""

    id: int
    title: str
    image: str | None = None
    summary: str | None = None
    instructions: str | None = None
    diets: list[str] = Field(default_factory=list)
    dish_types: list[str] = Field(default_factory=list, alias="dishTypes")
    dairy_free: bool | None = Field(default=None, alias="dairyFree")
    gluten_free: bool | None = Field(default=None, alias="glutenFree")
    very_healthy: bool | None = Field(default=None, alias="veryHealthy")
    extended_ingredients: list[RecipeIngredient] = Field(
        default_factory=list, alias="extendedIngredients"
    )
    nutrition: RecipeNutrition | None = None


class RecipeSearchResponse(BaseModel):
    """Top-level complex search payload."""

    results: list[dict[str, Any]]
    total_results: int | None = Field(default=None, alias="totalResults")
