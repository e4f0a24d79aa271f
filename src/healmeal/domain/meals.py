"""Domain models for meals and restaurants."""

from dataclasses import dataclass, field
from enum import StrEnum

from healmeal.domain.nutrition import MacroProfile


class MealType(StrEnum):
    """Meal-type category of a meal or a tracker entry."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


class MealSource(StrEnum):
    """Where a meal definition came from."""

    CATALOG = "catalog"
    EXTERNAL = "external"
    PERSISTED = "persisted"


class HealthCondition(StrEnum):
    """Health conditions a profile can carry and a meal can support."""

    DIABETES = "diabetes"
    HYPERTENSION = "hypertension"
    CELIAC_DISEASE = "celiac_disease"
    CROHNS_DISEASE = "crohns_disease"
    ULCERATIVE_COLITIS = "ulcerative_colitis"
    IBS = "ibs"
    CANCER = "cancer"
    HYPOTHYROIDISM = "hypothyroidism"
    HYPERTHYROIDISM = "hyperthyroidism"
    ARTHRITIS = "arthritis"
    LUPUS = "lupus"
    MULTIPLE_SCLEROSIS = "multiple_sclerosis"
    PARKINSONS = "parkinsons"
    ALZHEIMERS = "alzheimers"
    HEART_DISEASE = "heart_disease"
    KIDNEY_DISEASE = "kidney_disease"
    LIVER_DISEASE = "liver_disease"
    HIGH_CHOLESTEROL = "high_cholesterol"
    NONE = "none"


@dataclass(frozen=True)
class Restaurant:
    """Restaurant a meal is delivered from."""

    id: str
    name: str
    address: str
    distance_km: float
    rating: float
    delivery_time_minutes: int


@dataclass(frozen=True)
class Meal:
    """A meal offered in the catalog."""

    id: str
    name: str
    description: str
    calories: float
    protein_g: float
    carbs_g: float
    fats_g: float
    meal_type: MealType
    price: float
    suitable_for: tuple[str, ...] = ()
    allergens: tuple[str, ...] = ()
    ingredients: tuple[str, ...] = ()
    preparation: str = ""
    tags: tuple[str, ...] = ()
    restaurant: Restaurant | None = None
    image: str | None = None
    source: MealSource = field(default=MealSource.CATALOG)

    def __post_init__(self) -> None:
        for name in ("calories", "protein_g", "carbs_g", "fats_g", "price"):
            if getattr(self, name) < 0:
                raise ValueError(f"Meal {self.id} has negative {name}")

    @property
    def macros(self) -> MacroProfile:
        """Return the meal's macronutrients."""
        return MacroProfile(
            calories=self.calories,
            protein_g=self.protein_g,
            fat_g=self.fats_g,
            carbs_g=self.carbs_g,
        )
