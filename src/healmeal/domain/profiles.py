"""Domain models for health profiles."""

from dataclasses import dataclass
from uuid import UUID

GENDERS = frozenset({"male", "female", "other"})


@dataclass(frozen=True)
class UserProfile:
    """Health profile used to personalize meal suggestions."""

    id: UUID
    name: str = ""
    age: int = 0
    height_cm: float = 0.0
    weight_kg: float = 0.0
    gender: str = "other"
    conditions: tuple[str, ...] = ()
    allergies: tuple[str, ...] = ()
    dietary_preferences: tuple[str, ...] = ()

    @property
    def bmi(self) -> float | None:
        """Return weight / height(m)^2 rounded to one decimal."""
        if self.height_cm <= 0 or self.weight_kg <= 0:
            return None
        height_m = self.height_cm / 100
        return round(self.weight_kg / (height_m * height_m), 1)

    @property
    def is_complete(self) -> bool:
        """Return True when the profile can drive recommendations."""
        return bool(
            self.name.strip()
            and self.age > 0
            and self.height_cm > 0
            and self.weight_kg > 0
        )
