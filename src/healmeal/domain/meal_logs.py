"""Domain models for the nutrition tracker."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from healmeal.domain.meals import MealType


@dataclass(frozen=True)
class MealLogEntry:
    """A consumed meal in a daily log."""

    meal_id: str
    meal_type: MealType
    time_consumed: datetime
    notes: str | None = None
    entry_id: UUID | None = None

    @property
    def persisted(self) -> bool:
        """Return True when the entry has a backend row."""
        return self.entry_id is not None


@dataclass(frozen=True)
class MealLog:
    """All entries a user logged for one date."""

    id: str
    user_id: UUID
    date: date
    meals: tuple[MealLogEntry, ...]
    persisted: bool = True
