"""Domain models for HealMeal users."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class UserRecord:
    """Represents an authenticated user of the managed backend."""

    id: UUID
    email: str | None = None
    name: str | None = None
