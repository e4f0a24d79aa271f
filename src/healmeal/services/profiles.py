"""Health profile loading and saving."""

import logging
from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import Protocol
from uuid import UUID

from healmeal.domain.meals import HealthCondition
from healmeal.domain.models import UserRecord
from healmeal.domain.profiles import GENDERS, UserProfile
from healmeal.services.notifications import NotificationService

_KNOWN_CONDITIONS = {condition.value for condition in HealthCondition}

_logger = logging.getLogger(__name__)


class ProfileAttribute(StrEnum):
    """Multi-valued profile attributes stored in their own tables."""

    CONDITIONS = "conditions"
    ALLERGIES = "allergies"
    DIETARY_PREFERENCES = "dietary_preferences"


class ProfileRepository(Protocol):
    """Persistence interface for profiles."""

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the profile row without multi-valued attributes."""

    def upsert_profile(self, profile: UserProfile) -> None:
        """Insert or update the profile row."""

    def list_attribute(self, user_id: UUID, attribute: ProfileAttribute) -> list[str]:
        """Return the values of a multi-valued attribute."""

    def replace_attribute(
        self, user_id: UUID, attribute: ProfileAttribute, values: list[str]
    ) -> None:
        """Replace all values of a multi-valued attribute."""


class ProfileValidationError(ValueError):
    """Raised when a profile has invalid fields."""


@dataclass
class ProfileService:
    """Loads and saves the signed-in user's health profile."""

    repository: ProfileRepository
    notifications: NotificationService
    _profile: UserProfile | None = field(default=None, init=False)
    _user: UserRecord | None = field(default=None, init=False)

    @property
    def profile(self) -> UserProfile | None:
        """Return the loaded profile."""
        return self._profile

    def on_auth_change(self, user: UserRecord | None) -> None:
        """Load or discard the profile when the user changes."""
        self._user = user
        self._profile = self.load(user) if user is not None else None

    def load(self, user: UserRecord) -> UserProfile:
        """Fetch a profile, falling back to an empty one on failure."""
        default = UserProfile(id=user.id, name=user.name or "")
        try:
            profile = self.repository.get_profile(user.id) or default
        except Exception:
            _logger.exception("Failed to load profile for %s", user.id)
            self.notifications.error(
                "Error loading profile",
                "Could not load your profile information. Using default profile.",
            )
            return default
        if not profile.name and user.name:
            profile = replace(profile, name=user.name)
        return replace(
            profile,
            conditions=self._load_attribute(user.id, ProfileAttribute.CONDITIONS),
            allergies=self._load_attribute(user.id, ProfileAttribute.ALLERGIES),
            dietary_preferences=self._load_attribute(
                user.id, ProfileAttribute.DIETARY_PREFERENCES
            ),
        )

    def save(self, profile: UserProfile) -> UserProfile | None:
        """Validate and persist a profile for the signed-in user."""
        validate_profile(profile)
        if self._user is None:
            self.notifications.error(
                "Authentication required",
                "You need to be logged in to update your profile.",
            )
            return None
        profile = replace(profile, id=self._user.id)
        try:
            self.repository.upsert_profile(profile)
        except Exception:
            _logger.exception("Failed to save profile for %s", profile.id)
            self.notifications.error(
                "Update failed",
                "Could not update your profile information. Please try again.",
            )
            return None
        for attribute, values in (
            (ProfileAttribute.CONDITIONS, profile.conditions),
            (ProfileAttribute.ALLERGIES, profile.allergies),
            (ProfileAttribute.DIETARY_PREFERENCES, profile.dietary_preferences),
        ):
            self._save_attribute(profile.id, attribute, values)
        self._profile = profile
        self.notifications.info(
            "Profile updated", "Your profile has been updated successfully."
        )
        return profile

    def _load_attribute(
        self, user_id: UUID, attribute: ProfileAttribute
    ) -> tuple[str, ...]:
        try:
            return tuple(self.repository.list_attribute(user_id, attribute))
        except Exception:
            _logger.exception("Failed to load %s for %s", attribute, user_id)
            return ()

    def _save_attribute(
        self, user_id: UUID, attribute: ProfileAttribute, values: tuple[str, ...]
    ) -> None:
        try:
            self.repository.replace_attribute(user_id, attribute, list(values))
        except Exception:
            _logger.exception("Failed to update %s for %s", attribute, user_id)


def validate_profile(profile: UserProfile) -> None:
    """Raise ProfileValidationError for invalid fields."""
    errors: list[str] = []
    if profile.age < 0:
        errors.append("age must not be negative")
    if profile.height_cm < 0:
        errors.append("height must not be negative")
    if profile.weight_kg < 0:
        errors.append("weight must not be negative")
    if profile.gender not in GENDERS:
        errors.append(f"unknown gender {profile.gender!r}")
    unknown = [c for c in profile.conditions if c not in _KNOWN_CONDITIONS]
    if unknown:
        errors.append(f"unknown conditions: {', '.join(unknown)}")
    if errors:
        raise ProfileValidationError("; ".join(errors))
