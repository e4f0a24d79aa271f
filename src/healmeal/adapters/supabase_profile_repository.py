"""Supabase repository for health profiles."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from healmeal.domain.profiles import UserProfile
from healmeal.services.profiles import ProfileAttribute, ProfileRepository

# Table and value column per multi-valued attribute.
_ATTRIBUTE_TABLES: dict[ProfileAttribute, tuple[str, str]] = {
    ProfileAttribute.CONDITIONS: ("user_health_conditions", "condition_name"),
    ProfileAttribute.ALLERGIES: ("user_allergies", "allergy_name"),
    ProfileAttribute.DIETARY_PREFERENCES: (
        "user_dietary_preferences",
        "preference_name",
    ),
}


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profiles and their attribute tables."""

    client: Client

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the profile row without multi-valued attributes."""
        response = (
            self.client.table("profiles")
            .select("id, name, age, height, weight, gender")
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return UserProfile(
            id=UUID(str(row["id"])),
            name=str(row.get("name") or ""),
            age=int(row.get("age") or 0),
            height_cm=float(row.get("height") or 0.0),
            weight_kg=float(row.get("weight") or 0.0),
            gender=str(row.get("gender") or "other"),
        )

    def upsert_profile(self, profile: UserProfile) -> None:
        """Insert or update the profile row."""
        self.client.table("profiles").upsert(
            {
                "id": str(profile.id),
                "name": profile.name,
                "age": profile.age,
                "height": profile.height_cm,
                "weight": profile.weight_kg,
                "gender": profile.gender,
                "bmi": profile.bmi,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).execute()

    def list_attribute(self, user_id: UUID, attribute: ProfileAttribute) -> list[str]:
        """Return the values of a multi-valued attribute."""
        table, column = _ATTRIBUTE_TABLES[attribute]
        response = (
            self.client.table(table)
            .select(column)
            .eq("user_id", str(user_id))
            .execute()
        )
        return [str(row[column]) for row in response.data or []]

    def replace_attribute(
        self, user_id: UUID, attribute: ProfileAttribute, values: list[str]
    ) -> None:
        """Delete all values of an attribute, then insert the new ones."""
        table, column = _ATTRIBUTE_TABLES[attribute]
        self.client.table(table).delete().eq("user_id", str(user_id)).execute()
        if values:
            self.client.table(table).insert(
                [{"user_id": str(user_id), column: value} for value in values]
            ).execute()
