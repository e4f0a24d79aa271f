"""Supabase repository for meal logs."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from supabase import Client

from healmeal.domain.meal_logs import MealLog, MealLogEntry
from healmeal.domain.meals import MealType
from healmeal.services.meal_logs import MealLogRepository


@dataclass
class SupabaseMealLogRepository(MealLogRepository):
    """Supabase implementation for meal logs."""

    client: Client

    def list_logs(self, user_id: UUID) -> list[MealLog]:
        """Return all logs of a user with their entries."""
        response = (
            self.client.table("meal_logs")
            .select(
                "id, log_date, user_id, "
                "meal_log_items(id, meal_id, meal_type, time_consumed, notes)"
            )
            .eq("user_id", str(user_id))
            .order("log_date", desc=True)
            .execute()
        )
        return [_parse_log(row) for row in response.data or []]

    def create_log(self, user_id: UUID, log_date: date) -> str:
        """Create a log row and return its id."""
        response = (
            self.client.table("meal_logs")
            .insert({"user_id": str(user_id), "log_date": log_date.isoformat()})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal log")
        return str(response.data[0]["id"])

    def create_entry(self, log_id: str, entry: MealLogEntry) -> UUID:
        """Create an entry row and return its id."""
        response = (
            self.client.table("meal_log_items")
            .insert(
                {
                    "log_id": log_id,
                    "meal_id": entry.meal_id,
                    "meal_type": str(entry.meal_type),
                    "time_consumed": entry.time_consumed.isoformat(),
                    "notes": entry.notes,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal log item")
        return UUID(str(response.data[0]["id"]))

    def delete_entry(self, entry_id: UUID) -> None:
        """Delete an entry row."""
        self.client.table("meal_log_items").delete().eq("id", str(entry_id)).execute()

    def delete_log(self, log_id: str) -> None:
        """Delete a log row."""
        self.client.table("meal_logs").delete().eq("id", log_id).execute()


def _parse_log(row: dict[str, object]) -> MealLog:
    items = row.get("meal_log_items") or []
    return MealLog(
        id=str(row["id"]),
        user_id=UUID(str(row["user_id"])),
        date=date.fromisoformat(str(row["log_date"])),
        meals=tuple(_parse_entry(item) for item in items),
    )


def _parse_entry(row: dict[str, object]) -> MealLogEntry:
    return MealLogEntry(
        meal_id=str(row["meal_id"]),
        meal_type=MealType(str(row["meal_type"])),
        time_consumed=datetime.fromisoformat(str(row["time_consumed"])),
        notes=row.get("notes") or None,
        entry_id=UUID(str(row["id"])),
    )
